# -*- coding: utf-8 -*-
# Fluxmesh/mesh/core/writer.py

"""
Project: Fluxmesh
Date: 10/19/2026

Purpose:
--------
Text exchange with the Triangle file formats (.poly, .node, .ele) and the line files
used to draw a mesh ("mesh lines" over labeled regions, "grey mesh lines" over
unlabeled ones).

Main Tasks:
-----------
    1. Serialize a PSLG to `.poly` (vertices, segments, holes, regional attributes).
    2. Write and parse `.node` / `.ele` records.
    3. Extract unique element edges as line features and write them out.
    4. Dump the full diagnostic set for a generated mesh.

Notes:
------
- Writers are deterministic: same input, byte-identical text.
- Written files are zero-based; readers detect the index base from the first record.
- `#` starts a comment anywhere on a line.
"""

import os
from io import StringIO
from typing import Dict, List, Optional, Tuple

import numpy as np

from mesh.data import Mesh
from .processor import PSLG


def _ensure_parent(path: str) -> None:
    dirname = os.path.dirname(path)
    if dirname and not os.path.exists(dirname):
        os.makedirs(dirname)


def _write_text(text: str, path: str) -> str:
    _ensure_parent(path)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    return path


def _records(path: str) -> List[List[str]]:
    """Non-empty, comment-stripped token lists."""
    out = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            toks = line.split("#", 1)[0].split()
            if toks:
                out.append(toks)
    return out


# ---------------------------
# .poly
# ---------------------------
def write_poly_file(pslg: PSLG, path: str) -> str:
    """
    Write `pslg` as a Triangle `.poly` file.

    Returns
    -------
    str
        The path that was written.
    """
    buf = StringIO()
    W = buf.write

    V = pslg.vertices
    W("# vertices\n")
    W("{} 2 0 1\n".format(len(V)))
    for i, (x, y) in enumerate(V):
        W("{} {:.17g} {:.17g} {}\n".format(i, x, y, int(pslg.vertex_markers[i])))

    W("# segments\n")
    W("{} 1\n".format(len(pslg.segments)))
    for i, (a, b) in enumerate(pslg.segments):
        W("{} {} {} {}\n".format(i, int(a), int(b), int(pslg.segment_markers[i])))

    W("# holes\n")
    W("{}\n".format(len(pslg.holes)))
    for i, (x, y) in enumerate(pslg.holes):
        W("{} {:.17g} {:.17g}\n".format(i, x, y))

    W("# regional attributes\n")
    W("{}\n".format(len(pslg.regions)))
    for i, (x, y, attr, area) in enumerate(pslg.regions):
        W("{} {:.17g} {:.17g} {:.17g} {:.17g}\n".format(i, x, y, attr, area))

    return _write_text(buf.getvalue(), path)


def read_poly_file(path: str) -> Dict[str, np.ndarray]:
    """
    Parse a Triangle `.poly` file.

    Returns
    -------
    dict
        "vertices" (V,2), "vertex_markers" (V,), "segments" (S,2) zero-based,
        "segment_markers" (S,), "holes" (H,2), "regions" (R,4).
        A vertex count of zero (vertices kept in a `.node` file) gives empty arrays.

    Raises
    ------
    ValueError
        On a truncated file.
    """
    recs = _records(path)
    pos = 0

    def take(n: int) -> List[List[str]]:
        nonlocal pos
        if pos + n > len(recs):
            raise ValueError("Truncated .poly file: {}".format(path))
        block = recs[pos:pos + n]
        pos += n
        return block

    head = take(1)[0]
    nv, nattr, nmark = int(head[0]), int(head[2]), int(head[3])
    vrecs = take(nv)
    base = int(vrecs[0][0]) if vrecs else None
    vertices = np.array([[float(r[1]), float(r[2])] for r in vrecs], dtype=float).reshape(-1, 2)
    vmarks = np.array([int(r[3 + nattr]) if nmark else 0 for r in vrecs], dtype=int)

    head = take(1)[0]
    ns, smark = int(head[0]), int(head[1]) if len(head) > 1 else 0
    srecs = take(ns)
    if base is None:
        # segment endpoints share the base of the segment numbering
        base = int(srecs[0][0]) if srecs else 0
    segments = np.array([[int(r[1]) - base, int(r[2]) - base] for r in srecs], dtype=int).reshape(-1, 2)
    smarks = np.array([int(r[3]) if smark else 0 for r in srecs], dtype=int)

    holes = np.zeros((0, 2))
    regions = np.zeros((0, 4))
    if pos < len(recs):
        nh = int(take(1)[0][0])
        holes = np.array([[float(r[1]), float(r[2])] for r in take(nh)], dtype=float).reshape(-1, 2)
    if pos < len(recs):
        nr = int(take(1)[0][0])
        rows = []
        for r in take(nr):
            area = float(r[4]) if len(r) > 4 else -1.0
            rows.append([float(r[1]), float(r[2]), float(r[3]), area])
        regions = np.array(rows, dtype=float).reshape(-1, 4)

    return {
        "vertices": vertices,
        "vertex_markers": vmarks,
        "segments": segments,
        "segment_markers": smarks,
        "holes": holes,
        "regions": regions,
    }


# ---------------------------
# .node / .ele
# ---------------------------
def write_node_file(nodes, path: str, markers=None) -> str:
    nodes = np.asarray(nodes, dtype=float).reshape(-1, 2)
    buf = StringIO()
    W = buf.write
    W("{} 2 0 {}\n".format(len(nodes), 0 if markers is None else 1))
    for i, (x, y) in enumerate(nodes):
        if markers is None:
            W("{} {:.17g} {:.17g}\n".format(i, x, y))
        else:
            W("{} {:.17g} {:.17g} {}\n".format(i, x, y, int(markers[i])))
    return _write_text(buf.getvalue(), path)


def write_ele_file(elements, path: str, regions=None) -> str:
    """
    Write a Triangle `.ele` file from a (T,3) array or a list of MeshElement.
    """
    if len(elements) and hasattr(elements[0], "p"):
        if regions is None:
            regions = [e.region for e in elements]
        tris = np.array([e.p for e in elements], dtype=int)
    else:
        tris = np.asarray(elements, dtype=int).reshape(-1, 3)

    buf = StringIO()
    W = buf.write
    W("{} 3 {}\n".format(len(tris), 0 if regions is None else 1))
    for i, (a, b, c) in enumerate(tris):
        if regions is None:
            W("{} {} {} {}\n".format(i, a, b, c))
        else:
            W("{} {} {} {} {}\n".format(i, a, b, c, int(regions[i])))
    return _write_text(buf.getvalue(), path)


def read_node_file(path: str) -> Tuple[np.ndarray, Optional[np.ndarray]]:
    """
    Parse a Triangle `.node` file.

    Returns
    -------
    (nodes, markers)
        (N,2) coordinates and (N,) boundary markers, or None if the file has none.
    """
    recs = _records(path)
    if not recs:
        raise ValueError("Empty .node file: {}".format(path))
    n, nattr, nmark = int(recs[0][0]), int(recs[0][2]), int(recs[0][3])
    body = recs[1:1 + n]
    if len(body) != n:
        raise ValueError("Truncated .node file: {} ({} of {} records)".format(path, len(body), n))
    nodes = np.array([[float(r[1]), float(r[2])] for r in body], dtype=float).reshape(-1, 2)
    markers = None
    if nmark:
        markers = np.array([int(r[3 + nattr]) for r in body], dtype=int)
    return nodes, markers


def read_ele_file(path: str) -> Tuple[np.ndarray, Optional[np.ndarray]]:
    """
    Parse a Triangle `.ele` file (3-node elements only).

    Returns
    -------
    (triangles, attributes)
        (T,3) zero-based connectivity and (T,) first attribute, or None if absent.
    """
    recs = _records(path)
    if not recs:
        raise ValueError("Empty .ele file: {}".format(path))
    n, npe, nattr = int(recs[0][0]), int(recs[0][1]), int(recs[0][2])
    if npe != 3:
        raise ValueError("Only 3-node elements are supported (got {}).".format(npe))
    body = recs[1:1 + n]
    if len(body) != n:
        raise ValueError("Truncated .ele file: {} ({} of {} records)".format(path, len(body), n))
    base = int(body[0][0]) if body else 0
    tris = np.array([[int(r[1]) - base, int(r[2]) - base, int(r[3]) - base] for r in body],
                    dtype=int).reshape(-1, 3)
    attrs = None
    if nattr:
        attrs = np.array([float(r[4]) for r in body], dtype=float)
    return tris, attrs


# ---------------------------
# mesh lines
# ---------------------------
def _edge_lines(m: Mesh, keep) -> np.ndarray:
    edges = set()
    for e in m.elements:
        if not keep(e):
            continue
        a, b, c = e.p
        for u, v in ((a, b), (b, c), (c, a)):
            edges.add((u, v) if u < v else (v, u))
    if not edges:
        return np.zeros((0, 2, 2))
    idx = np.array(sorted(edges), dtype=int)
    return np.stack([m.nodes[idx[:, 0]], m.nodes[idx[:, 1]]], axis=1)


def mesh_lines(m: Mesh) -> np.ndarray:
    """(L,2,2) unique edges of elements inside labeled regions (region > 0)."""
    return _edge_lines(m, lambda e: e.region != 0)


def grey_mesh_lines(m: Mesh) -> np.ndarray:
    """(L,2,2) unique edges of elements with no region attribute (region == 0)."""
    return _edge_lines(m, lambda e: e.region == 0)


def write_mesh_lines(lines, path: str) -> str:
    lines = np.asarray(lines, dtype=float).reshape(-1, 2, 2)
    buf = StringIO()
    W = buf.write
    for (x0, y0), (x1, y1) in lines:
        W("{:.17g} {:.17g} {:.17g} {:.17g}\n".format(x0, y0, x1, y1))
    return _write_text(buf.getvalue(), path)


def write_diagnostics(m: Mesh, pslg: PSLG, output_dir: str, basename: str = "mesh") -> Dict[str, str]:
    """
    Write `.poly`, `.node`, `.ele`, `.meshlines` and `.greymeshlines` for a mesh.

    Returns
    -------
    dict
        kind -> written path.
    """
    os.makedirs(output_dir, exist_ok=True)
    base = os.path.join(output_dir, basename)
    return {
        "poly": write_poly_file(pslg, base + ".poly"),
        "node": write_node_file(m.nodes, base + ".node", m.node_markers),
        "ele": write_ele_file(m.elements, base + ".ele"),
        "meshlines": write_mesh_lines(mesh_lines(m), base + ".meshlines"),
        "greymeshlines": write_mesh_lines(grey_mesh_lines(m), base + ".greymeshlines"),
    }
