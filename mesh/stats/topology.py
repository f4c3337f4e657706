# -*- coding: utf-8 -*-
# Fluxmesh/mesh/stats/topology.py

"""
Project: Fluxmesh
Date: 10/19/2026

Purpose:
--------
Adjacency and boundary detection for triangular meshes, plus basic topological
statistics: global inventory of nodes/elements and per-node valence distribution.

Main Tasks:
-----------
    1) `build_adjacency`:
        - node -> ordered list of incident elements.
    2) `find_boundary_edges`:
        - resolve every element edge to its neighbor element or BOUNDARY, searching
          only the elements incident to the edge's origin node.
    3) `boundary_edges` / `boundary_nodes`.
    4) `inventory` / `valence` summaries.

Notes:
------
- Edge j of an element runs from p[(j+1)%3] to p[(j+2)%3].
- The neighbor search is bounded by node degree, so the pass is linear in the
  number of element-node incidences.
"""

from typing import Dict, List, Tuple
import numpy as np

from mesh.data import BOUNDARY, Mesh

PLUS1MOD3 = (1, 2, 0)
MINUS1MOD3 = (2, 0, 1)


def build_adjacency(m: Mesh) -> List[List[int]]:
    """
    Build node -> incident-element lists (ascending element index) and store them on
    the mesh.

    Parameters
    ----------
    m : Mesh
        Mesh arena.

    Returns
    -------
    list of list of int
        `adj[i]` is the ordered list of elements touching node i.
    """
    adj: List[List[int]] = [[] for _ in range(m.n_nodes)]
    for ei, e in enumerate(m.elements):
        for v in e.p:
            adj[v].append(ei)
    m.adjacency = adj
    return adj


def find_boundary_edges(m: Mesh) -> int:
    """
    Set each element's neighbor slots and return the number of boundary edges.

    Every slot is first reset to unfinished (None). For edge j, the incident list of
    the origin node is scanned for another element that also contains the
    destination node; if found, the slot takes that element's index, otherwise it is
    flagged BOUNDARY. Running it twice gives the same result.

    Raises
    ------
    MeshStateError
        If `build_adjacency` has not run for this mesh.
    """
    adj = m.require_adjacency()
    elems = m.elements

    for e in elems:
        e.n = [None, None, None]

    n_boundary = 0
    for i, e in enumerate(elems):
        for j in range(3):
            if e.n[j] is not None:
                continue
            orgi = e.p[PLUS1MOD3[j]]
            desti = e.p[MINUS1MOD3[j]]
            match = None
            for ei in adj[orgi]:
                if ei == i:
                    continue
                if desti in elems[ei].p:
                    match = ei
                    break
            if match is None:
                e.n[j] = BOUNDARY
                n_boundary += 1
            else:
                e.n[j] = match
    return n_boundary


def boundary_edges(m: Mesh) -> List[Tuple[int, int, Tuple[int, int]]]:
    """
    List boundary edges as (element, slot, (origin, destination)), sorted by element.
    """
    m.require_adjacency()
    out = []
    for i, e in enumerate(m.elements):
        for j in range(3):
            if e.n[j] == BOUNDARY:
                out.append((i, j, (e.p[PLUS1MOD3[j]], e.p[MINUS1MOD3[j]])))
    return out


def boundary_nodes(m: Mesh) -> List[int]:
    """Sorted ids of nodes lying on at least one boundary edge."""
    nodes = set()
    for _i, _j, (u, v) in boundary_edges(m):
        nodes.add(u)
        nodes.add(v)
    return sorted(nodes)


def inventory(m: Mesh) -> dict:
    """
    Build a global inventory of mesh size.

    Returns
    -------
    dict
        {
          "n_nodes": int,
          "n_elements": int,
          "n_regions": int,
          "bbox": {"xmin","xmax","ymin","ymax"},
          "area_bbox": float,
          "n_periodic_pairs": int
        }
    """
    xmin, xmax, ymin, ymax = m.bbox
    regions = set(e.region for e in m.elements)
    return {
        "n_nodes": m.n_nodes,
        "n_elements": m.n_elements,
        "n_regions": len(regions),
        "bbox": {"xmin": xmin, "xmax": xmax, "ymin": ymin, "ymax": ymax},
        "area_bbox": (xmax - xmin) * (ymax - ymin),
        "n_periodic_pairs": len(m.periodic_pairs),
    }


def valence(m: Mesh) -> dict:
    """
    Compute node valence distribution (elements incident per node).

    Returns
    -------
    dict
        {"min", "max", "mean", "std", "hist": {valence: frequency}}.
        Returns zeros and empty hist if no elements exist.
    """
    adj = m.adjacency if m.adjacency is not None else build_adjacency(m)
    counts = np.array([len(a) for a in adj], dtype=int)

    nonzero = counts[counts > 0]
    if nonzero.size == 0:
        return {"min": 0, "max": 0, "mean": 0.0, "std": 0.0, "hist": {}}

    unique, freq = np.unique(nonzero, return_counts=True)
    hist: Dict[int, int] = {int(u): int(f) for u, f in zip(unique, freq)}

    return {
        "min": int(nonzero.min()),
        "max": int(nonzero.max()),
        "mean": float(nonzero.mean()),
        "std": float(nonzero.std()),
        "hist": hist,
    }
