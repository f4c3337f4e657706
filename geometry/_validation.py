# -*- coding: utf-8 -*-
# Fluxmesh/geometry/_validation.py

"""
Project: Fluxmesh
Date: 10/19/2026

Purpose:
--------
Fail-fast validation of a problem description before anything is handed to the
triangulation back-end. Every violation raises `GeometryError` with a context dict
naming the offending record.

Main Tasks:
   1. Check node coordinates (finite, not coincident).
   2. Check segment/arc references, lengths and sweeps.
   3. Check size hints and boundary names.
   4. Reject nodes lying inside a segment or arc.
   5. Reject segments and arc chords that cross or touch away from shared nodes.
"""

from typing import List, Tuple
import math
import numpy as np

from mesh.errors import GeometryError
from .arcs import arc_points, shortest_distance_from_arc, shortest_distance_from_segment
from .kernels import segments_intersect


def _assert_nodes(problem, tol: float) -> float:
    """
    Validate node coordinates and return the bounding-box diagonal.
    """
    if not problem.nodes:
        raise GeometryError("Problem has no nodes.")

    pts = np.array([[n.x, n.y] for n in problem.nodes], dtype=float)
    if not np.isfinite(pts).all():
        bad = np.argwhere(~np.isfinite(pts))[:, 0]
        raise GeometryError("Non-finite node coordinates.", {"nodes": sorted(set(bad.tolist()))})

    diag = float(np.hypot(*(pts.max(axis=0) - pts.min(axis=0))))
    eps = tol * (diag if diag > 0.0 else 1.0)

    # sort by x so only a narrow window needs pairwise checks
    order = np.argsort(pts[:, 0], kind="stable")
    for a in range(len(order)):
        i = order[a]
        for b in range(a + 1, len(order)):
            j = order[b]
            if pts[j, 0] - pts[i, 0] > eps:
                break
            if math.hypot(pts[j, 0] - pts[i, 0], pts[j, 1] - pts[i, 1]) <= eps:
                raise GeometryError("Coincident nodes.", {"nodes": (int(min(i, j)), int(max(i, j)))})
    return diag


def _check_refs(kind: str, idx: int, n0: int, n1: int, n_nodes: int) -> None:
    for n in (n0, n1):
        if not isinstance(n, (int, np.integer)) or n < 0 or n >= n_nodes:
            raise GeometryError("Dangling node reference.", {kind: idx, "node": n})
    if n0 == n1:
        raise GeometryError("Zero-length {}.".format(kind), {kind: idx, "node": n0})


def _check_boundary(problem, kind: str, idx: int, name) -> None:
    if name is not None and name not in problem.boundaries:
        raise GeometryError("Unknown boundary property.", {kind: idx, "boundary": name})


def _chains(problem) -> List[Tuple[str, int, int, int, List[complex]]]:
    """
    (kind, index, n0, n1, polyline) for every segment and arc; arcs are split into
    chords of at most `max_side_deg` degrees.
    """
    out = []
    for i, s in enumerate(problem.segments):
        out.append(("segment", i, s.n0, s.n1, [problem.node_xy(s.n0), problem.node_xy(s.n1)]))
    for i, a in enumerate(problem.arcs):
        n = max(1, int(math.ceil(a.arc_length / a.max_side_deg)))
        pts = arc_points(problem.node_xy(a.n0), problem.node_xy(a.n1), a.arc_length, n)
        out.append(("arc", i, a.n0, a.n1, pts))
    return out


def _at_node(chain, k: int, node: int) -> bool:
    """True if chord k of `chain` ends at geometry node `node`."""
    _kind, _i, n0, n1, pts = chain
    return (k == 0 and n0 == node) or (k == len(pts) - 2 and n1 == node)


def _crossing_context(c1, c2) -> dict:
    if c1[0] == c2[0]:
        return {c1[0] + "s": (c1[1], c2[1])}
    seg, arc = (c1, c2) if c1[0] == "segment" else (c2, c1)
    return {"arc": arc[1], "segment": seg[1]}


def _check_crossings(problem) -> None:
    chains = _chains(problem)
    for a in range(len(chains)):
        ca = chains[a]
        for b in range(a + 1, len(chains)):
            cb = chains[b]
            shared = [n for n in (ca[2], ca[3]) if n in (cb[2], cb[3])]
            pa, pb = ca[4], cb[4]
            for i in range(len(pa) - 1):
                for j in range(len(pb) - 1):
                    if any(_at_node(ca, i, n) and _at_node(cb, j, n) for n in shared):
                        continue
                    if segments_intersect(pa[i], pa[i + 1], pb[j], pb[j + 1], eps=0.0):
                        raise GeometryError(
                            "{} and {} intersect away from a shared node.".format(
                                ca[0].capitalize(), cb[0]),
                            _crossing_context(ca, cb),
                        )


def _check_nodes_on_entities(problem, eps: float) -> None:
    """Reject geometry nodes lying on the interior of a segment or arc they do not end."""
    for k in range(len(problem.nodes)):
        p = problem.node_xy(k)
        for i, s in enumerate(problem.segments):
            if k in (s.n0, s.n1):
                continue
            if shortest_distance_from_segment(p, problem.node_xy(s.n0), problem.node_xy(s.n1)) <= eps:
                raise GeometryError("Node lies on a segment.", {"node": k, "segment": i})
        for i, a in enumerate(problem.arcs):
            if k in (a.n0, a.n1):
                continue
            d = shortest_distance_from_arc(p, problem.node_xy(a.n0), problem.node_xy(a.n1), a.arc_length)
            if d <= eps:
                raise GeometryError("Node lies on an arc.", {"node": k, "arc": i})


def validate_problem(problem, tol: float = 1e-10) -> None:
    """
    Validate a `Problem` for meshing.

    Parameters
    ----------
    problem : geometry.model.Problem
        Problem description.
    tol : float, optional
        Coincidence tolerance relative to the bounding-box diagonal.

    Raises
    ------
    GeometryError
        On the first violation found.
    """
    diag = _assert_nodes(problem, tol)
    n_nodes = len(problem.nodes)

    for i, seg in enumerate(problem.segments):
        _check_refs("segment", i, seg.n0, seg.n1, n_nodes)
        if problem.segment_length(seg) == 0.0:
            raise GeometryError("Zero-length segment.", {"segment": i})
        if seg.max_side_length is not None and not (seg.max_side_length > 0.0):
            raise GeometryError("max_side_length must be > 0.", {"segment": i, "value": seg.max_side_length})
        _check_boundary(problem, "segment", i, seg.boundary)

    for i, arc in enumerate(problem.arcs):
        _check_refs("arc", i, arc.n0, arc.n1, n_nodes)
        if not (0.0 < arc.arc_length < 360.0):
            raise GeometryError("Arc sweep must lie in (0, 360) degrees.", {"arc": i, "sweep": arc.arc_length})
        if not (arc.max_side_deg > 0.0):
            raise GeometryError("max_side_deg must be > 0.", {"arc": i, "value": arc.max_side_deg})
        _check_boundary(problem, "arc", i, arc.boundary)

    for i, lbl in enumerate(problem.labels):
        if not (math.isfinite(lbl.x) and math.isfinite(lbl.y)):
            raise GeometryError("Non-finite block label coordinates.", {"label": i})
        if lbl.mesh_size is not None and not (lbl.mesh_size > 0.0):
            raise GeometryError("Block label mesh_size must be > 0.", {"label": i, "value": lbl.mesh_size})

    if problem.mesh_size is not None and not (problem.mesh_size > 0.0):
        raise GeometryError("Problem mesh_size must be > 0.", {"value": problem.mesh_size})

    _check_nodes_on_entities(problem, tol * (diag if diag > 0.0 else 1.0))
    _check_crossings(problem)
