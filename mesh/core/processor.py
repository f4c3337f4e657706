# -*- coding: utf-8 -*-
# Fluxmesh/mesh/core/processor.py

"""
Project: Fluxmesh
Date: 10/19/2026

Purpose:
--------
Turn a validated problem description into the planar straight-line graph (PSLG) that
the triangulation back-end consumes. Handles default mesh sizing, discretization of
segments and arcs, region/hole seeds and the synthesized boundary nodes that give
periodic pairs a mirrored discretization.

Main Tasks:
-----------
    1. Bounding box of nodes and block labels; default mesh size from its diagonal.
    2. Split segments into chords no longer than the local size (never shorter than
       diagonal / line_fraction) and arcs into chords of at most `max_side_deg`.
    3. Force both members of a periodic pair to the same chord count and record the
       vertex-to-vertex correspondence.
    4. Emit region seeds (attribute, max area) and hole seeds.

Notes:
------
- Geometry node i is PSLG vertex i; subdivision vertices follow in entity order
  (segments, then arcs), so the emitted graph depends only on the input lists.
- Segment i carries boundary marker i+1; arc j carries len(segments)+j+1.
- No back-end specific logic here; every generator reuses the same PSLG.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import logging
import math
import numpy as np

from geometry.arcs import arc_points, segment_points
from geometry.model import Problem
from .periodic import group_periodic_pairs, has_periodic_bc, pair_vertices

logger = logging.getLogger(__name__)


@dataclass
class PSLG:
    vertices: np.ndarray
    vertex_markers: np.ndarray
    segments: np.ndarray
    segment_markers: np.ndarray
    regions: np.ndarray
    holes: np.ndarray
    marker_names: Dict[int, Tuple[str, int, Optional[str]]] = field(default_factory=dict)
    entity_vertices: Dict[int, List[int]] = field(default_factory=dict)
    periodic_vertex_pairs: List[Tuple[int, int, bool, str]] = field(default_factory=list)
    mesh_size: float = 0.0
    min_length: float = 0.0
    periodic: bool = False

    @property
    def n_input_vertices(self) -> int:
        return int(self.vertices.shape[0])

    def to_triangle_dict(self) -> Dict[str, np.ndarray]:
        """Input dictionary for `triangle.triangulate` (empty arrays omitted)."""
        out: Dict[str, np.ndarray] = {
            "vertices": self.vertices,
            "vertex_markers": self.vertex_markers.reshape(-1, 1),
        }
        if len(self.segments):
            out["segments"] = self.segments
            out["segment_markers"] = self.segment_markers.reshape(-1, 1)
        if len(self.regions):
            out["regions"] = self.regions
        if len(self.holes):
            out["holes"] = self.holes
        return out


def bounding_box(problem: Problem) -> Tuple[float, float, float, float]:
    """
    (xmin, xmax, ymin, ymax) over all nodes and block labels.
    """
    xs = [n.x for n in problem.nodes] + [b.x for b in problem.labels]
    ys = [n.y for n in problem.nodes] + [b.y for b in problem.labels]
    if not xs:
        raise ValueError("Problem has no nodes or block labels; bounding box undefined.")
    return (min(xs), max(xs), min(ys), max(ys))


def default_mesh_size(problem: Problem, bounding_box_fraction: float = 100.0) -> float:
    """
    Explicit `problem.mesh_size` if set, else bounding-box diagonal / fraction.
    """
    if problem.mesh_size is not None:
        return float(problem.mesh_size)
    xmin, xmax, ymin, ymax = bounding_box(problem)
    diag = math.hypot(xmax - xmin, ymax - ymin)
    return diag / float(bounding_box_fraction)


def _count(length: float, step: float) -> int:
    # tolerate round-off when length is an exact multiple of step
    return max(1, int(math.ceil(length / step - 1e-9)))


def process_problem(problem: Problem, settings: Dict[str, Any]) -> PSLG:
    """
    Build the PSLG for `problem`.

    Parameters
    ----------
    problem : Problem
        Validated problem description.
    settings : dict
        Resolved mesher settings (see `mesh.settings.resolve_settings`).

    Returns
    -------
    PSLG

    Raises
    ------
    PeriodicPairingError
        If periodic boundaries cannot be paired.
    """
    xmin, xmax, ymin, ymax = bounding_box(problem)
    diag = math.hypot(xmax - xmin, ymax - ymin)
    mesh_size = default_mesh_size(problem, settings["bounding_box_fraction"])
    min_length = diag / settings["line_fraction"]

    n_seg = len(problem.segments)
    periodic = has_periodic_bc(problem)
    pairs = group_periodic_pairs(problem, settings["periodic_length_rtol"]) if periodic else []

    # ---- chord counts per entity (marker -> k) ----
    counts: Dict[int, int] = {}
    for i, seg in enumerate(problem.segments):
        h = max(seg.max_side_length or mesh_size, min_length)
        counts[i + 1] = _count(problem.segment_length(seg), h)
    for j, arc in enumerate(problem.arcs):
        _c, R = problem.get_circle(arc)
        k = _count(arc.arc_length, arc.max_side_deg)
        k_max = max(1, int(math.floor(R * math.radians(arc.arc_length) / min_length)))
        counts[n_seg + j + 1] = min(k, k_max)

    def marker_of(kind: str, idx: int) -> int:
        return idx + 1 if kind == "segment" else n_seg + idx + 1

    for pp in pairs:
        m1, m2 = marker_of(pp.kind, pp.first), marker_of(pp.kind, pp.second)
        k = max(counts[m1], counts[m2])
        counts[m1] = counts[m2] = k

    # ---- vertices: geometry nodes first, then subdivision points ----
    verts: List[complex] = [n.as_complex() for n in problem.nodes]
    vmarks: List[int] = [0] * len(verts)
    segs: List[Tuple[int, int]] = []
    smarks: List[int] = []
    marker_names: Dict[int, Tuple[str, int, Optional[str]]] = {}
    entity_vertices: Dict[int, List[int]] = {}

    entities = [("segment", i, e) for i, e in enumerate(problem.segments)]
    entities += [("arc", j, e) for j, e in enumerate(problem.arcs)]
    for kind, idx, ent in entities:
        mk = marker_of(kind, idx)
        k = counts[mk]
        a0, a1 = problem.node_xy(ent.n0), problem.node_xy(ent.n1)
        if kind == "segment":
            pts = segment_points(a0, a1, k)
        else:
            pts = arc_points(a0, a1, ent.arc_length, k)

        ids = [ent.n0]
        for p in pts[1:-1]:
            verts.append(p)
            vmarks.append(mk)
            ids.append(len(verts) - 1)
        ids.append(ent.n1)

        for u, v in zip(ids[:-1], ids[1:]):
            segs.append((u, v))
            smarks.append(mk)
        marker_names[mk] = (kind, idx, ent.boundary)
        entity_vertices[mk] = ids

    # ---- periodic correspondence ----
    periodic_vertex_pairs: List[Tuple[int, int, bool, str]] = []
    for pp in pairs:
        m1, m2 = marker_of(pp.kind, pp.first), marker_of(pp.kind, pp.second)
        for a, b in pair_vertices(entity_vertices[m1], entity_vertices[m2], pp.reversed):
            if a != b:
                periodic_vertex_pairs.append((a, b, pp.antiperiodic, pp.boundary))

    # ---- regions / holes ----
    regions: List[List[float]] = []
    holes: List[List[float]] = []
    for i, lbl in enumerate(problem.labels):
        if lbl.is_hole:
            holes.append([lbl.x, lbl.y])
            continue
        h = lbl.mesh_size or mesh_size
        regions.append([lbl.x, lbl.y, float(i + 1), math.pi * h * h / 4.0])

    pslg = PSLG(
        vertices=np.array([[p.real, p.imag] for p in verts], dtype=float).reshape(-1, 2),
        vertex_markers=np.array(vmarks, dtype=np.int32),
        segments=np.array(segs, dtype=np.int32).reshape(-1, 2),
        segment_markers=np.array(smarks, dtype=np.int32),
        regions=np.array(regions, dtype=float).reshape(-1, 4),
        holes=np.array(holes, dtype=float).reshape(-1, 2),
        marker_names=marker_names,
        entity_vertices=entity_vertices,
        periodic_vertex_pairs=periodic_vertex_pairs,
        mesh_size=mesh_size,
        min_length=min_length,
        periodic=periodic,
    )
    logger.debug(
        "[process_problem] %d vertices, %d segments, %d regions, %d holes, %d periodic node pairs",
        pslg.n_input_vertices, len(segs), len(regions), len(holes), len(periodic_vertex_pairs),
    )
    return pslg
