# -*- coding: utf-8 -*-
# Fluxmesh/post/query.py

"""
Project: Fluxmesh
Date: 10/19/2026

Purpose:
--------
Spatial queries on a generated mesh and its input geometry, as needed by field
post-processing: point location, nearest node/segment/arc, distances to boundary
entities and per-element measurements (centroid, signed area, Henrotte vector).

Main Tasks:
-----------
    1. `in_triangle`: locate the element containing a point, starting from the last hit
       and walking outward through the element list in both directions, pruning with
       each element's bounding radius before the exact test.
    2. `closest_node` / `closest_segment` / `closest_arc_segment`: linear scans over
       the input geometry; first minimum wins.
    3. `ctr`, `elm_area`, `henrotte_vector`: per-element measurements.
    4. Neighbor access once adjacency has been built.

Notes:
------
- "Not found" is None, never an exception.
- The locality hint lives on the engine instance; independent engines never share it.
- The outward walk is fast when spatially close elements have close indices (banded
  numbering), but every element is visited before giving up, so the result never
  depends on numbering.
"""

import logging
from typing import Iterable, List, Optional, Union

import numpy as np

from geometry.arcs import get_circle, shortest_distance_from_arc, shortest_distance_from_segment
from geometry.model import ArcSegment, Problem
from geometry.units import length_conversion
from mesh.data import BOUNDARY, Mesh
from mesh.errors import MeshStateError

logger = logging.getLogger(__name__)


class QueryEngine:
    """
    Query engine bound to one problem description and one mesh arena.

    Parameters
    ----------
    problem : Problem
        Input geometry (nodes, segments, arcs) and length unit.
    mesh : Mesh
        Mesh arena; the engine keeps a reference, so a regenerated mesh needs a new
        engine.
    logger : logging.Logger, optional
        Diagnostics sink; the module logger is used when omitted.
    """

    def __init__(self, problem: Problem, mesh: Mesh, logger: Optional[logging.Logger] = None):
        self.problem = problem
        self.mesh = mesh
        self.log = logger if logger is not None else logging.getLogger(__name__)
        self.hint = 0

    def reset_hint(self) -> None:
        self.hint = 0

    # ---------------------------
    # point location
    # ---------------------------
    def in_triangle_test(self, x: float, y: float, i: int) -> bool:
        """
        True if (x, y) lies in element `i` or on its boundary.

        Each edge (p[j], p[j+1]) is tested from its lower-indexed node, so two
        elements sharing an edge evaluate the same cross product and a point on that
        edge is claimed consistently. Out-of-range `i` gives False.
        """
        elems = self.mesh.elements
        if i < 0 or i >= len(elems):
            return False

        nodes = self.mesh.nodes
        p = elems[i].p
        for j in range(3):
            k = j + 1
            if k == 3:
                k = 0
            xj, yj = nodes[p[j]]
            xk, yk = nodes[p[k]]
            if p[k] > p[j]:
                z = (xk - xj) * (y - yj) - (yk - yj) * (x - xj)
                if z < 0:
                    return False
            else:
                z = (xj - xk) * (y - yk) - (yj - yk) * (x - xk)
                if z > 0:
                    return False
        return True

    def in_triangle(self, x: float, y: float) -> Optional[int]:
        """
        Index of the element containing (x, y), or None.

        The previous hit is tested first; on a miss the search alternates forward and
        backward from it, wrapping around the element list, and skips elements whose
        centroid is farther than their bounding radius from the point.
        """
        elems = self.mesh.elements
        sz = len(elems)
        if sz == 0:
            return None

        k = self.hint
        if k < 0 or k >= sz:
            k = 0
        if self.in_triangle_test(x, y, k):
            self.hint = k
            return k

        hi = k
        lo = k
        for _j in range(0, sz, 2):
            hi += 1
            if hi >= sz:
                hi = 0
            lo -= 1
            if lo < 0:
                lo = sz - 1

            e = elems[hi]
            z = (e.ctr.real - x) ** 2 + (e.ctr.imag - y) ** 2
            if z <= e.rsqr and self.in_triangle_test(x, y, hi):
                self.hint = hi
                return hi

            e = elems[lo]
            z = (e.ctr.real - x) ** 2 + (e.ctr.imag - y) ** 2
            if z <= e.rsqr and self.in_triangle_test(x, y, lo):
                self.hint = lo
                return lo

        self.log.debug("[in_triangle] (%g, %g) is outside the mesh", x, y)
        return None

    def locate_points(self, points: Iterable) -> List[Optional[int]]:
        """
        Locate many points in order, reusing the hint between consecutive points.

        `points` may hold (x, y) pairs or complex numbers.
        """
        out = []
        for p in points:
            if isinstance(p, complex):
                out.append(self.in_triangle(p.real, p.imag))
            else:
                out.append(self.in_triangle(float(p[0]), float(p[1])))
        return out

    # ---------------------------
    # nearest input features
    # ---------------------------
    def closest_node(self, x: float, y: float) -> Optional[int]:
        """Index of the input node nearest to (x, y); None if there are no nodes."""
        best = None
        d0 = 0.0
        for i, n in enumerate(self.problem.nodes):
            d1 = n.distance(x, y)
            if best is None or d1 < d0:
                d0 = d1
                best = i
        return best

    def closest_segment(self, x: float, y: float) -> Optional[int]:
        """Index of the straight segment nearest to (x, y); None if there are none."""
        best = None
        d0 = 0.0
        for i in range(len(self.problem.segments)):
            d1 = self.shortest_distance_from_segment(x, y, i)
            if best is None or d1 < d0:
                d0 = d1
                best = i
        return best

    def closest_arc_segment(self, x: float, y: float) -> Optional[int]:
        """Index of the arc nearest to (x, y); None if there are no arcs."""
        best = None
        d0 = 0.0
        for i in range(len(self.problem.arcs)):
            d1 = self.shortest_distance_from_arc(x, y, i)
            if best is None or d1 < d0:
                d0 = d1
                best = i
        return best

    def shortest_distance_from_segment(self, x: float, y: float, segm: int) -> float:
        s = self.problem.segments[segm]
        return shortest_distance_from_segment(
            complex(x, y), self.problem.node_xy(s.n0), self.problem.node_xy(s.n1))

    def shortest_distance_from_arc(self, x: float, y: float, arc: Union[int, ArcSegment]) -> float:
        a = self.problem.arcs[arc] if isinstance(arc, int) else arc
        return shortest_distance_from_arc(
            complex(x, y), self.problem.node_xy(a.n0), self.problem.node_xy(a.n1), a.arc_length)

    def get_circle(self, arc: Union[int, ArcSegment]):
        """(center, radius) of an arc given by index or record."""
        a = self.problem.arcs[arc] if isinstance(arc, int) else arc
        return get_circle(self.problem.node_xy(a.n0), self.problem.node_xy(a.n1), a.arc_length)

    # ---------------------------
    # per-element measurements
    # ---------------------------
    def _coords(self, i: int):
        e = self.mesh.element(i)
        return e, self.mesh.nodes[list(e.p)]

    def ctr(self, i: int) -> complex:
        """Centroid of element `i` (IndexError when out of range)."""
        _e, P = self._coords(i)
        return complex(P[:, 0].sum() / 3.0, P[:, 1].sum() / 3.0)

    def elm_area(self, i: int) -> float:
        """Signed area of element `i`; positive for counter-clockwise elements."""
        _e, P = self._coords(i)
        b0 = P[1, 1] - P[2, 1]
        b1 = P[2, 1] - P[0, 1]
        c0 = P[2, 0] - P[1, 0]
        c1 = P[0, 0] - P[2, 0]
        return float((b0 * c1 - b1 * c0) / 2.0)

    def henrotte_vector(self, k: int, values=None) -> complex:
        """
        Discrete gradient of a nodal scalar over element `k`, scaled to meters.

        v = -sum_i values[p_i] (b_i + j c_i) / (da * L), where b_i, c_i are the
        edge-opposite coordinate differences, da the doubled area and L the
        meters-per-unit factor of the problem's length unit.

        Parameters
        ----------
        k : int
            Element index.
        values : array-like, optional
            Per-node values; defaults to `mesh.values`.

        Raises
        ------
        MeshStateError
            If no values are given and the mesh carries none.
        IndexError
            If `k` is out of range.
        """
        if values is None:
            values = self.mesh.values
            if values is None:
                raise MeshStateError("Mesh has no node values; pass `values` or call set_node_values().")
        values = np.asarray(values, dtype=float).reshape(-1)

        e, P = self._coords(k)
        b = (P[1, 1] - P[2, 1], P[2, 1] - P[0, 1], P[0, 1] - P[1, 1])
        c = (P[2, 0] - P[1, 0], P[0, 0] - P[2, 0], P[1, 0] - P[0, 0])
        da = b[0] * c[1] - b[1] * c[0]
        scale = length_conversion(self.problem.length_units)

        v = 0j
        for i in range(3):
            v -= values[e.p[i]] * complex(b[i], c[i]) / (da * scale)
        return v

    # ---------------------------
    # neighbors
    # ---------------------------
    def element_neighbors(self, i: int) -> List[int]:
        """
        Neighbor slots of element `i` (element index or BOUNDARY per edge).

        Raises
        ------
        MeshStateError
            If adjacency and boundary flags have not been built.
        """
        self.mesh.require_adjacency()
        e = self.mesh.element(i)
        if any(s is None for s in e.n):
            raise MeshStateError("Neighbor slots are unfinished; run find_boundary_edges().", {"element": i})
        return list(e.n)

    def is_boundary_edge(self, i: int, j: int) -> bool:
        """True if edge `j` of element `i` (opposite vertex j) lies on the boundary."""
        if j < 0 or j > 2:
            raise IndexError("Edge slot must be 0, 1 or 2 (got {}).".format(j))
        return self.element_neighbors(i)[j] == BOUNDARY
