# -*- coding: utf-8 -*-
# Fluxmesh/mesh/data.py

"""
Project: Fluxmesh
Date: 10/19/2026

Purpose:
--------
Mesh arena produced by the mesher and consumed by the solver and the post-processor.
The `Mesh` exclusively owns node coordinates and element records; every other
component refers to them by integer index only, so a regenerated mesh can replace
the whole arena at once.

Main Tasks:
-----------
    1) `MeshElement`: three CCW node indices, cached centroid and bounding radius,
       three neighbor slots (one per edge) and the region attribute.
    2) `PeriodicNodePair`: node-to-node correspondence across periodic boundaries.
    3) `Mesh`: node array, elements, per-node solution values, adjacency tables.

Notes:
------
- Edge j of an element joins p[(j+1)%3] and p[(j+2)%3] (the edge opposite vertex j).
- Neighbor slot values: None (unfinished), BOUNDARY, or the neighbor element index.
- `rsqr` is the largest squared distance from the centroid to a vertex, so a point
  farther than that from `ctr` cannot lie in the element.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple
import numpy as np

from geometry.kernels import orient
from .errors import MeshStateError

BOUNDARY = -1


@dataclass
class MeshElement:
    p: Tuple[int, int, int]
    ctr: complex
    rsqr: float
    n: List[Optional[int]] = field(default_factory=lambda: [None, None, None])
    region: int = 0


@dataclass(frozen=True)
class PeriodicNodePair:
    a: int
    b: int
    antiperiodic: bool = False
    boundary: Optional[str] = None


def make_element(nodes: np.ndarray, p: Sequence[int], region: int = 0) -> MeshElement:
    """
    Build a `MeshElement`, flipping clockwise input to counter-clockwise and caching
    the centroid and bounding radius.
    """
    i, j, k = (int(v) for v in p)
    a, b, c = nodes[i], nodes[j], nodes[k]
    if orient(a, b, c) < 0.0:
        j, k = k, j
        b, c = c, b

    cx = (a[0] + b[0] + c[0]) / 3.0
    cy = (a[1] + b[1] + c[1]) / 3.0
    rsqr = 0.0
    for q in (a, b, c):
        r = (q[0] - cx) ** 2 + (q[1] - cy) ** 2
        if r > rsqr:
            rsqr = r
    return MeshElement(p=(i, j, k), ctr=complex(cx, cy), rsqr=float(rsqr), region=int(region))


class Mesh:
    """
    Triangular mesh arena.

    Attributes
    ----------
    nodes : np.ndarray
        (N,2) node coordinates.
    elements : list of MeshElement
        Triangles, counter-clockwise.
    node_markers : np.ndarray or None
        (N,) boundary markers reported by the back-end (0 = interior).
    periodic_pairs : list of PeriodicNodePair
        Node correspondence across periodic/anti-periodic boundaries.
    values : np.ndarray or None
        (N,) nodal scalar solution (e.g., vector potential), supplied by the solver.
    adjacency : list of list of int, or None
        node -> incident elements, set by `mesh.stats.topology.build_adjacency`.
    """

    def __init__(
        self,
        nodes: np.ndarray,
        elements: List[MeshElement],
        node_markers: Optional[np.ndarray] = None,
        periodic_pairs: Sequence[PeriodicNodePair] = (),
        values: Optional[np.ndarray] = None,
    ):
        self.nodes = np.asarray(nodes, dtype=float).reshape(-1, 2)
        self.elements = list(elements)
        self.node_markers = None if node_markers is None else np.asarray(node_markers, dtype=int)
        self.periodic_pairs = list(periodic_pairs)
        self.values = None
        self.adjacency: Optional[List[List[int]]] = None
        if values is not None:
            self.set_node_values(values)

    @classmethod
    def from_arrays(cls, nodes, triangles, regions=None, **kwargs) -> "Mesh":
        """Build a mesh from a node array and a (T,3) connectivity array."""
        nodes = np.asarray(nodes, dtype=float).reshape(-1, 2)
        tris = np.asarray(triangles, dtype=int).reshape(-1, 3)
        if regions is None:
            regions = np.zeros(len(tris), dtype=int)
        elements = [make_element(nodes, t, r) for t, r in zip(tris, regions)]
        return cls(nodes, elements, **kwargs)

    # ---- sizes ----
    @property
    def n_nodes(self) -> int:
        return int(self.nodes.shape[0])

    @property
    def n_elements(self) -> int:
        return len(self.elements)

    @property
    def bbox(self) -> Tuple[float, float, float, float]:
        """(xmin, xmax, ymin, ymax) of the mesh nodes."""
        if self.n_nodes == 0:
            return (0.0, 0.0, 0.0, 0.0)
        lo = self.nodes.min(axis=0)
        hi = self.nodes.max(axis=0)
        return (float(lo[0]), float(hi[0]), float(lo[1]), float(hi[1]))

    # ---- access ----
    def element(self, i: int) -> MeshElement:
        if i < 0 or i >= len(self.elements):
            raise IndexError("Element index {} out of range (0..{}).".format(i, len(self.elements) - 1))
        return self.elements[i]

    def element_nodes(self) -> np.ndarray:
        """(T,3) connectivity array."""
        if not self.elements:
            return np.zeros((0, 3), dtype=int)
        return np.array([e.p for e in self.elements], dtype=int)

    def element_regions(self) -> np.ndarray:
        return np.array([e.region for e in self.elements], dtype=int)

    def set_node_values(self, values) -> None:
        vals = np.asarray(values, dtype=float).reshape(-1)
        if vals.shape[0] != self.n_nodes:
            raise ValueError("Expected {} node values, got {}.".format(self.n_nodes, vals.shape[0]))
        self.values = vals

    def periodic_map(self) -> Dict[int, int]:
        return {pp.a: pp.b for pp in self.periodic_pairs}

    # ---- adjacency state ----
    @property
    def has_adjacency(self) -> bool:
        return self.adjacency is not None

    def require_adjacency(self) -> List[List[int]]:
        if self.adjacency is None:
            raise MeshStateError("Adjacency tables have not been built for this mesh.")
        return self.adjacency

    def invalidate(self) -> None:
        """Drop adjacency tables and neighbor slots (after any topology change)."""
        self.adjacency = None
        for e in self.elements:
            e.n = [None, None, None]
