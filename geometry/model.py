# -*- coding: utf-8 -*-
# Fluxmesh/geometry/model.py

"""
Project: Fluxmesh
Date: 10/19/2026

Purpose:
--------
Input records of a planar problem description: nodes, straight segments, arc segments,
block labels and boundary properties, collected in a `Problem` context. These records
are supplied before meshing and are never mutated by the mesher.

Main Tasks:
-----------
    1. Define the record types (dataclasses) referenced by integer index.
    2. Classify boundary properties (other / periodic / anti-periodic).
    3. Provide small coordinate helpers used by the mesher and the post-processor.

Notes:
------
- Identity of every record is its position in the owning list.
- Arc sweep angles are in degrees, counter-clockwise from `n0` to `n1`.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple
import math

from .units import LengthUnit
from .arcs import get_circle


class BCKind(Enum):
    OTHER = "other"
    PERIODIC = "periodic"
    ANTIPERIODIC = "antiperiodic"


@dataclass
class Node:
    x: float
    y: float

    def distance(self, x: float, y: float) -> float:
        return math.hypot(self.x - x, self.y - y)

    def as_complex(self) -> complex:
        return complex(self.x, self.y)


@dataclass
class Segment:
    n0: int
    n1: int
    boundary: Optional[str] = None
    max_side_length: Optional[float] = None  # None -> default mesh size


@dataclass
class ArcSegment:
    n0: int
    n1: int
    arc_length: float                        # swept angle, degrees
    boundary: Optional[str] = None
    max_side_deg: float = 10.0


@dataclass
class BlockLabel:
    x: float
    y: float
    material: Optional[str] = None
    mesh_size: Optional[float] = None        # None -> default mesh size
    is_hole: bool = False


@dataclass
class BoundaryProp:
    name: str
    kind: BCKind = BCKind.OTHER

    @property
    def is_periodic(self) -> bool:
        return self.kind in (BCKind.PERIODIC, BCKind.ANTIPERIODIC)


@dataclass
class Problem:
    """
    Problem context owning the input geometry.

    Attributes
    ----------
    nodes, segments, arcs, labels : list
        Geometry records, referenced by index.
    boundaries : dict
        Boundary property name -> BoundaryProp.
    length_units : LengthUnit
        Drawing unit; converts lengths to meters in post-processing.
    mesh_size : float or None
        Explicit default element size; None derives it from the bounding box.
    min_angle : float or None
        Overrides the quality bound from the mesher settings when set.
    """

    nodes: List[Node] = field(default_factory=list)
    segments: List[Segment] = field(default_factory=list)
    arcs: List[ArcSegment] = field(default_factory=list)
    labels: List[BlockLabel] = field(default_factory=list)
    boundaries: Dict[str, BoundaryProp] = field(default_factory=dict)
    length_units: LengthUnit = LengthUnit.METERS
    mesh_size: Optional[float] = None
    min_angle: Optional[float] = None

    # ---- building helpers ----
    def add_node(self, x: float, y: float) -> int:
        self.nodes.append(Node(float(x), float(y)))
        return len(self.nodes) - 1

    def add_segment(self, n0: int, n1: int, boundary: Optional[str] = None,
                    max_side_length: Optional[float] = None) -> int:
        self.segments.append(Segment(n0, n1, boundary, max_side_length))
        return len(self.segments) - 1

    def add_arc(self, n0: int, n1: int, arc_length: float, boundary: Optional[str] = None,
                max_side_deg: float = 10.0) -> int:
        self.arcs.append(ArcSegment(n0, n1, float(arc_length), boundary, max_side_deg))
        return len(self.arcs) - 1

    def add_label(self, x: float, y: float, material: Optional[str] = None,
                  mesh_size: Optional[float] = None, is_hole: bool = False) -> int:
        self.labels.append(BlockLabel(float(x), float(y), material, mesh_size, is_hole))
        return len(self.labels) - 1

    def add_boundary(self, name: str, kind: BCKind = BCKind.OTHER) -> BoundaryProp:
        prop = BoundaryProp(name, kind)
        self.boundaries[name] = prop
        return prop

    # ---- queries ----
    def boundary_kind(self, name: Optional[str]) -> BCKind:
        if name is None or name not in self.boundaries:
            return BCKind.OTHER
        return self.boundaries[name].kind

    def node_xy(self, i: int) -> complex:
        return self.nodes[i].as_complex()

    def get_circle(self, arc: ArcSegment) -> Tuple[complex, float]:
        """Center and radius of the circle carrying `arc`."""
        return get_circle(self.node_xy(arc.n0), self.node_xy(arc.n1), arc.arc_length)

    def segment_length(self, seg: Segment) -> float:
        return abs(self.node_xy(seg.n1) - self.node_xy(seg.n0))
