# -*- coding: utf-8 -*-
# Fluxmesh/geometry/__init__.py

"""
Project: Fluxmesh
Date: 10/19/2026

Modules:
--------
- model:       problem records (nodes, segments, arcs, block labels, boundaries).
- units:       length-unit table (meters per drawing unit).
- arcs:        circle fit for arcs, point-to-arc / point-to-segment distances.
- kernels:     planar orientation and intersection predicates.
- _validation: fail-fast checks run before meshing.
"""

from .model import (
    BCKind,
    Node,
    Segment,
    ArcSegment,
    BlockLabel,
    BoundaryProp,
    Problem,
)
from .units import LengthUnit, LENGTH_CONV, length_conversion

__all__ = [
    "BCKind",
    "Node",
    "Segment",
    "ArcSegment",
    "BlockLabel",
    "BoundaryProp",
    "Problem",
    "LengthUnit",
    "LENGTH_CONV",
    "length_conversion",
]
