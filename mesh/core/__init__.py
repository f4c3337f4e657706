# -*- coding: utf-8 -*-
# Fluxmesh/mesh/core/__init__.py

"""
Project: Fluxmesh
Date: 10/19/2026

Core Subpackage:
----------------
Triangulation engine: PSLG preparation, periodic pairing, back-end execution and
ingestion into the mesh arena, plus Triangle file exchange.

Modules:
--------
- processor:  PSLG preparation (sizing, subdivision, region/hole seeds)
- periodic:   periodic/anti-periodic boundary pairing
- base:       abstract interface for triangulation back-ends
- generators: Triangle bindings and external Triangle executable
- runner:     back-end orchestration and result ingestion
- writer:     .poly/.node/.ele exchange and mesh-line files
"""

from .processor import PSLG, bounding_box, default_mesh_size, process_problem
from .periodic import PeriodicEntityPair, group_periodic_pairs, has_periodic_bc
from .base import MeshGenerator
from .generators import TriangleGenerator, TriangleCliGenerator, get_generator
from .runner import triangulate_pslg, ingest
from .writer import write_poly_file, write_diagnostics

__all__ = [
    "PSLG",
    "bounding_box",
    "default_mesh_size",
    "process_problem",
    "PeriodicEntityPair",
    "group_periodic_pairs",
    "has_periodic_bc",
    "MeshGenerator",
    "TriangleGenerator",
    "TriangleCliGenerator",
    "get_generator",
    "triangulate_pslg",
    "ingest",
    "write_poly_file",
    "write_diagnostics",
]
