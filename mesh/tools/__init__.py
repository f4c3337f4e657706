# -*- coding: utf-8 -*-
# Fluxmesh/mesh/tools/__init__.py

"""
Project: Fluxmesh
Date: 10/19/2026

Tools Subpackage:
-----------------
Helpers supporting the meshing pipeline.

Modules:
--------
- io:    meshio-based mesh export/import.
"""

__all__ = ["io"]
