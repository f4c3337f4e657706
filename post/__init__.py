# -*- coding: utf-8 -*-
# Fluxmesh/post/__init__.py

"""
Project: Fluxmesh
Date: 10/19/2026

Modules:
--------
- query:     point location, nearest features and per-element measurements.
- contour:   user-defined polyline with arc bending.
- plot_mesh: matplotlib wireframe of a mesh with optional contour overlay.
"""

__all__ = ["query", "contour", "plot_mesh"]
