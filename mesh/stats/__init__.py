# -*- coding: utf-8 -*-
# Fluxmesh/mesh/stats/__init__.py

"""
Project: Fluxmesh
Date: 10/19/2026

Modules:
--------
- topology:  adjacency (node -> elements), boundary-edge detection, inventory, valence.
- report:    compact mesh summary for logging/export.
"""

__all__ = ["topology", "report"]
