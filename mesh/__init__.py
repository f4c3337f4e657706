# -*- coding: utf-8 -*-
# Fluxmesh/mesh/__init__.py

"""
Project: Fluxmesh
Date: 10/19/2026

Modules:
--------
- core:     PSLG preparation, triangulation back-ends and result ingestion.
- tools:    executable lookup and meshio interchange.
- stats:    adjacency, boundary edges and mesh summaries.
- data:     mesh arena (nodes, elements, periodic node pairs).
- errors:   typed exceptions.
- settings: mesher defaults and overrides.
- api:      high-level mesh building pipeline.
"""

__all__ = ["core", "tools", "stats", "data", "errors", "settings", "api",]
