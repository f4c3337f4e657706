# -*- coding: utf-8 -*-
# Fluxmesh/mesh/stats/report.py

"""
Project: Fluxmesh
Date: 10/19/2026

Purpose:
--------
Compact mesh summary returned as a structured dictionary, ready for logging or JSON
export: topology inventory, valence, element-area statistics and boundary counts.

Main Tasks:
-----------
    1) Inventory and valence from `.topology`.
    2) Signed element areas (min/max/total) and a non-positive-area flag.
    3) Boundary-edge and periodic-pair counts.
"""

from typing import Any, Dict
import numpy as np

from mesh.data import Mesh
from .topology import inventory, valence, build_adjacency, find_boundary_edges, boundary_edges


def element_areas(m: Mesh) -> np.ndarray:
    """Signed areas of all elements (positive for CCW)."""
    if m.n_elements == 0:
        return np.zeros(0)
    tris = m.element_nodes()
    a = m.nodes[tris[:, 0]]
    b = m.nodes[tris[:, 1]]
    c = m.nodes[tris[:, 2]]
    return 0.5 * ((b[:, 0] - a[:, 0]) * (c[:, 1] - a[:, 1]) - (b[:, 1] - a[:, 1]) * (c[:, 0] - a[:, 0]))


def summarize(m: Mesh) -> Dict[str, Any]:
    """
    Build a mesh summary.

    Adjacency and boundary edges are computed if they are not present yet.

    Returns
    -------
    dict
        {
          "inventory": {...},
          "valence": {...},
          "area": {"total", "min", "max"},
          "boundary": {"n_edges": int},
          "flags": {"ok": bool, "n_nonpositive": int}
        }
    """
    if not m.has_adjacency:
        build_adjacency(m)
        find_boundary_edges(m)

    areas = element_areas(m)
    n_bad = int(np.count_nonzero(areas <= 0.0))

    return {
        "inventory": inventory(m),
        "valence": valence(m),
        "area": {
            "total": float(areas.sum()) if areas.size else 0.0,
            "min": float(areas.min()) if areas.size else 0.0,
            "max": float(areas.max()) if areas.size else 0.0,
        },
        "boundary": {"n_edges": len(boundary_edges(m))},
        "flags": {"ok": n_bad == 0 and m.n_elements > 0, "n_nonpositive": n_bad},
    }
