# -*- coding: utf-8 -*-
# Fluxmesh/mesh/core/generators/triangle_generator.py

"""
Project: Fluxmesh
Date: 10/19/2026

Purpose:
--------
Default back-end: constrained conforming Delaunay triangulation through the in-process
`triangle` bindings (Shewchuk's Triangle).

Main Tasks:
-----------
    1. Convert the PSLG into the bindings' input dictionary.
    2. Call `triangle.triangulate` with the shared switch string.
    3. Turn library failures or empty output into TriangulationError.

Notes:
------
- The bindings prepend their own quiet/zero-based switches.
- Input vertices are returned first and in input order.
"""

import logging
from typing import Any, Dict

import numpy as np
import triangle

from mesh.errors import TriangulationError
from ..base import MeshGenerator
from ..processor import PSLG

logger = logging.getLogger(__name__)


class TriangleGenerator(MeshGenerator):
    """
    In-process Triangle back-end.
    """

    name = "triangle"

    def triangulate(self, pslg: PSLG, settings: Dict[str, Any], min_angle=None) -> Dict[str, Any]:
        opts = self.options(pslg, settings, min_angle)
        logger.debug("[TriangleGenerator.triangulate] switches '%s'", opts)
        try:
            raw = triangle.triangulate(pslg.to_triangle_dict(), opts)
        except Exception as e:
            raise TriangulationError(
                "Triangle failed on the prepared graph.",
                {"switches": opts, "error": str(e)},
            ) from e

        if "triangles" not in raw or len(raw["triangles"]) == 0:
            raise TriangulationError(
                "Triangle produced no elements.",
                {"switches": opts, "n_vertices": pslg.n_input_vertices},
            )

        out: Dict[str, Any] = {
            "vertices": np.asarray(raw["vertices"], dtype=float),
            "triangles": np.asarray(raw["triangles"], dtype=int),
            "switches": opts,
        }
        for key in ("triangle_attributes", "vertex_markers", "segments", "segment_markers"):
            if key in raw:
                out[key] = np.asarray(raw[key])
        return out
