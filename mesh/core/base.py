# -*- coding: utf-8 -*-
# Fluxmesh/mesh/core/base.py

"""
Project: Fluxmesh
Date: 10/19/2026

Purpose:
--------
Abstract interface for triangulation back-ends, so the in-process Triangle bindings
and the external `triangle` executable can be swapped without touching the driver.

Abstract Classes:
-----------------
- MeshGenerator: triangulate a PSLG and build the shared Triangle switch string.

Notes:
------
- All back-ends return the same raw result dictionary (keys follow the Triangle
  Python bindings: "vertices", "triangles", "triangle_attributes", ...).
- Index base is always zero in results.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any
import math

from .processor import PSLG


class MeshGenerator(ABC):
    """
    Abstract base class for all triangulation back-ends.
    """

    name = "abstract"

    def options(self, pslg: PSLG, settings: Dict[str, Any], min_angle=None) -> str:
        """
        Build the Triangle switch string.

        Parameters
        ----------
        pslg : PSLG
            Prepared input graph.
        settings : Dict[str, Any]
            Resolved mesher settings.
        min_angle : float, optional
            Overrides `settings["min_angle"]` (problem-level quality bound).

        Returns
        -------
        str
            e.g. "pq30Aa" or "pq30a0.0314Y".
        """
        opts = "p"
        angle = settings.get("min_angle") if min_angle is None else min_angle
        if angle is not None:
            opts += "q{:g}".format(float(angle))
        if len(pslg.regions):
            opts += "Aa"
        else:
            opts += "a{:.12g}".format(math.pi * pslg.mesh_size ** 2 / 4.0)
        if pslg.periodic:
            # no Steiner points on boundary segments
            opts += "Y"
        if settings.get("verbose"):
            opts += "V"
        return opts

    @abstractmethod
    def triangulate(self, pslg: PSLG, settings: Dict[str, Any], min_angle=None) -> Dict[str, Any]:
        """
        Triangulate `pslg`.

        Parameters
        ----------
        pslg : PSLG
            Prepared input graph.
        settings : Dict[str, Any]
            Resolved mesher settings.
        min_angle : float, optional
            Problem-level quality bound overriding the settings value.

        Returns
        -------
        Dict[str, Any]
            At least "vertices" (N,2) and "triangles" (T,3); optionally
            "triangle_attributes", "vertex_markers", "segments", "segment_markers".

        Raises
        ------
        TriangulationError
            If the back-end fails or produces no output.
        """
        pass
