# -*- coding: utf-8 -*-
# Fluxmesh/mesh/core/runner.py

"""
Project: Fluxmesh
Date: 10/19/2026

Purpose:
--------
Triangulation orchestration that works with any MeshGenerator implementation, and
ingestion of the raw back-end result into the mesh arena.

Main Tasks:
-----------
    1. Pick the configured generator (or use the one passed in) and run it once.
    2. Check the raw result: enough vertices, at least one element, input vertices
       preserved and periodic boundaries still matched on the periodic path.
    3. Build CCW elements with cached centroid/radius and record periodic node pairs.

Notes:
------
- No retries: a failing back-end surfaces as TriangulationError.
"""

import logging
from collections import Counter
from typing import Any, Dict, Optional

import numpy as np

from mesh.data import Mesh, PeriodicNodePair, make_element
from mesh.errors import PeriodicPairingError, TriangulationError
from .base import MeshGenerator
from .generators import get_generator
from .processor import PSLG

logger = logging.getLogger(__name__)


def triangulate_pslg(
        pslg: PSLG,
        settings: Dict[str, Any],
        mesh_generator: Optional[MeshGenerator] = None,
        min_angle: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Run the triangulation back-end on a prepared PSLG.

    Parameters
    ----------
    pslg : PSLG
        Prepared input graph.
    settings : Dict[str, Any]
        Resolved mesher settings; `backend` selects the generator when none is given.
    mesh_generator : MeshGenerator, optional
        Generator instance to use instead of the configured back-end.
    min_angle : float, optional
        Problem-level quality bound overriding `settings["min_angle"]`.

    Returns
    -------
    Dict[str, Any]
        Raw back-end result (see `MeshGenerator.triangulate`).

    Raises
    ------
    TriangulationError
        If the back-end fails.
    """
    generator = mesh_generator or get_generator(settings.get("backend", "triangle"))
    logger.info("[triangulate_pslg] back-end '%s', %s path",
                getattr(generator, "name", type(generator).__name__),
                "periodic" if pslg.periodic else "non-periodic")
    return generator.triangulate(pslg, settings, min_angle)


def _check_periodic_counts(raw: Dict[str, Any], pslg: PSLG) -> None:
    if "segments" not in raw or "segment_markers" not in raw:
        return
    per_marker = Counter(int(m) for m in np.asarray(raw["segment_markers"]).reshape(-1))
    names = []
    for _a, _b, _anti, name in pslg.periodic_vertex_pairs:
        if name not in names:
            names.append(name)
    for name in names:
        markers = sorted(m for m, (_k, _i, b) in pslg.marker_names.items() if b == name)
        counts = [per_marker.get(m, 0) for m in markers]
        if len(set(counts)) > 1:
            raise PeriodicPairingError(
                "Periodic boundary members carry different node counts after triangulation.",
                {"boundary": name, "markers": markers, "segments": counts},
            )


def ingest(raw: Dict[str, Any], pslg: PSLG) -> Mesh:
    """
    Convert a raw back-end result into a `Mesh`.

    Raises
    ------
    TriangulationError
        If the result has fewer vertices than the input or no elements.
    PeriodicPairingError
        On the periodic path, if input vertices moved or paired boundaries lost
        their one-to-one discretization.
    """
    vertices = np.asarray(raw.get("vertices", np.zeros((0, 2))), dtype=float).reshape(-1, 2)
    tris = np.asarray(raw.get("triangles", np.zeros((0, 3))), dtype=int).reshape(-1, 3)
    n_in = pslg.n_input_vertices

    if len(vertices) < n_in:
        raise TriangulationError(
            "Back-end returned fewer vertices than were supplied.",
            {"supplied": n_in, "returned": len(vertices)},
        )
    if len(tris) == 0:
        raise TriangulationError("Back-end returned no elements.", {"vertices": len(vertices)})

    if pslg.periodic:
        scale = max(1.0, float(np.abs(pslg.vertices).max())) if n_in else 1.0
        if not np.allclose(vertices[:n_in], pslg.vertices, rtol=0.0, atol=1e-12 * scale):
            raise PeriodicPairingError("Back-end renumbered or moved input vertices.", {"n_input": n_in})
        _check_periodic_counts(raw, pslg)

    attrs = raw.get("triangle_attributes")
    if attrs is None:
        regions = np.zeros(len(tris), dtype=int)
    else:
        regions = np.rint(np.asarray(attrs, dtype=float).reshape(len(tris), -1)[:, 0]).astype(int)

    elements = [make_element(vertices, t, r) for t, r in zip(tris, regions)]

    markers = raw.get("vertex_markers")
    if markers is not None:
        markers = np.asarray(markers, dtype=int).reshape(-1)

    pairs = [PeriodicNodePair(a=a, b=b, antiperiodic=anti, boundary=name)
             for a, b, anti, name in pslg.periodic_vertex_pairs]

    logger.debug("[ingest] %d nodes, %d elements, %d periodic node pairs",
                 len(vertices), len(elements), len(pairs))
    return Mesh(vertices, elements, node_markers=markers, periodic_pairs=pairs)
