# -*- coding: utf-8 -*-
# Fluxmesh/mesh/api.py

"""
Project: Fluxmesh
Date: 10/19/2026

Purpose
-------
High-level API for meshing a planar problem description. Ties together validation,
PSLG preparation, the triangulation back-end, ingestion, adjacency and optional
diagnostic output, and exposes a single entry point (`build_mesh`) plus a
`ProblemContext` that owns the current mesh arena.

Main Tasks
----------
    1. Validate the problem; fail before any back-end call.
    2. Resolve settings and derive default mesh size / minimum subdivision length.
    3. Build the PSLG and choose the periodic or non-periodic path (`has_periodic_bc`).
    4. Triangulate once (no retries) and ingest the result into a `Mesh`.
    5. Optionally build adjacency/boundary flags and write diagnostic files.
    6. Install a new mesh in `ProblemContext` only when every step succeeded.
"""

from typing import Any, Dict, Optional
import logging

from geometry._validation import validate_problem
from geometry.model import Problem
from mesh.core import process_problem, triangulate_pslg, ingest, has_periodic_bc, write_diagnostics
from mesh.core.base import MeshGenerator
from mesh.data import Mesh
from mesh.errors import MeshStateError
from mesh.settings import resolve_settings
from mesh.stats.topology import build_adjacency, find_boundary_edges

logger = logging.getLogger(__name__)


def build_mesh(
    problem: Problem,
    settings: Optional[Dict[str, Any]] = None,
    *,
    mesh_generator: Optional[MeshGenerator] = None,
    logger: Optional[logging.Logger] = None,
) -> Mesh:
    """
    Mesh `problem` and return the new arena.

    Parameters
    ----------
    problem : Problem
        Nodes, segments, arcs, block labels and boundary properties.
    settings : dict, optional
        Overrides merged over `mesh.settings.DEFAULTS`.
    mesh_generator : MeshGenerator, optional
        Back-end instance; defaults to the one named by `settings["backend"]`.
    logger : logging.Logger, optional
        Diagnostics sink; the module logger is used when omitted.

    Returns
    -------
    Mesh
        Elements counter-clockwise with centroid/radius cached; neighbor slots
        resolved when `build_adjacency` is enabled.

    Raises
    ------
    ValueError
        On invalid settings.
    GeometryError
        On malformed geometry (nothing is sent to the back-end).
    TriangulationError
        If the back-end fails or returns an unusable mesh.
    PeriodicPairingError
        If periodic boundaries cannot be put in one-to-one correspondence.
    """
    log = logger if logger is not None else logging.getLogger(__name__)

    cfg = resolve_settings(settings)
    validate_problem(problem, tol=cfg["coincident_tol"])

    pslg = process_problem(problem, cfg)
    log.info("[build_mesh] default mesh size %.6g, minimum subdivision %.6g",
             pslg.mesh_size, pslg.min_length)
    log.info("[build_mesh] PSLG: %d vertices, %d segments, %d regions, %d holes",
             pslg.n_input_vertices, len(pslg.segments), len(pslg.regions), len(pslg.holes))

    if has_periodic_bc(problem):
        log.info("[build_mesh] periodic path: %d node pairs", len(pslg.periodic_vertex_pairs))
    else:
        log.info("[build_mesh] non-periodic path")

    raw = triangulate_pslg(pslg, cfg, mesh_generator, min_angle=problem.min_angle)
    m = ingest(raw, pslg)
    log.info("[build_mesh] %d nodes, %d elements", m.n_nodes, m.n_elements)

    if cfg["build_adjacency"]:
        build_adjacency(m)
        n_b = find_boundary_edges(m)
        log.debug("[build_mesh] %d boundary edges", n_b)

    if cfg["output_dir"]:
        paths = write_diagnostics(m, pslg, cfg["output_dir"], cfg["basename"])
        log.info("[build_mesh] diagnostics written to %s", cfg["output_dir"])
        log.debug("[build_mesh] files: %s", paths)

    return m


class ProblemContext:
    """
    Owner of a problem description and its current mesh.

    A failed `generate_mesh` leaves the previously installed mesh (if any) untouched.

    Parameters
    ----------
    problem : Problem
        Read-only input geometry.
    settings : dict, optional
        Default settings overrides for every generation.
    logger : logging.Logger, optional
        Diagnostics sink forwarded to `build_mesh` and query engines.
    """

    def __init__(self, problem: Problem, settings: Optional[Dict[str, Any]] = None,
                 logger: Optional[logging.Logger] = None):
        self.problem = problem
        self.settings = dict(settings or {})
        self.logger = logger
        self.revision = 0
        self._mesh: Optional[Mesh] = None
        self.mesh_generator: Optional[MeshGenerator] = None

    @property
    def has_mesh(self) -> bool:
        return self._mesh is not None

    @property
    def mesh(self) -> Mesh:
        if self._mesh is None:
            raise MeshStateError("No mesh is installed; call generate_mesh() first.")
        return self._mesh

    def generate_mesh(self, **overrides) -> Mesh:
        """
        Build a new mesh and install it, replacing the previous arena.

        Keyword arguments override the context settings for this call only.
        """
        cfg = dict(self.settings)
        cfg.update(overrides)
        new = build_mesh(self.problem, cfg, mesh_generator=self.mesh_generator, logger=self.logger)
        self._mesh = new
        self.revision += 1
        return new

    def query_engine(self):
        """`post.query.QueryEngine` bound to the current mesh arena."""
        from post.query import QueryEngine
        return QueryEngine(self.problem, self.mesh, logger=self.logger)

    def new_contour(self):
        from post.contour import Contour
        return Contour()
