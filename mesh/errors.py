# -*- coding: utf-8 -*-
# Fluxmesh/mesh/errors.py

"""
Project: Fluxmesh
Date: 10/19/2026

Purpose
-------
Typed exceptions for the meshing and query layers with compact, context-aware messages,
so that validation, back-end and precondition failures are reported uniformly.

Main Tasks
----------
    1. Define MeshError(message, context) with a compact context suffix in __str__.
    2. Provide typed subclasses: GeometryError, TriangulationError, PeriodicPairingError,
       MeshStateError.
    3. Supply _format_context helper and expose public names via __all__.

Notes
-----
- Context is optional; long values are truncated for readability.
- "Not found" results of spatial queries are not errors; they return None.
"""

__all__ = [
    "MeshError",
    "GeometryError",
    "TriangulationError",
    "PeriodicPairingError",
    "MeshStateError",
]


def _format_context(ctx):
    """Return a compact ' | key1=val1, key2=val2' string or '' if no context."""
    if not ctx:
        return ""
    parts = []
    for k in sorted(ctx.keys()):
        sv = repr(ctx[k])
        if len(sv) > 120:
            sv = sv[:117] + "..."
        parts.append("{}={}".format(k, sv))
    return " | " + ", ".join(parts)


class MeshError(Exception):
    """
    Base class for all errors raised by the mesher and the query engine.

    Parameters
    ----------
    message : str
        Human-readable error.
    context : dict, optional
        Extra fields appended in the string form (e.g., {"segment": 3, "n0": 7}).
    """
    def __init__(self, message, context=None):
        self.context = dict(context) if context else None
        super(MeshError, self).__init__(message)

    def __str__(self):
        base = super(MeshError, self).__str__()
        return base + _format_context(self.context)


class GeometryError(MeshError):
    """
    Malformed input geometry detected before the triangulation back-end is called:
      - dangling node references, coincident nodes
      - zero-length segments/arcs, arcs with 0 or 360 degree sweep
      - crossing segments, unknown boundary names
    """


class TriangulationError(MeshError):
    """
    The triangulation back-end rejected its input or returned an unusable mesh:
      - non-zero exit code or library exception
      - missing output, no elements, fewer nodes than were supplied
    """


class PeriodicPairingError(TriangulationError):
    """
    Periodic/anti-periodic boundaries that cannot be put in one-to-one correspondence:
      - a periodic boundary referenced by other than exactly two entities
      - mismatched lengths/sweeps, or unequal boundary node counts after meshing
    """


class MeshStateError(MeshError, RuntimeError):
    """
    Precondition violations: adjacency queries before the adjacency tables were built,
    or mesh access when no mesh is installed.
    """
