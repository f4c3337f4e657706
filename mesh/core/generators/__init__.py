# -*- coding: utf-8 -*-
# Fluxmesh/mesh/core/generators/__init__.py

"""
Project: Fluxmesh
Date: 10/19/2026

Generators Subpackage:
----------------------
Concrete implementations of the MeshGenerator interface.

Modules:
--------
- triangle_generator:     in-process Triangle bindings (default)

- triangle_cli_generator: external `triangle` executable driven through .poly files
"""

from .triangle_generator import TriangleGenerator
from .triangle_cli_generator import TriangleCliGenerator


def get_generator(name: str = "triangle", **kwargs):
    """
    Return a generator instance for a settings `backend` name.

    Raises
    ------
    ValueError
        If the name is not a known back-end.
    """
    if name == "triangle":
        return TriangleGenerator()
    if name == "triangle-cli":
        return TriangleCliGenerator(**kwargs)
    raise ValueError("Unknown triangulation back-end '{}'.".format(name))


__all__ = [
    "TriangleGenerator",
    "TriangleCliGenerator",
    "get_generator",
]
