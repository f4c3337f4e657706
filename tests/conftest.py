"""Pytest configuration and fixtures for mesher and query tests."""

import math

import numpy as np
import pytest

from geometry.model import ArcSegment, BCKind, BlockLabel, BoundaryProp, Node, Problem, Segment
from mesh.data import Mesh


def grid_arrays(n):
    """Nodes and CCW triangles of an n x n cell grid on [0, 1]^2, row-major numbering."""
    xs = np.linspace(0.0, 1.0, n + 1)
    nodes = np.array([[x, y] for y in xs for x in xs])
    tris = []
    for j in range(n):
        for i in range(n):
            a = j * (n + 1) + i
            b = a + 1
            c = a + n + 2
            d = a + n + 1
            tris.append((a, b, c))
            tris.append((a, c, d))
    return nodes, np.array(tris)


@pytest.fixture
def square_mesh():
    """Unit square split along its diagonal into two CCW triangles."""
    nodes = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])
    return Mesh.from_arrays(nodes, [(0, 1, 2), (0, 2, 3)])


@pytest.fixture
def grid_mesh():
    """8 x 8 cell structured triangulation of the unit square (128 elements)."""
    nodes, tris = grid_arrays(8)
    return Mesh.from_arrays(nodes, tris, regions=np.ones(len(tris), dtype=int))


@pytest.fixture
def square_problem():
    """Unit square, one labeled region, outer boundary 'A=0'."""
    return Problem(
        nodes=[Node(0.0, 0.0), Node(1.0, 0.0), Node(1.0, 1.0), Node(0.0, 1.0)],
        segments=[Segment(0, 1, "A=0"), Segment(1, 2, "A=0"), Segment(2, 3, "A=0"), Segment(3, 0, "A=0")],
        labels=[BlockLabel(0.5, 0.5, material="air")],
        boundaries={"A=0": BoundaryProp("A=0")},
    )


@pytest.fixture
def holed_square_problem():
    """Unit square with a centered 0.5 x 0.5 square hole."""
    p = Problem()
    outer = [p.add_node(x, y) for x, y in [(0, 0), (1, 0), (1, 1), (0, 1)]]
    inner = [p.add_node(x, y) for x, y in [(0.25, 0.25), (0.75, 0.25), (0.75, 0.75), (0.25, 0.75)]]
    for loop in (outer, inner):
        for a, b in zip(loop, loop[1:] + loop[:1]):
            p.add_segment(a, b)
    p.add_label(0.1, 0.1, material="iron")
    p.add_label(0.5, 0.5, is_hole=True)
    p.mesh_size = 0.1
    return p


@pytest.fixture
def disk_problem():
    """Unit disk bounded by two 180-degree arcs."""
    p = Problem()
    a = p.add_node(1.0, 0.0)
    b = p.add_node(-1.0, 0.0)
    p.add_arc(a, b, 180.0, max_side_deg=5.0)
    p.add_arc(b, a, 180.0, max_side_deg=5.0)
    p.add_label(0.0, 0.0, material="copper")
    p.mesh_size = 0.2
    return p


@pytest.fixture
def sector_problem():
    """Quarter annulus (r in [1, 2], 0..90 degrees) with anti-periodic radial edges."""
    c45 = 1.5 * math.cos(math.radians(45.0))
    return Problem(
        nodes=[Node(1.0, 0.0), Node(2.0, 0.0), Node(0.0, 2.0), Node(0.0, 1.0)],
        segments=[Segment(0, 1, "sector"), Segment(3, 2, "sector")],
        arcs=[ArcSegment(1, 2, 90.0, "A=0", max_side_deg=5.0), ArcSegment(0, 3, 90.0, "A=0", max_side_deg=5.0)],
        labels=[BlockLabel(c45, c45, material="iron")],
        boundaries={
            "sector": BoundaryProp("sector", BCKind.ANTIPERIODIC),
            "A=0": BoundaryProp("A=0"),
        },
        mesh_size=0.1,
    )


@pytest.fixture
def half_annulus_problem():
    """Upper half annulus (r in [1, 2]) whose anti-periodic radial edges both run outward in x."""
    return Problem(
        nodes=[Node(1.0, 0.0), Node(2.0, 0.0), Node(-2.0, 0.0), Node(-1.0, 0.0)],
        segments=[Segment(0, 1, "sector"), Segment(2, 3, "sector")],
        arcs=[ArcSegment(1, 2, 180.0, "A=0", max_side_deg=5.0), ArcSegment(0, 3, 180.0, "A=0", max_side_deg=5.0)],
        labels=[BlockLabel(0.0, 1.5, material="iron")],
        boundaries={
            "sector": BoundaryProp("sector", BCKind.ANTIPERIODIC),
            "A=0": BoundaryProp("A=0"),
        },
        mesh_size=0.25,
    )
