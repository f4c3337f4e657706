"""Tests for the mesh arena, adjacency/boundary builder and mesh summary."""

import numpy as np
import pytest

from mesh.data import BOUNDARY, Mesh, make_element
from mesh.errors import MeshStateError
from mesh.stats.report import element_areas, summarize
from mesh.stats.topology import (
    boundary_edges,
    boundary_nodes,
    build_adjacency,
    find_boundary_edges,
    inventory,
    valence,
)


class TestMeshArena:
    def test_clockwise_input_is_reoriented(self):
        nodes = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]])
        e = make_element(nodes, (0, 2, 1), region=3)
        assert e.p == (0, 1, 2)
        assert e.region == 3
        assert e.ctr == pytest.approx(complex(1.0 / 3.0, 1.0 / 3.0))
        assert e.rsqr == pytest.approx((2.0 / 3.0) ** 2 + (1.0 / 3.0) ** 2)
        assert e.n == [None, None, None]

    def test_element_bounds(self, square_mesh):
        assert square_mesh.element(1).p == (0, 2, 3)
        with pytest.raises(IndexError):
            square_mesh.element(2)
        with pytest.raises(IndexError):
            square_mesh.element(-1)

    def test_node_values_length_checked(self, square_mesh):
        square_mesh.set_node_values([1, 2, 3, 4])
        assert square_mesh.values.tolist() == [1.0, 2.0, 3.0, 4.0]
        with pytest.raises(ValueError):
            square_mesh.set_node_values([1, 2])

    def test_bbox_and_sizes(self, grid_mesh):
        assert grid_mesh.n_nodes == 81
        assert grid_mesh.n_elements == 128
        assert grid_mesh.bbox == (0.0, 1.0, 0.0, 1.0)
        assert grid_mesh.element_nodes().shape == (128, 3)


class TestAdjacency:
    def test_incident_lists_are_ordered(self, square_mesh):
        adj = build_adjacency(square_mesh)
        assert adj == [[0, 1], [0], [0, 1], [1]]
        assert square_mesh.adjacency is adj

    def test_boundary_requires_adjacency(self, square_mesh):
        with pytest.raises(MeshStateError):
            find_boundary_edges(square_mesh)

    def test_square_neighbors(self, square_mesh):
        build_adjacency(square_mesh)
        assert find_boundary_edges(square_mesh) == 4
        # element 0 = (0, 1, 2): edge 1 joins nodes 2 and 0, shared with element 1
        assert square_mesh.elements[0].n == [BOUNDARY, 1, BOUNDARY]
        assert square_mesh.elements[1].n == [BOUNDARY, BOUNDARY, 0]

    def test_idempotent(self, grid_mesh):
        build_adjacency(grid_mesh)
        first = find_boundary_edges(grid_mesh)
        slots = [list(e.n) for e in grid_mesh.elements]
        assert find_boundary_edges(grid_mesh) == first
        assert [list(e.n) for e in grid_mesh.elements] == slots

    def test_grid_boundary(self, grid_mesh):
        build_adjacency(grid_mesh)
        assert find_boundary_edges(grid_mesh) == 32
        nodes = boundary_nodes(grid_mesh)
        assert len(nodes) == 32
        xy = grid_mesh.nodes[nodes]
        on_edge = np.isclose(xy, 0.0) | np.isclose(xy, 1.0)
        assert on_edge.any(axis=1).all()

    def test_neighbor_relation_is_symmetric(self, grid_mesh):
        build_adjacency(grid_mesh)
        find_boundary_edges(grid_mesh)
        for i, e in enumerate(grid_mesh.elements):
            for j, nb in enumerate(e.n):
                if nb == BOUNDARY:
                    continue
                assert i in grid_mesh.elements[nb].n
                u, v = e.p[(j + 1) % 3], e.p[(j + 2) % 3]
                assert u in grid_mesh.elements[nb].p and v in grid_mesh.elements[nb].p

    def test_boundary_edges_listing(self, square_mesh):
        build_adjacency(square_mesh)
        find_boundary_edges(square_mesh)
        edges = boundary_edges(square_mesh)
        assert [(i, j) for i, j, _uv in edges] == [(0, 0), (0, 2), (1, 0), (1, 1)]
        assert edges[0][2] == (1, 2)

    def test_invalidate(self, square_mesh):
        build_adjacency(square_mesh)
        find_boundary_edges(square_mesh)
        square_mesh.invalidate()
        assert not square_mesh.has_adjacency
        assert all(e.n == [None, None, None] for e in square_mesh.elements)


class TestSummary:
    def test_inventory_and_valence(self, square_mesh):
        inv = inventory(square_mesh)
        assert inv["n_nodes"] == 4 and inv["n_elements"] == 2
        assert inv["area_bbox"] == pytest.approx(1.0)
        val = valence(square_mesh)
        assert val["min"] == 1 and val["max"] == 2
        assert val["hist"] == {1: 2, 2: 2}

    def test_summarize(self, grid_mesh):
        s = summarize(grid_mesh)
        assert s["area"]["total"] == pytest.approx(1.0)
        assert s["area"]["min"] == pytest.approx(1.0 / 128.0)
        assert s["boundary"]["n_edges"] == 32
        assert s["flags"] == {"ok": True, "n_nonpositive": 0}

    def test_degenerate_element_flagged(self):
        nodes = np.array([[0.0, 0.0], [1.0, 0.0], [2.0, 0.0], [0.0, 1.0]])
        m = Mesh.from_arrays(nodes, [(0, 1, 2), (0, 1, 3)])
        assert element_areas(m)[0] == 0.0
        assert summarize(m)["flags"]["ok"] is False
