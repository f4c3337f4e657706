"""Tests for the spatial query engine and the contour builder."""

import math

import numpy as np
import pytest

from geometry.arcs import arc_points, shortest_distance_from_arc, shortest_distance_from_segment
from geometry.model import ArcSegment, Node, Problem, Segment
from geometry.units import LengthUnit
from mesh.errors import MeshStateError
from mesh.data import BOUNDARY, Mesh
from mesh.stats.topology import build_adjacency, find_boundary_edges
from post.contour import Contour
from post.query import QueryEngine


@pytest.fixture
def grid_engine(grid_mesh, square_problem):
    return QueryEngine(square_problem, grid_mesh)


def brute_force_hits(engine, x, y):
    return [i for i in range(engine.mesh.n_elements) if engine.in_triangle_test(x, y, i)]


class TestPointLocation:
    def test_found_from_every_hint(self, grid_engine):
        x, y = 0.61, 0.27
        expected = brute_force_hits(grid_engine, x, y)
        assert len(expected) == 1
        for k in range(grid_engine.mesh.n_elements):
            grid_engine.hint = k
            assert grid_engine.in_triangle(x, y) == expected[0]
            assert grid_engine.hint == expected[0]

    def test_random_points_agree_with_brute_force(self, grid_engine):
        rng = np.random.RandomState(0)
        for x, y in rng.uniform(-0.2, 1.2, size=(200, 2)):
            hits = brute_force_hits(grid_engine, x, y)
            got = grid_engine.in_triangle(x, y)
            if hits:
                assert got in hits
            else:
                assert got is None

    def test_boundary_points_count_as_inside(self, grid_engine):
        for x, y in [(0.0, 0.0), (1.0, 1.0), (0.5, 0.0), (0.25, 0.25), (0.125, 0.5)]:
            k = grid_engine.in_triangle(x, y)
            assert k is not None
            assert grid_engine.in_triangle_test(x, y, k)

    def test_point_on_shared_edge_is_in_both_elements(self, square_mesh, square_problem):
        q = QueryEngine(square_problem, square_mesh)
        # point on the diagonal shared by both elements
        assert q.in_triangle_test(0.5, 0.5, 0) and q.in_triangle_test(0.5, 0.5, 1)

    def test_outside_returns_none_and_keeps_hint(self, grid_engine):
        grid_engine.hint = 17
        assert grid_engine.in_triangle(2.0, 2.0) is None
        assert grid_engine.hint == 17

    def test_out_of_range_hint_and_index(self, grid_engine):
        grid_engine.hint = 10_000
        assert grid_engine.in_triangle(0.01, 0.001) == 0
        assert not grid_engine.in_triangle_test(0.5, 0.5, -1)
        assert not grid_engine.in_triangle_test(0.5, 0.5, 128)

    def test_empty_mesh(self, square_problem):
        q = QueryEngine(square_problem, Mesh(np.zeros((0, 2)), []))
        assert q.in_triangle(0.5, 0.5) is None

    def test_engines_do_not_share_hints(self, grid_mesh, square_problem):
        a = QueryEngine(square_problem, grid_mesh)
        b = QueryEngine(square_problem, grid_mesh)
        k = a.in_triangle(0.9, 0.9)
        assert a.hint == k and b.hint == 0
        a.reset_hint()
        assert a.hint == 0

    def test_locate_points(self, grid_engine):
        got = grid_engine.locate_points([(0.1, 0.1), 0.9 + 0.9j, (5.0, 5.0)])
        assert got[0] is not None and got[1] is not None and got[2] is None


class TestNearestFeatures:
    def test_closest_node_matches_argmin(self, grid_mesh):
        rng = np.random.RandomState(1)
        pts = rng.uniform(0, 1, size=(30, 2))
        problem = Problem(nodes=[Node(x, y) for x, y in pts])
        q = QueryEngine(problem, grid_mesh)
        for x, y in rng.uniform(-0.5, 1.5, size=(50, 2)):
            assert q.closest_node(x, y) == int(np.argmin(np.hypot(pts[:, 0] - x, pts[:, 1] - y)))

    def test_closest_segment_matches_argmin(self, square_mesh):
        rng = np.random.RandomState(2)
        pts = rng.uniform(0, 1, size=(12, 2))
        problem = Problem(nodes=[Node(x, y) for x, y in pts])
        problem.segments = [Segment(i, i + 1) for i in range(0, 12, 2)]
        q = QueryEngine(problem, square_mesh)
        ends = [(complex(*pts[s.n0]), complex(*pts[s.n1])) for s in problem.segments]
        for x, y in rng.uniform(-0.5, 1.5, size=(100, 2)):
            d = [shortest_distance_from_segment(complex(x, y), a0, a1) for a0, a1 in ends]
            assert q.closest_segment(x, y) == int(np.argmin(d))

    def test_closest_arc_matches_argmin(self, square_mesh):
        rng = np.random.RandomState(3)
        problem = Problem()
        sweeps = [30.0, 90.0, 170.0, 200.0, 270.0, 330.0]
        for sweep in sweeps:
            x0, y0 = rng.uniform(-1, 1, size=2)
            x1, y1 = rng.uniform(-1, 1, size=2)
            problem.add_arc(problem.add_node(x0, y0), problem.add_node(x1, y1), sweep)
        q = QueryEngine(problem, square_mesh)
        for x, y in rng.uniform(-2, 2, size=(150, 2)):
            d = [shortest_distance_from_arc(complex(x, y), problem.node_xy(a.n0), problem.node_xy(a.n1), a.arc_length)
                 for a in problem.arcs]
            k = q.closest_arc_segment(x, y)
            assert k == int(np.argmin(d))
            assert q.shortest_distance_from_arc(x, y, k) == pytest.approx(min(d))

    def test_arc_distance_against_dense_sampling(self):
        a0, a1 = 1.0 + 0j, 1j
        for sweep in (90.0, 270.0):
            pts = arc_points(a0, a1, sweep, 20000)
            for p in (0.2 + 0.1j, -1.5 + 0.3j, 2.0 - 2.0j, 0.5 + 0.5j):
                brute = min(abs(p - z) for z in pts)
                assert shortest_distance_from_arc(p, a0, a1, sweep) == pytest.approx(brute, abs=1e-6)

    def test_ties_resolve_to_lowest_index(self, square_mesh, square_problem):
        q = QueryEngine(square_problem, square_mesh)
        assert q.closest_node(0.5, 0.5) == 0
        assert q.closest_segment(0.5, 0.5) == 0

    def test_empty_lists_give_none(self, square_mesh):
        q = QueryEngine(Problem(), square_mesh)
        assert q.closest_node(0.0, 0.0) is None
        assert q.closest_segment(0.0, 0.0) is None
        assert q.closest_arc_segment(0.0, 0.0) is None

    def test_closest_segment_and_arc(self, square_mesh):
        p = Problem(nodes=[Node(1, 0), Node(0, 1), Node(3, 0), Node(0, 3)])
        p.segments = [Segment(0, 2), Segment(1, 3)]
        p.arcs = [ArcSegment(0, 1, 90.0), ArcSegment(2, 3, 90.0)]
        q = QueryEngine(p, square_mesh)
        assert q.closest_segment(2.0, 0.2) == 0
        assert q.closest_segment(0.2, 2.0) == 1
        assert q.closest_arc_segment(0.8, 0.8) == 0
        assert q.closest_arc_segment(2.2, 2.2) == 1
        assert q.shortest_distance_from_arc(0.0, 0.0, 1) == pytest.approx(3.0)
        assert q.shortest_distance_from_segment(2.0, 0.5, 0) == pytest.approx(0.5)
        c, R = q.get_circle(1)
        assert abs(c) == pytest.approx(0.0, abs=1e-12) and R == pytest.approx(3.0)


class TestMeasurements:
    def test_ctr_and_area(self, square_mesh, square_problem):
        q = QueryEngine(square_problem, square_mesh)
        assert q.ctr(0) == pytest.approx(complex(2.0 / 3.0, 1.0 / 3.0))
        assert q.elm_area(0) == pytest.approx(0.5)
        assert q.elm_area(1) == pytest.approx(0.5)
        with pytest.raises(IndexError):
            q.elm_area(2)

    def test_areas_sum_to_domain(self, grid_engine):
        total = sum(grid_engine.elm_area(i) for i in range(grid_engine.mesh.n_elements))
        assert total == pytest.approx(1.0)

    @pytest.mark.parametrize("unit, scale", [(LengthUnit.METERS, 1.0), (LengthUnit.MILLIMETERS, 0.001)])
    def test_henrotte_vector_of_linear_field(self, grid_mesh, square_problem, unit, scale):
        square_problem.length_units = unit
        q = QueryEngine(square_problem, grid_mesh)
        x, y = grid_mesh.nodes[:, 0], grid_mesh.nodes[:, 1]
        u = 2.0 * x - 3.0 * y
        for k in (0, 37, 127):
            assert q.henrotte_vector(k, u) == pytest.approx(complex(-2.0, 3.0) / scale)
        grid_mesh.set_node_values(u)
        assert q.henrotte_vector(5) == pytest.approx(complex(-2.0, 3.0) / scale)

    def test_henrotte_requires_values(self, grid_engine):
        with pytest.raises(MeshStateError):
            grid_engine.henrotte_vector(0)


class TestNeighbors:
    def test_requires_adjacency(self, grid_engine):
        with pytest.raises(MeshStateError):
            grid_engine.element_neighbors(0)

    def test_neighbors(self, square_mesh, square_problem):
        build_adjacency(square_mesh)
        find_boundary_edges(square_mesh)
        q = QueryEngine(square_problem, square_mesh)
        assert q.element_neighbors(0) == [BOUNDARY, 1, BOUNDARY]
        assert q.is_boundary_edge(0, 0) and not q.is_boundary_edge(0, 1)
        with pytest.raises(IndexError):
            q.is_boundary_edge(0, 3)


class TestContour:
    def test_add_point_skips_repeats(self):
        c = Contour()
        c.add_point(0, 0)
        c.add_point(0, 0)
        c.add_point(1, 0)
        assert len(c) == 2
        assert c.as_array().tolist() == [[0.0, 0.0], [1.0, 0.0]]

    def test_bend_quarter_circle(self):
        c = Contour([(1.0, 0.0), (0.0, 1.0)])
        c.bend_contour(90.0, 10.0)
        assert len(c) == 10
        assert c.points[0] == 1.0 + 0j
        assert c.points[-1] == pytest.approx(1j)
        for p in c.points:
            assert abs(p) == pytest.approx(1.0)
        assert c.length() == pytest.approx(18.0 * math.sin(math.radians(5.0)))

    def test_negative_bend_uses_other_center(self):
        c = Contour([1.0 + 0j, 1j])
        c.bend_contour(-90.0, 45.0)
        assert len(c) == 3
        for p in c.points:
            assert abs(p - (1.0 + 1j)) == pytest.approx(1.0)
        assert c.points[-1] == pytest.approx(1j)

    def test_zero_step_means_one_degree(self):
        c = Contour([(0, 0), (1, 0)])
        c.bend_contour(30.0, 0.0)
        assert len(c) == 31

    @pytest.mark.parametrize("angle", [0.0, 181.0, -200.0])
    def test_no_op_angles(self, angle):
        c = Contour([(0, 0), (1, 0)])
        c.bend_contour(angle, 5.0)
        assert c.points == [0j, 1.0 + 0j]

    def test_single_point_is_left_alone(self):
        c = Contour([(0, 0)])
        c.bend_contour(90.0)
        assert c.points == [0j]

    def test_clear(self):
        c = Contour([(0, 0), (1, 1)])
        c.clear()
        assert len(c) == 0 and c.as_array().shape == (0, 2)
