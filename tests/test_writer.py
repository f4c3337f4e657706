"""Tests for Triangle file exchange, mesh-line files and meshio interchange."""

import numpy as np
import pytest

from mesh.core.processor import process_problem
from mesh.core.writer import (
    grey_mesh_lines,
    mesh_lines,
    read_ele_file,
    read_node_file,
    read_poly_file,
    write_diagnostics,
    write_ele_file,
    write_mesh_lines,
    write_node_file,
    write_poly_file,
)
from mesh.data import Mesh
from mesh.settings import resolve_settings
from mesh.tools.io import load_mesh, save_mesh, to_meshio


class TestPolyFile:
    def test_deterministic_and_readable(self, holed_square_problem, tmp_path):
        pslg = process_problem(holed_square_problem, resolve_settings())
        p1 = write_poly_file(pslg, str(tmp_path / "a.poly"))
        p2 = write_poly_file(process_problem(holed_square_problem, resolve_settings()), str(tmp_path / "b.poly"))
        with open(p1) as f1, open(p2) as f2:
            assert f1.read() == f2.read()

        back = read_poly_file(p1)
        np.testing.assert_array_equal(back["vertices"], pslg.vertices)
        np.testing.assert_array_equal(back["segments"], pslg.segments)
        np.testing.assert_array_equal(back["segment_markers"], pslg.segment_markers)
        np.testing.assert_array_equal(back["holes"], pslg.holes)
        np.testing.assert_array_equal(back["regions"], pslg.regions)

    def test_output_poly_without_vertices(self, tmp_path):
        path = tmp_path / "mesh.1.poly"
        path.write_text(
            "0 2 0 1\n"
            "3 1\n"
            "1 1 2 5\n"
            "2 2 3 5   # trailing comment\n"
            "3 3 1 7\n"
            "0\n"
        )
        back = read_poly_file(str(path))
        assert back["vertices"].shape == (0, 2)
        assert back["segments"].tolist() == [[0, 1], [1, 2], [2, 0]]
        assert back["segment_markers"].tolist() == [5, 5, 7]
        assert back["regions"].shape == (0, 4)


class TestNodeEleFiles:
    def test_write_then_read(self, square_mesh, tmp_path):
        node_path = write_node_file(square_mesh.nodes, str(tmp_path / "m.node"), markers=[1, 1, 2, 0])
        ele_path = write_ele_file(square_mesh.elements, str(tmp_path / "m.ele"))
        nodes, markers = read_node_file(node_path)
        tris, attrs = read_ele_file(ele_path)
        np.testing.assert_array_equal(nodes, square_mesh.nodes)
        assert markers.tolist() == [1, 1, 2, 0]
        np.testing.assert_array_equal(tris, square_mesh.element_nodes())
        assert attrs.tolist() == [0.0, 0.0]

    def test_one_based_files(self, tmp_path):
        (tmp_path / "t.node").write_text("# Triangle output\n3 2 0 0\n1 0 0\n2 1 0\n3 0 1\n")
        (tmp_path / "t.ele").write_text("1 3 0\n1 1 2 3\n")
        nodes, markers = read_node_file(str(tmp_path / "t.node"))
        tris, attrs = read_ele_file(str(tmp_path / "t.ele"))
        assert nodes.shape == (3, 2) and markers is None
        assert tris.tolist() == [[0, 1, 2]] and attrs is None

    def test_truncated_file(self, tmp_path):
        (tmp_path / "bad.node").write_text("4 2 0 0\n0 0 0\n")
        with pytest.raises(ValueError):
            read_node_file(str(tmp_path / "bad.node"))


class TestMeshLines:
    def test_split_by_region(self, square_mesh):
        assert len(mesh_lines(square_mesh)) == 0
        grey = grey_mesh_lines(square_mesh)
        assert grey.shape == (5, 2, 2)

        square_mesh.elements[0].region = 1
        assert len(mesh_lines(square_mesh)) == 3
        assert len(grey_mesh_lines(square_mesh)) == 3

    def test_write_mesh_lines(self, grid_mesh, tmp_path):
        lines = mesh_lines(grid_mesh)
        assert len(lines) == 8 * 9 * 2 + 64
        path = write_mesh_lines(lines, str(tmp_path / "g.meshlines"))
        rows = np.loadtxt(path)
        assert rows.shape == (len(lines), 4)

    def test_diagnostics(self, square_problem, tmp_path):
        square_problem.mesh_size = 0.5
        pslg = process_problem(square_problem, resolve_settings())
        m = Mesh.from_arrays(pslg.vertices[:4], [(0, 1, 2), (0, 2, 3)], regions=[1, 1])
        paths = write_diagnostics(m, pslg, str(tmp_path / "out"), "sq")
        assert sorted(paths) == ["ele", "greymeshlines", "meshlines", "node", "poly"]
        for p in paths.values():
            assert p.startswith(str(tmp_path / "out" / "sq."))
        assert (tmp_path / "out" / "sq.greymeshlines").read_text() == ""


class TestMeshio:
    def test_to_meshio(self, grid_mesh):
        mm = to_meshio(grid_mesh)
        assert mm.points.shape == (81, 3)
        assert mm.cells[0].type == "triangle"
        assert mm.cell_data["region"][0].tolist() == [1] * 128

    def test_save_and_load(self, grid_mesh, tmp_path):
        grid_mesh.set_node_values(grid_mesh.nodes[:, 0])
        path = save_mesh(grid_mesh, str(tmp_path / "grid.vtu"))
        back = load_mesh(path)
        np.testing.assert_allclose(back.nodes, grid_mesh.nodes)
        np.testing.assert_array_equal(back.element_nodes(), grid_mesh.element_nodes())
        assert back.element_regions().tolist() == [1] * 128
        np.testing.assert_allclose(back.values, grid_mesh.nodes[:, 0])
