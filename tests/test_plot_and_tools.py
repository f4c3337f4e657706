"""Tests for mesh plotting and executable lookup."""

import os
import stat

import pytest

from mesh.errors import TriangulationError
from mesh.core.generators import TriangleCliGenerator
from post.contour import Contour
from post.plot_mesh import plot_mesh


class TestPlotMesh:
    def test_saves_png(self, grid_mesh, tmp_path):
        out = tmp_path / "plots" / "grid.png"
        fig = plot_mesh(grid_mesh, show=False, save_path=str(out))
        assert out.exists() and out.stat().st_size > 0
        assert len(fig.axes[0].collections) >= 1

    def test_contour_overlay(self, square_mesh, tmp_path):
        c = Contour([(0, 0), (1, 1)])
        fig = plot_mesh(square_mesh, show=False, save_path=str(tmp_path / "sq.png"), contour=c)
        assert len(fig.axes[0].lines) == 1


def _fake_exe(path):
    path.write_text("#!/bin/sh\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR)
    return path


class TestExecutableLookup:
    def test_env_override(self, tmp_path, monkeypatch):
        exe = _fake_exe(tmp_path / "fake-triangle")
        monkeypatch.setenv("TRIANGLE_BIN", '"{}"'.format(exe))
        assert TriangleCliGenerator().locate_executable({}) == os.path.abspath(str(exe))

    def test_settings_before_env(self, tmp_path, monkeypatch):
        from_env = _fake_exe(tmp_path / "env-triangle")
        from_cfg = _fake_exe(tmp_path / "cfg-triangle")
        monkeypatch.setenv("TRIANGLE_BIN", str(from_env))
        got = TriangleCliGenerator().locate_executable({"triangle_bin": str(from_cfg)})
        assert got == os.path.abspath(str(from_cfg))

    def test_argument_before_settings(self, tmp_path):
        arg = _fake_exe(tmp_path / "arg-triangle")
        cfg = _fake_exe(tmp_path / "cfg-triangle")
        gen = TriangleCliGenerator(triangle_bin=str(arg))
        assert gen.locate_executable({"triangle_bin": str(cfg)}) == os.path.abspath(str(arg))

    def test_bad_explicit_path(self, tmp_path):
        with pytest.raises(TriangulationError, match="not runnable") as exc:
            TriangleCliGenerator().locate_executable({"triangle_bin": str(tmp_path / "absent")})
        assert exc.value.context["path"] == str(tmp_path / "absent")

    def test_missing(self, monkeypatch):
        monkeypatch.delenv("TRIANGLE_BIN", raising=False)
        monkeypatch.setenv("PATH", "")
        with pytest.raises(TriangulationError) as exc:
            TriangleCliGenerator().locate_executable({"triangle_bin": None})
        assert "TRIANGLE_BIN" in str(exc.value)
