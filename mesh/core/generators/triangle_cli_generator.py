# -*- coding: utf-8 -*-
# Fluxmesh/mesh/core/generators/triangle_cli_generator.py

"""
Project: Fluxmesh
Date: 10/19/2026

Purpose:
--------
Alternative back-end that drives the stand-alone `triangle` executable through files:
the PSLG is written as a `.poly`, Triangle is run as a subprocess, and the `.1.node`,
`.1.ele` and `.1.poly` results are read back.

Main Tasks:
-----------
    1. Locate the executable (explicit path, settings, TRIANGLE_BIN, or PATH).
    2. Write `<basename>.poly` into the output directory (or a temporary one).
    3. Run Triangle with the shared switches plus zero-based indexing.
    4. Report failures with command, stdout and stderr attached.

Notes:
------
- Temporary directories are removed after reading unless `output_dir` is set.
"""

import logging
import os
import shutil
import subprocess
import tempfile
from typing import Any, Dict, List

from mesh.errors import TriangulationError
from ..base import MeshGenerator
from ..processor import PSLG
from ..writer import read_ele_file, read_node_file, read_poly_file, write_poly_file

logger = logging.getLogger(__name__)


class TriangleCliGenerator(MeshGenerator):
    """
    External `triangle` executable back-end.

    Parameters
    ----------
    triangle_bin : str, optional
        Explicit executable path; overrides `settings["triangle_bin"]`.
    """

    name = "triangle-cli"

    def __init__(self, triangle_bin=None):
        self.triangle_bin = triangle_bin

    def locate_executable(self, settings: Dict[str, Any]) -> str:
        """
        Resolve the `triangle` executable.

        Lookup order: the constructor argument, `settings["triangle_bin"]`, the
        TRIANGLE_BIN environment variable, then PATH. Explicit paths must name an
        executable file; surrounding quotes are ignored.

        Raises
        ------
        TriangulationError
            If no usable executable is found.
        """
        explicit = [
            ("triangle_bin argument", self.triangle_bin),
            ("settings['triangle_bin']", settings.get("triangle_bin")),
            ("TRIANGLE_BIN", os.environ.get("TRIANGLE_BIN")),
        ]
        for source, value in explicit:
            if not value:
                continue
            path = str(value).strip().strip('"').strip("'")
            if os.path.isfile(path) and os.access(path, os.X_OK):
                return os.path.abspath(path)
            raise TriangulationError("Triangle executable from {} is not runnable.".format(source),
                                     {"path": path})

        exe = shutil.which("triangle") or shutil.which("triangle.exe")
        if exe is None:
            raise TriangulationError(
                "'triangle' not found on PATH. Install it or set TRIANGLE_BIN to its full path.",
                {"executable": "triangle"},
            )
        return os.path.abspath(exe)

    def _run(self, workdir: str, pslg: PSLG, settings: Dict[str, Any], min_angle=None) -> Dict[str, Any]:
        exe = self.locate_executable(settings)
        base = os.path.join(workdir, settings.get("basename") or "mesh")
        poly_path = write_poly_file(pslg, base + ".poly")

        opts = "z" + self.options(pslg, settings, min_angle)
        if not settings.get("verbose"):
            opts += "Q"
        cmd: List[str] = [exe, "-" + opts, poly_path]
        logger.debug("[TriangleCliGenerator.triangulate] %s", " ".join(cmd))

        proc = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, universal_newlines=True)
        if proc.returncode != 0:
            msg = (
                "Triangle failed (code {}):\n"
                "CMD: {}\n"
                "STDOUT:\n{}\n"
                "STDERR:\n{}"
            ).format(proc.returncode, " ".join(cmd), proc.stdout, proc.stderr)
            raise TriangulationError(msg, {"returncode": proc.returncode})

        node_path, ele_path = base + ".1.node", base + ".1.ele"
        for path in (node_path, ele_path):
            if not os.path.exists(path):
                raise TriangulationError(
                    "Triangle reported success but an output file is missing.",
                    {"path": path, "stdout": proc.stdout},
                )

        vertices, vmarks = read_node_file(node_path)
        tris, attrs = read_ele_file(ele_path)
        if len(tris) == 0:
            raise TriangulationError("Triangle produced no elements.", {"switches": opts})

        out: Dict[str, Any] = {"vertices": vertices, "triangles": tris, "switches": opts}
        if attrs is not None:
            out["triangle_attributes"] = attrs
        if vmarks is not None:
            out["vertex_markers"] = vmarks
        if os.path.exists(base + ".1.poly"):
            seg = read_poly_file(base + ".1.poly")
            out["segments"] = seg["segments"]
            out["segment_markers"] = seg["segment_markers"]
        return out

    def triangulate(self, pslg: PSLG, settings: Dict[str, Any], min_angle=None) -> Dict[str, Any]:
        out_dir = settings.get("output_dir")
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
            return self._run(out_dir, pslg, settings, min_angle)
        with tempfile.TemporaryDirectory(prefix="fluxmesh_") as tmp:
            return self._run(tmp, pslg, settings, min_angle)
