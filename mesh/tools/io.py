# -*- coding: utf-8 -*-
# Fluxmesh/mesh/tools/io.py

"""
Project: Fluxmesh
Date: 10/19/2026

Purpose:
--------
Mesh interchange through `meshio`: export the arena (triangles, region attribute,
nodal solution values) to any meshio-supported format and load it back.

Main Tasks:
-----------
    1) `to_meshio`: arena -> `meshio.Mesh` (points padded to 3-D).
    2) `save_mesh` / `load_mesh`: file round trip keyed by extension.

Notes:
------
- Region attribute is stored as cell data "region"; nodal values as point data "values".
- Loaded meshes have no adjacency; run `mesh.stats.topology` again if needed.
"""

import numpy as np
import meshio

from mesh.data import Mesh


def to_meshio(m: Mesh) -> meshio.Mesh:
    pts = np.zeros((m.n_nodes, 3))
    pts[:, :2] = m.nodes
    point_data = {}
    if m.values is not None:
        point_data["values"] = np.asarray(m.values, dtype=float)
    return meshio.Mesh(
        points=pts,
        cells=[("triangle", m.element_nodes())],
        cell_data={"region": [m.element_regions()]},
        point_data=point_data,
    )


def save_mesh(m: Mesh, path: str) -> str:
    """
    Write `m` with meshio; the format follows the file extension.

    Returns
    -------
    str
        The path that was written.
    """
    meshio.write(path, to_meshio(m))
    return path


def load_mesh(path: str) -> Mesh:
    """
    Read a triangle mesh with meshio.

    Raises
    ------
    ValueError
        If the file holds no triangle cells.
    """
    mm = meshio.read(path)
    pts = np.asarray(mm.points, dtype=float)[:, :2]

    tris = None
    for cb in mm.cells:
        if getattr(cb, "type", None) == "triangle":
            tris = np.asarray(cb.data, dtype=int)
            break
    if tris is None:
        raise ValueError("No triangle cells in '{}'.".format(path))

    regions = None
    cd = getattr(mm, "cell_data_dict", None) or {}
    if "region" in cd and "triangle" in cd["region"]:
        regions = np.asarray(cd["region"]["triangle"]).astype(int).reshape(-1)

    values = None
    if "values" in (mm.point_data or {}):
        values = np.asarray(mm.point_data["values"], dtype=float).reshape(-1)

    return Mesh.from_arrays(pts, tris, regions, values=values)
