# -*- coding: utf-8 -*-
# Fluxmesh/post/plot_mesh.py

"""
Project: Fluxmesh
Date: 10/19/2026

Purpose
-------
Quick visualization of a generated mesh with matplotlib: mesh lines over labeled
regions, grey mesh lines over unlabeled ones, and an optional contour overlay.

Main Tasks
----------
    1) Select a headless-safe backend when no display is available.
    2) Draw both line sets with a single LineCollection each.
    3) Save and/or show the figure.
"""

import os


def _get_pyplot():
    """
    Import matplotlib.pyplot with a headless-safe backend if needed.

    Returns
    -------
    module
        The matplotlib.pyplot module.
    """
    import matplotlib
    # Agg when DISPLAY is not set to avoid GUI backend errors in headless/CI.
    if not os.environ.get("DISPLAY"):
        matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    return plt


def plot_mesh(mesh, show=True, save_path=None, contour=None, *, linewidth=0.3):
    """
    Plot a mesh as wireframe.

    Parameters
    ----------
    mesh : Mesh
        Mesh arena.
    show : bool, optional
        Whether to display the figure (ignored on a non-GUI backend). Default True.
    save_path : str, optional
        If given, save the figure (PNG) to this path.
    contour : Contour, optional
        Polyline drawn on top in red.
    linewidth : float, optional
        Line width for element edges. Default 0.3.

    Returns
    -------
    matplotlib.figure.Figure
        The figure (closed unless shown interactively).
    """
    from matplotlib.collections import LineCollection
    from mesh.core.writer import grey_mesh_lines, mesh_lines

    plt = _get_pyplot()

    fig = plt.figure(figsize=(8, 8))
    ax = fig.add_subplot(111)

    lines = mesh_lines(mesh)
    grey = grey_mesh_lines(mesh)
    if len(grey):
        ax.add_collection(LineCollection(grey, colors="0.6", linewidths=linewidth))
    if len(lines):
        ax.add_collection(LineCollection(lines, colors="k", linewidths=linewidth))

    if contour is not None and len(contour):
        pts = contour.as_array()
        ax.plot(pts[:, 0], pts[:, 1], "r-", linewidth=1.0)

    xmin, xmax, ymin, ymax = mesh.bbox
    pad = 0.02 * max(xmax - xmin, ymax - ymin, 1e-12)
    ax.set_xlim(xmin - pad, xmax + pad)
    ax.set_ylim(ymin - pad, ymax + pad)
    ax.set_aspect("equal", adjustable="box")
    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    ax.set_title("Mesh ({} nodes, {} elements)".format(mesh.n_nodes, mesh.n_elements))

    if save_path:
        fig.savefig(save_path, dpi=300, bbox_inches="tight")
        print("Mesh plot saved to:", save_path)

    backend = plt.get_backend().lower()
    if show and not backend.startswith("agg"):
        plt.show()
    else:
        plt.close(fig)
    return fig
