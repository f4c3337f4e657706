# -*- coding: utf-8 -*-
# Fluxmesh/geometry/kernels.py

"""
Project: Fluxmesh
Date: 10/19/2026

Purpose:
--------
Lightweight planar predicates used by input validation and element construction.
Numpy-only routines operating in the XY plane.

Main Tasks:
-----------
   - Orientation and signed triangle area.
   - Segment intersection with collinear-overlap handling (touching counts).

Notes:
------
   - Inputs may be array-likes of length >= 2 or complex numbers; only X,Y are used.
   - Tolerances (`eps`) are absolute on the orientation determinant.
"""

from typing import Union
import numpy as np

PointLike = Union[complex, np.ndarray, tuple, list]


def _xy(a: PointLike) -> np.ndarray:
    """
    Return `a` as a length-2 float array. Complex numbers map to (real, imag).
    """
    if isinstance(a, complex):
        return np.array([a.real, a.imag])
    return np.asarray(a, dtype=float)[:2]


def orient(a: PointLike, b: PointLike, c: PointLike) -> float:
    """
    Twice the signed area of ABC (> 0 when A, B, C turn counter-clockwise).
    """
    ax, ay = _xy(a)
    bx, by = _xy(b)
    cx, cy = _xy(c)
    return float((bx - ax) * (cy - ay) - (by - ay) * (cx - ax))


def signed_area_tri(a: PointLike, b: PointLike, c: PointLike) -> float:
    """
    Signed area of triangle ABC in XY (CCW > 0).
    """
    return 0.5 * orient(a, b, c)


def segments_intersect(p: PointLike, q: PointLike, r: PointLike, s: PointLike, eps: float = 1e-12) -> bool:
    """
    Test whether the closed segments [p, q] and [r, s] share at least one point.

    Parameters
    ----------
    p, q, r, s : PointLike
        Segment endpoints.
    eps : float
        Absolute tolerance on the orientation determinants; 0 gives an exact test.

    Returns
    -------
    bool
        True for a proper crossing, a T-junction or a collinear overlap.
    """
    p, q, r, s = (_xy(v) for v in (p, q, r, s))
    d_r, d_s = orient(p, q, r), orient(p, q, s)
    d_p, d_q = orient(r, s, p), orient(r, s, q)

    if d_r * d_s < -eps and d_p * d_q < -eps:
        return True

    # an endpoint lying on the other segment's supporting line
    for d, (u, v), w in ((d_r, (p, q), r), (d_s, (p, q), s), (d_p, (r, s), p), (d_q, (r, s), q)):
        if abs(d) > eps:
            continue
        lo = np.minimum(u, v) - eps
        hi = np.maximum(u, v) + eps
        if np.all(lo <= w) and np.all(w <= hi):
            return True
    return False

