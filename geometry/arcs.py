# -*- coding: utf-8 -*-
# Fluxmesh/geometry/arcs.py

"""
Project: Fluxmesh
Date: 10/19/2026

Purpose:
--------
Arc and segment geometry shared by the mesher and the post-processor. Arcs are stored
as two endpoints plus a swept angle in degrees; this module recovers the underlying
circle and measures shortest distances from arbitrary points to arcs and segments.

Main Tasks:
-----------
    1. `get_circle`: center and radius of the circle carrying an arc.
    2. `shortest_distance_from_arc` / `shortest_distance_from_segment`.
    3. `arc_points` / `segment_points`: even discretization used to build the PSLG.

Notes:
------
- Points are Python complex numbers (x + iy).
- Arcs run counter-clockwise from endpoint 0 to endpoint 1 around their center.
- Degenerate arcs (coincident endpoints, sweep <= 0 or >= 360) raise ValueError;
  problem validation rejects them before meshing.
"""

from typing import List, Tuple
import cmath
import math

__all__ = [
    "get_circle",
    "shortest_distance_from_arc",
    "shortest_distance_from_segment",
    "arc_points",
    "segment_points",
]


def get_circle(a0: complex, a1: complex, sweep_deg: float) -> Tuple[complex, float]:
    """
    Fit the circle that carries the arc from `a0` to `a1` with the given sweep.

    The radius follows from the chord `d` and the swept angle `tta` as
    R = d / (2 sin(tta/2)); the center sits at a0 + (d/2 + i h) t where `t` is the
    unit chord direction and h = sqrt(R^2 - d^2/4). For sweeps beyond 180 degrees
    the center lies on the right of the chord, so `h` changes sign.

    Parameters
    ----------
    a0, a1 : complex
        Arc endpoints.
    sweep_deg : float
        Swept angle in degrees, 0 < sweep_deg < 360.

    Returns
    -------
    (complex, float)
        Center and radius.

    Raises
    ------
    ValueError
        For coincident endpoints or a sweep outside (0, 360).
    """
    d = abs(a1 - a0)
    if d == 0.0:
        raise ValueError("Arc endpoints coincide; circle is undefined.")
    if not (0.0 < sweep_deg < 360.0):
        raise ValueError("Arc sweep must lie in (0, 360) degrees (got {}).".format(sweep_deg))

    t = (a1 - a0) / d
    tta = math.radians(sweep_deg)
    R = d / (2.0 * math.sin(tta / 2.0))

    # clamp tiny negative round-off at sweep == 180
    h = math.sqrt(max(R * R - d * d / 4.0, 0.0))
    if sweep_deg > 180.0:
        h = -h

    c = a0 + complex(d / 2.0, h) * t
    return c, R


def shortest_distance_from_arc(p: complex, a0: complex, a1: complex, sweep_deg: float) -> float:
    """
    Shortest distance from point `p` to the arc (a0 -> a1, sweep_deg).

    If the radial projection of `p` falls inside the arc's angular range, the distance
    is | |p - c| - R |; otherwise it is the distance to the nearer endpoint. A point at
    the center is exactly R away.
    """
    c, R = get_circle(a0, a1, sweep_deg)
    d = abs(p - c)
    if d == 0.0:
        return R

    t = (p - c) / d
    l = abs(p - c - R * t)

    # angular offset of p from a0, counter-clockwise, in [0, 360)
    z = math.degrees(cmath.phase(t / (a0 - c)))
    if z < 0.0:
        z += 360.0
    if 0.0 <= z <= sweep_deg:
        return l

    z = abs(p - a0)
    l = abs(p - a1)
    return z if z < l else l


def shortest_distance_from_segment(p: complex, a0: complex, a1: complex) -> float:
    """
    Distance from `p` to the segment [a0, a1], clamping the projection to the segment.
    """
    dx = a1 - a0
    den = dx.real * dx.real + dx.imag * dx.imag
    if den == 0.0:
        return abs(p - a0)

    t = ((p.real - a0.real) * dx.real + (p.imag - a0.imag) * dx.imag) / den
    if t > 1.0:
        t = 1.0
    if t < 0.0:
        t = 0.0

    return abs(p - (a0 + t * dx))


def arc_points(a0: complex, a1: complex, sweep_deg: float, n: int) -> List[complex]:
    """
    Return n+1 points along the arc, evenly spaced by angle, from a0 to a1 inclusive.
    """
    if n < 1:
        raise ValueError("n must be >= 1 (got {}).".format(n))
    c, _R = get_circle(a0, a1, sweep_deg)
    dtta = math.radians(sweep_deg) / n
    pts = [a0]
    for k in range(1, n):
        pts.append(c + (a0 - c) * cmath.exp(1j * k * dtta))
    pts.append(a1)
    return pts


def segment_points(a0: complex, a1: complex, n: int) -> List[complex]:
    """
    Return n+1 evenly spaced points from a0 to a1 inclusive.
    """
    if n < 1:
        raise ValueError("n must be >= 1 (got {}).".format(n))
    pts = [a0]
    for k in range(1, n):
        pts.append(a0 + (a1 - a0) * (k / n))
    pts.append(a1)
    return pts
