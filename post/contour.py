# -*- coding: utf-8 -*-
# Fluxmesh/post/contour.py

"""
Project: Fluxmesh
Date: 10/19/2026

Purpose:
--------
Open polyline used for line integrals and field plots along a user-defined path. The
path grows point by point, and its last straight piece can be replaced by a circular
arc approximated with short chords ("bending").

Main Tasks:
-----------
    1. Append points, skipping exact repeats of the last point.
    2. Bend the last segment into an arc through a signed angle.
    3. Export as an (n,2) array and measure the polyline length.
"""

import cmath
import math
from typing import List

import numpy as np


class Contour:
    def __init__(self, points=None):
        self.points: List[complex] = []
        for p in points or []:
            if isinstance(p, complex):
                self.add_point(p.real, p.imag)
            else:
                self.add_point(p[0], p[1])

    def __len__(self) -> int:
        return len(self.points)

    def add_point(self, x: float, y: float) -> None:
        z = complex(x, y)
        if self.points and self.points[-1] == z:
            return
        self.points.append(z)

    def clear(self) -> None:
        self.points = []

    def bend_contour(self, angle: float, anglestep: float = 1.0) -> None:
        """
        Replace the last segment with an arc sweeping `angle` degrees.

        The arc keeps both endpoints and is split into ceil(|angle / anglestep|)
        chords; positive angles bend counter-clockwise. Nothing happens when the
        angle is zero, exceeds 180 degrees in magnitude, or the contour has fewer
        than two points. A zero step is treated as one degree.
        """
        if angle == 0 or len(self.points) < 2 or abs(angle) > 180:
            return
        if anglestep == 0:
            anglestep = 1.0

        n = int(math.ceil(abs(angle / anglestep)))
        tta = math.radians(angle)
        dtta = tta / n

        a1 = self.points.pop()
        a0 = self.points[-1]
        d = abs(a1 - a0)
        R = d / (2.0 * abs(math.sin(tta / 2.0)))

        if tta > 0:
            c = a0 + (R / d) * (a1 - a0) * cmath.exp(1j * (math.pi - tta) / 2.0)
        else:
            c = a0 + (R / d) * (a1 - a0) * cmath.exp(-1j * (math.pi + tta) / 2.0)

        for k in range(1, n + 1):
            self.points.append(c + (a0 - c) * cmath.exp(1j * k * dtta))

    def as_array(self) -> np.ndarray:
        if not self.points:
            return np.zeros((0, 2))
        return np.array([[p.real, p.imag] for p in self.points], dtype=float)

    def length(self) -> float:
        return float(sum(abs(b - a) for a, b in zip(self.points[:-1], self.points[1:])))
