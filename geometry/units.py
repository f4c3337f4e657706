# -*- coding: utf-8 -*-
# Fluxmesh/geometry/units.py

"""
Project: Fluxmesh
Date: 10/19/2026

Purpose:
--------
Fixed length-unit table used to convert problem coordinates to meters. The table is
read-only and process-wide; post-processing quantities (gradients, forces) divide by
the meters-per-unit factor of the problem's chosen unit.

Main Tasks:
-----------
    1. Enumerate the supported drawing units (`LengthUnit`).
    2. Provide the meters-per-unit scale factors (`LENGTH_CONV`).
    3. Resolve a unit given as enum, integer code or name (`length_conversion`).
"""

from enum import IntEnum
from typing import Union

__all__ = ["LengthUnit", "LENGTH_CONV", "length_conversion", "as_length_unit"]


class LengthUnit(IntEnum):
    INCHES = 0
    MILLIMETERS = 1
    CENTIMETERS = 2
    METERS = 3
    MILS = 4
    MICROMETERS = 5


# meters per unit, indexed by LengthUnit
LENGTH_CONV = (
    0.0254,    # inches
    0.001,     # millimeters
    0.01,      # centimeters
    1.0,       # meters
    2.54e-05,  # mils
    1.0e-06,   # micrometers
)

_ALIASES = {
    "in": LengthUnit.INCHES,
    "inch": LengthUnit.INCHES,
    "inches": LengthUnit.INCHES,
    "mm": LengthUnit.MILLIMETERS,
    "millimeter": LengthUnit.MILLIMETERS,
    "millimeters": LengthUnit.MILLIMETERS,
    "cm": LengthUnit.CENTIMETERS,
    "centimeter": LengthUnit.CENTIMETERS,
    "centimeters": LengthUnit.CENTIMETERS,
    "m": LengthUnit.METERS,
    "meter": LengthUnit.METERS,
    "meters": LengthUnit.METERS,
    "mil": LengthUnit.MILS,
    "mils": LengthUnit.MILS,
    "um": LengthUnit.MICROMETERS,
    "micrometer": LengthUnit.MICROMETERS,
    "micrometers": LengthUnit.MICROMETERS,
}


def as_length_unit(unit: Union[LengthUnit, int, str]) -> LengthUnit:
    """
    Normalize a unit given as `LengthUnit`, integer code or (case-insensitive) name.

    Raises
    ------
    ValueError
        If the unit is not one of the six supported units.
    """
    if isinstance(unit, LengthUnit):
        return unit
    if isinstance(unit, str):
        key = unit.strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
        raise ValueError("Unknown length unit '{}'.".format(unit))
    try:
        return LengthUnit(int(unit))
    except (TypeError, ValueError):
        raise ValueError("Unknown length unit code {!r}.".format(unit))


def length_conversion(unit: Union[LengthUnit, int, str]) -> float:
    """Meters per unit for `unit`."""
    return LENGTH_CONV[int(as_length_unit(unit))]
