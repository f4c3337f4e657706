# -*- coding: utf-8 -*-
# Fluxmesh/mesh/settings.py

"""
Project: Fluxmesh
Date: 10/19/2026

Purpose:
--------
Mesher configuration: documented defaults plus a right-biased deep merge of user
overrides, validated up front so the driver never runs with a half-usable config.

Main Tasks
----------
   - Provide defaults (`DEFAULTS`) for sizing fractions, quality and back-end choice.
   - Merge overrides without mutating inputs (`resolve_settings`).
   - Reject unknown keys and out-of-range values early.
"""

from typing import Dict, Any, Optional
import copy


# -------------------------
# Defaults (policy)
# -------------------------
DEFAULTS: Dict[str, Any] = {
    # default mesh size = bounding-box diagonal / bounding_box_fraction
    "bounding_box_fraction": 100.0,
    # shortest subdivision allowed along input segments = diagonal / line_fraction
    "line_fraction": 500.0,
    "min_angle": 30.0,              # Triangle 'q' bound in degrees; None disables
    "coincident_tol": 1e-10,        # relative to the bounding-box diagonal
    "periodic_length_rtol": 1e-6,
    "backend": "triangle",          # "triangle" | "triangle-cli"
    "triangle_bin": None,
    "build_adjacency": True,
    "output_dir": None,             # write .poly/.node/.ele/.meshlines when set
    "basename": "mesh",
    "verbose": False,
}

BACKENDS = ("triangle", "triangle-cli")


def _deep_merge(base: Dict[str, Any], upd: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Deep-merge two nested dicts (right-biased), preserving types and not mutating inputs.
    """
    if not upd:
        return copy.deepcopy(base)
    out = copy.deepcopy(base)
    for k, v in upd.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = copy.deepcopy(v)
    return out


def resolve_settings(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Merge `overrides` over `DEFAULTS` and validate the result.

    Parameters
    ----------
    overrides : dict, optional
        Same keys as `DEFAULTS`.

    Returns
    -------
    dict
        A fresh settings dictionary.

    Raises
    ------
    ValueError
        On unknown keys, non-positive fractions/tolerances, an unknown back-end,
        or a quality angle outside (0, 35].
    """
    unknown = sorted(set(overrides or {}) - set(DEFAULTS))
    if unknown:
        raise ValueError("Unknown mesher setting(s): {}".format(", ".join(unknown)))

    cfg = _deep_merge(DEFAULTS, overrides)

    for k in ("bounding_box_fraction", "line_fraction", "coincident_tol", "periodic_length_rtol"):
        v = float(cfg[k])
        if not (v > 0.0):
            raise ValueError("settings['{}'] must be > 0 (got {}).".format(k, v))
        cfg[k] = v

    if cfg["min_angle"] is not None:
        a = float(cfg["min_angle"])
        # Triangle does not terminate reliably above ~34 degrees
        if not (0.0 < a <= 35.0):
            raise ValueError("settings['min_angle'] must lie in (0, 35] (got {}).".format(a))
        cfg["min_angle"] = a

    if cfg["backend"] not in BACKENDS:
        raise ValueError("settings['backend'] must be one of {} (got '{}').".format(BACKENDS, cfg["backend"]))

    return cfg
