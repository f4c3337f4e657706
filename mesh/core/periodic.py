# -*- coding: utf-8 -*-
# Fluxmesh/mesh/core/periodic.py

"""
Project: Fluxmesh
Date: 10/19/2026

Purpose:
--------
Detect and pair periodic / anti-periodic boundary entities so that both members of a
pair receive the same discretization and their boundary nodes can be put in one-to-one
correspondence for the solver.

Main Tasks:
-----------
    1. List periodic boundary names and report whether any entity uses one.
    2. Group the referencing segments/arcs into matched pairs, checking that
       lengths (segments) or sweep and radius (arcs) agree.
    3. Choose the traversal direction of the second member from the rotation or
       translation that carries one member onto the other, and zip vertex id lists
       into node pairs.

Notes:
------
- Grouping order is deterministic: boundaries in order of first reference
  (segments before arcs), members in index order.
- A periodic boundary must be referenced by exactly two entities of the same kind.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from geometry.model import BCKind, Problem
from mesh.errors import PeriodicPairingError


@dataclass(frozen=True)
class PeriodicEntityPair:
    boundary: str
    kind: str                 # "segment" | "arc"
    first: int
    second: int
    antiperiodic: bool
    reversed: bool


def periodic_boundaries(problem: Problem) -> List[str]:
    """Names of boundary properties classified periodic or anti-periodic."""
    return [name for name, prop in problem.boundaries.items() if prop.is_periodic]


def _referenced_periodic(problem: Problem) -> List[str]:
    names = set(periodic_boundaries(problem))
    seen: List[str] = []
    for ent in list(problem.segments) + list(problem.arcs):
        if ent.boundary in names and ent.boundary not in seen:
            seen.append(ent.boundary)
    return seen


def has_periodic_bc(problem: Problem) -> bool:
    """True if any segment or arc references a periodic or anti-periodic boundary."""
    return bool(_referenced_periodic(problem))


def _close(a: float, b: float, rtol: float) -> bool:
    return abs(a - b) <= rtol * max(abs(a), abs(b), 1e-300)


def _cross(u: complex, v: complex) -> float:
    return u.real * v.imag - u.imag * v.real


def _is_reversed(a0: complex, a1: complex, b0: complex, b1: complex, rtol: float) -> Optional[bool]:
    """
    Decide whether the second member runs opposite to the first.

    - Parallel, offset members are related by a translation: reversed when their
      directions are opposite.
    - Collinear members are related by a half turn about the gap between them:
      reversed when their directions agree.
    - Otherwise the rotation centre is taken where the two supporting lines meet, and
      the endpoint matching that keeps distances to it equal wins.

    Returns None when neither matching is preferred.
    """
    da, db = a1 - a0, b1 - b0
    scale = max(abs(da), abs(db), abs(b0 - a0), abs(b1 - a0))
    tol = rtol * scale

    cr = _cross(da, db)
    dot = da.real * db.real + da.imag * db.imag
    if abs(cr) <= rtol * abs(da) * abs(db):
        offset = abs(_cross(da, b0 - a0)) / abs(da)
        if offset > tol:
            return dot < 0.0
        return dot > 0.0

    x = a0 + da * (_cross(b0 - a0, db) / cr)
    ra0, ra1, rb0, rb1 = abs(a0 - x), abs(a1 - x), abs(b0 - x), abs(b1 - x)
    same = abs(ra0 - rb0) + abs(ra1 - rb1)
    flip = abs(ra0 - rb1) + abs(ra1 - rb0)
    if abs(same - flip) <= tol:
        return None
    return flip < same


def group_periodic_pairs(problem: Problem, rtol: float = 1e-6) -> List[PeriodicEntityPair]:
    """
    Group periodic entities into matched pairs.

    Parameters
    ----------
    problem : Problem
        Validated problem description.
    rtol : float, optional
        Relative tolerance for matching lengths, sweeps and radii.

    Returns
    -------
    list of PeriodicEntityPair

    Raises
    ------
    PeriodicPairingError
        If a periodic boundary is not used by exactly two entities of one kind, or the
        two entities do not have matching size.
    """
    pairs: List[PeriodicEntityPair] = []
    for name in _referenced_periodic(problem):
        members = [("segment", i) for i, s in enumerate(problem.segments) if s.boundary == name]
        members += [("arc", i) for i, a in enumerate(problem.arcs) if a.boundary == name]

        if len(members) != 2:
            raise PeriodicPairingError(
                "A periodic boundary must be assigned to exactly two entities.",
                {"boundary": name, "count": len(members)},
            )
        (k1, i1), (k2, i2) = members
        if k1 != k2:
            raise PeriodicPairingError(
                "Periodic pairs must join two segments or two arcs.",
                {"boundary": name, "kinds": (k1, k2)},
            )

        if k1 == "segment":
            e1, e2 = problem.segments[i1], problem.segments[i2]
            l1, l2 = problem.segment_length(e1), problem.segment_length(e2)
            if not _close(l1, l2, rtol):
                raise PeriodicPairingError(
                    "Periodic segments differ in length.",
                    {"boundary": name, "segments": (i1, i2), "lengths": (l1, l2)},
                )
        else:
            e1, e2 = problem.arcs[i1], problem.arcs[i2]
            _c1, r1 = problem.get_circle(e1)
            _c2, r2 = problem.get_circle(e2)
            if not (_close(e1.arc_length, e2.arc_length, rtol) and _close(r1, r2, rtol)):
                raise PeriodicPairingError(
                    "Periodic arcs differ in sweep or radius.",
                    {"boundary": name, "arcs": (i1, i2), "sweeps": (e1.arc_length, e2.arc_length)},
                )

        a0, a1 = problem.node_xy(e1.n0), problem.node_xy(e1.n1)
        b0, b1 = problem.node_xy(e2.n0), problem.node_xy(e2.n1)
        rev = _is_reversed(a0, a1, b0, b1, rtol)
        if rev is None:
            raise PeriodicPairingError(
                "Cannot tell which ends of the periodic pair correspond.",
                {"boundary": name, k1 + "s": (i1, i2)},
            )

        pairs.append(PeriodicEntityPair(
            boundary=name,
            kind=k1,
            first=i1,
            second=i2,
            antiperiodic=problem.boundary_kind(name) == BCKind.ANTIPERIODIC,
            reversed=rev,
        ))
    return pairs


def pair_vertices(first_ids: Sequence[int], second_ids: Sequence[int],
                  reverse: bool) -> List[Tuple[int, int]]:
    """
    Zip the vertex ids of two paired entities into (first, second) node pairs.

    Raises
    ------
    PeriodicPairingError
        If the two entities carry a different number of vertices.
    """
    if len(first_ids) != len(second_ids):
        raise PeriodicPairingError(
            "Paired periodic entities carry different vertex counts.",
            {"first": len(first_ids), "second": len(second_ids)},
        )
    second = list(second_ids)[::-1] if reverse else list(second_ids)
    return list(zip(first_ids, second))
