"""Closest-candidate search used to pick curves and their points."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from vectorportal.core.curve import Curve
from vectorportal.core.geometry import Point


@dataclass(frozen=True)
class Hit:
    key: int
    position: Point
    distance: float


def closest(
    position: Point,
    candidates: Iterable[tuple[int, Point]],
    max_distance: float | None = None,
) -> Hit | None:
    """
    Return the candidate nearest to *position*.

    Candidates are ``(key, reference position)`` pairs. When two candidates
    are equally close the one seen first wins. Candidates farther away than
    *max_distance* are ignored; ``None`` accepts any distance.
    """

    best: Hit | None = None
    for key, candidate in candidates:
        distance = position.distance_to(candidate)
        if max_distance is not None and distance > max_distance:
            continue
        if best is None or distance < best.distance:
            best = Hit(key, candidate, distance)
    return best


def hit_curve(
    position: Point,
    curves: Iterable[Curve],
    max_distance: float | None = None,
) -> Hit | None:
    """Pick a curve by its reference point; the hit key is the curve id."""

    return closest(
        position,
        ((curve.id, curve.reference_point()) for curve in curves),
        max_distance,
    )


def hit_point(
    position: Point,
    curve: Curve,
    max_distance: float | None = None,
) -> Hit | None:
    """Pick one of *curve*'s points; the hit key is the point index.

    The drag handle is offered last, at :attr:`Curve.handle_index`, so a
    defining point that sits exactly on the handle still wins.
    """

    candidates = list(enumerate(curve.points))
    candidates.append((curve.handle_index, curve.handle_point()))
    return closest(position, candidates, max_distance)
