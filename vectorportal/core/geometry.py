"""Canvas-space points and the small amount of vector math the editor needs."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from PySide6.QtCore import QPoint, QPointF


@dataclass(frozen=True)
class Point:
    """An immutable ``(x, y)`` coordinate in canvas space."""

    x: float
    y: float

    @classmethod
    def from_qt(cls, point: QPoint | QPointF) -> "Point":
        return cls(float(point.x()), float(point.y()))

    def to_qpointf(self) -> QPointF:
        return QPointF(self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def translated(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def rotated_about(self, center: "Point", degrees: float) -> "Point":
        """Return this point rotated by *degrees* around *center*.

        Canvas coordinates grow downwards, so a positive angle turns
        clockwise on screen.
        """

        radians = math.radians(degrees)
        cos_a = math.cos(radians)
        sin_a = math.sin(radians)
        dx = self.x - center.x
        dy = self.y - center.y
        return Point(
            center.x + dx * cos_a - dy * sin_a,
            center.y + dx * sin_a + dy * cos_a,
        )


def midpoint(a: Point, b: Point) -> Point:
    return Point((a.x + b.x) / 2.0, (a.y + b.y) / 2.0)


def centroid(points: Iterable[Point]) -> Point:
    points = list(points)
    if not points:
        raise ValueError("centroid of an empty point sequence")
    count = len(points)
    return Point(
        sum(p.x for p in points) / count,
        sum(p.y for p in points) / count,
    )


def normalize_angle(degrees: float) -> float:
    """Fold *degrees* into ``[0, 360)``."""

    angle = math.fmod(degrees, 360.0)
    if angle < 0.0:
        angle += 360.0
    # fmod of a tiny negative value can round up to exactly 360.0
    if angle >= 360.0:
        angle = 0.0
    return angle


def regular_polygon_vertices(center: Point, first_vertex: Point, sides: int) -> list[Point]:
    """Vertices of a regular polygon around *center* starting at *first_vertex*."""

    step = 360.0 / sides
    return [first_vertex.rotated_about(center, step * i) for i in range(sides)]
