"""Finished curves, the geometry kinds they come in and their live previews."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable

from PySide6.QtGui import QColor

from vectorportal.core.errors import CurveError
from vectorportal.core.geometry import (
    Point,
    centroid,
    midpoint,
    normalize_angle,
    regular_polygon_vertices,
)


DEFAULT_WIDTH = 2.0
MIN_POLYLINE_SIDES = 2
MIN_POLYGON_SIDES = 3


class GeometryKind(Enum):
    ARC = "Arc"
    BEZIER = "Bezier"
    CIRCLE = "Circle"
    ELLIPSE = "Ellipse"
    LINE = "Line"
    POLYLINE = "PolyLine"
    POLYGON = "Polygon"
    RIGHT_TRIANGLE = "RightTriangle"
    TEXT = "Text"
    FREEHAND = "FreeHand"

    @property
    def uses_side_count(self) -> bool:
        return self in (GeometryKind.POLYLINE, GeometryKind.POLYGON)


_FIXED_POINT_COUNTS = {
    GeometryKind.ARC: 3,
    GeometryKind.BEZIER: 3,
    GeometryKind.CIRCLE: 2,
    GeometryKind.ELLIPSE: 2,
    GeometryKind.LINE: 2,
    GeometryKind.POLYGON: 2,
    GeometryKind.RIGHT_TRIANGLE: 3,
    GeometryKind.TEXT: 1,
}


def minimum_side_count(kind: GeometryKind) -> int:
    if kind is GeometryKind.POLYGON:
        return MIN_POLYGON_SIDES
    return MIN_POLYLINE_SIDES


def required_points(kind: GeometryKind, side_count: int | None = None) -> int | None:
    """Return how many defining points a finished curve of *kind* carries.

    ``None`` means the count is unbounded (free-hand strokes). PolyLine takes
    one point per configured side; every other kind has a fixed count.
    """

    if kind is GeometryKind.FREEHAND:
        return None
    if kind is GeometryKind.POLYLINE:
        return side_count
    return _FIXED_POINT_COUNTS[kind]


@dataclass(frozen=True)
class Curve:
    """A finished, renderable primitive owned by the curve store."""

    id: int
    kind: GeometryKind
    points: tuple[Point, ...]
    color: QColor = field(default_factory=lambda: QColor("white"))
    width: float = DEFAULT_WIDTH
    rotation: float = 0.0
    side_count: int | None = None
    content: str = ""

    def __post_init__(self):
        object.__setattr__(self, "points", tuple(self.points))
        object.__setattr__(self, "color", QColor(self.color))
        object.__setattr__(self, "width", float(self.width))
        object.__setattr__(self, "rotation", normalize_angle(float(self.rotation)))
        if not self.kind.uses_side_count:
            object.__setattr__(self, "side_count", None)
        if self.kind is not GeometryKind.TEXT:
            object.__setattr__(self, "content", "")
        self._validate()

    def _validate(self):
        if self.kind.uses_side_count:
            minimum = minimum_side_count(self.kind)
            if self.side_count is None or self.side_count < minimum:
                raise CurveError(
                    f"{self.kind.value} needs a side count of at least {minimum}, "
                    f"got {self.side_count!r}"
                )

        expected = required_points(self.kind, self.side_count)
        if expected is None:
            if not self.points:
                raise CurveError(f"{self.kind.value} needs at least one point")
        elif len(self.points) != expected:
            raise CurveError(
                f"{self.kind.value} needs exactly {expected} points, got {len(self.points)}"
            )

    # ------------------------------------------------------------------
    # Derived geometry
    # ------------------------------------------------------------------
    def reference_point(self) -> Point:
        """Point used to pick this curve out of the store."""

        return reference_point(self.kind, self.points)

    def center(self) -> Point:
        """Point this curve rotates about."""

        if self.kind is GeometryKind.FREEHAND:
            return centroid(self.points)
        return self.reference_point()

    @property
    def handle_index(self) -> int:
        """Index that selects the whole-curve drag handle while editing."""

        return len(self.points)

    def handle_point(self) -> Point:
        """Where the whole-curve drag handle sits: the centroid of the points.

        Kinds centred on their first point would otherwise hide the handle
        under that point.
        """

        return centroid(self.points)

    @property
    def radius(self) -> float:
        if self.kind not in (GeometryKind.CIRCLE, GeometryKind.ARC):
            raise AttributeError(f"{self.kind.value} has no radius")
        return self.points[0].distance_to(self.points[1])

    @property
    def radii(self) -> tuple[float, float]:
        if self.kind is not GeometryKind.ELLIPSE:
            raise AttributeError(f"{self.kind.value} has no radii")
        center, corner = self.points
        # Radii are measured in the unrotated frame.
        corner = corner.rotated_about(center, -self.rotation)
        return abs(corner.x - center.x), abs(corner.y - center.y)

    def polygon_vertices(self) -> list[Point]:
        if self.kind is not GeometryKind.POLYGON:
            raise AttributeError(f"{self.kind.value} is not a polygon")
        return regular_polygon_vertices(self.points[0], self.points[1], self.side_count)

    # ------------------------------------------------------------------
    # Transformations (all return new curves with the same id)
    # ------------------------------------------------------------------
    def with_point(self, index: int, position: Point) -> "Curve":
        points = list(self.points)
        points[index] = position
        return replace(self, points=tuple(points))

    def translated(self, dx: float, dy: float) -> "Curve":
        return replace(self, points=tuple(p.translated(dx, dy) for p in self.points))

    def moved_to(self, index: int, position: Point) -> "Curve":
        """Move point *index* to *position*, or drag the whole curve if
        *index* is the drag handle."""

        if index == self.handle_index:
            handle = self.handle_point()
            return self.translated(position.x - handle.x, position.y - handle.y)
        return self.with_point(index, position)

    def rotated(self, delta: float) -> "Curve":
        center = self.center()
        return replace(
            self,
            points=tuple(p.rotated_about(center, delta) for p in self.points),
            rotation=self.rotation + delta,
        )


def reference_point(kind: GeometryKind, points: Iterable[Point]) -> Point:
    points = tuple(points)
    if kind in (GeometryKind.LINE, GeometryKind.BEZIER):
        return midpoint(points[0], points[1])
    if kind in (GeometryKind.POLYLINE, GeometryKind.RIGHT_TRIANGLE):
        return centroid(points)
    # Arc, Circle, Ellipse, Polygon are centered on their first point; Text is
    # anchored there and FreeHand is picked by where it started.
    return points[0]


@dataclass(frozen=True)
class Preview:
    """Uncommitted, curve-shaped overlay for the active session."""

    kind: GeometryKind
    points: tuple[Point, ...]
    color: QColor
    width: float
    rotation: float = 0.0
    side_count: int | None = None
    content: str = ""
    caret_visible: bool = False
    highlighted: bool = False
    curve_id: int | None = None

    @classmethod
    def from_curve(cls, curve: Curve, **overrides) -> "Preview":
        values = dict(
            kind=curve.kind,
            points=curve.points,
            color=curve.color,
            width=curve.width,
            rotation=curve.rotation,
            side_count=curve.side_count,
            content=curve.content,
            curve_id=curve.id,
        )
        values.update(overrides)
        return cls(**values)
