"""JSON persistence for the curve collection."""

from __future__ import annotations

import json
import logging
import os
from typing import Iterable

from PySide6.QtGui import QColor

from vectorportal.core.curve import Curve, GeometryKind
from vectorportal.core.errors import CurveError, CurveFormatError
from vectorportal.core.geometry import Point


logger = logging.getLogger(__name__)

RECORD_FIELDS = ("id", "kind", "points", "color", "width", "rotation", "side_count", "content")


def serialize(curve: Curve) -> dict[str, object]:
    red, green, blue, alpha = curve.color.getRgbF()
    return {
        "id": curve.id,
        "kind": curve.kind.value,
        "points": [{"x": p.x, "y": p.y} for p in curve.points],
        "color": {"r": red, "g": green, "b": blue, "a": alpha},
        "width": curve.width,
        "rotation": curve.rotation,
        "side_count": curve.side_count,
        "content": curve.content,
    }


def deserialize(record: object) -> Curve:
    if not isinstance(record, dict):
        raise CurveFormatError(f"Curve record must be an object, got {type(record).__name__}.")
    missing = [name for name in RECORD_FIELDS if name not in record]
    if missing:
        raise CurveFormatError(f"Curve record is missing {', '.join(missing)}.")

    try:
        kind = GeometryKind(record["kind"])
    except ValueError:
        raise CurveFormatError(f"Unknown curve kind {record['kind']!r}.") from None

    curve_id = record["id"]
    if not isinstance(curve_id, int) or isinstance(curve_id, bool) or curve_id < 1:
        raise CurveFormatError(f"Invalid curve id {curve_id!r}.")

    side_count = record["side_count"]
    if side_count is not None and (not isinstance(side_count, int) or isinstance(side_count, bool)):
        raise CurveFormatError(f"Invalid side count {side_count!r}.")

    content = record["content"]
    if not isinstance(content, str):
        raise CurveFormatError("Curve content must be a string.")

    try:
        return Curve(
            id=curve_id,
            kind=kind,
            points=_parse_points(record["points"]),
            color=_parse_color(record["color"]),
            width=_parse_number(record["width"], "width"),
            rotation=_parse_number(record["rotation"], "rotation"),
            side_count=side_count,
            content=content,
        )
    except CurveError as e:
        raise CurveFormatError(str(e)) from e


def _parse_number(value: object, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CurveFormatError(f"Curve {name} must be a number, got {value!r}.")
    return float(value)


def _parse_points(value: object) -> list[Point]:
    if not isinstance(value, list):
        raise CurveFormatError("Curve points must be a list.")
    points = []
    for item in value:
        if not isinstance(item, dict) or "x" not in item or "y" not in item:
            raise CurveFormatError(f"Invalid point {item!r}.")
        points.append(Point(_parse_number(item["x"], "x"), _parse_number(item["y"], "y")))
    return points


def _parse_color(value: object) -> QColor:
    if not isinstance(value, dict):
        raise CurveFormatError("Curve color must be an object.")
    try:
        channels = [_parse_number(value[name], name) for name in ("r", "g", "b", "a")]
    except KeyError as e:
        raise CurveFormatError(f"Curve color is missing channel {e.args[0]!r}.") from None
    if any(channel < 0.0 or channel > 1.0 for channel in channels):
        raise CurveFormatError(f"Color channels must lie in [0, 1], got {channels!r}.")
    return QColor.fromRgbF(*channels)


def save_curves(path: str, curves: Iterable[Curve]) -> None:
    records = [serialize(curve) for curve in curves]
    target_dir = os.path.dirname(path) or "."
    os.makedirs(target_dir, exist_ok=True)
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(records, handle, indent=2)
        handle.write("\n")
    logger.info("saved %d curves to %s", len(records), path)


def load_curves(path: str) -> list[Curve]:
    """Read every curve in *path*; any bad record fails the whole load."""

    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = json.load(handle)
    except json.JSONDecodeError as e:
        raise CurveFormatError(f"{path} is not valid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise CurveFormatError(f"{path} is not UTF-8 text: {e}") from e

    if not isinstance(data, list):
        raise CurveFormatError(f"{path} must contain a list of curves.")

    curves = [deserialize(record) for record in data]
    seen: set[int] = set()
    for curve in curves:
        if curve.id in seen:
            raise CurveFormatError(f"Duplicate curve id {curve.id} in {path}.")
        seen.add(curve.id)
    logger.info("loaded %d curves from %s", len(curves), path)
    return curves
