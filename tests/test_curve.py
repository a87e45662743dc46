import pytest
from PySide6.QtGui import QColor

from vectorportal.core.curve import Curve, GeometryKind, Preview, required_points
from vectorportal.core.errors import CurveError
from vectorportal.core.geometry import Point


def make(kind, points, **kwargs):
    return Curve(id=1, kind=kind, points=points, **kwargs)


def test_required_points():
    assert required_points(GeometryKind.ARC) == 3
    assert required_points(GeometryKind.CIRCLE) == 2
    assert required_points(GeometryKind.POLYGON, 8) == 2
    assert required_points(GeometryKind.POLYLINE, 5) == 5
    assert required_points(GeometryKind.TEXT) == 1
    assert required_points(GeometryKind.FREEHAND) is None


def test_point_count_is_enforced():
    with pytest.raises(CurveError):
        make(GeometryKind.LINE, [Point(0, 0)])
    with pytest.raises(CurveError):
        make(GeometryKind.POLYLINE, [Point(0, 0), Point(1, 1)], side_count=3)
    with pytest.raises(CurveError):
        make(GeometryKind.FREEHAND, [])


def test_side_count_is_required_for_poly_kinds():
    with pytest.raises(CurveError):
        make(GeometryKind.POLYGON, [Point(0, 0), Point(1, 0)])
    with pytest.raises(CurveError):
        make(GeometryKind.POLYGON, [Point(0, 0), Point(1, 0)], side_count=2)
    polyline = make(GeometryKind.POLYLINE, [Point(0, 0), Point(1, 0)], side_count=2)
    assert polyline.side_count == 2


def test_irrelevant_fields_are_normalized():
    line = make(GeometryKind.LINE, [Point(0, 0), Point(1, 0)], side_count=7, content="x")
    assert line.side_count is None
    assert line.content == ""


def test_rotation_is_normalized():
    assert make(GeometryKind.LINE, [Point(0, 0), Point(1, 0)], rotation=-90).rotation == 270
    assert make(GeometryKind.LINE, [Point(0, 0), Point(1, 0)], rotation=720).rotation == 0


def test_color_is_copied():
    color = QColor("red")
    curve = make(GeometryKind.LINE, [Point(0, 0), Point(1, 0)], color=color)
    color.setRed(0)
    assert curve.color == QColor("red")


@pytest.mark.parametrize(
    "kind, points, extra, expected",
    [
        (GeometryKind.LINE, [Point(0, 0), Point(10, 4)], {}, Point(5, 2)),
        (GeometryKind.BEZIER, [Point(0, 0), Point(10, 0), Point(5, 50)], {}, Point(5, 0)),
        (GeometryKind.CIRCLE, [Point(3, 3), Point(9, 3)], {}, Point(3, 3)),
        (GeometryKind.ARC, [Point(1, 1), Point(5, 1), Point(1, 5)], {}, Point(1, 1)),
        (GeometryKind.ELLIPSE, [Point(2, 2), Point(8, 5)], {}, Point(2, 2)),
        (GeometryKind.POLYGON, [Point(4, 4), Point(8, 4)], {"side_count": 5}, Point(4, 4)),
        (
            GeometryKind.RIGHT_TRIANGLE,
            [Point(0, 0), Point(6, 0), Point(0, 6)],
            {},
            Point(2, 2),
        ),
        (
            GeometryKind.POLYLINE,
            [Point(0, 0), Point(4, 0), Point(4, 4), Point(0, 4)],
            {"side_count": 4},
            Point(2, 2),
        ),
        (GeometryKind.TEXT, [Point(7, 7)], {"content": "hi"}, Point(7, 7)),
        (GeometryKind.FREEHAND, [Point(9, 1), Point(0, 0), Point(3, 3)], {}, Point(9, 1)),
    ],
)
def test_reference_point(kind, points, extra, expected):
    assert make(kind, points, **extra).reference_point() == expected


def test_freehand_rotates_about_centroid():
    stroke = make(GeometryKind.FREEHAND, [Point(0, 0), Point(6, 0), Point(0, 6)])
    assert stroke.center() == Point(2, 2)


def test_derived_measurements():
    circle = make(GeometryKind.CIRCLE, [Point(0, 0), Point(3, 4)])
    assert circle.radius == 5
    ellipse = make(GeometryKind.ELLIPSE, [Point(5, 5), Point(1, 8)])
    assert ellipse.radii == (4, 3)
    polygon = make(GeometryKind.POLYGON, [Point(0, 0), Point(0, -10)], side_count=6)
    assert len(polygon.polygon_vertices()) == 6
    with pytest.raises(AttributeError):
        make(GeometryKind.LINE, [Point(0, 0), Point(1, 0)]).radius


def test_moved_to_point_and_handle():
    line = make(GeometryKind.LINE, [Point(0, 0), Point(10, 0)])
    assert line.moved_to(1, Point(10, 10)).points == (Point(0, 0), Point(10, 10))

    dragged = line.moved_to(line.handle_index, Point(5, 5))
    assert dragged.points == (Point(0, 5), Point(10, 5))
    assert dragged.id == line.id


def test_rotated_keeps_identity_and_style():
    line = make(GeometryKind.LINE, [Point(0, 0), Point(10, 0)], color=QColor("green"), width=3)
    rotated = line.rotated(180)
    assert rotated.id == line.id
    assert rotated.color == QColor("green")
    assert rotated.width == 3
    assert rotated.rotation == 180
    assert rotated.points[0].x == pytest.approx(10)
    assert rotated.points[1].x == pytest.approx(0)


def test_preview_from_curve():
    text = make(GeometryKind.TEXT, [Point(1, 2)], content="abc")
    preview = Preview.from_curve(text, highlighted=True)
    assert preview.curve_id == 1
    assert preview.content == "abc"
    assert preview.highlighted
    assert preview.caret_visible is False


def test_rotated_ellipse_keeps_its_radii():
    ellipse = make(GeometryKind.ELLIPSE, [Point(0, 0), Point(10, 5)])
    rotated = ellipse.rotated(45)

    assert rotated.rotation == 45.0
    assert rotated.radii == pytest.approx((10, 5))


def test_handle_sits_off_the_first_point():
    circle = make(GeometryKind.CIRCLE, [Point(10, 10), Point(50, 50)])
    assert circle.handle_point() == Point(30, 30)

    dragged = circle.moved_to(circle.handle_index, Point(120, 120))
    assert dragged.points == (Point(100, 100), Point(140, 140))
    assert dragged.radius == pytest.approx(circle.radius)
