"""Tests for domain models to verify they work correctly."""

import math

import pytest

from blueprint2d.core.canned import circle_blueprint, rectangle_blueprint
from blueprint2d.domain import (
    Arc,
    Bezier,
    Blueprint,
    Blueprints,
    BoundingBox,
    CompoundBlueprint,
    Line,
    Orientation,
    Point,
    Transform2D,
    curve_from_dict,
    shape_from_dict,
)
from blueprint2d.exceptions import InvalidBlueprintError, PointNotOnCurveError


def lens_blueprint() -> Blueprint:
    """A chord closed by a quadratic curve above it, enclosing 4/3."""
    return Blueprint(
        (
            Line(Point(0, 0), Point(2, 0)),
            Bezier((Point(2, 0), Point(1, 2), Point(0, 0))),
        )
    )


class TestPoint:
    """Tests for Point class."""

    def test_point_creation(self) -> None:
        """Test basic point creation."""
        p = Point(100.0, 200.0)
        assert p.x == 100.0
        assert p.y == 200.0

    def test_point_to_tuple(self) -> None:
        """Test point to tuple conversion."""
        assert Point(100.0, 200.0).to_tuple() == (100.0, 200.0)

    def test_point_serialization(self) -> None:
        """Test point serialization and deserialization."""
        p1 = Point(100.0, 200.0)
        p2 = Point.from_dict(p1.to_dict())
        assert p2 == p1

    def test_point_immutable(self) -> None:
        """Test that point is immutable."""
        p = Point(100.0, 200.0)
        with pytest.raises(AttributeError):
            p.x = 300.0  # type: ignore

    def test_distance_to(self) -> None:
        assert Point(0, 0).distance_to(Point(3, 4)) == 5.0


class TestBoundingBox:
    """Tests for BoundingBox class."""

    def test_from_points(self) -> None:
        bbox = BoundingBox.from_points([Point(1, 5), Point(-2, 3), Point(4, -1)])
        assert bbox == BoundingBox(-2, -1, 4, 5)
        assert bbox.width == 6
        assert bbox.height == 6
        assert bbox.center == Point(1, 2)

    def test_from_no_points(self) -> None:
        with pytest.raises(ValueError):
            BoundingBox.from_points([])

    def test_is_out(self) -> None:
        """Test separated and touching boxes."""
        first = BoundingBox(0, 0, 1, 1)
        assert first.is_out(BoundingBox(2, 0, 3, 1))
        assert not first.is_out(BoundingBox(1, 0, 2, 1))
        assert not first.is_out(BoundingBox(1.5, 0, 2, 1), tolerance=1.0)

    def test_union(self) -> None:
        assert BoundingBox(0, 0, 1, 1).union(BoundingBox(2, -1, 3, 0)) == BoundingBox(0, -1, 3, 1)

    def test_contains_point_includes_boundary(self) -> None:
        bbox = BoundingBox(0, 0, 1, 1)
        assert bbox.contains_point(Point(1, 0.5))
        assert not bbox.contains_point(Point(1.1, 0.5))

    def test_outside_point(self) -> None:
        bbox = BoundingBox(0, 0, 1, 1)
        assert not bbox.contains_point(bbox.outside_point())


class TestTransform2D:
    """Tests for affine transforms."""

    def test_rotation_about_center(self) -> None:
        p = Transform2D.rotation(90, center=(1, 0)).apply(Point(2, 0))
        assert p.x == pytest.approx(1.0)
        assert p.y == pytest.approx(1.0)

    def test_then_applies_in_order(self) -> None:
        """Test that composition applies the first transform first."""
        moved_then_scaled = Transform2D.translation(1, 0).then(Transform2D.scaling(2))
        assert moved_then_scaled.apply(Point(0, 0)) == Point(2, 0)

    def test_axis_mirror(self) -> None:
        p = Transform2D.axis_mirror((1, 0), origin=(0, 1)).apply(Point(3, 3))
        assert p.x == pytest.approx(3.0)
        assert p.y == pytest.approx(-1.0)

    def test_similarity_detection(self) -> None:
        assert Transform2D.rotation(30).is_similarity()
        assert Transform2D.axis_mirror((1, 1)).is_similarity()
        assert not Transform2D.stretch(2, (1, 0)).is_similarity()

    def test_zero_direction_rejected(self) -> None:
        with pytest.raises(ValueError):
            Transform2D.stretch(2, (0, 0))


class TestLine:
    """Tests for Line curves."""

    def test_endpoints_and_value(self) -> None:
        line = Line(Point(0, 0), Point(4, 2))
        assert line.first_point == Point(0, 0)
        assert line.last_point == Point(4, 2)
        assert line.value(0.5) == Point(2, 1)
        assert line.params == (0.0, 1.0)

    def test_parameter_of_point(self) -> None:
        line = Line(Point(0, 0), Point(4, 0))
        assert line.parameter(Point(1, 0)) == pytest.approx(0.25)

    def test_parameter_off_curve(self) -> None:
        """Test that locating a far point raises a computation error."""
        line = Line(Point(0, 0), Point(4, 0))
        with pytest.raises(PointNotOnCurveError) as excinfo:
            line.parameter(Point(1, 1))
        assert excinfo.value.code == "POINT_NOT_ON_CURVE"

    def test_split_at_ignores_endpoints(self) -> None:
        line = Line(Point(0, 0), Point(4, 0))
        pieces = line.split_at([Point(0, 0), Point(1, 0), Point(4, 0), Point(1, 0)])
        assert len(pieces) == 2
        assert pieces[0].last_point == Point(1, 0)
        assert pieces[1].first_point == Point(1, 0)

    def test_reversed(self) -> None:
        line = Line(Point(0, 0), Point(4, 0))
        assert line.reversed() == Line(Point(4, 0), Point(0, 0))

    def test_clone_is_equal_but_distinct(self) -> None:
        line = Line(Point(0, 0), Point(4, 0))
        clone = line.clone()
        assert clone == line
        assert clone is not line


class TestArc:
    """Tests for Arc curves."""

    def test_full_circle_is_closed(self) -> None:
        circle = Arc.circle(Point(1, 1), 2)
        assert circle.is_full_circle
        assert circle.first_point == circle.last_point

    def test_invalid_arcs(self) -> None:
        with pytest.raises(ValueError):
            Arc(Point(0, 0), 0.0, 0.0, math.pi)
        with pytest.raises(ValueError):
            Arc(Point(0, 0), 1.0, 0.0, 0.0)
        with pytest.raises(ValueError):
            Arc(Point(0, 0), 1.0, 0.0, 7.0)

    def test_from_three_points(self) -> None:
        arc = Arc.from_three_points(Point(1, 0), Point(0, 1), Point(-1, 0))
        assert arc.center.x == pytest.approx(0.0)
        assert arc.center.y == pytest.approx(0.0)
        assert arc.radius == pytest.approx(1.0)
        assert arc.sweep == pytest.approx(math.pi)

    def test_from_three_collinear_points(self) -> None:
        with pytest.raises(ValueError):
            Arc.from_three_points(Point(0, 0), Point(1, 0), Point(2, 0))

    def test_from_sagitta_bulges_right(self) -> None:
        """Test that a positive sagitta bulges to the right of travel."""
        arc = Arc.from_sagitta(Point(0, 0), Point(2, 0), 1.0)
        middle = arc.value(0.5)
        assert middle.x == pytest.approx(1.0)
        assert middle.y == pytest.approx(-1.0)
        assert arc.last_point.x == pytest.approx(2.0)

    def test_bounding_box_includes_extrema(self) -> None:
        bbox = Arc(Point(0, 0), 2.0, 0.0, math.pi).bounding_box
        assert bbox.x_min == pytest.approx(-2.0)
        assert bbox.x_max == pytest.approx(2.0)
        assert bbox.y_min == pytest.approx(0.0, abs=1e-12)
        assert bbox.y_max == pytest.approx(2.0)

    def test_reversed(self) -> None:
        arc = Arc(Point(0, 0), 1.0, 0.0, math.pi / 2)
        back = arc.reversed()
        assert back.first_point.distance_to(arc.last_point) < 1e-12
        assert back.last_point.distance_to(arc.first_point) < 1e-12

    def test_parameter_of_point(self) -> None:
        arc = Arc(Point(0, 0), 1.0, 0.0, math.pi)
        assert arc.parameter(Point(0, 1)) == pytest.approx(0.5)

    def test_similarity_transform_keeps_arc(self) -> None:
        arc = Arc(Point(0, 0), 1.0, 0.0, math.pi / 2)
        (moved,) = arc.transform(Transform2D.scaling(2).then(Transform2D.translation(1, 0)))
        assert isinstance(moved, Arc)
        assert moved.radius == pytest.approx(2.0)
        assert moved.center == Point(1, 0)

    def test_stretch_turns_arc_into_beziers(self) -> None:
        pieces = Arc.circle(Point(0, 0), 1.0).transform(Transform2D.stretch(2, (1, 0)))
        assert len(pieces) == 4
        assert all(isinstance(piece, Bezier) for piece in pieces)


class TestBezier:
    """Tests for Bezier curves."""

    def test_control_point_count(self) -> None:
        with pytest.raises(ValueError):
            Bezier((Point(0, 0), Point(1, 1)))

    def test_degree(self) -> None:
        assert Bezier((Point(0, 0), Point(1, 1), Point(2, 0))).degree == 2
        assert Bezier((Point(0, 0), Point(1, 1), Point(2, 1), Point(3, 0))).degree == 3

    def test_value_at_middle(self) -> None:
        curve = Bezier((Point(0, 0), Point(1, 2), Point(2, 0)))
        assert curve.value(0.5) == Point(1, 1)

    def test_bounding_box_uses_extrema(self) -> None:
        bbox = Bezier((Point(0, 0), Point(1, 2), Point(2, 0))).bounding_box
        assert bbox.y_max == pytest.approx(1.0)
        assert bbox.x_max == pytest.approx(2.0)

    def test_sub_curve_matches_original(self) -> None:
        curve = Bezier((Point(0, 0), Point(1, 3), Point(3, 3), Point(4, 0)))
        left = curve.sub_curve(0.0, 0.5)
        assert left.first_point == curve.first_point
        assert left.last_point.distance_to(curve.value(0.5)) < 1e-12
        assert left.value(0.5).distance_to(curve.value(0.25)) < 1e-12

    def test_project(self) -> None:
        curve = Bezier((Point(0, 0), Point(1, 2), Point(2, 0)))
        t, distance = curve.project(Point(1, 1))
        assert t == pytest.approx(0.5)
        assert distance == pytest.approx(0.0, abs=1e-9)


class TestCurveSerialization:
    """Tests for curve dictionaries."""

    def test_round_trip(self) -> None:
        curves = [
            Line(Point(0, 0), Point(1, 0)),
            Arc(Point(0, 0), 1.0, 0.5, -1.0),
            Bezier((Point(0, 0), Point(1, 1), Point(2, 0))),
        ]
        for curve in curves:
            assert curve_from_dict(curve.to_dict()) == curve

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown curve type"):
            curve_from_dict({"type": "spline"})


class TestBlueprint:
    """Tests for Blueprint class."""

    def test_rejects_gaps(self) -> None:
        """Test that curves must connect end to start."""
        with pytest.raises(InvalidBlueprintError):
            Blueprint((Line(Point(0, 0), Point(1, 0)), Line(Point(2, 0), Point(0, 0))))

    def test_rejects_empty(self) -> None:
        with pytest.raises(InvalidBlueprintError):
            Blueprint(())

    def test_rectangle_area_and_orientation(self) -> None:
        rect = rectangle_blueprint(10, 10)
        assert rect.is_closed()
        assert rect.signed_area() == pytest.approx(100.0)
        assert rect.orientation is Orientation.COUNTER_CLOCKWISE

    def test_reversed_is_clockwise(self) -> None:
        rect = rectangle_blueprint(10, 10).reversed()
        assert rect.signed_area() == pytest.approx(-100.0)
        assert rect.orientation is Orientation.CLOCKWISE
        assert rect.oriented(Orientation.COUNTER_CLOCKWISE).signed_area() > 0

    def test_circle_area(self) -> None:
        assert circle_blueprint(2).area() == pytest.approx(4 * math.pi)

    def test_bezier_area(self) -> None:
        assert lens_blueprint().area() == pytest.approx(4 / 3)
        assert lens_blueprint().orientation is Orientation.COUNTER_CLOCKWISE

    def test_is_inside(self) -> None:
        """Test inside, boundary and outside points."""
        rect = rectangle_blueprint(10, 10)
        assert rect.is_inside(Point(0, 0))
        assert rect.is_inside(Point(4.9, -4.9))
        assert not rect.is_inside(Point(5, 0))
        assert not rect.is_inside(Point(6, 0))

    def test_is_inside_at_vertex_height(self) -> None:
        """Test a ray passing exactly through a vertex."""
        diamond = Blueprint(
            (
                Line(Point(0, -1), Point(1, 0)),
                Line(Point(1, 0), Point(0, 1)),
                Line(Point(0, 1), Point(-1, 0)),
                Line(Point(-1, 0), Point(0, -1)),
            )
        )
        assert diamond.is_inside(Point(0, 0))
        assert not diamond.is_inside(Point(-2, 0))

    def test_is_inside_curved(self) -> None:
        circle = circle_blueprint(2)
        assert circle.is_inside(Point(1.9, 0))
        assert not circle.is_inside(Point(1.5, 1.5))
        assert lens_blueprint().is_inside(Point(1, 0.5))
        assert not lens_blueprint().is_inside(Point(1, 1.5))

    def test_translate(self) -> None:
        moved = rectangle_blueprint(10, 10).translate(5, 0)
        assert moved.bounding_box.x_min == pytest.approx(0.0)
        assert moved.bounding_box.x_max == pytest.approx(10.0)
        assert moved.translate((-5, 0)).bounding_box.x_min == pytest.approx(-5.0)

    def test_rotate_and_scale(self) -> None:
        rect = rectangle_blueprint(10, 4)
        rotated = rect.rotate(90)
        assert rotated.bounding_box.width == pytest.approx(4.0)
        assert rotated.bounding_box.height == pytest.approx(10.0)
        assert rect.scale(2).area() == pytest.approx(160.0)

    def test_mirror_flips_orientation(self) -> None:
        rect = rectangle_blueprint(10, 10, center=(5, 5))
        mirrored = rect.mirror_axis((1, 0))
        assert mirrored.orientation is Orientation.CLOCKWISE
        assert mirrored.bounding_box.y_max == pytest.approx(0.0)
        assert rect.mirror().orientation is Orientation.COUNTER_CLOCKWISE

    def test_stretch_circle(self) -> None:
        ellipse = circle_blueprint(1).stretch(2, (1, 0))
        assert ellipse.is_closed()
        assert ellipse.area() == pytest.approx(2 * math.pi, rel=1e-3)

    def test_transforms_do_not_mutate(self) -> None:
        rect = rectangle_blueprint(10, 10)
        rect.translate(3, 3)
        assert rect.bounding_box.x_min == pytest.approx(-5.0)

    def test_round_trip(self) -> None:
        rect = rectangle_blueprint(10, 10)
        assert Blueprint.from_dict(rect.to_dict()) == rect


class TestCompoundBlueprint:
    """Tests for regions with holes."""

    @pytest.fixture
    def ring(self) -> CompoundBlueprint:
        return CompoundBlueprint(
            (rectangle_blueprint(10, 10), rectangle_blueprint(4, 4).reversed())
        )

    def test_outer_and_holes(self, ring: CompoundBlueprint) -> None:
        assert ring.outer.area() == pytest.approx(100.0)
        assert len(ring.holes) == 1

    def test_area(self, ring: CompoundBlueprint) -> None:
        assert ring.area() == pytest.approx(84.0)

    def test_is_inside(self, ring: CompoundBlueprint) -> None:
        assert ring.is_inside(Point(3, 3))
        assert not ring.is_inside(Point(0, 0))
        assert not ring.is_inside(Point(2, 0))

    def test_requires_outer(self) -> None:
        with pytest.raises(InvalidBlueprintError):
            CompoundBlueprint(())

    def test_translate(self, ring: CompoundBlueprint) -> None:
        moved = ring.translate(1, 1)
        assert moved.area() == pytest.approx(84.0)
        assert moved.holes[0].bounding_box.x_min == pytest.approx(-1.0)


class TestBlueprints:
    """Tests for collections of regions."""

    def test_area_sums_members(self) -> None:
        shapes = Blueprints((rectangle_blueprint(2, 2), rectangle_blueprint(2, 2, center=(5, 0))))
        assert len(shapes) == 2
        assert shapes.area() == pytest.approx(8.0)
        assert shapes.bounding_box == BoundingBox(-1, -1, 6, 1)

    def test_empty_has_no_bounding_box(self) -> None:
        with pytest.raises(InvalidBlueprintError):
            _ = Blueprints(()).bounding_box

    def test_loops(self) -> None:
        ring = CompoundBlueprint((rectangle_blueprint(10, 10), rectangle_blueprint(2, 2)))
        shapes = Blueprints((ring, rectangle_blueprint(2, 2, center=(20, 0))))
        assert len(shapes.loops()) == 3


class TestShapeFromDict:
    """Tests for shape deserialization."""

    def test_none_is_empty_shape(self) -> None:
        assert shape_from_dict(None) is None

    def test_round_trip_collection(self) -> None:
        ring = CompoundBlueprint((rectangle_blueprint(10, 10), circle_blueprint(2)))
        shapes = Blueprints((ring, rectangle_blueprint(2, 2, center=(20, 0))))
        assert shape_from_dict(shapes.to_dict()) == shapes

    def test_unknown_type(self) -> None:
        with pytest.raises(InvalidBlueprintError):
            shape_from_dict({"type": "triangle"})

    def test_malformed(self) -> None:
        with pytest.raises(InvalidBlueprintError):
            shape_from_dict({"type": "blueprint"})
