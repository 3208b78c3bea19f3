"""Unit tests for boolean operations on single blueprints."""

import math

import pytest

from blueprint2d.config import Blueprint2DSettings, BooleanConfig
from blueprint2d.core.boolean import (
    BooleanEngine,
    BooleanOperation,
    Disjoint,
    Empty,
    Single,
    WithHoles,
    cut_blueprints,
    fuse_blueprints,
    intersect_blueprints,
    result_from_shape,
)
from blueprint2d.core.canned import circle_blueprint, polygon_blueprint, rectangle_blueprint
from blueprint2d.domain import Blueprint, Blueprints, CompoundBlueprint, Line, Orientation, Point
from blueprint2d.exceptions import InvalidBlueprintError, SelfIntersectionError


@pytest.fixture
def engine() -> BooleanEngine:
    return BooleanEngine()


@pytest.fixture
def square() -> Blueprint:
    return rectangle_blueprint(10, 10)


@pytest.fixture
def shifted_square() -> Blueprint:
    return rectangle_blueprint(10, 10, center=(5, 0))


@pytest.fixture
def tall_bar() -> Blueprint:
    return rectangle_blueprint(4, 20)


class TestResultFromShape:
    """Tests for result_from_shape function."""

    def test_none_is_empty(self) -> None:
        result = result_from_shape(None)
        assert isinstance(result, Empty)
        assert result.shape is None
        assert result.area() == 0.0
        assert result.kind == "empty"

    def test_blueprint_is_single(self, square) -> None:
        result = result_from_shape(square)
        assert result == Single(square)
        assert result.kind == "single"

    def test_compound_without_holes_is_single(self, square) -> None:
        assert result_from_shape(CompoundBlueprint((square,))) == Single(square)

    def test_compound_is_with_holes(self, square) -> None:
        compound = CompoundBlueprint((square, rectangle_blueprint(2, 2).reversed()))
        result = result_from_shape(compound)
        assert isinstance(result, WithHoles)
        assert result.area() == pytest.approx(96.0)

    def test_collections(self, square) -> None:
        assert isinstance(result_from_shape(Blueprints(())), Empty)
        assert result_from_shape(Blueprints((square,))) == Single(square)
        far = rectangle_blueprint(2, 2, center=(20, 0))
        result = result_from_shape(Blueprints((square, far)))
        assert isinstance(result, Disjoint)
        assert result.kind == "disjoint"
        assert result.area() == pytest.approx(104.0)


class TestBooleanOperation:
    """Tests for BooleanOperation enum."""

    def test_values(self) -> None:
        assert [op.value for op in BooleanOperation] == ["fuse", "cut", "intersect"]

    def test_policies(self) -> None:
        assert BooleanOperation.CUT.policy.reverses_second
        assert not BooleanOperation.FUSE.policy.reverses_second


class TestOverlappingSquares:
    """Two 10x10 squares overlapping by half, sharing parts of two edges."""

    def test_fuse(self, engine, square, shifted_square) -> None:
        result = engine.fuse(square, shifted_square)
        assert isinstance(result, Single)
        assert result.area() == pytest.approx(150.0)
        assert result.shape.is_closed()

    def test_cut(self, engine, square, shifted_square) -> None:
        result = engine.cut(square, shifted_square)
        assert isinstance(result, Single)
        assert result.area() == pytest.approx(50.0)
        bbox = result.shape.bounding_box
        assert bbox.x_min == pytest.approx(-5.0)
        assert bbox.x_max == pytest.approx(0.0)

    def test_intersect(self, engine, square, shifted_square) -> None:
        result = engine.intersect(square, shifted_square)
        assert isinstance(result, Single)
        assert result.area() == pytest.approx(50.0)

    def test_partial_overlap(self, engine, square) -> None:
        result = engine.intersect(square, rectangle_blueprint(10, 10, center=(3, 0)))
        assert result.area() == pytest.approx(70.0)

    def test_module_level_functions(self, square, shifted_square) -> None:
        assert fuse_blueprints(square, shifted_square).area() == pytest.approx(150.0)
        assert cut_blueprints(square, shifted_square).area() == pytest.approx(50.0)
        assert intersect_blueprints(square, shifted_square).area() == pytest.approx(50.0)


class TestCrossingShapes:
    """A square crossed by a bar sticking out on both sides."""

    def test_fuse(self, engine, square, tall_bar) -> None:
        result = engine.fuse(square, tall_bar)
        assert isinstance(result, Single)
        assert result.area() == pytest.approx(140.0)
        assert len(result.shape.curves) == 12

    def test_intersect(self, engine, square, tall_bar) -> None:
        assert engine.intersect(square, tall_bar).area() == pytest.approx(40.0)

    def test_cut_splits_square(self, engine, square, tall_bar) -> None:
        result = engine.cut(square, tall_bar)
        assert isinstance(result, Disjoint)
        assert len(result.shape) == 2
        assert [part.area() for part in result.shape] == [pytest.approx(30.0)] * 2

    def test_results_are_counter_clockwise(self, engine, square, tall_bar) -> None:
        for loop in engine.cut(square, tall_bar).shape:
            assert loop.orientation is Orientation.COUNTER_CLOCKWISE


class TestCircles:
    """Operations involving full circles."""

    def test_square_and_circle_on_edge(self, engine, square) -> None:
        circle = circle_blueprint(3, center=(5, 0))
        half_disc = 4.5 * math.pi
        assert engine.fuse(square, circle).area() == pytest.approx(100 + half_disc)
        assert engine.cut(square, circle).area() == pytest.approx(100 - half_disc)
        assert engine.intersect(square, circle).area() == pytest.approx(half_disc)

    def test_identical_circles(self, engine) -> None:
        result = engine.fuse(circle_blueprint(3), circle_blueprint(3))
        assert isinstance(result, Single)
        assert result.area() == pytest.approx(9 * math.pi)

    def test_overlapping_circles(self, engine) -> None:
        """Test the lens shared by two unit circles one radius apart."""
        lens = 2 * math.pi / 3 - math.sqrt(3) / 2
        result = engine.intersect(circle_blueprint(1), circle_blueprint(1, center=(1, 0)))
        assert result.area() == pytest.approx(lens)
        fused = engine.fuse(circle_blueprint(1), circle_blueprint(1, center=(1, 0)))
        assert fused.area() == pytest.approx(2 * math.pi - lens)


class TestWholeLoops:
    """Loops that do not cross are combined as wholes."""

    def test_nested(self, engine) -> None:
        outer = rectangle_blueprint(20, 20)
        inner = circle_blueprint(3)
        assert engine.fuse(outer, inner) == Single(outer)
        assert engine.intersect(outer, inner) == Single(inner)
        assert isinstance(engine.cut(inner, outer), Empty)

    def test_cut_makes_hole(self, engine) -> None:
        result = engine.cut(rectangle_blueprint(20, 20), circle_blueprint(3))
        assert isinstance(result, WithHoles)
        assert len(result.shape.holes) == 1
        assert result.shape.holes[0].orientation is Orientation.CLOCKWISE
        assert result.area() == pytest.approx(400 - 9 * math.pi)

    def test_disjoint(self, engine, square) -> None:
        far = rectangle_blueprint(2, 2, center=(20, 0))
        fused = engine.fuse(square, far)
        assert isinstance(fused, Disjoint)
        assert fused.area() == pytest.approx(104.0)
        assert engine.cut(square, far) == Single(square)
        assert isinstance(engine.intersect(square, far), Empty)

    def test_nested_touching_at_mid_point(self, engine) -> None:
        """Test that an inner loop touching the outer one at a curve mid point is nested."""
        inner = rectangle_blueprint(10, 10)
        outer = polygon_blueprint([(-20, -20), (0, -5), (20, -20), (20, 20), (-20, 20)])
        assert outer.area() == pytest.approx(1300.0)

        for fused in (engine.fuse(inner, outer), engine.fuse(outer, inner)):
            assert isinstance(fused, Single)
            assert fused.area() == pytest.approx(1300.0)
        intersected = engine.intersect(inner, outer)
        assert isinstance(intersected, Single)
        assert intersected.area() == pytest.approx(100.0)
        assert isinstance(engine.cut(inner, outer), Empty)

    def test_identical(self, engine, square) -> None:
        assert isinstance(engine.cut(square, square.clone()), Empty)
        assert engine.intersect(square, square.clone()).area() == pytest.approx(100.0)

    def test_clockwise_operands(self, engine, square, shifted_square) -> None:
        """Test that operand orientation does not change the result."""
        result = engine.fuse(square.reversed(), shifted_square.reversed())
        assert result.area() == pytest.approx(150.0)


class TestValidation:
    """Tests for operand validation."""

    def test_open_blueprint(self, engine, square) -> None:
        open_loop = Blueprint((Line(Point(0, 0), Point(1, 0)), Line(Point(1, 0), Point(1, 1))))
        with pytest.raises(InvalidBlueprintError, match="not closed"):
            engine.fuse(open_loop, square)

    def test_wrong_type(self, engine, square) -> None:
        with pytest.raises(InvalidBlueprintError, match="must be a Blueprint"):
            engine.cut(square, CompoundBlueprint((square,)))

    def test_self_intersecting(self, engine, square) -> None:
        bowtie = polygon_blueprint([(0, 0), (2, 2), (2, 0), (0, 2)])
        with pytest.raises(SelfIntersectionError) as excinfo:
            engine.fuse(bowtie, square)
        assert excinfo.value.operand == "first"
        assert excinfo.value.intersection_count == 1

    def test_validation_disabled(self, square) -> None:
        """Test that a self-intersecting operand is accepted when checks are off."""
        engine = BooleanEngine(Blueprint2DSettings(boolean=BooleanConfig(validate_inputs=False)))
        bowtie = polygon_blueprint([(20, 0), (22, 2), (22, 0), (20, 2)])
        result = engine.fuse(square, bowtie)
        assert isinstance(result, Disjoint)

    def test_run_dispatches(self, engine, square, shifted_square) -> None:
        result = engine.run(BooleanOperation.INTERSECT, square, shifted_square)
        assert result.area() == pytest.approx(50.0)
