"""Unit tests for loop segmentation and segment classification."""

import pytest

from blueprint2d.core.canned import circle_blueprint, rectangle_blueprint
from blueprint2d.core.classification import (
    SegmentPosition,
    classify_segment,
    classify_segments,
    representative_point,
)
from blueprint2d.core.segmentation import IntersectionSegment, segment_blueprints
from blueprint2d.core.segments import (
    end_of_segment,
    reverse_segment,
    reverse_segments,
    rotate,
    start_of_segment,
)
from blueprint2d.domain import Blueprint, Line, Point


@pytest.fixture
def square() -> Blueprint:
    return rectangle_blueprint(10, 10)


@pytest.fixture
def shifted_square() -> Blueprint:
    return rectangle_blueprint(10, 10, center=(5, 0))


@pytest.fixture
def tall_bar() -> Blueprint:
    return rectangle_blueprint(4, 20)


class TestSegments:
    """Tests for segment helper functions."""

    def test_ends(self) -> None:
        segment = (Line(Point(0, 0), Point(1, 0)), Line(Point(1, 0), Point(1, 1)))
        assert start_of_segment(segment) == Point(0, 0)
        assert end_of_segment(segment) == Point(1, 1)

    def test_reverse_segment(self) -> None:
        segment = (Line(Point(0, 0), Point(1, 0)), Line(Point(1, 0), Point(1, 1)))
        reversed_segment = reverse_segment(segment)
        assert start_of_segment(reversed_segment) == Point(1, 1)
        assert end_of_segment(reversed_segment) == Point(0, 0)
        assert reversed_segment[0] == Line(Point(1, 1), Point(1, 0))

    def test_reverse_segments(self) -> None:
        first = (Line(Point(0, 0), Point(1, 0)),)
        second = (Line(Point(1, 0), Point(0, 0)),)
        assert reverse_segments([first, second]) == [
            (Line(Point(0, 0), Point(1, 0)),),
            (Line(Point(1, 0), Point(0, 0)),),
        ]

    def test_rotate(self) -> None:
        assert rotate([1, 2, 3, 4], 2) == [3, 4, 1, 2]
        assert rotate([1, 2, 3], 0) == [1, 2, 3]


class TestSegmentBlueprints:
    """Tests for segment_blueprints function."""

    def test_disjoint_loops(self, square) -> None:
        assert segment_blueprints(square, rectangle_blueprint(4, 4, center=(20, 0))) is None

    def test_nested_loops(self) -> None:
        assert segment_blueprints(rectangle_blueprint(20, 20), circle_blueprint(3)) is None

    def test_single_touching_point(self, square) -> None:
        """Test that loops touching at one corner are left whole."""
        assert segment_blueprints(square, rectangle_blueprint(10, 10, center=(10, 10))) is None

    def test_crossing_loops(self, square, tall_bar) -> None:
        segmentation = segment_blueprints(square, tall_bar)
        assert segmentation is not None
        assert segmentation.intersection_count == 4
        assert len(segmentation.first) == 4
        assert len(segmentation.second) == 4
        assert not any(segment.is_boundary for segment in segmentation.first)
        assert not segmentation.identical

    def test_segments_chain_around_loop(self, square, tall_bar) -> None:
        """Test that every segment starts where the previous one ends."""
        segments = segment_blueprints(square, tall_bar).first
        for current, following in zip(segments, segments[1:] + segments[:1]):
            gap = end_of_segment(current.curves).distance_to(start_of_segment(following.curves))
            assert gap < 1e-9

    def test_overlapping_edges(self, square, shifted_square) -> None:
        """Test that shared edge pieces become boundary segments."""
        segmentation = segment_blueprints(square, shifted_square)
        assert segmentation is not None
        assert segmentation.intersection_count == 4
        assert len(segmentation.first) == 4
        assert sum(segment.is_boundary for segment in segmentation.first) == 2
        assert sum(segment.is_boundary for segment in segmentation.second) == 2
        for segment in segmentation.first:
            if segment.is_boundary:
                assert len(segment.curves) == 1
                assert segment.matching is not None

    def test_identical_loops(self, square) -> None:
        segmentation = segment_blueprints(square, square.clone())
        assert segmentation is not None
        assert segmentation.identical


class TestClassification:
    """Tests for segment classification."""

    def test_inside_and_outside(self, square, tall_bar) -> None:
        segmentation = segment_blueprints(square, tall_bar)
        positions = [s.position for s in classify_segments(segmentation.first, tall_bar)]
        assert positions.count(SegmentPosition.INSIDE) == 2
        assert positions.count(SegmentPosition.OUTSIDE) == 2

    def test_boundary_same_direction(self, square, shifted_square) -> None:
        segmentation = segment_blueprints(square, shifted_square)
        classified = classify_segments(segmentation.first, shifted_square)
        boundary = [s for s in classified if s.position is SegmentPosition.BOUNDARY]
        assert len(boundary) == 2
        assert all(s.same_direction is True for s in boundary)
        others = [s for s in classified if s.position is not SegmentPosition.BOUNDARY]
        assert all(s.same_direction is None for s in others)

    def test_boundary_opposite_direction(self) -> None:
        piece = Line(Point(0, 5), Point(2, 5))
        segment = IntersectionSegment((piece,), matching=piece.reversed())
        classified = classify_segment(segment, rectangle_blueprint(10, 10))
        assert classified.position is SegmentPosition.BOUNDARY
        assert classified.same_direction is False

    def test_single_inside_segment(self, square) -> None:
        segment = IntersectionSegment((Line(Point(-1, 0), Point(1, 0)),))
        assert classify_segment(segment, square).position is SegmentPosition.INSIDE

    def test_representative_point_skips_boundary_curves(self, square) -> None:
        """Test that a curve running along the other loop is not used to classify."""
        segment = (Line(Point(-5, 5), Point(-5, -5)), Line(Point(-5, -5), Point(-8, -5)))
        point = representative_point(segment, square, 1e-9)
        assert point == Point(-6.5, -5.0)
