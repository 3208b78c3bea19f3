"""Segment utilities.

A segment is a contiguous, ordered run of curves taken from one loop. It is
represented as a plain tuple of curves.
"""

from typing import Sequence, TypeVar

from blueprint2d.domain import Curve2D, Point

T = TypeVar("T")

Segment = tuple[Curve2D, ...]


def start_of_segment(segment: Segment) -> Point:
    return segment[0].first_point


def end_of_segment(segment: Segment) -> Point:
    return segment[-1].last_point


def reverse_segment(segment: Segment) -> Segment:
    """The same run of curves traversed backwards."""
    return tuple(curve.reversed() for curve in reversed(segment))


def reverse_segments(segments: Sequence[Segment]) -> list[Segment]:
    """A whole loop of segments traversed backwards."""
    return [reverse_segment(segment) for segment in reversed(segments)]


def rotate(items: Sequence[T], start: int) -> list[T]:
    """Rotate a cyclic sequence so that it begins at index start."""
    return [*items[start:], *items[:start]]


def clone_segment(segment: Segment) -> Segment:
    return tuple(curve.clone() for curve in segment)
