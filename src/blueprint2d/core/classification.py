"""Classification of segments against the other loop."""

from dataclasses import dataclass
from enum import Enum

from blueprint2d.core.segmentation import IntersectionSegment
from blueprint2d.core.segments import Segment
from blueprint2d.domain import PRECISION_INTERSECTION, Blueprint, Point


class SegmentPosition(Enum):
    """Where a segment lies relative to the other loop."""

    INSIDE = "inside"
    OUTSIDE = "outside"
    BOUNDARY = "boundary"


@dataclass(frozen=True)
class ClassifiedSegment:
    """A segment with its position relative to the other loop.

    Attributes:
        curves: The curves of the segment
        position: Inside, outside or on the boundary of the other loop
        same_direction: For boundary segments, whether the other loop runs
            along the segment in the same direction; None otherwise
    """

    curves: Segment
    position: SegmentPosition
    same_direction: bool | None = None


def representative_point(segment: Segment, other: Blueprint, precision: float) -> Point:
    """Mid point of the first curve of a segment that does not touch the other loop."""
    for curve in segment:
        middle = curve.mid_point()
        if not other.is_on_boundary(middle, precision):
            return middle
    return segment[0].mid_point()


def classify_segment(
    segment: IntersectionSegment,
    other: Blueprint,
    precision: float = PRECISION_INTERSECTION,
) -> ClassifiedSegment:
    """Classify one segment against the other loop.

    Args:
        segment: Segment to classify
        other: The loop it is compared against
        precision: Tolerance for on-boundary checks

    Returns:
        The classified segment
    """
    if segment.matching is not None:
        piece = segment.curves[0]
        dx, dy = piece.derivative(0.5)
        t, _ = segment.matching.project(piece.mid_point())
        ox, oy = segment.matching.derivative(t)
        return ClassifiedSegment(
            segment.curves, SegmentPosition.BOUNDARY, same_direction=dx * ox + dy * oy > 0.0
        )

    point = representative_point(segment.curves, other, precision)
    position = SegmentPosition.INSIDE if other.is_inside(point, precision) else SegmentPosition.OUTSIDE
    return ClassifiedSegment(segment.curves, position)


def classify_segments(
    segments: list[IntersectionSegment],
    other: Blueprint,
    precision: float = PRECISION_INTERSECTION,
) -> list[ClassifiedSegment]:
    return [classify_segment(segment, other, precision) for segment in segments]
