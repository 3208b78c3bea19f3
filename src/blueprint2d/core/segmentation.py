"""Segmentation of two loops at their intersection points.

Both loops are cut at every point where they meet. The resulting sub-curves
are grouped into segments running from one intersection point to the next.
Sub-curves that coincide with a sub-curve of the other loop become
single-curve boundary segments and remember their counterpart.
"""

from dataclasses import dataclass

import structlog

from blueprint2d.core.hashing import PointIndex, SegmentIndex
from blueprint2d.core.intersections import DEFAULT_SUBDIVISION_BUDGET, intersect_curves
from blueprint2d.core.segments import Segment, rotate
from blueprint2d.domain import PRECISION_INTERSECTION, Blueprint, Curve2D, Point
from blueprint2d.exceptions import bug

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class IntersectionSegment:
    """A segment of one loop, paired with its coincident twin if it has one.

    Attributes:
        curves: The curves of the segment, in loop order
        matching: For boundary segments, the coincident sub-curve of the
            other loop as that loop runs; None otherwise
    """

    curves: Segment
    matching: Curve2D | None = None

    @property
    def is_boundary(self) -> bool:
        return self.matching is not None


@dataclass
class LoopSegmentation:
    """Both loops cut into segments at their shared points."""

    first: list[IntersectionSegment]
    second: list[IntersectionSegment]
    intersection_count: int

    @property
    def identical(self) -> bool:
        """True when every segment of both loops lies on the other loop."""
        return all(s.is_boundary for s in self.first) and all(s.is_boundary for s in self.second)


def segment_blueprints(
    first: Blueprint,
    second: Blueprint,
    precision: float = PRECISION_INTERSECTION,
    budget: int = DEFAULT_SUBDIVISION_BUDGET,
) -> LoopSegmentation | None:
    """Cut two closed loops into segments at their intersection points.

    Args:
        first: First closed loop
        second: Second closed loop
        precision: Intersection tolerance
        budget: Maximum box pairs examined for numeric intersections

    Returns:
        The segmentation, or None if the loops share fewer than two points
        and no common segment (they must then be compared as wholes)

    Raises:
        IntersectionError: If a curve intersection fails
    """
    index = PointIndex(precision)
    first_points: list[list[Point]] = [[] for _ in first.curves]
    second_points: list[list[Point]] = [[] for _ in second.curves]
    has_common = False

    for i, curve in enumerate(first.curves):
        for j, other in enumerate(second.curves):
            result = intersect_curves(curve, other, precision, budget)
            if result.is_empty():
                continue
            points = result.all_points
            first_points[i].extend(points)
            second_points[j].extend(points)
            has_common = has_common or bool(result.common_segments)
            for point in points:
                index.add(point)

    logger.debug(
        "Loops intersected",
        points=len(index),
        common=has_common,
        first_curves=len(first.curves),
        second_curves=len(second.curves),
    )

    if len(index) < 2 and not has_common:
        return None

    split_tolerance = precision * 100
    first_pieces = _split_loop(first, first_points, split_tolerance)
    second_pieces = _split_loop(second, second_points, split_tolerance)

    first_matches, second_matches = _match_pieces(first_pieces, second_pieces, index, precision)

    return LoopSegmentation(
        first=_group_segments(first_pieces, first_matches, index),
        second=_group_segments(second_pieces, second_matches, index),
        intersection_count=len(index),
    )


def _split_loop(
    blueprint: Blueprint, points_per_curve: list[list[Point]], precision: float
) -> list[Curve2D]:
    pieces: list[Curve2D] = []
    for curve, points in zip(blueprint.curves, points_per_curve):
        pieces.extend(curve.split_at(points, precision) if points else [curve])
    return pieces


def _match_pieces(
    first_pieces: list[Curve2D],
    second_pieces: list[Curve2D],
    index: PointIndex,
    precision: float,
) -> tuple[list[Curve2D | None], list[Curve2D | None]]:
    """Pair up sub-curves of the two loops that coincide."""
    candidates: SegmentIndex[int] = SegmentIndex()
    for position, piece in enumerate(second_pieces):
        ids = _endpoint_ids(piece, index)
        if ids is not None:
            candidates.add(*ids, position)

    first_matches: list[Curve2D | None] = [None] * len(first_pieces)
    second_matches: list[Curve2D | None] = [None] * len(second_pieces)
    for position, piece in enumerate(first_pieces):
        ids = _endpoint_ids(piece, index)
        if ids is None:
            continue
        middle = piece.mid_point()
        for other_position in candidates.get(*ids):
            other = second_pieces[other_position]
            if second_matches[other_position] is None and other.is_on_curve(middle, precision * 100):
                first_matches[position] = other
                second_matches[other_position] = piece
                break

    return first_matches, second_matches


def _endpoint_ids(piece: Curve2D, index: PointIndex) -> tuple[int, int] | None:
    first_id = index.find(piece.first_point)
    last_id = index.find(piece.last_point)
    if first_id is None or last_id is None:
        return None
    return first_id, last_id


def _group_segments(
    pieces: list[Curve2D], matches: list[Curve2D | None], index: PointIndex
) -> list[IntersectionSegment]:
    """Group a loop's pieces into runs between intersection points."""
    start = next(
        (i for i, piece in enumerate(pieces) if index.find(piece.first_point) is not None),
        None,
    )
    if start is None:
        bug("segment_blueprints", "no piece of a loop starts at an intersection point")

    segments: list[IntersectionSegment] = []
    current: list[Curve2D] = []
    for piece, match in rotate(list(zip(pieces, matches)), start):
        if match is not None:
            if current:
                bug("segment_blueprints", "boundary piece does not start at an intersection point")
            segments.append(IntersectionSegment((piece,), match))
            continue
        current.append(piece)
        if index.find(piece.last_point) is not None:
            segments.append(IntersectionSegment(tuple(current)))
            current = []

    if current:
        bug("segment_blueprints", "loop does not end on an intersection point")
    return segments
