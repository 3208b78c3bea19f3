"""Assembly of retained segments into closed loops.

Segments are retained according to a policy, then stitched tip to tail.
Every retained segment ends where at least one other retained segment
starts, so each walk closes on its own starting point. A walk that gets
stuck means the segmentation or classification is wrong, which is reported
as a bug rather than a user error.
"""

from collections import defaultdict
from dataclasses import dataclass
from enum import Enum

import structlog

from blueprint2d.core.classification import ClassifiedSegment, SegmentPosition
from blueprint2d.core.hashing import PointIndex
from blueprint2d.core.segments import (
    Segment,
    clone_segment,
    end_of_segment,
    reverse_segment,
    start_of_segment,
)
from blueprint2d.domain import PRECISION_INTERSECTION, Blueprint
from blueprint2d.exceptions import bug

logger = structlog.get_logger(__name__)


class Retention(str, Enum):
    """What to do with a loop's segments lying inside the other loop."""

    KEEP = "keep"
    REMOVE = "remove"


@dataclass(frozen=True)
class RetentionPolicy:
    """Retention rule of a boolean operation.

    A loop whose inside segments are removed keeps its outside segments
    instead. When the first loop drops its inside segments but the second
    keeps them, the second loop's segments bound a removed region and are
    walked in reverse.
    """

    first_inside: Retention
    second_inside: Retention

    @property
    def reverses_second(self) -> bool:
        return self.first_inside is Retention.REMOVE and self.second_inside is Retention.KEEP


FUSE_POLICY = RetentionPolicy(Retention.REMOVE, Retention.REMOVE)
CUT_POLICY = RetentionPolicy(Retention.REMOVE, Retention.KEEP)
INTERSECT_POLICY = RetentionPolicy(Retention.KEEP, Retention.KEEP)


@dataclass(frozen=True)
class RetainedSegment:
    """A segment chosen for the output, tagged with its source loop (0 or 1)."""

    curves: Segment
    source: int


def _retains(position: SegmentPosition, rule: Retention) -> bool:
    if position is SegmentPosition.INSIDE:
        return rule is Retention.KEEP
    return rule is Retention.REMOVE


def select_segments(
    first: list[ClassifiedSegment],
    second: list[ClassifiedSegment],
    policy: RetentionPolicy,
) -> list[RetainedSegment]:
    """Apply a retention policy to the classified segments of both loops.

    Both loops must wind counter-clockwise. Shared boundary segments are
    only ever retained once, using the first loop's copy: it is kept when
    the second loop, as oriented for the output, runs the same way.

    Args:
        first: Segments of the first loop, classified against the second
        second: Segments of the second loop, classified against the first
        policy: Retention policy of the operation

    Returns:
        Retained segments, oriented for output
    """
    retained: list[RetainedSegment] = []
    for segment in first:
        if segment.position is SegmentPosition.BOUNDARY:
            if segment.same_direction != policy.reverses_second:
                retained.append(RetainedSegment(segment.curves, 0))
        elif _retains(segment.position, policy.first_inside):
            retained.append(RetainedSegment(segment.curves, 0))

    for segment in second:
        if segment.position is SegmentPosition.BOUNDARY:
            continue
        if _retains(segment.position, policy.second_inside):
            curves = reverse_segment(segment.curves) if policy.reverses_second else segment.curves
            retained.append(RetainedSegment(curves, 1))

    return retained


def stitch_segments(
    segments: list[RetainedSegment], precision: float = PRECISION_INTERSECTION
) -> list[Blueprint]:
    """Connect segments tip to tail into closed loops.

    From the current end point, a segment of the same source loop is
    preferred, then any other segment, then a reversed segment ending there.

    Args:
        segments: Retained segments
        precision: Tolerance for matching end points

    Returns:
        One blueprint per closed walk

    Raises:
        BooleanBugError: If a walk cannot be continued
    """
    index = PointIndex(precision)
    starts: dict[int, list[int]] = defaultdict(list)
    ends: dict[int, list[int]] = defaultdict(list)
    for position, segment in enumerate(segments):
        starts[index.add(start_of_segment(segment.curves))].append(position)
        ends[index.add(end_of_segment(segment.curves))].append(position)

    used = [False] * len(segments)
    loops: list[Blueprint] = []
    for seed, seed_segment in enumerate(segments):
        if used[seed]:
            continue
        used[seed] = True

        curves = list(clone_segment(seed_segment.curves))
        source = seed_segment.source
        origin = index.add(start_of_segment(seed_segment.curves))
        current = index.add(end_of_segment(seed_segment.curves))

        while current != origin:
            forward = [p for p in starts[current] if not used[p]]
            if forward:
                same_source = [p for p in forward if segments[p].source == source]
                chosen = (same_source or forward)[0]
                piece = segments[chosen].curves
            else:
                backward = [p for p in ends[current] if not used[p]]
                if not backward:
                    point = index.point(current)
                    bug(
                        "stitch_segments",
                        f"no retained segment continues the loop at ({point.x}, {point.y})",
                    )
                chosen = backward[0]
                piece = reverse_segment(segments[chosen].curves)

            used[chosen] = True
            source = segments[chosen].source
            curves.extend(clone_segment(piece))
            current = index.add(end_of_segment(piece))

        loops.append(Blueprint(tuple(curves)))

    logger.debug("Segments stitched", segments=len(segments), loops=len(loops))
    return loops
