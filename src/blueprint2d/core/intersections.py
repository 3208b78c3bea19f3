"""Curve intersection engine.

Pairs of lines and arcs are intersected in closed form, including their
coincident (overlapping) portions. Any pair involving a Bezier curve is
intersected numerically: the parameter ranges are subdivided while their
bounding boxes overlap, and the surviving candidates are refined with
Newton's method.
"""

import math
from dataclasses import dataclass, field
from itertools import combinations

import structlog

from blueprint2d.core.geometry import (
    circle_circle_intersections,
    line_circle_intersections,
    segment_intersection,
)
from blueprint2d.core.hashing import remove_duplicate_points, same_point
from blueprint2d.domain import (
    PRECISION_INTERSECTION,
    Arc,
    Bezier,
    Blueprint,
    Curve2D,
    Line,
    Point,
)
from blueprint2d.domain.curves import TWO_PI
from blueprint2d.exceptions import IntersectionError

logger = structlog.get_logger(__name__)

DEFAULT_SUBDIVISION_BUDGET = 20000


@dataclass
class IntersectionResult:
    """Everything two curves have in common.

    Attributes:
        intersections: Isolated meeting points
        common_segments: Pieces of the first curve that the second curve
            overlaps, oriented along the first curve
        common_segments_points: Endpoints of the common segments
    """

    intersections: list[Point] = field(default_factory=list)
    common_segments: list[Curve2D] = field(default_factory=list)
    common_segments_points: list[Point] = field(default_factory=list)

    @property
    def all_points(self) -> list[Point]:
        return self.intersections + self.common_segments_points

    def is_empty(self) -> bool:
        return not self.intersections and not self.common_segments


def intersect_curves(
    first: Curve2D,
    second: Curve2D,
    precision: float = PRECISION_INTERSECTION,
    budget: int = DEFAULT_SUBDIVISION_BUDGET,
) -> IntersectionResult:
    """Compute the intersection points and common segments of two curves.

    Zero-length common segments are reported as intersection points.

    Args:
        first: First curve
        second: Second curve
        precision: Distance under which curves are considered touching
        budget: Maximum box pairs examined for numeric intersections

    Returns:
        The intersection result

    Raises:
        IntersectionError: If the computation fails (code INTERSECTION_FAILED)
    """
    if first.bounding_box.is_out(second.bounding_box, precision):
        return IntersectionResult()

    try:
        points, common = _dispatch(first, second, precision, budget)
    except (ArithmeticError, ValueError) as e:
        raise IntersectionError(f"{first.kind}/{second.kind} intersection failed: {e}") from e

    result = IntersectionResult()
    for segment in common:
        if same_point(segment.first_point, segment.last_point, precision) and same_point(
            segment.first_point, segment.mid_point(), precision
        ):
            points.append(segment.first_point)
        else:
            result.common_segments.append(segment)
            result.common_segments_points.extend([segment.first_point, segment.last_point])

    result.intersections = remove_duplicate_points(points, precision)
    return result


def _dispatch(
    first: Curve2D, second: Curve2D, precision: float, budget: int
) -> tuple[list[Point], list[Curve2D]]:
    if isinstance(first, Line) and isinstance(second, Line):
        return _line_line(first, second, precision)
    if isinstance(first, Line) and isinstance(second, Arc):
        return _line_arc(first, second, precision), []
    if isinstance(first, Arc) and isinstance(second, Line):
        return _line_arc(second, first, precision), []
    if isinstance(first, Arc) and isinstance(second, Arc):
        return _arc_arc(first, second, precision)
    return _subdivide(first, second, precision, budget), []


def _line_line(first: Line, second: Line, precision: float) -> tuple[list[Point], list[Curve2D]]:
    parameters, overlap = segment_intersection(
        first.start, first.end, second.start, second.end, precision
    )
    points = [first.value(t) for t in parameters]
    common: list[Curve2D] = []
    if overlap is not None:
        common.append(first.sub_curve(*overlap))
    return points, common


def _line_arc(line: Line, arc: Arc, precision: float) -> list[Point]:
    if line.length == 0.0:
        return []
    candidates = line_circle_intersections(
        line.start, line.end, arc.center, arc.radius, precision
    )
    return [p for p in candidates if line.is_on_curve(p, precision) and arc.is_on_curve(p, precision)]


def _arc_arc(first: Arc, second: Arc, precision: float) -> tuple[list[Point], list[Curve2D]]:
    if same_point(first.center, second.center, precision):
        if abs(first.radius - second.radius) > precision:
            return [], []
        return _concentric_overlap(first, second, precision)

    candidates = circle_circle_intersections(
        first.center, first.radius, second.center, second.radius, precision
    )
    return [
        p for p in candidates if first.is_on_curve(p, precision) and second.is_on_curve(p, precision)
    ], []


def _angular_interval(arc: Arc) -> tuple[float, float]:
    """Counter-clockwise angular range covered by an arc."""
    if arc.sweep > 0:
        return arc.start_angle, arc.start_angle + arc.sweep
    return arc.start_angle + arc.sweep, arc.start_angle


def _concentric_overlap(
    first: Arc, second: Arc, precision: float
) -> tuple[list[Point], list[Curve2D]]:
    """Shared portions of two arcs lying on the same circle.

    Overlaps are split at any endpoint of either arc falling inside them so
    that both arcs can later be cut into pieces matching one to one.
    """
    low1, high1 = _angular_interval(first)
    low2, high2 = _angular_interval(second)
    span = abs(first.sweep)
    angular_slack = precision / first.radius

    points: list[Point] = []
    common: list[Curve2D] = []
    # Shifted copies of the second range are disjoint, so each yields at most one overlap
    for turn in (-1, 0, 1):
        low = max(low1, low2 + turn * TWO_PI)
        high = min(high1, high2 + turn * TWO_PI)
        if high - low > angular_slack:
            if first.sweep > 0:
                t0, t1 = (low - low1) / span, (high - low1) / span
            else:
                t0, t1 = (high1 - high) / span, (high1 - low) / span
            piece = first.sub_curve(max(0.0, t0), min(1.0, t1))
            common.extend(_split_overlap(piece, first, second, precision))
        elif high - low >= -angular_slack:
            points.append(
                Point(
                    first.center.x + first.radius * math.cos(low),
                    first.center.y + first.radius * math.sin(low),
                )
            )
    return points, common


def _split_overlap(piece: Arc, first: Arc, second: Arc, precision: float) -> list[Curve2D]:
    inner = [
        p
        for p in (second.first_point, second.last_point, first.first_point, first.last_point)
        if piece.is_on_curve(p, precision)
    ]
    return piece.split_at(inner, precision)


def _subdivide(first: Curve2D, second: Curve2D, precision: float, budget: int) -> list[Point]:
    """Bounding box subdivision with Newton refinement."""
    scale = max(first.bounding_box.diagonal, second.bounding_box.diagonal, 1.0)
    size_limit = 1e-4 * scale

    candidates: list[tuple[float, float]] = []
    stack = [(0.0, 1.0, 0.0, 1.0)]
    examined = 0
    while stack:
        examined += 1
        if examined > budget:
            raise IntersectionError(
                f"{first.kind}/{second.kind} subdivision exceeded {budget} box pairs "
                "(overlapping curves?)"
            )
        a0, a1, b0, b1 = stack.pop()
        box1 = first.sub_curve(a0, a1).bounding_box
        box2 = second.sub_curve(b0, b1).bounding_box
        if box1.is_out(box2, precision):
            continue

        small1 = max(box1.width, box1.height) <= size_limit
        small2 = max(box2.width, box2.height) <= size_limit
        if small1 and small2:
            candidates.append(((a0 + a1) / 2, (b0 + b1) / 2))
            continue

        a_mid = (a0 + a1) / 2
        b_mid = (b0 + b1) / 2
        a_ranges = [(a0, a1)] if small1 else [(a0, a_mid), (a_mid, a1)]
        b_ranges = [(b0, b1)] if small2 else [(b0, b_mid), (b_mid, b1)]
        stack.extend((sa, ea, sb, eb) for sa, ea in a_ranges for sb, eb in b_ranges)

    points = []
    for s, t in candidates:
        refined = _refine(first, second, s, t, precision)
        if refined is not None:
            points.append(refined)

    logger.debug(
        "Subdivision intersection",
        first=first.kind,
        second=second.kind,
        examined=examined,
        candidates=len(candidates),
        points=len(points),
    )
    return remove_duplicate_points(points, precision)


def _refine(
    first: Curve2D, second: Curve2D, s: float, t: float, precision: float
) -> Point | None:
    """Solve first(s) == second(t) by Newton iterations from a candidate."""
    for _ in range(50):
        p = first.value(s)
        q = second.value(t)
        fx, fy = p.x - q.x, p.y - q.y
        if math.hypot(fx, fy) <= precision * 1e-3:
            break
        ax, ay = first.derivative(s)
        bx, by = second.derivative(t)
        # Solve [[ax, -bx], [ay, -by]] . (ds, dt) = -(fx, fy) by Cramer's rule
        det = bx * ay - ax * by
        if det == 0.0:
            break
        ds = (fx * by - bx * fy) / det
        dt = (ay * fx - ax * fy) / det
        s = max(0.0, min(1.0, s + ds))
        t = max(0.0, min(1.0, t + dt))
        if abs(ds) < 1e-16 and abs(dt) < 1e-16:
            break

    p = first.value(s)
    q = second.value(t)
    if p.distance_to(q) > precision:
        return None
    return Point((p.x + q.x) / 2, (p.y + q.y) / 2)


def self_intersections(
    curve: Curve2D, precision: float = PRECISION_INTERSECTION, budget: int = DEFAULT_SUBDIVISION_BUDGET
) -> list[Point]:
    """Points where a single curve crosses itself.

    Lines and arcs never do. A Bezier curve is cut at its x and y extrema
    into monotone pieces, which are intersected pairwise.

    Raises:
        IntersectionError: If the computation fails (code SELF_INTERSECTION_FAILED)
    """
    if not isinstance(curve, Bezier):
        return []

    parameters = sorted(set(curve.x_extrema_parameters() + curve.y_extrema_parameters()))
    pieces = curve.split_at_parameters(parameters, precision)
    points: list[Point] = []
    try:
        for (i, first), (j, second) in combinations(enumerate(pieces), 2):
            shared = [first.last_point] if j == i + 1 else []
            result = intersect_curves(first, second, precision, budget)
            for point in result.all_points:
                if not any(same_point(point, joint, precision * 10) for joint in shared):
                    points.append(point)
    except IntersectionError as e:
        raise IntersectionError(e.message, code="SELF_INTERSECTION_FAILED") from e
    return remove_duplicate_points(points, precision)


def blueprints_intersect(
    first: Blueprint, second: Blueprint, precision: float = PRECISION_INTERSECTION
) -> bool:
    """Check whether any curve of one blueprint meets any curve of the other."""
    if first.bounding_box.is_out(second.bounding_box, precision):
        return False
    for curve in first.curves:
        for other in second.curves:
            if not intersect_curves(curve, other, precision).is_empty():
                return True
    return False


def blueprint_self_intersections(
    blueprint: Blueprint,
    precision: float = PRECISION_INTERSECTION,
    budget: int = DEFAULT_SUBDIVISION_BUDGET,
) -> list[Point]:
    """Points where a blueprint loop crosses or touches itself.

    The joints shared by consecutive curves are not reported.

    Args:
        blueprint: The loop to check
        precision: Distance under which curves are considered touching
        budget: Maximum box pairs examined for numeric intersections

    Returns:
        Offending points, without duplicates
    """
    curves = blueprint.curves
    count = len(curves)
    closed = blueprint.is_closed()
    points: list[Point] = []

    for curve in curves:
        points.extend(self_intersections(curve, precision, budget))

    for i, j in combinations(range(count), 2):
        first, second = curves[i], curves[j]
        joints = []
        if j == i + 1:
            joints.append(first.last_point)
        if closed and i == 0 and j == count - 1:
            joints.append(first.first_point)

        result = intersect_curves(first, second, precision, budget)
        points.extend(
            point
            for point in result.intersections
            if not any(same_point(point, joint, precision * 10) for joint in joints)
        )
        if result.common_segments:
            points.extend(result.common_segments_points)

    return remove_duplicate_points(points, precision)
