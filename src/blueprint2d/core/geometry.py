"""Analytic intersection primitives for lines and circles.

This module provides the closed-form building blocks used by the curve
intersection engine:
- Segment/segment intersection, including collinear overlaps
- Line/circle intersection
- Circle/circle intersection
- Perpendicular vector computation

All functions are pure and stateless and work on plain points.
"""

import math

from blueprint2d.domain import Point

# Relative threshold under which two directions count as parallel
_PARALLEL_EPSILON = 1e-12


def cross(ax: float, ay: float, bx: float, by: float) -> float:
    """Z component of the cross product of two vectors."""
    return ax * by - ay * bx


def perpendicular_direction(p1: Point, p2: Point) -> tuple[float, float]:
    """Calculate the unit perpendicular vector to a line from p1 to p2.

    The perpendicular is rotated 90 degrees counter-clockwise from the
    direction vector (p2 - p1).

    Args:
        p1: Start point of line
        p2: End point of line

    Returns:
        Tuple (px, py) representing the unit perpendicular vector

    Raises:
        ValueError: If p1 and p2 are the same point (zero-length line)
    """
    dx = p2.x - p1.x
    dy = p2.y - p1.y

    length = math.hypot(dx, dy)
    if length == 0.0:
        raise ValueError("Cannot calculate perpendicular of zero-length line")

    # Rotate 90 degrees counter-clockwise: (x, y) -> (-y, x)
    return -dy / length, dx / length


def segment_intersection(
    p1: Point, p2: Point, p3: Point, p4: Point, tolerance: float
) -> tuple[list[float], tuple[float, float] | None]:
    """Intersect segment p1-p2 with segment p3-p4.

    Args:
        p1: First endpoint of segment 1
        p2: Second endpoint of segment 1
        p3: First endpoint of segment 2
        p4: Second endpoint of segment 2
        tolerance: Distance under which segments are considered touching

    Returns:
        A pair ``(parameters, overlap)``. ``parameters`` lists the crossing
        parameters along segment 1. ``overlap`` is the parameter range
        ``(t_start, t_end)`` of segment 1 shared with a collinear segment 2,
        or None.

    Examples:
        >>> segment_intersection(Point(0, 0), Point(2, 2), Point(0, 2), Point(2, 0), 1e-9)
        ([0.5], None)
    """
    dx1, dy1 = p2.x - p1.x, p2.y - p1.y
    dx2, dy2 = p4.x - p3.x, p4.y - p3.y
    length1 = math.hypot(dx1, dy1)
    length2 = math.hypot(dx2, dy2)
    if length1 == 0.0 or length2 == 0.0:
        return [], None

    denom = cross(dx1, dy1, dx2, dy2)
    ox, oy = p3.x - p1.x, p3.y - p1.y

    if abs(denom) <= _PARALLEL_EPSILON * length1 * length2:
        # Parallel: only collinear segments can meet
        if abs(cross(dx1, dy1, ox, oy)) / length1 > tolerance:
            return [], None
        length_sq = length1 * length1
        s3 = (ox * dx1 + oy * dy1) / length_sq
        s4 = ((p4.x - p1.x) * dx1 + (p4.y - p1.y) * dy1) / length_sq
        low = max(0.0, min(s3, s4))
        high = min(1.0, max(s3, s4))
        slack = tolerance / length1
        if high - low > slack:
            return [], (low, high)
        if high - low >= -slack:
            return [max(0.0, min(1.0, (low + high) / 2))], None
        return [], None

    t = cross(ox, oy, dx2, dy2) / denom
    u = cross(ox, oy, dx1, dy1) / denom

    slack1 = tolerance / length1
    slack2 = tolerance / length2
    if -slack1 <= t <= 1 + slack1 and -slack2 <= u <= 1 + slack2:
        return [max(0.0, min(1.0, t))], None

    return [], None


def line_circle_intersections(
    start: Point, end: Point, center: Point, radius: float, tolerance: float
) -> list[Point]:
    """Points where the infinite line through start and end meets a circle.

    A line within tolerance of tangency yields the single tangent point.
    """
    px, py = perpendicular_direction(start, end)
    # Signed distance from the center to the line, along the unit normal
    offset = (start.x - center.x) * px + (start.y - center.y) * py
    foot = Point(center.x + offset * px, center.y + offset * py)

    distance = abs(offset)
    if distance > radius + tolerance:
        return []
    if abs(distance - radius) <= tolerance:
        return [foot]

    half_chord = math.sqrt(radius * radius - distance * distance)
    ux, uy = py, -px
    return [
        Point(foot.x - half_chord * ux, foot.y - half_chord * uy),
        Point(foot.x + half_chord * ux, foot.y + half_chord * uy),
    ]


def circle_circle_intersections(
    center1: Point, radius1: float, center2: Point, radius2: float, tolerance: float
) -> list[Point]:
    """Points where two non-concentric circles meet.

    Tangent circles (within tolerance) yield a single point.
    """
    dx = center2.x - center1.x
    dy = center2.y - center1.y
    d = math.hypot(dx, dy)
    if d == 0.0:
        return []
    if d > radius1 + radius2 + tolerance or d < abs(radius1 - radius2) - tolerance:
        return []

    a = (d * d + radius1 * radius1 - radius2 * radius2) / (2 * d)
    base = Point(center1.x + a * dx / d, center1.y + a * dy / d)
    h_sq = radius1 * radius1 - a * a
    if h_sq <= 0.0 or math.sqrt(h_sq) <= tolerance:
        return [base]

    h = math.sqrt(h_sq)
    return [
        Point(base.x - h * dy / d, base.y + h * dx / d),
        Point(base.x + h * dy / d, base.y - h * dx / d),
    ]
