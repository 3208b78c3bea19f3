"""Fillets and chamfers on the corners of 2D shapes.

A corner is the joint between two consecutive curves of a loop. Both curves
are offset towards the inside of the turn; the offsets meet at the centre of
the fillet circle, and the curves are trimmed where that circle touches them.
A fillet joins the trimmed ends with a tangent arc, a chamfer with a line.

Only lines and arcs have exact offsets. Corners involving a Bezier curve,
straight joints and tangent joints are left unchanged, as are corners whose
curves are too short for the requested radius.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass

import structlog

from blueprint2d.core.intersections import intersect_curves
from blueprint2d.domain import (
    PRECISION_INTERSECTION,
    PRECISION_POINT,
    Arc,
    Blueprint,
    Blueprints,
    CompoundBlueprint,
    Curve2D,
    Line,
    Point,
    Shape2D,
)
from blueprint2d.exceptions import ComputationError, bug

logger = structlog.get_logger(__name__)

_COLLINEAR_SINE = 1e-10


@dataclass(frozen=True)
class Corner:
    """The joint between two consecutive curves of a loop."""

    first_curve: Curve2D
    second_curve: Curve2D

    @property
    def point(self) -> Point:
        return self.first_curve.last_point


CornerFilter = Callable[[Corner], bool]
CornerMaker = Callable[[Curve2D, Curve2D, float], list[Curve2D]]


def _unit(vector: tuple[float, float]) -> tuple[float, float]:
    length = math.hypot(*vector)
    if length == 0.0:
        return (0.0, 0.0)
    return (vector[0] / length, vector[1] / length)


def offset_curve(curve: Curve2D, distance: float) -> Curve2D | None:
    """The curve moved sideways, positive distances to the left of its direction.

    Returns:
        The offset curve, or None when the curve has no exact offset or the
        offset collapses
    """
    if isinstance(curve, Line):
        tx, ty = _unit(curve.derivative(0.0))
        if tx == 0.0 and ty == 0.0:
            return None
        nx, ny = -ty * distance, tx * distance
        return Line(
            Point(curve.start.x + nx, curve.start.y + ny),
            Point(curve.end.x + nx, curve.end.y + ny),
        )

    if isinstance(curve, Arc):
        # The left side of a counter-clockwise arc faces its centre
        radius = curve.radius - distance if curve.sweep > 0 else curve.radius + distance
        if radius <= 0.0:
            return None
        return Arc(curve.center, radius, curve.start_angle, curve.sweep)

    return None


def _remove_corner(
    first: Curve2D, second: Curve2D, radius: float
) -> tuple[Curve2D, Curve2D, Point] | None:
    """Trim two curves where a circle of the given radius touches both.

    Returns:
        The trimmed first curve, the trimmed second curve and the circle
        centre, or None when the corner cannot be rounded
    """
    t1 = _unit(first.derivative(1.0))
    t2 = _unit(second.derivative(0.0))
    sine = t1[0] * t2[1] - t1[1] * t2[0]
    if abs(sine) < _COLLINEAR_SINE:
        return None

    offset = abs(radius) if sine > 0 else -abs(radius)
    first_offset = offset_curve(first, offset)
    second_offset = offset_curve(second, offset)
    if first_offset is None or second_offset is None:
        return None

    try:
        crossings = intersect_curves(first_offset, second_offset).intersections
    except ComputationError:
        return None
    if not crossings:
        return None
    corner = first.last_point
    center = min(crossings, key=corner.distance_to)

    t_first, gap_first = first.project(center)
    t_second, gap_second = second.project(center)
    for gap in (gap_first, gap_second):
        if abs(gap - abs(radius)) > PRECISION_POINT:
            return None
    if t_first <= PRECISION_INTERSECTION or t_second >= 1.0 - PRECISION_INTERSECTION:
        return None

    return first.sub_curve(0.0, t_first), second.sub_curve(t_second, 1.0), center


def _fillet_arc(start: Point, end: Point, center: Point) -> Arc:
    start_angle = math.atan2(start.y - center.y, start.x - center.x)
    end_angle = math.atan2(end.y - center.y, end.x - center.x)
    sweep = (end_angle - start_angle + math.pi) % (2 * math.pi) - math.pi
    return Arc(center, center.distance_to(start), start_angle, sweep)


def fillet_curves(first: Curve2D, second: Curve2D, radius: float) -> list[Curve2D]:
    """Round the joint between two curves with a tangent arc.

    Args:
        first: Curve ending at the corner
        second: Curve starting at the corner
        radius: Radius of the fillet arc

    Returns:
        The trimmed first curve, the arc and the trimmed second curve, or
        both curves unchanged when the corner cannot be rounded
    """
    removed = _remove_corner(first, second, radius)
    if removed is None:
        return [first, second]

    trimmed_first, trimmed_second, center = removed
    arc = _fillet_arc(trimmed_first.last_point, trimmed_second.first_point, center)
    return [trimmed_first, arc, trimmed_second]


def chamfer_curves(first: Curve2D, second: Curve2D, radius: float) -> list[Curve2D]:
    """Cut the joint between two curves with a straight bevel.

    The bevel joins the points where a circle of the given radius, tangent to
    both curves, touches them.
    """
    removed = _remove_corner(first, second, radius)
    if removed is None:
        return [first, second]

    trimmed_first, trimmed_second, _ = removed
    bevel = Line(trimmed_first.last_point, trimmed_second.first_point)
    return [trimmed_first, bevel, trimmed_second]


def modify_corners(
    make_corner: CornerMaker,
    blueprint: Blueprint,
    radius: float,
    corner_filter: CornerFilter | None = None,
) -> Blueprint:
    """Apply a corner maker to every joint of a loop, the closing one included.

    Args:
        make_corner: Function replacing two curves by the modified corner
        blueprint: Loop to modify
        radius: Radius passed to the corner maker
        corner_filter: Optional predicate choosing the corners to modify

    Returns:
        A new blueprint
    """
    curves: list[Curve2D] = [blueprint.curves[0]]

    def corner(first: Curve2D, second: Curve2D) -> list[Curve2D]:
        if corner_filter is None or corner_filter(Corner(first, second)):
            return make_corner(first, second, radius)
        return [first, second]

    for second in blueprint.curves[1:]:
        if not curves:
            bug("modify_corners", "empty curve stack while modifying corners")
        curves.extend(corner(curves.pop(), second))

    closed = curves[0].first_point.distance_to(curves[-1].last_point) <= PRECISION_POINT
    if len(curves) > 1 and closed:
        last = curves.pop()
        first = curves.pop(0)
        closing = corner(last, first)
        # The trimmed first curve keeps its place at the start of the loop
        curves = [closing[-1], *curves, *closing[:-1]]

    logger.debug(
        "Corners modified",
        curves_before=len(blueprint.curves),
        curves_after=len(curves),
    )
    return Blueprint(tuple(curves))


def _modify_shape(
    make_corner: CornerMaker,
    shape: Shape2D,
    radius: float,
    corner_filter: CornerFilter | None,
) -> Shape2D:
    if shape is None:
        return None
    if isinstance(shape, Blueprint):
        return modify_corners(make_corner, shape, radius, corner_filter)
    if isinstance(shape, CompoundBlueprint):
        return CompoundBlueprint(
            tuple(
                modify_corners(make_corner, loop, radius, corner_filter)
                for loop in shape.blueprints
            )
        )
    if isinstance(shape, Blueprints):
        return Blueprints(
            tuple(_modify_shape(make_corner, item, radius, corner_filter) for item in shape)
        )
    bug("modify_corners", f"unhandled shape {type(shape).__name__}")


def fillet_2d(
    shape: Shape2D, radius: float, corner_filter: CornerFilter | None = None
) -> Shape2D:
    """Round the corners of a shape with arcs of the given radius.

    Holes are filleted like outer loops. A fillet that clips an outer loop
    into one of its holes is not detected.

    Args:
        shape: Shape to fillet, None for the empty shape
        radius: Fillet radius
        corner_filter: Optional predicate choosing the corners to round

    Returns:
        A new shape with the same structure
    """
    return _modify_shape(fillet_curves, shape, radius, corner_filter)


def chamfer_2d(
    shape: Shape2D, radius: float, corner_filter: CornerFilter | None = None
) -> Shape2D:
    """Bevel the corners of a shape, setting each cut back from its corner."""
    return _modify_shape(chamfer_curves, shape, radius, corner_filter)
