"""Ready-made blueprints for common profiles."""

import math

from blueprint2d.domain import Arc, Blueprint, Curve2D, Line, Point, PointLike, as_point
from blueprint2d.exceptions import InvalidBlueprintError


def polygon_blueprint(points: list[PointLike]) -> Blueprint:
    """A closed polygon through the given vertices.

    Raises:
        InvalidBlueprintError: If fewer than 3 vertices are given
    """
    vertices = [as_point(p) for p in points]
    if len(vertices) < 3:
        raise InvalidBlueprintError(f"a polygon needs at least 3 vertices, got {len(vertices)}")
    closing = vertices[1:] + vertices[:1]
    return Blueprint(tuple(Line(start, end) for start, end in zip(vertices, closing)))


def rectangle_blueprint(
    width: float, height: float, center: PointLike = (0.0, 0.0)
) -> Blueprint:
    """A counter-clockwise axis-aligned rectangle.

    Raises:
        InvalidBlueprintError: If width or height is not positive
    """
    if width <= 0 or height <= 0:
        raise InvalidBlueprintError(f"rectangle sides must be positive, got {width} x {height}")
    cx, cy = as_point(center).to_tuple()
    hw, hh = width / 2, height / 2
    return polygon_blueprint(
        [(cx - hw, cy - hh), (cx + hw, cy - hh), (cx + hw, cy + hh), (cx - hw, cy + hh)]
    )


def rounded_rectangle_blueprint(
    width: float, height: float, radius: float = 0.0, center: PointLike = (0.0, 0.0)
) -> Blueprint:
    """A counter-clockwise rectangle with circular corners.

    The radius is clamped to half the shorter side. Straight sides that
    shrink to nothing are left out.

    Raises:
        InvalidBlueprintError: If width or height is not positive
    """
    r = min(max(radius, 0.0), width / 2, height / 2)
    if r == 0.0:
        return rectangle_blueprint(width, height, center)

    cx, cy = as_point(center).to_tuple()
    hw, hh = width / 2, height / 2
    corners = [
        (Point(cx + hw - r, cy - hh + r), -math.pi / 2),
        (Point(cx + hw - r, cy + hh - r), 0.0),
        (Point(cx - hw + r, cy + hh - r), math.pi / 2),
        (Point(cx - hw + r, cy - hh + r), math.pi),
    ]

    curves: list[Curve2D] = []
    for position, (corner, angle) in enumerate(corners):
        arc = Arc(corner, r, angle, math.pi / 2)
        if curves and curves[-1].last_point.distance_to(arc.first_point) > 0.0:
            curves.append(Line(curves[-1].last_point, arc.first_point))
        curves.append(arc)
        if position == len(corners) - 1:
            first = curves[0].first_point
            if arc.last_point.distance_to(first) > 0.0:
                curves.append(Line(arc.last_point, first))
    return Blueprint(tuple(_drop_short_lines(curves)))


def _drop_short_lines(curves: list[Curve2D], tolerance: float = 1e-9) -> list[Curve2D]:
    return [c for c in curves if not (isinstance(c, Line) and c.length <= tolerance)]


def polysides_blueprint(radius: float, sides_count: int, sagitta: float = 0.0) -> Blueprint:
    """A regular polygon inscribed in a circle, optionally with bulging sides.

    The first vertex points up and vertices follow each other counter-clockwise.

    Args:
        radius: Radius of the circumscribed circle
        sides_count: Number of sides (at least 3)
        sagitta: Bulge of each side, positive outwards; 0 for straight sides

    Raises:
        InvalidBlueprintError: If the polygon is degenerate
    """
    if sides_count < 3 or radius <= 0:
        raise InvalidBlueprintError(
            f"a polygon needs 3+ sides and a positive radius, got {sides_count} and {radius}"
        )
    step = 2 * math.pi / sides_count
    vertices = [
        Point(radius * math.sin(-step * i), radius * math.cos(-step * i))
        for i in range(sides_count)
    ]
    if not sagitta:
        return polygon_blueprint(vertices)

    closing = vertices[1:] + vertices[:1]
    return Blueprint(
        tuple(Arc.from_sagitta(start, end, sagitta) for start, end in zip(vertices, closing))
    )


def circle_blueprint(radius: float, center: PointLike = (0.0, 0.0)) -> Blueprint:
    """A counter-clockwise circle made of a single arc.

    Raises:
        InvalidBlueprintError: If the radius is not positive
    """
    if radius <= 0:
        raise InvalidBlueprintError(f"circle radius must be positive, got {radius}")
    return Blueprint((Arc.circle(as_point(center), radius),))
