"""Converters from fontTools outlines to blueprints.

Glyph outlines are recorded with a ``RecordingPen`` and every contour is
turned into one closed blueprint of lines and Bezier curves.
"""

from typing import Any

from fontTools.pens.basePen import decomposeQuadraticSegment, decomposeSuperBezierSegment

from blueprint2d.domain import Bezier, Blueprint, Curve2D, Line, Point

# Points closer than this are merged while tracing outlines
_DUPLICATE_TOLERANCE = 1e-9


class _ContourBuilder:
    """Accumulates the curves of one contour."""

    def __init__(self, start: Point) -> None:
        self.start = start
        self.current = start
        self.curves: list[Curve2D] = []

    def line_to(self, point: Point) -> None:
        if point.distance_to(self.current) <= _DUPLICATE_TOLERANCE:
            return
        self.curves.append(Line(self.current, point))
        self.current = point

    def curve_to(self, *controls: Point) -> None:
        end = controls[-1]
        points = (self.current, *controls)
        if all(p.distance_to(self.current) <= _DUPLICATE_TOLERANCE for p in points):
            return
        if end.distance_to(self.current) <= _DUPLICATE_TOLERANCE and len(points) == 3:
            # A quadratic that returns to its start has no area, draw nothing
            return
        self.curves.append(Bezier(points))
        self.current = end

    def close(self) -> Blueprint | None:
        if self.current.distance_to(self.start) > _DUPLICATE_TOLERANCE:
            self.line_to(self.start)
        if not self.curves:
            return None
        return Blueprint(tuple(self.curves))


def _point(value: tuple[float, float]) -> Point:
    x, y = value
    return Point(float(x), float(y))


def recording_to_blueprints(recording: list[tuple[str, tuple[Any, ...]]]) -> list[Blueprint]:
    """Convert RecordingPen recording to a list of closed blueprints.

    The RecordingPen records drawing commands like:
    - ('moveTo', ((x, y),))
    - ('lineTo', ((x, y),))
    - ('qCurveTo', ((x1, y1), (x2, y2), ...))  # Quadratic
    - ('curveTo', ((x1, y1), (x2, y2), (x3, y3)))  # Cubic
    - ('closePath', ())

    Open contours are closed with a straight line.

    Args:
        recording: List of drawing commands from RecordingPen

    Returns:
        List of Blueprint objects, one per non-empty contour
    """
    blueprints: list[Blueprint] = []
    builder: _ContourBuilder | None = None

    def finish() -> None:
        nonlocal builder
        if builder is not None:
            blueprint = builder.close()
            if blueprint is not None:
                blueprints.append(blueprint)
            builder = None

    for command, args in recording:
        if command == "moveTo":
            finish()
            builder = _ContourBuilder(_point(args[0]))

        elif command == "lineTo" and builder is not None:
            builder.line_to(_point(args[0]))

        elif command == "qCurveTo":
            points = list(args)
            if points[-1] is None:
                # TrueType contour made only of off-curve points
                finish()
                off_curve = [_point(p) for p in points[:-1]]
                first, last = off_curve[0], off_curve[-1]
                start = Point((first.x + last.x) / 2, (first.y + last.y) / 2)
                builder = _ContourBuilder(start)
                points = [*points[:-1], start.to_tuple()]
            if builder is None:
                continue
            for control, end in decomposeQuadraticSegment(points):
                builder.curve_to(_point(control), _point(end))

        elif command == "curveTo" and builder is not None:
            for c1, c2, end in decomposeSuperBezierSegment(list(args)):
                builder.curve_to(_point(c1), _point(c2), _point(end))

        elif command in ("closePath", "endPath"):
            finish()

    finish()
    return blueprints
