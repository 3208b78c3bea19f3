"""Curve primitives that make up blueprint loops.

Three curve kinds are supported, all parametrized over ``[0, 1]``:
- Line: A straight segment
- Arc: A circular arc (a full circle is a single arc with a sweep of 2*pi)
- Bezier: A quadratic or cubic Bezier curve

Curves are immutable values. Every operation that "changes" a curve
(splitting, reversing, transforming) returns new curves.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from functools import cached_property
from typing import Any, ClassVar

from blueprint2d.domain import _bezier
from blueprint2d.domain.point import BoundingBox, Point
from blueprint2d.domain.precision import PRECISION_INTERSECTION
from blueprint2d.domain.transform import Transform2D
from blueprint2d.exceptions import PointNotOnCurveError

TWO_PI = 2.0 * math.pi

# Three point Gauss-Legendre rule on [0, 1], exact up to degree 5
_GAUSS_RULE = (
    (0.5 - math.sqrt(15.0) / 10.0, 5.0 / 18.0),
    (0.5, 8.0 / 18.0),
    (0.5 + math.sqrt(15.0) / 10.0, 5.0 / 18.0),
)


class Curve2D(ABC):
    """A parametric planar curve over ``[0, 1]``."""

    kind: ClassVar[str] = "curve"
    first_parameter: ClassVar[float] = 0.0
    last_parameter: ClassVar[float] = 1.0

    @property
    @abstractmethod
    def first_point(self) -> Point:
        """Point at the first parameter."""

    @property
    @abstractmethod
    def last_point(self) -> Point:
        """Point at the last parameter."""

    @abstractmethod
    def value(self, t: float) -> Point:
        """Point at parameter t."""

    @abstractmethod
    def derivative(self, t: float) -> tuple[float, float]:
        """First derivative vector at parameter t."""

    @abstractmethod
    def reversed(self) -> "Curve2D":
        """Same geometry traversed in the opposite direction."""

    @abstractmethod
    def sub_curve(self, t0: float, t1: float) -> "Curve2D":
        """Portion of the curve between parameters t0 < t1."""

    @abstractmethod
    def project(self, point: Point) -> tuple[float, float]:
        """Closest parameter on the curve and the distance to it."""

    @abstractmethod
    def transform(self, matrix: Transform2D) -> list["Curve2D"]:
        """Apply an affine transform.

        Returns a list because some curves cannot be represented exactly
        after a non-uniform transform and must be replaced by several pieces.
        """

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""

    @abstractmethod
    def _compute_bounding_box(self) -> BoundingBox: ...

    @property
    def params(self) -> tuple[float, float]:
        return (self.first_parameter, self.last_parameter)

    @cached_property
    def bounding_box(self) -> BoundingBox:
        return self._compute_bounding_box()

    def clone(self) -> "Curve2D":
        return replace(self)

    def mid_point(self) -> Point:
        return self.value(0.5)

    def tangent_at(self, position: float | Point) -> tuple[float, float]:
        """Derivative vector at a parameter or at a point lying on the curve.

        Raises:
            PointNotOnCurveError: If a point is given that is not on the curve
        """
        if isinstance(position, Point):
            position = self.parameter(position)
        return self.derivative(position)

    def parameter(self, point: Point, precision: float = PRECISION_INTERSECTION) -> float:
        """Parameter of a point lying on the curve.

        Args:
            point: Point to locate
            precision: Largest accepted distance between point and curve

        Returns:
            Parameter in [0, 1]

        Raises:
            PointNotOnCurveError: If the point is farther than precision
        """
        t, distance = self.project(point)
        if distance > precision:
            raise PointNotOnCurveError(
                f"Point ({point.x}, {point.y}) is {distance:.3g} away from the {self.kind}"
            )
        return t

    def distance_to(self, point: Point) -> float:
        return self.project(point)[1]

    def is_on_curve(self, point: Point, precision: float = PRECISION_INTERSECTION) -> bool:
        if not self.bounding_box.contains_point(point, precision):
            return False
        return self.distance_to(point) <= precision

    def split_at(
        self, points: list[Point], precision: float = PRECISION_INTERSECTION
    ) -> list["Curve2D"]:
        """Split the curve at points lying on it.

        Points at either end of the curve, and points repeating an earlier
        split location, are ignored.

        Raises:
            PointNotOnCurveError: If a point does not lie on the curve
        """
        parameters = [self.parameter(point, precision) for point in points]
        return self.split_at_parameters(parameters, precision)

    def split_at_parameters(
        self, parameters: list[float], precision: float = PRECISION_INTERSECTION
    ) -> list["Curve2D"]:
        """Split the curve at the given parameters, in curve order."""
        first, last = self.first_point, self.last_point
        kept: list[float] = []
        previous = first
        for t in sorted(parameters):
            if t <= 0.0 or t >= 1.0:
                continue
            point = self.value(t)
            if point.distance_to(previous) <= precision or point.distance_to(last) <= precision:
                continue
            if point.distance_to(first) <= precision:
                continue
            kept.append(t)
            previous = point

        if not kept:
            return [self]

        bounds = [0.0, *kept, 1.0]
        return [self.sub_curve(t0, t1) for t0, t1 in zip(bounds, bounds[1:])]

    def signed_area_contribution(self) -> float:
        """Contribution of this curve to the enclosed area (Green's theorem)."""
        total = 0.0
        for t, weight in _GAUSS_RULE:
            p = self.value(t)
            dx, dy = self.derivative(t)
            total += weight * (p.x * dy - p.y * dx)
        return total / 2.0

    def y_extrema_parameters(self) -> list[float]:
        """Parameters in (0, 1) where the curve turns vertically."""
        return []

    def ray_crossings(self, point: Point) -> int:
        """Count crossings with the horizontal ray running right from point.

        Uses the half-open rule (an end at exactly the ray's height counts
        as above it) so that joints shared by consecutive curves are counted
        once.
        """
        bounds = [0.0, *self.y_extrema_parameters(), 1.0]
        crossings = 0
        for t0, t1 in zip(bounds, bounds[1:]):
            y0 = self.value(t0).y
            y1 = self.value(t1).y
            if (y0 > point.y) == (y1 > point.y):
                continue
            if self._x_at_height(point.y, t0, t1) > point.x:
                crossings += 1
        return crossings

    def _x_at_height(self, y: float, t0: float, t1: float) -> float:
        """Bisect a y-monotone piece for the x coordinate at height y."""
        low, high = t0, t1
        low_above = self.value(low).y > y
        for _ in range(60):
            mid = (low + high) / 2
            if (self.value(mid).y > y) == low_above:
                low = mid
            else:
                high = mid
        return self.value((low + high) / 2).x


@dataclass(frozen=True)
class Line(Curve2D):
    """A straight segment from start to end."""

    kind: ClassVar[str] = "line"

    start: Point
    end: Point

    @property
    def first_point(self) -> Point:
        return self.start

    @property
    def last_point(self) -> Point:
        return self.end

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)

    def value(self, t: float) -> Point:
        u = 1.0 - t
        return Point(u * self.start.x + t * self.end.x, u * self.start.y + t * self.end.y)

    def derivative(self, t: float) -> tuple[float, float]:
        return (self.end.x - self.start.x, self.end.y - self.start.y)

    def reversed(self) -> "Line":
        return Line(self.end, self.start)

    def sub_curve(self, t0: float, t1: float) -> "Line":
        return Line(self.value(t0), self.value(t1))

    def project(self, point: Point) -> tuple[float, float]:
        dx = self.end.x - self.start.x
        dy = self.end.y - self.start.y

        length_sq = dx * dx + dy * dy
        if length_sq == 0.0:
            return 0.0, point.distance_to(self.start)

        # t = dot(point - start, end - start) / ||end - start||^2, clamped to the segment
        t = ((point.x - self.start.x) * dx + (point.y - self.start.y) * dy) / length_sq
        t = max(0.0, min(1.0, t))

        nearest = self.value(t)
        return t, point.distance_to(nearest)

    def transform(self, matrix: Transform2D) -> list[Curve2D]:
        return [Line(matrix.apply(self.start), matrix.apply(self.end))]

    def signed_area_contribution(self) -> float:
        return (self.start.x * self.end.y - self.end.x * self.start.y) / 2.0

    def ray_crossings(self, point: Point) -> int:
        xi, yi = self.start.x, self.start.y
        xj, yj = self.end.x, self.end.y
        if ((yi > point.y) != (yj > point.y)) and (
            point.x < (xj - xi) * (point.y - yi) / (yj - yi) + xi
        ):
            return 1
        return 0

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, "start": self.start.to_dict(), "end": self.end.to_dict()}

    def _compute_bounding_box(self) -> BoundingBox:
        return BoundingBox.from_points([self.start, self.end])


@dataclass(frozen=True)
class Arc(Curve2D):
    """A circular arc.

    Attributes:
        center: Center of the supporting circle
        radius: Radius of the supporting circle
        start_angle: Angle of the first point, in radians
        sweep: Signed angular extent in radians, positive counter-clockwise.
            A magnitude of 2*pi makes a full circle.
    """

    kind: ClassVar[str] = "arc"

    center: Point
    radius: float
    start_angle: float
    sweep: float

    def __post_init__(self) -> None:
        if not self.radius > 0.0:
            raise ValueError(f"Arc radius must be positive, got {self.radius}")
        if self.sweep == 0.0 or abs(self.sweep) > TWO_PI + 1e-12:
            raise ValueError(f"Arc sweep must be non-zero and at most 2*pi, got {self.sweep}")

    @classmethod
    def circle(cls, center: Point, radius: float, start_angle: float = 0.0) -> "Arc":
        """A full counter-clockwise circle."""
        return cls(center, radius, start_angle, TWO_PI)

    @classmethod
    def from_three_points(cls, start: Point, through: Point, end: Point) -> "Arc":
        """The arc from start to end passing through a third point.

        Raises:
            ValueError: If the points are collinear
        """
        ax, ay = start.x, start.y
        bx, by = through.x, through.y
        cx, cy = end.x, end.y
        d = 2.0 * (ax * (by - cy) + bx * (cy - ay) + cx * (ay - by))
        scale = max(start.distance_to(through), through.distance_to(end), 1.0)
        if abs(d) <= 1e-12 * scale * scale:
            raise ValueError("Cannot build an arc through collinear points")

        a_sq = ax * ax + ay * ay
        b_sq = bx * bx + by * by
        c_sq = cx * cx + cy * cy
        center = Point(
            (a_sq * (by - cy) + b_sq * (cy - ay) + c_sq * (ay - by)) / d,
            (a_sq * (cx - bx) + b_sq * (ax - cx) + c_sq * (bx - ax)) / d,
        )
        radius = center.distance_to(start)
        angle_start = math.atan2(ay - center.y, ax - center.x)
        angle_end = math.atan2(cy - center.y, cx - center.x)

        counter_clockwise = (bx - ax) * (cy - ay) - (by - ay) * (cx - ax) > 0
        if counter_clockwise:
            sweep = (angle_end - angle_start) % TWO_PI
        else:
            sweep = -((angle_start - angle_end) % TWO_PI)
        return cls(center, radius, angle_start, sweep)

    @classmethod
    def from_sagitta(cls, start: Point, end: Point, sagitta: float) -> "Arc":
        """The arc over the chord start-end bulging by sagitta.

        A positive sagitta bulges to the right of the start-to-end direction,
        which is outwards for a counter-clockwise loop.

        Raises:
            ValueError: If sagitta is zero or the chord is degenerate
        """
        chord = start.distance_to(end)
        if chord == 0.0 or sagitta == 0.0:
            raise ValueError("A sagitta arc needs a non-degenerate chord and bulge")
        ux = (end.x - start.x) / chord
        uy = (end.y - start.y) / chord
        through = Point(
            (start.x + end.x) / 2 + sagitta * uy,
            (start.y + end.y) / 2 - sagitta * ux,
        )
        return cls.from_three_points(start, through, end)

    @property
    def end_angle(self) -> float:
        return self.start_angle + self.sweep

    @property
    def is_full_circle(self) -> bool:
        return abs(abs(self.sweep) - TWO_PI) <= 1e-12

    @property
    def first_point(self) -> Point:
        return self.value(0.0)

    @property
    def last_point(self) -> Point:
        if self.is_full_circle:
            return self.first_point
        return self.value(1.0)

    def value(self, t: float) -> Point:
        theta = self.start_angle + t * self.sweep
        return Point(
            self.center.x + self.radius * math.cos(theta),
            self.center.y + self.radius * math.sin(theta),
        )

    def derivative(self, t: float) -> tuple[float, float]:
        theta = self.start_angle + t * self.sweep
        factor = self.radius * self.sweep
        return (-factor * math.sin(theta), factor * math.cos(theta))

    def parameter_of_angle(self, angle: float) -> float:
        """Parameter of a polar angle, values above 1 fall outside the arc."""
        if self.sweep > 0:
            delta = (angle - self.start_angle) % TWO_PI
        else:
            delta = (self.start_angle - angle) % TWO_PI
        return delta / abs(self.sweep)

    def reversed(self) -> "Arc":
        return Arc(self.center, self.radius, self.end_angle, -self.sweep)

    def sub_curve(self, t0: float, t1: float) -> "Arc":
        return Arc(
            self.center,
            self.radius,
            self.start_angle + t0 * self.sweep,
            (t1 - t0) * self.sweep,
        )

    def project(self, point: Point) -> tuple[float, float]:
        candidates = [
            (0.0, point.distance_to(self.first_point)),
            (1.0, point.distance_to(self.last_point)),
        ]
        rho = point.distance_to(self.center)
        if rho > 0.0:
            t = self.parameter_of_angle(math.atan2(point.y - self.center.y, point.x - self.center.x))
            if t <= 1.0:
                candidates.append((t, abs(rho - self.radius)))
        else:
            candidates.append((0.0, self.radius))
        return min(candidates, key=lambda candidate: candidate[1])

    def transform(self, matrix: Transform2D) -> list[Curve2D]:
        if not matrix.is_similarity():
            return [piece for bezier in self.to_beziers() for piece in bezier.transform(matrix)]

        center = matrix.apply(self.center)
        start = matrix.apply(self.first_point)
        sweep = self.sweep if matrix.determinant > 0 else -self.sweep
        return [
            Arc(
                center,
                self.radius * matrix.scale_factor,
                math.atan2(start.y - center.y, start.x - center.x),
                sweep,
            )
        ]

    def to_beziers(self) -> list["Bezier"]:
        """Approximate the arc with cubic Bezier curves, one per quarter turn."""
        count = max(1, math.ceil(abs(self.sweep) / (math.pi / 2) - 1e-9))
        step = self.sweep / count
        k = 4.0 / 3.0 * math.tan(step / 4.0) * self.radius

        beziers = []
        for i in range(count):
            theta0 = self.start_angle + i * step
            theta1 = theta0 + step
            p0 = self.value(i / count)
            p3 = self.value((i + 1) / count) if i + 1 < count else self.last_point
            beziers.append(
                Bezier(
                    (
                        p0,
                        Point(p0.x - k * math.sin(theta0), p0.y + k * math.cos(theta0)),
                        Point(p3.x + k * math.sin(theta1), p3.y - k * math.cos(theta1)),
                        p3,
                    )
                )
            )
        return beziers

    def signed_area_contribution(self) -> float:
        r = self.radius
        theta0 = self.start_angle
        theta1 = self.end_angle
        return 0.5 * (
            r * self.center.x * (math.sin(theta1) - math.sin(theta0))
            - r * self.center.y * (math.cos(theta1) - math.cos(theta0))
            + r * r * (theta1 - theta0)
        )

    def y_extrema_parameters(self) -> list[float]:
        return self._axis_parameters((math.pi / 2, 3 * math.pi / 2))

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind,
            "center": self.center.to_dict(),
            "radius": self.radius,
            "start_angle": self.start_angle,
            "sweep": self.sweep,
        }

    def _axis_parameters(self, angles: tuple[float, ...]) -> list[float]:
        parameters = [self.parameter_of_angle(angle) for angle in angles]
        return sorted(t for t in parameters if 1e-12 < t < 1.0 - 1e-12)

    def _compute_bounding_box(self) -> BoundingBox:
        points = [self.first_point, self.last_point]
        for t in self._axis_parameters((0.0, math.pi / 2, math.pi, 3 * math.pi / 2)):
            points.append(self.value(t))
        return BoundingBox.from_points(points)


@dataclass(frozen=True)
class Bezier(Curve2D):
    """A quadratic (3 control points) or cubic (4 control points) Bezier curve."""

    kind: ClassVar[str] = "bezier"

    points: tuple[Point, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(self.points))
        if len(self.points) not in (3, 4):
            raise ValueError(
                f"Expected 3 or 4 control points for a Bezier curve, got {len(self.points)}"
            )

    @property
    def degree(self) -> int:
        return len(self.points) - 1

    @property
    def first_point(self) -> Point:
        return self.points[0]

    @property
    def last_point(self) -> Point:
        return self.points[-1]

    @cached_property
    def _vectors(self) -> list[_bezier.Vec]:
        return [p.to_tuple() for p in self.points]

    @cached_property
    def _hodograph(self) -> list[_bezier.Vec]:
        return _bezier.hodograph(self._vectors)

    def value(self, t: float) -> Point:
        if t == 0.0:
            return self.points[0]
        if t == 1.0:
            return self.points[-1]
        x, y = _bezier.evaluate(self._vectors, t)
        return Point(x, y)

    def derivative(self, t: float) -> tuple[float, float]:
        return _bezier.evaluate(self._hodograph, t)

    def second_derivative(self, t: float) -> tuple[float, float]:
        return _bezier.evaluate(_bezier.hodograph(self._hodograph), t)

    def reversed(self) -> "Bezier":
        return Bezier(tuple(reversed(self.points)))

    def sub_curve(self, t0: float, t1: float) -> "Bezier":
        controls = _bezier.segment(self._vectors, t0, t1)
        return Bezier(tuple(Point(x, y) for x, y in controls))

    def project(self, point: Point) -> tuple[float, float]:
        samples = 16
        best_t = min(
            (i / samples for i in range(samples + 1)),
            key=lambda s: point.distance_to(self.value(s)),
        )

        t = best_t
        for _ in range(30):
            p = self.value(t)
            dx, dy = self.derivative(t)
            ddx, ddy = self.second_derivative(t)
            ex, ey = p.x - point.x, p.y - point.y
            slope = ex * dx + ey * dy
            curvature = dx * dx + dy * dy + ex * ddx + ey * ddy
            if curvature == 0.0:
                break
            step = slope / curvature
            t = max(0.0, min(1.0, t - step))
            if abs(step) < 1e-15:
                break

        candidates = [
            (t, point.distance_to(self.value(t))),
            (best_t, point.distance_to(self.value(best_t))),
        ]
        return min(candidates, key=lambda candidate: candidate[1])

    def transform(self, matrix: Transform2D) -> list[Curve2D]:
        return [Bezier(tuple(matrix.apply(p) for p in self.points))]

    def x_extrema_parameters(self) -> list[float]:
        return _bezier.extrema([p.x for p in self.points])

    def y_extrema_parameters(self) -> list[float]:
        return _bezier.extrema([p.y for p in self.points])

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, "points": [p.to_dict() for p in self.points]}

    def _compute_bounding_box(self) -> BoundingBox:
        parameters = self.x_extrema_parameters() + self.y_extrema_parameters()
        points = [self.first_point, self.last_point]
        points.extend(self.value(t) for t in parameters)
        return BoundingBox.from_points(points)


def curve_from_dict(data: dict[str, Any]) -> Curve2D:
    """Deserialize any curve produced by ``Curve2D.to_dict``.

    Raises:
        ValueError: If the curve type is unknown or its data is malformed
    """
    kind = data.get("type")
    try:
        if kind == Line.kind:
            return Line(Point.from_dict(data["start"]), Point.from_dict(data["end"]))
        if kind == Arc.kind:
            return Arc(
                Point.from_dict(data["center"]),
                float(data["radius"]),
                float(data["start_angle"]),
                float(data["sweep"]),
            )
        if kind == Bezier.kind:
            return Bezier(tuple(Point.from_dict(p) for p in data["points"]))
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed {kind} curve: {e}") from e
    raise ValueError(f"Unknown curve type: {kind!r}")
