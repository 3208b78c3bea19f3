"""Affine transformations of the plane."""

import math
from dataclasses import dataclass

from blueprint2d.domain.point import Point, PointLike, as_point

_SIMILARITY_EPSILON = 1e-12


@dataclass(frozen=True, slots=True)
class Transform2D:
    """An affine map ``(x, y) -> (a*x + b*y + e, c*x + d*y + f)``."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def translation(cls, dx: float, dy: float) -> "Transform2D":
        return cls(e=dx, f=dy)

    @classmethod
    def rotation(cls, angle_degrees: float, center: PointLike = (0.0, 0.0)) -> "Transform2D":
        """Counter-clockwise rotation around a center."""
        cx, cy = as_point(center).to_tuple()
        theta = math.radians(angle_degrees)
        cos_t, sin_t = math.cos(theta), math.sin(theta)
        return cls(
            a=cos_t,
            b=-sin_t,
            c=sin_t,
            d=cos_t,
            e=cx - cos_t * cx + sin_t * cy,
            f=cy - sin_t * cx - cos_t * cy,
        )

    @classmethod
    def scaling(cls, factor: float, center: PointLike = (0.0, 0.0)) -> "Transform2D":
        """Uniform scaling around a center."""
        cx, cy = as_point(center).to_tuple()
        return cls(a=factor, d=factor, e=cx * (1 - factor), f=cy * (1 - factor))

    @classmethod
    def point_mirror(cls, center: PointLike = (0.0, 0.0)) -> "Transform2D":
        """Reflection through a point (a half-turn)."""
        cx, cy = as_point(center).to_tuple()
        return cls(a=-1.0, d=-1.0, e=2 * cx, f=2 * cy)

    @classmethod
    def axis_mirror(
        cls, direction: PointLike, origin: PointLike = (0.0, 0.0)
    ) -> "Transform2D":
        """Reflection across the line through origin along direction.

        Raises:
            ValueError: If direction is the zero vector
        """
        ux, uy = _unit(as_point(direction))
        ox, oy = as_point(origin).to_tuple()
        a = 2 * ux * ux - 1
        b = 2 * ux * uy
        d = 2 * uy * uy - 1
        return cls(a=a, b=b, c=b, d=d, e=ox - a * ox - b * oy, f=oy - b * ox - d * oy)

    @classmethod
    def stretch(
        cls, ratio: float, direction: PointLike, origin: PointLike = (0.0, 0.0)
    ) -> "Transform2D":
        """Scale by ratio along direction, leaving the perpendicular axis unchanged.

        Raises:
            ValueError: If direction is the zero vector
        """
        ux, uy = _unit(as_point(direction))
        ox, oy = as_point(origin).to_tuple()
        k = ratio - 1
        a = 1 + k * ux * ux
        b = k * ux * uy
        d = 1 + k * uy * uy
        return cls(a=a, b=b, c=b, d=d, e=ox - a * ox - b * oy, f=oy - b * ox - d * oy)

    def apply(self, point: Point) -> Point:
        return Point(
            self.a * point.x + self.b * point.y + self.e,
            self.c * point.x + self.d * point.y + self.f,
        )

    def apply_vector(self, dx: float, dy: float) -> tuple[float, float]:
        """Apply the linear part only."""
        return (self.a * dx + self.b * dy, self.c * dx + self.d * dy)

    def then(self, other: "Transform2D") -> "Transform2D":
        """Compose: apply self first, then other."""
        return Transform2D(
            a=other.a * self.a + other.b * self.c,
            b=other.a * self.b + other.b * self.d,
            c=other.c * self.a + other.d * self.c,
            d=other.c * self.b + other.d * self.d,
            e=other.a * self.e + other.b * self.f + other.e,
            f=other.c * self.e + other.d * self.f + other.f,
        )

    @property
    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    @property
    def scale_factor(self) -> float:
        """Length scale of a similarity transform."""
        return math.sqrt(abs(self.determinant))

    def is_similarity(self) -> bool:
        """Check whether circles map to circles."""
        scale = max(abs(self.a), abs(self.b), abs(self.c), abs(self.d), 1.0)
        eps = _SIMILARITY_EPSILON * scale
        rotation_like = abs(self.a - self.d) <= eps and abs(self.b + self.c) <= eps
        reflection_like = abs(self.a + self.d) <= eps and abs(self.b - self.c) <= eps
        return rotation_like or reflection_like


def _unit(vector: Point) -> tuple[float, float]:
    length = math.hypot(vector.x, vector.y)
    if length == 0.0:
        raise ValueError("Direction vector must not be zero")
    return vector.x / length, vector.y / length
