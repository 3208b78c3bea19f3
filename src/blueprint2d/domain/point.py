"""Core geometric value types.

This module defines the small immutable types shared by every other layer:
- Point: A 2D point
- BoundingBox: An axis-aligned bounding box
- Orientation: Enum for loop winding direction
"""

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class Orientation(Enum):
    """Winding direction of a closed loop.

    Counter-clockwise loops have a positive signed area, clockwise loops a
    negative one.
    """

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts. Exact float equality is
    rarely what geometry code wants; use ``same_point`` from
    ``blueprint2d.core.hashing`` for tolerant comparison.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)


PointLike = Point | tuple[float, float]


def as_point(value: PointLike) -> Point:
    """Coerce a point or an (x, y) pair to a Point."""
    if isinstance(value, Point):
        return value
    x, y = value
    return Point(float(x), float(y))


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned bounding box.

    Attributes:
        x_min: Smallest x coordinate
        y_min: Smallest y coordinate
        x_max: Largest x coordinate
        y_max: Largest y coordinate
    """

    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @classmethod
    def from_points(cls, points: list[Point]) -> "BoundingBox":
        """Build the smallest box containing all points.

        Raises:
            ValueError: If points is empty
        """
        if not points:
            raise ValueError("Cannot build a bounding box from no points")
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(min(xs), min(ys), max(xs), max(ys))

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def center(self) -> Point:
        return Point((self.x_min + self.x_max) / 2, (self.y_min + self.y_max) / 2)

    @property
    def diagonal(self) -> float:
        return math.hypot(self.width, self.height)

    def union(self, other: "BoundingBox") -> "BoundingBox":
        """Smallest box containing both boxes."""
        return BoundingBox(
            min(self.x_min, other.x_min),
            min(self.y_min, other.y_min),
            max(self.x_max, other.x_max),
            max(self.y_max, other.y_max),
        )

    def is_out(self, other: "BoundingBox", tolerance: float = 0.0) -> bool:
        """Check whether the two boxes are separated by more than tolerance."""
        return (
            self.x_max + tolerance < other.x_min
            or other.x_max + tolerance < self.x_min
            or self.y_max + tolerance < other.y_min
            or other.y_max + tolerance < self.y_min
        )

    def contains_point(self, point: Point, tolerance: float = 0.0) -> bool:
        """Check whether a point lies in the box, boundary included."""
        return (
            self.x_min - tolerance <= point.x <= self.x_max + tolerance
            and self.y_min - tolerance <= point.y <= self.y_max + tolerance
        )

    def outside_point(self, padding: float = 1.0) -> Point:
        """A point guaranteed to lie outside the box."""
        return Point(self.x_max + padding + self.width, self.y_max + padding + self.height)
