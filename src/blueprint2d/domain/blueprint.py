"""Profile types built from curves.

This module defines the shapes that boolean operations consume and produce:
- Blueprint: A single loop of connected curves
- CompoundBlueprint: An outer loop with zero or more holes
- Blueprints: A collection of disjoint blueprints or compound blueprints
- Shape2D: Any of the above, or None for the empty shape
"""

from dataclasses import dataclass
from functools import cached_property, reduce
from typing import Any, Iterator, Union

from blueprint2d.domain.curves import Curve2D, curve_from_dict
from blueprint2d.domain.point import BoundingBox, Orientation, Point, PointLike, as_point
from blueprint2d.domain.precision import PRECISION_INTERSECTION, PRECISION_POINT
from blueprint2d.domain.transform import Transform2D
from blueprint2d.exceptions import InvalidBlueprintError


class _Transformable:
    """Convenience transforms built on a single ``transform`` method."""

    def transform(self, matrix: Transform2D) -> Any:
        raise NotImplementedError

    def translate(self, dx: float | PointLike, dy: float = 0.0) -> Any:
        """Move by a vector, given either as (dx, dy) or as a point."""
        if not isinstance(dx, (int, float)):
            dx, dy = as_point(dx).to_tuple()
        return self.transform(Transform2D.translation(float(dx), dy))

    def rotate(self, angle_degrees: float, center: PointLike = (0.0, 0.0)) -> Any:
        """Rotate counter-clockwise around a center."""
        return self.transform(Transform2D.rotation(angle_degrees, center))

    def scale(self, factor: float, center: PointLike = (0.0, 0.0)) -> Any:
        return self.transform(Transform2D.scaling(factor, center))

    def mirror(self, center: PointLike = (0.0, 0.0)) -> Any:
        """Reflect through a point."""
        return self.transform(Transform2D.point_mirror(center))

    def mirror_axis(self, direction: PointLike, origin: PointLike = (0.0, 0.0)) -> Any:
        """Reflect across the line through origin along direction."""
        return self.transform(Transform2D.axis_mirror(direction, origin))

    def stretch(
        self, ratio: float, direction: PointLike, origin: PointLike = (0.0, 0.0)
    ) -> Any:
        return self.transform(Transform2D.stretch(ratio, direction, origin))


@dataclass(frozen=True)
class Blueprint(_Transformable):
    """An ordered sequence of curves, each starting where the previous ends.

    Attributes:
        curves: The curves, in traversal order
    """

    curves: tuple[Curve2D, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "curves", tuple(self.curves))
        if not self.curves:
            raise InvalidBlueprintError("a blueprint needs at least one curve")
        for index, (current, following) in enumerate(zip(self.curves, self.curves[1:])):
            gap = current.last_point.distance_to(following.first_point)
            if gap > PRECISION_POINT:
                raise InvalidBlueprintError(
                    f"curve {index + 1} does not start where curve {index} ends (gap {gap:.3g})"
                )

    @property
    def first_point(self) -> Point:
        return self.curves[0].first_point

    @property
    def last_point(self) -> Point:
        return self.curves[-1].last_point

    def is_closed(self, precision: float = PRECISION_POINT) -> bool:
        return self.first_point.distance_to(self.last_point) <= precision

    @cached_property
    def bounding_box(self) -> BoundingBox:
        return reduce(BoundingBox.union, (curve.bounding_box for curve in self.curves))

    def signed_area(self) -> float:
        """Signed enclosed area, positive for counter-clockwise loops.

        Only meaningful for closed blueprints.
        """
        return sum(curve.signed_area_contribution() for curve in self.curves)

    def area(self) -> float:
        return abs(self.signed_area())

    @cached_property
    def orientation(self) -> Orientation:
        if self.signed_area() >= 0.0:
            return Orientation.COUNTER_CLOCKWISE
        return Orientation.CLOCKWISE

    def is_on_boundary(self, point: Point, precision: float = PRECISION_INTERSECTION) -> bool:
        return any(curve.is_on_curve(point, precision) for curve in self.curves)

    def is_inside(self, point: Point, precision: float = PRECISION_INTERSECTION) -> bool:
        """Check whether a point lies strictly inside the closed loop.

        Casts a horizontal ray from the point to the right and counts
        crossings with the loop. Odd count means inside, even means outside.
        Points on the loop itself are never inside.

        Args:
            point: The point to test
            precision: Distance under which a point counts as on the loop

        Returns:
            True if point is inside the loop, False otherwise
        """
        if not self.bounding_box.contains_point(point, precision):
            return False
        if self.is_on_boundary(point, precision):
            return False
        crossings = sum(curve.ray_crossings(point) for curve in self.curves)
        return crossings % 2 == 1

    def clone(self) -> "Blueprint":
        return Blueprint(tuple(curve.clone() for curve in self.curves))

    def reversed(self) -> "Blueprint":
        return Blueprint(tuple(curve.reversed() for curve in reversed(self.curves)))

    def oriented(self, orientation: Orientation) -> "Blueprint":
        """This loop, reversed if needed to wind in the given direction."""
        if self.orientation == orientation:
            return self
        return self.reversed()

    def transform(self, matrix: Transform2D) -> "Blueprint":
        return Blueprint(
            tuple(piece for curve in self.curves for piece in curve.transform(matrix))
        )

    def loops(self) -> list["Blueprint"]:
        return [self]

    def to_dict(self) -> dict[str, Any]:
        return {"type": "blueprint", "curves": [curve.to_dict() for curve in self.curves]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Blueprint":
        return cls(tuple(curve_from_dict(curve) for curve in data["curves"]))


@dataclass(frozen=True)
class CompoundBlueprint(_Transformable):
    """A region with holes: the first blueprint is the outer boundary.

    Attributes:
        blueprints: Outer loop followed by the hole loops
    """

    blueprints: tuple[Blueprint, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "blueprints", tuple(self.blueprints))
        if not self.blueprints:
            raise InvalidBlueprintError("a compound blueprint needs an outer loop")

    @property
    def outer(self) -> Blueprint:
        return self.blueprints[0]

    @property
    def holes(self) -> tuple[Blueprint, ...]:
        return self.blueprints[1:]

    @property
    def bounding_box(self) -> BoundingBox:
        return self.outer.bounding_box

    def area(self) -> float:
        return self.outer.area() - sum(hole.area() for hole in self.holes)

    def is_inside(self, point: Point, precision: float = PRECISION_INTERSECTION) -> bool:
        if not self.outer.is_inside(point, precision):
            return False
        return not any(
            hole.is_inside(point, precision) or hole.is_on_boundary(point, precision)
            for hole in self.holes
        )

    def clone(self) -> "CompoundBlueprint":
        return CompoundBlueprint(tuple(blueprint.clone() for blueprint in self.blueprints))

    def transform(self, matrix: Transform2D) -> "CompoundBlueprint":
        return CompoundBlueprint(tuple(blueprint.transform(matrix) for blueprint in self.blueprints))

    def loops(self) -> list[Blueprint]:
        return list(self.blueprints)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "compound",
            "blueprints": [blueprint.to_dict() for blueprint in self.blueprints],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CompoundBlueprint":
        return cls(tuple(Blueprint.from_dict(item) for item in data["blueprints"]))


@dataclass(frozen=True)
class Blueprints(_Transformable):
    """A collection of separate regions.

    Attributes:
        blueprints: The regions, simple or with holes
    """

    blueprints: tuple[Blueprint | CompoundBlueprint, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "blueprints", tuple(self.blueprints))

    def __len__(self) -> int:
        return len(self.blueprints)

    def __iter__(self) -> Iterator[Blueprint | CompoundBlueprint]:
        return iter(self.blueprints)

    def __getitem__(self, index: int) -> Blueprint | CompoundBlueprint:
        return self.blueprints[index]

    @property
    def bounding_box(self) -> BoundingBox:
        if not self.blueprints:
            raise InvalidBlueprintError("an empty collection has no bounding box")
        return reduce(BoundingBox.union, (item.bounding_box for item in self.blueprints))

    def area(self) -> float:
        return sum(item.area() for item in self.blueprints)

    def is_inside(self, point: Point, precision: float = PRECISION_INTERSECTION) -> bool:
        return any(item.is_inside(point, precision) for item in self.blueprints)

    def clone(self) -> "Blueprints":
        return Blueprints(tuple(item.clone() for item in self.blueprints))

    def transform(self, matrix: Transform2D) -> "Blueprints":
        return Blueprints(tuple(item.transform(matrix) for item in self.blueprints))

    def loops(self) -> list[Blueprint]:
        return [loop for item in self.blueprints for loop in item.loops()]

    def to_dict(self) -> dict[str, Any]:
        return {"type": "blueprints", "blueprints": [item.to_dict() for item in self.blueprints]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Blueprints":
        return cls(tuple(shape_from_dict(item) for item in data["blueprints"]))


Shape2D = Union[Blueprint, CompoundBlueprint, Blueprints, None]


def shape_from_dict(data: dict[str, Any] | None) -> Shape2D:
    """Deserialize any shape produced by a ``to_dict`` method.

    Raises:
        InvalidBlueprintError: If the data does not describe a shape
    """
    if data is None:
        return None
    kind = data.get("type")
    try:
        if kind == "blueprint":
            return Blueprint.from_dict(data)
        if kind == "compound":
            return CompoundBlueprint.from_dict(data)
        if kind == "blueprints":
            return Blueprints.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidBlueprintError(f"malformed {kind} data: {e}") from e
    raise InvalidBlueprintError(f"unknown shape type {kind!r}")
