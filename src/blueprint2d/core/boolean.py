"""Boolean operations on single closed blueprints.

Each operation is a fixed retention policy run through the same pipeline:

1. Orient both loops counter-clockwise
2. Segment them at their intersection points
3. Classify each segment against the other loop
4. Retain segments per policy and stitch them into loops

Loops that do not cross are handled as wholes: identical loops, loops nested
in one another and disjoint loops each have a fixed answer per operation.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Union

import structlog

from blueprint2d.config import Blueprint2DSettings, get_default_settings
from blueprint2d.core.assembly import (
    CUT_POLICY,
    FUSE_POLICY,
    INTERSECT_POLICY,
    RetentionPolicy,
    select_segments,
    stitch_segments,
)
from blueprint2d.core.classification import classify_segments, representative_point
from blueprint2d.core.intersections import blueprint_self_intersections
from blueprint2d.core.organise import organise_blueprints
from blueprint2d.core.segmentation import segment_blueprints
from blueprint2d.domain import (
    Blueprint,
    Blueprints,
    CompoundBlueprint,
    Orientation,
    Shape2D,
)
from blueprint2d.exceptions import InvalidBlueprintError, SelfIntersectionError, bug

logger = structlog.get_logger(__name__)


class BooleanOperation(str, Enum):
    """The three boolean operations."""

    FUSE = "fuse"
    CUT = "cut"
    INTERSECT = "intersect"

    @property
    def policy(self) -> RetentionPolicy:
        return _POLICIES[self]


_POLICIES = {
    BooleanOperation.FUSE: FUSE_POLICY,
    BooleanOperation.CUT: CUT_POLICY,
    BooleanOperation.INTERSECT: INTERSECT_POLICY,
}


@dataclass(frozen=True)
class Empty:
    """Nothing remains."""

    kind = "empty"

    @property
    def shape(self) -> None:
        return None

    def area(self) -> float:
        return 0.0


@dataclass(frozen=True)
class Single:
    """A single loop."""

    blueprint: Blueprint
    kind = "single"

    @property
    def shape(self) -> Blueprint:
        return self.blueprint

    def area(self) -> float:
        return self.blueprint.area()


@dataclass(frozen=True)
class WithHoles:
    """One outer loop with holes."""

    compound: CompoundBlueprint
    kind = "with_holes"

    @property
    def shape(self) -> CompoundBlueprint:
        return self.compound

    def area(self) -> float:
        return self.compound.area()


@dataclass(frozen=True)
class Disjoint:
    """Several separate regions."""

    blueprints: Blueprints
    kind = "disjoint"

    @property
    def shape(self) -> Blueprints:
        return self.blueprints

    def area(self) -> float:
        return self.blueprints.area()


BooleanResult = Union[Empty, Single, WithHoles, Disjoint]


def result_from_shape(shape: Shape2D) -> BooleanResult:
    """Wrap a shape in the matching result variant.

    A collection holding a single region is unwrapped, an empty one is Empty.
    """
    if isinstance(shape, Blueprints):
        if len(shape) == 0:
            return Empty()
        if len(shape) == 1:
            shape = shape[0]
        else:
            return Disjoint(shape)
    if shape is None:
        return Empty()
    if isinstance(shape, Blueprint):
        return Single(shape)
    if isinstance(shape, CompoundBlueprint):
        if not shape.holes:
            return Single(shape.outer)
        return WithHoles(shape)
    bug("result_from_shape", f"unexpected shape type {type(shape).__name__}")


class BooleanEngine:
    """Runs fuse, cut and intersect on single closed blueprints.

    Example:
        >>> engine = BooleanEngine()
        >>> result = engine.fuse(first, second)
        >>> match result:
        ...     case Single(blueprint):
        ...         print(blueprint.area())
    """

    def __init__(self, settings: Blueprint2DSettings | None = None) -> None:
        self.settings = settings or get_default_settings()
        self._precision = self.settings.precision.intersection
        self._budget = self.settings.precision.subdivision_budget

    def fuse(self, first: Blueprint, second: Blueprint) -> BooleanResult:
        """Union of two closed blueprints."""
        return self.run(BooleanOperation.FUSE, first, second)

    def cut(self, first: Blueprint, second: Blueprint) -> BooleanResult:
        """The first blueprint with the second removed from it."""
        return self.run(BooleanOperation.CUT, first, second)

    def intersect(self, first: Blueprint, second: Blueprint) -> BooleanResult:
        """The region covered by both blueprints."""
        return self.run(BooleanOperation.INTERSECT, first, second)

    def run(
        self, operation: BooleanOperation, first: Blueprint, second: Blueprint
    ) -> BooleanResult:
        """Run a boolean operation.

        Args:
            operation: Operation to run
            first: First operand, a closed loop
            second: Second operand, a closed loop

        Returns:
            The result; Empty is a normal outcome, not an error

        Raises:
            InvalidBlueprintError: If an operand is not a closed blueprint
            SelfIntersectionError: If validation is on and an operand crosses itself
            IntersectionError: If a curve intersection cannot be computed
        """
        self._validate(first, "first")
        self._validate(second, "second")

        start = time.perf_counter()
        result = self._combine(operation, first, second)
        logger.debug(
            "Boolean operation complete",
            operation=operation.value,
            result=result.kind,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return result

    def _validate(self, blueprint: Blueprint, operand: str) -> None:
        if not isinstance(blueprint, Blueprint):
            raise InvalidBlueprintError(
                f"the {operand} operand must be a Blueprint, got {type(blueprint).__name__}"
            )
        if not blueprint.is_closed(self.settings.precision.point):
            raise InvalidBlueprintError(f"the {operand} operand is not closed")
        if self.settings.boolean.validate_inputs:
            crossings = blueprint_self_intersections(blueprint, self._precision, self._budget)
            if crossings:
                raise SelfIntersectionError(operand, len(crossings))

    def _combine(
        self, operation: BooleanOperation, first: Blueprint, second: Blueprint
    ) -> BooleanResult:
        a = first.oriented(Orientation.COUNTER_CLOCKWISE)
        b = second.oriented(Orientation.COUNTER_CLOCKWISE)

        segmentation = segment_blueprints(a, b, self._precision, self._budget)
        if segmentation is None:
            return self._combine_wholes(operation, first, second)
        if segmentation.identical:
            logger.debug("Operands are identical", operation=operation.value)
            return Empty() if operation is BooleanOperation.CUT else Single(first.clone())

        policy = operation.policy
        retained = select_segments(
            classify_segments(segmentation.first, b, self._precision),
            classify_segments(segmentation.second, a, self._precision),
            policy,
        )
        loops = stitch_segments(retained, self._precision)
        logger.debug(
            "Segments assembled",
            operation=operation.value,
            intersections=segmentation.intersection_count,
            retained=len(retained),
            loops=len(loops),
        )

        if not loops:
            return Empty()
        if len(loops) == 1:
            return Single(loops[0])
        return result_from_shape(organise_blueprints(loops, self._precision))

    def _combine_wholes(
        self, operation: BooleanOperation, first: Blueprint, second: Blueprint
    ) -> BooleanResult:
        """Answer for loops sharing at most a single point."""
        # A single touching point may sit on a curve mid point
        first_inside = second.is_inside(
            representative_point(first.curves, second, self._precision), self._precision
        )
        second_inside = not first_inside and first.is_inside(
            representative_point(second.curves, first, self._precision), self._precision
        )

        if operation is BooleanOperation.FUSE:
            if first_inside:
                return Single(second.clone())
            if second_inside:
                return Single(first.clone())
            return Disjoint(Blueprints((first.clone(), second.clone())))

        if operation is BooleanOperation.CUT:
            if first_inside:
                return Empty()
            if second_inside:
                hole_orientation = (
                    Orientation.CLOCKWISE
                    if first.orientation is Orientation.COUNTER_CLOCKWISE
                    else Orientation.COUNTER_CLOCKWISE
                )
                return WithHoles(
                    CompoundBlueprint((first.clone(), second.clone().oriented(hole_orientation)))
                )
            return Single(first.clone())

        if first_inside:
            return Single(first.clone())
        if second_inside:
            return Single(second.clone())
        return Empty()


_default_engine = BooleanEngine()


def fuse_blueprints(first: Blueprint, second: Blueprint) -> BooleanResult:
    """Union of two closed blueprints with default settings."""
    return _default_engine.fuse(first, second)


def cut_blueprints(first: Blueprint, second: Blueprint) -> BooleanResult:
    """The first blueprint minus the second, with default settings."""
    return _default_engine.cut(first, second)


def intersect_blueprints(first: Blueprint, second: Blueprint) -> BooleanResult:
    """Common region of two closed blueprints with default settings."""
    return _default_engine.intersect(first, second)
