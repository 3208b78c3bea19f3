"""Exception hierarchy for Blueprint2D.

Two failure channels exist side by side:

- ``Blueprint2DError`` and its subclasses are regular, recoverable errors
  (bad input, failed numerical computation, unreadable files).
- ``BooleanBugError`` signals a broken internal invariant. It derives from
  ``AssertionError`` rather than ``Blueprint2DError`` so that callers handling
  library errors never catch it by accident.
"""

from typing import NoReturn


class Blueprint2DError(Exception):
    """Base exception for all Blueprint2D errors."""

    pass


class GeometryError(Blueprint2DError):
    """Errors in geometric calculations."""

    pass


class ComputationError(GeometryError):
    """A numerical computation failed.

    Carries a machine-readable ``code`` next to the human message so callers
    can decide whether to abort or retry with adjusted tolerances.
    """

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class IntersectionError(ComputationError):
    """Error calculating curve intersections."""

    def __init__(self, message: str, code: str = "INTERSECTION_FAILED") -> None:
        super().__init__(code, message)


class PointNotOnCurveError(ComputationError):
    """A point could not be mapped to a curve parameter."""

    def __init__(self, message: str) -> None:
        super().__init__("POINT_NOT_ON_CURVE", message)


class BlueprintError(Blueprint2DError):
    """Errors related to blueprint construction or validation."""

    pass


class InvalidBlueprintError(BlueprintError):
    """Blueprint data is malformed or unsuitable for the requested operation."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid blueprint: {reason}")


class SelfIntersectionError(BlueprintError):
    """A boolean operand crosses itself."""

    code = "SELF_INTERSECTING_BLUEPRINT"

    def __init__(self, operand: str, intersection_count: int) -> None:
        self.operand = operand
        self.intersection_count = intersection_count
        super().__init__(
            f"The {operand} blueprint is self-intersecting "
            f"({intersection_count} crossing point(s))"
        )


class ProfileIOError(Blueprint2DError):
    """Errors related to reading or writing profile files."""

    pass


class ProfileLoadError(ProfileIOError):
    """Error loading a profile file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load profile '{path}': {reason}")


class ProfileSaveError(ProfileIOError):
    """Error saving a profile file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save profile '{path}': {reason}")


class FontLoadError(ProfileIOError):
    """Error loading a font used to build text outlines."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class BooleanBugError(AssertionError):
    """An internal invariant of the boolean engine was violated."""

    def __init__(self, function: str, condition: str) -> None:
        self.function = function
        self.condition = condition
        super().__init__(f"Bug in {function}: {condition}")


def bug(function: str, condition: str) -> NoReturn:
    """Raise a ``BooleanBugError`` tagged with the failing function.

    Args:
        function: Name of the function where the invariant broke
        condition: Description of the violated condition

    Raises:
        BooleanBugError: Always
    """
    raise BooleanBugError(function, condition)
