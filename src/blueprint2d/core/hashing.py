"""Tolerant point identity.

Floating point intersection results rarely coincide bit for bit, so points
are compared within a tolerance and indexed through a spatial hash of their
rounded coordinates. Lookups inspect the neighbouring hash cells too, which
keeps points that straddle a cell border from being missed.
"""

import math
from collections import defaultdict
from typing import Generic, Iterator, TypeVar

from blueprint2d.domain import HASH_DIGITS, PRECISION_INTERSECTION, PRECISION_POINT, Point

T = TypeVar("T")

PointKey = tuple[int, int]


def same_point(first: Point, second: Point, precision: float = PRECISION_POINT) -> bool:
    """Check whether two points coincide within precision."""
    return math.hypot(first.x - second.x, first.y - second.y) <= precision


def hash_point(point: Point, digits: int = HASH_DIGITS) -> PointKey:
    """Fixed precision integer key of a point.

    Coordinates are scaled by ``10**digits`` and rounded half up, so points
    closer than ``10**-digits`` get keys differing by at most one per axis.
    """
    scale = 10.0**digits
    return (math.floor(point.x * scale + 0.5), math.floor(point.y * scale + 0.5))


class PointIndex:
    """Interns points so that coincident points share one integer id.

    Example:
        >>> index = PointIndex()
        >>> index.add(Point(1.0, 2.0))
        0
        >>> index.find(Point(1.0, 2.0 + 1e-12))
        0
    """

    def __init__(self, precision: float = PRECISION_INTERSECTION) -> None:
        self._precision = precision
        # Cells at least as large as the tolerance so a match is always in a neighbour cell
        self._digits = max(0, math.floor(-math.log10(precision)))
        self._cells: dict[PointKey, list[int]] = defaultdict(list)
        self._points: list[Point] = []

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __contains__(self, point: object) -> bool:
        return isinstance(point, Point) and self.find(point) is not None

    @property
    def points(self) -> list[Point]:
        """Canonical points, indexed by id."""
        return list(self._points)

    def point(self, point_id: int) -> Point:
        return self._points[point_id]

    def find(self, point: Point) -> int | None:
        """Id of a registered point within tolerance, or None."""
        kx, ky = hash_point(point, self._digits)
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                for point_id in self._cells.get((kx + dx, ky + dy), ()):
                    if same_point(self._points[point_id], point, self._precision):
                        return point_id
        return None

    def add(self, point: Point) -> int:
        """Register a point, returning the id of the matching canonical point."""
        point_id = self.find(point)
        if point_id is not None:
            return point_id
        point_id = len(self._points)
        self._points.append(point)
        self._cells[hash_point(point, self._digits)].append(point_id)
        return point_id


class SegmentIndex(Generic[T]):
    """Maps unordered pairs of point ids to the items running between them.

    Keys are canonical: the smaller id always comes first, so an item and
    its reverse share a key.
    """

    def __init__(self) -> None:
        self._items: dict[tuple[int, int], list[T]] = defaultdict(list)

    @staticmethod
    def key(first_id: int, last_id: int) -> tuple[int, int]:
        return (first_id, last_id) if first_id <= last_id else (last_id, first_id)

    def add(self, first_id: int, last_id: int, item: T) -> None:
        self._items[self.key(first_id, last_id)].append(item)

    def get(self, first_id: int, last_id: int) -> list[T]:
        return self._items.get(self.key(first_id, last_id), [])


def remove_duplicate_points(
    points: list[Point], precision: float = PRECISION_INTERSECTION
) -> list[Point]:
    """Keep the first of every group of coincident points, in input order."""
    index = PointIndex(precision)
    unique = []
    for point in points:
        if index.find(point) is None:
            index.add(point)
            unique.append(point)
    return unique
