"""Internal Bezier curve algorithms.

This is an internal module containing helper functions for ``Bezier``.
Control points are plain ``(x, y)`` tuples. Not intended for public use.
"""

import math

Vec = tuple[float, float]


def evaluate(points: list[Vec], t: float) -> Vec:
    """Evaluate a Bezier curve with de Casteljau's algorithm."""
    work = list(points)
    u = 1.0 - t
    for level in range(len(work) - 1, 0, -1):
        for i in range(level):
            work[i] = (u * work[i][0] + t * work[i + 1][0], u * work[i][1] + t * work[i + 1][1])
    return work[0]


def hodograph(points: list[Vec]) -> list[Vec]:
    """Control points of the derivative curve."""
    n = len(points) - 1
    return [
        (n * (points[i + 1][0] - points[i][0]), n * (points[i + 1][1] - points[i][1]))
        for i in range(n)
    ]


def split(points: list[Vec], t: float) -> tuple[list[Vec], list[Vec]]:
    """Split a Bezier curve at parameter t.

    Returns:
        Control points of the left and right halves. The left half starts
        exactly at the first control point and the right half ends exactly
        at the last one.
    """
    left = [points[0]]
    right = [points[-1]]
    work = list(points)
    u = 1.0 - t
    for level in range(len(work) - 1, 0, -1):
        for i in range(level):
            work[i] = (u * work[i][0] + t * work[i + 1][0], u * work[i][1] + t * work[i + 1][1])
        left.append(work[0])
        right.append(work[level - 1])
    right.reverse()
    return left, right


def segment(points: list[Vec], t0: float, t1: float) -> list[Vec]:
    """Control points of the portion of the curve between t0 and t1."""
    result = list(points)
    if t1 < 1.0:
        result, _ = split(result, t1)
    if t0 > 0.0:
        local = t0 / t1 if t1 > 0.0 else 0.0
        _, result = split(result, local)
    return result


def extrema(values: list[float]) -> list[float]:
    """Parameters in (0, 1) where a 1D quadratic or cubic Bezier has zero slope.

    Args:
        values: One coordinate of the control points (3 or 4 values)

    Returns:
        Sorted list of parameters strictly inside (0, 1)
    """
    if len(values) == 3:
        v0, v1, v2 = values
        denom = v0 - 2 * v1 + v2
        roots = [] if abs(denom) < 1e-15 else [(v0 - v1) / denom]
    elif len(values) == 4:
        v0, v1, v2, v3 = values
        a = -v0 + 3 * v1 - 3 * v2 + v3
        b = 2 * (v0 - 2 * v1 + v2)
        c = v1 - v0
        roots = solve_quadratic(a, b, c)
    else:
        raise ValueError(f"Expected 3 or 4 control values, got {len(values)}")

    return sorted(t for t in roots if 1e-12 < t < 1.0 - 1e-12)


def solve_quadratic(a: float, b: float, c: float) -> list[float]:
    """Real roots of ``a*t^2 + b*t + c``, degrading to the linear case."""
    scale = max(abs(a), abs(b), abs(c))
    if scale == 0.0:
        return []
    if abs(a) <= 1e-14 * scale:
        return [] if abs(b) <= 1e-14 * scale else [-c / b]

    disc = b * b - 4 * a * c
    if disc < 0.0:
        return []
    root = math.sqrt(disc)
    # Numerically stable form avoiding cancellation
    q = -0.5 * (b + math.copysign(root, b))
    roots = [q / a]
    if q != 0.0:
        roots.append(c / q)
    return roots
