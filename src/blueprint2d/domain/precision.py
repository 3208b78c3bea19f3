"""Global geometric tolerances.

These are the defaults; ``PrecisionConfig`` in ``blueprint2d.config`` exposes
the same values for callers that want to override them per engine.
"""

PRECISION_INTERSECTION = 1e-9
"""Tolerance for curve intersections and on-curve checks."""

PRECISION_POINT = 1e-6
"""Tolerance for deciding that two points coincide."""

HASH_DIGITS = 9
"""Decimal digits kept when hashing point coordinates."""
