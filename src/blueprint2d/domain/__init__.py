"""Domain models for blueprint2d.

This module contains the core geometric types used throughout the
application: points, bounding boxes, affine transforms, curves and the
blueprint shapes assembled from them.
"""

from blueprint2d.domain.blueprint import (
    Blueprint,
    Blueprints,
    CompoundBlueprint,
    Shape2D,
    shape_from_dict,
)
from blueprint2d.domain.curves import Arc, Bezier, Curve2D, Line, curve_from_dict
from blueprint2d.domain.point import BoundingBox, Orientation, Point, PointLike, as_point
from blueprint2d.domain.precision import HASH_DIGITS, PRECISION_INTERSECTION, PRECISION_POINT
from blueprint2d.domain.transform import Transform2D

__all__ = [
    "HASH_DIGITS",
    "PRECISION_INTERSECTION",
    "PRECISION_POINT",
    "Arc",
    "Bezier",
    "Blueprint",
    "Blueprints",
    "BoundingBox",
    "CompoundBlueprint",
    "Curve2D",
    "Line",
    "Orientation",
    "Point",
    "PointLike",
    "Shape2D",
    "Transform2D",
    "as_point",
    "curve_from_dict",
    "shape_from_dict",
]
