"""Core processing logic for blueprint2d.

This module contains the boolean engine and its building blocks:

- Tolerant point hashing and identity
- Curve intersection (analytic and numeric)
- Loop segmentation, segment classification and loop assembly
- Boolean operations on single loops and on any 2D shape
- Grouping of loops into regions with holes
- Ready-made blueprints
- Fillets and chamfers on corners
"""

from blueprint2d.core.boolean import (
    BooleanEngine,
    BooleanOperation,
    BooleanResult,
    Disjoint,
    Empty,
    Single,
    WithHoles,
    cut_blueprints,
    fuse_blueprints,
    intersect_blueprints,
    result_from_shape,
)
from blueprint2d.core.boolean2d import cut_2d, fuse_2d, fuse_all, intersect_2d
from blueprint2d.core.canned import (
    circle_blueprint,
    polygon_blueprint,
    polysides_blueprint,
    rectangle_blueprint,
    rounded_rectangle_blueprint,
)
from blueprint2d.core.corners import chamfer_2d, fillet_2d
from blueprint2d.core.hashing import PointIndex, hash_point, remove_duplicate_points, same_point
from blueprint2d.core.intersections import (
    IntersectionResult,
    blueprint_self_intersections,
    blueprints_intersect,
    intersect_curves,
    self_intersections,
)
from blueprint2d.core.organise import organise_blueprints

__all__ = [
    "BooleanEngine",
    "BooleanOperation",
    "BooleanResult",
    "Disjoint",
    "Empty",
    "IntersectionResult",
    "PointIndex",
    "Single",
    "WithHoles",
    "blueprint_self_intersections",
    "blueprints_intersect",
    "chamfer_2d",
    "circle_blueprint",
    "cut_2d",
    "cut_blueprints",
    "fillet_2d",
    "fuse_2d",
    "fuse_all",
    "fuse_blueprints",
    "hash_point",
    "intersect_2d",
    "intersect_blueprints",
    "intersect_curves",
    "organise_blueprints",
    "polygon_blueprint",
    "polysides_blueprint",
    "rectangle_blueprint",
    "remove_duplicate_points",
    "result_from_shape",
    "rounded_rectangle_blueprint",
    "same_point",
    "self_intersections",
]
