"""Blueprint2D - Boolean operations on closed 2D profiles.

Blueprint2D combines closed planar outlines ("blueprints") made of lines,
circular arcs and Bezier curves. Two profiles can be fused, cut or intersected;
the result is a single loop, a loop with holes, a set of disjoint loops, or
nothing at all.

Example:
    >>> from blueprint2d import fuse_blueprints, rectangle_blueprint
    >>> first = rectangle_blueprint(10, 10)
    >>> second = rectangle_blueprint(10, 10, center=(5, 0))
    >>> fuse_blueprints(first, second).shape.area()
    150.0
"""

from blueprint2d.core import (
    BooleanEngine,
    BooleanResult,
    Disjoint,
    Empty,
    Single,
    WithHoles,
    chamfer_2d,
    circle_blueprint,
    cut_2d,
    cut_blueprints,
    fillet_2d,
    fuse_2d,
    fuse_blueprints,
    intersect_2d,
    intersect_blueprints,
    organise_blueprints,
    polygon_blueprint,
    polysides_blueprint,
    rectangle_blueprint,
    rounded_rectangle_blueprint,
)
from blueprint2d.domain import (
    Arc,
    Bezier,
    Blueprint,
    Blueprints,
    BoundingBox,
    CompoundBlueprint,
    Curve2D,
    Line,
    Orientation,
    Point,
)

__version__ = "0.1.0"

__all__ = [
    "Arc",
    "Bezier",
    "Blueprint",
    "Blueprints",
    "BooleanEngine",
    "BooleanResult",
    "BoundingBox",
    "CompoundBlueprint",
    "Curve2D",
    "Disjoint",
    "Empty",
    "Line",
    "Orientation",
    "Point",
    "Single",
    "WithHoles",
    "__version__",
    "chamfer_2d",
    "circle_blueprint",
    "cut_2d",
    "cut_blueprints",
    "fillet_2d",
    "fuse_2d",
    "fuse_blueprints",
    "intersect_2d",
    "intersect_blueprints",
    "organise_blueprints",
    "polygon_blueprint",
    "polysides_blueprint",
    "rectangle_blueprint",
    "rounded_rectangle_blueprint",
]
