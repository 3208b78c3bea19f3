"""SVG serialization of shapes.

SVG's y axis points down, so shapes are mirrored across the x axis on
output. Lines become ``L`` elements, arcs ``A`` elements and Bezier curves
``Q`` or ``C`` elements.
"""

import math

from blueprint2d.domain import (
    Arc,
    Bezier,
    Blueprint,
    Blueprints,
    BoundingBox,
    CompoundBlueprint,
    Curve2D,
    Line,
    Point,
    Shape2D,
)
from blueprint2d.exceptions import InvalidBlueprintError

DEFAULT_DECIMALS = 5


def format_number(value: float, decimals: int = DEFAULT_DECIMALS) -> str:
    """Round and print a coordinate without trailing zeros."""
    rounded = round(value, decimals) + 0.0
    if rounded == 0.0:
        return "0"
    text = f"{rounded:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _xy(point: Point, decimals: int) -> str:
    return f"{format_number(point.x, decimals)} {format_number(-point.y, decimals)}"


def view_box(bbox: BoundingBox, margin: float = 1.0, decimals: int = DEFAULT_DECIMALS) -> str:
    """The ``viewBox`` attribute framing a bounding box."""
    values = (
        bbox.x_min - margin,
        -bbox.y_max - margin,
        bbox.width + 2 * margin,
        bbox.height + 2 * margin,
    )
    return " ".join(format_number(value, decimals) for value in values)


def as_svg(body: str, bbox: BoundingBox, margin: float = 1.0) -> str:
    """Wrap SVG elements in a complete document."""
    return (
        f'<svg version="1.1" xmlns="http://www.w3.org/2000/svg" viewBox="{view_box(bbox, margin)}" '
        'fill="none" stroke="black" stroke-width="0.6%" vector-effect="non-scaling-stroke">\n'
        f"    {body}\n"
        "</svg>"
    )


def curve_to_path_elements(curve: Curve2D, decimals: int = DEFAULT_DECIMALS) -> list[str]:
    """Path commands drawing a curve from its first point."""
    if isinstance(curve, Line):
        return [f"L {_xy(curve.end, decimals)}"]

    if isinstance(curve, Bezier):
        command = "Q" if curve.degree == 2 else "C"
        controls = " ".join(_xy(point, decimals) for point in curve.points[1:])
        return [f"{command} {controls}"]

    if isinstance(curve, Arc):
        if abs(curve.sweep) > math.pi + 1e-12:
            # An SVG arc cannot close on itself, draw large arcs in two halves
            return curve_to_path_elements(curve.sub_curve(0.0, 0.5), decimals) + (
                curve_to_path_elements(curve.sub_curve(0.5, 1.0), decimals)
            )
        radius = format_number(curve.radius, decimals)
        # Mirroring the y axis turns counter-clockwise arcs into SVG negative-angle arcs
        sweep_flag = 0 if curve.sweep > 0 else 1
        return [f"A {radius} {radius} 0 0 {sweep_flag} {_xy(curve.last_point, decimals)}"]

    raise InvalidBlueprintError(f"cannot draw {type(curve).__name__} as SVG")


def blueprint_to_path_d(blueprint: Blueprint, decimals: int = DEFAULT_DECIMALS) -> str:
    """The ``d`` attribute of an SVG path drawing a blueprint."""
    elements = [
        element for curve in blueprint.curves for element in curve_to_path_elements(curve, decimals)
    ]
    closing = " Z" if blueprint.is_closed() else ""
    return f"M {_xy(blueprint.first_point, decimals)} {' '.join(elements)}{closing}"


def blueprint_to_path(blueprint: Blueprint, decimals: int = DEFAULT_DECIMALS) -> str:
    return f'<path d="{blueprint_to_path_d(blueprint, decimals)}" />'


def shape_to_svg_body(shape: Shape2D, decimals: int = DEFAULT_DECIMALS) -> str:
    """SVG elements for a shape; regions with holes become groups."""
    if shape is None:
        return ""
    if isinstance(shape, Blueprint):
        return blueprint_to_path(shape, decimals)
    if isinstance(shape, CompoundBlueprint):
        paths = "".join(blueprint_to_path(loop, decimals) for loop in shape.blueprints)
        return f"<g>{paths}</g>"
    if isinstance(shape, Blueprints):
        return "\n    ".join(shape_to_svg_body(item, decimals) for item in shape)
    raise InvalidBlueprintError(f"cannot draw {type(shape).__name__} as SVG")


def shape_to_svg_paths(shape: Shape2D, decimals: int = DEFAULT_DECIMALS) -> list[str]:
    """Path ``d`` strings for every loop of a shape."""
    if shape is None:
        return []
    return [blueprint_to_path_d(loop, decimals) for loop in shape.loops()]


def shape_to_svg(
    shape: Shape2D, margin: float = 1.0, decimals: int = DEFAULT_DECIMALS
) -> str:
    """A complete SVG document drawing a shape.

    The empty shape produces an empty drawing of zero size.
    """
    if shape is None or (isinstance(shape, Blueprints) and len(shape) == 0):
        return as_svg("", BoundingBox(0.0, 0.0, 0.0, 0.0), margin)
    return as_svg(shape_to_svg_body(shape, decimals), shape.bounding_box, margin)
