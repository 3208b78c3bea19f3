"""Grouping of loose loops into regions with holes.

Loops are nested by containment. A loop at even depth (inside an even
number of other loops) bounds material; a loop at odd depth is a hole in
its immediate container.
"""

from dataclasses import dataclass, field

from blueprint2d.core.classification import representative_point
from blueprint2d.domain import (
    PRECISION_INTERSECTION,
    Blueprint,
    Blueprints,
    CompoundBlueprint,
    Orientation,
)


@dataclass
class LoopNode:
    """A node in the loop nesting tree.

    Attributes:
        index: Index of this loop in the input list
        parent: Index of the innermost containing loop (None if root)
        children: Indices of loops directly contained in this one
        depth: Nesting depth (0 for top-level)
    """

    index: int
    parent: int | None
    children: list[int] = field(default_factory=list)
    depth: int = 0

    @property
    def is_hole(self) -> bool:
        return self.depth % 2 == 1


def build_nesting_tree(
    loops: list[Blueprint], precision: float = PRECISION_INTERSECTION
) -> dict[int, LoopNode]:
    """Build the containment tree of non-crossing closed loops.

    Args:
        loops: Closed loops that may touch but never cross
        precision: Tolerance for on-boundary checks

    Returns:
        Mapping from loop index to its node
    """
    containers: dict[int, list[int]] = {}
    for i, loop in enumerate(loops):
        containers[i] = []
        for j, other in enumerate(loops):
            if i == j or not _box_within(loop, other, precision):
                continue
            point = representative_point(loop.curves, other, precision)
            if other.is_inside(point, precision):
                containers[i].append(j)

    nodes = {i: LoopNode(index=i, parent=None, depth=len(found)) for i, found in containers.items()}
    for i, found in containers.items():
        if found:
            parent = max(found, key=lambda j: nodes[j].depth)
            nodes[i].parent = parent
            nodes[parent].children.append(i)
    return nodes


def _box_within(inner: Blueprint, outer: Blueprint, precision: float) -> bool:
    box = inner.bounding_box
    container = outer.bounding_box
    return (
        container.x_min - precision <= box.x_min
        and container.y_min - precision <= box.y_min
        and box.x_max <= container.x_max + precision
        and box.y_max <= container.y_max + precision
    )


def organise_blueprints(
    loops: list[Blueprint], precision: float = PRECISION_INTERSECTION
) -> Blueprints:
    """Group loops into simple regions and regions with holes.

    Holes are oriented against their outer loop.

    Args:
        loops: Closed loops that may touch but never cross
        precision: Tolerance for on-boundary checks

    Returns:
        One element per region, in input order of the outer loops
    """
    nodes = build_nesting_tree(loops, precision)

    regions: list[Blueprint | CompoundBlueprint] = []
    for i, loop in enumerate(loops):
        node = nodes[i]
        if node.is_hole:
            continue
        holes = [loops[child] for child in node.children if nodes[child].is_hole]
        if not holes:
            regions.append(loop)
            continue
        hole_orientation = (
            Orientation.CLOCKWISE
            if loop.orientation is Orientation.COUNTER_CLOCKWISE
            else Orientation.COUNTER_CLOCKWISE
        )
        regions.append(
            CompoundBlueprint((loop, *(hole.oriented(hole_orientation) for hole in holes)))
        )
    return Blueprints(tuple(regions))
