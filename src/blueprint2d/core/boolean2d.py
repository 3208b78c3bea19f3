"""Boolean operations on any 2D shape.

These functions accept every ``Shape2D`` (a blueprint, a compound blueprint,
a collection of them, or None for the empty shape) and decompose the work
into pairwise operations on single loops.
"""

from blueprint2d.core.boolean import BooleanEngine
from blueprint2d.core.intersections import blueprints_intersect
from blueprint2d.core.organise import organise_blueprints
from blueprint2d.domain import Blueprint, Blueprints, CompoundBlueprint, Shape2D
from blueprint2d.exceptions import bug

Region = Blueprint | CompoundBlueprint


def _engine(engine: BooleanEngine | None) -> BooleanEngine:
    return engine or BooleanEngine()


def all_loops(shape: Shape2D) -> list[Blueprint]:
    """Every loop of a shape, outer loops and holes alike."""
    if shape is None:
        return []
    return shape.loops()


def shapes_intersect(first: Shape2D, second: Shape2D) -> bool:
    """Check whether the boundaries of two shapes cross or overlap."""
    return any(
        blueprints_intersect(loop, other) for loop in all_loops(first) for other in all_loops(second)
    )


def _simplify(shape: Shape2D) -> Shape2D:
    """Unwrap single element collections and collapse empty ones to None."""
    if isinstance(shape, Blueprints):
        if len(shape) == 0:
            return None
        if len(shape) == 1:
            return shape[0]
    if isinstance(shape, CompoundBlueprint) and not shape.holes:
        return shape.outer
    return shape


def merge_non_intersecting(shapes: list[Shape2D]) -> Shape2D:
    """Collect shapes known not to overlap into one shape."""
    regions: list[Region] = []
    for shape in shapes:
        if shape is None:
            continue
        if isinstance(shape, Blueprints):
            regions.extend(shape.blueprints)
        else:
            regions.append(shape)
    return _simplify(Blueprints(tuple(regions)))


def _fuse_blueprint_with_compound(
    blueprint: Blueprint, compound: CompoundBlueprint, engine: BooleanEngine
) -> Shape2D:
    outer = engine.fuse(blueprint, compound.outer).shape
    holes = [engine.cut(hole, blueprint).shape for hole in compound.holes]
    loops = all_loops(outer) + [loop for hole in holes for loop in all_loops(hole)]
    return _simplify(organise_blueprints(loops, engine.settings.precision.intersection))


def _fuse_compound_with_compound(
    first: CompoundBlueprint, second: CompoundBlueprint, engine: BooleanEngine
) -> Shape2D:
    loops = all_loops(engine.fuse(first.outer, second.outer).shape)
    for hole in second.holes:
        loops.extend(all_loops(engine.cut(hole, first.outer).shape))
    for hole in first.holes:
        loops.extend(all_loops(engine.cut(hole, second.outer).shape))
    for hole in first.holes:
        for other in second.holes:
            loops.extend(all_loops(engine.intersect(hole, other).shape))
    return _simplify(organise_blueprints(loops, engine.settings.precision.intersection))


def _fuse_regions(first: Region, second: Region, engine: BooleanEngine) -> Shape2D:
    if isinstance(first, Blueprint) and isinstance(second, Blueprint):
        return engine.fuse(first, second).shape
    if isinstance(first, CompoundBlueprint) and isinstance(second, CompoundBlueprint):
        return _fuse_compound_with_compound(first, second, engine)
    if isinstance(first, CompoundBlueprint) and isinstance(second, Blueprint):
        return _fuse_blueprint_with_compound(second, first, engine)
    if isinstance(first, Blueprint) and isinstance(second, CompoundBlueprint):
        return _fuse_blueprint_with_compound(first, second, engine)
    bug("fuse_2d", f"unhandled regions {type(first).__name__} and {type(second).__name__}")


def fuse_all(regions: list[Region], engine: BooleanEngine | None = None) -> Shape2D:
    """Fuse any number of regions, merging the ones whose boundaries meet.

    Args:
        regions: Blueprints and compound blueprints
        engine: Engine to run pairwise operations with

    Returns:
        The union of all regions
    """
    engine = _engine(engine)
    pending: list[Shape2D] = list(regions)
    merged: list[Shape2D] = []

    while pending:
        current = pending.pop(0)
        changed = True
        while changed:
            changed = False
            for position, other in enumerate(pending):
                if current.bounding_box.is_out(other.bounding_box):
                    continue
                if not shapes_intersect(current, other):
                    continue
                fused = _fuse_pair(current, other, engine)
                if isinstance(fused, Blueprints) and len(fused) > 1:
                    # The boundaries only touch, the regions stay apart
                    continue
                current = fused
                pending.pop(position)
                changed = True
                break
        merged.append(current)

    loops = [loop for shape in merged for loop in all_loops(shape)]
    return _simplify(organise_blueprints(loops, engine.settings.precision.intersection))


def _fuse_pair(first: Shape2D, second: Shape2D, engine: BooleanEngine) -> Shape2D:
    if isinstance(first, Blueprints) or isinstance(second, Blueprints):
        return fuse_2d(first, second, engine)
    return _fuse_regions(first, second, engine)


def fuse_2d(first: Shape2D, second: Shape2D, engine: BooleanEngine | None = None) -> Shape2D:
    """Union of two shapes.

    Args:
        first: First operand, None for the empty shape
        second: Second operand, None for the empty shape
        engine: Engine to run pairwise operations with

    Returns:
        The fused shape, or None if both operands are empty
    """
    engine = _engine(engine)
    if first is None:
        return second.clone() if second is not None else None
    if second is None:
        return first.clone()

    if isinstance(first, Blueprints) and isinstance(second, Blueprints):
        result: Shape2D = second
        for region in first:
            result = fuse_2d(region, result, engine)
        return result
    if isinstance(second, Blueprints):
        return fuse_all([first, *second.blueprints], engine)
    if isinstance(first, Blueprints):
        return fuse_all([second, *first.blueprints], engine)

    return _fuse_regions(first, second, engine)


def cut_2d(first: Shape2D, second: Shape2D, engine: BooleanEngine | None = None) -> Shape2D:
    """The first shape with the second removed from it.

    Args:
        first: Base shape, None for the empty shape
        second: Tool shape, None for the empty shape
        engine: Engine to run pairwise operations with

    Returns:
        What remains of the base, or None if nothing does
    """
    engine = _engine(engine)
    if first is None:
        return None
    if second is None:
        return first.clone()

    if isinstance(first, Blueprints):
        return merge_non_intersecting([cut_2d(region, second, engine) for region in first])

    if isinstance(first, CompoundBlueprint):
        outer = first.outer
        if isinstance(second, Blueprint) and not blueprints_intersect(second, outer):
            if outer.is_inside(second.first_point):
                if any(hole.is_inside(second.first_point) for hole in first.holes) and not any(
                    blueprints_intersect(second, hole) for hole in first.holes
                ):
                    return first.clone()
                # The tool sits inside the outer loop, it only grows the holes
                holes = fuse_2d(second, Blueprints(first.holes), engine)
                loops = [outer, *all_loops(holes)]
                return _simplify(
                    organise_blueprints(loops, engine.settings.precision.intersection)
                )
            if second.is_inside(outer.first_point):
                return None
            return first.clone()

        result: Shape2D = cut_2d(outer, second, engine)
        for hole in first.holes:
            result = cut_2d(result, hole, engine)
        return result

    if isinstance(second, Blueprints):
        result = first
        for region in second:
            result = cut_2d(result, region, engine)
        return result

    if isinstance(second, CompoundBlueprint):
        result = engine.cut(first, second.outer).shape
        for hole in second.holes:
            result = fuse_2d(result, engine.intersect(hole, first).shape, engine)
        return result

    return engine.cut(first, second).shape


def intersect_2d(
    first: Shape2D, second: Shape2D, engine: BooleanEngine | None = None
) -> Shape2D:
    """The region covered by both shapes.

    Args:
        first: First operand, None for the empty shape
        second: Second operand, None for the empty shape
        engine: Engine to run pairwise operations with

    Returns:
        The common region, or None if the shapes do not overlap
    """
    engine = _engine(engine)
    if first is None or second is None:
        return None

    if isinstance(first, Blueprint) and isinstance(second, Blueprint):
        return engine.intersect(first, second).shape

    if isinstance(first, Blueprints):
        return merge_non_intersecting([intersect_2d(region, second, engine) for region in first])

    if isinstance(first, CompoundBlueprint):
        result = intersect_2d(first.outer, second, engine)
        for hole in first.holes:
            result = cut_2d(result, hole, engine)
        return result

    if isinstance(second, Blueprints):
        return merge_non_intersecting([intersect_2d(first, region, engine) for region in second])

    if isinstance(second, CompoundBlueprint):
        result = intersect_2d(second.outer, first, engine)
        for hole in second.holes:
            result = cut_2d(result, hole, engine)
        return result

    bug("intersect_2d", f"unhandled shapes {type(first).__name__} and {type(second).__name__}")
