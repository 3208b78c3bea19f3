"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from blueprint2d.domain import Blueprint, Blueprints, CompoundBlueprint, Shape2D

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Blueprint2D[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def _shape_kind(shape: Shape2D) -> str:
    if shape is None:
        return "empty"
    if isinstance(shape, Blueprint):
        return "blueprint"
    if isinstance(shape, CompoundBlueprint):
        return "compound"
    return "blueprints"


def print_shape_summary(path: str, shape: Shape2D) -> None:
    """Print a one-line summary of a loaded profile.

    Args:
        path: Path the profile was read from
        shape: The loaded shape
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(path)
    line.append(f" ({_shape_kind(shape)})")
    console.print(line)
    if shape is not None:
        console.print(f"  {len(shape.loops())} loops {SYM_DOT} area {shape.area():.6g}")


def shape_table(shape: Shape2D) -> Table:
    """Build a table describing each region of a shape."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Holes", justify="right")
    table.add_column("Area", justify="right")
    table.add_column("Bounding box")

    if shape is None:
        return table

    regions = list(shape) if isinstance(shape, Blueprints) else [shape]
    for position, region in enumerate(regions, start=1):
        holes = len(region.holes) if isinstance(region, CompoundBlueprint) else 0
        bbox = region.bounding_box
        table.add_row(
            str(position),
            _shape_kind(region),
            str(holes),
            f"{region.area():.6g}",
            f"({bbox.x_min:.4g}, {bbox.y_min:.4g}) {SYM_DOT} ({bbox.x_max:.4g}, {bbox.y_max:.4g})",
        )
    return table


def print_shape_info(path: str, shape: Shape2D) -> None:
    """Print detailed information about a profile.

    Args:
        path: Path the profile was read from
        shape: The loaded shape
    """
    print_shape_summary(path, shape)
    if shape is None:
        console.print("  Profile holds the empty shape")
        return
    if isinstance(shape, Blueprint):
        console.print(
            f"  {len(shape.curves)} curves {SYM_DOT} "
            f"{shape.orientation.name.lower().replace('_', '-')}"
        )
    console.print(shape_table(shape))


def print_result(
    operation: str,
    result_kind: str,
    shape: Shape2D,
    output_path: str,
    total_time_s: float,
) -> None:
    """Print success message with summary.

    Args:
        operation: Name of the operation that ran
        result_kind: Kind of the result (empty, single, with_holes, disjoint)
        shape: The result shape
        output_path: Path to output file
        total_time_s: Total processing time in seconds
    """
    console.print(
        f"\n[bold green]{SYM_OK} {operation.capitalize()} complete[/bold green] "
        f"in {_format_time(total_time_s)}"
    )

    line = Text("  ")
    line.append(output_path, style="bold")
    console.print(line)

    if shape is None:
        console.print(f"  [yellow]empty result[/yellow] {SYM_DOT} nothing remains")
        return
    console.print(
        f"  {result_kind} {SYM_DOT} {len(shape.loops())} loops {SYM_DOT} area {shape.area():.6g}"
    )


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    return f"{seconds:.1f}s"


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
