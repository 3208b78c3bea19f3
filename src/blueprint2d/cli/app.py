"""CLI application entry point for blueprint2d.

This module provides the main CLI interface using Typer.
"""

import time
from pathlib import Path
from typing import Annotated

import typer

from blueprint2d import __version__
from blueprint2d.cli.output import (
    console,
    print_error,
    print_header,
    print_result,
    print_shape_info,
    print_shape_summary,
    print_step,
)
from blueprint2d.config import Blueprint2DSettings, BooleanConfig, LoggingConfig, SvgConfig
from blueprint2d.core.boolean import BooleanOperation
from blueprint2d.core.boolean2d import fuse_all
from blueprint2d.core.processor import ProfileProcessor
from blueprint2d.exceptions import (
    Blueprint2DError,
    BooleanBugError,
    FontLoadError,
    ProfileLoadError,
    ProfileSaveError,
    SelfIntersectionError,
)
from blueprint2d.io import ProfileReader, ProfileWriter, text_blueprints

# Create the Typer app
app = typer.Typer(
    name="blueprint2d",
    help="Fuse, cut and intersect closed 2D profiles.",
    add_completion=False,
    no_args_is_help=True,
)

FirstProfile = Annotated[
    Path,
    typer.Argument(help="Profile JSON file of the first operand", show_default=False),
]
SecondProfile = Annotated[
    Path,
    typer.Argument(help="Profile JSON file of the second operand", show_default=False),
]
OutputOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Output path, .svg for a drawing, .json for a profile "
        "(default: {first}-{operation}.json)",
    ),
]
MarginOption = Annotated[
    float,
    typer.Option("--margin", help="Margin around SVG drawings", min=0.0),
]
ValidateOption = Annotated[
    bool,
    typer.Option(
        "--validate/--no-validate",
        help="Reject self-intersecting operands",
    ),
]
LogFileOption = Annotated[
    Path | None,
    typer.Option("--log-file", help="Write detailed logs to file"),
]
LogLevelOption = Annotated[
    str,
    typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
]
QuietOption = Annotated[
    bool,
    typer.Option("--quiet", "-q", help="Minimal console output"),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Blueprint2D[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Fuse, cut and intersect closed 2D profiles.

    Profiles are JSON files holding a blueprint, a blueprint with holes or a
    collection of them. Results are written as profiles or SVG drawings.
    """


def _check_input(path: Path) -> None:
    if not path.exists():
        print_error(
            f"Input file not found: {path}",
            details=f"The file '{path}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not path.is_file():
        print_error(
            f"Input path is not a file: {path}",
            details="Please provide a path to a profile JSON file.",
        )
        raise typer.Exit(code=1)


def _build_settings(
    margin: float, validate: bool, log_file: Path | None, log_level: str, quiet: bool
) -> Blueprint2DSettings:
    return Blueprint2DSettings(
        boolean=BooleanConfig(validate_inputs=validate),
        svg=SvgConfig(margin=margin),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )


def _run_operation(
    operation: BooleanOperation,
    first: Path,
    second: Path,
    output: Path | None,
    settings: Blueprint2DSettings,
    quiet: bool,
) -> None:
    """Run one boolean operation from the command line.

    Every failure is reported on the console and turned into exit code 1.
    """
    _check_input(first)
    _check_input(second)

    if not quiet:
        print_header(__version__)

    actual_output_path = output or ProfileWriter.get_output_path(first, operation.value)

    try:
        processor = ProfileProcessor(settings, quiet=quiet)

        if not quiet:
            print_step("Loading profiles")
            print_shape_summary(str(first), ProfileReader(first).load())
            print_shape_summary(str(second), ProfileReader(second).load())
            print_step(operation.value.capitalize())

        start = time.perf_counter()
        result = processor.process(operation, first, second, actual_output_path)

        if not quiet:
            print_result(
                operation=operation.value,
                result_kind=result.kind,
                shape=result.shape,
                output_path=str(actual_output_path),
                total_time_s=time.perf_counter() - start,
            )

    except ProfileLoadError as e:
        print_error(f"Could not load profile: {e.reason}", details=e.path)
        raise typer.Exit(code=1)
    except ProfileSaveError as e:
        print_error(f"Could not save result: {e.reason}", details=e.path)
        raise typer.Exit(code=1)
    except SelfIntersectionError as e:
        print_error(str(e), details="Use --no-validate to skip this check.")
        raise typer.Exit(code=1)
    except Blueprint2DError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except BooleanBugError:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


@app.command()
def fuse(
    first: FirstProfile,
    second: SecondProfile,
    output: OutputOption = None,
    margin: MarginOption = 1.0,
    validate: ValidateOption = True,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Fuse two profiles into their union.

    Example:
        blueprint2d fuse plate.json boss.json -o part.svg
    """
    settings = _build_settings(margin, validate, log_file, log_level, quiet)
    _run_operation(BooleanOperation.FUSE, first, second, output, settings, quiet)


@app.command()
def cut(
    first: FirstProfile,
    second: SecondProfile,
    output: OutputOption = None,
    margin: MarginOption = 1.0,
    validate: ValidateOption = True,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Cut the second profile out of the first.

    Example:
        blueprint2d cut plate.json hole.json -o plate-drilled.json
    """
    settings = _build_settings(margin, validate, log_file, log_level, quiet)
    _run_operation(BooleanOperation.CUT, first, second, output, settings, quiet)


@app.command()
def intersect(
    first: FirstProfile,
    second: SecondProfile,
    output: OutputOption = None,
    margin: MarginOption = 1.0,
    validate: ValidateOption = True,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Keep the region shared by two profiles."""
    settings = _build_settings(margin, validate, log_file, log_level, quiet)
    _run_operation(BooleanOperation.INTERSECT, first, second, output, settings, quiet)


@app.command()
def info(
    profile: Annotated[
        Path,
        typer.Argument(help="Profile JSON file to describe", show_default=False),
    ],
) -> None:
    """Show area, bounding box and loop structure of a profile."""
    _check_input(profile)
    try:
        shape = ProfileReader(profile).load()
    except ProfileLoadError as e:
        print_error(f"Could not load profile: {e.reason}", details=e.path)
        raise typer.Exit(code=1)
    print_shape_info(str(profile), shape)


@app.command()
def text(
    content: Annotated[
        str,
        typer.Argument(help="Text to outline", show_default=False),
    ],
    font: Annotated[
        Path,
        typer.Option("--font", "-f", help="Path to a TTF/OTF font file", show_default=False),
    ],
    size: Annotated[
        float,
        typer.Option("--size", "-s", help="Font size in output units", min=0.0),
    ] = 16.0,
    merge: Annotated[
        bool,
        typer.Option("--merge", help="Fuse overlapping glyph outlines"),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output path (default: {font}-text.svg)"),
    ] = None,
    margin: MarginOption = 1.0,
    quiet: QuietOption = False,
) -> None:
    """Outline a line of text from a font as a profile or SVG drawing.

    Example:
        blueprint2d text "Hello" --font Roboto-Regular.ttf -o hello.svg
    """
    actual_output_path = output or font.parent / f"{font.stem}-text.svg"
    settings = _build_settings(margin, True, None, "WARNING", quiet)

    try:
        processor = ProfileProcessor(settings, quiet=quiet)
        shape = text_blueprints(content, font, font_size=size)
        if len(shape) == 0:
            print_error(f"No outlines to draw for {content!r}")
            raise typer.Exit(code=1)
        if merge and len(shape) > 1:
            shape = fuse_all(list(shape), processor.engine)
        processor.save_shape(shape, actual_output_path)
    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}", details=e.path)
        raise typer.Exit(code=1)
    except ProfileSaveError as e:
        print_error(f"Could not save result: {e.reason}", details=e.path)
        raise typer.Exit(code=1)
    except Blueprint2DError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if not quiet:
        console.print(f"[bold green]Text outlined[/bold green] to {actual_output_path}")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
