"""Profile processing orchestration.

This module drives boolean operations on profile files: it loads both
operands, runs the operation through the engine, records statistics and
writes the result as a profile or an SVG drawing.

Key classes:
- ProfileProcessor: Main orchestrator for file based boolean operations
"""

import time
import traceback
from pathlib import Path

from blueprint2d.config import Blueprint2DSettings
from blueprint2d.core.boolean import BooleanEngine, BooleanOperation, BooleanResult, result_from_shape
from blueprint2d.core.boolean2d import cut_2d, fuse_2d, intersect_2d
from blueprint2d.domain import Shape2D
from blueprint2d.exceptions import Blueprint2DError, ProfileSaveError
from blueprint2d.io import ProfileReader, ProfileWriter, shape_to_svg
from blueprint2d.utils import OperationLogger, OperationStats, configure_logging

_SHAPE_OPERATIONS = {
    BooleanOperation.FUSE: fuse_2d,
    BooleanOperation.CUT: cut_2d,
    BooleanOperation.INTERSECT: intersect_2d,
}


def describe_shape(shape: Shape2D) -> str:
    """Short human readable description of a shape, used in log events."""
    if shape is None:
        return "empty"
    loops = shape.loops()
    return f"{type(shape).__name__}({len(loops)} loops)"


class ProfileProcessor:
    """Runs boolean operations on profile files.

    Example:
        processor = ProfileProcessor(get_default_settings())
        result = processor.process(BooleanOperation.FUSE, Path("a.json"), Path("b.json"))
    """

    def __init__(self, config: Blueprint2DSettings, quiet: bool = False) -> None:
        """Initialize profile processor with configuration.

        Args:
            config: Settings for precision, validation, SVG output and logging
            quiet: Suppress console log output
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=quiet,
        )
        self.operation_logger = OperationLogger(self.logger)
        self.engine = BooleanEngine(config)

    @property
    def stats(self) -> OperationStats:
        return self.operation_logger.stats

    def combine(
        self, operation: BooleanOperation, first: Shape2D, second: Shape2D
    ) -> BooleanResult:
        """Run an operation on two in-memory shapes and record it.

        Args:
            operation: Operation to run
            first: First operand
            second: Second operand

        Returns:
            The operation's result

        Raises:
            Blueprint2DError: If an operand is invalid or an intersection fails
        """
        self.operation_logger.log_operation_start(
            operation.value, describe_shape(first), describe_shape(second)
        )
        start = time.perf_counter()
        try:
            shape = _SHAPE_OPERATIONS[operation](first, second, self.engine)
        except Blueprint2DError as e:
            self.operation_logger.log_operation_error(operation.value, e, traceback.format_exc())
            raise

        result = result_from_shape(shape)
        self.operation_logger.log_operation_complete(
            operation=operation.value,
            result_kind=result.kind,
            loop_count=len(shape.loops()) if shape is not None else 0,
            duration_ms=(time.perf_counter() - start) * 1000,
        )
        return result

    def process(
        self,
        operation: BooleanOperation,
        first_path: Path,
        second_path: Path,
        output_path: Path | None = None,
    ) -> BooleanResult:
        """Combine two profile files and save the result.

        Args:
            operation: Operation to run
            first_path: Profile of the first operand
            second_path: Profile of the second operand
            output_path: Destination, ``.svg`` for a drawing and anything else
                for a profile (auto-generated if None)

        Returns:
            The operation's result

        Raises:
            ProfileLoadError: If an input profile cannot be read
            ProfileSaveError: If the output cannot be written
            Blueprint2DError: If the operation itself fails
        """
        stats = self.stats
        stats.start_time = time.time()

        if output_path is None:
            output_path = ProfileWriter.get_output_path(first_path, operation.value)

        self.logger.info(
            "Starting profile processing",
            operation=operation.value,
            first=str(first_path),
            second=str(second_path),
            output=str(output_path),
        )

        first = ProfileReader(first_path).load()
        second = ProfileReader(second_path).load()
        result = self.combine(operation, first, second)
        self.save_shape(result.shape, output_path)

        stats.end_time = time.time()
        self.logger.info(
            "Processing complete",
            operation=operation.value,
            result=result.kind,
            duration_seconds=round(stats.duration_seconds, 3),
        )
        return result

    def save_shape(self, shape: Shape2D, output_path: Path) -> None:
        """Write a shape as an SVG drawing or a JSON profile, by file suffix.

        Raises:
            ProfileSaveError: If the file cannot be written
        """
        if output_path.suffix.lower() != ".svg":
            ProfileWriter(output_path).save(shape)
            return

        svg = shape_to_svg(shape, margin=self.config.svg.margin, decimals=self.config.svg.decimals)
        try:
            output_path.write_text(svg + "\n", encoding="utf-8")
        except OSError as e:
            raise ProfileSaveError(str(output_path), str(e)) from e
        self.logger.debug("SVG written", output=str(output_path), size=len(svg))
