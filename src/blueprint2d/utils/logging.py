"""Logging utilities for Blueprint2D."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class OperationStats:
    """Statistics from a run of boolean operations."""

    completed_count: int = 0
    empty_count: int = 0
    error_count: int = 0
    loops_created: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging to the console and, optionally, a file.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("blueprint2d")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class OperationLogger:
    """Logger for tracking boolean operations and their statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = OperationStats()

    def log_operation_start(self, operation: str, first: str, second: str) -> None:
        """Log start of a boolean operation."""
        self._logger.debug("Operation started", operation=operation, first=first, second=second)

    def log_operation_complete(
        self,
        operation: str,
        result_kind: str,
        loop_count: int,
        duration_ms: float,
    ) -> None:
        """Log a successful boolean operation."""
        self._logger.info(
            "Operation complete",
            operation=operation,
            result=result_kind,
            loops=loop_count,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.completed_count += 1
        self._stats.loops_created += loop_count
        if loop_count == 0:
            self._stats.empty_count += 1

    def log_operation_error(
        self,
        operation: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log a failed boolean operation."""
        self._logger.error(
            "Operation failed",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((operation, str(error)))

    @property
    def stats(self) -> OperationStats:
        """Get current operation statistics."""
        return self._stats
