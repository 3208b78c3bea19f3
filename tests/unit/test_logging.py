"""Unit tests for operation logging and statistics."""

from unittest.mock import MagicMock

from blueprint2d.utils import OperationLogger, OperationStats


class TestOperationStats:
    """Tests for OperationStats dataclass."""

    def test_duration(self) -> None:
        stats = OperationStats(start_time=10.0, end_time=12.5)
        assert stats.duration_seconds == 2.5

    def test_duration_before_end(self) -> None:
        assert OperationStats(start_time=10.0).duration_seconds == 0.0


class TestOperationLogger:
    """Tests for OperationLogger class."""

    def test_complete_updates_stats(self) -> None:
        mock_logger = MagicMock()
        operation_logger = OperationLogger(mock_logger)

        operation_logger.log_operation_complete("fuse", "single", loop_count=1, duration_ms=1.234)
        operation_logger.log_operation_complete("cut", "empty", loop_count=0, duration_ms=0.5)

        stats = operation_logger.stats
        assert stats.completed_count == 2
        assert stats.empty_count == 1
        assert stats.loops_created == 1
        mock_logger.info.assert_any_call(
            "Operation complete", operation="fuse", result="single", loops=1, duration_ms=1.23
        )

    def test_error_updates_stats(self) -> None:
        mock_logger = MagicMock()
        operation_logger = OperationLogger(mock_logger)

        operation_logger.log_operation_error("intersect", ValueError("boom"), "trace")

        assert operation_logger.stats.error_count == 1
        assert operation_logger.stats.errors == [("intersect", "boom")]
        mock_logger.error.assert_called_once_with(
            "Operation failed",
            operation="intersect",
            error="boom",
            error_type="ValueError",
            traceback="trace",
        )

    def test_start_logs_debug(self) -> None:
        mock_logger = MagicMock()
        OperationLogger(mock_logger).log_operation_start("fuse", "a", "b")
        mock_logger.debug.assert_called_once_with(
            "Operation started", operation="fuse", first="a", second="b"
        )
