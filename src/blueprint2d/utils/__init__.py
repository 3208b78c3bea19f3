"""Utility functions for blueprint2d.

This module provides:

- Logging setup and configuration
- Operation statistics tracking
"""

from blueprint2d.utils.logging import (
    OperationLogger,
    OperationStats,
    configure_logging,
)

__all__ = [
    "OperationLogger",
    "OperationStats",
    "configure_logging",
]
