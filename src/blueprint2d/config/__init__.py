"""Configuration management for blueprint2d.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- PrecisionConfig: Geometric tolerances
- BooleanConfig: Boolean operation settings
- SvgConfig: SVG export settings
- LoggingConfig: Logging settings
- Blueprint2DSettings: Main application settings
"""

from blueprint2d.config.settings import (
    Blueprint2DSettings,
    BooleanConfig,
    LoggingConfig,
    PrecisionConfig,
    SvgConfig,
    get_default_settings,
)

__all__ = [
    "Blueprint2DSettings",
    "BooleanConfig",
    "LoggingConfig",
    "PrecisionConfig",
    "SvgConfig",
    "get_default_settings",
]
