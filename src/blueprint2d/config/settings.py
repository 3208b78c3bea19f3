"""Configuration settings for Blueprint2D."""

from pathlib import Path

from pydantic import BaseModel, Field


class PrecisionConfig(BaseModel):
    """Tolerances used by the geometry and boolean kernels.

    All values are absolute distances in model units.
    """

    intersection: float = Field(
        default=1e-9,
        gt=0.0,
        le=1e-3,
        description="Tolerance for curve intersections and on-curve checks",
    )
    point: float = Field(
        default=1e-6,
        gt=0.0,
        le=1e-1,
        description="Tolerance for deciding that two points coincide",
    )
    subdivision_budget: int = Field(
        default=20000,
        ge=100,
        le=1_000_000,
        description="Maximum box pairs examined when intersecting Bezier curves",
    )


class BooleanConfig(BaseModel):
    """Configuration for boolean operations."""

    validate_inputs: bool = Field(
        default=True,
        description="Reject self-intersecting operands before combining them",
    )


class SvgConfig(BaseModel):
    """Configuration for SVG export."""

    margin: float = Field(
        default=1.0,
        ge=0.0,
        description="Margin added around the drawing in the view box",
    )
    decimals: int = Field(
        default=5,
        ge=0,
        le=12,
        description="Decimal digits written for coordinates",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class Blueprint2DSettings(BaseModel):
    """Main application settings."""

    precision: PrecisionConfig = Field(default_factory=PrecisionConfig)
    boolean: BooleanConfig = Field(default_factory=BooleanConfig)
    svg: SvgConfig = Field(default_factory=SvgConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> Blueprint2DSettings:
    """Get default application settings."""
    return Blueprint2DSettings()
