"""Configuration settings for Monoraster."""

from pathlib import Path

from pydantic import BaseModel, Field

from monoraster.domain.method import FillRule, LineCap, LineJoin


class RasterConfig(BaseModel):
    """Configuration for the scanline sweep.

    All lengths are in pixels (one path unit is one pixel).
    """

    subsamples: int = Field(
        default=4,
        ge=1,
        le=64,
        description="Stratified sub-rows sampled per pixel row for vertical antialiasing",
    )
    fill_rule: FillRule = Field(
        default=FillRule.NONZERO,
        description="Winding rule deciding which spans are inside",
    )
    curve_tolerance: float = Field(
        default=0.05,
        ge=0.001,
        le=5.0,
        description="Maximum deviation when flattening curves for stroking",
    )
    max_pixels: int = Field(
        default=16_777_216,
        ge=1,
        description="Largest coverage region (width * height) accepted before allocation",
    )


class StrokeConfig(BaseModel):
    """Configuration for stroke outline construction."""

    line_join: LineJoin = Field(
        default=LineJoin.MITER,
        description="Shape at interior vertices",
    )
    line_cap: LineCap = Field(
        default=LineCap.BUTT,
        description="Shape at the ends of open subpaths",
    )
    miter_limit: float = Field(
        default=4.0,
        ge=1.0,
        le=100.0,
        description="Miter length limit as a multiple of half the thickness; beyond it joins are beveled",
    )


class ProcessingConfig(BaseModel):
    """Configuration for batch rasterization."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )
    pixels_per_em: float = Field(
        default=64.0,
        gt=0.0,
        le=4096.0,
        description="Glyph rendering size in pixels per em",
    )
    invert_output: bool = Field(
        default=False,
        description="Write dark shapes on a light background",
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


class RasterSettings(BaseModel):
    """Main application settings."""

    raster: RasterConfig = Field(default_factory=RasterConfig)
    stroke: StrokeConfig = Field(default_factory=StrokeConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> RasterSettings:
    """Get default application settings."""
    return RasterSettings()
