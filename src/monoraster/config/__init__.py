"""Configuration management for monoraster.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- RasterConfig: Scanline sweep settings
- StrokeConfig: Stroke outline settings
- ProcessingConfig: Batch rasterization settings
- LoggingConfig: Logging settings
- RasterSettings: Main application settings
"""

from monoraster.config.settings import (
    LoggingConfig,
    ProcessingConfig,
    RasterConfig,
    RasterSettings,
    StrokeConfig,
    get_default_settings,
)

__all__ = [
    "LoggingConfig",
    "ProcessingConfig",
    "RasterConfig",
    "RasterSettings",
    "StrokeConfig",
    "get_default_settings",
]
