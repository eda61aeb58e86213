"""Utility functions for monoraster.

This module provides utility functions including:

- Logging setup and configuration
- Batch rasterization statistics
"""

from monoraster.utils.logging import (
    RasterLogger,
    RasterStats,
    configure_logging,
)

__all__ = [
    "RasterLogger",
    "RasterStats",
    "configure_logging",
]
