"""Command-line interface for monoraster.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Single SVG path rasterization to PNG
- Batch glyph rasterization with progress bars
- Verbose/quiet output modes
- Detailed error reporting
"""

from monoraster.cli.app import cli, main

__all__ = ["cli", "main"]
