"""I/O layer for monoraster.

This module adapts external representations to and from the domain models.

Key responsibilities:
- Build paths from font glyph outlines (fonttools pens)
- Parse SVG path data
- Write coverage buffers as PNG images (Pillow)

Key classes:
- PathPen: fonttools pen recording into a Path
- FontReader: Load fonts and extract glyph paths
- CoverageWriter: Save coverage buffers
"""

from monoraster.io.pen import PathPen
from monoraster.io.reader import FontReader, parse_svg_path
from monoraster.io.writer import CoverageWriter, coverage_to_image, save_coverage_png

__all__ = [
    "CoverageWriter",
    "FontReader",
    "PathPen",
    "coverage_to_image",
    "parse_svg_path",
    "save_coverage_png",
]
