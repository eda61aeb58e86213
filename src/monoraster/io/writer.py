"""Coverage writer for saving rasterized output.

This module provides the CoverageWriter class for writing coverage buffers
as 8-bit grayscale PNG images, one file per named path.
"""

import re
from pathlib import Path

import numpy as np
from PIL import Image

from monoraster.domain import CoverageBuffer
from monoraster.exceptions import CoverageSaveError

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def coverage_to_image(buffer: CoverageBuffer, invert: bool = False) -> Image.Image:
    """Convert coverage into an 8-bit grayscale image.

    Args:
        buffer: Coverage to convert
        invert: If True, full coverage is black on white

    Returns:
        Pillow image in 'L' mode (1x1 blank image for an empty buffer)
    """
    if buffer.is_empty():
        values = np.zeros((1, 1), dtype=np.float64)
    else:
        values = buffer.values

    if invert:
        values = 1.0 - values

    pixels = np.rint(np.clip(values, 0.0, 1.0) * 255.0).astype(np.uint8)
    return Image.fromarray(pixels)


def save_coverage_png(buffer: CoverageBuffer, output_path: Path, invert: bool = False) -> Path:
    """Save coverage as a PNG file.

    Raises:
        CoverageSaveError: If the image cannot be written
    """
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        coverage_to_image(buffer, invert=invert).save(output_path, format="PNG")
    except OSError as e:
        raise CoverageSaveError(str(output_path), str(e)) from e
    return output_path


class CoverageWriter:
    """Writes named coverage buffers into an output directory.

    Example:
        writer = CoverageWriter(Path("out"))
        writer.write("A", coverage)  # out/A.png
    """

    def __init__(self, output_dir: Path, invert: bool = False) -> None:
        """Initialize the writer.

        Args:
            output_dir: Directory receiving the PNG files
            invert: Write dark shapes on a light background
        """
        self.output_dir = output_dir
        self.invert = invert

    def output_path_for(self, name: str) -> Path:
        """PNG path for a path or glyph name.

        Characters outside [A-Za-z0-9._-] are replaced so names like
        "uni0041/alt" stay inside the output directory.
        """
        safe = _UNSAFE_CHARS.sub("_", name).lstrip(".") or "_"
        return self.output_dir / f"{safe}.png"

    def write(self, name: str, buffer: CoverageBuffer) -> Path:
        """Write one coverage buffer.

        Returns:
            Path of the written file

        Raises:
            CoverageSaveError: If the file cannot be written
        """
        return save_coverage_png(buffer, self.output_path_for(name), invert=self.invert)
