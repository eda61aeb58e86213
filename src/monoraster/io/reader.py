"""Path sources: font glyph outlines and SVG path data.

This module provides the FontReader class for loading font files and
extracting glyph outlines as pixel-space paths, and parse_svg_path() for
SVG path data strings.
"""

from collections.abc import Iterable, Iterator
from pathlib import Path as FilePath

from fontTools.misc.transform import Transform
from fontTools.pens.transformPen import TransformPen
from fontTools.svgLib.path import parse_path
from fontTools.ttLib import TTFont

from monoraster.domain import Path
from monoraster.exceptions import GlyphNotFoundError
from monoraster.io.pen import PathPen


def parse_svg_path(data: str, transform: Transform | None = None) -> Path:
    """Parse SVG path data into a Path.

    Arcs are converted to cubic curves by fontTools.

    Args:
        data: Contents of an SVG ``d`` attribute
        transform: Optional affine transform applied to every point

    Returns:
        Parsed path

    Raises:
        ValueError: If the path data is malformed
        PathConstructionError: If drawing starts without a move command
    """
    pen = PathPen()
    target = TransformPen(pen, transform) if transform is not None else pen
    parse_path(data, target)
    return pen.path


class FontReader:
    """Loads TTF/OTF fonts and extracts glyph outlines as paths.

    Glyph outlines are scaled to pixels and flipped so that y grows downward,
    with the baseline placed at the font's ascender height.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            for name, path in reader.iter_glyph_paths(pixels_per_em=64):
                print(name, path.bounds())
    """

    def __init__(self, font_path: FilePath) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None

    def load(self) -> None:
        """Load the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            Exception: If font file is invalid or cannot be loaded
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        self._font = TTFont(str(self._font_path))

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def format(self) -> str:
        """Return font format.

        Returns:
            'TrueType' for TTF fonts, 'OpenType' for OTF fonts

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def units_per_em(self) -> int:
        """Return font's units per em.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def glyph_count(self) -> int:
        """Return total number of glyphs in the font.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font()["maxp"].numGlyphs

    def glyph_names(self) -> list[str]:
        """Return glyph names in font order."""
        return list(self._require_font().getGlyphOrder())

    def glyph_name_for_char(self, char: str) -> str | None:
        """Look up the glyph mapped to a character, or None if unmapped."""
        cmap = self._require_font().getBestCmap()
        if not cmap:
            return None
        return cmap.get(ord(char))

    def glyph_transform(self, pixels_per_em: float) -> Transform:
        """Font-unit to pixel transform: scale, flip y, baseline at ascender."""
        font = self._require_font()
        scale = pixels_per_em / self.units_per_em
        ascender = font["hhea"].ascent if "hhea" in font else self.units_per_em
        return Transform(scale, 0, 0, -scale, 0, ascender * scale)

    def get_glyph_path(self, name: str, pixels_per_em: float) -> Path:
        """Get a glyph outline as a pixel-space path.

        Args:
            name: Glyph name
            pixels_per_em: Rendering size

        Returns:
            Path of the glyph outline (empty for blank glyphs)

        Raises:
            RuntimeError: If font has not been loaded yet
            GlyphNotFoundError: If the font has no glyph with that name
        """
        font = self._require_font()
        glyph_set = font.getGlyphSet()
        if name not in glyph_set:
            raise GlyphNotFoundError(name)

        pen = PathPen(glyph_set)
        glyph_set[name].draw(TransformPen(pen, self.glyph_transform(pixels_per_em)))
        return pen.path

    def iter_glyph_paths(
        self, pixels_per_em: float, names: Iterable[str] | None = None
    ) -> Iterator[tuple[str, Path]]:
        """Iterate over glyph outlines in font order.

        Args:
            pixels_per_em: Rendering size
            names: Restrict to these glyph names (all glyphs if None)

        Yields:
            (glyph name, path) pairs

        Raises:
            GlyphNotFoundError: If a requested name is not in the font
        """
        for name in names if names is not None else self.glyph_names():
            yield name, self.get_glyph_path(name, pixels_per_em)

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
