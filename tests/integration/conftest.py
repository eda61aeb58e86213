"""Shared fixtures for integration tests."""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

UNITS_PER_EM = 1000
ASCENT = 800


def build_square_font(font_path: Path) -> Path:
    """Build a tiny TrueType font.

    Glyphs:
    - .notdef: empty
    - square: (100, 0) to (600, 500) in font units, mapped to 'A'
    """
    fb = FontBuilder(UNITS_PER_EM, isTTF=True)
    fb.setupGlyphOrder([".notdef", "square"])
    fb.setupCharacterMap({ord("A"): "square"})

    empty_pen = TTGlyphPen(None)
    square_pen = TTGlyphPen(None)
    square_pen.moveTo((100, 0))
    square_pen.lineTo((100, 500))
    square_pen.lineTo((600, 500))
    square_pen.lineTo((600, 0))
    square_pen.closePath()

    fb.setupGlyf({".notdef": empty_pen.glyph(), "square": square_pen.glyph()})
    fb.setupHorizontalMetrics({".notdef": (600, 0), "square": (700, 100)})
    fb.setupHorizontalHeader(ascent=ASCENT, descent=-200)
    fb.setupNameTable({"familyName": "Monoraster Test", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=ASCENT, usWinAscent=ASCENT, usWinDescent=200)
    fb.setupPost()
    fb.save(str(font_path))
    return font_path


@pytest.fixture
def square_font(tmp_path: Path) -> Path:
    """Path to a freshly built test font."""
    return build_square_font(tmp_path / "square.ttf")
