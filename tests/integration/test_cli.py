"""Test the CLI end-to-end."""

from pathlib import Path

import numpy as np
from PIL import Image
from typer.testing import CliRunner

from monoraster import __version__
from monoraster.cli.app import app

runner = CliRunner()


class TestCLI:
    """Test global CLI behavior."""

    def test_cli_help(self) -> None:
        """Test that CLI --help works."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "path" in result.output
        assert "font" in result.output

    def test_cli_version(self) -> None:
        """Test that CLI --version works."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestPathCommand:
    """Test rasterizing SVG path data."""

    def test_fill(self, tmp_path: Path) -> None:
        """Test a filled square becomes a fully covered image."""
        output = tmp_path / "square.png"
        result = runner.invoke(app, ["path", "M 2 2 L 12 2 L 12 12 L 2 12 Z", "-o", str(output)])

        assert result.exit_code == 0, result.output
        with Image.open(output) as image:
            assert image.size == (10, 10)
            assert np.all(np.asarray(image) == 255)

    def test_open_path_filled(self, tmp_path: Path) -> None:
        """Test an open path is filled as if it were closed."""
        output = tmp_path / "triangle.png"
        result = runner.invoke(app, ["path", "M 0 0 L 8 0 L 8 8", "-o", str(output), "-q"])

        assert result.exit_code == 0, result.output
        with Image.open(output) as image:
            pixels = np.asarray(image)
        assert pixels[0, 7] == 255
        assert pixels[7, 0] == 0

    def test_stroke(self, tmp_path: Path) -> None:
        """Test stroking a horizontal line with butt caps."""
        output = tmp_path / "line.png"
        result = runner.invoke(
            app, ["path", "M 2 2 L 20 2", "--stroke", "2", "-o", str(output)]
        )

        assert result.exit_code == 0, result.output
        with Image.open(output) as image:
            assert image.size == (18, 2)

    def test_scale_and_invert(self, tmp_path: Path) -> None:
        """Test scaling path coordinates and inverting the output."""
        output = tmp_path / "scaled.png"
        result = runner.invoke(
            app,
            ["path", "M 1 1 L 3 1 L 3 3 L 1 3 Z", "--scale", "2", "--invert", "-o", str(output)],
        )

        assert result.exit_code == 0, result.output
        with Image.open(output) as image:
            assert image.size == (4, 4)
            assert np.all(np.asarray(image) == 0)

    def test_invalid_fill_rule(self, tmp_path: Path) -> None:
        """Test an unknown fill rule is rejected."""
        result = runner.invoke(
            app,
            ["path", "M 0 0 L 4 0 L 4 4 Z", "--fill-rule", "sideways", "-o", str(tmp_path / "x.png")],
        )

        assert result.exit_code == 1
        assert not (tmp_path / "x.png").exists()

    def test_invalid_stroke_thickness(self, tmp_path: Path) -> None:
        """Test a non-positive stroke thickness is rejected."""
        result = runner.invoke(
            app, ["path", "M 0 0 L 4 0", "--stroke=0", "-o", str(tmp_path / "x.png")]
        )
        assert result.exit_code == 1

    def test_verbose_and_quiet(self, tmp_path: Path) -> None:
        """Test --verbose and --quiet cannot be combined."""
        result = runner.invoke(
            app, ["path", "M 0 0 L 4 0 L 4 4 Z", "-v", "-q", "-o", str(tmp_path / "x.png")]
        )
        assert result.exit_code == 1


class TestFontCommand:
    """Test rasterizing font glyphs."""

    def test_font(self, square_font: Path, tmp_path: Path) -> None:
        """Test every drawable glyph is written."""
        output_dir = tmp_path / "glyphs"
        result = runner.invoke(
            app, ["font", str(square_font), "-o", str(output_dir), "--size", "500", "-j", "1"]
        )

        assert result.exit_code == 0, result.output
        assert (output_dir / "square.png").exists()
        assert not (output_dir / "notdef.png").exists()

    def test_font_chars(self, square_font: Path, tmp_path: Path) -> None:
        """Test selecting glyphs by character."""
        output_dir = tmp_path / "glyphs"
        result = runner.invoke(
            app, ["font", str(square_font), "-o", str(output_dir), "--chars", "A", "-j", "1", "-q"]
        )

        assert result.exit_code == 0, result.output
        with Image.open(output_dir / "square.png") as image:
            # 64 ppem: x 6.4..38.4 and y 19.2..51.2 round out to 33 pixels
            assert image.size == (33, 33)

    def test_font_unmapped_char(self, square_font: Path, tmp_path: Path) -> None:
        """Test a character without a glyph is an error."""
        result = runner.invoke(
            app, ["font", str(square_font), "-o", str(tmp_path / "glyphs"), "--chars", "Z"]
        )
        assert result.exit_code == 1

    def test_font_not_found(self, tmp_path: Path) -> None:
        """Test a missing font file is an error."""
        result = runner.invoke(
            app, ["font", str(tmp_path / "missing.ttf"), "-o", str(tmp_path / "glyphs")]
        )
        assert result.exit_code == 1

    def test_font_invalid_file(self, tmp_path: Path) -> None:
        """Test a file that is not a font is an error."""
        bogus = tmp_path / "bogus.ttf"
        bogus.write_bytes(b"not a font")

        result = runner.invoke(app, ["font", str(bogus), "-o", str(tmp_path / "glyphs")])
        assert result.exit_code == 1
