"""CLI application entry point for monoraster.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer
from fontTools.misc.transform import Transform

from monoraster import __version__
from monoraster.cli.output import (
    console,
    create_progress,
    print_cancellation_notice,
    print_cancellation_summary,
    print_error,
    print_errors,
    print_font_info,
    print_header,
    print_image_written,
    print_path_info,
    print_processing_info,
    print_step,
    print_success,
)
from monoraster.config import (
    LoggingConfig,
    ProcessingConfig,
    RasterConfig,
    RasterSettings,
    StrokeConfig,
)
from monoraster.core import RasterProcessor, rasterize
from monoraster.domain import Fill, FillRule, LineCap, LineJoin, Method, Stroke
from monoraster.exceptions import (
    CoverageSaveError,
    FontLoadError,
    MonorasterError,
    PathError,
)
from monoraster.io import FontReader, parse_svg_path, save_coverage_png
from monoraster.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="monoraster",
    help="Rasterize vector paths and font glyphs into antialiased coverage images.",
    add_completion=False,
    no_args_is_help=True,
)


# Shared option types
StrokeOption = Annotated[
    float | None,
    typer.Option(
        "--stroke",
        "-s",
        help="Stroke with this thickness in pixels instead of filling",
    ),
]
SubsamplesOption = Annotated[
    int,
    typer.Option(
        "--subsamples",
        help="Sub-rows sampled per pixel row (vertical antialiasing)",
        min=1,
        max=64,
    ),
]
FillRuleOption = Annotated[
    str,
    typer.Option(
        "--fill-rule",
        help="Fill rule (nonzero|evenodd)",
    ),
]
JoinOption = Annotated[
    str,
    typer.Option(
        "--join",
        help="Stroke line join (miter|bevel|round)",
    ),
]
CapOption = Annotated[
    str,
    typer.Option(
        "--cap",
        help="Stroke line cap (butt|square|round)",
    ),
]
MiterLimitOption = Annotated[
    float,
    typer.Option(
        "--miter-limit",
        help="Miter limit before joins are beveled",
        min=1.0,
        max=100.0,
    ),
]
InvertOption = Annotated[
    bool,
    typer.Option(
        "--invert",
        help="Write dark shapes on a light background",
    ),
]
LogFileOption = Annotated[
    Path | None,
    typer.Option(
        "--log-file",
        help="Write detailed logs to file",
    ),
]
LogLevelOption = Annotated[
    str,
    typer.Option(
        "--log-level",
        help="Logging level (DEBUG|INFO|WARNING|ERROR)",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Verbose console output",
    ),
]
QuietOption = Annotated[
    bool,
    typer.Option(
        "--quiet",
        "-q",
        help="Minimal console output",
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Monoraster[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Rasterize vector paths and font glyphs into antialiased coverage images."""


def _parse_choice(enum_type: type, value: str, option: str) -> object:
    """Convert an option value into an enum member or exit with an error."""
    try:
        return enum_type(value.lower())
    except ValueError:
        valid = ", ".join(member.value for member in enum_type)
        print_error(f"Invalid {option}: {value}", details=f"Valid values: {valid}")
        raise typer.Exit(code=1) from None


def _build_method(stroke: float | None) -> Method:
    if stroke is None:
        return Fill()
    try:
        return Stroke(stroke)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None


def _build_settings(
    subsamples: int,
    fill_rule: str,
    join: str,
    cap: str,
    miter_limit: float,
    invert: bool,
    log_file: Path | None,
    log_level: str,
    quiet: bool,
    max_workers: int | None = None,
    pixels_per_em: float = 64.0,
) -> RasterSettings:
    """Create settings from CLI arguments."""
    return RasterSettings(
        raster=RasterConfig(
            subsamples=subsamples,
            fill_rule=_parse_choice(FillRule, fill_rule, "fill rule"),
        ),
        stroke=StrokeConfig(
            line_join=_parse_choice(LineJoin, join, "line join"),
            line_cap=_parse_choice(LineCap, cap, "line cap"),
            miter_limit=miter_limit,
        ),
        processing=ProcessingConfig(
            max_workers=max_workers,
            pixels_per_em=pixels_per_em,
            invert_output=invert,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )


def _describe_method(method: Method) -> str:
    if isinstance(method, Stroke):
        return f"stroke {method.thickness:g}px"
    return "fill"


@app.command("path")
def path_command(
    data: Annotated[
        str,
        typer.Argument(
            help="SVG path data, e.g. \"M 2 2 L 30 2 L 16 28 Z\"",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path,
        typer.Option(
            "--output",
            "-o",
            help="Output PNG path",
        ),
    ],
    stroke: StrokeOption = None,
    subsamples: SubsamplesOption = 4,
    fill_rule: FillRuleOption = "nonzero",
    join: JoinOption = "miter",
    cap: CapOption = "butt",
    miter_limit: MiterLimitOption = 4.0,
    scale: Annotated[
        float,
        typer.Option(
            "--scale",
            help="Scale factor applied to the path coordinates",
            min=0.001,
        ),
    ] = 1.0,
    invert: InvertOption = False,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Rasterize a single SVG path into a grayscale PNG.

    Coordinates are pixels, y grows downward. The image covers the bounding
    box of the path.

    Example:
        monoraster path "M 2 2 L 30 2 L 16 28 Z" -o triangle.png
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    method = _build_method(stroke)
    settings = _build_settings(
        subsamples, fill_rule, join, cap, miter_limit, invert, log_file, log_level, quiet
    )

    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    if not quiet:
        print_header(__version__)
        print_step("Parsing path")

    try:
        transform = Transform().scale(scale) if scale != 1.0 else None
        try:
            path = parse_svg_path(data, transform)
        except ValueError as e:
            raise PathError(f"Invalid path data: {e}") from e

        if not quiet:
            print_path_info(
                commands=len(path.commands),
                subpaths=len(path.subpaths()),
                method=_describe_method(method),
            )
            print_step("Rasterizing")

        coverage = rasterize(path, method, settings)
        save_coverage_png(coverage, output, invert=settings.processing.invert_output)

        if not quiet:
            print_image_written(
                output_path=str(output),
                width=coverage.width,
                height=coverage.height,
                coverage=coverage.total(),
            )
            if verbose:
                console.print(f"  origin ({coverage.origin_x}, {coverage.origin_y})")

    except KeyboardInterrupt:
        if not quiet:
            console.print("\nCancelled")
        raise typer.Exit(code=130) from None
    except CoverageSaveError as e:
        print_error(f"Could not save image: {e.reason}")
        raise typer.Exit(code=1)
    except MonorasterError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


@app.command("font")
def font_command(
    input_font: Annotated[
        Path,
        typer.Argument(
            help="Path to input TTF/OTF font file",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path,
        typer.Option(
            "--output",
            "-o",
            help="Output directory for glyph PNGs",
        ),
    ],
    size: Annotated[
        float,
        typer.Option(
            "--size",
            help="Rendering size in pixels per em",
            min=1.0,
            max=4096.0,
        ),
    ] = 64.0,
    glyph: Annotated[
        list[str] | None,
        typer.Option(
            "--glyph",
            "-g",
            help="Glyph name to render (repeatable, default: all glyphs)",
        ),
    ] = None,
    chars: Annotated[
        str | None,
        typer.Option(
            "--chars",
            help="Render the glyphs mapped to these characters",
        ),
    ] = None,
    stroke: StrokeOption = None,
    subsamples: SubsamplesOption = 4,
    fill_rule: FillRuleOption = "nonzero",
    join: JoinOption = "miter",
    cap: CapOption = "butt",
    miter_limit: MiterLimitOption = 4.0,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    invert: InvertOption = False,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Rasterize glyphs of a font, one grayscale PNG per glyph.

    Example:
        monoraster font Roboto-Regular.ttf -o glyphs --size 48 --chars ABC
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    # Validate input file exists
    if not input_font.exists():
        print_error(
            f"Input file not found: {input_font}",
            details=f"The file '{input_font}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_font.is_file():
        print_error(
            f"Input path is not a file: {input_font}",
            details="Please provide a path to a TTF or OTF font file.",
        )
        raise typer.Exit(code=1)

    method = _build_method(stroke)
    settings = _build_settings(
        subsamples,
        fill_rule,
        join,
        cap,
        miter_limit,
        invert,
        log_file,
        log_level,
        quiet,
        max_workers=workers,
        pixels_per_em=size,
    )

    if not quiet:
        print_header(__version__)
        print_step("Loading font")

    try:
        glyph_names = list(glyph or [])

        try:
            reader = FontReader(input_font)
            reader.load()
        except Exception as e:
            raise FontLoadError(str(input_font), str(e)) from e

        try:
            if not quiet:
                print_font_info(
                    font_path=str(input_font),
                    font_type=reader.format,
                    glyph_count=reader.glyph_count,
                    upm=reader.units_per_em,
                )
            for char in chars or "":
                name = reader.glyph_name_for_char(char)
                if name is None:
                    raise FontLoadError(str(input_font), f"no glyph mapped to {char!r}")
                if name not in glyph_names:
                    glyph_names.append(name)
            total = len(glyph_names) if glyph_names else reader.glyph_count
        finally:
            reader.close()

        if not quiet:
            actual_workers = workers if workers else os.cpu_count() or 1
            print_step("Rasterizing")
            print_processing_info(actual_workers, is_auto=(workers is None))

        processor = RasterProcessor(settings)
        selected = glyph_names or None

        try:
            if not quiet:
                with create_progress() as progress:
                    task_id = progress.add_task(f"Rasterizing {total} glyphs", total=total)

                    def update_progress(completed: int, *_: object) -> None:
                        progress.update(task_id, completed=completed)

                    stats = processor.process_font(
                        font_path=input_font,
                        output_dir=output,
                        method=method,
                        glyph_names=selected,
                        max_workers=workers,
                        progress_callback=update_progress,
                    )
            else:
                stats = processor.process_font(
                    font_path=input_font,
                    output_dir=output,
                    method=method,
                    glyph_names=selected,
                    max_workers=workers,
                )
        except KeyboardInterrupt:
            if not quiet:
                print_cancellation_notice()
                print_cancellation_summary(
                    processed=processor.stats.processed_count,
                    cancelled=processor.stats.cancelled_count,
                )
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        if not quiet:
            print_success(
                output_dir=str(output),
                total_time_s=stats.duration_seconds,
                processed=stats.processed_count,
                skipped=stats.skipped_count,
                errors=stats.error_count,
                avg_time_ms=stats.avg_path_time_ms,
                min_time_ms=stats.min_path_time_ms,
                max_time_ms=stats.max_path_time_ms,
            )
            if verbose and stats.errors:
                print_errors(stats.errors)

    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except CoverageSaveError as e:
        print_error(f"Could not save image: {e.reason}")
        raise typer.Exit(code=1)
    except MonorasterError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
