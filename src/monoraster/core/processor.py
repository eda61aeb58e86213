"""Parallel processing orchestration for batch rasterization.

Paths rasterize independently of one another, so a batch (for example every
glyph of a font) is spread over worker processes with ProcessPoolExecutor.

Key components:
- rasterize_path_task: Top-level picklable function for parallel execution
- RasterProcessor: Main orchestrator class for batch rasterization
"""

import time
import traceback
from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path as FilePath
from typing import Any

from monoraster.config import RasterSettings
from monoraster.core.decompose import decompose_path
from monoraster.core.sweep import ScanlineSweep
from monoraster.domain import CoverageBuffer, Method, Path, method_from_dict
from monoraster.io import CoverageWriter, FontReader
from monoraster.utils import RasterLogger, RasterStats, configure_logging


def rasterize_path_task(
    path_dict: dict[str, Any],
    method_dict: dict[str, Any],
    settings_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rasterize a single path.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Deserializes the path, decomposes and sweeps it, and returns the result.

    Args:
        path_dict: Serialized path (from Path.to_dict())
        method_dict: Serialized method (from Fill/Stroke.to_dict())
        settings_dict: Serialized settings (from RasterSettings.model_dump())

    Returns:
        Dictionary containing either:
        - Success: {"coverage": dict, "segments": int, "duration_ms": float}
        - Error: {"error": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        path = Path.from_dict(path_dict)
        method = method_from_dict(method_dict)
        settings = RasterSettings(**settings_dict)

        segments = decompose_path(path, method, settings.raster, settings.stroke)
        coverage = ScanlineSweep.for_method(method, settings.raster).rasterize(segments)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "coverage": coverage.to_dict(),
            "segments": len(segments),
            "duration_ms": duration_ms,
        }

    except Exception as e:
        # Capture full traceback for debugging
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e),
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


class RasterProcessor:
    """Orchestrates parallel rasterization of many paths.

    Manages the complete workflow:
    1. Collect named paths (or glyph outlines from a font)
    2. Skip paths with nothing to draw
    3. Rasterize paths in parallel using worker processes
    4. Collect results and update statistics
    5. Optionally write each coverage buffer as a PNG

    Example:
        settings = RasterSettings()
        processor = RasterProcessor(settings)
        stats = processor.process_font(
            font_path=Path("font.ttf"),
            output_dir=Path("glyphs"),
            method=Fill(),
        )
    """

    def __init__(self, settings: RasterSettings) -> None:
        """Initialize the processor with configuration.

        Args:
            settings: Raster, stroke, processing and logging settings
        """
        self.settings = settings
        self.logger = configure_logging(
            log_file=settings.logging.log_file,
            console_level=settings.logging.log_level,
            file_level=settings.logging.file_log_level,
            quiet=False,
        )
        self.raster_logger = RasterLogger(self.logger)

    @property
    def stats(self) -> RasterStats:
        return self.raster_logger.stats

    def rasterize_paths(
        self,
        paths: Mapping[str, Path],
        method: Method,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> dict[str, CoverageBuffer]:
        """Rasterize named paths in parallel.

        Args:
            paths: Paths keyed by name
            method: Fill or Stroke applied to every path
            max_workers: Maximum worker processes (None = settings default)
            progress_callback: Optional callback(completed, total, name, success)

        Returns:
            Coverage buffers keyed by name; failed and skipped paths are absent

        Raises:
            KeyboardInterrupt: If processing is cancelled by user
        """
        stats = self.stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.settings.processing.max_workers

        tasks: dict[str, dict[str, Any]] = {}
        for name, path in paths.items():
            if path.is_empty():
                self.raster_logger.log_path_skipped(name, "empty path")
                continue
            tasks[name] = path.to_dict()

        results: dict[str, CoverageBuffer] = {}
        if tasks:
            results = self._rasterize_parallel(
                tasks, method, max_workers, stats, progress_callback
            )
        else:
            self.logger.info("No paths to rasterize")

        stats.end_time = time.time()

        self.logger.info(
            "Rasterization complete",
            processed=stats.processed_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            segments=stats.segments_total,
            duration_seconds=round(stats.duration_seconds, 2),
        )
        return results

    def process_font(
        self,
        font_path: FilePath,
        output_dir: FilePath,
        method: Method,
        glyph_names: Iterable[str] | None = None,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> RasterStats:
        """Rasterize glyphs of a font and write one PNG per glyph.

        Args:
            font_path: Path to input font file (TTF or OTF)
            output_dir: Directory receiving the PNG files
            method: Fill or Stroke
            glyph_names: Glyphs to render (all glyphs if None)
            max_workers: Maximum worker processes (None = settings default)
            progress_callback: Optional callback(completed, total, name, success)

        Returns:
            RasterStats with counts, timing, and error details

        Raises:
            FileNotFoundError: If font file does not exist
            GlyphNotFoundError: If a requested glyph is not in the font
            KeyboardInterrupt: If processing is cancelled by user
        """
        pixels_per_em = self.settings.processing.pixels_per_em

        self.logger.info(
            "Starting font rasterization",
            input=str(font_path),
            output=str(output_dir),
            pixels_per_em=pixels_per_em,
        )

        with FontReader(font_path) as reader:
            self.logger.info(
                "Font loaded",
                format=reader.format,
                upm=reader.units_per_em,
                glyph_count=reader.glyph_count,
            )
            paths = dict(reader.iter_glyph_paths(pixels_per_em, glyph_names))

        coverages = self.rasterize_paths(paths, method, max_workers, progress_callback)

        writer = CoverageWriter(output_dir, invert=self.settings.processing.invert_output)
        for name, coverage in coverages.items():
            writer.write(name, coverage)

        self.logger.info("Glyph images written", output=str(output_dir), count=len(coverages))
        return self.stats

    def _rasterize_parallel(
        self,
        tasks: dict[str, dict[str, Any]],
        method: Method,
        max_workers: int | None,
        stats: RasterStats,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> dict[str, CoverageBuffer]:
        """Rasterize serialized paths in parallel using ProcessPoolExecutor.

        Args:
            tasks: Serialized paths keyed by name
            method: Fill or Stroke
            max_workers: Maximum worker processes
            stats: Statistics object to update
            progress_callback: Optional callback(completed, total, name, success)

        Returns:
            Coverage buffers keyed by name
        """
        results: dict[str, CoverageBuffer] = {}

        # Serialize configuration for workers
        method_dict = method.to_dict()
        settings_dict = self.settings.model_dump()

        self.logger.info(
            "Starting parallel rasterization",
            path_count=len(tasks),
            max_workers=max_workers,
        )

        total = len(tasks)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for name, path_dict in tasks.items():
                self.raster_logger.log_path_start(name)
                future = executor.submit(rasterize_path_task, path_dict, method_dict, settings_dict)
                pending_futures[future] = name

            try:
                for future in as_completed(pending_futures):
                    name = pending_futures.pop(future)
                    success = False

                    try:
                        result = future.result()

                        if "error" in result:
                            self.raster_logger.log_path_error(
                                name=name,
                                error=Exception(result["error"]),
                                traceback=result.get("traceback"),
                            )
                        else:
                            success = True
                            coverage = CoverageBuffer.from_dict(result["coverage"])
                            results[name] = coverage
                            self.raster_logger.log_path_complete(
                                name=name,
                                segments=result["segments"],
                                width=coverage.width,
                                height=coverage.height,
                                duration_ms=result.get("duration_ms", 0.0),
                            )

                    except Exception as e:
                        # Executor-level error
                        self.raster_logger.log_path_error(
                            name=name,
                            error=e,
                            traceback=traceback.format_exc(),
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, name, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise

        return results
