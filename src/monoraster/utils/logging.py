"""Logging utilities for Monoraster."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Handlers installed by configure_logging(), replaced on reconfiguration
_installed_handlers: list[logging.Handler] = []


@dataclass
class RasterStats:
    """Statistics from a batch rasterization run."""

    processed_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    segments_total: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    path_timings_ms: list[float] = field(default_factory=list)
    was_cancelled: bool = False
    cancelled_count: int = 0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_path_time_ms(self) -> float | None:
        if not self.path_timings_ms:
            return None
        return sum(self.path_timings_ms) / len(self.path_timings_ms)

    @property
    def min_path_time_ms(self) -> float | None:
        return min(self.path_timings_ms) if self.path_timings_ms else None

    @property
    def max_path_time_ms(self) -> float | None:
        return max(self.path_timings_ms) if self.path_timings_ms else None


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("monoraster")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class RasterLogger:
    """Logger for tracking batch rasterization progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = RasterStats()

    def log_path_start(self, name: str) -> None:
        """Log start of path rasterization."""
        self._logger.debug("Rasterizing path", path=name)

    def log_path_complete(
        self,
        name: str,
        segments: int,
        width: int,
        height: int,
        duration_ms: float,
    ) -> None:
        """Log successful path rasterization."""
        self._logger.info(
            "Path rasterized",
            path=name,
            segments=segments,
            size=f"{width}x{height}",
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.segments_total += segments
        self._stats.path_timings_ms.append(duration_ms)

    def log_path_skipped(self, name: str, reason: str) -> None:
        """Log skipped path."""
        self._logger.debug("Path skipped", path=name, reason=reason)
        self._stats.skipped_count += 1

    def log_path_error(
        self,
        name: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log path rasterization error."""
        self._logger.error(
            "Path rasterization failed",
            path=name,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((name, str(error)))

    @property
    def stats(self) -> RasterStats:
        """Get current processing statistics."""
        return self._stats
