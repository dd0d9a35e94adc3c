"""Logging utilities for glyphpath."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Handlers installed by configure_logging, replaced on each call
_installed_handlers: list[logging.Handler] = []


@dataclass
class ProcessingStats:
    """Statistics from a batch decomposition run."""

    processed_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    placeholder_count: int = 0
    commands_emitted: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    glyph_timings_ms: list[float] = field(default_factory=list)
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
    def avg_glyph_time_ms(self) -> float | None:
        """Average per-glyph decomposition time, if any glyph was timed."""
        if not self.glyph_timings_ms:
            return None
        return sum(self.glyph_timings_ms) / len(self.glyph_timings_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
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
    root_logger.setLevel(logging.DEBUG)
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

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

    logger = structlog.get_logger("glyphpath")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class ProcessingLogger:
    """Logger for tracking batch progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_glyph_start(self, glyph_name: str) -> None:
        """Log start of glyph decomposition."""
        self._logger.debug("Decomposing glyph", glyph=glyph_name)

    def log_glyph_complete(
        self,
        glyph_name: str,
        command_count: int,
        duration_ms: float,
    ) -> None:
        """Log successful glyph decomposition."""
        self._logger.info(
            "Glyph decomposed",
            glyph=glyph_name,
            commands=command_count,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.commands_emitted += command_count

    def log_glyph_skipped(self, glyph_name: str, reason: str) -> None:
        """Log skipped glyph."""
        self._logger.debug("Glyph skipped", glyph=glyph_name, reason=reason)
        self._stats.skipped_count += 1

    def log_glyph_error(
        self,
        glyph_name: str,
        error: Exception | str,
        error_type: str | None = None,
    ) -> None:
        """Log glyph decomposition error."""
        self._logger.error(
            "Glyph decomposition failed",
            glyph=glyph_name,
            error=str(error),
            error_type=error_type or type(error).__name__,
        )
        self._stats.error_count += 1
        self._stats.errors.append((glyph_name, str(error)))

    def log_outline_read(
        self,
        glyph_name: str,
        contour_count: int,
        point_count: int,
    ) -> None:
        """Log outline extraction results."""
        self._logger.debug(
            "Outline read",
            glyph=glyph_name,
            contours=contour_count,
            points=point_count,
        )

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
