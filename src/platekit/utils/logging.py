"""Logging utilities for PlateKit."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_HANDLER_TAG = "_platekit_handler"


@dataclass
class ProcessingStats:
    """Statistics from a CLI run."""

    contours_traced: int = 0
    contours_rendered: int = 0
    self_intersections: int = 0
    merges: int = 0
    error_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


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
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Reconfiguring replaces handlers from an earlier call
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        setattr(file_handler, _HANDLER_TAG, True)
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        setattr(console_handler, _HANDLER_TAG, True)
        root_logger.addHandler(console_handler)

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

    logger = structlog.get_logger("platekit")
    logger.info("Logging initialized", log_file=str(log_file) if log_file else None, level=file_level)

    return logger


class ProcessingLogger:
    """Logger for tracking CLI progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_trace_complete(self, source: str, contours: int, duration_ms: float) -> None:
        """Log a finished image trace."""
        self._logger.info(
            "Image traced",
            source=source,
            contours=contours,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.contours_traced += contours

    def log_layer_rendered(
        self,
        layer_id: str,
        contours: int,
        points: int,
        self_intersections: int,
    ) -> None:
        """Log the rendered contour set of a cut layer."""
        self._logger.debug(
            "Layer rendered",
            layer=layer_id,
            contours=contours,
            points=points,
            self_intersections=self_intersections,
        )
        self._stats.contours_rendered += contours
        self._stats.self_intersections += self_intersections

    def log_merge(self, layer_id: str, touched: tuple[int, ...], produced: int) -> None:
        """Log a successful contour consolidation."""
        self._logger.info(
            "Contours merged",
            layer=layer_id,
            touched=list(touched),
            produced=produced,
        )
        self._stats.merges += 1

    def log_merge_skipped(self, layer_id: str, reason: str | None) -> None:
        """Log a consolidation gesture that left the layer unchanged."""
        self._logger.debug("Merge skipped", layer=layer_id, reason=reason)

    def log_error(self, context: str, error: Exception) -> None:
        """Log a failed operation."""
        self._logger.error(
            "Operation failed",
            context=context,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.error_count += 1
        self._stats.errors.append((context, str(error)))

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
