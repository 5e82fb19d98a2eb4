"""Unit tests for settings and logging utilities."""

import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from platekit.config import ExportConfig, GeometryConfig, TraceConfig, get_default_settings
from platekit.domain import PageSize
from platekit.utils import ProcessingLogger, ProcessingStats, configure_logging


class TestSettings:
    """Tests for pydantic settings models."""

    def test_geometry_defaults(self) -> None:
        """Test the geometry thresholds default to the documented constants."""
        config = GeometryConfig()
        assert config.determinant_epsilon == 1e-10
        assert config.mitre_limit == 3.0
        assert config.arc_skip_angle == 0.1
        assert config.arc_points_per_radian == 3.0
        assert config.smoothing_factor == 0.3
        assert config.y_down

    def test_default_settings(self) -> None:
        """Test the combined settings object."""
        settings = get_default_settings()
        assert settings.trace.min_contour_area == 4.0
        assert settings.export.page_size is None
        assert settings.export.dpi == 300
        assert settings.logging.log_file is None

    def test_validation(self) -> None:
        """Test out of range values are rejected."""
        with pytest.raises(ValidationError):
            GeometryConfig(mitre_limit=0.5)
        with pytest.raises(ValidationError):
            TraceConfig(alpha_threshold=300)
        with pytest.raises(ValidationError):
            ExportConfig(dpi=10)

    def test_page_size_override(self) -> None:
        """Test the export sheet size accepts enum values by name."""
        assert ExportConfig(page_size="a4").page_size == PageSize.A4


class TestProcessingLogger:
    """Tests for ProcessingLogger statistics."""

    def test_stats(self) -> None:
        """Test counters follow the logged events."""
        logger = ProcessingLogger(MagicMock())
        logger.log_trace_complete("art.png", 3, 12.5)
        logger.log_layer_rendered("cut", 3, 120, 1)
        logger.log_merge("cut", (0, 2), 1)
        logger.log_merge_skipped("cut", "too_few_contours")
        logger.log_error("export", OSError("disk full"))

        stats = logger.stats
        assert stats.contours_traced == 3
        assert stats.contours_rendered == 3
        assert stats.self_intersections == 1
        assert stats.merges == 1
        assert stats.error_count == 1
        assert stats.errors == [("export", "disk full")]

    def test_duration(self) -> None:
        """Test duration is zero until both timestamps are set."""
        assert ProcessingStats().duration_seconds == 0.0
        assert ProcessingStats(start_time=10.0, end_time=12.5).duration_seconds == 2.5


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_file_output(self, tmp_path: Path) -> None:
        """Test log records reach the log file."""
        log_path = tmp_path / "platekit.log"
        logger = configure_logging(log_file=log_path, quiet=True)
        try:
            logger.info("hello", answer=42)
            content = log_path.read_text(encoding="utf-8")
            assert "hello" in content
            assert "42" in content
        finally:
            configure_logging(quiet=True)

    def test_reconfigure_replaces_handlers(self) -> None:
        """Test repeated configuration does not stack console handlers."""
        root = logging.getLogger()
        configure_logging(console_level="ERROR")
        configure_logging(console_level="ERROR")
        try:
            tagged = [h for h in root.handlers if getattr(h, "_platekit_handler", False)]
            assert len(tagged) == 1
        finally:
            configure_logging(quiet=True)
