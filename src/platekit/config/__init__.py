"""Configuration management for PlateKit.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Thresholds of the contour geometry engine
- TraceConfig: Raster contour tracer parameters
- ExportConfig: Cut file export settings
- LoggingConfig: Logging settings
- PlateKitSettings: Main application settings
"""

from platekit.config.settings import (
    ExportConfig,
    GeometryConfig,
    LoggingConfig,
    PlateKitSettings,
    TraceConfig,
    get_default_settings,
)

__all__ = [
    "ExportConfig",
    "GeometryConfig",
    "LoggingConfig",
    "PlateKitSettings",
    "TraceConfig",
    "get_default_settings",
]
