"""Configuration settings for PlateKit."""

from pathlib import Path

from pydantic import BaseModel, Field

from platekit.domain.page import PageSize


class GeometryConfig(BaseModel):
    """Thresholds for the contour geometry engine.

    The defaults are empirically chosen for image pixel space and match the
    behaviour users see in the editor.
    """

    determinant_epsilon: float = Field(
        default=1e-10,
        gt=0.0,
        le=1e-3,
        description="Determinant magnitude below which two lines count as parallel",
    )
    degenerate_edge_length: float = Field(
        default=1e-10,
        ge=0.0,
        le=1.0,
        description="Edges shorter than this are skipped when offsetting",
    )
    mitre_limit: float = Field(
        default=3.0,
        ge=1.0,
        le=20.0,
        description="Max mitre distance from the original vertex, in multiples of |offset|",
    )
    arc_skip_angle: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description="Arc joins turning less than this many radians collapse to one point",
    )
    arc_points_per_radian: float = Field(
        default=3.0,
        gt=0.0,
        le=64.0,
        description="Point density of arc joins",
    )
    smoothing_factor: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Neighbour blend applied (at half weight) once after offsetting; 0 disables",
    )
    y_down: bool = Field(
        default=True,
        description="Contour space y-axis grows downward (image/screen convention)",
    )


class TraceConfig(BaseModel):
    """Parameters handed to the raster contour tracer."""

    min_contour_area: float = Field(
        default=4.0,
        ge=0.0,
        description="Contours enclosing fewer square pixels are discarded",
    )
    alpha_threshold: int = Field(
        default=128,
        ge=0,
        le=255,
        description="Samples above this value count as solid",
    )
    enable_curve_smoothing: bool = Field(
        default=True,
        description="Simplify traced contours with polygon approximation",
    )
    curve_smoothing_tolerance: float = Field(
        default=2.0,
        ge=0.0,
        le=50.0,
        description="Max deviation in pixels for polygon approximation",
    )


class ExportConfig(BaseModel):
    """Configuration for cut file and print sheet export."""

    page_size: PageSize | None = Field(
        default=None,
        description="Sheet size override (the project sheet size if None)",
    )
    stroke_width: float = Field(
        default=0.5,
        gt=0.0,
        le=10.0,
        description="Stroke width of exported cut paths in points",
    )
    dpi: int = Field(
        default=300,
        ge=36,
        le=1200,
        description="Resolution of the rasterized print sheet",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class PlateKitSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    trace: TraceConfig = Field(default_factory=TraceConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> PlateKitSettings:
    """Get default application settings."""
    return PlateKitSettings()
