"""Domain models for PlateKit.

This module contains the core domain models representing cut-paths, layers,
sheets and projects. All models are designed to be:

- Passed as values (transformations return new instances)
- Serializable to the JSON project format
- Independent of any rendering or image library

Key classes:
- Point: A 2D point
- VectorPath: A polyline cut-path
- Layer: A print or cut layer placed on the sheet
- RenderTransform: Affine map from contour space to sheet space
- Project: A sheet with its layers
"""

from platekit.domain.layer import Layer, LayerType
from platekit.domain.page import PAGE_SIZES, PageSize, PageSizeInfo, get_page_size_info
from platekit.domain.path import Point, VectorPath, WindingDirection
from platekit.domain.project import PROJECT_VERSION, CanvasState, Project, ProjectMetadata
from platekit.domain.transform import RenderTransform

__all__: list[str] = [
    # Enums
    "LayerType",
    "PageSize",
    "WindingDirection",
    # Core types
    "Point",
    "VectorPath",
    "RenderTransform",
    "Layer",
    "PageSizeInfo",
    "ProjectMetadata",
    "CanvasState",
    "Project",
    # Constants and helpers
    "PAGE_SIZES",
    "PROJECT_VERSION",
    "get_page_size_info",
]
