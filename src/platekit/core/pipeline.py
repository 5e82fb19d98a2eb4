"""Render pipeline for cut layers.

Stored contours are never shown directly: every consumer (canvas, hit
testing, consolidation, export) works on the rendered contours, i.e. the
stored contours after point reduction and the layer's live offset.
"""

from platekit.config import GeometryConfig
from platekit.core.offset import offset_path
from platekit.core.reduction import reduce_points
from platekit.domain import Layer, VectorPath


def render_path(
    path: VectorPath,
    offset: float = 0.0,
    point_reduction: float = 0.0,
    config: GeometryConfig | None = None,
) -> VectorPath:
    """Reduce then offset a single contour.

    Args:
        path: Stored contour
        offset: Signed offset distance
        point_reduction: Reduction tolerance (0 disables)
        config: Geometry thresholds

    Returns:
        Rendered contour (``path`` itself when both steps are no-ops)
    """
    rendered = path
    if point_reduction > 0:
        rendered = reduce_points(rendered, point_reduction)
    return offset_path(rendered, offset, config)


def render_layer(layer: Layer, config: GeometryConfig | None = None) -> list[VectorPath]:
    """Rendered contours of a layer, in stored order.

    Args:
        layer: Layer to render
        config: Geometry thresholds

    Returns:
        Rendered contours; empty for print layers
    """
    if not layer.is_cut():
        return []

    return [
        render_path(path, layer.offset, layer.point_reduction, config)
        for path in layer.vector_paths
    ]
