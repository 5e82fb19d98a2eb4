"""SVG cut file export.

Only cut layers are exported: every rendered contour becomes a hairline
black path in sheet coordinates, so the cutter sees exactly the offset
geometry shown on the canvas.
"""

from pathlib import Path

import structlog
import svgwrite

from platekit.config import ExportConfig, GeometryConfig
from platekit.core.pipeline import render_layer
from platekit.domain import Point, Project, RenderTransform, get_page_size_info
from platekit.exceptions import ExportError

logger = structlog.get_logger(__name__)


def _fmt(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def path_data(points: list[Point], closed: bool) -> str:
    """SVG path data for a polyline.

    Example:
        >>> path_data([Point(0, 0), Point(10, 0), Point(10, 5)], True)
        'M 0 0 L 10 0 L 10 5 Z'
    """
    commands = [f"M {_fmt(points[0].x)} {_fmt(points[0].y)}"]
    commands.extend(f"L {_fmt(p.x)} {_fmt(p.y)}" for p in points[1:])
    if closed:
        commands.append("Z")
    return " ".join(commands)


def build_svg(
    project: Project,
    config: ExportConfig | None = None,
    geometry: GeometryConfig | None = None,
) -> svgwrite.Drawing:
    """Build the SVG drawing of a project's cut layers.

    Args:
        project: Project to export
        config: Export settings (stroke width, sheet size override)
        geometry: Geometry thresholds used for rendering contours

    Returns:
        svgwrite.Drawing sized to the project sheet in points
    """
    config = config or ExportConfig()
    page = get_page_size_info(config.page_size or project.metadata.page_size)

    dwg = svgwrite.Drawing(size=(f"{page.width}pt", f"{page.height}pt"))
    dwg.viewbox(0, 0, page.width, page.height)
    dwg.add(dwg.rect(insert=(0, 0), size=(page.width, page.height), fill="white"))

    path_count = 0
    for layer in project.get_cut_layers():
        transform = RenderTransform.from_layer(layer)
        group = dwg.g(id=f"layer-{layer.id}", opacity=layer.opacity)

        for contour in render_layer(layer, geometry):
            if len(contour.points) < 2:
                continue
            points = transform.apply_all(contour.points)
            group.add(
                dwg.path(
                    d=path_data(points, contour.closed),
                    stroke="#000000",
                    stroke_width=config.stroke_width,
                    fill="none",
                )
            )
            path_count += 1

        dwg.add(group)

    logger.debug("SVG built", layers=len(project.get_cut_layers()), paths=path_count)
    return dwg


def export_svg(
    project: Project,
    config: ExportConfig | None = None,
    geometry: GeometryConfig | None = None,
) -> str:
    """Render a project's cut layers to an SVG document string."""
    return build_svg(project, config, geometry).tostring()


def write_svg(
    project: Project,
    path: Path,
    config: ExportConfig | None = None,
    geometry: GeometryConfig | None = None,
) -> Path:
    """Write the SVG cut file of a project.

    Raises:
        ExportError: If the file cannot be written
    """
    document = export_svg(project, config, geometry)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f'<?xml version="1.0" encoding="UTF-8"?>\n{document}', encoding="utf-8")
    except OSError as e:
        raise ExportError(str(path), str(e)) from e
    return path
