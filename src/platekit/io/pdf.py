"""Print sheet export.

The visible print layers are composited onto a white sheet raster at the
export resolution, in stacking order and with their opacity and placement,
and the raster is written as a single-page PDF of the sheet size.
"""

import io
from dataclasses import replace
from pathlib import Path

import cv2
import numpy as np
import structlog
from PIL import Image

from platekit.config import ExportConfig
from platekit.domain import Layer, Project, RenderTransform, get_page_size_info
from platekit.exceptions import ExportError, ImageLoadError
from platekit.io.tracer import layer_image

logger = structlog.get_logger(__name__)

POINTS_PER_INCH = 72.0


def to_bgra(image: np.ndarray) -> np.ndarray:
    """Convert a grayscale, BGR or BGRA image to 8-bit BGRA.

    Raises:
        ExportError: If the array is not an image
    """
    if image.dtype != np.uint8:
        peak = float(np.iinfo(image.dtype).max) if np.issubdtype(image.dtype, np.integer) else 1.0
        image = np.clip(image.astype(np.float64) / peak * 255.0, 0, 255).astype(np.uint8)

    if image.ndim == 3 and image.shape[2] == 1:
        image = image[:, :, 0]
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGRA)
    if image.ndim == 3 and image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2BGRA)
    if image.ndim == 3 and image.shape[2] == 4:
        return image
    raise ExportError("<print sheet>", f"unsupported image shape {image.shape}")


def sheet_transform(layer: Layer, image: np.ndarray, dpi: int) -> RenderTransform:
    """Map image pixels of a print layer to sheet raster pixels."""
    height, width = image.shape[:2]
    placed = replace(layer, image_width=width, image_height=height)
    scale = dpi / POINTS_PER_INCH
    return RenderTransform.from_layer(placed).then(RenderTransform.scaling(scale, scale))


def render_print_sheet(
    project: Project,
    config: ExportConfig | None = None,
    base_dir: Path | None = None,
) -> np.ndarray:
    """Composite the visible print layers of a project.

    Layers whose image cannot be found are skipped with a warning.

    Args:
        project: Project to render
        config: Export settings (resolution, sheet size override)
        base_dir: Directory relative image paths are resolved against

    Returns:
        uint8 BGR array of the whole sheet
    """
    config = config or ExportConfig()
    page = get_page_size_info(config.page_size or project.metadata.page_size)
    scale = config.dpi / POINTS_PER_INCH
    size = (max(1, round(page.width * scale)), max(1, round(page.height * scale)))

    canvas = np.full((size[1], size[0], 3), 255.0, dtype=np.float32)
    drawn = 0
    for layer in project.get_print_layers():
        try:
            image = to_bgra(layer_image(layer, base_dir))
        except ImageLoadError as e:
            logger.warning("Print layer skipped", layer=layer.id, error=str(e))
            continue

        t = sheet_transform(layer, image, config.dpi)
        matrix = np.array([[t.a, t.c, t.e], [t.b, t.d, t.f]], dtype=np.float64)
        warped = cv2.warpAffine(
            image,
            matrix,
            size,
            flags=cv2.INTER_LINEAR,
            borderMode=cv2.BORDER_CONSTANT,
            borderValue=(0, 0, 0, 0),
        )
        alpha = warped[:, :, 3:4].astype(np.float32) * (layer.opacity / 255.0)
        canvas = canvas * (1.0 - alpha) + warped[:, :, :3].astype(np.float32) * alpha
        drawn += 1

    logger.debug(
        "Print sheet rendered", layers=drawn, width=size[0], height=size[1], dpi=config.dpi
    )
    return np.clip(np.rint(canvas), 0, 255).astype(np.uint8)


def _sheet_image(project: Project, config: ExportConfig, base_dir: Path | None) -> Image.Image:
    sheet = render_print_sheet(project, config, base_dir)
    return Image.fromarray(cv2.cvtColor(sheet, cv2.COLOR_BGR2RGB))


def export_pdf(
    project: Project,
    config: ExportConfig | None = None,
    base_dir: Path | None = None,
) -> bytes:
    """Render a project's print layers to PDF bytes."""
    config = config or ExportConfig()
    buffer = io.BytesIO()
    _sheet_image(project, config, base_dir).save(buffer, "PDF", resolution=float(config.dpi))
    return buffer.getvalue()


def write_pdf(
    project: Project,
    path: Path,
    config: ExportConfig | None = None,
    base_dir: Path | None = None,
) -> Path:
    """Write the print sheet of a project as PDF.

    Raises:
        ExportError: If the file cannot be written
    """
    document = export_pdf(project, config, base_dir)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(document)
    except OSError as e:
        raise ExportError(str(path), str(e)) from e

    logger.info("Print sheet written", path=str(path), bytes=len(document))
    return path
