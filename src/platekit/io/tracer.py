"""Raster contour tracing with OpenCV.

This module turns an image into closed cut-paths: the alpha channel (or the
inverted luminance for images without alpha) is thresholded and the outer
contours of the solid regions are extracted with ``cv2.findContours``.
"""

import base64
import binascii
import time
from dataclasses import replace
from pathlib import Path
from uuid import uuid4

import cv2
import numpy as np
import structlog
from pydantic import ValidationError

from platekit.config import TraceConfig
from platekit.domain import Layer, LayerType, PageSizeInfo, Project, VectorPath
from platekit.exceptions import ImageLoadError, TraceError

logger = structlog.get_logger(__name__)


def load_image(path: Path) -> np.ndarray:
    """Load an image keeping its alpha channel.

    Args:
        path: Image file path

    Returns:
        Image array as returned by OpenCV (BGR/BGRA or grayscale)

    Raises:
        ImageLoadError: If the file is missing or not a readable image
    """
    if not path.exists():
        raise ImageLoadError(str(path), "file not found")

    image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if image is None:
        raise ImageLoadError(str(path), "unsupported or corrupt image")
    return image


def encode_image(image: np.ndarray) -> str:
    """Encode an image as base64 PNG for embedding in a project file.

    Raises:
        TraceError: If OpenCV cannot encode the array
    """
    try:
        ok, buffer = cv2.imencode(".png", image)
    except cv2.error as e:
        raise TraceError(f"Failed to encode image: {e}") from e
    if not ok:
        raise TraceError("Failed to encode image as PNG")
    return base64.b64encode(buffer.tobytes()).decode("ascii")


def decode_image(data: str, name: str = "<embedded>") -> np.ndarray:
    """Decode an embedded base64 image, keeping its alpha channel.

    Args:
        data: Base64 encoded image file
        name: Name used in error messages

    Raises:
        ImageLoadError: If the data is not a readable image
    """
    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageLoadError(name, f"invalid base64 data: {e}") from e
    if not raw:
        raise ImageLoadError(name, "empty image data")

    image = cv2.imdecode(np.frombuffer(raw, dtype=np.uint8), cv2.IMREAD_UNCHANGED)
    if image is None:
        raise ImageLoadError(name, "unsupported or corrupt image")
    return image


def layer_image(layer: Layer, base_dir: Path | None = None) -> np.ndarray:
    """Source image of a layer.

    Embedded image data wins over the image file. A relative image path
    that does not exist from the working directory is looked up in
    ``base_dir`` (usually the project file's directory).

    Raises:
        ImageLoadError: If the layer has no image or it cannot be read
    """
    if layer.image_data:
        return decode_image(layer.image_data, layer.image_source or layer.name)
    if not layer.image_source:
        raise ImageLoadError(layer.name, "layer has no image")

    path = Path(layer.image_source)
    if not path.is_absolute() and not path.exists() and base_dir is not None:
        path = base_dir / path
    return load_image(path)


def find_layer_image(project: Project, layer: Layer, base_dir: Path | None = None) -> np.ndarray:
    """Image a layer was made from, looked up across the project.

    Cut layers never embed their image, so a print layer embedding the
    same image source is used before falling back to the file.
    """
    if layer.is_cut() and not layer.image_data:
        for other in project.layers:
            if not other.is_cut() and other.image_data and other.image_source == layer.image_source:
                return layer_image(other, base_dir)
    return layer_image(layer, base_dir)


def coverage_channel(image: np.ndarray) -> np.ndarray:
    """Single 8-bit channel where high values mean "solid".

    Args:
        image: Grayscale, BGR or BGRA image

    Returns:
        uint8 array of shape (height, width)

    Raises:
        TraceError: If the array is not an image
    """
    if image.ndim not in (2, 3) or image.size == 0:
        raise TraceError(f"Expected a 2D image, got array of shape {image.shape}")

    if image.dtype != np.uint8:
        peak = float(np.iinfo(image.dtype).max) if np.issubdtype(image.dtype, np.integer) else 1.0
        image = np.clip(image.astype(np.float64) / peak * 255.0, 0, 255).astype(np.uint8)

    if image.ndim == 2:
        return 255 - image

    channels = image.shape[2]
    if channels == 4:
        return np.ascontiguousarray(image[:, :, 3])
    if channels == 3:
        return 255 - cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    if channels == 1:
        return 255 - image[:, :, 0]

    raise TraceError(f"Unsupported channel count: {channels}")


def trace_image(image: np.ndarray, params: TraceConfig | None = None) -> list[VectorPath]:
    """Trace the outer contours of the solid regions of an image.

    Args:
        image: Image array (see ``coverage_channel``)
        params: Tracer parameters (defaults if None)

    Returns:
        Closed paths in image pixel space, ids ``contour-{i}``

    Raises:
        TraceError: If the image cannot be traced
    """
    params = params or TraceConfig()
    start_time = time.time()

    channel = coverage_channel(image)
    _, binary = cv2.threshold(channel, params.alpha_threshold, 255, cv2.THRESH_BINARY)

    try:
        contours, _ = cv2.findContours(binary, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
    except cv2.error as e:
        raise TraceError(f"Contour extraction failed: {e}") from e

    paths: list[VectorPath] = []
    for i, contour in enumerate(contours):
        if cv2.contourArea(contour) < params.min_contour_area:
            continue

        if (
            params.enable_curve_smoothing
            and params.curve_smoothing_tolerance > 0
            and len(contour) >= 3
        ):
            contour = cv2.approxPolyDP(contour, params.curve_smoothing_tolerance, True)

        coords = contour.reshape(-1, 2).tolist()
        paths.append(VectorPath.from_coords(f"contour-{i}", coords))

    logger.debug(
        "Contours traced",
        found=len(contours),
        kept=len(paths),
        duration_ms=round((time.time() - start_time) * 1000, 2),
    )
    return paths


def create_print_layer(
    name: str,
    image: np.ndarray,
    page: PageSizeInfo,
    source: str | None = None,
    embed: bool = False,
) -> Layer:
    """Place an image on the sheet as a print layer.

    The image keeps one pixel per point unless it does not fit on the
    sheet, in which case it is scaled down preserving aspect ratio.

    Args:
        name: Layer name
        image: Image array
        page: Sheet dimensions
        source: Image file path
        embed: Store the image in the layer as base64 PNG

    Returns:
        New print layer at the top-left corner of the sheet
    """
    height, width = image.shape[:2]
    fit = min(1.0, page.width / width, page.height / height)
    return Layer(
        id=str(uuid4()),
        name=name,
        type=LayerType.PRINT,
        width=width * fit,
        height=height * fit,
        image_width=width,
        image_height=height,
        image_source=source,
        image_data=encode_image(image) if embed else None,
    )


def create_cut_layer(
    print_layer: Layer,
    image: np.ndarray,
    params: TraceConfig | None = None,
) -> Layer:
    """Create a cut layer traced from a print layer's image.

    The cut layer shares the print layer's placement and sits just above it.

    Args:
        print_layer: Source print layer
        image: The print layer's image
        params: Tracer parameters

    Returns:
        New cut layer

    Raises:
        TraceError: If the source is not a print layer or tracing fails
    """
    if print_layer.type != LayerType.PRINT:
        raise TraceError("Can only create cut layers from print layers")

    params = params or TraceConfig()
    height, width = image.shape[:2]
    paths = trace_image(image, params)
    logger.info("Cut layer traced", source_layer=print_layer.id, contours=len(paths))

    return replace(
        print_layer,
        id=str(uuid4()),
        name=f"{print_layer.name} (Cut)",
        type=LayerType.CUT,
        vector_paths=paths,
        z_index=print_layer.z_index + 0.1,
        image_width=width,
        image_height=height,
        image_data=None,
        trace_parameters=params.model_dump(),
    )


def stored_trace_config(layer: Layer) -> TraceConfig:
    """Tracer parameters a layer was traced with (defaults if none are stored).

    Raises:
        TraceError: If the stored parameters are invalid
    """
    try:
        return TraceConfig.model_validate(layer.trace_parameters or {})
    except ValidationError as e:
        raise TraceError(f"Invalid stored trace parameters: {e}") from e


def retrace_layer(
    cut_layer: Layer,
    image: np.ndarray,
    params: TraceConfig | None = None,
) -> Layer:
    """Trace a cut layer's contours again.

    Placement, offset and point reduction are kept; the contours and the
    stored tracer parameters are replaced.

    Args:
        cut_layer: Cut layer to refresh
        image: The layer's source image
        params: Tracer parameters (the ones stored on the layer if None)

    Returns:
        Cut layer with freshly traced contours

    Raises:
        TraceError: If the layer is not a cut layer, its stored parameters
            are invalid or tracing fails
    """
    if not cut_layer.is_cut():
        raise TraceError("Can only retrace cut layers")

    if params is None:
        params = stored_trace_config(cut_layer)

    height, width = image.shape[:2]
    paths = trace_image(image, params)
    logger.info("Cut layer retraced", layer=cut_layer.id, contours=len(paths))

    return replace(
        cut_layer,
        vector_paths=paths,
        image_width=width,
        image_height=height,
        trace_parameters=params.model_dump(),
    )
