"""Layer representation.

A layer is either a print layer (an image placed on the sheet) or a cut
layer (vector cut-paths traced from an image). Both share placement on the
sheet; cut layers additionally carry their contours and the live offset.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from platekit.domain.path import VectorPath


class LayerType(str, Enum):
    """Kind of layer."""

    PRINT = "print"
    CUT = "cut"


@dataclass
class Layer:
    """A positioned layer on the sheet.

    Layers are passed around as values: operations that change a layer
    return a new one (``dataclasses.replace``) instead of mutating it.

    Attributes:
        id: Layer identifier
        name: Display name
        type: Print or cut layer
        vector_paths: Cut contours in native image pixel space
        offset: Signed offset distance applied when rendering contours
        point_reduction: Point reduction tolerance applied before offsetting
        x: Left edge on the sheet in points
        y: Top edge on the sheet in points
        width: Layer box width in points
        height: Layer box height in points
        rotation: Rotation in degrees around the box centre
        scale_x: Horizontal scale factor
        scale_y: Vertical scale factor
        opacity: Opacity between 0 and 1
        z_index: Stacking order
        image_width: Native width of the source image in pixels
        image_height: Native height of the source image in pixels
        image_source: Path of the source image, if known
        image_data: Source image embedded as base64 PNG (print layers)
        trace_parameters: Tracer parameters the contours were traced with
        visible: Whether the layer is shown and exported
    """

    id: str
    name: str
    type: LayerType
    vector_paths: list[VectorPath] = field(default_factory=list)
    offset: float = 0.0
    point_reduction: float = 0.0
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    rotation: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    opacity: float = 1.0
    z_index: float = 0.0
    image_width: int = 0
    image_height: int = 0
    image_source: str | None = None
    image_data: str | None = None
    trace_parameters: dict[str, Any] | None = None
    visible: bool = True

    def is_cut(self) -> bool:
        """Check if this layer carries cut contours."""
        return self.type == LayerType.CUT

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation using the project file field names
        """
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "visible": self.visible,
            "offset": self.offset,
            "pointReduction": self.point_reduction,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "rotation": self.rotation,
            "scaleX": self.scale_x,
            "scaleY": self.scale_y,
            "opacity": self.opacity,
            "zIndex": self.z_index,
            "imageWidth": self.image_width,
            "imageHeight": self.image_height,
            "imageSource": self.image_source,
        }
        if self.image_data is not None:
            data["imageData"] = self.image_data
        if self.trace_parameters is not None:
            data["traceParameters"] = dict(self.trace_parameters)
        if self.is_cut():
            data["vectorPaths"] = [p.to_dict() for p in self.vector_paths]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Layer":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a layer

        Returns:
            Layer instance
        """
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            type=LayerType(data["type"]),
            vector_paths=[VectorPath.from_dict(p) for p in data.get("vectorPaths") or []],
            offset=float(data.get("offset") or 0.0),
            point_reduction=float(data.get("pointReduction") or 0.0),
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            width=float(data.get("width", 0.0)),
            height=float(data.get("height", 0.0)),
            rotation=float(data.get("rotation", 0.0)),
            scale_x=float(data.get("scaleX", 1.0)),
            scale_y=float(data.get("scaleY", 1.0)),
            opacity=float(data.get("opacity", 1.0)),
            z_index=float(data.get("zIndex", 0.0)),
            image_width=int(data.get("imageWidth", 0)),
            image_height=int(data.get("imageHeight", 0)),
            image_source=data.get("imageSource"),
            image_data=data.get("imageData"),
            trace_parameters=data.get("traceParameters"),
            visible=bool(data.get("visible", True)),
        )
