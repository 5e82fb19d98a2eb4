"""Project representation: a sheet with its layers."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from platekit.domain.layer import Layer
from platekit.domain.page import PageSize

PROJECT_VERSION = "1.0.0"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class ProjectMetadata:
    """Metadata about a project.

    Attributes:
        name: Project name
        version: Project file format version
        created: ISO creation timestamp
        modified: ISO modification timestamp
        page_size: Sheet size
    """

    name: str
    version: str = PROJECT_VERSION
    created: str = field(default_factory=_now_iso)
    modified: str = field(default_factory=_now_iso)
    page_size: PageSize = PageSize.US_LETTER

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "created": self.created,
            "modified": self.modified,
            "pageSize": self.page_size.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProjectMetadata":
        return cls(
            name=str(data["name"]),
            version=str(data.get("version", PROJECT_VERSION)),
            created=str(data["created"]),
            modified=str(data["modified"]),
            page_size=PageSize(data.get("pageSize", PageSize.US_LETTER.value)),
        )


@dataclass
class CanvasState:
    """Editor view state saved alongside the layout."""

    zoom: float = 1.0
    selected_layer_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"zoom": self.zoom, "selectedLayerId": self.selected_layer_id}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CanvasState":
        return cls(
            zoom=float(data.get("zoom", 1.0)),
            selected_layer_id=data.get("selectedLayerId"),
        )


@dataclass
class Project:
    """A sheet layout.

    Attributes:
        metadata: Project metadata
        layers: Layers in insertion order (render order is by z_index)
        canvas: Saved editor view state
        version: File format version
    """

    metadata: ProjectMetadata
    layers: list[Layer] = field(default_factory=list)
    canvas: CanvasState = field(default_factory=CanvasState)
    version: str = PROJECT_VERSION

    def get_layer(self, layer_id: str) -> Layer | None:
        """Find a layer by id.

        Returns:
            The layer, or None if no layer has that id
        """
        for layer in self.layers:
            if layer.id == layer_id:
                return layer
        return None

    def replace_layer(self, layer: Layer) -> "Project":
        """Return a project with the layer of the same id swapped out."""
        layers = [layer if existing.id == layer.id else existing for existing in self.layers]
        return Project(
            metadata=self.metadata,
            layers=layers,
            canvas=self.canvas,
            version=self.version,
        )

    def get_print_layers(self) -> list[Layer]:
        """Visible print layers in stacking order."""
        return sorted(
            (layer for layer in self.layers if layer.visible and not layer.is_cut()),
            key=lambda layer: layer.z_index,
        )

    def get_cut_layers(self) -> list[Layer]:
        """Visible cut layers in stacking order."""
        return sorted(
            (layer for layer in self.layers if layer.visible and layer.is_cut()),
            key=lambda layer: layer.z_index,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "metadata": self.metadata.to_dict(),
            "layers": [layer.to_dict() for layer in self.layers],
            "canvasState": self.canvas.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Project":
        return cls(
            metadata=ProjectMetadata.from_dict(data["metadata"]),
            layers=[Layer.from_dict(layer) for layer in data.get("layers", [])],
            canvas=CanvasState.from_dict(data.get("canvasState") or {}),
            version=str(data.get("version", PROJECT_VERSION)),
        )
