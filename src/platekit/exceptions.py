"""Exception hierarchy for PlateKit."""


class PlateKitError(Exception):
    """Base exception for all PlateKit errors."""

    pass


class GeometryError(PlateKitError):
    """Errors in geometric calculations."""

    pass


class BooleanOperationError(GeometryError):
    """A planar boolean operation could not be completed."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Boolean '{operation}' failed: {reason}")


class TraceError(PlateKitError):
    """Errors related to tracing contours from an image."""

    pass


class ImageLoadError(TraceError):
    """Error loading an image file for tracing."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load image '{path}': {reason}")


class ProjectError(PlateKitError):
    """Errors related to project loading or saving."""

    pass


class ProjectLoadError(ProjectError):
    """Error loading a project file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load project '{path}': {reason}")


class ProjectSaveError(ProjectError):
    """Error saving a project file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save project '{path}': {reason}")


class LayerNotFoundError(ProjectError):
    """Requested layer not found in project."""

    def __init__(self, layer_id: str) -> None:
        self.layer_id = layer_id
        super().__init__(f"Layer '{layer_id}' not found in project")


class ExportError(PlateKitError):
    """Error writing an export file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to export '{path}': {reason}")
