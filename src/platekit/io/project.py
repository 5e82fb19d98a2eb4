"""Project file persistence.

Projects are stored as UTF-8 JSON using the domain models' ``to_dict`` /
``from_dict`` layout. Cut contours are written exactly as stored (the
offset is stored alongside, not baked in).
"""

import json
from datetime import datetime, timezone
from pathlib import Path

from platekit.domain import PROJECT_VERSION, Project
from platekit.exceptions import ProjectLoadError, ProjectSaveError

PROJECT_SUFFIX = ".platekit.json"
SUPPORTED_VERSIONS = frozenset({PROJECT_VERSION})


def default_project_path(image_path: Path) -> Path:
    """Project path next to a source image.

    Example:
        sticker.png -> sticker.platekit.json
    """
    return image_path.with_name(f"{image_path.stem}{PROJECT_SUFFIX}")


def load_project(path: Path) -> Project:
    """Load a project file.

    Args:
        path: Project file path

    Returns:
        Project instance

    Raises:
        ProjectLoadError: If the file is missing, malformed or of an
            unsupported version
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ProjectLoadError(str(path), "file not found") from e
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ProjectLoadError(str(path), str(e)) from e

    if not isinstance(data, dict):
        raise ProjectLoadError(str(path), "expected a JSON object")

    version = data.get("version")
    if version not in SUPPORTED_VERSIONS:
        raise ProjectLoadError(str(path), f"unsupported project version {version!r}")

    try:
        return Project.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise ProjectLoadError(str(path), f"invalid project data: {e}") from e


def save_project(project: Project, path: Path, touch: bool = True) -> Path:
    """Write a project file.

    Args:
        project: Project to save
        path: Destination path
        touch: Update the modification timestamp before writing

    Returns:
        The written path

    Raises:
        ProjectSaveError: If the file cannot be written
    """
    if touch:
        project.metadata.modified = datetime.now(timezone.utc).isoformat()

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(project.to_dict(), indent=2), encoding="utf-8")
    except OSError as e:
        raise ProjectSaveError(str(path), str(e)) from e

    return path
