"""Planar boolean operations on cut-paths.

Unite, subtract, intersect and exclude are delegated to Shapely (GEOS).
Paths are converted to polygons (repaired with ``make_valid`` since traced
contours may cross themselves), combined, and the result is split back
into independent closed paths. Interior rings of a result come back as the
path's holes.
"""

from collections.abc import Callable, Sequence
from functools import reduce
from uuid import uuid4

import structlog
from shapely import make_valid
from shapely.errors import GEOSException
from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from platekit.domain import Point, VectorPath
from platekit.exceptions import BooleanOperationError

logger = structlog.get_logger(__name__)


def path_to_geometry(path: VectorPath) -> BaseGeometry:
    """Convert a closed path (and its holes) to a valid polygonal geometry."""
    polygon = Polygon(
        path.to_coords(),
        holes=[hole.to_coords() for hole in path.holes if len(hole.points) >= 3],
    )
    if polygon.is_valid:
        return polygon
    return make_valid(polygon)


def _iter_polygons(geometry: BaseGeometry) -> list[Polygon]:
    if geometry.is_empty:
        return []
    if isinstance(geometry, Polygon):
        return [geometry] if geometry.area > 0 else []
    if hasattr(geometry, "geoms"):
        polygons: list[Polygon] = []
        for part in geometry.geoms:
            polygons.extend(_iter_polygons(part))
        return polygons
    # Points and lines left over from make_valid carry no area
    return []


def _ring_points(coords: Sequence[tuple[float, ...]]) -> tuple[Point, ...]:
    points = [Point(float(c[0]), float(c[1])) for c in coords]
    if len(points) > 1 and points[-1] == points[0]:
        points.pop()
    return tuple(points)


def geometry_to_paths(geometry: BaseGeometry, prefix: str) -> list[VectorPath]:
    """Split a boolean result into independent closed paths.

    Args:
        geometry: Polygonal Shapely geometry
        prefix: Id prefix for the new paths (e.g. "united")

    Returns:
        One path per polygon, holes attached
    """
    polygons = _iter_polygons(geometry)
    compound = len(polygons) > 1
    paths: list[VectorPath] = []

    for i, polygon in enumerate(polygons):
        path_id = f"{prefix}-{i}-{uuid4()}" if compound else f"{prefix}-{uuid4()}"
        holes = tuple(
            VectorPath(id=f"{path_id}-hole-{k}", points=_ring_points(interior.coords))
            for k, interior in enumerate(polygon.interiors)
        )
        paths.append(
            VectorPath(
                id=path_id,
                points=_ring_points(polygon.exterior.coords),
                closed=True,
                holes=holes,
            )
        )

    return paths


def _run(
    operation: str,
    paths: Sequence[VectorPath],
    combine: Callable[[list[BaseGeometry]], BaseGeometry],
    prefix: str,
) -> list[VectorPath]:
    polygons = [path for path in paths if path.is_polygon()]
    if not polygons:
        return []

    try:
        result = combine([path_to_geometry(path) for path in polygons])
    except (GEOSException, ValueError) as e:
        raise BooleanOperationError(operation, str(e)) from e

    output = geometry_to_paths(result, prefix)
    logger.debug(
        "Boolean operation complete",
        operation=operation,
        inputs=len(polygons),
        outputs=len(output),
    )
    return output


def unite(paths: Sequence[VectorPath]) -> list[VectorPath]:
    """Merge paths into one or more shapes.

    Args:
        paths: Paths to merge

    Returns:
        Closed paths covering the union; empty for empty input

    Raises:
        BooleanOperationError: If the geometry engine fails
    """
    return _run("unite", paths, unary_union, "united")


def subtract(subject: VectorPath, clips: Sequence[VectorPath]) -> list[VectorPath]:
    """Cut ``clips`` out of ``subject``.

    Raises:
        BooleanOperationError: If the geometry engine fails
    """

    def combine(geoms: list[BaseGeometry]) -> BaseGeometry:
        return geoms[0].difference(unary_union(geoms[1:])) if len(geoms) > 1 else geoms[0]

    if not subject.is_polygon():
        return []
    return _run("subtract", [subject, *clips], combine, "subtracted")


def intersect(paths: Sequence[VectorPath]) -> list[VectorPath]:
    """Keep only the area shared by every path.

    Raises:
        BooleanOperationError: If the geometry engine fails
    """
    return _run(
        "intersect",
        paths,
        lambda geoms: reduce(lambda a, b: a.intersection(b), geoms),
        "intersected",
    )


def exclude(paths: Sequence[VectorPath]) -> list[VectorPath]:
    """Keep the area covered by an odd number of paths.

    Raises:
        BooleanOperationError: If the geometry engine fails
    """
    return _run(
        "exclude",
        paths,
        lambda geoms: reduce(lambda a, b: a.symmetric_difference(b), geoms),
        "excluded",
    )
