"""Distance-based point reduction for traced contours.

Traced contours carry many nearly coincident points. Reduction drops every
point closer than a tolerance to the previously kept point. It is a greedy
single pass rather than a recursive split, since it runs on every redraw.
"""

from platekit.core.geometry import distance
from platekit.domain import Point, VectorPath


def reduce_points(path: VectorPath, tolerance: float) -> VectorPath:
    """Collapse points closer than ``tolerance`` to their kept predecessor.

    The first point is always kept. For closed paths the last kept point is
    also dropped when it sits within tolerance of the first one, so the
    closing edge does not get a near-duplicate seam.

    Args:
        path: Path to simplify
        tolerance: Minimum distance between consecutive kept points

    Returns:
        A new path with fewer points, or ``path`` itself when there is nothing
        to reduce or the result would not be a valid polygon
    """
    points = path.points
    if len(points) <= 2 or tolerance <= 0:
        return path

    kept: list[Point] = [points[0]]
    for point in points[1:]:
        if distance(point, kept[-1]) >= tolerance:
            kept.append(point)

    if path.closed and len(kept) > 1 and distance(kept[-1], kept[0]) < tolerance:
        kept.pop()

    if len(kept) < 3:
        return path

    if len(kept) == len(points):
        return path

    return path.with_points(kept)
