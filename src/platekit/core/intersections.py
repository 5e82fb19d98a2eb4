"""Self-intersection detection for closed polylines.

Contours traced from noisy alpha edges often cross themselves (figure-eight
shapes). Each crossing closes off a loop, and clicks inside such a loop must
still select the contour.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from platekit.core.geometry import DETERMINANT_EPSILON, segment_intersection
from platekit.domain import Point


@dataclass(frozen=True, slots=True)
class SelfIntersection:
    """A crossing between two non-adjacent edges of a ring.

    Edge ``i`` runs from ``points[i]`` to ``points[(i + 1) % n]``.

    Attributes:
        point: Where the edges cross
        segment1: Index of the earlier edge
        segment2: Index of the later edge
    """

    point: Point
    segment1: int
    segment2: int


def ring_vertices(points: Sequence[Point]) -> list[Point]:
    """Vertices of a ring without an explicit closing point.

    Returns:
        The points, minus a trailing copy of the first point if present
    """
    vertices = list(points)
    if len(vertices) > 1 and vertices[-1] == vertices[0]:
        vertices.pop()
    return vertices


def find_self_intersections(
    points: Sequence[Point],
    epsilon: float = DETERMINANT_EPSILON,
) -> list[SelfIntersection]:
    """Find every crossing between non-adjacent edges of a closed ring.

    Adjacent edges share a vertex and would always "intersect" there, so
    pairs ``(i, i + 1)`` and the wrap-around pair of the first and closing
    edge are skipped. Parallel edge pairs are skipped as well. This is a
    plain O(n^2) scan; callers run it on reduced contours.

    Args:
        points: Ring vertices (a repeated closing point is ignored)
        epsilon: Determinant magnitude below which edges are parallel

    Returns:
        Crossings ordered by (segment1, segment2)
    """
    vertices = ring_vertices(points)
    n = len(vertices)
    if n < 4:
        return []

    intersections: list[SelfIntersection] = []
    for i in range(n):
        a1 = vertices[i]
        a2 = vertices[(i + 1) % n]
        for j in range(i + 2, n):
            if i == 0 and j == n - 1:
                continue

            crossing = segment_intersection(
                a1, a2, vertices[j], vertices[(j + 1) % n], epsilon
            )
            if crossing is not None:
                intersections.append(SelfIntersection(crossing, i, j))

    return intersections


def extract_loop(points: Sequence[Point], intersection: SelfIntersection) -> list[Point]:
    """Sub-ring closed off by a self-intersection.

    Starts at the crossing, walks the vertices after ``segment1`` up to and
    including the start of ``segment2``, and returns to the crossing.

    Args:
        points: Ring vertices the intersection was found on
        intersection: Crossing to walk from

    Returns:
        Loop vertices, starting and ending at the crossing point
    """
    vertices = ring_vertices(points)
    loop = [intersection.point]
    loop.extend(vertices[intersection.segment1 + 1 : intersection.segment2 + 1])
    loop.append(intersection.point)
    return loop
