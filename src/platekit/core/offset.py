"""Signed offset of closed cut-paths.

The offset gives a cut line some breathing room around the printed artwork
(positive distance) or pulls it inside the artwork (negative distance).
Each edge is pushed along its outward normal, and consecutive pushed edges
are re-joined:

- with a mitre (the intersection of the two pushed lines) when that corner
  stays close to the original vertex,
- with a round arc around the original vertex when the lines are parallel
  or the mitre would shoot too far out at a sharp corner.

A single light smoothing pass then takes the edge off the result. Offsets
are meant for visual cutting tolerance, so degenerate input degrades to an
approximation instead of raising.
"""

import math
from dataclasses import dataclass

from platekit.config import GeometryConfig
from platekit.core.geometry import distance as point_distance
from platekit.core.geometry import (
    edge_normal,
    line_intersection,
    offset_direction,
)
from platekit.domain import Point, VectorPath


@dataclass(frozen=True, slots=True)
class OffsetSegment:
    """An edge pushed along its outward normal.

    Attributes:
        start: Pushed edge start
        end: Pushed edge end
        normal: Unit outward normal of the original edge
        vertex: Original vertex shared with the following edge
    """

    start: Point
    end: Point
    normal: tuple[float, float]
    vertex: Point


def offset_path(
    path: VectorPath,
    distance: float,
    config: GeometryConfig | None = None,
) -> VectorPath:
    """Offset a closed path by a signed distance.

    Positive distances grow the shape, negative distances shrink it,
    whichever way the path winds.

    Args:
        path: Closed path to offset
        distance: Signed offset distance in path units
        config: Geometry thresholds (defaults if None)

    Returns:
        New path with the same id, closed flag and holes. The input path
        itself is returned for open paths, paths with fewer than 3 points
        (or fewer than 3 non-degenerate edges) and a zero distance.
    """
    if not path.is_polygon() or distance == 0:
        return path

    config = config or GeometryConfig()
    segments = build_offset_segments(path.points, distance, config)
    if len(segments) < 3:
        return path

    offset_points: list[Point] = []
    count = len(segments)
    for i, segment in enumerate(segments):
        following = segments[(i + 1) % count]
        offset_points.append(segment.start)
        offset_points.extend(join_segments(segment, following, distance, config))

    if config.smoothing_factor > 0:
        offset_points = smooth_ring(offset_points, config.smoothing_factor)

    return path.with_points(offset_points)


def build_offset_segments(
    points: tuple[Point, ...] | list[Point],
    distance: float,
    config: GeometryConfig,
) -> list[OffsetSegment]:
    """Push every non-degenerate edge of a ring outward by ``distance``.

    Args:
        points: Ring vertices
        distance: Signed offset distance
        config: Geometry thresholds

    Returns:
        One segment per usable edge, in edge order
    """
    direction = offset_direction(points)
    segments: list[OffsetSegment] = []
    n = len(points)

    for i in range(n):
        current = points[i]
        nxt = points[(i + 1) % n]

        normal = edge_normal(current, nxt, direction, config.degenerate_edge_length)
        if normal is None:
            continue

        nx, ny = normal
        segments.append(
            OffsetSegment(
                start=Point(current.x + nx * distance, current.y + ny * distance),
                end=Point(nxt.x + nx * distance, nxt.y + ny * distance),
                normal=normal,
                vertex=nxt,
            )
        )

    return segments


def join_segments(
    segment: OffsetSegment,
    following: OffsetSegment,
    distance: float,
    config: GeometryConfig,
) -> list[Point]:
    """Corner points between two consecutive offset segments.

    Returns:
        The mitre point, or the arc join points when the mitre is undefined
        or lies further than ``mitre_limit * |distance|`` from the vertex
    """
    mitre = line_intersection(
        segment.start,
        segment.end,
        following.start,
        following.end,
        config.determinant_epsilon,
    )
    if mitre is not None:
        if point_distance(mitre, segment.vertex) <= config.mitre_limit * abs(distance):
            return [mitre]

    return arc_join(segment, following, distance, config)


def arc_join(
    segment: OffsetSegment,
    following: OffsetSegment,
    distance: float,
    config: GeometryConfig,
) -> list[Point]:
    """Round corner around the original vertex.

    The arc runs from the end of ``segment`` to the start of ``following``
    the short way round, with radius ``|distance|``.

    Returns:
        Points along the arc, both ends included. Turns smaller than
        ``arc_skip_angle`` collapse to the segment end (or to nothing when
        that end already coincides with the next segment start).
    """
    start_angle = math.atan2(segment.normal[1], segment.normal[0])
    end_angle = math.atan2(following.normal[1], following.normal[0])
    sweep = end_angle - start_angle
    # Wrap into [-pi, pi]
    sweep = math.atan2(math.sin(sweep), math.cos(sweep))

    if abs(sweep) < config.arc_skip_angle:
        if point_distance(segment.end, following.start) <= config.degenerate_edge_length:
            return []
        return [segment.end]

    steps = max(2, math.ceil(abs(sweep) * config.arc_points_per_radian))
    center = segment.vertex
    arc: list[Point] = []
    for k in range(steps):
        angle = start_angle + sweep * (k / (steps - 1))
        arc.append(
            Point(
                center.x + math.cos(angle) * distance,
                center.y + math.sin(angle) * distance,
            )
        )
    return arc


def smooth_ring(points: list[Point], factor: float) -> list[Point]:
    """Blend every point of a ring towards its neighbours once.

    ``p' = p + (factor / 2) * (prev + next - 2p)``, computed from the
    unsmoothed ring.

    Args:
        points: Ring vertices
        factor: Smoothing factor between 0 and 1

    Returns:
        Smoothed copy of the ring
    """
    n = len(points)
    if n < 3:
        return list(points)

    weight = factor / 2.0
    smoothed: list[Point] = []
    for i in range(n):
        prev = points[i - 1]
        curr = points[i]
        nxt = points[(i + 1) % n]
        smoothed.append(
            Point(
                curr.x + weight * (prev.x + nxt.x - 2 * curr.x),
                curr.y + weight * (prev.y + nxt.y - 2 * curr.y),
            )
        )
    return smoothed
