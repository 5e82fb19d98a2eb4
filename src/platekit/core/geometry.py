"""Geometric operations shared by the contour engine.

This module provides core mathematical utilities for:
- Signed area and winding classification
- Outward edge normals
- Line and line segment intersection
- Point-in-polygon testing (ray casting algorithm)

All functions are pure and stateless. Coordinates follow image/screen
convention: the y-axis grows downward.
"""

import math
from collections.abc import Sequence

from platekit.domain import Point, WindingDirection

DETERMINANT_EPSILON = 1e-10


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def signed_area(points: Sequence[Point]) -> float:
    """Calculate signed area of a polygon.

    Uses the trapezoid form of the shoelace formula,
    ``Σ (x[i+1] - x[i]) * (y[i+1] + y[i]) / 2`` over the cyclic sequence.
    The sign encodes winding; with y growing downward a negative area is a
    ring that turns clockwise on screen.

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square units. Returns 0.0 for degenerate polygons.

    Examples:
        >>> square = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]
        >>> signed_area(square)
        -100.0
        >>> signed_area(list(reversed(square)))
        100.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        curr = points[i]
        nxt = points[(i + 1) % n]
        area += (nxt.x - curr.x) * (nxt.y + curr.y)

    return area / 2.0


def is_clockwise(points: Sequence[Point], y_down: bool = True) -> bool:
    """Check if a polygon winds clockwise.

    Degenerate polygons (zero area) count as clockwise.

    Args:
        points: Polygon vertices
        y_down: True for image/screen space, False for a y-up plane

    Returns:
        True if the ring turns clockwise in the given convention
    """
    area = signed_area(points)
    if y_down:
        return area <= 0
    return area >= 0


def winding_direction(points: Sequence[Point], y_down: bool = True) -> WindingDirection:
    """Classify polygon winding."""
    if is_clockwise(points, y_down):
        return WindingDirection.CLOCKWISE
    return WindingDirection.COUNTER_CLOCKWISE


def offset_direction(points: Sequence[Point]) -> int:
    """Sign that turns left-hand edge normals into outward normals.

    For every edge with unit vector ``(ux, uy)`` the vector
    ``(-uy * direction, ux * direction)`` points away from the polygon
    interior. This only depends on the coordinates, not on which way the
    y-axis is drawn. Zero-area rings take the clockwise (y-down) branch.

    Returns:
        +1 or -1
    """
    return 1 if signed_area(points) > 0 else -1


def edge_normal(
    start: Point,
    end: Point,
    direction: int,
    min_length: float = DETERMINANT_EPSILON,
) -> tuple[float, float] | None:
    """Unit outward normal of an edge.

    Args:
        start: Edge start
        end: Edge end
        direction: Multiplier from ``offset_direction``
        min_length: Edges shorter than this are degenerate

    Returns:
        (nx, ny) unit vector, or None for a degenerate edge
    """
    dx = end.x - start.x
    dy = end.y - start.y
    length = math.hypot(dx, dy)
    if length <= min_length:
        return None

    ux = dx / length
    uy = dy / length
    return (-uy * direction, ux * direction)


def line_intersection(
    p1: Point,
    p2: Point,
    p3: Point,
    p4: Point,
    epsilon: float = DETERMINANT_EPSILON,
) -> Point | None:
    """Find intersection point of two infinite lines.

    Args:
        p1: First point on line 1
        p2: Second point on line 1
        p3: First point on line 2
        p4: Second point on line 2
        epsilon: Determinant magnitude below which lines are parallel

    Returns:
        Point where the lines cross, None if they are parallel
    """
    denom = (p1.x - p2.x) * (p3.y - p4.y) - (p1.y - p2.y) * (p3.x - p4.x)
    if abs(denom) < epsilon:
        return None

    t = ((p1.x - p3.x) * (p3.y - p4.y) - (p1.y - p3.y) * (p3.x - p4.x)) / denom
    return Point(p1.x + t * (p2.x - p1.x), p1.y + t * (p2.y - p1.y))


def segment_intersection(
    p1: Point,
    p2: Point,
    p3: Point,
    p4: Point,
    epsilon: float = DETERMINANT_EPSILON,
) -> Point | None:
    """Find intersection point of two line segments.

    Uses parametric line equations to find intersection. Returns None if lines
    are parallel or if intersection is outside either segment.

    Args:
        p1: First endpoint of segment 1
        p2: Second endpoint of segment 1
        p3: First endpoint of segment 2
        p4: Second endpoint of segment 2
        epsilon: Determinant magnitude below which segments are parallel

    Returns:
        Point at intersection if segments intersect, None otherwise

    Examples:
        >>> segment_intersection(Point(0, 0), Point(2, 2), Point(0, 2), Point(2, 0))
        Point(x=1.0, y=1.0)
    """
    x1, y1 = p1.x, p1.y
    x2, y2 = p2.x, p2.y
    x3, y3 = p3.x, p3.y
    x4, y4 = p4.x, p4.y

    denom = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)

    # Lines are parallel or coincident
    if abs(denom) < epsilon:
        return None

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denom
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / denom

    if 0 <= t <= 1 and 0 <= u <= 1:
        return Point(x1 + t * (x2 - x1), y1 + t * (y2 - y1))

    return None


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting algorithm.

    Casts a horizontal ray from the point to the right and counts intersections
    with polygon edges. Odd number of intersections = inside, even = outside.

    Args:
        point: The point to test
        polygon: List of points forming the polygon boundary

    Returns:
        True if point is inside polygon, False otherwise

    Examples:
        >>> square = [Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2)]
        >>> point_in_polygon(Point(1, 1), square)
        True
        >>> point_in_polygon(Point(3, 3), square)
        False
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        # Check if ray from point intersects edge (j, i)
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def bounding_box(points: Sequence[Point]) -> tuple[float, float, float, float]:
    """Calculate bounding box of a point set.

    Returns:
        Tuple of (min_x, min_y, max_x, max_y)
    """
    if not points:
        return (0.0, 0.0, 0.0, 0.0)

    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return (min(xs), min(ys), max(xs), max(ys))
