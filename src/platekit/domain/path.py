"""Core geometric types for cut-path representation.

This module defines the fundamental geometric types used throughout PlateKit:
- Point: A 2D point in contour space
- VectorPath: A polyline cut-path with an opaque identity
- WindingDirection: Enum for polygon winding direction
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class WindingDirection(Enum):
    """Polygon winding direction as seen on screen.

    PlateKit works in image/screen space where the y-axis grows downward,
    so "clockwise" here is what a user sees on the canvas.
    """

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate (image pixels for traced contours)
        y: Y coordinate, growing downward
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))


@dataclass(frozen=True)
class VectorPath:
    """A polyline cut-path.

    Points are kept in insertion order and do not repeat the first point to
    close the ring; the ``closed`` flag carries that information instead.
    Holes are carried along for downstream consumers but the geometry engine
    never looks at them.

    Every transformation produces a new VectorPath, see ``with_points``.

    Attributes:
        id: Stable, opaque identifier
        points: Ordered points of the path
        closed: Whether the last point connects back to the first
        holes: Nested inner paths
    """

    id: str
    points: tuple[Point, ...]
    closed: bool = True
    holes: tuple["VectorPath", ...] = field(default=())

    @classmethod
    def from_coords(
        cls,
        path_id: str,
        coords: Iterable[tuple[float, float]],
        closed: bool = True,
    ) -> "VectorPath":
        """Build a path from plain (x, y) pairs.

        Args:
            path_id: Identifier for the new path
            coords: Iterable of (x, y) pairs
            closed: Closed flag

        Returns:
            VectorPath instance
        """
        return cls(
            id=path_id,
            points=tuple(Point(float(x), float(y)) for x, y in coords),
            closed=closed,
        )

    def with_points(self, points: Iterable[Point]) -> "VectorPath":
        """Return a copy carrying the same identity with new points."""
        return VectorPath(
            id=self.id,
            points=tuple(points),
            closed=self.closed,
            holes=self.holes,
        )

    def is_polygon(self) -> bool:
        """Check if the geometry engine can operate on this path.

        Returns:
            True if the path is closed and has at least 3 points
        """
        return self.closed and len(self.points) >= 3

    def to_coords(self) -> list[tuple[float, float]]:
        """Convert points to a list of (x, y) tuples."""
        return [p.to_tuple() for p in self.points]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the path
        """
        data: dict[str, Any] = {
            "id": self.id,
            "points": [p.to_dict() for p in self.points],
            "closed": self.closed,
        }
        if self.holes:
            data["holes"] = [h.to_dict() for h in self.holes]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VectorPath":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a path

        Returns:
            VectorPath instance
        """
        return cls(
            id=str(data["id"]),
            points=tuple(Point.from_dict(p) for p in data["points"]),
            closed=bool(data.get("closed", True)),
            holes=tuple(cls.from_dict(h) for h in data.get("holes") or ()),
        )
