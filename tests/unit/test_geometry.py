"""Unit tests for geometry primitives."""

import pytest

from platekit.core.geometry import (
    bounding_box,
    distance,
    edge_normal,
    is_clockwise,
    line_intersection,
    offset_direction,
    point_in_polygon,
    segment_intersection,
    signed_area,
    winding_direction,
)
from platekit.domain import Point, WindingDirection

SQUARE = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]


class TestSignedArea:
    """Tests for signed_area function."""

    def test_square(self) -> None:
        """Test area of a square in screen order."""
        assert signed_area(SQUARE) == -100.0

    def test_reversed_square(self) -> None:
        """Test reversing the ring flips the sign."""
        assert signed_area(list(reversed(SQUARE))) == 100.0

    def test_degenerate(self) -> None:
        """Test fewer than 3 points and collinear rings have no area."""
        assert signed_area([Point(0, 0), Point(1, 1)]) == 0.0
        assert signed_area([Point(0, 0), Point(1, 1), Point(2, 2)]) == 0.0


class TestWinding:
    """Tests for winding classification."""

    def test_square_is_clockwise_on_screen(self) -> None:
        """Test the canonical square winds clockwise with y down."""
        assert is_clockwise(SQUARE)
        assert winding_direction(SQUARE) == WindingDirection.CLOCKWISE

    def test_reversed_square(self) -> None:
        """Test the reversed square winds counter-clockwise with y down."""
        assert not is_clockwise(list(reversed(SQUARE)))
        assert winding_direction(list(reversed(SQUARE))) == WindingDirection.COUNTER_CLOCKWISE

    def test_y_up_convention(self) -> None:
        """Test the y-up convention mirrors the classification."""
        assert not is_clockwise(SQUARE, y_down=False)
        assert is_clockwise(list(reversed(SQUARE)), y_down=False)

    def test_zero_area_counts_as_clockwise(self) -> None:
        """Test degenerate rings take the clockwise branch."""
        assert is_clockwise([Point(0, 0), Point(1, 1), Point(2, 2)])


class TestNormals:
    """Tests for outward edge normals."""

    @pytest.mark.parametrize("ring", [SQUARE, list(reversed(SQUARE))])
    def test_normals_point_outward(self, ring: list[Point]) -> None:
        """Test every edge normal points away from the centre for either winding."""
        direction = offset_direction(ring)
        for i, start in enumerate(ring):
            end = ring[(i + 1) % len(ring)]
            nx, ny = edge_normal(start, end, direction)
            mid_x = (start.x + end.x) / 2
            mid_y = (start.y + end.y) / 2
            assert (mid_x - 5) * nx + (mid_y - 5) * ny > 0

    def test_degenerate_edge(self) -> None:
        """Test zero-length edges have no normal."""
        assert edge_normal(Point(1, 1), Point(1, 1), 1) is None


class TestIntersections:
    """Tests for line and segment intersection."""

    def test_segments_cross(self) -> None:
        """Test crossing diagonals."""
        assert segment_intersection(Point(0, 0), Point(2, 2), Point(0, 2), Point(2, 0)) == Point(1.0, 1.0)

    def test_segments_do_not_reach(self) -> None:
        """Test segments whose lines cross outside both segments."""
        assert segment_intersection(Point(0, 0), Point(1, 0), Point(2, -1), Point(2, 1)) is None

    def test_parallel(self) -> None:
        """Test parallel lines and segments have no intersection."""
        assert segment_intersection(Point(0, 0), Point(1, 0), Point(0, 1), Point(1, 1)) is None
        assert line_intersection(Point(0, 0), Point(1, 0), Point(0, 1), Point(1, 1)) is None

    def test_lines_are_unbounded(self) -> None:
        """Test line intersection extends past the given points."""
        assert line_intersection(Point(0, 0), Point(1, 0), Point(2, -1), Point(2, 1)) == Point(2.0, 0.0)


class TestPointInPolygon:
    """Tests for ray casting containment."""

    def test_inside_and_outside(self) -> None:
        """Test basic containment."""
        assert point_in_polygon(Point(5, 5), SQUARE)
        assert not point_in_polygon(Point(15, 5), SQUARE)

    def test_too_few_points(self) -> None:
        """Test degenerate polygons contain nothing."""
        assert not point_in_polygon(Point(0, 0), [Point(0, 0), Point(1, 1)])


class TestHelpers:
    """Tests for distance and bounding box helpers."""

    def test_distance(self) -> None:
        """Test Euclidean distance."""
        assert distance(Point(0, 0), Point(3, 4)) == 5.0

    def test_bounding_box(self) -> None:
        """Test bounding box of a point set."""
        assert bounding_box(SQUARE) == (0, 0, 10, 10)
        assert bounding_box([]) == (0.0, 0.0, 0.0, 0.0)
