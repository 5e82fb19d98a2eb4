"""Unit tests for the signed offset of closed paths."""

import math

import pytest

from platekit.config import GeometryConfig
from platekit.core.geometry import bounding_box, distance, signed_area
from platekit.core.offset import arc_join, build_offset_segments, offset_path, smooth_ring
from platekit.domain import Point, VectorPath

NO_SMOOTHING = GeometryConfig(smoothing_factor=0.0)


@pytest.fixture
def square() -> VectorPath:
    """10x10 square in screen order."""
    return VectorPath.from_coords("sq", [(0, 0), (10, 0), (10, 10), (0, 10)])


def _assert_has_point(points: tuple[Point, ...], expected: Point, tol: float = 1e-6) -> None:
    assert any(distance(p, expected) <= tol for p in points), f"{expected} not in {points}"


class TestOffsetIdentity:
    """Cases where offsetting is a no-op."""

    def test_zero_distance(self, square: VectorPath) -> None:
        """Test a zero offset returns the path itself."""
        assert offset_path(square, 0) is square

    def test_too_few_points(self) -> None:
        """Test paths with fewer than 3 points are returned unchanged."""
        line = VectorPath.from_coords("line", [(0, 0), (10, 0)])
        assert offset_path(line, 5) is line

    def test_open_path(self) -> None:
        """Test open paths are returned unchanged."""
        path = VectorPath.from_coords("open", [(0, 0), (10, 0), (10, 10)], closed=False)
        assert offset_path(path, 5) is path

    def test_fully_degenerate_ring(self) -> None:
        """Test rings without 3 usable edges are returned unchanged."""
        path = VectorPath.from_coords("dot", [(1, 1), (1, 1), (1, 1), (2, 2)])
        assert offset_path(path, 5) is path


class TestSquareOffset:
    """Offsetting a square with smoothing disabled."""

    def test_grow(self, square: VectorPath) -> None:
        """Test corners move out by the distance on both axes."""
        result = offset_path(square, 2, NO_SMOOTHING)

        assert result.id == "sq"
        assert result.closed
        for corner in (Point(-2, -2), Point(12, -2), Point(12, 12), Point(-2, 12)):
            _assert_has_point(result.points, corner)
        assert bounding_box(result.points) == pytest.approx((-2, -2, 12, 12))
        assert abs(signed_area(result.points)) == pytest.approx(196.0)

    def test_shrink(self, square: VectorPath) -> None:
        """Test a negative distance pulls the corners inward."""
        result = offset_path(square, -2, NO_SMOOTHING)

        for corner in (Point(2, 2), Point(8, 2), Point(8, 8), Point(2, 8)):
            _assert_has_point(result.points, corner)
        assert abs(signed_area(result.points)) == pytest.approx(36.0)

    def test_winding_does_not_change_direction(self, square: VectorPath) -> None:
        """Test counter-clockwise input still grows outward."""
        reversed_square = square.with_points(reversed(square.points))
        result = offset_path(reversed_square, 2, NO_SMOOTHING)

        assert bounding_box(result.points) == pytest.approx((-2, -2, 12, 12))
        assert abs(signed_area(result.points)) == pytest.approx(196.0)

    def test_does_not_mutate_input(self, square: VectorPath) -> None:
        """Test the source path keeps its points."""
        before = square.points
        offset_path(square, 3)
        assert square.points == before

    def test_smoothing_stays_close(self, square: VectorPath) -> None:
        """Test the default smoothing pass only nudges the mitred corners."""
        result = offset_path(square, 2)
        min_x, min_y, max_x, max_y = bounding_box(result.points)
        assert -2.0 <= min_x < 0
        assert 10 < max_x <= 12.0
        assert -2.0 <= min_y < 0
        assert 10 < max_y <= 12.0


class TestDegenerateEdges:
    """Zero-length and collinear edges inside otherwise valid rings."""

    def test_repeated_vertex_is_skipped(self, square: VectorPath) -> None:
        """Test a repeated vertex and a closing duplicate give the plain square offset."""
        noisy = VectorPath.from_coords(
            "noisy", [(0, 0), (10, 0), (10, 0), (10, 10), (0, 10), (0, 0)]
        )
        result = offset_path(noisy, 2, NO_SMOOTHING)
        expected = offset_path(square, 2, NO_SMOOTHING)

        assert len(build_offset_segments(noisy.points, 2, NO_SMOOTHING)) == 4
        assert len(result.points) == len(expected.points)
        for point in expected.points:
            _assert_has_point(result.points, point)
        assert abs(signed_area(result.points)) == pytest.approx(196.0)

    def test_collinear_join_adds_nothing(self) -> None:
        """Test a straight-through vertex emits no join points."""
        config = GeometryConfig()
        points = [Point(0, 0), Point(5, 0), Point(10, 0), Point(10, 10), Point(0, 10)]
        segments = build_offset_segments(points, 2, config)
        assert arc_join(segments[0], segments[1], 2, config) == []

    def test_collinear_midpoint(self, square: VectorPath) -> None:
        """Test a midpoint on an edge only adds its own offset point."""
        with_midpoint = VectorPath.from_coords(
            "mid", [(0, 0), (5, 0), (10, 0), (10, 10), (0, 10)]
        )
        result = offset_path(with_midpoint, 2, NO_SMOOTHING)
        plain = offset_path(square, 2, NO_SMOOTHING)

        assert len(result.points) == len(plain.points) + 1
        _assert_has_point(result.points, Point(5, -2))
        for point in plain.points:
            _assert_has_point(result.points, point)


class TestArcJoins:
    """Sharp corners fall back to round joins."""

    def test_spike_is_bounded(self) -> None:
        """Test a needle tip is rounded instead of mitred far out."""
        spike = VectorPath.from_coords("spike", [(0, 0), (100, 5), (0, 10)])
        result = offset_path(spike, 2, NO_SMOOTHING)

        tip = Point(100, 5)
        near_tip = [p for p in result.points if p.x > 90]
        assert len(near_tip) > 2
        assert all(distance(p, tip) <= 2 + 1e-6 for p in near_tip)
        assert max(p.x for p in result.points) <= 102 + 1e-6

    def test_arc_point_count(self) -> None:
        """Test a quarter turn emits ceil(pi / 2 * 3) points on the arc."""
        config = GeometryConfig()
        square = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]
        segments = build_offset_segments(square, 1, config)
        arc = arc_join(segments[0], segments[1], 1, config)

        assert len(arc) == math.ceil(math.pi / 2 * 3)
        assert distance(arc[0], segments[0].end) < 1e-9
        assert distance(arc[-1], segments[1].start) < 1e-9
        assert all(math.isclose(distance(p, Point(10, 0)), 1.0) for p in arc)

    def test_small_turn_skips_arc(self) -> None:
        """Test turns under the skip angle add at most the segment end."""
        config = GeometryConfig()
        points = [Point(0, 0), Point(10, 0), Point(20, 0.5), Point(10, 20)]
        segments = build_offset_segments(points, 1, config)
        arc = arc_join(segments[0], segments[1], 1, config)
        assert arc == [segments[0].end]


class TestSmoothRing:
    """Tests for the smoothing pass."""

    def test_blend(self) -> None:
        """Test one pass moves each point towards its neighbours."""
        ring = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]
        smoothed = smooth_ring(ring, 0.3)
        # (0,0): prev (0,10), next (10,0) -> +0.15 * (10, 10)
        assert smoothed[0].x == pytest.approx(1.5)
        assert smoothed[0].y == pytest.approx(1.5)
        assert ring[0] == Point(0, 0)

    def test_short_ring(self) -> None:
        """Test rings under 3 points are copied as-is."""
        assert smooth_ring([Point(0, 0), Point(1, 1)], 0.3) == [Point(0, 0), Point(1, 1)]
