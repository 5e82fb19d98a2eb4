"""Pointer hit-testing against cut contours.

A contour is hit when the pointer lies inside its main shape (even-odd ray
casting) or inside any loop closed off by one of its self-intersections.
The loop test catches clicks in self-crossing lobes that the even-odd rule
reports as outside.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from platekit.core.geometry import DETERMINANT_EPSILON, point_in_polygon
from platekit.core.intersections import extract_loop, find_self_intersections
from platekit.domain import Point, RenderTransform, VectorPath


@dataclass(frozen=True, slots=True)
class HitTestResult:
    """Containment of a pointer location in one contour.

    Attributes:
        in_main_shape: Inside the contour ring itself
        in_loop: Inside at least one self-intersection loop
    """

    in_main_shape: bool
    in_loop: bool

    @property
    def is_hit(self) -> bool:
        return self.in_main_shape or self.in_loop


def hit_test(
    point: Point,
    contour: Sequence[Point],
    transform: RenderTransform | None = None,
    epsilon: float = DETERMINANT_EPSILON,
) -> HitTestResult:
    """Test a pointer location against one contour.

    Args:
        point: Pointer location, in the space ``transform`` maps into
        contour: Contour points in their native space
        transform: Native-to-pointer mapping (identity if None)
        epsilon: Determinant epsilon for the intersection scan

    Returns:
        HitTestResult with both containment flags
    """
    mapped = transform.apply_all(contour) if transform is not None else list(contour)

    in_main_shape = point_in_polygon(point, mapped)
    in_loop = any(
        point_in_polygon(point, extract_loop(mapped, crossing))
        for crossing in find_self_intersections(mapped, epsilon)
    )
    return HitTestResult(in_main_shape=in_main_shape, in_loop=in_loop)


def is_hit(
    point: Point,
    contour: Sequence[Point],
    transform: RenderTransform | None = None,
) -> bool:
    """Check if a pointer location selects a contour."""
    return hit_test(point, contour, transform).is_hit


def hit_contours(
    point: Point,
    contours: Sequence[VectorPath],
    transform: RenderTransform | None = None,
    epsilon: float = DETERMINANT_EPSILON,
) -> set[int]:
    """Indices of every contour a pointer location selects.

    Only closed contours with at least 3 points can be selected. Open paths
    have no inside, and the union would drop them.

    Args:
        point: Pointer location
        contours: Contours as currently rendered
        transform: Native-to-pointer mapping (identity if None)
        epsilon: Determinant epsilon for the intersection scan

    Returns:
        Set of indices into ``contours``
    """
    return {
        index
        for index, contour in enumerate(contours)
        if contour.is_polygon() and hit_test(point, contour.points, transform, epsilon).is_hit
    }
