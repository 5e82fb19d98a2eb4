"""Affine mapping between contour space and sheet space.

Contours traced from an image live in that image's pixel space. Pointer
events and exports live in sheet space (points). RenderTransform is the
affine map between the two, using the SVG matrix convention::

    x' = a * x + c * y + e
    y' = b * x + d * y + f
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from platekit.domain.path import Point

if TYPE_CHECKING:
    from platekit.domain.layer import Layer


@dataclass(frozen=True, slots=True)
class RenderTransform:
    """A 2D affine transform.

    Attributes:
        a, b, c, d: Linear part (column-major, as in SVG ``matrix()``)
        e, f: Translation
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> "RenderTransform":
        return cls()

    @classmethod
    def translation(cls, tx: float, ty: float) -> "RenderTransform":
        return cls(e=tx, f=ty)

    @classmethod
    def scaling(cls, sx: float, sy: float) -> "RenderTransform":
        return cls(a=sx, d=sy)

    @classmethod
    def rotation(cls, degrees: float, cx: float = 0.0, cy: float = 0.0) -> "RenderTransform":
        """Rotation around (cx, cy).

        Positive angles turn clockwise on screen since y grows downward.
        """
        theta = math.radians(degrees)
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)
        return cls(
            a=cos_t,
            b=sin_t,
            c=-sin_t,
            d=cos_t,
            e=cx - cos_t * cx + sin_t * cy,
            f=cy - sin_t * cx - cos_t * cy,
        )

    @classmethod
    def from_layer(cls, layer: "Layer") -> "RenderTransform":
        """Build the native-pixel to sheet transform of a layer.

        Pixels are first stretched onto the layer box, then the layer's
        scale, rotation around the box centre and position are applied, in
        the same order as the exported SVG group transform.

        Args:
            layer: Layer whose placement to use

        Returns:
            RenderTransform from image pixels to sheet points
        """
        fit_x = layer.width / layer.image_width if layer.image_width else 1.0
        fit_y = layer.height / layer.image_height if layer.image_height else 1.0

        return (
            cls.scaling(fit_x, fit_y)
            .then(cls.scaling(layer.scale_x, layer.scale_y))
            .then(cls.rotation(layer.rotation, layer.width / 2, layer.height / 2))
            .then(cls.translation(layer.x, layer.y))
        )

    def then(self, other: "RenderTransform") -> "RenderTransform":
        """Compose: apply this transform first, then ``other``."""
        return RenderTransform(
            a=other.a * self.a + other.c * self.b,
            b=other.b * self.a + other.d * self.b,
            c=other.a * self.c + other.c * self.d,
            d=other.b * self.c + other.d * self.d,
            e=other.a * self.e + other.c * self.f + other.e,
            f=other.b * self.e + other.d * self.f + other.f,
        )

    def is_identity(self) -> bool:
        return self == RenderTransform()

    def apply(self, point: Point) -> Point:
        """Map a single point."""
        return Point(
            self.a * point.x + self.c * point.y + self.e,
            self.b * point.x + self.d * point.y + self.f,
        )

    def apply_all(self, points: Iterable[Point]) -> list[Point]:
        """Map a sequence of points."""
        if self.is_identity():
            return list(points)
        return [self.apply(p) for p in points]
