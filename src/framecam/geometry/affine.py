"""2D affine geometry primitives.

This module provides the small set of geometric value types the camera works
with:
- Point: a 2D position in scene or screen coordinates
- BoundingBox: an axis-aligned rectangle (x, y, width, height)
- Affine2D: a 2x3 affine transform stored as a 3x3 homogeneous matrix

Affine2D follows the SVG convention for its six components:

    | a  c  e |
    | b  d  f |
    | 0  0  1 |

Points are treated as column vectors, so ``(A @ B).apply(p)`` applies B first,
then A. This matches the order of an SVG transform list, where
``"scale(s) translate(tx, ty)"`` is the product ``S @ T``.

Example:
    >>> from src.framecam.geometry.affine import Affine2D, Point
    >>> m = Affine2D.translation(10.0, 0.0) @ Affine2D.rotation(90.0)
    >>> m.apply(Point(1.0, 0.0))
    Point(x=10.0, y=1.0)
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt


@dataclass(frozen=True)
class Point:
    """A 2D point.

    Attributes:
        x: Horizontal coordinate.
        y: Vertical coordinate.
    """

    x: float
    y: float

    def __iter__(self) -> Iterator[float]:
        """Allow tuple unpacking: x, y = point"""
        return iter((self.x, self.y))


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned rectangle in a given coordinate space.

    Attributes:
        x: Left edge.
        y: Top edge.
        width: Horizontal extent.
        height: Vertical extent.
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> Point:
        """Center of the rectangle."""
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def corners(self) -> tuple[Point, Point, Point, Point]:
        """Return the four corners, clockwise from the top-left one."""
        return (
            Point(self.x, self.y),
            Point(self.x + self.width, self.y),
            Point(self.x + self.width, self.y + self.height),
            Point(self.x, self.y + self.height),
        )


class Affine2D:
    """2D affine transform backed by a 3x3 homogeneous NumPy matrix."""

    __slots__ = ("m",)

    def __init__(self, m: npt.ArrayLike | None = None) -> None:
        if m is None:
            self.m = np.eye(3, dtype=np.float64)
        else:
            self.m = np.array(m, dtype=np.float64).reshape(3, 3)

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def identity(cls) -> Affine2D:
        return cls()

    @classmethod
    def from_components(
        cls, a: float, b: float, c: float, d: float, e: float, f: float
    ) -> Affine2D:
        """Build a transform from SVG matrix(a, b, c, d, e, f) components."""
        return cls([[a, c, e], [b, d, f], [0.0, 0.0, 1.0]])

    @classmethod
    def translation(cls, tx: float, ty: float) -> Affine2D:
        mat = cls()
        mat.m[0, 2] = tx
        mat.m[1, 2] = ty
        return mat

    @classmethod
    def scaling(cls, sx: float, sy: float | None = None) -> Affine2D:
        if sy is None:
            sy = sx
        mat = cls()
        mat.m[0, 0] = sx
        mat.m[1, 1] = sy
        return mat

    @classmethod
    def rotation(cls, angle: float, cx: float = 0.0, cy: float = 0.0) -> Affine2D:
        """Rotation by ``angle`` degrees about the pivot ``(cx, cy)``.

        Equivalent to the SVG ``rotate(angle, cx, cy)`` transform, i.e.
        ``translate(cx, cy) rotate(angle) translate(-cx, -cy)``.
        """
        rad = math.radians(angle)
        c = math.cos(rad)
        s = math.sin(rad)
        rot = cls([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
        if cx == 0.0 and cy == 0.0:
            return rot
        return cls.translation(cx, cy) @ rot @ cls.translation(-cx, -cy)

    # =========================================================================
    # SVG components
    # =========================================================================

    @property
    def a(self) -> float:
        return float(self.m[0, 0])

    @property
    def b(self) -> float:
        return float(self.m[1, 0])

    @property
    def c(self) -> float:
        return float(self.m[0, 1])

    @property
    def d(self) -> float:
        return float(self.m[1, 1])

    @property
    def e(self) -> float:
        return float(self.m[0, 2])

    @property
    def f(self) -> float:
        return float(self.m[1, 2])

    # =========================================================================
    # Operations
    # =========================================================================

    def __matmul__(self, other: Affine2D) -> Affine2D:
        if isinstance(other, Affine2D):
            return Affine2D(self.m @ other.m)
        return NotImplemented

    def apply(self, point: Point) -> Point:
        """Map a point through this transform."""
        x = self.m[0, 0] * point.x + self.m[0, 1] * point.y + self.m[0, 2]
        y = self.m[1, 0] * point.x + self.m[1, 1] * point.y + self.m[1, 2]
        return Point(float(x), float(y))

    def apply_many(self, points: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """Map an (N, 2) array of points through this transform."""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        return pts @ self.m[:2, :2].T + self.m[:2, 2]

    def inverse(self) -> Affine2D:
        """Return the inverse transform.

        Raises:
            ValueError: If the transform is singular.
        """
        det = self.a * self.d - self.b * self.c
        if det == 0.0 or not math.isfinite(det):
            raise ValueError(f"Affine transform is not invertible (determinant = {det})")
        return Affine2D(np.linalg.inv(self.m))

    def is_close(self, other: Affine2D, atol: float = 1e-9) -> bool:
        return bool(np.allclose(self.m, other.m, atol=atol))

    def to_svg(self) -> str:
        """Serialize as an SVG ``matrix(a,b,c,d,e,f)`` string."""
        return f"matrix({self.a},{self.b},{self.c},{self.d},{self.e},{self.f})"

    def __repr__(self) -> str:
        return (
            f"Affine2D(a={self.a:.4g}, b={self.b:.4g}, c={self.c:.4g}, "
            f"d={self.d:.4g}, e={self.e:.4g}, f={self.f:.4g})"
        )
