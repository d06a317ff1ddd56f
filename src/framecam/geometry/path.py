"""Arc-length sampling along polyline paths.

The camera can follow a designated curve while moving between two views.
The only capabilities it needs from such a curve are its total length and
the point at a given distance from the start; any object offering
``length()`` and ``point_at_length(distance)`` will do. PolylinePath is the
in-memory implementation used by tests, examples, and renderers that flatten
their curves to line segments.

Example:
    >>> from src.framecam.geometry.path import PolylinePath
    >>> path = PolylinePath([(0.0, 0.0), (3.0, 0.0), (3.0, 4.0)])
    >>> path.length()
    7.0
    >>> path.point_at_length(5.0)
    Point(x=3.0, y=2.0)
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np
import numpy.typing as npt

from src.framecam.geometry.affine import Point


class PolylinePath:
    """A path made of straight segments, sampled by arc length.

    Attributes:
        points: (N, 2) array of vertices.
    """

    def __init__(self, points: Iterable[tuple[float, float]] | npt.ArrayLike) -> None:
        """Create a path through the given vertices.

        Args:
            points: Sequence of (x, y) vertices, at least two.

        Raises:
            ValueError: If fewer than two vertices are given or the path
                has zero length.
        """
        pts = np.asarray(list(points), dtype=np.float64)
        if pts.ndim != 2 or pts.shape[0] < 2 or pts.shape[1] != 2:
            raise ValueError(
                f"A path needs at least two (x, y) vertices, got shape {pts.shape}"
            )

        segment_lengths = np.hypot(*np.diff(pts, axis=0).T)
        # Cumulative distance at each vertex, starting at 0
        self._cumulative = np.concatenate(([0.0], np.cumsum(segment_lengths)))
        if self._cumulative[-1] <= 0.0:
            raise ValueError("A path must have a non-zero length")

        self.points = pts

    def length(self) -> float:
        """Total arc length of the path."""
        return float(self._cumulative[-1])

    def point_at_length(self, distance: float) -> Point:
        """Point at the given distance from the start.

        Distances outside [0, length] are clamped to the path ends.
        """
        distance = min(max(distance, 0.0), self.length())
        x = np.interp(distance, self._cumulative, self.points[:, 0])
        y = np.interp(distance, self._cumulative, self.points[:, 1])
        return Point(float(x), float(y))

    def __repr__(self) -> str:
        return f"PolylinePath(vertices={len(self.points)}, length={self.length():.4g})"
