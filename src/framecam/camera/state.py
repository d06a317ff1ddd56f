"""Camera state: the geometric description of a view and its interpolation.

A CameraState describes which part of the drawing is in view:
- (cx, cy): center of the visible frame in root coordinates
- (width, height): size of the visible frame in root coordinates
- angle: rotation of the frame in degrees, in [-180, 180)
- clipped: whether rendering is restricted to the frame rectangle

States are plain values. The presentation layer keeps one per layer and per
frame, and animates between two of them with ``interpolate``:

- Size changes linearly, or along a parabola when a relative zoom is given.
  A positive relative zoom makes the frame grow past both endpoints mid-way
  (zoom out, then in).
- The center moves in a straight line, or rides a guide path while the
  offset between the path ends and the declared centers fades linearly.
- The angle always turns the short way round.

Example:
    >>> from src.framecam.camera.state import CameraState
    >>> from src.framecam.geometry import BoundingBox
    >>> from src.framecam.scene import StaticScene
    >>> space = StaticScene(BoundingBox(0, 0, 400, 200))
    >>> a = CameraState.from_values(space, cx=100, cy=50, width=200, height=100)
    >>> b = CameraState.from_values(space, cx=300, cy=150, width=100, height=50, angle=90)
    >>> mid = a.clone().interpolate(a, b, 0.5)
    >>> (mid.cx, mid.cy, mid.width, mid.height, mid.angle)
    (200.0, 100.0, 150.0, 75.0, 45.0)
"""

from __future__ import annotations

import math

from src.framecam.geometry.affine import Affine2D, BoundingBox, Point
from src.framecam.scene.interfaces import CoordinateSpace, PathSampler


def _lerp(u0: float, u1: float, t: float) -> float:
    """Linear interpolation between u0 (t = 0) and u1 (t = 1)."""
    return u1 * t + u0 * (1.0 - t)


def zoom_parabola(u0: float, u1: float, t: float, relative_zoom: float) -> float:
    """Evaluate the zoom parabola through (0, u0) and (1, u1) at time t.

    The apex value ``um`` is ``max(u0, u1) * (1 + relative_zoom)`` for a
    positive relative zoom and ``min(u0, u1) * (1 - relative_zoom)`` for a
    negative one. The apex time ``tm`` is chosen so that the parabola passes
    exactly through both endpoints.

    Args:
        u0: Value at t = 0.
        u1: Value at t = 1.
        t: Progress in [0, 1].
        relative_zoom: Non-zero signed zoom amount.

    Returns:
        The parabola value at t.

    Raises:
        ValueError: If both endpoints do not lie strictly on the same side of
            the apex, in which case no real parabola exists.
    """
    if relative_zoom > 0:
        um = max(u0, u1) * (1.0 + relative_zoom)
    else:
        um = min(u0, u1) * (1.0 - relative_zoom)

    du0 = u0 - um
    du1 = u1 - um
    if not du0 * du1 > 0:
        raise ValueError(
            f"Relative zoom {relative_zoom} puts the apex ({um}) between the "
            f"endpoint sizes {u0} and {u1}; no zoom parabola goes through both"
        )

    r = math.sqrt(du0 / du1)
    tm = r / (1.0 + r)
    k = du0 / (tm * tm)
    dt = t - tm
    return k * dt * dt + um


class CameraState:
    """Geometric state of a view on a coordinate space.

    Attributes:
        space: The coordinate space this state was created for.
        cx: Horizontal center of the frame.
        cy: Vertical center of the frame.
        angle: Rotation in degrees.
        clipped: Whether rendering is clipped to the frame.
    """

    __slots__ = ("space", "_cx", "_cy", "_width", "_height", "angle", "clipped")

    def __init__(self, space: CoordinateSpace) -> None:
        """Create a state framing the whole drawing of ``space``.

        The frame is centered on the root bounding box, matches its size,
        and has no rotation and no clipping.

        Raises:
            ValueError: If the drawing has an empty bounding box.
        """
        self.space = space

        bbox = space.root_bounding_box()
        self.cx = bbox.x + bbox.width / 2
        self.cy = bbox.y + bbox.height / 2
        self.width = bbox.width
        self.height = bbox.height
        self.angle = 0.0
        self.clipped = False

    @classmethod
    def from_values(
        cls,
        space: CoordinateSpace,
        cx: float,
        cy: float,
        width: float,
        height: float,
        angle: float = 0.0,
        clipped: bool = False,
    ) -> CameraState:
        """Create a state with explicit field values."""
        state = cls(space)
        state.cx = cx
        state.cy = cy
        state.width = width
        state.height = height
        state.clipped = clipped
        return state.set_angle(angle)

    # =========================================================================
    # Validated fields
    # =========================================================================

    @property
    def cx(self) -> float:
        return self._cx

    @cx.setter
    def cx(self, value: float) -> None:
        self._cx = _check_coordinate("cx", value)

    @property
    def cy(self) -> float:
        return self._cy

    @cy.setter
    def cy(self, value: float) -> None:
        self._cy = _check_coordinate("cy", value)

    @property
    def width(self) -> float:
        return self._width

    @width.setter
    def width(self, value: float) -> None:
        self._width = _check_extent("width", value)

    @property
    def height(self) -> float:
        return self._height

    @height.setter
    def height(self, value: float) -> None:
        self._height = _check_extent("height", value)

    # =========================================================================
    # State algebra
    # =========================================================================

    def set_angle(self, angle: float) -> CameraState:
        """Set the angle, normalized to the interval [-180, 180).

        Raises:
            ValueError: If angle is not a finite number.
        """
        if not math.isfinite(angle):
            raise ValueError(f"Camera angle must be a finite number, got {angle}")
        normalized = (angle + 180.0) % 360.0 - 180.0
        # Tiny negative inputs can round up to exactly 360 before the shift
        if normalized >= 180.0:
            normalized -= 360.0
        self.angle = normalized
        return self

    def set_from_element(self, bbox: BoundingBox, matrix: Affine2D) -> CameraState:
        """Frame an element given its local box and local-to-root transform.

        The transform is assumed to be a similarity (uniform scale, rotation,
        translation). Skew and non-uniform scale are approximated by the
        scale of the x axis.

        Raises:
            ValueError: If the transform collapses the x axis or the box
                has no area.
        """
        scale = math.hypot(matrix.a, matrix.b)
        if scale == 0.0:
            raise ValueError(f"Element transform {matrix!r} has no scale component")

        center = matrix.apply(bbox.center)
        width = _check_extent("width", bbox.width * scale)
        height = _check_extent("height", bbox.height * scale)
        cx = _check_coordinate("cx", center.x)
        cy = _check_coordinate("cy", center.y)

        self._width = width
        self._height = height
        self._cx = cx
        self._cy = cy
        return self.set_angle(math.degrees(math.atan2(matrix.b, matrix.a)))

    def set_at_element(self, element: object) -> CameraState:
        """Frame an element of the bound coordinate space."""
        return self.set_from_element(
            self.space.bounding_box(element),
            self.space.current_transform(element),
        )

    def set_from_state(self, other: CameraState) -> CameraState:
        """Copy all geometric fields from another state."""
        self.cx = other.cx
        self.cy = other.cy
        self.width = other.width
        self.height = other.height
        self.angle = other.angle
        self.clipped = other.clipped
        return self

    def clone(self) -> CameraState:
        """Return an independent copy bound to the same coordinate space.

        The copy does not query the space, so cloning stays cheap while the
        drawing changes.
        """
        state = object.__new__(type(self))
        state.space = self.space
        return state.set_from_state(self)

    def interpolate(
        self,
        initial: CameraState,
        final: CameraState,
        progress: float,
        relative_zoom: float = 0.0,
        path: PathSampler | None = None,
        reverse_path: bool = False,
    ) -> CameraState:
        """Set this state to the view at ``progress`` between two states.

        Args:
            initial: State at progress 0 (not modified).
            final: State at progress 1 (not modified).
            progress: Normalized time in [0, 1].
            relative_zoom: 0 for a linear size change, otherwise the signed
                zoom amount of the size parabola.
            path: Optional guide path for the center.
            reverse_path: Follow the path from its end to its start.

        Returns:
            self, for chaining.

        Raises:
            ValueError: If progress is outside [0, 1] or the zoom parabola
                is undefined for these sizes. The state is left unchanged.
        """
        if not 0.0 <= progress <= 1.0:
            raise ValueError(f"Progress must be in [0, 1], got {progress}")

        # Size
        if relative_zoom:
            width = zoom_parabola(initial.width, final.width, progress, relative_zoom)
            height = zoom_parabola(initial.height, final.height, progress, relative_zoom)
        else:
            width = _lerp(initial.width, final.width, progress)
            height = _lerp(initial.height, final.height, progress)

        # Location
        if path is not None:
            path_length = path.length()
            start = path.point_at_length(path_length if reverse_path else 0.0)
            end = path.point_at_length(0.0 if reverse_path else path_length)
            current = path.point_at_length(
                path_length * ((1.0 - progress) if reverse_path else progress)
            )
            cx = current.x + _lerp(initial.cx - start.x, final.cx - end.x, progress)
            cy = current.y + _lerp(initial.cy - start.y, final.cy - end.y, progress)
        else:
            cx = _lerp(initial.cx, final.cx, progress)
            cy = _lerp(initial.cy, final.cy, progress)

        # Angle, the short way round
        delta = final.angle - initial.angle
        if delta > 180.0:
            angle = _lerp(initial.angle, final.angle - 360.0, progress)
        elif delta < -180.0:
            angle = _lerp(initial.angle - 360.0, final.angle, progress)
        else:
            angle = _lerp(initial.angle, final.angle, progress)

        width = _check_extent("width", width)
        height = _check_extent("height", height)
        cx = _check_coordinate("cx", cx)
        cy = _check_coordinate("cy", cy)

        self._width = width
        self._height = height
        self._cx = cx
        self._cy = cy
        self.angle = angle
        return self

    # =========================================================================
    # Value helpers
    # =========================================================================

    @property
    def center(self) -> Point:
        return Point(self.cx, self.cy)

    def as_tuple(self) -> tuple[float, float, float, float, float, bool]:
        """Return (cx, cy, width, height, angle, clipped)."""
        return (self.cx, self.cy, self.width, self.height, self.angle, self.clipped)

    def is_close(self, other: CameraState, tol: float = 1e-9) -> bool:
        """Field-wise comparison within an absolute tolerance."""
        return self.clipped == other.clipped and all(
            abs(u - v) <= tol
            for u, v in zip(self.as_tuple()[:5], other.as_tuple()[:5])
        )

    def __repr__(self) -> str:
        return (
            f"CameraState(cx={self.cx:.4g}, cy={self.cy:.4g}, width={self.width:.4g}, "
            f"height={self.height:.4g}, angle={self.angle:.4g}, clipped={self.clipped})"
        )


def _check_extent(name: str, value: float) -> float:
    value = float(value)
    if not (math.isfinite(value) and value > 0.0):
        raise ValueError(f"Camera {name} must be a positive finite number, got {value}")
    return value


def _check_coordinate(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"Camera {name} must be a finite number, got {value}")
    return value
