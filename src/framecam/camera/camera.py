"""Viewport-bound camera that turns a CameraState into a screen transform.

A Camera couples three things:
- a CameraState (what part of the drawing is in view)
- a Viewport (how many device pixels are available), shared and read-only
- a TransformSink (where the resulting clip rectangle and transform go),
  owned by the camera

The frame is fitted inside the viewport with a uniform scale and centered.
Content is transformed by

    scale(s) translate(tx, ty) rotate(-angle, cx, cy)

so the rotation is applied in scene units about the camera center, and the
camera center always lands on the viewport center.

Every mutator ends with ``update()``, so the sink never shows a transform
that is stale with respect to the camera fields.

Example:
    >>> camera = Camera(Viewport(800, 600), sink, state)
    >>> camera.zoom(2.0, 400, 300)   # zoom in about the viewport center
    >>> camera.rotate(15.0)
    >>> camera.drag(-40.0, 0.0)      # move the content 40 px to the left
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from src.framecam.camera.state import CameraState
from src.framecam.geometry.affine import Affine2D, BoundingBox, Point
from src.framecam.scene.interfaces import TransformSink

logger = logging.getLogger(__name__)


@dataclass
class Viewport:
    """Drawing area in device pixels.

    Resized by its owner; cameras only read it.

    Attributes:
        width: Width in pixels.
        height: Height in pixels.
        id: Identifier used by renderers to name per-viewport resources.
    """

    width: float
    height: float
    id: str = "viewport"

    def check(self) -> None:
        """Raise if the viewport cannot display anything.

        Raises:
            ValueError: If either dimension is not a positive finite number.
        """
        for name, value in (("width", self.width), ("height", self.height)):
            if not (math.isfinite(value) and value > 0):
                raise ValueError(
                    f"Viewport {self.id!r} has no area ({name} = {value}); "
                    f"cannot compute a camera scale"
                )


@dataclass(frozen=True)
class ScreenTransform:
    """Everything a renderer needs to display one camera.

    Attributes:
        scale: Uniform fit-inside scale factor.
        translate_x: Horizontal translation, in scene units.
        translate_y: Vertical translation, in scene units.
        rotation: Rotation in degrees (the negated camera angle).
        cx: Rotation pivot x, in scene units.
        cy: Rotation pivot y, in scene units.
        clip: Clip rectangle in viewport pixels.
    """

    scale: float
    translate_x: float
    translate_y: float
    rotation: float
    cx: float
    cy: float
    clip: BoundingBox

    @property
    def matrix(self) -> Affine2D:
        """Scene-to-screen matrix: scale, then translate, then rotate about the center."""
        return (
            Affine2D.scaling(self.scale)
            @ Affine2D.translation(self.translate_x, self.translate_y)
            @ Affine2D.rotation(self.rotation, self.cx, self.cy)
        )


class Camera:
    """A CameraState displayed in a Viewport through a TransformSink.

    Attributes:
        viewport: The shared viewport.
        sink: The renderer target receiving each new transform.
        state: The wrapped camera state.
    """

    def __init__(
        self,
        viewport: Viewport,
        sink: TransformSink,
        state: CameraState,
    ) -> None:
        """Bind a copy of ``state`` to a viewport and a sink.

        The initial transform is not emitted until the first mutator or an
        explicit ``update()`` call.
        """
        self.viewport = viewport
        self.sink = sink
        self.state = state.clone()

    # =========================================================================
    # Field access
    # =========================================================================

    @property
    def cx(self) -> float:
        return self.state.cx

    @property
    def cy(self) -> float:
        return self.state.cy

    @property
    def width(self) -> float:
        return self.state.width

    @property
    def height(self) -> float:
        return self.state.height

    @property
    def angle(self) -> float:
        return self.state.angle

    @property
    def clipped(self) -> bool:
        return self.state.clipped

    @property
    def scale(self) -> float:
        """Fit-inside scale from scene units to viewport pixels.

        Raises:
            ValueError: If the viewport has no area.
        """
        return self._scale_for(self.state)

    def _scale_for(self, state: CameraState) -> float:
        self.viewport.check()
        return min(
            self.viewport.width / state.width,
            self.viewport.height / state.height,
        )

    # =========================================================================
    # Mutators
    # =========================================================================
    #
    # Each mutator works on a copy of the state and commits it only once the
    # new screen transform has been computed, so a failed call leaves both the
    # camera and its sink on the last displayed frame.

    def set_from_state(self, state: CameraState) -> Camera:
        """Copy the fields of ``state`` and refresh the renderer."""
        return self._show(state)

    def rotate(self, angle: float) -> Camera:
        """Rotate the frame by ``angle`` degrees."""
        return self._show(self.state.clone().set_angle(self.state.angle + angle))

    def zoom(self, factor: float, x: float, y: float) -> Camera:
        """Zoom by ``factor`` keeping the viewport pixel (x, y) in place.

        A factor greater than 1 zooms in.

        Raises:
            ValueError: If factor is not a positive finite number, the new
                size is out of range, or the viewport has no area.
        """
        if not (math.isfinite(factor) and factor > 0):
            raise ValueError(f"Zoom factor must be a positive finite number, got {factor}")

        state = self.state.clone()
        state.width /= factor
        state.height /= factor
        return self._drag(
            state,
            (1 - factor) * (x - self.viewport.width / 2),
            (1 - factor) * (y - self.viewport.height / 2),
        )

    def drag(self, delta_x: float, delta_y: float) -> Camera:
        """Move the content by (delta_x, delta_y) viewport pixels.

        Dragging always turns clipping off.

        Raises:
            ValueError: If a delta is not finite or the viewport has no area.
        """
        return self._drag(self.state.clone(), delta_x, delta_y)

    def update(self) -> Camera:
        """Compute the screen transform and send it to the sink."""
        return self._show(self.state)

    def _drag(self, state: CameraState, delta_x: float, delta_y: float) -> Camera:
        if not (math.isfinite(delta_x) and math.isfinite(delta_y)):
            raise ValueError(f"Drag delta must be finite, got ({delta_x}, {delta_y})")

        scale = self._scale_for(state)
        angle_rad = math.radians(state.angle)
        si = math.sin(angle_rad)
        co = math.cos(angle_rad)
        state.clipped = False
        state.cx -= (delta_x * co - delta_y * si) / scale
        state.cy -= (delta_x * si + delta_y * co) / scale
        return self._show(state)

    def _show(self, state: CameraState) -> Camera:
        transform = self._transform_for(state)
        if state is not self.state:
            self.state.set_from_state(state)
        logger.debug("Camera update on viewport %r: %s", self.viewport.id, transform)
        self.sink.apply(transform)
        return self

    # =========================================================================
    # Derived geometry
    # =========================================================================

    def screen_transform(self) -> ScreenTransform:
        """Compute the clip rectangle and content transform for the current fields."""
        return self._transform_for(self.state)

    def _transform_for(self, state: CameraState) -> ScreenTransform:
        scale = self._scale_for(state)

        # Size and location of the frame on the screen
        width = state.width * scale
        height = state.height * scale
        x = (self.viewport.width - width) / 2
        y = (self.viewport.height - height) / 2

        if state.clipped:
            clip = BoundingBox(x, y, width, height)
        else:
            clip = BoundingBox(0.0, 0.0, self.viewport.width, self.viewport.height)

        return ScreenTransform(
            scale=scale,
            translate_x=-state.cx + state.width / 2 + x / scale,
            translate_y=-state.cy + state.height / 2 + y / scale,
            rotation=-state.angle,
            cx=state.cx,
            cy=state.cy,
            clip=clip,
        )

    def scene_to_screen(self, point: Point) -> Point:
        """Map a point from scene coordinates to viewport pixels."""
        return self.screen_transform().matrix.apply(point)

    def screen_to_scene(self, point: Point) -> Point:
        """Map a viewport pixel back to scene coordinates."""
        return self.screen_transform().matrix.inverse().apply(point)

    def __repr__(self) -> str:
        return f"Camera(viewport={self.viewport.id!r}, state={self.state!r})"
