"""Camera module for view states and screen transforms.

This module provides the 2D camera used to frame and animate views of a
vector drawing:

Components:
    state: CameraState value type and the view interpolation algorithm
    camera: Viewport-bound Camera producing screen transforms

Camera responsibilities:
    - Describe a view as center, size, rotation and clip flag
    - Interpolate between two views (linear or parabolic zoom, guide paths,
      shortest-way rotation)
    - Fit the view inside a viewport and emit the resulting transform
    - Apply direct-manipulation gestures (drag, zoom about a pixel, rotate)

Angles are in degrees. Sizes are in scene units, viewport dimensions in
device pixels.
"""

from .camera import Camera, ScreenTransform, Viewport
from .state import CameraState, zoom_parabola

__all__ = [
    "CameraState",
    "zoom_parabola",
    "Camera",
    "ScreenTransform",
    "Viewport",
]
