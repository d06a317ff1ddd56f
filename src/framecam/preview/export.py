"""Raster preview and PNG export of camera views.

This module draws a StaticScene the way a camera sees it, using Pillow for
polygon filling and NumPy for clipping, and saves the result as PNG. It is a
debugging aid for checking transitions frame by frame without an SVG viewer.

Pixel (i, j) covers the square [i, i + 1) x [j, j + 1) of viewport space.

Example:
    >>> from src.framecam.preview.export import RecordingSink, rasterize, save_png_from_array
    >>> sink = RecordingSink()
    >>> camera = Camera(Viewport(320, 240), sink, state)
    >>> TransitionPlayer(camera, a, b).play(10)
    >>> for i, transform in enumerate(sink.frames):
    ...     save_png_from_array(rasterize(scene, transform, (320, 240)), f"frame_{i:03d}.png")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage
from PIL import ImageDraw

from src.framecam.camera.camera import ScreenTransform

if TYPE_CHECKING:
    from src.framecam.camera.camera import Camera
    from src.framecam.scene.static import StaticScene

# Color of pixels not covered by any element
DEFAULT_BACKGROUND = (255, 255, 255)


class RecordingSink:
    """Transform sink that keeps every transform it receives.

    Attributes:
        frames: Received transforms, oldest first.
    """

    def __init__(self) -> None:
        self.frames: list[ScreenTransform] = []

    def apply(self, transform: ScreenTransform) -> None:
        self.frames.append(transform)

    @property
    def last(self) -> ScreenTransform | None:
        return self.frames[-1] if self.frames else None

    def clear(self) -> None:
        self.frames.clear()


def rasterize(
    scene: StaticScene,
    transform: ScreenTransform,
    size: tuple[int, int],
    *,
    background: tuple[int, int, int] = DEFAULT_BACKGROUND,
) -> npt.NDArray[np.uint8]:
    """Draw a scene through a screen transform.

    Elements are painted in scene order. Pixels whose centers fall outside
    the clip rectangle are left at the background color.

    Args:
        scene: The scene to draw.
        transform: Screen transform produced by a camera.
        size: Output (width, height) in pixels.
        background: RGB background color.

    Returns:
        Image array of shape (height, width, 3) with dtype uint8.

    Raises:
        ValueError: If size is not positive.
    """
    width, height = size
    if width <= 0 or height <= 0:
        raise ValueError(f"Image size must be positive, got {width}x{height}")

    matrix = transform.matrix
    image = PILImage.new("RGB", (width, height), background)
    draw = ImageDraw.Draw(image)

    for element in scene.elements:
        corners = [tuple(p) for p in element.bbox.corners()]
        screen = (matrix @ element.transform).apply_many(corners)
        draw.polygon([(float(x), float(y)) for x, y in screen], fill=tuple(element.fill))

    pixels = np.asarray(image, dtype=np.uint8).copy()

    # Clip on pixel centers
    clip = transform.clip
    xs = np.arange(width) + 0.5
    ys = np.arange(height) + 0.5
    inside_x = (xs >= clip.x) & (xs < clip.x + clip.width)
    inside_y = (ys >= clip.y) & (ys < clip.y + clip.height)
    mask = inside_y[:, None] & inside_x[None, :]
    pixels[~mask] = background

    return pixels


def render_camera(
    camera: Camera,
    scene: StaticScene,
    *,
    background: tuple[int, int, int] = DEFAULT_BACKGROUND,
) -> npt.NDArray[np.uint8]:
    """Draw a scene as the camera currently sees it, at viewport resolution."""
    size = (int(round(camera.viewport.width)), int(round(camera.viewport.height)))
    return rasterize(scene, camera.screen_transform(), size, background=background)


def save_png(
    camera: Camera,
    scene: StaticScene,
    filepath: str,
    *,
    background: tuple[int, int, int] = DEFAULT_BACKGROUND,
) -> None:
    """Render the camera view of a scene and save it as a PNG file."""
    save_png_from_array(render_camera(camera, scene, background=background), filepath)


def save_png_from_array(image: npt.NDArray[np.uint8], filepath: str) -> None:
    """Save an (H, W, 3) uint8 array as a PNG file.

    Raises:
        ValueError: If the array is not an RGB uint8 image.
    """
    if image.ndim != 3 or image.shape[2] != 3 or image.dtype != np.uint8:
        raise ValueError(
            f"Expected an (H, W, 3) uint8 image, got shape {image.shape} and dtype {image.dtype}"
        )
    pil_image = PILImage.fromarray(image)
    pil_image.save(filepath)
