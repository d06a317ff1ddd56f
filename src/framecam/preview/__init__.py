"""Preview module: renderer backends for cameras.

Components:
    svg: Transform sink writing clip and transform attributes onto SVG
        elements, and a builder for the clip/transform group structure
    export: Pillow/NumPy rasterization of a StaticScene through a camera,
        PNG export, and a sink that records every emitted transform
    display: Matplotlib grid display of rendered frames

Example:
    >>> from src.framecam.preview import RecordingSink, render_camera, save_png_from_array
    >>> camera = Camera(Viewport(320, 240), RecordingSink(), state).update()
    >>> save_png_from_array(render_camera(camera, scene), "view.png")
"""

from src.framecam.preview.display import grid_shape, show_frames
from src.framecam.preview.export import (
    RecordingSink,
    rasterize,
    render_camera,
    save_png,
    save_png_from_array,
)
from src.framecam.preview.svg import (
    SVG_NS,
    SvgAttributeSink,
    build_layer_groups,
    format_number,
    format_transform,
)

__all__ = [
    # SVG backend
    "SVG_NS",
    "SvgAttributeSink",
    "build_layer_groups",
    "format_number",
    "format_transform",
    # Raster export
    "RecordingSink",
    "rasterize",
    "render_camera",
    "save_png",
    "save_png_from_array",
    # Display
    "show_frames",
    "grid_shape",
]
