"""Tests for the preview module.

This module tests the renderer backends including:
- SVG number and transform serialization
- SVG clip/transform group construction and attribute updates
- Rasterization through a camera and PNG export
- Grid layout of displayed frames

Note: Tests avoid displaying actual windows; show_frames runs on the Agg
backend with plt.show patched out.
"""

import os
import tempfile
import xml.etree.ElementTree as ET

import numpy as np
import pytest
from PIL import Image as PILImage

from src.framecam.camera import Camera, CameraState, ScreenTransform, Viewport
from src.framecam.geometry import BoundingBox
from src.framecam.preview import RecordingSink
from src.framecam.scene import StaticScene

RED = (255, 0, 0)
BLUE = (0, 0, 255)
WHITE = (255, 255, 255)


@pytest.fixture
def small_scene():
    """An 80x60 drawing with one red box."""
    scene = StaticScene(BoundingBox(0.0, 0.0, 80.0, 60.0))
    scene.add_element("box", BoundingBox(10.0, 10.0, 20.0, 10.0), fill=RED)
    return scene


@pytest.fixture
def small_camera(small_scene):
    """Camera showing the whole small scene at scale 1."""
    return Camera(Viewport(80.0, 60.0, id="small"), RecordingSink(), CameraState(small_scene))


class TestFormatting:
    """Test SVG attribute serialization."""

    @pytest.mark.parametrize(
        "value, expected",
        [(2.0, "2"), (-100.0, "-100"), (12.5, "12.5"), (0.1, "0.1"), (-0.0, "0")],
    )
    def test_format_number(self, value, expected):
        """Test that integral values print without a decimal part."""
        from src.framecam.preview.svg import format_number

        assert format_number(value) == expected

    def test_format_transform(self):
        """Test the scale/translate/rotate transform list."""
        from src.framecam.preview.svg import format_transform

        transform = ScreenTransform(
            scale=2.0,
            translate_x=-100.0,
            translate_y=12.5,
            rotation=-30.0,
            cx=100.0,
            cy=50.0,
            clip=BoundingBox(0.0, 0.0, 800.0, 600.0),
        )
        assert format_transform(transform) == "scale(2)translate(-100,12.5)rotate(-30,100,50)"


class TestSvgBackend:
    """Test the SVG group structure and the attribute sink."""

    def test_build_layer_groups_structure(self):
        """Test that the layer is wrapped in a clipped transform group."""
        from src.framecam.preview.svg import SVG_NS, build_layer_groups

        root = ET.Element(f"{{{SVG_NS}}}svg")
        layer = ET.SubElement(root, f"{{{SVG_NS}}}g", id="layer1")

        sink = build_layer_groups(root, "main", "layer1", [layer])

        clip_path, clipped_group = list(root)
        assert clip_path.tag == f"{{{SVG_NS}}}clipPath"
        assert clip_path.get("id") == "framecam-clip-path-main-layer1"
        assert clipped_group.get("clip-path") == "url(#framecam-clip-path-main-layer1)"

        (transform_group,) = list(clipped_group)
        assert list(transform_group) == [layer]
        assert sink.groups == [transform_group]
        assert sink.clip_rect is clip_path[0]

    def test_camera_update_writes_attributes(self, viewport, camera):
        """Test that a camera update sets the clip rect and group transforms."""
        from src.framecam.preview.svg import SVG_NS, build_layer_groups

        root = ET.Element(f"{{{SVG_NS}}}svg")
        layers = [ET.SubElement(root, f"{{{SVG_NS}}}g", id=f"l{i}") for i in range(2)]
        sink = build_layer_groups(root, viewport.id, "layer", layers)

        Camera(viewport, sink, camera.state).update()

        rect = sink.clip_rect
        assert (rect.get("x"), rect.get("y"), rect.get("width"), rect.get("height")) == (
            "0",
            "0",
            "800",
            "600",
        )
        for group in sink.groups:
            assert group.get("transform") == "scale(1)translate(0,0)rotate(0,400,300)"

    def test_sink_accepts_any_attribute_target(self, camera):
        """Test that the sink only needs a set(name, value) method."""
        from src.framecam.preview.svg import SvgAttributeSink

        class Target:
            def __init__(self):
                self.attrs = {}

            def set(self, key, value):
                self.attrs[key] = value

        rect, group = Target(), Target()
        SvgAttributeSink(rect, [group]).apply(camera.screen_transform())

        assert rect.attrs["width"] == "800"
        assert group.attrs["transform"].startswith("scale(1)")


class TestRasterize:
    """Test rasterization of a StaticScene through a camera."""

    def test_shape_and_dtype(self, small_camera, small_scene):
        """Test that the image matches the viewport size."""
        from src.framecam.preview.export import render_camera

        image = render_camera(small_camera, small_scene)
        assert image.shape == (60, 80, 3)
        assert image.dtype == np.uint8

    def test_element_fill(self, small_camera, small_scene):
        """Test that the element is painted where the camera shows it."""
        from src.framecam.preview.export import render_camera

        image = render_camera(small_camera, small_scene)
        assert tuple(image[15, 20]) == RED
        assert tuple(image[5, 5]) == WHITE
        assert tuple(image[40, 60]) == WHITE

    def test_zoom_moves_element(self, small_camera, small_scene):
        """Test that zooming in about the box center enlarges the box."""
        from src.framecam.preview.export import render_camera

        small_camera.zoom(2.0, 20.0, 15.0)
        image = render_camera(small_camera, small_scene)
        # The box now spans x in [0, 40] and y in [5, 25]
        assert tuple(image[15, 35]) == RED
        assert tuple(image[40, 60]) == WHITE

    def test_clip_masks_outside_frame(self):
        """Test that pixels outside a clipped frame keep the background."""
        from src.framecam.preview.export import render_camera

        scene = StaticScene(BoundingBox(0.0, 0.0, 80.0, 60.0))
        scene.add_element("all", BoundingBox(0.0, 0.0, 80.0, 60.0), fill=BLUE)
        state = CameraState.from_values(scene, cx=40.0, cy=30.0, width=40.0, height=60.0, clipped=True)
        camera = Camera(Viewport(80.0, 60.0), RecordingSink(), state)

        image = render_camera(camera, scene)
        # Frame is 40x60 on screen, centered: clip x in [20, 60)
        assert tuple(image[30, 10]) == WHITE
        assert tuple(image[30, 40]) == BLUE
        assert tuple(image[30, 70]) == WHITE

    def test_custom_background(self, small_camera, small_scene):
        """Test that the background color is configurable."""
        from src.framecam.preview.export import render_camera

        image = render_camera(small_camera, small_scene, background=(0, 0, 0))
        assert tuple(image[5, 5]) == (0, 0, 0)

    def test_invalid_size(self, small_camera, small_scene):
        """Test that a zero-sized image is rejected."""
        from src.framecam.preview.export import rasterize

        with pytest.raises(ValueError, match="positive"):
            rasterize(small_scene, small_camera.screen_transform(), (0, 10))


class TestPngExport:
    """Test PNG file output."""

    def test_save_png(self, small_camera, small_scene):
        """Test that save_png writes a readable PNG of the camera view."""
        from src.framecam.preview.export import save_png

        with tempfile.TemporaryDirectory() as tmpdir:
            filepath = os.path.join(tmpdir, "view.png")
            save_png(small_camera, small_scene, filepath)

            assert os.path.exists(filepath)
            with PILImage.open(filepath) as img:
                assert img.size == (80, 60)
                assert img.convert("RGB").getpixel((20, 15)) == RED

    def test_save_png_from_array(self, tmp_path):
        """Test saving a raw array."""
        from src.framecam.preview.export import save_png_from_array

        image = np.zeros((4, 6, 3), dtype=np.uint8)
        image[..., 2] = 255
        filepath = tmp_path / "blue.png"
        save_png_from_array(image, str(filepath))

        with PILImage.open(filepath) as img:
            assert img.size == (6, 4)
            assert img.convert("RGB").getpixel((0, 0)) == BLUE

    @pytest.mark.parametrize(
        "image",
        [
            np.zeros((4, 6, 3), dtype=np.float32),
            np.zeros((4, 6), dtype=np.uint8),
            np.zeros((4, 6, 4), dtype=np.uint8),
        ],
    )
    def test_save_png_rejects_non_rgb(self, tmp_path, image):
        """Test that only (H, W, 3) uint8 arrays are accepted."""
        from src.framecam.preview.export import save_png_from_array

        with pytest.raises(ValueError, match="uint8"):
            save_png_from_array(image, str(tmp_path / "bad.png"))


class TestRecordingSink:
    """Test the recording sink."""

    def test_records_in_order(self, camera, sink):
        """Test that every emitted transform is kept."""
        assert sink.last is None
        camera.rotate(10.0)
        camera.rotate(10.0)

        assert len(sink.frames) == 2
        assert sink.last.rotation == pytest.approx(-20.0)

        sink.clear()
        assert sink.frames == []


class TestDisplay:
    """Test frame grid display."""

    @pytest.mark.parametrize(
        "count, columns, expected",
        [(1, 4, (1, 1)), (3, 4, (1, 3)), (4, 4, (1, 4)), (5, 4, (2, 4)), (9, 2, (5, 2)), (3, 0, (3, 1))],
    )
    def test_grid_shape(self, count, columns, expected):
        """Test rows and columns for a number of frames."""
        from src.framecam.preview.display import grid_shape

        assert grid_shape(count, columns) == expected

    def test_grid_shape_requires_frames(self):
        """Test that an empty frame list is rejected."""
        from src.framecam.preview.display import grid_shape

        with pytest.raises(ValueError, match="at least one frame"):
            grid_shape(0, 4)

    def test_show_frames_headless(self, monkeypatch):
        """Test that show_frames lays out every frame without opening a window."""
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        from src.framecam.preview.display import show_frames

        monkeypatch.setattr(plt, "show", lambda block=True: None)
        images = [np.zeros((6, 8, 3), dtype=np.uint8) for _ in range(3)]
        show_frames(images, titles=["a", "b", "c"], columns=2)

        fig = plt.gcf()
        titles = [ax.get_title() for ax in fig.axes]
        assert titles[:3] == ["a", "b", "c"]
        plt.close(fig)
