#!/usr/bin/env python3
"""Render a camera transition between two elements of a scene.

This script builds a small scene of colored rectangles, frames two of them
with camera states, and plays the transition between them. Every frame is
rasterized and written as a PNG; the last frame is also written as an SVG
document driven by the SVG attribute sink.

Usage:
    python -m examples.animate_transition [options]

Options:
    --width WIDTH               Viewport width in pixels (default: 320)
    --height HEIGHT             Viewport height in pixels (default: 240)
    --frames FRAMES             Number of frames (default: 24)
    --relative-zoom ZOOM        Zoom amount mid-transition (default: 0.5)
    --output-dir DIR            Output directory (default: transition_frames)
    --show                      Display a grid of frames with Matplotlib
    --verbose                   Log every camera update

Example:
    python -m examples.animate_transition --frames 12 --relative-zoom 1.0 --show
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
import xml.etree.ElementTree as ET
from pathlib import Path

# Ensure the project root is in the Python path for direct execution
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from src.framecam.camera import Camera, CameraState, Viewport  # noqa: E402
from src.framecam.core import TransitionParams, TransitionPlayer  # noqa: E402
from src.framecam.geometry import Affine2D, BoundingBox  # noqa: E402
from src.framecam.preview import (  # noqa: E402
    SVG_NS,
    RecordingSink,
    build_layer_groups,
    rasterize,
    save_png_from_array,
    show_frames,
)
from src.framecam.scene import StaticScene  # noqa: E402

logger = logging.getLogger("examples.animate_transition")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a camera transition between two scene elements.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=320,
        help="Viewport width in pixels (default: 320)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=240,
        help="Viewport height in pixels (default: 240)",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=24,
        help="Number of frames (default: 24)",
    )
    parser.add_argument(
        "--relative-zoom",
        type=float,
        default=0.5,
        help="Zoom amount mid-transition, 0 for linear (default: 0.5)",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="transition_frames",
        help="Output directory (default: transition_frames)",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Display a grid of frames with Matplotlib",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every camera update",
    )
    return parser.parse_args()


def create_demo_scene() -> StaticScene:
    """Create a scene with a background, two frames and some decoration."""
    scene = StaticScene()
    scene.add_element("background", BoundingBox(0.0, 0.0, 1200.0, 800.0), fill=(235, 235, 220))
    scene.add_element("title", BoundingBox(100.0, 100.0, 400.0, 300.0), fill=(200, 60, 60))
    scene.add_element(
        "detail",
        BoundingBox(-60.0, -40.0, 120.0, 80.0),
        # Small, tilted frame in the lower right
        transform=Affine2D.translation(950.0, 600.0) @ Affine2D.rotation(30.0),
        fill=(60, 90, 200),
    )
    scene.add_element("marker", BoundingBox(600.0, 350.0, 80.0, 80.0), fill=(60, 160, 60))
    return scene


def write_svg(scene: StaticScene, camera: Camera, filepath: Path) -> None:
    """Write the scene as an SVG document displayed through the camera."""
    root = ET.Element(f"{{{SVG_NS}}}svg")
    root.set("width", str(camera.viewport.width))
    root.set("height", str(camera.viewport.height))
    layer = ET.SubElement(root, f"{{{SVG_NS}}}g", id="layer1")
    for element in scene.elements:
        box = element.bbox
        rect = ET.SubElement(layer, f"{{{SVG_NS}}}rect", id=element.element_id)
        rect.set("x", str(box.x))
        rect.set("y", str(box.y))
        rect.set("width", str(box.width))
        rect.set("height", str(box.height))
        rect.set("transform", element.transform.to_svg())
        rect.set("fill", "rgb({},{},{})".format(*element.fill))

    sink = build_layer_groups(root, camera.viewport.id, "layer1", [layer])
    Camera(camera.viewport, sink, camera.state).update()

    ET.register_namespace("", SVG_NS)
    ET.ElementTree(root).write(filepath, encoding="utf-8", xml_declaration=True)


def animate_transition(
    width: int = 320,
    height: int = 240,
    num_frames: int = 24,
    relative_zoom: float = 0.5,
    output_dir: str = "transition_frames",
    show: bool = False,
) -> Path:
    """Play the transition and save every frame.

    Args:
        width: Viewport width in pixels.
        height: Viewport height in pixels.
        num_frames: Number of frames to render.
        relative_zoom: Zoom parabola amount, 0 for a linear size change.
        output_dir: Directory receiving the PNG frames and the SVG file.
        show: If True, display the frames with Matplotlib.

    Returns:
        Path to the output directory.
    """
    scene = create_demo_scene()
    initial = CameraState(scene).set_at_element("title")
    final = CameraState(scene).set_at_element("detail")
    final.clipped = True

    sink = RecordingSink()
    camera = Camera(Viewport(float(width), float(height), id="demo"), sink, initial)
    player = TransitionPlayer(camera, initial, final, TransitionParams(relative_zoom=relative_zoom))

    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    start_time = time.time()

    def progress_callback(current: int, total: int) -> None:
        print(f"\r  Frame {current + 1}/{total}", end="", flush=True)

    print(f"Playing {num_frames} frames ({width}x{height})...")
    rendered = player.play(num_frames, callback=progress_callback)
    print()

    images = [rasterize(scene, transform, (width, height)) for transform in sink.frames]
    for index, image in enumerate(images):
        save_png_from_array(image, str(out / f"frame_{index:03d}.png"))

    write_svg(scene, camera, out / "final.svg")

    print(f"Rendered {rendered}/{num_frames} frames to: {out.absolute()}")
    if player.skipped_frames:
        print(f"Skipped {player.skipped_frames} frames (see warnings above)")
    print(f"Total time: {time.time() - start_time:.2f}s")

    if show and images:
        titles = [f"Frame {i}" for i in range(len(images))]
        show_frames(images, titles=titles)

    return out


def main() -> int:
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        animate_transition(
            width=args.width,
            height=args.height,
            num_frames=args.frames,
            relative_zoom=args.relative_zoom,
            output_dir=args.output_dir,
            show=args.show,
        )
        return 0
    except (ValueError, OSError) as e:
        logger.error("Transition failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
