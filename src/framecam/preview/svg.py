"""SVG renderer backend for cameras.

A camera on an SVG document is displayed with three nested pieces:

    <clipPath id="framecam-clip-path-VIEWPORT-LAYER">
        <rect/>                       <- clip rectangle
    </clipPath>
    <g clip-path="url(#framecam-clip-path-VIEWPORT-LAYER)">
        <g transform="..."> layer node </g>   <- one group per layer node
    </g>

SvgAttributeSink writes the camera output onto those elements. It works with
anything exposing ``set(name, value)``, which includes
``xml.etree.ElementTree.Element``; ``build_layer_groups`` builds the structure
above with ElementTree.

Example:
    >>> import xml.etree.ElementTree as ET
    >>> root = ET.Element(f"{{{SVG_NS}}}svg")
    >>> layer = ET.SubElement(root, f"{{{SVG_NS}}}g", id="layer1")
    >>> sink = build_layer_groups(root, "main", "layer1", [layer])
    >>> camera = Camera(Viewport(800, 600, id="main"), sink, state).update()
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterable, Sequence
from typing import Protocol

from src.framecam.camera.camera import ScreenTransform

SVG_NS = "http://www.w3.org/2000/svg"


class AttributeTarget(Protocol):
    def set(self, key: str, value: str) -> None: ...


def format_number(value: float) -> str:
    """Shortest exact text for a number, without a trailing ``.0``."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_transform(transform: ScreenTransform) -> str:
    """Serialize the content transform as an SVG transform list."""
    return (
        f"scale({format_number(transform.scale)})"
        f"translate({format_number(transform.translate_x)},"
        f"{format_number(transform.translate_y)})"
        f"rotate({format_number(transform.rotation)},"
        f"{format_number(transform.cx)},{format_number(transform.cy)})"
    )


class SvgAttributeSink:
    """Transform sink writing SVG attributes onto a clip rect and layer groups.

    Attributes:
        clip_rect: The ``<rect>`` inside the camera's clip path.
        groups: One transform group per layer node.
    """

    def __init__(self, clip_rect: AttributeTarget, groups: Sequence[AttributeTarget]) -> None:
        self.clip_rect = clip_rect
        self.groups = list(groups)

    def apply(self, transform: ScreenTransform) -> None:
        clip = transform.clip
        self.clip_rect.set("x", format_number(clip.x))
        self.clip_rect.set("y", format_number(clip.y))
        self.clip_rect.set("width", format_number(clip.width))
        self.clip_rect.set("height", format_number(clip.height))

        value = format_transform(transform)
        for group in self.groups:
            group.set("transform", value)


def build_layer_groups(
    root: ET.Element,
    viewport_id: str,
    layer_id: str,
    nodes: Iterable[ET.Element],
) -> SvgAttributeSink:
    """Wrap layer nodes in clip and transform groups under ``root``.

    Each node is moved from its current parent (if it is a direct child of
    ``root``) into its own transform group.

    Args:
        root: The ``<svg>`` root element.
        viewport_id: Identifier of the viewport showing the layer.
        layer_id: Identifier of the layer.
        nodes: Top-level nodes making up the layer.

    Returns:
        A sink driving the new clip rectangle and transform groups.
    """
    clip_id = f"framecam-clip-path-{viewport_id}-{layer_id}"

    clip_path = ET.SubElement(root, f"{{{SVG_NS}}}clipPath", id=clip_id)
    clip_rect = ET.SubElement(clip_path, f"{{{SVG_NS}}}rect")

    clipped_group = ET.SubElement(root, f"{{{SVG_NS}}}g")
    clipped_group.set("clip-path", f"url(#{clip_id})")

    groups = []
    for node in nodes:
        if node in list(root):
            root.remove(node)
        group = ET.SubElement(clipped_group, f"{{{SVG_NS}}}g")
        group.append(node)
        groups.append(group)

    return SvgAttributeSink(clip_rect, groups)
