"""In-memory scene used as a coordinate space for camera states.

A StaticScene is a flat collection of named rectangular elements, each with
its own local box and local-to-root transform. It implements the
CoordinateSpace capability, so camera states can be built from it directly,
and it is what the raster preview draws.

Example:
    >>> from src.framecam.geometry import Affine2D, BoundingBox
    >>> from src.framecam.scene.static import StaticScene
    >>> scene = StaticScene()
    >>> title = scene.add_element("title", BoundingBox(0, 0, 400, 300))
    >>> detail = scene.add_element(
    ...     "detail",
    ...     BoundingBox(0, 0, 100, 50),
    ...     transform=Affine2D.translation(500, 200) @ Affine2D.rotation(30),
    ... )
    >>> box = scene.root_bounding_box()
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from src.framecam.geometry.affine import Affine2D, BoundingBox

# Fill color used when an element does not specify one
DEFAULT_FILL = (128, 128, 128)


@dataclass
class SceneElement:
    """A rectangular element of a StaticScene.

    Attributes:
        element_id: Unique identifier of the element.
        bbox: Box in the element's local coordinates.
        transform: Local-to-root transform.
        fill: RGB fill color used by raster previews.
    """

    element_id: str
    bbox: BoundingBox
    transform: Affine2D = field(default_factory=Affine2D.identity)
    fill: tuple[int, int, int] = DEFAULT_FILL


class StaticScene:
    """Flat collection of transformed rectangles acting as a coordinate space.

    Attributes:
        elements: Elements in insertion (paint) order.
    """

    def __init__(self, root_bbox: BoundingBox | None = None) -> None:
        """Initialize an empty scene.

        Args:
            root_bbox: Fixed bounding box of the drawing. When omitted, the
                box is computed from the elements.
        """
        self.elements: list[SceneElement] = []
        self._by_id: dict[str, SceneElement] = {}
        self._root_bbox = root_bbox

    def add_element(
        self,
        element_id: str,
        bbox: BoundingBox,
        transform: Affine2D | None = None,
        fill: tuple[int, int, int] = DEFAULT_FILL,
    ) -> SceneElement:
        """Add a rectangular element to the scene.

        Raises:
            ValueError: If an element with the same id already exists.
        """
        if element_id in self._by_id:
            raise ValueError(f"Duplicate element id: {element_id!r}")
        element = SceneElement(
            element_id=element_id,
            bbox=bbox,
            transform=transform if transform is not None else Affine2D.identity(),
            fill=fill,
        )
        self.elements.append(element)
        self._by_id[element_id] = element
        return element

    def get(self, element_id: str) -> SceneElement:
        """Look up an element by id.

        Raises:
            KeyError: If no element has this id.
        """
        try:
            return self._by_id[element_id]
        except KeyError:
            raise KeyError(f"Unknown element id: {element_id!r}") from None

    def _resolve(self, element: SceneElement | str) -> SceneElement:
        if isinstance(element, str):
            return self.get(element)
        return element

    # =========================================================================
    # CoordinateSpace capabilities
    # =========================================================================

    def bounding_box(self, element: SceneElement | str) -> BoundingBox:
        return self._resolve(element).bbox

    def current_transform(self, element: SceneElement | str) -> Affine2D:
        return self._resolve(element).transform

    def root_bounding_box(self) -> BoundingBox:
        """Bounding box of the drawing in root coordinates.

        Raises:
            ValueError: If the scene is empty and has no fixed root box.
        """
        if self._root_bbox is not None:
            return self._root_bbox
        if not self.elements:
            raise ValueError("Cannot compute the bounding box of an empty scene")

        corners = np.concatenate(
            [
                el.transform.apply_many([tuple(p) for p in el.bbox.corners()])
                for el in self.elements
            ]
        )
        x0, y0 = corners.min(axis=0)
        x1, y1 = corners.max(axis=0)
        return BoundingBox(float(x0), float(y0), float(x1 - x0), float(y1 - y0))

    def __len__(self) -> int:
        return len(self.elements)
