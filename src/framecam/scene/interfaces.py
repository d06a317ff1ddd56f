"""Capability interfaces the camera consumes from the rendering side.

The camera never inspects scene elements itself. It asks for exactly four
things, each expressed as a small Protocol so that tests can substitute a
mock for any one of them:

- BoundingBoxQuery: the local-space box of an element
- TransformQuery: the accumulated local-to-root transform of an element
- PathSampler: length and arc-length sampling of a guide path
- TransformSink: somewhere to send the computed screen transform

A CoordinateSpace combines the two element queries with the bounding box of
the whole drawing, which is the default camera frame.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from src.framecam.geometry.affine import Affine2D, BoundingBox, Point

if TYPE_CHECKING:
    from src.framecam.camera.camera import ScreenTransform


@runtime_checkable
class BoundingBoxQuery(Protocol):
    def bounding_box(self, element: Any) -> BoundingBox:
        """Return the box of ``element`` in its own local coordinates.

        Implementations decide how to compute it (rectangle attributes,
        generic geometry bounds, ...).
        """
        ...


@runtime_checkable
class TransformQuery(Protocol):
    def current_transform(self, element: Any) -> Affine2D:
        """Return the transform mapping ``element`` local coordinates to root coordinates."""
        ...


@runtime_checkable
class CoordinateSpace(BoundingBoxQuery, TransformQuery, Protocol):
    def root_bounding_box(self) -> BoundingBox:
        """Return the bounding box of the whole drawing in root coordinates."""
        ...


@runtime_checkable
class PathSampler(Protocol):
    def length(self) -> float: ...

    def point_at_length(self, distance: float) -> Point: ...


@runtime_checkable
class TransformSink(Protocol):
    def apply(self, transform: ScreenTransform) -> None:
        """Apply the clip rectangle and content transform to the renderer."""
        ...
