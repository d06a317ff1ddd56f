"""Scene module: the camera's view of the drawing.

Components:
    interfaces: Capability protocols consumed by the camera (bounding boxes,
        element transforms, path sampling, transform sinks)
    static: In-memory StaticScene implementing the CoordinateSpace protocol

The camera only ever talks to a scene through the protocols in
``interfaces``; StaticScene is one implementation, a live SVG document
would be another.
"""

from .interfaces import (
    BoundingBoxQuery,
    CoordinateSpace,
    PathSampler,
    TransformQuery,
    TransformSink,
)
from .static import SceneElement, StaticScene

__all__ = [
    "BoundingBoxQuery",
    "TransformQuery",
    "CoordinateSpace",
    "PathSampler",
    "TransformSink",
    "SceneElement",
    "StaticScene",
]
