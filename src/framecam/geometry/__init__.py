"""Geometry module for 2D points, rectangles, transforms, and paths.

Components:
    affine: Point, BoundingBox, and the Affine2D homogeneous transform
    path: Arc-length sampling along polyline paths

Coordinates follow the SVG convention: x grows to the right, y grows
downward, and angles are in degrees, positive clockwise on screen.
"""

from .affine import Affine2D, BoundingBox, Point
from .path import PolylinePath

__all__ = [
    "Point",
    "BoundingBox",
    "Affine2D",
    "PolylinePath",
]
