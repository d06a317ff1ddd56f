"""2D camera for animated views of vector drawings.

This package computes the viewing transform used to move between views of a
vector canvas, with support for:
- View states defined by center, size, rotation and clipping
- Interpolation with parabolic zoom, guide paths and shortest-way rotation
- Fitting a view inside a viewport and emitting the screen transform
- Direct manipulation (drag, zoom about a pixel, rotate)

Subpackages:
    geometry: Points, boxes, affine transforms and polyline paths
    scene: Capability protocols and an in-memory coordinate space
    camera: CameraState and the viewport-bound Camera
    core: Transition player driving a camera between two states
    preview: SVG, raster and Matplotlib renderer backends
"""

__version__ = "0.1.0"
