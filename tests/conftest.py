"""Pytest configuration for framecam tests.

This module provides shared fixtures: an in-memory coordinate space, a
factory for camera states with explicit values, and a camera bound to an
800x600 viewport that records every transform it emits.
"""

import pytest

from src.framecam.camera import Camera, CameraState, Viewport
from src.framecam.geometry import BoundingBox
from src.framecam.preview.export import RecordingSink
from src.framecam.scene import StaticScene


@pytest.fixture
def space():
    """A coordinate space whose drawing covers (0, 0)-(800, 600)."""
    return StaticScene(BoundingBox(0.0, 0.0, 800.0, 600.0))


@pytest.fixture
def make_state(space):
    """Factory building CameraState instances on the shared space."""

    def _make(cx=400.0, cy=300.0, width=800.0, height=600.0, angle=0.0, clipped=False):
        return CameraState.from_values(
            space, cx=cx, cy=cy, width=width, height=height, angle=angle, clipped=clipped
        )

    return _make


@pytest.fixture
def viewport():
    return Viewport(800.0, 600.0, id="main")


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def camera(viewport, sink, space):
    """Camera framing the whole drawing in an 800x600 viewport (scale 1)."""
    return Camera(viewport, sink, CameraState(space))
