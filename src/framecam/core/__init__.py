"""Core animation module.

Components:
    transition: TransitionPlayer driving a Camera from one CameraState to
        another, one tick at a time

A failed tick (for instance a zoom parabola that does not exist for the
given sizes) is logged and skipped; the camera keeps showing the last
good frame.
"""

from .transition import FrameCallback, TransitionParams, TransitionPlayer

__all__ = [
    "FrameCallback",
    "TransitionParams",
    "TransitionPlayer",
]
