"""Transition player driving a camera between two views.

This module provides a small animation driver on top of the camera:
- Computing the intermediate view at any progress value
- Pushing frames into a Camera one tick at a time
- Uniform frame sampling with progress callbacks or a generator
- Freezing on the last good frame when a tick cannot be computed

The player does not choose timing curves. Progress values are either passed
in by the caller or sampled uniformly over [0, 1].

Example:
    >>> from src.framecam.core.transition import TransitionParams, TransitionPlayer
    >>> player = TransitionPlayer(camera, initial, final, TransitionParams(relative_zoom=0.5))
    >>> player.play(30)  # render 30 frames from initial to final
    30
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from dataclasses import dataclass

from src.framecam.camera.camera import Camera
from src.framecam.camera.state import CameraState
from src.framecam.scene.interfaces import PathSampler

logger = logging.getLogger(__name__)

# Type alias for frame callback
# Callback receives (frame_index, num_frames)
FrameCallback = Callable[[int, int], None]


@dataclass
class TransitionParams:
    """Parameters of one transition between two camera states.

    Attributes:
        relative_zoom: 0 for a linear size change, otherwise the signed
            amount of the zoom parabola (positive zooms out then in).
        path: Optional guide path for the camera center.
        reverse_path: Follow the guide path from its end to its start.
    """

    relative_zoom: float = 0.0
    path: PathSampler | None = None
    reverse_path: bool = False


class TransitionPlayer:
    """Plays the transition from one camera state to another.

    Attributes:
        camera: The camera receiving the frames.
        initial: State at progress 0.
        final: State at progress 1.
        params: Transition parameters.
    """

    def __init__(
        self,
        camera: Camera,
        initial: CameraState,
        final: CameraState,
        params: TransitionParams | None = None,
    ) -> None:
        self.camera = camera
        self.initial = initial
        self.final = final
        self.params = params if params is not None else TransitionParams()
        self._skipped = 0

    @property
    def skipped_frames(self) -> int:
        """Number of ticks that failed and kept the previous frame."""
        return self._skipped

    def state_at(self, progress: float) -> CameraState:
        """Compute a fresh intermediate state.

        Intermediate states keep the initial clip flag; the final flag
        applies at progress 1.

        Raises:
            ValueError: If the interpolation is undefined for this progress.
        """
        state = self.initial.clone().interpolate(
            self.initial,
            self.final,
            progress,
            relative_zoom=self.params.relative_zoom,
            path=self.params.path,
            reverse_path=self.params.reverse_path,
        )
        if progress >= 1.0:
            state.clipped = self.final.clipped
        return state

    def step(self, progress: float) -> bool:
        """Show the view at ``progress``.

        Returns:
            True if the camera was updated, False if the tick failed and the
            camera still shows the previous frame.
        """
        try:
            state = self.state_at(progress)
            self.camera.set_from_state(state)
        except ValueError as e:
            self._skipped += 1
            logger.warning("Skipping transition frame at progress %.4f: %s", progress, e)
            return False
        return True

    def play(self, num_frames: int, callback: FrameCallback | None = None) -> int:
        """Render ``num_frames`` uniformly spaced frames from initial to final.

        Args:
            num_frames: Number of frames, including both endpoints when
                greater than 1. A single frame shows the final state.
            callback: Optional function called after each frame with
                (frame_index, num_frames).

        Returns:
            The number of frames that were rendered successfully.
        """
        rendered = 0
        for index, _total, ok in self.play_progressive(num_frames):
            if ok:
                rendered += 1
            if callback is not None:
                callback(index, num_frames)
        return rendered

    def play_progressive(
        self, num_frames: int
    ) -> Generator[tuple[int, int, bool], None, None]:
        """Render frames one by one, yielding after each.

        Yields:
            Tuple of (frame_index, num_frames, ok).
        """
        if num_frames <= 0:
            return

        for index in range(num_frames):
            progress = index / (num_frames - 1) if num_frames > 1 else 1.0
            yield (index, num_frames, self.step(progress))

    def __repr__(self) -> str:
        return (
            f"TransitionPlayer(initial={self.initial!r}, final={self.final!r}, "
            f"relative_zoom={self.params.relative_zoom})"
        )
