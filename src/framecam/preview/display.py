"""Matplotlib display of rendered camera frames.

Example:
    >>> from src.framecam.preview.display import show_frames
    >>> show_frames(images, titles=[f"t = {t:.2f}" for t in progress_values])
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
import numpy.typing as npt


def grid_shape(count: int, columns: int) -> tuple[int, int]:
    """Rows and columns needed to lay out ``count`` frames."""
    if count <= 0:
        raise ValueError(f"Need at least one frame, got {count}")
    columns = max(1, min(columns, count))
    return math.ceil(count / columns), columns


def show_frames(
    images: Sequence[npt.NDArray[np.uint8]],
    *,
    titles: Sequence[str] | None = None,
    columns: int = 4,
    figsize: tuple[float, float] | None = None,
    block: bool = True,
) -> None:
    """Display frames side by side in a Matplotlib figure.

    Args:
        images: Frames of shape (H, W, 3).
        titles: Optional title per frame (default shows the frame index).
        columns: Maximum number of frames per row.
        figsize: Figure size in inches (default scales with the grid).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    rows, cols = grid_shape(len(images), columns)
    if figsize is None:
        figsize = (4.0 * cols, 3.0 * rows)

    fig, axes = plt.subplots(rows, cols, figsize=figsize, squeeze=False)

    for index, ax in enumerate(axes.flat):
        ax.axis("off")
        if index >= len(images):
            continue
        ax.imshow(images[index])
        ax.set_title(titles[index] if titles is not None else f"Frame {index}")

    plt.tight_layout()
    plt.show(block=block)
