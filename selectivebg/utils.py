"""Utility helpers for frames and images."""
from __future__ import annotations

from pathlib import Path

import imageio.v2 as imageio
import numpy as np


def ensure_channels(frame: np.ndarray) -> np.ndarray:
    """Return the frame as an (H, W, C) integer array; grayscale gains a channel axis, alpha is dropped."""
    arr = np.asarray(frame)
    if not np.issubdtype(arr.dtype, np.integer):
        raise ValueError(f"Frames must have an integer dtype, got {arr.dtype}")
    if arr.ndim == 2:
        return arr[:, :, None]
    if arr.ndim == 3:
        if arr.shape[2] == 4:
            return arr[..., :3]
        return arr
    raise ValueError(f"Unsupported frame shape: {arr.shape}")


def write_image(path: str | Path, image: np.ndarray) -> None:
    """Write an (H, W, C) image; single-channel images are written as grayscale."""
    arr = np.asarray(image)
    if arr.ndim == 3 and arr.shape[2] == 1:
        arr = arr[:, :, 0]
    imageio.imwrite(str(path), arr)

