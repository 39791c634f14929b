from __future__ import annotations

from pathlib import Path

import imageio.v2 as imageio
import numpy as np
import pytest


def reference_scores(frames: np.ndarray, kernel_size: int) -> np.ndarray:
    """Filtered L1 motion scores of frames[1:], by brute force."""
    f = frames.astype(np.int64)
    if f.ndim == 3:
        f = f[..., None]
    raw = np.abs(f[1:] - f[:-1]).sum(axis=-1)
    r = kernel_size // 2
    T, H, W = raw.shape
    out = np.zeros((T, H, W), dtype=np.int64)
    for t in range(T):
        padded = np.pad(raw[t], r, mode="edge")
        for y in range(H):
            for x in range(W):
                out[t, y, x] = padded[y : y + kernel_size, x : x + kernel_size].sum()
    return out


@pytest.fixture
def png_sequence(tmp_path):
    def write(frames: np.ndarray, name: str = "seq") -> Path:
        folder = tmp_path / name
        folder.mkdir()
        for idx, frame in enumerate(frames):
            imageio.imwrite(str(folder / f"in{idx:06d}.png"), frame)
        return folder

    return write
