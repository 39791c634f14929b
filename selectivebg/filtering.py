"""Spatial smoothing of the motion probability map with a counting kernel."""
from __future__ import annotations

import numpy as np

_INT32_MAX = int(np.iinfo(np.int32).max)


def kernel_size_for(height: int, width: int, n_param: int) -> int:
    """Odd kernel side: min(height, width) // N with its lowest bit set."""
    if height < 1 or width < 1:
        raise ValueError(f"Frame dimensions must be positive, got {height}x{width}")
    if n_param < 1:
        raise ValueError("The N parameter must be positive")
    return max(1, (min(height, width) // n_param) | 1)


class CounterFilter:
    """
    Centred K x K box sum of the raw probability map.

    Borders replicate the edge pixels. Sums are taken from an int64 integral
    image and stored in the narrowest signed dtype holding K*K*max_input.
    Work buffers are allocated on the first call and reused while the map
    shape stays the same.
    """

    def __init__(self, kernel_size: int, max_input: int = 3 * 255):
        if kernel_size < 1 or kernel_size % 2 == 0:
            raise ValueError(f"Kernel size must be a positive odd integer, got {kernel_size}")
        if max_input < 0:
            raise ValueError("max_input must be non-negative")
        self.kernel_size = int(kernel_size)
        self.radius = self.kernel_size // 2
        self.max_input = int(max_input)
        bound = self.kernel_size * self.kernel_size * self.max_input
        self.dtype = np.dtype(np.int32) if bound <= _INT32_MAX else np.dtype(np.int64)
        self._padded: np.ndarray | None = None
        self._integral: np.ndarray | None = None
        self._window: np.ndarray | None = None

    def _buffers(self, H: int, W: int) -> None:
        if self._window is not None and self._window.shape == (H, W):
            return
        r = self.radius
        self._padded = np.empty((H + 2 * r, W + 2 * r), dtype=np.int64)
        self._integral = np.zeros((H + 2 * r + 1, W + 2 * r + 1), dtype=np.int64)
        self._window = np.empty((H, W), dtype=np.int64)

    def compute(self, raw_map: np.ndarray, out: np.ndarray | None = None) -> np.ndarray:
        if raw_map.ndim != 2:
            raise ValueError("raw probability map must be 2-D")
        H, W = raw_map.shape
        if out is None:
            out = np.empty((H, W), dtype=self.dtype)
        elif out.shape != (H, W):
            raise ValueError(f"Output shape {out.shape} does not match map shape {(H, W)}")
        elif not np.can_cast(self.dtype, out.dtype):
            raise ValueError(f"Output dtype {out.dtype} cannot hold {self.dtype} sums")
        if raw_map.size and (raw_map.min() < 0 or raw_map.max() > self.max_input):
            raise ValueError(f"raw probability map values must lie in [0, {self.max_input}]")

        self._buffers(H, W)
        k, r = self.kernel_size, self.radius
        padded, integral, window = self._padded, self._integral, self._window

        padded[r : r + H, r : r + W] = raw_map
        padded[:r, r : r + W] = raw_map[0]
        padded[r + H :, r : r + W] = raw_map[-1]
        padded[:, :r] = padded[:, r : r + 1]
        padded[:, r + W :] = padded[:, r + W - 1 : r + W]

        np.cumsum(padded, axis=0, out=integral[1:, 1:])
        np.cumsum(integral[1:, 1:], axis=1, out=integral[1:, 1:])
        np.subtract(integral[k:, k:], integral[:-k, k:], out=window)
        window -= integral[k:, :-k]
        window += integral[:-k, :-k]
        # fits: every window sum is at most K*K*max_input
        np.copyto(out, window, casting="same_kind")
        return out
