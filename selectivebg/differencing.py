"""Frame differencing into a per-pixel motion score."""
from __future__ import annotations

import numpy as np

from .constants import COMBINE_L1, COMBINE_MAX, DEFAULT_COMBINE
from .utils import ensure_channels

_COMBINERS = (COMBINE_L1, COMBINE_MAX)


class FrameDifferencer:
    """
    Absolute difference between consecutive frames, folded over channels.

    Buffers are allocated once on the first frame and reused; the returned map
    is only valid until the next call to ``process``.
    """

    def __init__(self, combine: str = DEFAULT_COMBINE):
        if combine not in _COMBINERS:
            raise ValueError(f"Unsupported combine rule {combine!r}; choose from {', '.join(_COMBINERS)}")
        self.combine = combine
        self._previous: np.ndarray | None = None
        self._diff: np.ndarray | None = None
        self._map: np.ndarray | None = None

    @property
    def primed(self) -> bool:
        return self._previous is not None

    def max_score(self, channels: int, max_value: int = 255) -> int:
        if self.combine == COMBINE_L1:
            return channels * max_value
        return max_value

    def process(self, frame: np.ndarray) -> np.ndarray:
        arr = ensure_channels(frame)
        if self._previous is None:
            self._previous = arr.copy()
            work = np.int64 if arr.dtype.itemsize >= 4 else np.int32
            self._diff = np.empty(arr.shape, dtype=work)
            self._map = np.zeros(arr.shape[:2], dtype=work)
            return self._map
        if arr.shape != self._previous.shape:
            raise ValueError(f"Frame shape {arr.shape} does not match previous frame {self._previous.shape}")
        if arr.dtype != self._previous.dtype:
            raise ValueError(f"Frame dtype {arr.dtype} does not match previous frame {self._previous.dtype}")

        np.subtract(arr, self._previous, out=self._diff, dtype=self._diff.dtype)
        np.abs(self._diff, out=self._diff)
        if self.combine == COMBINE_L1:
            np.sum(self._diff, axis=2, dtype=self._map.dtype, out=self._map)
        else:
            np.max(self._diff, axis=2, out=self._map)
        np.copyto(self._previous, arr)
        return self._map
