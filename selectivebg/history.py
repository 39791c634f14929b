"""Bounded per-region history of low-motion samples and its median aggregation."""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .constants import SENTINEL_VALUE
from .models import lower_median, worst_slots
from .regions import PatchGrid
from .utils import ensure_channels


@dataclass
class HistoryEntry:
    value: np.ndarray  # region content, shape (h, w, C)
    score: float
    arrival: int


class PatchesHistory:
    """
    One bounded history buffer per region, stored as dense arrays.

    Slot ``j`` of region ``r`` holds one sample: the region's pixels in
    ``_samples[j]``, its motion score in ``_scores[j, r]`` and its arrival number
    in ``_arrivals[j, r]``. Every insert offers one candidate to every region, so
    all regions fill at the same pace and share a single fill count.
    """

    def __init__(self, regions: PatchGrid, s_param: int):
        if s_param < 1:
            raise ValueError("The S parameter must be positive")
        self.regions = regions
        self.capacity = int(s_param)
        self.height = regions.height
        self.width = regions.width
        self._labels = regions.labels()
        self._num_regions = len(regions)
        self._samples: np.ndarray | None = None
        self._scores = np.full((self.capacity, self._num_regions), np.inf, dtype=np.float64)
        self._arrivals = np.full((self.capacity, self._num_regions), -1, dtype=np.int64)
        self._count = 0
        self.frames_inserted = 0

    def _allocate(self, frame: np.ndarray) -> None:
        self._samples = np.zeros(
            (self.capacity, self.height * self.width, frame.shape[2]), dtype=frame.dtype
        )

    def insert(self, filtered_map: np.ndarray, frame: np.ndarray) -> None:
        """Offer the frame's content of every region, scored by the filtered map."""
        arr = ensure_channels(frame)
        if filtered_map.shape != (self.height, self.width):
            raise ValueError(f"Map shape {filtered_map.shape} does not match regions {(self.height, self.width)}")
        if arr.shape[:2] != (self.height, self.width):
            raise ValueError(f"Frame shape {arr.shape} does not match regions {(self.height, self.width)}")
        if self._samples is None:
            self._allocate(arr)
        elif arr.shape[2] != self._samples.shape[2]:
            raise ValueError(f"Frame has {arr.shape[2]} channels, history holds {self._samples.shape[2]}")

        pixels = arr.reshape(-1, arr.shape[2])
        region_scores = np.bincount(
            self._labels,
            weights=filtered_map.reshape(-1).astype(np.float64),
            minlength=self._num_regions,
        )
        arrival = self.frames_inserted
        self.frames_inserted += 1

        if self._count < self.capacity:
            slot = self._count
            self._samples[slot] = pixels
            self._scores[slot] = region_scores
            self._arrivals[slot] = arrival
            self._count += 1
            return

        region_ids = np.arange(self._num_regions)
        worst = worst_slots(self._scores, self._arrivals, self._count)
        admit = region_scores < self._scores[worst, region_ids]
        if not admit.any():
            return
        admitted = region_ids[admit]
        self._scores[worst[admitted], admitted] = region_scores[admitted]
        self._arrivals[worst[admitted], admitted] = arrival

        pix = np.nonzero(admit[self._labels])[0]
        self._samples[worst[self._labels[pix]], pix] = pixels[pix]

    def median(self, out: np.ndarray | None = None) -> np.ndarray:
        """
        Per-channel lower median of every region's retained samples.

        Regions without samples are filled with ``SENTINEL_VALUE``. Buffers are
        left untouched, so repeated calls give identical images.
        """
        if self._samples is None:
            channels = out.shape[2] if out is not None and out.ndim == 3 else 1
            dtype = out.dtype if out is not None else np.uint8
            result = np.full((self.height, self.width, channels), SENTINEL_VALUE, dtype=dtype)
        else:
            result = lower_median(self._samples, self._count).reshape(self.height, self.width, -1)

        if out is None:
            return result
        if out.shape != result.shape:
            raise ValueError(f"Output shape {out.shape} does not match background shape {result.shape}")
        np.copyto(out, result, casting="safe")
        return out

    def sizes(self) -> np.ndarray:
        """Number of retained entries per region."""
        return np.full((self._num_regions,), self._count, dtype=np.int64)

    def entries(self, index: int) -> list[HistoryEntry]:
        """Retained entries of one region, oldest first."""
        if not 0 <= index < self._num_regions:
            raise IndexError("region index out of range")
        if self._samples is None:
            return []
        region = self.regions[index]
        pix = self.regions.pixel_indices(index)
        h, w = region.shape
        slots = sorted(range(self._count), key=lambda j: self._arrivals[j, index])
        return [
            HistoryEntry(
                value=self._samples[j, pix].reshape(h, w, -1).copy(),
                score=float(self._scores[j, index]),
                arrival=int(self._arrivals[j, index]),
            )
            for j in slots
        ]
