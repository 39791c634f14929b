"""Region (patch) decomposition of the image plane."""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from .constants import DEFAULT_PATCH_SIZE


@dataclass(frozen=True)
class Region:
    index: int
    y0: int
    y1: int
    x0: int
    x1: int

    @property
    def shape(self) -> tuple[int, int]:
        return self.y1 - self.y0, self.x1 - self.x0

    @property
    def size(self) -> int:
        h, w = self.shape
        return h * w

    @property
    def slices(self) -> tuple[slice, slice]:
        return slice(self.y0, self.y1), slice(self.x0, self.x1)

    def coordinates(self) -> list[tuple[int, int]]:
        return [(y, x) for y in range(self.y0, self.y1) for x in range(self.x0, self.x1)]


class PatchGrid(Sequence):
    """
    Row-major grid of disjoint square patches covering a height x width frame.

    Regions are built on access so a pixel-level grid of a large frame does not
    hold one Python object per pixel.
    """

    def __init__(self, height: int, width: int, patch_size: int = DEFAULT_PATCH_SIZE):
        if height < 1 or width < 1:
            raise ValueError(f"Frame dimensions must be positive, got {height}x{width}")
        if patch_size < 1:
            raise ValueError(f"Patch size must be positive, got {patch_size}")
        self.height = int(height)
        self.width = int(width)
        self.patch_size = int(patch_size)
        self.rows = (self.height + self.patch_size - 1) // self.patch_size
        self.cols = (self.width + self.patch_size - 1) // self.patch_size

    def __len__(self) -> int:
        return self.rows * self.cols

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        n = len(self)
        if index < 0:
            index += n
        if not 0 <= index < n:
            raise IndexError("region index out of range")
        ty, tx = divmod(index, self.cols)
        y0 = ty * self.patch_size
        x0 = tx * self.patch_size
        return Region(
            index=index,
            y0=y0,
            y1=min(self.height, y0 + self.patch_size),
            x0=x0,
            x1=min(self.width, x0 + self.patch_size),
        )

    def __repr__(self) -> str:
        return f"PatchGrid({self.height}x{self.width}, patch_size={self.patch_size}, regions={len(self)})"

    def labels(self) -> np.ndarray:
        """Flat (H*W,) array giving the region index of every pixel."""
        ys = np.arange(self.height, dtype=np.int64) // self.patch_size
        xs = np.arange(self.width, dtype=np.int64) // self.patch_size
        return (ys[:, None] * self.cols + xs[None, :]).reshape(-1)

    def pixel_indices(self, index: int) -> np.ndarray:
        """Flat pixel indices covered by one region, row-major."""
        region = self[index]
        ys = np.arange(region.y0, region.y1, dtype=np.int64)
        xs = np.arange(region.x0, region.x1, dtype=np.int64)
        return (ys[:, None] * self.width + xs[None, :]).reshape(-1)


def partition(height: int, width: int, patch_size: int = DEFAULT_PATCH_SIZE) -> PatchGrid:
    """Partition the pixel grid into disjoint regions (single pixels by default)."""
    return PatchGrid(height, width, patch_size)
