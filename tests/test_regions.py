from __future__ import annotations

import numpy as np
import pytest

from selectivebg.regions import Region, partition


def test_pixel_level_partition_is_row_major_singletons():
    grid = partition(3, 4)
    assert len(grid) == 12
    coords = [region.coordinates() for region in grid]
    assert all(len(c) == 1 for c in coords)
    assert [c[0] for c in coords] == [(y, x) for y in range(3) for x in range(4)]
    assert grid[-1] == Region(index=11, y0=2, y1=3, x0=3, x1=4)


def test_patch_partition_covers_grid_disjointly():
    H, W, P = 7, 10, 3
    grid = partition(H, W, P)
    assert len(grid) == 3 * 4
    covered = np.zeros((H, W), dtype=int)
    for region in grid:
        covered[region.slices] += 1
    assert np.all(covered == 1)

    labels = grid.labels()
    assert labels.shape == (H * W,)
    counts = np.bincount(labels, minlength=len(grid))
    assert list(counts) == [region.size for region in grid]
    # edge tiles are cropped
    assert grid[3].shape == (3, 1)
    assert grid[11].shape == (1, 1)


def test_pixel_indices_match_labels():
    grid = partition(5, 6, 2)
    labels = grid.labels()
    for region in grid:
        idx = grid.pixel_indices(region.index)
        assert np.all(labels[idx] == region.index)
        assert len(idx) == region.size


def test_invalid_dimensions_rejected():
    with pytest.raises(ValueError):
        partition(0, 5)
    with pytest.raises(ValueError):
        partition(5, -1)
    with pytest.raises(ValueError):
        partition(5, 5, 0)


def test_index_out_of_range():
    grid = partition(2, 2)
    with pytest.raises(IndexError):
        grid[4]
    assert grid[-4].index == 0
