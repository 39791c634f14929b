from __future__ import annotations

import numpy as np
import pytest

from selectivebg.filtering import CounterFilter, kernel_size_for


def brute_box_sum(raw: np.ndarray, k: int) -> np.ndarray:
    r = k // 2
    padded = np.pad(raw.astype(np.int64), r, mode="edge")
    H, W = raw.shape
    out = np.zeros((H, W), dtype=np.int64)
    for y in range(H):
        for x in range(W):
            out[y, x] = padded[y : y + k, x : x + k].sum()
    return out


def test_kernel_size_examples():
    assert kernel_size_for(10, 10, 2) == 5
    assert kernel_size_for(10, 10, 3) == 3
    assert kernel_size_for(480, 640, 3) == 161
    assert kernel_size_for(8, 8, 1) == 9
    assert kernel_size_for(1, 1, 5) == 1


def test_kernel_size_always_odd_and_positive():
    for h in range(1, 15):
        for w in range(1, 15):
            for n in range(1, 20):
                k = kernel_size_for(h, w, n)
                assert k >= 1
                assert k % 2 == 1


def test_kernel_size_rejects_invalid():
    with pytest.raises(ValueError):
        kernel_size_for(10, 10, 0)
    with pytest.raises(ValueError):
        kernel_size_for(0, 10, 1)


@pytest.mark.parametrize("k", [1, 3, 5, 9])
def test_box_sum_matches_brute_force(k):
    rng = np.random.default_rng(k)
    raw = rng.integers(0, 766, size=(7, 9)).astype(np.int32)
    out = CounterFilter(k).compute(raw)
    assert np.array_equal(out, brute_box_sum(raw, k))


def test_isolated_pixel_spreads_over_kernel():
    raw = np.zeros((7, 7), dtype=np.int32)
    raw[3, 3] = 1
    out = CounterFilter(3).compute(raw)
    assert out.sum() == 9
    assert out[2:5, 2:5].min() == 1


def test_output_buffer_and_dtype():
    f = CounterFilter(3)
    assert f.dtype == np.int32
    buf = np.zeros((4, 4), dtype=f.dtype)
    res = f.compute(np.ones((4, 4), dtype=np.int32), out=buf)
    assert res is buf
    assert np.all(buf == 9)
    assert CounterFilter(1001, 765).dtype == np.int32
    assert CounterFilter(2001, 765).dtype == np.int64
    with pytest.raises(ValueError):
        f.compute(np.ones((4, 4), dtype=np.int32), out=np.zeros((3, 3), dtype=f.dtype))


def test_rejects_even_kernel():
    with pytest.raises(ValueError):
        CounterFilter(4)
    with pytest.raises(ValueError):
        CounterFilter(0)


def test_work_buffers_are_reused():
    f = CounterFilter(3)
    rng = np.random.default_rng(0)
    first = rng.integers(0, 766, size=(6, 5)).astype(np.int32)
    f.compute(first)
    integral = f._integral
    second = rng.integers(0, 766, size=(6, 5)).astype(np.int32)
    assert np.array_equal(f.compute(second), brute_box_sum(second, 3))
    assert f._integral is integral
    f.compute(np.zeros((4, 4), dtype=np.int32))
    assert f._integral.shape == (7, 7)


def test_rejects_inputs_beyond_declared_bound():
    f = CounterFilter(3, max_input=255)
    with pytest.raises(ValueError):
        f.compute(np.full((4, 4), 256, dtype=np.int32))
    with pytest.raises(ValueError):
        f.compute(np.full((4, 4), -1, dtype=np.int32))
    wide = CounterFilter(2001, 765)
    with pytest.raises(ValueError):
        wide.compute(np.zeros((4, 4), dtype=np.int32), out=np.zeros((4, 4), dtype=np.int32))
