"""Order statistics over the retained history slots."""
from __future__ import annotations

import numpy as np


def lower_median(stack: np.ndarray, count: int) -> np.ndarray:
    """
    Median along axis 0 over the first ``count`` rows of ``stack``.

    For an even count the lower of the two middle values is returned, so the
    result is always one of the observed values and keeps the input dtype.
    """
    if count < 1:
        raise ValueError("count must be positive")
    if count > stack.shape[0]:
        raise ValueError(f"count {count} exceeds stack depth {stack.shape[0]}")
    k = (count - 1) // 2
    if count == 1:
        return stack[0].copy()
    return np.partition(stack[:count], k, axis=0)[k]


def worst_slots(scores: np.ndarray, arrivals: np.ndarray, count: int) -> np.ndarray:
    """
    Slot index of the least background-like entry of every region.

    ``scores`` and ``arrivals`` have shape (S, R); only the first ``count`` slots
    are filled. The highest score loses; among equal scores the latest arrival
    loses so that the earliest retained entry survives.
    """
    if count < 1:
        raise ValueError("count must be positive")
    s = scores[:count]
    top = s.max(axis=0)
    tied_arrivals = np.where(s == top, arrivals[:count], -1)
    return np.argmax(tied_arrivals, axis=0)
