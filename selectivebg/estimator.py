"""Selective-history background estimation (streaming, bounded memory)."""

from __future__ import annotations

import warnings
from pathlib import Path
from typing import Callable

import numpy as np

from .constants import (
    DEFAULT_COMBINE,
    DEFAULT_EXTENSION,
    DEFAULT_N_PARAM,
    DEFAULT_PATCH_SIZE,
    DEFAULT_S_PARAM,
    OUTPUT_PREFIX,
)
from .differencing import FrameDifferencer
from .filtering import CounterFilter, kernel_size_for
from .history import PatchesHistory
from .regions import partition
from .sequence import open_sequence
from .utils import ensure_channels, write_image


def output_filename(s_param: int, n_param: int, extension: str = DEFAULT_EXTENSION) -> str:
    return f"{OUTPUT_PREFIX}_{s_param}_{n_param}.{extension.lstrip('.')}"


def _check_params(s_param: int, n_param: int, patch_size: int) -> None:
    if s_param < 1:
        raise ValueError("The S parameter must be positive")
    if n_param < 1:
        raise ValueError("The N parameter must be positive")
    if patch_size < 1:
        raise ValueError("The patch size must be positive")


class BackgroundEstimator:
    """
    Folds frames one at a time into per-region histories.

    The first frame only primes the differencer. Every later frame is scored
    against its predecessor, the score is smoothed by the counting filter and
    the frame is offered to the histories.
    """

    def __init__(
        self,
        height: int,
        width: int,
        s_param: int = DEFAULT_S_PARAM,
        n_param: int = DEFAULT_N_PARAM,
        patch_size: int = DEFAULT_PATCH_SIZE,
        combine: str = DEFAULT_COMBINE,
    ):
        _check_params(s_param, n_param, patch_size)
        self.s_param = s_param
        self.n_param = n_param
        self.height = height
        self.width = width
        self.regions = partition(height, width, patch_size)
        self.kernel_size = kernel_size_for(height, width, n_param)
        self.differencer = FrameDifferencer(combine)
        # sized from the first frame's dtype and channel count
        self.filter: CounterFilter | None = None
        self.history = PatchesHistory(self.regions, s_param)
        self.probability_map: np.ndarray | None = None
        self.filtered_map: np.ndarray | None = None
        self.frames_processed = 0

    def _build_filter(self, frame: np.ndarray) -> None:
        info = np.iinfo(frame.dtype)
        max_input = self.differencer.max_score(frame.shape[2], int(info.max) - int(info.min))
        self.filter = CounterFilter(self.kernel_size, max_input)
        self.filtered_map = np.zeros((self.height, self.width), dtype=self.filter.dtype)

    def process(self, frame: np.ndarray) -> bool:
        """Fold one frame in; returns False for the priming frame."""
        arr = ensure_channels(frame)
        self.probability_map = self.differencer.process(arr)
        self.frames_processed += 1
        if self.frames_processed == 1:
            self._build_filter(arr)
            return False
        self.filter.compute(self.probability_map, out=self.filtered_map)
        self.history.insert(self.filtered_map, arr)
        return True

    def background(self, out: np.ndarray | None = None) -> np.ndarray:
        return self.history.median(out)


def estimate_background(
    input_path: str,
    output_dir: str,
    s_param: int = DEFAULT_S_PARAM,
    n_param: int = DEFAULT_N_PARAM,
    visualization: bool = False,
    max_frames: int | None = None,
    patch_size: int = DEFAULT_PATCH_SIZE,
    combine: str = DEFAULT_COMBINE,
    extension: str = DEFAULT_EXTENSION,
    progress: Callable[[int], None] | None = None,
) -> Path:
    """
    Estimate the background of a sequence and write ``output_<S>_<N>.<ext>``.

    Frames are streamed from the reader; memory is bounded by the region
    histories (regions x S samples) whatever the sequence length.
    """
    _check_params(s_param, n_param, patch_size)
    if max_frames is not None and max_frames < 1:
        raise ValueError("max_frames must be positive")

    print(f"Input sequence: {input_path}")
    print(f"   Output path: {output_dir}")
    print(f"             S: {s_param}")
    print(f"             N: {n_param}")
    print(f" Visualization: {visualization}")

    preview = None
    with open_sequence(input_path) as seq:
        if seq.height is None:
            raise ValueError("No frames found in input sequence")
        H, W, C = seq.height, seq.width, seq.channels
        print(f"Reading sequence {input_path}: {H}x{W}, {C} channel(s)")

        first = seq.read()
        estimator = BackgroundEstimator(
            H,
            W,
            s_param=s_param,
            n_param=n_param,
            patch_size=patch_size,
            combine=combine,
        )
        print(f"Size of the kernel: {estimator.kernel_size}")

        if visualization:
            from .preview import Preview

            preview = Preview()
        background = np.zeros((H, W, C), dtype=first.dtype)

        frame = first
        while frame is not None:
            admitted = estimator.process(frame)
            if preview is not None:
                preview.show("Input video", frame)
                if admitted:
                    preview.show("Probability map", estimator.probability_map)
                    preview.show("Filtered probability map", estimator.filtered_map)
                    preview.show("Estimated background", estimator.background(background))
                preview.wait(1)
            if progress is not None:
                progress(estimator.frames_processed)
            if max_frames is not None and estimator.frames_processed >= max_frames:
                break
            frame = seq.read()

    T = estimator.frames_processed
    print(f"{T} frames read.")
    if T < 2:
        warnings.warn(
            f"Sequence {input_path} has a single frame; the background is left at the sentinel value"
        )

    estimator.background(background)
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    output_path = out_dir / output_filename(s_param, n_param, extension)
    print(f"Writing {output_path}...")
    write_image(output_path, background)

    if preview is not None:
        print("Close the preview windows to quit...")
        preview.wait(0)
        preview.close()
    return output_path
