"""Background estimation from the least moving samples of a video sequence."""
from .constants import (
    COMBINE_L1,
    COMBINE_MAX,
    DEFAULT_COMBINE,
    DEFAULT_N_PARAM,
    DEFAULT_PATCH_SIZE,
    DEFAULT_S_PARAM,
    SENTINEL_VALUE,
)
from .differencing import FrameDifferencer
from .estimator import BackgroundEstimator, estimate_background, output_filename
from .filtering import CounterFilter, kernel_size_for
from .history import HistoryEntry, PatchesHistory
from .regions import PatchGrid, Region, partition
from .sequence import FrameSequence, open_sequence
from .version import __version__, get_build_meta, get_version_string

__all__ = [
    "COMBINE_L1",
    "COMBINE_MAX",
    "DEFAULT_COMBINE",
    "DEFAULT_N_PARAM",
    "DEFAULT_PATCH_SIZE",
    "DEFAULT_S_PARAM",
    "SENTINEL_VALUE",
    "FrameDifferencer",
    "BackgroundEstimator",
    "estimate_background",
    "output_filename",
    "CounterFilter",
    "kernel_size_for",
    "HistoryEntry",
    "PatchesHistory",
    "PatchGrid",
    "Region",
    "partition",
    "FrameSequence",
    "open_sequence",
    "get_version_string",
    "get_build_meta",
    "__version__",
]
