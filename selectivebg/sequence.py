"""Sequential frame source over a video file or a folder of images."""
from __future__ import annotations

from pathlib import Path
from typing import Iterator

import imageio.v2 as imageio
import numpy as np

from .constants import IMAGE_SUFFIXES
from .utils import ensure_channels


class FrameSequence:
    """
    Forward-only reader. ``is_valid`` is False when the path could not be opened;
    the first frame is peeked at open time to learn the frame geometry.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._frames: Iterator[np.ndarray] | None = None
        self._reader = None
        self._pending: np.ndarray | None = None
        self.error: Exception | None = None
        self.height: int | None = None
        self.width: int | None = None
        self.channels: int | None = None
        try:
            self._open()
        except (OSError, ValueError, RuntimeError) as exc:
            self.error = exc
            self.close()

    def _open(self) -> None:
        if self.path.is_dir():
            files = sorted(p for p in self.path.iterdir() if p.suffix.lower() in IMAGE_SUFFIXES)
            if not files:
                raise ValueError(f"No image files in {self.path}")
            self._frames = (imageio.imread(str(p)) for p in files)
        else:
            self._reader = imageio.get_reader(str(self.path))
            self._frames = iter(self._reader)

        first = next(self._frames, None)
        if first is not None:
            self._pending = ensure_channels(first)
            self.height, self.width, self.channels = self._pending.shape

    @property
    def is_valid(self) -> bool:
        return self._frames is not None

    def read(self) -> np.ndarray | None:
        """Next frame as (H, W, C), or None at the end of the sequence."""
        if self._frames is None:
            return None
        if self._pending is not None:
            frame, self._pending = self._pending, None
            return frame
        frame = next(self._frames, None)
        if frame is None:
            return None
        return ensure_channels(frame)

    def __iter__(self) -> Iterator[np.ndarray]:
        while True:
            frame = self.read()
            if frame is None:
                return
            yield frame

    def close(self) -> None:
        if self._reader is not None and hasattr(self._reader, "close"):
            self._reader.close()
        self._reader = None
        self._frames = None
        self._pending = None

    def __enter__(self) -> "FrameSequence":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def open_sequence(path: str | Path) -> FrameSequence:
    seq = FrameSequence(path)
    if not seq.is_valid:
        raise ValueError(f"Cannot open the '{path}' sequence") from seq.error
    return seq
