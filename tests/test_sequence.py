from __future__ import annotations

import numpy as np
import pytest

from selectivebg.sequence import FrameSequence, open_sequence


def test_image_folder_read_in_name_order(png_sequence):
    frames = np.stack([np.full((3, 5, 3), v, dtype=np.uint8) for v in (5, 15, 25)])
    folder = png_sequence(frames)
    (folder / "notes.txt").write_text("ignored")

    with open_sequence(folder) as seq:
        assert seq.is_valid
        assert (seq.height, seq.width, seq.channels) == (3, 5, 3)
        read = [int(f[0, 0, 0]) for f in seq]
        assert read == [5, 15, 25]
        assert seq.read() is None


def test_video_reader_drops_alpha_and_adds_channel_axis(monkeypatch):
    rgba = np.zeros((2, 2, 4), dtype=np.uint8)
    gray = np.zeros((2, 2), dtype=np.uint8)

    class FakeReader:
        def __iter__(self):
            yield rgba
            yield rgba

        def close(self):
            pass

    monkeypatch.setattr("selectivebg.sequence.imageio.get_reader", lambda path: FakeReader())
    seq = FrameSequence("clip.mp4")
    assert seq.channels == 3
    assert [f.shape for f in seq] == [(2, 2, 3), (2, 2, 3)]

    class GrayReader(FakeReader):
        def __iter__(self):
            yield gray

    monkeypatch.setattr("selectivebg.sequence.imageio.get_reader", lambda path: GrayReader())
    assert FrameSequence("clip.mp4").read().shape == (2, 2, 1)


def test_invalid_paths(tmp_path):
    seq = FrameSequence(tmp_path / "nope.avi")
    assert not seq.is_valid
    assert seq.read() is None
    with pytest.raises(ValueError, match="Cannot open"):
        open_sequence(tmp_path / "nope.avi")

    empty = tmp_path / "empty"
    empty.mkdir()
    assert not FrameSequence(empty).is_valid
