from __future__ import annotations

import shutil
import subprocess

import imageio.v2 as imageio
import pytest

from selectivebg import estimate_background


@pytest.mark.skipif(shutil.which("ffmpeg") is None, reason="ffmpeg required")
def test_smoke_real_clip(tmp_path):
    pytest.importorskip("imageio_ffmpeg")
    clip = tmp_path / "clip.mp4"
    out_dir = tmp_path / "out"

    subprocess.run([
        "ffmpeg",
        "-y",
        "-f",
        "lavfi",
        "-i",
        "testsrc=size=160x120:rate=10",
        "-t",
        "1",
        "-pix_fmt",
        "yuv420p",
        str(clip),
    ], check=True, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)

    path = estimate_background(str(clip), str(out_dir), s_param=3, n_param=3, max_frames=8)

    assert path == out_dir / "output_3_3.png"
    assert path.exists()
    background = imageio.imread(str(path))
    assert background.shape[:2] == (120, 160)
