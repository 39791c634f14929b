from __future__ import annotations

import argparse
import json
import sys
import time
import tracemalloc
from pathlib import Path
from typing import Optional

import psutil

from .constants import DEFAULT_N_PARAM, DEFAULT_S_PARAM
from .estimator import estimate_background
from .version import get_build_meta


def current_rss_mb() -> float:
    return psutil.Process().memory_info().rss / (1024 * 1024)


def run_profile(
    input_path: Path,
    out_dir: Path,
    s_param: int = DEFAULT_S_PARAM,
    n_param: int = DEFAULT_N_PARAM,
) -> dict:
    out_dir.mkdir(parents=True, exist_ok=True)
    frames = 0

    def count(n: int) -> None:
        nonlocal frames
        frames = n

    tracemalloc.start()
    rss_start = current_rss_mb()
    t0 = time.perf_counter()
    background_path = estimate_background(
        str(input_path), str(out_dir), s_param=s_param, n_param=n_param, progress=count
    )
    elapsed = time.perf_counter() - t0
    rss_end = current_rss_mb()
    _, peak_size = tracemalloc.get_traced_memory()
    tracemalloc.stop()

    result = {
        "input": str(input_path),
        "background": str(background_path),
        "s_param": s_param,
        "n_param": n_param,
        "frames": frames,
        "time_sec": elapsed,
        "frames_per_sec": frames / elapsed if elapsed > 0 else 0.0,
        "rss_start_mb": rss_start,
        "rss_end_mb": rss_end,
        "tracemalloc_peak_bytes": peak_size,
        "env": {
            "python": sys.version,
            "platform": sys.platform,
            **get_build_meta(),
        },
    }

    with open(out_dir / "profile.json", "w", encoding="utf-8") as f:
        json.dump(result, f, indent=2)
    return result


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Profile one background estimation run")
    parser.add_argument("--input", type=Path, required=True, help="Input sequence")
    parser.add_argument("--out", type=Path, required=True, help="Output directory for profile")
    parser.add_argument("-s", type=int, default=DEFAULT_S_PARAM, help="S parameter")
    parser.add_argument("-n", type=int, default=DEFAULT_N_PARAM, help="N parameter")
    args = parser.parse_args(argv)

    res = run_profile(args.input, args.out, args.s, args.n)
    print(json.dumps(res, indent=2))


if __name__ == "__main__":
    main()
