"""Command-line entrypoint for selective-history background estimation."""
from __future__ import annotations

import argparse

from .constants import (
    COMBINE_L1,
    COMBINE_MAX,
    DEFAULT_COMBINE,
    DEFAULT_N_PARAM,
    DEFAULT_PATCH_SIZE,
    DEFAULT_S_PARAM,
)
from .estimator import estimate_background
from .version import get_version_string


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="selectivebg",
        description="Estimate the static background of a video sequence from its least moving samples",
    )
    parser.add_argument("-i", "--input", help="path to the input sequence (video file or image folder)")
    parser.add_argument("-o", "--output", help="path to the output folder")
    parser.add_argument("-s", "--s-parameter", type=int, default=None, help="value of the S parameter")
    parser.add_argument("-n", "--n-parameter", type=int, default=None, help="value of the N parameter")
    parser.add_argument(
        "-d",
        "--default",
        action="store_true",
        help=f"use the default set of parameters (S={DEFAULT_S_PARAM}, N={DEFAULT_N_PARAM})",
    )
    parser.add_argument("-v", "--visualization", action="store_true", help="enable visualization")
    parser.add_argument("--patch-size", type=int, default=DEFAULT_PATCH_SIZE, help="side of the square regions")
    parser.add_argument(
        "--combine",
        default=DEFAULT_COMBINE,
        choices=[COMBINE_L1, COMBINE_MAX],
        help="rule folding channel differences into one motion score",
    )
    parser.add_argument("--max-frames", type=int, default=None, help="Limit number of frames processed")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version_string()}")
    return parser


def resolve_params(parser: argparse.ArgumentParser, args: argparse.Namespace) -> tuple[int, int]:
    if args.default:
        return DEFAULT_S_PARAM, DEFAULT_N_PARAM
    if args.s_parameter is None:
        parser.error("You must provide the S parameter!")
    if args.s_parameter < 1:
        parser.error("The S parameter must be positive!")
    if args.n_parameter is None:
        parser.error("You must provide the N parameter!")
    if args.n_parameter < 1:
        parser.error("The N parameter must be positive!")
    return args.s_parameter, args.n_parameter


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.input:
        parser.error("You must provide the path of the input sequence!")
    if not args.output:
        parser.error("You must provide the path of the output folder!")
    s_param, n_param = resolve_params(parser, args)
    if args.patch_size < 1:
        parser.error("The patch size must be positive!")
    if args.max_frames is not None and args.max_frames < 1:
        parser.error("--max-frames must be positive!")

    try:
        estimate_background(
            args.input,
            args.output,
            s_param=s_param,
            n_param=n_param,
            visualization=args.visualization,
            max_frames=args.max_frames,
            patch_size=args.patch_size,
            combine=args.combine,
        )
    except (OSError, ValueError) as exc:
        raise SystemExit(f"error: {exc}") from exc


if __name__ == "__main__":
    main()
