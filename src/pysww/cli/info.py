"""
``pysww info`` subcommand.

Prints a summary of an SWW result file.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pysww.core.exceptions import UnknownFormatError
from pysww.io.config import SWWReadConfig
from pysww.io.sww import inspect_sww, read_sww

logger = logging.getLogger(__name__)


def add_info_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the ``info`` subcommand."""
    p = subparsers.add_parser(
        "info",
        help="Summarize an SWW result file.",
        description="Print mesh size, origin offset and time span of an SWW file.",
    )

    p.add_argument("file", type=Path, help="Path to the .sww file")
    p.add_argument(
        "--datasets",
        action="store_true",
        help="Decode all datasets and print their value ranges",
    )
    p.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Depth above which an element counts as wet (default: 0.0001)",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    p.set_defaults(func=run_info)


def _format_range(lo: float | None, hi: float | None) -> str:
    if lo is None or hi is None:
        return "n/a"
    return f"{lo:.4g} .. {hi:.4g}"


def run_info(args: argparse.Namespace) -> int:
    """Run the ``info`` subcommand."""
    log_level = logging.DEBUG if args.debug else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    config = SWWReadConfig()
    if args.threshold is not None:
        try:
            config = SWWReadConfig(depth_threshold=args.threshold)
        except ValueError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1

    try:
        info = inspect_sww(args.file, config)
    except UnknownFormatError as exc:
        logger.debug("inspect failed", exc_info=True)
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    dims = info.dimensions
    print(f"File:       {info.path}")
    print(f"Format:     {info.data_model}")
    print(f"Nodes:      {dims.n_points}")
    print(f"Elements:   {dims.n_volumes}")
    print(f"Offset:     ({info.xllcorner}, {info.yllcorner})")
    if info.time_start is None:
        print("Timesteps:  0")
    else:
        print(
            f"Timesteps:  {dims.n_timesteps} "
            f"({info.time_start:.4g} h .. {info.time_end:.4g} h)"
        )
    print(f"Momentum:   {'yes' if info.has_momentum else 'no'}")

    if not args.datasets:
        return 0

    try:
        mesh = read_sww(args.file, config)
    except UnknownFormatError as exc:
        logger.debug("read failed", exc_info=True)
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    print()
    for ds in mesh.datasets:
        print(
            f"{ds.name:<16} {ds.type.value:<8} outputs={ds.n_outputs:<6} "
            f"range={_format_range(ds.value_min, ds.value_max)}"
        )
    return 0
