"""
pysww command-line interface.

Usage:
    pysww info FILE [options]   Summarize an SWW result file
    python -m pysww <command>   Same as above
"""

from __future__ import annotations

import argparse


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="pysww",
        description="Python tools for ANUGA SWW result files.",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Register subcommands
    from pysww.cli.info import add_info_parser

    add_info_parser(subparsers)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    # Dispatch to the subcommand handler
    result: int = args.func(args)
    return result


__all__ = ["main"]
