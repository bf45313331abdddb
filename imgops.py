#!/usr/bin/env python3
"""
Unified CLI for the image operations.

Usage:
    imgops sepia in.ppm out.ppm                               # Sepia tone
    imgops intensity in.ppm out.ppm --factor 1.5 --channel r  # Scale one channel
    imgops flip in.ppm out.ppm                                # Mirror left/right
    imgops rotate180 in.ppm out.ppm                           # Rotate 180 degrees
    imgops edges in.ppm out.ppm --threshold 50                # Edge map
    imgops chain in.ppm out.ppm -s sepia -s flip              # Several steps in order
"""

import argparse
import logging
import sys

from logging_utils import configure_logging, add_logging_args
from cli.operations import add_operation_subparsers
from cli.chain import add_chain_subparser

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="imgops",
        description="Image operations - sepia, channel intensity, flips, rotation and edge detection",
    )
    add_logging_args(parser)
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    add_operation_subparsers(subparsers)
    add_chain_subparser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.verbose, args.quiet)

    if args.command is None:
        parser.print_help()
        return 1

    cmd = getattr(args, "_cmd", None)
    if cmd is None:
        parser.print_help()
        return 1
    return cmd(args)


if __name__ == "__main__":
    sys.exit(main())
