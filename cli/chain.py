"""Chain command: run several operations in one pass."""

from __future__ import annotations

import argparse
import logging

from config import DEFAULT_CHANNEL, DEFAULT_EDGE_THRESHOLD, DEFAULT_INTENSITY
from imageops import OPERATION_NAMES, PipelineConfig

from cli.operations import add_io_args, execute

logger = logging.getLogger(__name__)


def add_chain_subparser(subparsers: argparse._SubParsersAction) -> None:
    chain_parser = subparsers.add_parser(
        "chain",
        help="Apply several operations in order (e.g. sepia then flip)",
    )
    add_io_args(chain_parser)
    chain_parser.add_argument(
        "--step", "-s",
        dest="steps",
        action="append",
        choices=OPERATION_NAMES,
        required=True,
        help="Operation to apply; repeat for more steps, applied in order",
    )
    chain_parser.add_argument(
        "--factor",
        type=float,
        default=DEFAULT_INTENSITY,
        help=f"Scaling factor for intensity steps (default: {DEFAULT_INTENSITY})",
    )
    chain_parser.add_argument(
        "--channel",
        default=DEFAULT_CHANNEL,
        help=f"Channel for intensity steps: r, g or b (default: {DEFAULT_CHANNEL})",
    )
    chain_parser.add_argument(
        "--threshold", "-t",
        type=int,
        default=DEFAULT_EDGE_THRESHOLD,
        help=f"Threshold for edges steps (default: {DEFAULT_EDGE_THRESHOLD})",
    )
    chain_parser.add_argument(
        "--artifact-dir",
        help="Directory to save every intermediate image as <NN>_<step>.ppm",
    )
    chain_parser.set_defaults(_cmd=cmd_chain)


def cmd_chain(args: argparse.Namespace) -> int:
    config = PipelineConfig(
        operations=tuple(args.steps),
        intensity=args.factor,
        channel=args.channel,
        threshold=args.threshold,
    )
    logger.debug("Chain: %s", " -> ".join(config.operations))
    return execute(args.input, args.output, config, artifact_dir=args.artifact_dir)
