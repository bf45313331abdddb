"""Single-operation CLI commands (sepia, intensity, flip, rotate180, edges)."""

from __future__ import annotations

import argparse
import logging

from config import CHANNEL_SELECTORS, DEFAULT_EDGE_THRESHOLD
from imageops import PipelineConfig, read_image, run_pipeline, write_image

logger = logging.getLogger(__name__)


def add_io_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "input",
        help="Input image (.ppm plain text, or any format OpenCV reads)",
    )
    parser.add_argument(
        "output",
        help="Output image path (.ppm writes plain text P3)",
    )


def add_operation_subparsers(subparsers: argparse._SubParsersAction) -> None:
    sepia_parser = subparsers.add_parser(
        "sepia",
        help="Apply a sepia tone",
    )
    add_io_args(sepia_parser)
    sepia_parser.set_defaults(_cmd=cmd_sepia)

    intensity_parser = subparsers.add_parser(
        "intensity",
        help="Scale the intensity of one color channel",
    )
    add_io_args(intensity_parser)
    intensity_parser.add_argument(
        "--factor",
        type=float,
        required=True,
        help="Scaling factor (<1 darkens, >1 brightens)",
    )
    intensity_parser.add_argument(
        "--channel",
        required=True,
        help="Channel to scale: r, g or b (anything else leaves the image unchanged)",
    )
    intensity_parser.set_defaults(_cmd=cmd_intensity)

    flip_parser = subparsers.add_parser(
        "flip",
        help="Flip the image horizontally",
    )
    add_io_args(flip_parser)
    flip_parser.set_defaults(_cmd=cmd_flip)

    rotate_parser = subparsers.add_parser(
        "rotate180",
        help="Rotate the image by 180 degrees",
    )
    add_io_args(rotate_parser)
    rotate_parser.set_defaults(_cmd=cmd_rotate180)

    edges_parser = subparsers.add_parser(
        "edges",
        help="Detect edges (output is one column and one row smaller)",
    )
    add_io_args(edges_parser)
    edges_parser.add_argument(
        "--threshold", "-t",
        type=int,
        default=DEFAULT_EDGE_THRESHOLD,
        help=f"Color distance that counts as an edge, 0 < T < 255 (default: {DEFAULT_EDGE_THRESHOLD})",
    )
    edges_parser.set_defaults(_cmd=cmd_edges)


def execute(
    input_path: str,
    output_path: str,
    config: PipelineConfig,
    artifact_dir: str | None = None,
) -> int:
    """Read, transform and write one image. Returns a process exit code."""
    try:
        image = read_image(input_path)
        result = run_pipeline(image, config, artifact_dir=artifact_dir)
        write_image(output_path, result.final)
    except (OSError, ValueError) as e:
        logger.error("%s", e)
        return 1

    logger.info(
        "%s: %s (%dx%d) -> %s (%dx%d)",
        " -> ".join(step.name for step in result.steps) or "copy",
        input_path, image.width, image.height,
        output_path, result.final.width, result.final.height,
    )
    return 0


def cmd_sepia(args: argparse.Namespace) -> int:
    return execute(args.input, args.output, PipelineConfig(operations=("sepia",)))


def cmd_intensity(args: argparse.Namespace) -> int:
    if len(args.channel) == 1 and args.channel not in CHANNEL_SELECTORS:
        logger.warning(
            "Channel %r is not one of %s; image will be copied unchanged",
            args.channel, ", ".join(CHANNEL_SELECTORS),
        )
    config = PipelineConfig(
        operations=("intensity",),
        intensity=args.factor,
        channel=args.channel,
    )
    return execute(args.input, args.output, config)


def cmd_flip(args: argparse.Namespace) -> int:
    return execute(args.input, args.output, PipelineConfig(operations=("flip",)))


def cmd_rotate180(args: argparse.Namespace) -> int:
    return execute(args.input, args.output, PipelineConfig(operations=("rotate180",)))


def cmd_edges(args: argparse.Namespace) -> int:
    config = PipelineConfig(operations=("edges",), threshold=args.threshold)
    return execute(args.input, args.output, config)
