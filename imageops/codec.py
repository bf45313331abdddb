"""
Reading and writing images.

Plain-text PPM (P3) files are handled here directly so that the declared
header dimensions can be checked against the sample count. Every other
raster format goes through OpenCV.

P3 layout:
    P3
    <width> <height>
    <maxval>
    r g b r g b ...     (width * height triples, row-major)

A '#' starts a comment that runs to the end of the line.
"""

from __future__ import annotations

import logging
from pathlib import Path

import cv2
import numpy as np

from config import CHANNEL_COUNT, CHANNEL_DEPTH, MIN_CHANNEL_DEPTH, PPM_EXTENSIONS

from .types import Image

logger = logging.getLogger(__name__)

PPM_MAGIC = "P3"


class PPMFormatError(ValueError):
    """Raised when PPM text does not describe a valid image."""


def _tokenize(text: str) -> list[str]:
    tokens: list[str] = []
    for line in text.splitlines():
        tokens.extend(line.split("#", 1)[0].split())
    return tokens


def _parse_header_int(token: str, field: str) -> int:
    try:
        return int(token)
    except ValueError as e:
        raise PPMFormatError(f"Invalid {field} in PPM header: {token!r}") from e


def decode_ppm(text: str) -> Image:
    """Decode plain PPM text into an Image.

    Args:
        text: Full contents of a P3 file.

    Returns:
        Image with the header's width, height and maxval as depth.

    Raises:
        PPMFormatError: If the magic number, header values or sample
                        count/range are invalid.
    """
    tokens = _tokenize(text)
    if not tokens or tokens[0] != PPM_MAGIC:
        found = tokens[0] if tokens else "nothing"
        raise PPMFormatError(f"Expected PPM magic {PPM_MAGIC!r}, found {found!r}")
    if len(tokens) < 4:
        raise PPMFormatError("Truncated PPM header: need width, height and maxval")

    width = _parse_header_int(tokens[1], "width")
    height = _parse_header_int(tokens[2], "height")
    maxval = _parse_header_int(tokens[3], "maxval")

    if width < 0 or height < 0:
        raise PPMFormatError(f"PPM dimensions must be non-negative, got {width}x{height}")
    if not MIN_CHANNEL_DEPTH <= maxval <= CHANNEL_DEPTH:
        raise PPMFormatError(
            f"Unsupported maxval {maxval}: only {MIN_CHANNEL_DEPTH}..{CHANNEL_DEPTH} "
            "(8-bit channels) is supported"
        )

    samples = tokens[4:]
    expected = width * height * CHANNEL_COUNT
    if len(samples) != expected:
        raise PPMFormatError(
            f"PPM declares {width}x{height} ({expected} samples), "
            f"but contains {len(samples)} samples"
        )

    try:
        values = np.array([int(sample) for sample in samples], dtype=np.int64)
    except (ValueError, OverflowError) as e:
        raise PPMFormatError(f"Non-integer sample in PPM data: {e}") from e

    if values.size and (values.min() < 0 or values.max() > maxval):
        raise PPMFormatError(
            f"PPM samples must be within [0, {maxval}], "
            f"got range [{values.min()}, {values.max()}]"
        )

    return Image(values.reshape(height, width, CHANNEL_COUNT), depth=maxval)


def encode_ppm(image: Image) -> str:
    """Encode an Image as plain PPM text, one line per pixel row.

    The header always reflects the image's own dimensions, so a shrunken
    edge-detection result is written with its reduced width and height.
    """
    lines = [PPM_MAGIC, f"{image.width} {image.height}", str(image.depth)]
    if image.width:
        for row in image.pixels:
            lines.append(" ".join(str(value) for value in row.reshape(-1)))
    return "\n".join(lines) + "\n"


def _is_ppm_path(path: Path) -> bool:
    return path.suffix.lower() in PPM_EXTENSIONS


def read_image(path: str | Path) -> Image:
    """Load an image from disk.

    PPM/PNM paths use the plain-text decoder; anything else is decoded
    by OpenCV and converted from BGR to RGB.

    Raises:
        FileNotFoundError: If the path does not exist.
        ValueError: If the file cannot be decoded.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")

    if _is_ppm_path(path):
        image = decode_ppm(path.read_text(encoding="utf-8"))
    else:
        data = np.frombuffer(path.read_bytes(), np.uint8)
        image_array = cv2.imdecode(data, cv2.IMREAD_COLOR)
        if image_array is None:
            raise ValueError(f"Could not decode image: {path}")
        image = Image(cv2.cvtColor(image_array, cv2.COLOR_BGR2RGB))

    logger.debug("Read %s (%dx%d, depth %d)", path, image.width, image.height, image.depth)
    return image


def write_image(path: str | Path, image: Image) -> None:
    """Save an image to disk, creating parent directories as needed.

    Raises:
        ValueError: If OpenCV cannot encode the image (including any
                    zero-area image written to a non-PPM format).
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if _is_ppm_path(path):
        path.write_text(encode_ppm(image), encoding="utf-8")
    else:
        if image.width == 0 or image.height == 0:
            raise ValueError(
                f"Cannot write empty {image.width}x{image.height} image as {path.suffix}; "
                "use .ppm instead"
            )
        bgr = cv2.cvtColor(image.pixels.copy(), cv2.COLOR_RGB2BGR)
        try:
            written = cv2.imwrite(str(path), bgr)
        except cv2.error as e:
            raise ValueError(f"Could not encode image: {path}: {e}") from e
        if not written:
            raise ValueError(f"Could not encode image: {path}")

    logger.debug("Wrote %s (%dx%d)", path, image.width, image.height)
