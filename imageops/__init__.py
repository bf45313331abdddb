"""
Image operations on 8-bit RGB raster images.

This module provides pure, deterministic image transformations. All
functions follow the pattern: input Image -> new output Image, with no
mutation of the original.

Key components:
- types: Image value type (row-major (height, width, 3) pixel buffer)
- operations: sepia, increase_intensity, flip_horizontal, flip_vertical,
  rotate_180, edge_detect
- codec: plain PPM (P3) decode/encode and file read/write
- steps: Class-based steps with a common OperationStep interface, and Pipeline
- config / pipeline: PipelineConfig, build_pipeline() and run_pipeline()

Two APIs are available:
1. Function-based: sepia(image), edge_detect(image, 50), ...
2. Class-based: Pipeline(steps=[SepiaStep(), FlipHorizontalStep()]).run(image)
"""

from .types import Image, Pixel
from .pixels import clamp, color_distance, truncate_and_clamp
from .operations import (
    sepia,
    increase_intensity,
    flip_horizontal,
    flip_vertical,
    rotate_180,
    edge_detect,
)
from .codec import PPMFormatError, decode_ppm, encode_ppm, read_image, write_image
from .config import OPERATION_NAMES, PipelineConfig
from .pipeline import build_pipeline, run_pipeline
from .steps import (
    OperationStep,
    SepiaStep,
    IntensityStep,
    FlipHorizontalStep,
    FlipVerticalStep,
    Rotate180Step,
    EdgeDetectStep,
    Pipeline,
    PipelineStepResults,
    StepResult,
)

__all__ = [
    # Data model
    "Image",
    "Pixel",
    # Pixel helpers
    "clamp",
    "color_distance",
    "truncate_and_clamp",
    # Operations
    "sepia",
    "increase_intensity",
    "flip_horizontal",
    "flip_vertical",
    "rotate_180",
    "edge_detect",
    # Codec
    "PPMFormatError",
    "decode_ppm",
    "encode_ppm",
    "read_image",
    "write_image",
    # Config and function API
    "OPERATION_NAMES",
    "PipelineConfig",
    "build_pipeline",
    "run_pipeline",
    # Class-based API
    "OperationStep",
    "SepiaStep",
    "IntensityStep",
    "FlipHorizontalStep",
    "FlipVerticalStep",
    "Rotate180Step",
    "EdgeDetectStep",
    "Pipeline",
    "PipelineStepResults",
    "StepResult",
]
