"""
Build and run operation pipelines from a PipelineConfig.

This module provides the function API on top of the class-based steps:
1. build_pipeline() - turns operation names into a Pipeline of steps
2. run_pipeline() - validates a config and runs it on one image

The run_pipeline() function internally uses the Pipeline class.
"""

import logging

from .config import PipelineConfig
from .steps import (
    EdgeDetectStep,
    FlipHorizontalStep,
    FlipVerticalStep,
    IntensityStep,
    OperationStep,
    Pipeline,
    PipelineStepResults,
    Rotate180Step,
    SepiaStep,
)
from .types import Image

logger = logging.getLogger(__name__)


def _build_step(name: str, config: PipelineConfig) -> OperationStep:
    if name == "sepia":
        return SepiaStep()
    if name == "intensity":
        return IntensityStep(intensity=config.intensity, channel=config.channel)
    if name == "flip":
        return FlipHorizontalStep()
    if name == "flip-vertical":
        return FlipVerticalStep()
    if name == "rotate180":
        return Rotate180Step()
    if name == "edges":
        return EdgeDetectStep(threshold=config.threshold)
    raise ValueError(f"Unknown operation: {name}")


def build_pipeline(config: PipelineConfig) -> Pipeline:
    """Build a Pipeline from a PipelineConfig.

    Args:
        config: Pipeline configuration. Not validated here; see run_pipeline().

    Returns:
        Pipeline with one step per entry in config.operations.
    """
    steps: list[OperationStep] = [_build_step(name, config) for name in config.operations]
    return Pipeline(steps=steps)


def run_pipeline(
    image: Image,
    config: PipelineConfig | None = None,
    artifact_dir: str | None = None,
) -> PipelineStepResults:
    """Run the configured operations on an image.

    Args:
        image: Input image.
        config: Pipeline configuration. An empty configuration (the default)
                runs no operations.
        artifact_dir: Optional directory for intermediate images.

    Returns:
        PipelineStepResults with the final and intermediate images.

    Raises:
        TypeError: If image is not an Image.
        ValueError: If the configuration is invalid.
    """
    if not isinstance(image, Image):
        raise TypeError(f"Expected Image, got {type(image).__name__}")

    if config is None:
        config = PipelineConfig()
    config.validate()

    pipeline = build_pipeline(config)
    logger.debug("Running pipeline: %s", " -> ".join(step.name for step in pipeline) or "(empty)")
    return pipeline.run(image, artifact_dir=artifact_dir)
