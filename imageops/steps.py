"""
Operation step classes with a common interface.

Each step wraps one image operation together with its parameters so that
operations can be chained. Steps are pure: they take an Image and return
a new Image without mutating the input.

Usage:
    from imageops.steps import SepiaStep, FlipHorizontalStep, Pipeline

    pipeline = Pipeline(steps=[
        SepiaStep(),
        FlipHorizontalStep(),
    ])
    result = pipeline.run(image)
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from config import ARTIFACT_EXTENSION, CHANNEL_SELECTORS

from .codec import write_image
from .operations import (
    edge_detect,
    flip_horizontal,
    flip_vertical,
    increase_intensity,
    rotate_180,
    sepia,
)
from .types import Image

logger = logging.getLogger(__name__)


class OperationStep(ABC):
    """Base class for operation steps.

    Steps can optionally produce metadata (like the output size of a
    shape-changing operation) that is kept alongside the step's image.
    """

    @abstractmethod
    def apply(self, image: Image) -> Image:
        """Apply this step to an image.

        Must be pure: never mutates the input image.
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logging and artifact file names."""
        pass

    def get_metadata(self) -> dict[str, Any]:
        """Return any metadata produced by the last apply(). Empty by default."""
        return {}


@dataclass(frozen=True)
class SepiaStep(OperationStep):
    """Apply a sepia tone."""

    def apply(self, image: Image) -> Image:
        return sepia(image)

    @property
    def name(self) -> str:
        return "sepia"


@dataclass(frozen=True)
class IntensityStep(OperationStep):
    """Scale one color channel.

    Attributes:
        intensity: Scaling factor for the selected channel.
        channel: 'r', 'g' or 'b'. Unknown selectors make the step a no-op.
    """

    intensity: float
    channel: str
    _channel_applied: bool = field(default=False, init=False, repr=False)

    def apply(self, image: Image) -> Image:
        object.__setattr__(self, "_channel_applied", self.channel in CHANNEL_SELECTORS)
        return increase_intensity(image, self.intensity, self.channel)

    @property
    def name(self) -> str:
        return f"intensity({self.intensity},{self.channel})"

    def get_metadata(self) -> dict[str, Any]:
        status = "applied" if self._channel_applied else "identity"
        return {"step_status": status}


@dataclass(frozen=True)
class FlipHorizontalStep(OperationStep):
    """Mirror the image left to right."""

    def apply(self, image: Image) -> Image:
        return flip_horizontal(image)

    @property
    def name(self) -> str:
        return "flip"


@dataclass(frozen=True)
class FlipVerticalStep(OperationStep):
    """Mirror the image top to bottom."""

    def apply(self, image: Image) -> Image:
        return flip_vertical(image)

    @property
    def name(self) -> str:
        return "flip-vertical"


@dataclass(frozen=True)
class Rotate180Step(OperationStep):
    """Rotate the image by 180 degrees."""

    def apply(self, image: Image) -> Image:
        return rotate_180(image)

    @property
    def name(self) -> str:
        return "rotate180"


@dataclass(frozen=True)
class EdgeDetectStep(OperationStep):
    """Replace the image with a black-and-white edge map.

    This is the only step that changes the image size: the output is one
    column and one row smaller. The input and output sizes are reported as
    metadata.

    Attributes:
        threshold: Color distance above which a pixel counts as an edge.
    """

    threshold: int
    _input_size: tuple[int, int] | None = field(default=None, init=False, repr=False)
    _output_size: tuple[int, int] | None = field(default=None, init=False, repr=False)

    def __post_init__(self):
        if isinstance(self.threshold, bool) or not isinstance(self.threshold, int):
            raise TypeError(f"threshold must be int, got {type(self.threshold).__name__}")

    def apply(self, image: Image) -> Image:
        result = edge_detect(image, self.threshold)
        object.__setattr__(self, "_input_size", image.shape)
        object.__setattr__(self, "_output_size", result.shape)
        return result

    @property
    def name(self) -> str:
        return f"edges({self.threshold})"

    def get_metadata(self) -> dict[str, Any]:
        return {
            "input_size": self._input_size,
            "output_size": self._output_size,
        }


@dataclass
class StepResult:
    """Result of applying a single step.

    Attributes:
        name: Name of the step that produced this result.
        image: Output image from the step.
        metadata: Any metadata produced by the step.
        artifact_path: Path where the image was saved (if artifact saving enabled).
    """

    name: str
    image: Image
    metadata: dict[str, Any] = field(default_factory=dict)
    artifact_path: str | None = None


@dataclass
class PipelineStepResults:
    """Results from running a pipeline.

    Attributes:
        original: The input image.
        steps: StepResult for each step, in order.
        original_artifact_path: Where the input was saved (if artifact saving enabled).
    """

    original: Image
    steps: list[StepResult] = field(default_factory=list)
    original_artifact_path: str | None = None

    @property
    def final(self) -> Image:
        """The image produced by the last step (the input if there were none)."""
        if not self.steps:
            return self.original
        return self.steps[-1].image

    def get_intermediate(self, step_name: str) -> Image | None:
        """Get the image a step produced, by its full name (e.g. "edges(50)")."""
        for step in self.steps:
            if step.name == step_name:
                return step.image
        return None

    def get_metadata(self, key: str) -> Any | None:
        """Return the first metadata value stored under key, searching steps in order."""
        for step in self.steps:
            if key in step.metadata:
                return step.metadata[key]
        return None

    @property
    def all_metadata(self) -> dict[str, Any]:
        """All step metadata merged into one dict; later steps win on conflicts."""
        result = {}
        for step in self.steps:
            result.update(step.metadata)
        return result

    @property
    def artifact_paths(self) -> dict[str, str]:
        """Map of artifact key (e.g. "01_sepia") to saved artifact path.

        Keys carry the 1-based step position, so repeated operations each
        keep their own entry.
        """
        paths = {}
        if self.original_artifact_path:
            paths["original"] = self.original_artifact_path
        for index, step in enumerate(self.steps, start=1):
            if step.artifact_path:
                paths[_artifact_key(index, step.name)] = step.artifact_path
        return paths


def _artifact_key(index: int, name: str) -> str:
    # (2, "edges(50)") -> "02_edges"
    return f"{index:02d}_{name.split('(')[0]}"


@dataclass
class Pipeline:
    """A sequence of steps applied one after another.

    The output of each step is the input of the next. All intermediate
    images are kept in the returned PipelineStepResults.

    Attributes:
        steps: OperationStep instances to apply in order.
    """

    steps: list[OperationStep]

    def run(
        self,
        image: Image,
        artifact_dir: str | None = None,
    ) -> PipelineStepResults:
        """Run the pipeline on an image.

        Args:
            image: Input image.
            artifact_dir: Optional directory to save the input and every
                          intermediate as <NN>_<step key>.ppm.

        Returns:
            PipelineStepResults with all intermediate images and metadata.
        """
        result = PipelineStepResults(original=image)

        if artifact_dir:
            original_path = str(Path(artifact_dir) / f"original{ARTIFACT_EXTENSION}")
            write_image(original_path, image)
            result.original_artifact_path = original_path

        current = image
        for index, step in enumerate(self.steps, start=1):
            output = step.apply(current)
            metadata = step.get_metadata()
            logger.debug(
                "Step %s: %dx%d -> %dx%d",
                step.name, current.width, current.height, output.width, output.height,
            )

            artifact_path = None
            if artifact_dir:
                artifact_name = f"{_artifact_key(index, step.name)}{ARTIFACT_EXTENSION}"
                artifact_path = str(Path(artifact_dir) / artifact_name)
                write_image(artifact_path, output)

            result.steps.append(
                StepResult(
                    name=step.name,
                    image=output,
                    metadata=metadata,
                    artifact_path=artifact_path,
                )
            )
            current = output

        return result

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self):
        return iter(self.steps)
