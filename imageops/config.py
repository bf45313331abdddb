"""
Configuration for operation pipelines.

A PipelineConfig names the operations to run, in order, together with the
parameters the parameterized operations need. build_pipeline() turns it
into a Pipeline of steps.
"""

import math
from dataclasses import dataclass

from config import (
    DEFAULT_CHANNEL,
    DEFAULT_EDGE_THRESHOLD,
    DEFAULT_INTENSITY,
)

# Operation names accepted in PipelineConfig.operations
OPERATION_NAMES = (
    "sepia",
    "intensity",
    "flip",
    "flip-vertical",
    "rotate180",
    "edges",
)


@dataclass(frozen=True)
class PipelineConfig:
    """Configuration for a chain of image operations.

    Attributes:
        operations: Operation names to apply in order (see OPERATION_NAMES).
                    The same name may appear more than once.
        intensity: Scaling factor used by every "intensity" operation.
        channel: Channel selector used by every "intensity" operation.
                 Unknown selectors are allowed; they make the step a no-op.
        threshold: Edge threshold used by every "edges" operation.
    """

    operations: tuple[str, ...] = ()
    intensity: float = DEFAULT_INTENSITY
    channel: str = DEFAULT_CHANNEL
    threshold: int = DEFAULT_EDGE_THRESHOLD

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ValueError: If any parameter is invalid.
        """
        unknown = [name for name in self.operations if name not in OPERATION_NAMES]
        if unknown:
            raise ValueError(
                f"Unknown operation(s): {', '.join(unknown)}. "
                f"Expected one of: {', '.join(OPERATION_NAMES)}"
            )

        if not isinstance(self.intensity, (int, float)) or isinstance(self.intensity, bool):
            raise ValueError(f"intensity must be a number, got {self.intensity!r}")
        if not math.isfinite(self.intensity):
            raise ValueError(f"intensity must be finite, got {self.intensity}")
        if self.intensity < 0:
            raise ValueError(f"intensity must be non-negative, got {self.intensity}")

        if not isinstance(self.channel, str) or len(self.channel) != 1:
            raise ValueError(f"channel must be a single character, got {self.channel!r}")

        if isinstance(self.threshold, bool) or not isinstance(self.threshold, int):
            raise ValueError(f"threshold must be an integer, got {self.threshold!r}")
