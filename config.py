"""Central configuration for the image operations.

All tunable parameters and fixed formula constants are defined here with
descriptive names. The CLI and PipelineConfig take their defaults from
these values.
"""

# =============================================================================
# COLOR DEPTH
# =============================================================================

# Maximum channel value for 8-bit-per-channel RGB images
CHANNEL_DEPTH = 255

# Smallest depth an image may declare (PPM maxval must be positive)
MIN_CHANNEL_DEPTH = 1

# Number of color channels per pixel (no alpha)
CHANNEL_COUNT = 3

# =============================================================================
# SEPIA
# =============================================================================

# Rows produce new red, green, blue; columns weight old red, green, blue
SEPIA_MATRIX = (
    (0.393, 0.769, 0.189),
    (0.349, 0.686, 0.168),
    (0.272, 0.534, 0.131),
)

# =============================================================================
# CHANNEL INTENSITY
# =============================================================================

# Single-character selectors and the channel index they address
CHANNEL_SELECTORS = {
    "r": 0,
    "g": 1,
    "b": 2,
}

DEFAULT_INTENSITY = 1.0
DEFAULT_CHANNEL = "r"

# =============================================================================
# EDGE DETECTION
# =============================================================================

# Color distance above which a pixel counts as an edge
DEFAULT_EDGE_THRESHOLD = 50

# Expected open range for thresholds (0 < threshold < 255).
# Values outside still run, they just saturate to all-edge or no-edge.
MIN_EDGE_THRESHOLD = 0
MAX_EDGE_THRESHOLD = 255

# =============================================================================
# FILE IO
# =============================================================================

# Extensions handled by the plain-text PPM codec; anything else goes to OpenCV
PPM_EXTENSIONS = (".ppm", ".pnm")

# Extension used when saving pipeline intermediates
ARTIFACT_EXTENSION = ".ppm"
