"""
Thumbnail Pipeline Utilities

Constants and pure helper functions shared by the pipeline components.
"""

from .constants import (
    ENCODER_MODES,
    EXIF_ORIENTATION_TAG,
    FORMAT_ALIASES,
    FORMAT_TYPES,
    PREFERRED_EXTENSIONS,
    PROGRESSIVE_THRESHOLD,
    UNBOUNDED_DIMENSION,
)
from .thumbnail_utils import (
    calculate_scaled_dimensions,
    calculate_thumbnail_dimensions,
    get_file_extension,
    round_half_up,
    working_mode,
)

__all__ = [
    # Constants
    "ENCODER_MODES",
    "EXIF_ORIENTATION_TAG",
    "FORMAT_ALIASES",
    "FORMAT_TYPES",
    "PREFERRED_EXTENSIONS",
    "PROGRESSIVE_THRESHOLD",
    "UNBOUNDED_DIMENSION",
    # Functions
    "calculate_scaled_dimensions",
    "calculate_thumbnail_dimensions",
    "get_file_extension",
    "round_half_up",
    "working_mode",
]
