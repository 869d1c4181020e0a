# thumbnailer/services/thumbnail_pipeline/models/__init__.py
"""
Thumbnail Pipeline Models

Validated parameter model and typed decode results.
"""

from .decoded_image import DecodedImage
from .thumbnail_parameter import (
    Dimension,
    ThumbnailParameter,
    validate_dimensions,
    validate_scale,
)

__all__ = [
    "DecodedImage",
    "Dimension",
    "ThumbnailParameter",
    "validate_dimensions",
    "validate_scale",
]
