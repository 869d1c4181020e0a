# thumbnailer/services/thumbnail_pipeline/makers.py
"""
Thumbnail Maker

Turns an orientation-corrected source image into a thumbnail: decides the
working mode, computes the target dimension from the parameter, asks the
resizer factory for a resizer once and runs it.
"""

from typing import Tuple

from PIL import Image

from ...enums import LoggerName, LogEmoji, LogSource
from ..logger import get_service_logger
from .models import Dimension, ThumbnailParameter
from .utils.thumbnail_utils import (
    calculate_scaled_dimensions,
    calculate_thumbnail_dimensions,
    working_mode,
)

logger = get_service_logger(
    LoggerName.RESIZER, LogSource.PIPELINE, default_emoji=LogEmoji.RESIZE
)


def compute_thumbnail_size(
    source_size: Tuple[int, int], parameter: ThumbnailParameter
) -> Dimension:
    """
    Compute the final thumbnail dimension for a source.

    Args:
        source_size: (width, height) of the orientation-corrected source
        parameter: Resolved thumbnail parameter

    Returns:
        Dimension of the thumbnail, at least 1x1
    """
    if parameter.uses_scale:
        return Dimension(
            *calculate_scaled_dimensions(
                source_size, parameter.width_scale, parameter.height_scale
            )
        )

    return Dimension(
        *calculate_thumbnail_dimensions(
            source_size,
            parameter.size,
            keep_aspect_ratio=parameter.keep_aspect_ratio,
            fit_within_dimensions=parameter.fit_within_dimensions,
        )
    )


def make_thumbnail(image: Image.Image, parameter: ThumbnailParameter) -> Image.Image:
    """
    Resize a source image according to a parameter.

    The resizer factory is consulted exactly once, with the source dimension
    and the final thumbnail dimension.

    Args:
        image: Orientation-corrected source image
        parameter: Resolved thumbnail parameter

    Returns:
        The thumbnail image
    """
    mode = working_mode(image, parameter.image_type)
    if image.mode != mode:
        image = image.convert(mode)

    source_size = Dimension(*image.size)
    thumbnail_size = compute_thumbnail_size(source_size, parameter)

    resizer = parameter.resizer_factory.get_resizer(source_size, thumbnail_size)
    logger.debug(
        f"Resizing {source_size.width}x{source_size.height} -> "
        f"{thumbnail_size.width}x{thumbnail_size.height} with {resizer!r}"
    )
    return resizer.resize(image, thumbnail_size)
