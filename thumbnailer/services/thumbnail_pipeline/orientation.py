# thumbnailer/services/thumbnail_pipeline/orientation.py
"""
Orientation Corrector

Reads the EXIF orientation tag of a decoded image and applies the matching
geometric transform so the result is upright and not mirrored. Runs before
any dimension computation, since tags 5-8 swap width and height.
"""

from typing import Dict, Optional, Tuple

from PIL import Image

from ...enums import LoggerName, LogEmoji, LogSource, Orientation
from ..logger import get_service_logger
from .utils.constants import EXIF_ORIENTATION_TAG

logger = get_service_logger(
    LoggerName.ORIENTATION, LogSource.PIPELINE, default_emoji=LogEmoji.ROTATE
)

# Steps are applied left to right. ROTATE_270 is 90° clockwise in Pillow.
ORIENTATION_TRANSFORMS: Dict[Orientation, Tuple[Image.Transpose, ...]] = {
    Orientation.TOP_LEFT: (),
    Orientation.TOP_RIGHT: (Image.Transpose.FLIP_LEFT_RIGHT,),
    Orientation.BOTTOM_RIGHT: (Image.Transpose.ROTATE_180,),
    Orientation.BOTTOM_LEFT: (
        Image.Transpose.ROTATE_180,
        Image.Transpose.FLIP_LEFT_RIGHT,
    ),
    Orientation.LEFT_TOP: (
        Image.Transpose.ROTATE_270,
        Image.Transpose.FLIP_LEFT_RIGHT,
    ),
    Orientation.RIGHT_TOP: (Image.Transpose.ROTATE_270,),
    Orientation.RIGHT_BOTTOM: (
        Image.Transpose.ROTATE_90,
        Image.Transpose.FLIP_LEFT_RIGHT,
    ),
    Orientation.LEFT_BOTTOM: (Image.Transpose.ROTATE_90,),
}


def read_orientation(image: Image.Image) -> Optional[Orientation]:
    """
    Read the EXIF orientation tag of an image.

    Args:
        image: An image opened by Pillow (metadata still attached)

    Returns:
        The orientation, or None when the tag is absent or unreadable
    """
    try:
        value = image.getexif().get(EXIF_ORIENTATION_TAG)
    except Exception as e:
        # Unreadable EXIF is treated as absent
        logger.debug(f"Could not read EXIF data: {e}")
        return None

    if value is None:
        return None

    try:
        return Orientation(int(value))
    except (TypeError, ValueError):
        logger.debug(f"Ignoring out-of-range orientation tag: {value!r}")
        return None


def correct_orientation(
    image: Image.Image, orientation: Optional[Orientation], enabled: bool = True
) -> Image.Image:
    """
    Apply the transform for an orientation tag.

    Args:
        image: Decoded source image
        orientation: Tag value read from the source, or None
        enabled: Whether orientation correction is switched on

    Returns:
        The upright image; the input itself when nothing needs to change
    """
    if not enabled or orientation is None:
        return image

    steps = ORIENTATION_TRANSFORMS.get(orientation, ())
    if not steps:
        return image

    corrected = image
    for step in steps:
        corrected = corrected.transpose(step)

    logger.debug(
        f"Corrected orientation {orientation.name}: "
        f"{image.size[0]}x{image.size[1]} -> {corrected.size[0]}x{corrected.size[1]}"
    )
    return corrected
