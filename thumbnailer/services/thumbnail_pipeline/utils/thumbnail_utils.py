# thumbnailer/services/thumbnail_pipeline/utils/thumbnail_utils.py
"""
Thumbnail Utility Functions
"""

import math
from os import PathLike
from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import Image

from .constants import WORKING_MODE_CONVERSIONS


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with halves rounded up (2.5 -> 3).

    Unlike round(), the result does not depend on parity.
    """
    return int(math.floor(value + 0.5))


def calculate_thumbnail_dimensions(
    source_size: Tuple[int, int],
    target_size: Tuple[int, int],
    keep_aspect_ratio: bool = True,
    fit_within_dimensions: bool = True,
) -> Tuple[int, int]:
    """
    Calculate thumbnail dimensions for a bounding box.

    Args:
        source_size: (width, height) of source image
        target_size: (width, height) of the requested box
        keep_aspect_ratio: Whether to scale uniformly
        fit_within_dimensions: Fit inside the box (True) or cover it (False)

    Returns:
        (width, height) of calculated thumbnail, never smaller than 1×1
    """
    source_width, source_height = source_size
    target_width, target_height = target_size

    new_width, new_height = target_width, target_height

    if keep_aspect_ratio:
        source_ratio = source_width / source_height
        target_ratio = target_width / target_height

        if source_ratio != target_ratio:
            if fit_within_dimensions:
                if source_ratio > target_ratio:
                    # Source is wider - fit to width
                    new_width = target_width
                    new_height = round_half_up(target_width / source_ratio)
                else:
                    # Source is taller - fit to height
                    new_width = round_half_up(target_height * source_ratio)
                    new_height = target_height
            else:
                if source_ratio > target_ratio:
                    new_width = round_half_up(target_height * source_ratio)
                    new_height = target_height
                else:
                    new_width = target_width
                    new_height = round_half_up(target_width / source_ratio)

    return (max(1, new_width), max(1, new_height))


def calculate_scaled_dimensions(
    source_size: Tuple[int, int], width_factor: float, height_factor: float
) -> Tuple[int, int]:
    """
    Calculate thumbnail dimensions from per-axis scaling factors.

    Args:
        source_size: (width, height) of source image
        width_factor: Horizontal scaling factor
        height_factor: Vertical scaling factor

    Returns:
        (width, height) rounded half up, never smaller than 1×1
    """
    source_width, source_height = source_size
    width = round_half_up(source_width * width_factor)
    height = round_half_up(source_height * height_factor)
    return (max(1, width), max(1, height))


def get_file_extension(path: Union[str, PathLike]) -> Optional[str]:
    """
    Return the extension of a file name without the dot.

    Names without a dot, or ending in a dot, have no extension.
    """
    name = Path(path).name
    if "." in name and not name.endswith("."):
        return name.rsplit(".", 1)[1]
    return None


def working_mode(image: Image.Image, image_type: Optional[str] = None) -> str:
    """
    Decide the Pillow mode used for resampling.

    Args:
        image: The (orientation-corrected) source image
        image_type: Explicit mode requested on the parameter, if any

    Returns:
        Pillow mode name that keeps the source's colour and alpha model
    """
    if image_type is not None:
        return image_type

    if image.mode == "P":
        return "RGBA" if "transparency" in image.info else "RGB"

    return WORKING_MODE_CONVERSIONS.get(image.mode, image.mode)
