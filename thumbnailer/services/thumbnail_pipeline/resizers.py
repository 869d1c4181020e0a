# thumbnailer/services/thumbnail_pipeline/resizers.py
"""
Resizer Components

Resampling strategies and the factories that pick one for a given
(source size, thumbnail size) pair. Every resizer keeps the Pillow mode of
the image it is given, so alpha survives resizing.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from PIL import Image

from ...enums import LoggerName, LogEmoji, LogSource, ScalingMode
from ..logger import get_service_logger
from .utils.constants import PROGRESSIVE_THRESHOLD

logger = get_service_logger(
    LoggerName.RESIZER, LogSource.PIPELINE, default_emoji=LogEmoji.RESIZE
)

Size = Tuple[int, int]


class Resizer(ABC):
    """Resamples an image to an exact size."""

    @abstractmethod
    def resize(self, image: Image.Image, size: Size) -> Image.Image:
        """
        Resize an image.

        Args:
            image: Source image in its working mode
            size: (width, height) of the result

        Returns:
            A new image of exactly ``size`` in the same mode
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class NullResizer(Resizer):
    """
    Copies the source without resampling.

    Used when source and thumbnail sizes are equal; for any other size the
    source is drawn at the origin and clipped.
    """

    def resize(self, image: Image.Image, size: Size) -> Image.Image:
        if image.size == tuple(size):
            return image.copy()

        result = Image.new(image.mode, size)
        result.paste(image, (0, 0))
        return result


class FilterResizer(Resizer):
    """Single-pass resize with one Pillow resampling filter."""

    resample: Image.Resampling = Image.Resampling.BILINEAR

    def resize(self, image: Image.Image, size: Size) -> Image.Image:
        return image.resize(tuple(size), self.resample)


class BilinearResizer(FilterResizer):
    resample = Image.Resampling.BILINEAR


class BicubicResizer(FilterResizer):
    resample = Image.Resampling.BICUBIC


class LanczosResizer(FilterResizer):
    resample = Image.Resampling.LANCZOS


class ProgressiveBilinearResizer(Resizer):
    """
    Multi-step bilinear downscaling.

    Each intermediate step halves the image until the remaining reduction is
    below 2x, then a final bilinear step produces the exact size. Reductions
    of 2x or less are done in one step.
    """

    def resize(self, image: Image.Image, size: Size) -> Image.Image:
        target_width, target_height = size
        current_width, current_height = image.size

        if (
            target_width * PROGRESSIVE_THRESHOLD >= current_width
            and target_height * PROGRESSIVE_THRESHOLD >= current_height
        ):
            return image.resize((target_width, target_height), Image.Resampling.BILINEAR)

        # First step lands on target * 2^n just below the source size
        start_width, start_height = target_width, target_height
        while start_width < current_width and start_height < current_height:
            start_width *= 2
            start_height *= 2

        current_width = max(start_width // 2, target_width)
        current_height = max(start_height // 2, target_height)
        working = image.resize((current_width, current_height), Image.Resampling.BILINEAR)
        steps = 1

        while (
            current_width >= target_width * 2 and current_height >= target_height * 2
        ):
            current_width = max(current_width // 2, target_width)
            current_height = max(current_height // 2, target_height)
            working = working.resize(
                (current_width, current_height), Image.Resampling.BILINEAR
            )
            steps += 1

        if working.size != (target_width, target_height):
            working = working.resize(
                (target_width, target_height), Image.Resampling.BILINEAR
            )
            steps += 1

        logger.debug(
            f"Progressive resize {image.size[0]}x{image.size[1]} -> "
            f"{target_width}x{target_height} in {steps} steps"
        )
        return working


class Resizers:
    """Shared resizer instances."""

    NULL: Resizer = NullResizer()
    BILINEAR: Resizer = BilinearResizer()
    BICUBIC: Resizer = BicubicResizer()
    LANCZOS: Resizer = LanczosResizer()
    PROGRESSIVE: Resizer = ProgressiveBilinearResizer()


SCALING_MODE_RESIZERS = {
    ScalingMode.BILINEAR: Resizers.BILINEAR,
    ScalingMode.BICUBIC: Resizers.BICUBIC,
    ScalingMode.LANCZOS: Resizers.LANCZOS,
    ScalingMode.PROGRESSIVE_BILINEAR: Resizers.PROGRESSIVE,
}


def resizer_for_scaling_mode(mode: ScalingMode) -> Resizer:
    """Return the resizer implementing a scaling mode."""
    return SCALING_MODE_RESIZERS[ScalingMode(mode)]


class ResizerFactory(ABC):
    """Chooses the resizer for one resize operation."""

    @abstractmethod
    def get_resizer(
        self,
        original_size: Optional[Size] = None,
        thumbnail_size: Optional[Size] = None,
    ) -> Resizer:
        """
        Return the resizer to use.

        Args:
            original_size: (width, height) of the orientation-corrected source
            thumbnail_size: (width, height) of the final thumbnail

        Returns:
            Resizer instance; the default one when sizes are not given
        """


class DefaultResizerFactory(ResizerFactory):
    """
    Default resizer selection policy.

    - smaller on both axes: progressive bilinear below half size, else bilinear
    - larger on both axes: bicubic
    - same size: null resizer
    - anything else: progressive bilinear
    """

    def get_resizer(
        self,
        original_size: Optional[Size] = None,
        thumbnail_size: Optional[Size] = None,
    ) -> Resizer:
        if original_size is None or thumbnail_size is None:
            return Resizers.PROGRESSIVE

        orig_width, orig_height = original_size
        thumb_width, thumb_height = thumbnail_size

        if thumb_width < orig_width and thumb_height < orig_height:
            if (
                thumb_width < orig_width / PROGRESSIVE_THRESHOLD
                and thumb_height < orig_height / PROGRESSIVE_THRESHOLD
            ):
                return Resizers.PROGRESSIVE
            return Resizers.BILINEAR

        if thumb_width > orig_width and thumb_height > orig_height:
            return Resizers.BICUBIC

        if thumb_width == orig_width and thumb_height == orig_height:
            return Resizers.NULL

        return Resizers.PROGRESSIVE

    def __repr__(self) -> str:
        return "DefaultResizerFactory()"


class FixedResizerFactory(ResizerFactory):
    """Always returns the same resizer."""

    def __init__(self, resizer: Resizer):
        if resizer is None:
            raise TypeError("Resizer cannot be None.")
        self.resizer = resizer

    def get_resizer(
        self,
        original_size: Optional[Size] = None,
        thumbnail_size: Optional[Size] = None,
    ) -> Resizer:
        return self.resizer

    def __repr__(self) -> str:
        return f"FixedResizerFactory({self.resizer!r})"


DEFAULT_RESIZER_FACTORY = DefaultResizerFactory()
