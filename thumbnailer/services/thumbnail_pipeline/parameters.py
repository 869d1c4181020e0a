# thumbnailer/services/thumbnail_pipeline/parameters.py
"""
Parameter Resolver

ThumbnailParameterBuilder collects raw sizing, format and behaviour options
and resolves them into one immutable ThumbnailParameter. Every option is
tracked in a status map so that conflicting or repeated options fail at the
call that introduces the conflict, before any image is touched.

Status rules:
- size and scale start NOT_READY; one of them must be given before build()
- setting an option marks it ALREADY_SET; setting it again fails
- options excluded by another option are marked CANNOT_SET
"""

from typing import Dict, Optional, Union

from ...enums import (
    BuilderProperty,
    FormatSelector,
    LoggerName,
    LogEmoji,
    LogSource,
    PropertyStatus,
    ScalingMode,
)
from ...exceptions import InvalidConfigurationError, UnsupportedFormatError
from ..logger import get_service_logger
from .formats import (
    is_supported_output_format,
    is_supported_output_format_type,
    normalize_format_name,
)
from .models import (
    Dimension,
    ThumbnailParameter,
    validate_dimensions,
    validate_scale,
)
from .resizers import (
    DEFAULT_RESIZER_FACTORY,
    FixedResizerFactory,
    Resizer,
    ResizerFactory,
    resizer_for_scaling_mode,
)
from .utils.constants import UNBOUNDED_DIMENSION

logger = get_service_logger(
    LoggerName.PARAMETER_RESOLVER, LogSource.PIPELINE, default_emoji=LogEmoji.SYSTEM
)


class ThumbnailParameterBuilder:
    """Staged builder for ThumbnailParameter."""

    def __init__(self):
        self._status: Dict[BuilderProperty, PropertyStatus] = {
            prop: PropertyStatus.OPTIONAL for prop in BuilderProperty
        }
        self._status[BuilderProperty.SIZE] = PropertyStatus.NOT_READY
        self._status[BuilderProperty.SCALE] = PropertyStatus.NOT_READY

        self._width: Optional[int] = None
        self._height: Optional[int] = None
        self._width_scale: Optional[float] = None
        self._height_scale: Optional[float] = None
        self._keep_aspect_ratio = True
        self._fit_within_dimensions = True
        self._output_format: Union[FormatSelector, str] = FormatSelector.DETERMINE
        self._output_format_type: Optional[str] = None
        self._output_quality: Optional[float] = None
        self._image_type: Optional[str] = None
        self._resizer_factory: ResizerFactory = DEFAULT_RESIZER_FACTORY
        self._allow_overwrite = True
        self._use_exif_orientation = True

    # -------------------------------------------------------------------------
    # Status map
    # -------------------------------------------------------------------------

    def _update_status(self, prop: BuilderProperty, new_status: PropertyStatus) -> None:
        current = self._status[prop]
        if current == PropertyStatus.ALREADY_SET:
            raise InvalidConfigurationError(f"{prop.value} is already set.")
        # CANNOT_SET may be applied repeatedly
        if new_status != PropertyStatus.CANNOT_SET and current == PropertyStatus.CANNOT_SET:
            raise InvalidConfigurationError(f"{prop.value} cannot be set.")
        self._status[prop] = new_status

    def _exclude(self, prop: BuilderProperty) -> None:
        if self._status[prop] != PropertyStatus.CANNOT_SET:
            self._update_status(prop, PropertyStatus.CANNOT_SET)

    def status_of(self, prop: BuilderProperty) -> PropertyStatus:
        """Current status of an option."""
        return self._status[prop]

    def _check_readiness(self) -> None:
        not_ready = [
            prop for prop, status in self._status.items()
            if status == PropertyStatus.NOT_READY
        ]
        if {BuilderProperty.SIZE, BuilderProperty.SCALE} <= set(not_ready):
            raise InvalidConfigurationError(
                "Neither the size nor the scaling factor has been specified."
            )
        if not_ready:
            raise InvalidConfigurationError(f"{not_ready[0].value} is not set.")

    # -------------------------------------------------------------------------
    # Sizing
    # -------------------------------------------------------------------------

    def size(self, width: int, height: int) -> "ThumbnailParameterBuilder":
        """Bounding box of the thumbnail; the aspect ratio is kept by default."""
        self._update_status(BuilderProperty.SIZE, PropertyStatus.ALREADY_SET)
        self._update_status(BuilderProperty.SCALE, PropertyStatus.CANNOT_SET)

        validate_dimensions(width, height)
        self._width = width
        self._height = height
        return self

    def width(self, width: int) -> "ThumbnailParameterBuilder":
        """Bound the width only; the height follows the aspect ratio."""
        self._exclude(BuilderProperty.SIZE)
        self._exclude(BuilderProperty.SCALE)
        self._update_status(BuilderProperty.WIDTH, PropertyStatus.ALREADY_SET)

        validate_dimensions(width, UNBOUNDED_DIMENSION)
        self._width = width
        return self

    def height(self, height: int) -> "ThumbnailParameterBuilder":
        """Bound the height only; the width follows the aspect ratio."""
        self._exclude(BuilderProperty.SIZE)
        self._exclude(BuilderProperty.SCALE)
        self._update_status(BuilderProperty.HEIGHT, PropertyStatus.ALREADY_SET)

        validate_dimensions(UNBOUNDED_DIMENSION, height)
        self._height = height
        return self

    def force_size(self, width: int, height: int) -> "ThumbnailParameterBuilder":
        """Exact thumbnail size, ignoring the source aspect ratio."""
        self._update_status(BuilderProperty.SIZE, PropertyStatus.ALREADY_SET)
        self._update_status(BuilderProperty.KEEP_ASPECT_RATIO, PropertyStatus.ALREADY_SET)
        self._update_status(BuilderProperty.SCALE, PropertyStatus.CANNOT_SET)

        validate_dimensions(width, height)
        self._width = width
        self._height = height
        self._keep_aspect_ratio = False
        return self

    def scale(
        self, factor: float, height_factor: Optional[float] = None
    ) -> "ThumbnailParameterBuilder":
        """
        Scale the source by a factor.

        Args:
            factor: Scaling factor for both axes, or the width when
                height_factor is given
            height_factor: Separate scaling factor for the height
        """
        self._update_status(BuilderProperty.SCALE, PropertyStatus.ALREADY_SET)
        self._update_status(BuilderProperty.SIZE, PropertyStatus.CANNOT_SET)
        self._update_status(BuilderProperty.KEEP_ASPECT_RATIO, PropertyStatus.CANNOT_SET)
        self._update_status(
            BuilderProperty.FIT_WITHIN_DIMENSIONS, PropertyStatus.CANNOT_SET
        )

        if height_factor is None:
            height_factor = factor
        validate_scale(factor)
        validate_scale(height_factor)

        self._width_scale = float(factor)
        self._height_scale = float(height_factor)
        return self

    def keep_aspect_ratio(self, keep: bool) -> "ThumbnailParameterBuilder":
        """Whether the size is a bounding box (True) or an exact size (False)."""
        if self._status[BuilderProperty.SCALE] == PropertyStatus.ALREADY_SET:
            raise InvalidConfigurationError(
                "Cannot specify whether to keep the aspect ratio if the scaling "
                "factor has already been specified."
            )
        if self._status[BuilderProperty.SIZE] == PropertyStatus.NOT_READY:
            raise InvalidConfigurationError(
                "Cannot specify whether to keep the aspect ratio unless the size "
                "parameter has already been specified."
            )
        if self._has_single_bound() and not keep:
            raise InvalidConfigurationError(
                "The aspect ratio must be preserved when the width and/or height "
                "parameter has already been specified."
            )

        self._update_status(BuilderProperty.KEEP_ASPECT_RATIO, PropertyStatus.ALREADY_SET)
        self._keep_aspect_ratio = bool(keep)
        return self

    def fit_within_dimensions(self, fit: bool) -> "ThumbnailParameterBuilder":
        """Fit inside the bounding box (True) or cover it (False)."""
        if self._status[BuilderProperty.SIZE] != PropertyStatus.ALREADY_SET:
            raise InvalidConfigurationError(
                "Cannot specify whether to fit within the dimensions unless the "
                "size parameter has already been specified."
            )

        self._update_status(
            BuilderProperty.FIT_WITHIN_DIMENSIONS, PropertyStatus.ALREADY_SET
        )
        self._fit_within_dimensions = bool(fit)
        return self

    def _has_single_bound(self) -> bool:
        return (
            self._status[BuilderProperty.WIDTH] == PropertyStatus.ALREADY_SET
            or self._status[BuilderProperty.HEIGHT] == PropertyStatus.ALREADY_SET
        )

    # -------------------------------------------------------------------------
    # Output format
    # -------------------------------------------------------------------------

    def output_format(self, format_name: str) -> "ThumbnailParameterBuilder":
        """Write thumbnails in a specific format, e.g. "png" or "JPEG"."""
        if isinstance(format_name, FormatSelector):
            return self._set_output_format(format_name)
        if not is_supported_output_format(format_name):
            raise UnsupportedFormatError(
                str(format_name), f"Specified format is not supported: {format_name}"
            )
        return self._set_output_format(normalize_format_name(format_name))

    def use_original_format(self) -> "ThumbnailParameterBuilder":
        """Write thumbnails in the format the source was decoded as."""
        return self._set_output_format(FormatSelector.ORIGINAL)

    def determine_output_format(self) -> "ThumbnailParameterBuilder":
        """Let the destination decide the format (the default)."""
        return self._set_output_format(FormatSelector.DETERMINE)

    def _set_output_format(
        self, format_name: Union[FormatSelector, str]
    ) -> "ThumbnailParameterBuilder":
        self._update_status(BuilderProperty.OUTPUT_FORMAT, PropertyStatus.ALREADY_SET)
        self._output_format = format_name
        return self

    def output_format_type(self, format_type: str) -> "ThumbnailParameterBuilder":
        """Format subtype, e.g. "progressive" for JPEG or "lossless" for WEBP."""
        if isinstance(self._output_format, FormatSelector):
            raise InvalidConfigurationError(
                "Cannot set the format type if a specific output format has not "
                "been specified."
            )
        if not is_supported_output_format_type(self._output_format, format_type):
            raise UnsupportedFormatError(
                self._output_format,
                f"Specified format type ({format_type}) is not supported for the "
                f"format: {self._output_format}",
            )

        self._update_status(BuilderProperty.OUTPUT_FORMAT_TYPE, PropertyStatus.ALREADY_SET)
        self._output_format_type = format_type
        return self

    def output_quality(self, quality: float) -> "ThumbnailParameterBuilder":
        """Compression quality between 0.0 and 1.0."""
        if not 0.0 <= quality <= 1.0:
            raise InvalidConfigurationError(
                "The quality setting must be in the range 0.0 and 1.0, inclusive."
            )
        self._update_status(BuilderProperty.OUTPUT_QUALITY, PropertyStatus.ALREADY_SET)
        self._output_quality = float(quality)
        return self

    # -------------------------------------------------------------------------
    # Resizing
    # -------------------------------------------------------------------------

    def image_type(self, mode: str) -> "ThumbnailParameterBuilder":
        """Pillow mode of the working image, e.g. "RGB" or "L"."""
        self._update_status(BuilderProperty.IMAGE_TYPE, PropertyStatus.ALREADY_SET)
        self._image_type = mode
        return self

    def scaling_mode(self, mode: ScalingMode) -> "ThumbnailParameterBuilder":
        """Use one resampling algorithm for every thumbnail."""
        mode = ScalingMode(mode)
        self._update_status(BuilderProperty.SCALING_MODE, PropertyStatus.ALREADY_SET)
        self._update_status(BuilderProperty.RESIZER, PropertyStatus.CANNOT_SET)
        self._update_status(BuilderProperty.RESIZER_FACTORY, PropertyStatus.CANNOT_SET)
        self._resizer_factory = FixedResizerFactory(resizer_for_scaling_mode(mode))
        return self

    def resizer(self, resizer: Resizer) -> "ThumbnailParameterBuilder":
        """Use a specific resizer for every thumbnail."""
        if resizer is None:
            raise TypeError("Resizer cannot be None.")
        self._update_status(BuilderProperty.RESIZER, PropertyStatus.ALREADY_SET)
        self._update_status(BuilderProperty.RESIZER_FACTORY, PropertyStatus.CANNOT_SET)
        self._update_status(BuilderProperty.SCALING_MODE, PropertyStatus.CANNOT_SET)
        self._resizer_factory = FixedResizerFactory(resizer)
        return self

    def resizer_factory(self, factory: ResizerFactory) -> "ThumbnailParameterBuilder":
        """Choose the resizer per image with a custom factory."""
        if factory is None:
            raise TypeError("ResizerFactory cannot be None.")
        self._update_status(BuilderProperty.RESIZER_FACTORY, PropertyStatus.ALREADY_SET)
        self._update_status(BuilderProperty.RESIZER, PropertyStatus.CANNOT_SET)
        self._update_status(BuilderProperty.SCALING_MODE, PropertyStatus.CANNOT_SET)
        self._resizer_factory = factory
        return self

    # -------------------------------------------------------------------------
    # Behaviour
    # -------------------------------------------------------------------------

    def allow_overwrite(self, allow: bool) -> "ThumbnailParameterBuilder":
        """Whether existing destination files may be replaced."""
        self._update_status(BuilderProperty.ALLOW_OVERWRITE, PropertyStatus.ALREADY_SET)
        self._allow_overwrite = bool(allow)
        return self

    def use_exif_orientation(self, use: bool) -> "ThumbnailParameterBuilder":
        """Whether the EXIF orientation tag is honoured."""
        self._update_status(
            BuilderProperty.USE_EXIF_ORIENTATION, PropertyStatus.ALREADY_SET
        )
        self._use_exif_orientation = bool(use)
        return self

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def build(self) -> ThumbnailParameter:
        """
        Resolve the collected options.

        Returns:
            Immutable ThumbnailParameter

        Raises:
            InvalidConfigurationError: Neither size nor scale was given, or the
                options are invalid together
            UnsupportedFormatError: The format/format type cannot be written
        """
        self._check_readiness()

        size = None
        if self._width_scale is None:
            size = Dimension(
                self._width if self._width is not None else UNBOUNDED_DIMENSION,
                self._height if self._height is not None else UNBOUNDED_DIMENSION,
            )

        parameter = ThumbnailParameter(
            size=size,
            width_scale=self._width_scale,
            height_scale=self._height_scale,
            keep_aspect_ratio=self._keep_aspect_ratio,
            fit_within_dimensions=self._fit_within_dimensions,
            output_format=self._output_format,
            output_format_type=self._output_format_type,
            output_quality=self._output_quality,
            image_type=self._image_type,
            resizer_factory=self._resizer_factory,
            allow_overwrite=self._allow_overwrite,
            use_exif_orientation=self._use_exif_orientation,
        )
        logger.debug(f"Resolved thumbnail parameter: {parameter!r}")
        return parameter
