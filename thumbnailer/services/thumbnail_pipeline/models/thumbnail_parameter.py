# thumbnailer/services/thumbnail_pipeline/models/thumbnail_parameter.py
"""
Thumbnail Parameter Model

Immutable, validated description of how every thumbnail in one batch is
produced. Instances are built once per terminal call and shared read-only by
all items of the batch.
"""

import math
from typing import NamedTuple, Optional, Union

from PIL import ImageMode
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ....enums import FormatSelector
from ....exceptions import (
    InvalidConfigurationError,
    InvalidDimensionError,
    UnsupportedFormatError,
)
from ..formats import (
    is_supported_output_format,
    is_supported_output_format_type,
    normalize_format_name,
)
from ..resizers import DEFAULT_RESIZER_FACTORY, ResizerFactory


class Dimension(NamedTuple):
    """Width and height in pixels."""

    width: int
    height: int


class ThumbnailParameter(BaseModel):
    """Validated thumbnail settings; exactly one of size or scale is set."""

    size: Optional[Dimension] = Field(
        default=None, description="Bounding box of the thumbnail"
    )
    width_scale: Optional[float] = Field(
        default=None, description="Horizontal scaling factor"
    )
    height_scale: Optional[float] = Field(
        default=None, description="Vertical scaling factor"
    )
    keep_aspect_ratio: bool = Field(
        default=True, description="Scale uniformly instead of stretching"
    )
    fit_within_dimensions: bool = Field(
        default=True,
        description="Fit inside the bounding box (True) or cover it (False)",
    )
    output_format: Union[FormatSelector, str] = Field(
        default=FormatSelector.DETERMINE,
        description="Concrete format name or a FormatSelector",
    )
    output_format_type: Optional[str] = Field(
        default=None, description="Format subtype, None for the codec default"
    )
    output_quality: Optional[float] = Field(
        default=None, description="Compression quality between 0.0 and 1.0"
    )
    image_type: Optional[str] = Field(
        default=None, description="Pillow mode of the working image"
    )
    resizer_factory: ResizerFactory = Field(default=DEFAULT_RESIZER_FACTORY)
    allow_overwrite: bool = True
    use_exif_orientation: bool = True

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @field_validator("output_format", mode="before")
    @classmethod
    def validate_output_format(cls, v) -> Union[FormatSelector, str]:
        """Map selectors to FormatSelector and canonicalize concrete names"""
        if v is None:
            return FormatSelector.DETERMINE
        if isinstance(v, FormatSelector):
            return v
        if v in (FormatSelector.ORIGINAL.value, FormatSelector.DETERMINE.value):
            return FormatSelector(v)
        if not is_supported_output_format(v):
            raise UnsupportedFormatError(
                str(v), f"Specified format is not supported: {v}"
            )
        return normalize_format_name(v)

    @field_validator("image_type")
    @classmethod
    def validate_image_type(cls, v: Optional[str]) -> Optional[str]:
        """Validate image type is a Pillow mode"""
        if v is None:
            return v
        try:
            ImageMode.getmode(v)
        except KeyError as e:
            raise InvalidConfigurationError(f"Unknown image type: {v}") from e
        return v

    @model_validator(mode="after")
    def validate_sizing(self) -> "ThumbnailParameter":
        """Validate size/scale exclusivity, bounds, format type and quality"""
        has_size = self.size is not None
        has_scale = self.width_scale is not None or self.height_scale is not None

        if has_size and has_scale:
            raise InvalidConfigurationError(
                "Cannot specify both the size and the scaling factor."
            )
        if not has_size and not has_scale:
            raise InvalidConfigurationError(
                "Neither the size nor the scaling factor has been specified."
            )

        if has_size:
            validate_dimensions(self.size.width, self.size.height)
        else:
            if self.width_scale is None or self.height_scale is None:
                raise InvalidConfigurationError(
                    "Both the width and height scaling factors must be specified."
                )
            validate_scale(self.width_scale)
            validate_scale(self.height_scale)

        if self.output_quality is not None and not 0.0 <= self.output_quality <= 1.0:
            raise InvalidConfigurationError(
                "The output quality must be between 0.0 and 1.0, inclusive."
            )

        if self.output_format_type is not None:
            if isinstance(self.output_format, FormatSelector):
                raise InvalidConfigurationError(
                    "Cannot set the format type if the output format is not specified."
                )
            if not is_supported_output_format_type(
                self.output_format, self.output_format_type
            ):
                raise UnsupportedFormatError(
                    self.output_format,
                    f"Format type {self.output_format_type} is not supported "
                    f"for {self.output_format}.",
                )

        return self

    @property
    def uses_scale(self) -> bool:
        """Whether the thumbnail size is derived from scaling factors."""
        return self.size is None


def validate_dimensions(width: int, height: int) -> None:
    """
    Validate thumbnail dimensions.

    Raises:
        InvalidDimensionError: Either dimension is zero or negative
    """
    if width <= 0 and height <= 0:
        raise InvalidDimensionError(
            "Destination image dimensions must not be less than or equal to 0 pixels."
        )
    if width <= 0:
        raise InvalidDimensionError(
            "Destination image width must not be less than or equal to 0 pixels."
        )
    if height <= 0:
        raise InvalidDimensionError(
            "Destination image height must not be less than or equal to 0 pixels."
        )


def validate_scale(factor: float) -> None:
    """
    Validate a scaling factor.

    Raises:
        InvalidConfigurationError: The factor is NaN, infinite, zero or negative
    """
    if math.isnan(factor):
        raise InvalidConfigurationError("The scaling factor is not a number.")
    if math.isinf(factor):
        raise InvalidConfigurationError("The scaling factor cannot be infinity.")
    if factor <= 0:
        raise InvalidConfigurationError("The scaling factor is equal to or less than 0.")
