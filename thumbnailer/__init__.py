# thumbnailer/__init__.py
"""
thumbnailer - thumbnail generation for files, URLs, streams and PIL images.

Logging is disabled until the application calls configure_logging().
"""

from loguru import logger

from .config import Settings, get_settings
from .enums import FormatSelector, Orientation, ScalingMode
from .exceptions import (
    DestinationExhaustedError,
    DestinationExistsError,
    ImageIOError,
    ImageReadError,
    ImageWriteError,
    InvalidConfigurationError,
    InvalidDimensionError,
    MissingArgumentError,
    OutputFormatNotSpecifiedError,
    SourceNotFoundError,
    SourceProvenanceError,
    ThumbnailerError,
    UnsupportedFormatError,
)
from .services.logger import configure_logging
from .services.thumbnail_pipeline import (
    ConsecutivelyNumberedFilenames,
    Dimension,
    Rename,
    Resizers,
    ThumbnailParameter,
    Thumbnails,
    create_thumbnail_file,
    create_thumbnail_from_file,
    create_thumbnail_image,
    create_thumbnail_stream,
    create_thumbnails,
    create_thumbnails_as_collection,
)

logger.disable(__name__)

__version__ = "0.1.0"

__all__ = [
    "Thumbnails",
    "Rename",
    "ConsecutivelyNumberedFilenames",
    "Resizers",
    "Dimension",
    "ThumbnailParameter",
    "FormatSelector",
    "Orientation",
    "ScalingMode",
    "Settings",
    "get_settings",
    "configure_logging",
    "create_thumbnail_image",
    "create_thumbnail_file",
    "create_thumbnail_from_file",
    "create_thumbnail_stream",
    "create_thumbnails_as_collection",
    "create_thumbnails",
    # Exceptions
    "ThumbnailerError",
    "MissingArgumentError",
    "InvalidConfigurationError",
    "InvalidDimensionError",
    "OutputFormatNotSpecifiedError",
    "DestinationExhaustedError",
    "SourceProvenanceError",
    "UnsupportedFormatError",
    "ImageIOError",
    "SourceNotFoundError",
    "ImageReadError",
    "ImageWriteError",
    "DestinationExistsError",
]
