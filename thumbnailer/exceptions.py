# thumbnailer/exceptions.py
"""
Custom exceptions for thumbnailer.

Centralized location for all custom exception classes to avoid
duplicating exception definitions across modules.
"""

from typing import Optional


class ThumbnailerError(Exception):
    """Base exception for all thumbnailer-specific errors."""

    pass


class MissingArgumentError(ThumbnailerError):
    """A mandatory input (sources, rename strategy, destination) was not supplied."""

    pass


class InvalidConfigurationError(ThumbnailerError):
    """Custom exception for configuration and validation errors."""

    pass


class InvalidDimensionError(InvalidConfigurationError):
    """Custom exception for non-positive thumbnail dimensions."""

    pass


class OutputFormatNotSpecifiedError(InvalidConfigurationError):
    """Raised when no output format can be resolved for a destination without a file name."""

    pass


class DestinationExhaustedError(InvalidConfigurationError):
    """Raised when an explicit destination list runs out before the sources do."""

    pass


class SourceProvenanceError(InvalidConfigurationError):
    """Raised when destination names must be derived from a source that has no backing file."""

    pass


class UnsupportedFormatError(ThumbnailerError):
    """Custom exception for formats or format types that cannot be read or written."""

    UNKNOWN = "<unknown>"

    def __init__(self, format_name: Optional[str], message: Optional[str] = None):
        self.format_name = format_name
        super().__init__(message or f"Unsupported image format: {format_name}")


class ImageIOError(ThumbnailerError):
    """Custom exception for source or destination I/O failures."""

    pass


class SourceNotFoundError(ImageIOError):
    """Custom exception for when a source image cannot be located."""

    pass


class ImageReadError(ImageIOError):
    """Custom exception for failures while reading a source image."""

    pass


class ImageWriteError(ImageIOError):
    """Custom exception for failures while writing a thumbnail."""

    pass


class DestinationExistsError(ThumbnailerError):
    """Raised when the destination file exists and overwriting is disallowed."""

    pass
