# thumbnailer/enums.py
"""
Library Enums - Centralized enum definitions.

All enums live here so that models, services and the logger can import them
without creating circular dependencies.
"""

from enum import Enum, IntEnum


# =============================================================================
# LOGGING
# =============================================================================


class LogLevel(str, Enum):
    """Log level constants for the loguru sink."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogSource(str, Enum):
    """Log source constants for identifying log origins."""

    SYSTEM = "system"
    PIPELINE = "pipeline"
    IO = "io"


class LogEmoji(str, Enum):
    """Type-safe emoji constants for log messages."""

    SUCCESS = "✅"
    COMPLETED = "✅"
    FAILED = "❌"
    ERROR = "❌"
    WARNING = "⚠️"
    INFO = "ℹ️"
    DEBUG = "🐞"

    PROCESSING = "🔄"
    SKIPPED = "⏭️"

    IMAGE = "🖼️"
    THUMBNAIL = "🖼️"
    ROTATE = "🔃"
    RESIZE = "📐"
    STORAGE = "💾"
    NETWORK = "🌐"
    SYSTEM = "⚙️"


class LoggerName(str, Enum):
    """Logger name constants for categorizing log entries."""

    THUMBNAIL_PIPELINE = "thumbnail_pipeline"
    PARAMETER_RESOLVER = "parameter_resolver"
    ORIENTATION = "orientation"
    RESIZER = "resizer"
    FORMAT_NEGOTIATOR = "format_negotiator"
    IMAGE_SOURCE = "image_source"
    IMAGE_SINK = "image_sink"
    SYSTEM = "system"


# =============================================================================
# THUMBNAIL PIPELINE
# =============================================================================


class FormatSelector(str, Enum):
    """
    Sentinel values for the output format of a thumbnail.

    ORIGINAL keeps whatever format the source was decoded as; DETERMINE
    defers the decision to the format negotiator (destination extension,
    then the source format for streams).
    """

    ORIGINAL = "<original>"
    DETERMINE = "<determine>"


class ScalingMode(str, Enum):
    """Resampling algorithms selectable with ``scaling_mode()``."""

    BILINEAR = "bilinear"
    BICUBIC = "bicubic"
    LANCZOS = "lanczos"
    PROGRESSIVE_BILINEAR = "progressive_bilinear"


class Orientation(IntEnum):
    """EXIF orientation tag values (0x0112), named after the row/column of the origin."""

    TOP_LEFT = 1
    TOP_RIGHT = 2
    BOTTOM_RIGHT = 3
    BOTTOM_LEFT = 4
    LEFT_TOP = 5
    RIGHT_TOP = 6
    RIGHT_BOTTOM = 7
    LEFT_BOTTOM = 8


# =============================================================================
# PARAMETER BUILDER
# =============================================================================


class PropertyStatus(str, Enum):
    """State of one option while a thumbnail parameter is being built."""

    OPTIONAL = "optional"
    NOT_READY = "not_ready"
    ALREADY_SET = "already_set"
    CANNOT_SET = "cannot_set"


class BuilderProperty(str, Enum):
    """Options tracked by the parameter builder; values are used in messages."""

    SIZE = "size"
    WIDTH = "width"
    HEIGHT = "height"
    SCALE = "scale"
    KEEP_ASPECT_RATIO = "keep_aspect_ratio"
    FIT_WITHIN_DIMENSIONS = "fit_within_dimensions"
    OUTPUT_FORMAT = "output_format"
    OUTPUT_FORMAT_TYPE = "output_format_type"
    OUTPUT_QUALITY = "output_quality"
    IMAGE_TYPE = "image_type"
    SCALING_MODE = "scaling_mode"
    RESIZER = "resizer"
    RESIZER_FACTORY = "resizer_factory"
    ALLOW_OVERWRITE = "allow_overwrite"
    USE_EXIF_ORIENTATION = "use_exif_orientation"
