# thumbnailer/services/thumbnail_pipeline/formats.py
"""
Format Negotiator

Decides which image format a thumbnail is written in and encodes it with
Pillow. Precedence, highest first:

1. an explicit format set on the parameter
2. FormatSelector.ORIGINAL, the format the source was decoded as
3. FormatSelector.DETERMINE with a named file, the format of its extension
4. FormatSelector.DETERMINE otherwise, the source's format when known

Streams and files without an extension carry no format of their own, so
DETERMINE falls back to the format the source was decoded as. Only sources
without a format, such as in-memory images, leave nothing to resolve; then
OutputFormatNotSpecifiedError is raised instead of guessing.
"""

from typing import IO, TYPE_CHECKING, Any, Dict, Optional, Tuple, Union

from PIL import Image

from ...enums import FormatSelector, LoggerName, LogEmoji, LogSource
from ...exceptions import (
    ImageWriteError,
    OutputFormatNotSpecifiedError,
    UnsupportedFormatError,
)
from ..logger import get_service_logger
from .utils.constants import ENCODER_MODES, FORMAT_ALIASES, FORMAT_TYPES
from .utils.thumbnail_utils import round_half_up

if TYPE_CHECKING:
    from .io.sinks import ImageSink
    from .models import ThumbnailParameter

logger = get_service_logger(
    LoggerName.FORMAT_NEGOTIATOR, LogSource.PIPELINE, default_emoji=LogEmoji.IMAGE
)

FormatName = Union[str, FormatSelector]


def normalize_format_name(format_name: str) -> str:
    """
    Canonicalize a user-supplied format name or extension.

    "jpg", ".JPG" and "jpeg" all become "JPEG".
    """
    name = str(format_name).strip().lstrip(".").upper()
    return FORMAT_ALIASES.get(name, name)


def get_supported_output_formats() -> Tuple[str, ...]:
    """Return the names of every format Pillow can write, sorted."""
    Image.init()
    return tuple(sorted(Image.SAVE))


def is_supported_output_format(format_name: Optional[FormatName]) -> bool:
    """
    Check whether thumbnails can be written in a format.

    The ORIGINAL and DETERMINE selectors are always accepted since they are
    resolved per source.
    """
    if format_name is None:
        return False
    if isinstance(format_name, FormatSelector):
        return True

    Image.init()
    return normalize_format_name(format_name) in Image.SAVE


def get_supported_output_format_types(format_name: FormatName) -> Tuple[str, ...]:
    """
    Return the format types (subtypes) available for a format.

    Args:
        format_name: Concrete format name

    Returns:
        Tuple of subtype names; empty for selectors and formats without subtypes
    """
    if isinstance(format_name, FormatSelector):
        return ()
    return FORMAT_TYPES.get(normalize_format_name(format_name), ())


def is_supported_output_format_type(
    format_name: FormatName, format_type: Optional[str]
) -> bool:
    """
    Check whether a format/format-type combination can be written.

    A format type of None means the codec default and is valid for every
    supported format.
    """
    if not is_supported_output_format(format_name):
        return False
    if format_type is None:
        return True
    return format_type in get_supported_output_format_types(format_name)


def format_for_extension(extension: Optional[str]) -> Optional[str]:
    """
    Look up the format registered for a file extension, case-insensitively.

    Returns:
        Pillow format name, or None when the extension is unknown
    """
    if not extension:
        return None

    registered = Image.registered_extensions()
    format_name = registered.get("." + extension.lower())
    if format_name is None:
        return None
    return normalize_format_name(format_name)


def decide_output_format(
    parameter_format: FormatName,
    source_format: Optional[str],
    sink: "ImageSink",
) -> str:
    """
    Resolve the concrete format for one thumbnail.

    Args:
        parameter_format: Output format on the parameter (name or selector)
        source_format: Format the source was decoded as, if known
        sink: Destination the thumbnail is written to

    Returns:
        Concrete, writable Pillow format name

    Raises:
        UnsupportedFormatError: The resolved format cannot be written
        OutputFormatNotSpecifiedError: No format could be resolved
    """
    if parameter_format == FormatSelector.ORIGINAL:
        if source_format is None:
            raise UnsupportedFormatError(
                UnsupportedFormatError.UNKNOWN,
                "Original format of the source image could not be determined.",
            )
        resolved = normalize_format_name(source_format)
    elif parameter_format == FormatSelector.DETERMINE:
        resolved = sink.preferred_output_format()
        if resolved is None and source_format is not None:
            resolved = normalize_format_name(source_format)
        if resolved is None:
            raise OutputFormatNotSpecifiedError("Output format not specified.")
    else:
        resolved = normalize_format_name(parameter_format)

    if not is_supported_output_format(resolved):
        raise UnsupportedFormatError(
            resolved, f"No suitable image writer found for {resolved}."
        )

    logger.debug(f"Output format resolved to {resolved}")
    return resolved


def _save_options(
    format_name: str,
    format_type: Optional[str],
    quality: Optional[float],
) -> Dict[str, Any]:
    """Translate a format type and a 0.0-1.0 quality into Pillow save options."""
    options: Dict[str, Any] = {}

    if format_name == "JPEG":
        if format_type is not None:
            options["progressive"] = format_type == "progressive"
        if quality is not None:
            options["quality"] = round_half_up(quality * 100)
    elif format_name == "WEBP":
        if format_type is not None:
            options["lossless"] = format_type == "lossless"
        if quality is not None:
            options["quality"] = round_half_up(quality * 100)
    elif format_name == "TIFF":
        if format_type is not None:
            options["compression"] = format_type
    elif format_name == "PNG":
        # 1.0 is the fastest, largest encoding
        if quality is not None:
            options["compress_level"] = round_half_up((1.0 - quality) * 9)

    return options


def prepare_for_format(image: Image.Image, format_name: str) -> Image.Image:
    """
    Convert an image to a mode the target encoder accepts.

    Alpha is kept as RGBA where the encoder supports it, greyscale modes
    (including 16-bit and float) become L, everything else becomes RGB.
    """
    accepted_modes = ENCODER_MODES.get(format_name)
    if accepted_modes is None or image.mode in accepted_modes:
        return image

    has_alpha = "A" in image.getbands() or "transparency" in image.info
    if has_alpha and "RGBA" in accepted_modes:
        target_mode = "RGBA"
    elif Image.getmodebase(image.mode) == "L" and "L" in accepted_modes:
        target_mode = "L"
    else:
        target_mode = "RGB"

    logger.debug(f"Converting {image.mode} to {target_mode} for {format_name}")
    return image.convert(target_mode)


def encode_image(
    image: Image.Image,
    format_name: str,
    stream: IO[bytes],
    parameter: Optional["ThumbnailParameter"] = None,
) -> None:
    """
    Encode a thumbnail into a binary stream.

    Args:
        image: Finished thumbnail
        format_name: Concrete format resolved by decide_output_format()
        stream: Writable binary stream
        parameter: Source of the format type and output quality, if any

    Raises:
        UnsupportedFormatError: Pillow has no writer for the format, rejects
            the format type or cannot write the image mode
        ImageWriteError: The encoder failed
    """
    format_type = parameter.output_format_type if parameter else None
    quality = parameter.output_quality if parameter else None

    if not is_supported_output_format_type(format_name, format_type):
        raise UnsupportedFormatError(
            format_name,
            f"Format type {format_type} is not supported for {format_name}.",
        )

    options = _save_options(format_name, format_type, quality)
    prepared = prepare_for_format(image, format_name)

    try:
        prepared.save(stream, format=format_name, **options)
    except (KeyError, ValueError) as e:
        raise UnsupportedFormatError(
            format_name, f"Cannot encode image as {format_name}: {e}"
        ) from e
    except OSError as e:
        # Pillow reports modes an encoder cannot write as OSError
        if str(e).startswith("cannot write mode"):
            raise UnsupportedFormatError(
                format_name, f"Cannot encode {prepared.mode} image as {format_name}: {e}"
            ) from e
        raise ImageWriteError(f"Failed to encode image as {format_name}: {e}") from e
