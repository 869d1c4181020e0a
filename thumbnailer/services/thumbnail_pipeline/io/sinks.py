# thumbnailer/services/thumbnail_pipeline/io/sinks.py
"""
Image Sinks

Closed set of destinations a thumbnail can be written to. Encoding always
goes to an in-memory buffer first, so a failing encoder never leaves a
truncated destination behind.
"""

from abc import ABC, abstractmethod
from io import BytesIO
from os import PathLike
from pathlib import Path
from typing import IO, TYPE_CHECKING, Optional, Union

from PIL import Image

from ....enums import LoggerName, LogEmoji, LogSource
from ....exceptions import (
    DestinationExistsError,
    ImageWriteError,
    UnsupportedFormatError,
)
from ...logger import get_service_logger
from ..formats import encode_image, format_for_extension
from ..utils.constants import PREFERRED_EXTENSIONS
from ..utils.thumbnail_utils import get_file_extension

if TYPE_CHECKING:
    from ..models import ThumbnailParameter

logger = get_service_logger(
    LoggerName.IMAGE_SINK, LogSource.IO, default_emoji=LogEmoji.STORAGE
)


class ImageSink(ABC):
    """A destination for one thumbnail."""

    # Whether write() needs a concrete format name
    requires_format: bool = True

    @property
    def destination_file(self) -> Optional[Path]:
        """File written to, None for destinations without a file."""
        return None

    def preferred_output_format(self) -> Optional[str]:
        """Format implied by the destination itself, if any."""
        return None

    @abstractmethod
    def write(
        self,
        image: Image.Image,
        format_name: Optional[str],
        parameter: Optional["ThumbnailParameter"] = None,
    ) -> None:
        """
        Write a thumbnail.

        Args:
            image: Finished thumbnail
            format_name: Resolved output format (None when requires_format is False)
            parameter: Parameter supplying format type and quality
        """

    @staticmethod
    def _encode(
        image: Image.Image,
        format_name: Optional[str],
        parameter: Optional["ThumbnailParameter"],
    ) -> bytes:
        if format_name is None:
            raise UnsupportedFormatError(
                UnsupportedFormatError.UNKNOWN, "Output format has not been set."
            )
        buffer = BytesIO()
        encode_image(image, format_name, buffer, parameter)
        return buffer.getvalue()


class FileImageSink(ImageSink):
    """
    Writes a thumbnail to a file.

    When the file name's extension does not match the output format, the
    format's extension is appended, so "thumb" written as PNG becomes
    "thumb.png".
    """

    def __init__(self, path: Union[str, PathLike], allow_overwrite: bool = True):
        if path is None:
            raise TypeError("File cannot be None.")
        self._path = Path(path)
        self.allow_overwrite = allow_overwrite

    @property
    def destination_file(self) -> Path:
        return self._path

    def preferred_output_format(self) -> Optional[str]:
        """
        Format named by the file extension.

        Raises:
            UnsupportedFormatError: The extension is not a known image format
        """
        extension = get_file_extension(self._path)
        if extension is None:
            return None

        format_name = format_for_extension(extension)
        if format_name is None:
            raise UnsupportedFormatError(
                extension, f"No suitable image writer found for extension {extension}."
            )
        return format_name

    def resolve_destination(self, format_name: str) -> Path:
        """Return the path actually written for a format."""
        extension = get_file_extension(self._path)
        if extension is not None and format_for_extension(extension) == format_name:
            return self._path

        suffix = PREFERRED_EXTENSIONS.get(format_name, format_name.lower())
        return self._path.with_name(f"{self._path.name}.{suffix}")

    def write(
        self,
        image: Image.Image,
        format_name: Optional[str],
        parameter: Optional["ThumbnailParameter"] = None,
    ) -> None:
        """
        Write a thumbnail to the file.

        Raises:
            DestinationExistsError: The file exists and overwriting is disallowed
            ImageWriteError: The file could not be written
        """
        if format_name is None:
            raise UnsupportedFormatError(
                UnsupportedFormatError.UNKNOWN, "Could not determine output format."
            )

        destination = self.resolve_destination(format_name)
        if not self.allow_overwrite and destination.exists():
            raise DestinationExistsError("The destination file exists.")

        data = self._encode(image, format_name, parameter)

        try:
            with destination.open("wb") as f:
                f.write(data)
        except OSError as e:
            raise ImageWriteError(f"Failed to write thumbnail to {destination}: {e}") from e

        self._path = destination
        logger.debug(f"Wrote {len(data)} bytes to {destination}")

    def __repr__(self) -> str:
        return f"FileImageSink({self._path})"


class StreamImageSink(ImageSink):
    """
    Writes an encoded thumbnail to a binary stream.

    The stream is left open; closing it is the caller's concern.
    """

    def __init__(self, stream: IO[bytes]):
        if stream is None:
            raise TypeError("OutputStream cannot be None.")
        self.stream = stream

    def write(
        self,
        image: Image.Image,
        format_name: Optional[str],
        parameter: Optional["ThumbnailParameter"] = None,
    ) -> None:
        data = self._encode(image, format_name, parameter)

        try:
            self.stream.write(data)
        except OSError as e:
            raise ImageWriteError(f"Failed to write thumbnail to stream: {e}") from e

        logger.debug(f"Wrote {len(data)} bytes to stream")


class InMemoryImageSink(ImageSink):
    """Keeps the thumbnail as a PIL image; no encoding takes place."""

    requires_format = False

    def __init__(self):
        self.image: Optional[Image.Image] = None

    def write(
        self,
        image: Image.Image,
        format_name: Optional[str] = None,
        parameter: Optional["ThumbnailParameter"] = None,
    ) -> None:
        self.image = image
