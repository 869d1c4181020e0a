# thumbnailer/services/thumbnail_pipeline/io/sources.py
"""
Image Sources

Closed set of origins a thumbnail can be made from. Each source decodes
into a DecodedImage carrying the pixels, the detected format and the EXIF
orientation tag, and reports whether it is backed by a file.
"""

from abc import ABC, abstractmethod
from io import BytesIO
from os import PathLike
from pathlib import Path
from typing import IO, Any, Optional, Union

import requests
from PIL import Image, UnidentifiedImageError

from ....config import Settings, get_settings
from ....enums import LoggerName, LogEmoji, LogSource
from ....exceptions import (
    ImageReadError,
    SourceNotFoundError,
    UnsupportedFormatError,
)
from ...logger import get_service_logger
from ..formats import normalize_format_name
from ..models import DecodedImage
from ..orientation import read_orientation
from ..utils.constants import UNNAMED_SOURCE

logger = get_service_logger(
    LoggerName.IMAGE_SOURCE, LogSource.IO, default_emoji=LogEmoji.IMAGE
)

URL_SCHEMES = ("http://", "https://")


def decode_image(fp: Union[str, Path, IO[bytes]], name: str) -> DecodedImage:
    """
    Decode an image with Pillow.

    Args:
        fp: File path or readable binary stream
        name: Label used in error messages

    Returns:
        DecodedImage with pixels fully loaded into memory

    Raises:
        SourceNotFoundError: The file does not exist
        UnsupportedFormatError: No decoder recognises the content
        ImageReadError: The content could not be read or exceeds Pillow's pixel limit
    """
    try:
        with Image.open(fp) as opened:
            opened.load()
            format_name = opened.format
            orientation = read_orientation(opened)
            image = opened.copy()
    except FileNotFoundError as e:
        raise SourceNotFoundError(f"Could not find image: {name}") from e
    except UnidentifiedImageError as e:
        raise UnsupportedFormatError(
            UnsupportedFormatError.UNKNOWN,
            f"No suitable image reader found for {name}.",
        ) from e
    except Image.DecompressionBombError as e:
        raise ImageReadError(f"Refusing to decode oversized image {name}: {e}") from e
    except OSError as e:
        raise ImageReadError(f"Failed to read image {name}: {e}") from e

    if format_name is not None:
        format_name = normalize_format_name(format_name)

    logger.debug(
        f"Decoded {name} ({format_name}, {image.mode}, "
        f"{image.size[0]}x{image.size[1]}, orientation={orientation})"
    )
    return DecodedImage(image=image, format_name=format_name, orientation=orientation)


class ImageSource(ABC):
    """An origin of one source image."""

    def __init__(self):
        self._input_format_name: Optional[str] = None

    @abstractmethod
    def _decode(self) -> DecodedImage:
        pass

    def read(self) -> DecodedImage:
        """Decode the source; the detected format is kept on the source."""
        decoded = self._decode()
        self._input_format_name = decoded.format_name
        return decoded

    @property
    def input_format_name(self) -> Optional[str]:
        """Format detected by the last read(), None before reading or if unknown."""
        return self._input_format_name

    @property
    def source_file(self) -> Optional[Path]:
        """Backing file, None for sources without file provenance."""
        return None

    @property
    def name(self) -> str:
        return UNNAMED_SOURCE

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"


class FileImageSource(ImageSource):
    def __init__(self, path: Union[str, PathLike]):
        super().__init__()
        if path is None:
            raise TypeError("File cannot be None.")
        self._path = Path(path)

    @property
    def source_file(self) -> Path:
        return self._path

    @property
    def name(self) -> str:
        return str(self._path)

    def _decode(self) -> DecodedImage:
        if not self._path.exists():
            raise SourceNotFoundError(f"Could not find file: {self._path}")
        return decode_image(self._path, self.name)


class UrlImageSource(ImageSource):
    """Image fetched over HTTP(S) with requests."""

    def __init__(self, url: str, settings: Optional[Settings] = None):
        super().__init__()
        if url is None:
            raise TypeError("URL cannot be None.")
        self.url = str(url)
        self.settings = settings

    @property
    def name(self) -> str:
        return self.url

    def _decode(self) -> DecodedImage:
        settings = self.settings or get_settings()
        logger.debug(f"Fetching {self.url}", emoji=LogEmoji.NETWORK)

        try:
            with requests.get(
                self.url,
                timeout=settings.url_timeout_seconds,
                headers={"User-Agent": settings.url_user_agent},
            ) as response:
                response.raise_for_status()
                content = response.content
        except requests.exceptions.RequestException as e:
            raise ImageReadError(f"Could not fetch image from {self.url}: {e}") from e

        return decode_image(BytesIO(content), self.name)


class StreamImageSource(ImageSource):
    """
    Image read from a binary stream.

    The stream is left open; closing it is the caller's concern.
    """

    def __init__(self, stream: IO[bytes]):
        super().__init__()
        if stream is None:
            raise TypeError("InputStream cannot be None.")
        self.stream = stream

    def _decode(self) -> DecodedImage:
        return decode_image(self.stream, self.name)


class InMemoryImageSource(ImageSource):
    """Already decoded PIL image; it has no original format and no orientation."""

    def __init__(self, image: Image.Image):
        super().__init__()
        if image is None:
            raise TypeError("Image cannot be None.")
        self.image = image

    def _decode(self) -> DecodedImage:
        return DecodedImage(image=self.image)


def make_image_source(
    obj: Any, settings: Optional[Settings] = None
) -> ImageSource:
    """
    Wrap a user-supplied origin in the matching ImageSource.

    Strings starting with http:// or https:// are treated as URLs, other
    strings and path-like objects as file names, PIL images as in-memory
    images and objects with a read() method as streams.

    Raises:
        TypeError: The object is not a recognised origin
    """
    if isinstance(obj, ImageSource):
        return obj
    if isinstance(obj, Image.Image):
        return InMemoryImageSource(obj)
    if isinstance(obj, str) and obj.lower().startswith(URL_SCHEMES):
        return UrlImageSource(obj, settings)
    if isinstance(obj, (str, PathLike)):
        return FileImageSource(obj)
    if hasattr(obj, "read"):
        return StreamImageSource(obj)

    raise TypeError(f"Unsupported image source type: {type(obj).__name__}")
