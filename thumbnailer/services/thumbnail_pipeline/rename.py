# thumbnailer/services/thumbnail_pipeline/rename.py
"""
Destination Naming

Rename strategies derive a thumbnail's file name from its source file name.
ConsecutivelyNumberedFilenames produces an endless sequence of numbered
destination paths.
"""

from abc import ABC, abstractmethod
from os import PathLike
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, Optional, Union

if TYPE_CHECKING:
    from .models import ThumbnailParameter


class Rename(ABC):
    """Derives a destination file name from a source file name."""

    @abstractmethod
    def apply(
        self, file_name: str, parameter: Optional["ThumbnailParameter"] = None
    ) -> str:
        """
        Return the destination file name.

        Args:
            file_name: Source file name without its directory
            parameter: Parameter of the current batch, for strategies that use it
        """

    # Presets, assigned below
    NO_CHANGE: "Rename"
    PREFIX_DOT_THUMBNAIL: "Rename"
    PREFIX_HYPHEN_THUMBNAIL: "Rename"
    SUFFIX_DOT_THUMBNAIL: "Rename"
    SUFFIX_HYPHEN_THUMBNAIL: "Rename"


class NoChangeRename(Rename):
    def apply(self, file_name, parameter=None):
        return file_name

    def __repr__(self) -> str:
        return "Rename.NO_CHANGE"


class PrefixRename(Rename):
    """Prepends a fixed string: "photo.jpg" -> "thumbnail.photo.jpg"."""

    def __init__(self, prefix: str):
        self.prefix = prefix

    def apply(self, file_name, parameter=None):
        return f"{self.prefix}{file_name}"

    def __repr__(self) -> str:
        return f"PrefixRename({self.prefix!r})"


class SuffixRename(Rename):
    """Inserts a fixed string before the extension: "photo.jpg" -> "photo.thumbnail.jpg"."""

    def __init__(self, suffix: str):
        self.suffix = suffix

    def apply(self, file_name, parameter=None):
        stem, dot, extension = file_name.rpartition(".")
        if not dot:
            return f"{file_name}{self.suffix}"
        return f"{stem}{self.suffix}.{extension}"

    def __repr__(self) -> str:
        return f"SuffixRename({self.suffix!r})"


Rename.NO_CHANGE = NoChangeRename()
Rename.PREFIX_DOT_THUMBNAIL = PrefixRename("thumbnail.")
Rename.PREFIX_HYPHEN_THUMBNAIL = PrefixRename("thumbnail-")
Rename.SUFFIX_DOT_THUMBNAIL = SuffixRename(".thumbnail")
Rename.SUFFIX_HYPHEN_THUMBNAIL = SuffixRename("-thumbnail")


class ConsecutivelyNumberedFilenames:
    """
    Endless iterator of numbered destination paths.

    Args:
        directory: Directory the paths are placed in, None for relative paths
        format: %-style pattern receiving the counter, e.g. "thumbnail-%d.png"
        start: First number

    Raises:
        NotADirectoryError: ``directory`` is not an existing directory

    Example:
        names = ConsecutivelyNumberedFilenames(out_dir, "thumb-%02d.jpg", 1)
        next(names)  # out_dir / "thumb-01.jpg"
    """

    def __init__(
        self,
        directory: Optional[Union[str, PathLike]] = None,
        format: str = "%d",
        start: int = 0,
    ):
        if directory is not None:
            directory = Path(directory)
            if not directory.is_dir():
                raise NotADirectoryError(
                    "Specified path is not a directory or does not exist."
                )
        self.directory = directory
        self.format = format
        self._count = start

    def __iter__(self) -> Iterator[Path]:
        return self

    def __next__(self) -> Path:
        name = self.format % self._count
        self._count += 1
        if self.directory is None:
            return Path(name)
        return self.directory / name
