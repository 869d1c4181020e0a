# thumbnailer/services/thumbnail_pipeline/thumbnailator.py
"""
One-call thumbnail helpers.

Each helper validates the requested dimensions before touching any image
and then runs the regular pipeline with aspect-ratio-preserving sizing.
"""

from pathlib import Path
from typing import IO, Iterable, List, Optional

from PIL import Image

from ...exceptions import MissingArgumentError
from .models import validate_dimensions
from .rename import Rename
from .thumbnails import FileName, Thumbnails


def create_thumbnail_image(image: Image.Image, width: int, height: int) -> Image.Image:
    """
    Create a thumbnail of a PIL image.

    Args:
        image: Source image
        width: Maximum thumbnail width
        height: Maximum thumbnail height

    Returns:
        Thumbnail fitting within width x height
    """
    validate_dimensions(width, height)
    if image is None:
        raise MissingArgumentError("Image is None.")
    return Thumbnails.of_images(image).size(width, height).as_image()


def create_thumbnail_file(
    input_file: FileName, output_file: FileName, width: int, height: int
) -> None:
    """Create a thumbnail of a file and write it to another file."""
    validate_dimensions(width, height)
    if input_file is None or output_file is None:
        raise MissingArgumentError("Input and output files must be specified.")
    Thumbnails.of_files(input_file).size(width, height).to_file(output_file)


def create_thumbnail_from_file(
    input_file: FileName, width: int, height: int
) -> Image.Image:
    """Create a thumbnail of a file and return it as a PIL image."""
    validate_dimensions(width, height)
    if input_file is None:
        raise MissingArgumentError("Input file must be specified.")
    return Thumbnails.of_files(input_file).size(width, height).as_image()


def create_thumbnail_stream(
    input_stream: IO[bytes],
    output_stream: IO[bytes],
    width: int,
    height: int,
    format_name: Optional[str] = None,
) -> None:
    """
    Read an image from a stream and write its thumbnail to another stream.

    Args:
        input_stream: Readable binary stream with an encoded image
        output_stream: Writable binary stream
        width: Maximum thumbnail width
        height: Maximum thumbnail height
        format_name: Output format; the source's own format when None
    """
    validate_dimensions(width, height)
    if input_stream is None or output_stream is None:
        raise MissingArgumentError("Input and output streams must be specified.")

    builder = Thumbnails.of_streams(input_stream).size(width, height)
    if format_name is None:
        builder.use_original_format()
    else:
        builder.output_format(format_name)
    builder.to_stream(output_stream)


def create_thumbnails_as_collection(
    files: Iterable[FileName], rename: Rename, width: int, height: int
) -> List[Path]:
    """
    Create thumbnails of several files, naming each with a Rename strategy.

    Returns:
        Paths of the thumbnails written
    """
    validate_dimensions(width, height)
    if files is None:
        raise MissingArgumentError("Collection of files is None.")
    if rename is None:
        raise MissingArgumentError("Rename is None.")

    files = list(files)
    if not files:
        return []

    return Thumbnails.from_files(files).size(width, height).as_files(rename)


def create_thumbnails(
    files: Iterable[FileName], rename: Rename, width: int, height: int
) -> None:
    """Create thumbnails of several files, naming each with a Rename strategy."""
    create_thumbnails_as_collection(files, rename, width, height)
