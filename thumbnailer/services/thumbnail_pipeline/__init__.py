# thumbnailer/services/thumbnail_pipeline/__init__.py
"""
Thumbnail Pipeline Module

Resolves one ThumbnailParameter per request, then runs
decode -> orient -> resize -> decide format -> write for every source.

Usage:
    from thumbnailer import Rename, Thumbnails

    Thumbnails.of("a.jpg", "b.png").size(160, 160).to_files(Rename.SUFFIX_HYPHEN_THUMBNAIL)
"""

from .formats import (
    decide_output_format,
    encode_image,
    format_for_extension,
    get_supported_output_format_types,
    get_supported_output_formats,
    is_supported_output_format,
    is_supported_output_format_type,
    normalize_format_name,
)
from .io import (
    FileImageSink,
    FileImageSource,
    ImageSink,
    ImageSource,
    InMemoryImageSink,
    InMemoryImageSource,
    StreamImageSink,
    StreamImageSource,
    UrlImageSource,
    make_image_source,
)
from .makers import compute_thumbnail_size, make_thumbnail
from .models import DecodedImage, Dimension, ThumbnailParameter
from .orientation import correct_orientation, read_orientation
from .parameters import ThumbnailParameterBuilder
from .rename import ConsecutivelyNumberedFilenames, Rename
from .resizers import (
    DEFAULT_RESIZER_FACTORY,
    BicubicResizer,
    BilinearResizer,
    DefaultResizerFactory,
    FixedResizerFactory,
    LanczosResizer,
    NullResizer,
    ProgressiveBilinearResizer,
    Resizer,
    ResizerFactory,
    Resizers,
    resizer_for_scaling_mode,
)
from .tasks import SourceSinkThumbnailTask, create_thumbnail
from .thumbnailator import (
    create_thumbnail_file,
    create_thumbnail_from_file,
    create_thumbnail_image,
    create_thumbnail_stream,
    create_thumbnails,
    create_thumbnails_as_collection,
)
from .thumbnails import Thumbnails, ThumbnailsBuilder

__all__ = [
    # Orchestration
    "Thumbnails",
    "ThumbnailsBuilder",
    "ThumbnailParameterBuilder",
    "SourceSinkThumbnailTask",
    "create_thumbnail",
    # Models
    "DecodedImage",
    "Dimension",
    "ThumbnailParameter",
    # Naming
    "Rename",
    "ConsecutivelyNumberedFilenames",
    # Resizing
    "DEFAULT_RESIZER_FACTORY",
    "Resizer",
    "ResizerFactory",
    "Resizers",
    "NullResizer",
    "BilinearResizer",
    "BicubicResizer",
    "LanczosResizer",
    "ProgressiveBilinearResizer",
    "DefaultResizerFactory",
    "FixedResizerFactory",
    "resizer_for_scaling_mode",
    "compute_thumbnail_size",
    "make_thumbnail",
    # Orientation
    "read_orientation",
    "correct_orientation",
    # Formats
    "decide_output_format",
    "encode_image",
    "format_for_extension",
    "get_supported_output_formats",
    "get_supported_output_format_types",
    "is_supported_output_format",
    "is_supported_output_format_type",
    "normalize_format_name",
    # I/O
    "ImageSource",
    "FileImageSource",
    "UrlImageSource",
    "StreamImageSource",
    "InMemoryImageSource",
    "make_image_source",
    "ImageSink",
    "FileImageSink",
    "StreamImageSink",
    "InMemoryImageSink",
    # One-call helpers
    "create_thumbnail_image",
    "create_thumbnail_file",
    "create_thumbnail_from_file",
    "create_thumbnail_stream",
    "create_thumbnails_as_collection",
    "create_thumbnails",
]
