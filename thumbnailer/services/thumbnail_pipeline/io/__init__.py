# thumbnailer/services/thumbnail_pipeline/io/__init__.py
"""
Thumbnail Pipeline I/O

Sources decode origins into images; sinks write finished thumbnails.
"""

from .sinks import FileImageSink, ImageSink, InMemoryImageSink, StreamImageSink
from .sources import (
    FileImageSource,
    ImageSource,
    InMemoryImageSource,
    StreamImageSource,
    UrlImageSource,
    decode_image,
    make_image_source,
)

__all__ = [
    # Sources
    "ImageSource",
    "FileImageSource",
    "UrlImageSource",
    "StreamImageSource",
    "InMemoryImageSource",
    "decode_image",
    "make_image_source",
    # Sinks
    "ImageSink",
    "FileImageSink",
    "StreamImageSink",
    "InMemoryImageSink",
]
