# thumbnailer/services/thumbnail_pipeline/models/decoded_image.py
"""
Typed result of decoding an image source.
"""

from dataclasses import dataclass
from typing import Optional

from PIL import Image

from ....enums import Orientation


@dataclass
class DecodedImage:
    """Pixels of a source plus what the decoder learned about it."""

    image: Image.Image
    format_name: Optional[str] = None
    orientation: Optional[Orientation] = None

    @property
    def size(self):
        return self.image.size
