# thumbnailer/services/thumbnail_pipeline/utils/constants.py
"""
Thumbnail Pipeline Constants
"""

# Stand-in for the unbounded axis when only width() or height() is given
UNBOUNDED_DIMENSION = 2**31 - 1

# Default resizer selection: progressive when the target is below 1/2 of the source
PROGRESSIVE_THRESHOLD = 2

# EXIF orientation tag (0x0112)
EXIF_ORIENTATION_TAG = 0x0112

# Format names users and file extensions commonly use for Pillow formats
FORMAT_ALIASES = {
    "JPG": "JPEG",
    "JPE": "JPEG",
    "JFIF": "JPEG",
    "MPO": "JPEG",
    "TIF": "TIFF",
}

# Extension appended to a destination file whose name does not match the format
PREFERRED_EXTENSIONS = {
    "JPEG": "jpg",
    "PNG": "png",
    "GIF": "gif",
    "BMP": "bmp",
    "TIFF": "tif",
    "WEBP": "webp",
}

# Supported format types (subtypes) per output format, first entry is not implied
FORMAT_TYPES = {
    "JPEG": ("baseline", "progressive"),
    "TIFF": ("raw", "tiff_lzw", "tiff_deflate", "tiff_adobe_deflate", "packbits"),
    "WEBP": ("lossy", "lossless"),
}

# Modes each encoder writes as-is; anything else is converted before saving.
# Formats not listed here receive the image unchanged.
ENCODER_MODES = {
    "JPEG": {"L", "RGB", "CMYK"},
    "BMP": {"1", "L", "P", "RGB"},
    "PNG": {"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"},
    "GIF": {"1", "L", "P", "RGB", "RGBA"},
    "WEBP": {"RGB", "RGBA"},
}

# Working-buffer conversions for modes that cannot be resampled with filters
WORKING_MODE_CONVERSIONS = {
    "1": "L",
    "PA": "RGBA",
}

# Label used in messages for in-memory and stream sources
UNNAMED_SOURCE = "<unnamed>"
