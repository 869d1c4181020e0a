#!/usr/bin/env python3
# tests/conftest.py
"""
Pytest configuration and shared fixtures for thumbnailer tests.
"""

import shutil
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from PIL import Image, ImageDraw

from thumbnailer.services.thumbnail_pipeline.resizers import (
    DefaultResizerFactory,
    ResizerFactory,
)

# Upright 2x2 quadrant pattern used by orientation tests
QUADRANT_COLORS = {
    "top_left": (255, 0, 0),
    "top_right": (0, 255, 0),
    "bottom_left": (0, 0, 255),
    "bottom_right": (255, 255, 255),
}

# How a camera stores an upright scene for each EXIF orientation tag
STORED_TRANSFORMS = {
    1: None,
    2: Image.Transpose.FLIP_LEFT_RIGHT,
    3: Image.Transpose.ROTATE_180,
    4: Image.Transpose.FLIP_TOP_BOTTOM,
    5: Image.Transpose.TRANSPOSE,
    6: Image.Transpose.ROTATE_90,
    7: Image.Transpose.TRANSVERSE,
    8: Image.Transpose.ROTATE_270,
}


def make_quadrant_image(size=(160, 80)) -> Image.Image:
    """Create an RGB image with four solid quadrants."""
    width, height = size
    img = Image.new("RGB", size)
    draw = ImageDraw.Draw(img)
    half_w, half_h = width // 2, height // 2
    draw.rectangle([0, 0, half_w - 1, half_h - 1], fill=QUADRANT_COLORS["top_left"])
    draw.rectangle([half_w, 0, width - 1, half_h - 1], fill=QUADRANT_COLORS["top_right"])
    draw.rectangle([0, half_h, half_w - 1, height - 1], fill=QUADRANT_COLORS["bottom_left"])
    draw.rectangle(
        [half_w, half_h, width - 1, height - 1], fill=QUADRANT_COLORS["bottom_right"]
    )
    return img


def quadrant_samples(img: Image.Image) -> dict:
    """Sample the centre of each quadrant."""
    rgb = img.convert("RGB")
    width, height = rgb.size
    return {
        "top_left": rgb.getpixel((width // 4, height // 4)),
        "top_right": rgb.getpixel((3 * width // 4, height // 4)),
        "bottom_left": rgb.getpixel((width // 4, 3 * height // 4)),
        "bottom_right": rgb.getpixel((3 * width // 4, 3 * height // 4)),
    }


def colors_close(actual, expected, tolerance=40) -> bool:
    return all(abs(a - e) <= tolerance for a, e in zip(actual, expected))


def matches_upright(img: Image.Image) -> bool:
    samples = quadrant_samples(img)
    return all(
        colors_close(samples[name], color) for name, color in QUADRANT_COLORS.items()
    )


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files."""
    temp_dir = tempfile.mkdtemp()
    yield Path(temp_dir)
    shutil.rmtree(temp_dir)


@pytest.fixture
def rgb_image():
    """200x200 in-memory RGB image."""
    img = Image.new("RGB", (200, 200), color="red")
    draw = ImageDraw.Draw(img)
    draw.rectangle([50, 50, 150, 150], fill="blue")
    return img


@pytest.fixture
def sample_jpeg(temp_dir, rgb_image):
    """200x200 JPEG file."""
    path = temp_dir / "sample.jpg"
    rgb_image.save(path, "JPEG")
    return path


@pytest.fixture
def sample_png(temp_dir, rgb_image):
    """200x200 PNG file."""
    path = temp_dir / "sample.png"
    rgb_image.save(path, "PNG")
    return path


@pytest.fixture
def transparent_png(temp_dir):
    """200x200 RGBA PNG with a fully transparent half."""
    img = Image.new("RGBA", (200, 200), (255, 0, 0, 255))
    draw = ImageDraw.Draw(img)
    draw.rectangle([100, 0, 199, 199], fill=(0, 0, 0, 0))
    path = temp_dir / "transparent.png"
    img.save(path, "PNG")
    return path


@pytest.fixture
def tagged_jpeg_factory(temp_dir):
    """Create JPEGs of the upright quadrant scene stored with an orientation tag."""

    def factory(tag: int, name: str = None) -> Path:
        upright = make_quadrant_image()
        transform = STORED_TRANSFORMS[tag]
        stored = upright.transpose(transform) if transform is not None else upright

        exif = Image.Exif()
        exif[0x0112] = tag
        path = temp_dir / (name or f"orientation_{tag}.jpg")
        stored.save(path, "JPEG", quality=95, exif=exif.tobytes())
        return path

    return factory


@pytest.fixture
def spy_resizer_factory():
    """ResizerFactory spy delegating to the default selection policy."""
    return MagicMock(spec=ResizerFactory, wraps=DefaultResizerFactory())


@pytest.fixture
def quadrant_image():
    """Upright 160x80 quadrant scene."""
    return make_quadrant_image()


@pytest.fixture
def upright_matcher():
    """Predicate telling whether an image shows the upright quadrant scene."""
    return matches_upright
