#!/usr/bin/env python3
"""
Unit tests for thumbnail dimension computation and the thumbnail maker.

Tests:
- Aspect-fit, cover and stretch sizing
- Scale rounding (round half up, minimum 1 pixel)
- Working mode selection
- Resizer factory consultation
"""

import pytest
from PIL import Image

from thumbnailer.services.thumbnail_pipeline.makers import (
    compute_thumbnail_size,
    make_thumbnail,
)
from thumbnailer.services.thumbnail_pipeline.parameters import ThumbnailParameterBuilder
from thumbnailer.services.thumbnail_pipeline.utils.thumbnail_utils import (
    calculate_scaled_dimensions,
    calculate_thumbnail_dimensions,
    get_file_extension,
    round_half_up,
    working_mode,
)


@pytest.mark.unit
@pytest.mark.thumbnail
class TestDimensionCalculation:
    """Test suite for target dimension computation."""

    @pytest.mark.parametrize(
        "value,expected",
        [(0.5, 1), (1.5, 2), (2.5, 3), (2.4999, 2), (0.49, 0), (10.0, 10)],
    )
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    @pytest.mark.parametrize(
        "source,target,expected",
        [
            ((200, 200), (50, 50), (50, 50)),
            ((800, 600), (200, 200), (200, 150)),
            ((600, 800), (200, 200), (150, 200)),
            ((1000, 3), (100, 100), (100, 1)),
            ((3, 1000), (100, 100), (1, 100)),
            ((640, 480), (100, 2**31 - 1), (100, 75)),
            ((640, 480), (2**31 - 1, 60), (80, 60)),
        ],
    )
    def test_aspect_fit(self, source, target, expected):
        assert calculate_thumbnail_dimensions(source, target) == expected

    @pytest.mark.parametrize(
        "source,target",
        [((200, 100), (50, 50)), ((123, 457), (64, 32)), ((999, 1), (10, 10))],
    )
    def test_aspect_fit_never_exceeds_bounds(self, source, target):
        width, height = calculate_thumbnail_dimensions(source, target)

        assert width <= target[0] and height <= target[1]
        assert width == target[0] or height == target[1]

    def test_cover(self):
        result = calculate_thumbnail_dimensions(
            (800, 600), (200, 200), fit_within_dimensions=False
        )

        assert result == (267, 200)

    def test_stretch(self):
        result = calculate_thumbnail_dimensions(
            (800, 600), (50, 70), keep_aspect_ratio=False
        )

        assert result == (50, 70)

    @pytest.mark.parametrize(
        "source,factor,expected",
        [
            ((200, 200), 0.5, (100, 100)),
            ((101, 33), 0.5, (51, 17)),
            ((3, 3), 0.1, (1, 1)),
            ((100, 50), 2.0, (200, 100)),
        ],
    )
    def test_scaled_dimensions(self, source, factor, expected):
        assert calculate_scaled_dimensions(source, factor, factor) == expected

    def test_scaled_dimensions_two_factors(self):
        assert calculate_scaled_dimensions((100, 100), 0.5, 2.0) == (50, 200)

    def test_compute_size_from_scale_and_size_agree(self):
        by_size = ThumbnailParameterBuilder().size(100, 100).build()
        by_scale = ThumbnailParameterBuilder().scale(0.5).build()

        assert compute_thumbnail_size((200, 200), by_size) == (100, 100)
        assert compute_thumbnail_size((200, 200), by_scale) == (100, 100)


@pytest.mark.unit
@pytest.mark.thumbnail
class TestThumbnailUtils:
    """Test suite for small helpers."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("photo.jpg", "jpg"),
            ("archive.tar.PNG", "PNG"),
            ("noext", None),
            ("trailing.", None),
            ("/some/dir.d/file", None),
        ],
    )
    def test_get_file_extension(self, name, expected):
        assert get_file_extension(name) == expected

    @pytest.mark.parametrize(
        "mode,expected",
        [("RGB", "RGB"), ("RGBA", "RGBA"), ("L", "L"), ("1", "L"), ("PA", "RGBA")],
    )
    def test_working_mode(self, mode, expected):
        assert working_mode(Image.new(mode, (4, 4))) == expected

    def test_working_mode_palette(self):
        opaque = Image.new("P", (4, 4))
        transparent = Image.new("P", (4, 4))
        transparent.info["transparency"] = 0

        assert working_mode(opaque) == "RGB"
        assert working_mode(transparent) == "RGBA"

    def test_working_mode_explicit(self):
        assert working_mode(Image.new("RGBA", (4, 4)), "L") == "L"


@pytest.mark.unit
@pytest.mark.thumbnail
class TestMakeThumbnail:
    """Test suite for make_thumbnail."""

    def test_factory_consulted_once_with_source_and_target(
        self, rgb_image, spy_resizer_factory
    ):
        parameter = (
            ThumbnailParameterBuilder()
            .size(100, 100)
            .resizer_factory(spy_resizer_factory)
            .build()
        )

        result = make_thumbnail(rgb_image, parameter)

        assert result.size == (100, 100)
        spy_resizer_factory.get_resizer.assert_called_once_with((200, 200), (100, 100))

    def test_preserves_alpha(self):
        img = Image.new("RGBA", (200, 200), (0, 0, 0, 0))
        parameter = ThumbnailParameterBuilder().size(50, 50).build()

        result = make_thumbnail(img, parameter)

        assert result.mode == "RGBA"
        assert result.getpixel((10, 10))[3] == 0

    def test_image_type_converts(self, rgb_image):
        parameter = ThumbnailParameterBuilder().size(50, 50).image_type("L").build()

        assert make_thumbnail(rgb_image, parameter).mode == "L"

    def test_stretch_with_force_size(self, rgb_image):
        parameter = ThumbnailParameterBuilder().force_size(40, 120).build()

        assert make_thumbnail(rgb_image, parameter).size == (40, 120)
