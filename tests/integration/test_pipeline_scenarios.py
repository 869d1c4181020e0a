#!/usr/bin/env python3
"""
End-to-end thumbnail scenarios.
"""

from io import BytesIO

import pytest
from PIL import Image

from thumbnailer import Thumbnails
from thumbnailer.exceptions import (
    DestinationExistsError,
    ImageReadError,
    InvalidConfigurationError,
    OutputFormatNotSpecifiedError,
)


@pytest.mark.integration
@pytest.mark.thumbnail
class TestPipelineScenarios:
    """Test suite for representative end-to-end runs."""

    def test_exact_size_and_color_type(self, rgb_image, transparent_png):
        thumbnail = Thumbnails.of_images(rgb_image).size(50, 50).as_image()

        assert thumbnail.size == (50, 50)
        assert thumbnail.mode == "RGB"

        with_alpha = Thumbnails.of_files(transparent_png).size(50, 50).as_image()

        assert with_alpha.size == (50, 50)
        assert with_alpha.mode == "RGBA"
        assert with_alpha.getpixel((45, 25))[3] == 0

    @pytest.mark.parametrize(
        "configure",
        [
            lambda builder: builder.size(100, 100),
            lambda builder: builder.scale(0.5),
        ],
        ids=["size", "scale"],
    )
    def test_size_and_scale_select_resizer_alike(
        self, rgb_image, spy_resizer_factory, configure
    ):
        builder = configure(Thumbnails.of_images(rgb_image))

        thumbnail = builder.resizer_factory(spy_resizer_factory).as_image()

        assert thumbnail.size == (100, 100)
        spy_resizer_factory.get_resizer.assert_called_once_with((200, 200), (100, 100))

    def test_one_result_from_two_sources(self, rgb_image):
        builder = Thumbnails.of_images(rgb_image, rgb_image).size(100, 100)

        with pytest.raises(InvalidConfigurationError, match="multiple original images"):
            builder.as_image()

    def test_stream_without_output_format(self, rgb_image):
        out = BytesIO()

        with pytest.raises(
            OutputFormatNotSpecifiedError, match="Output format not specified."
        ):
            Thumbnails.of_images(rgb_image).size(50, 50).to_stream(out)

        assert out.getvalue() == b""

    def test_stream_falls_back_to_source_format(self, sample_png):
        out = BytesIO()

        Thumbnails.of_files(sample_png).size(50, 50).to_stream(out)

        with Image.open(BytesIO(out.getvalue())) as written:
            assert written.format == "PNG"
            assert written.size == (50, 50)

    @pytest.mark.parametrize("suffix,format_name", [("png", "PNG"), ("gif", "GIF")])
    def test_cmyk_jpeg_to_other_format(self, temp_dir, suffix, format_name):
        source = temp_dir / "cmyk.jpg"
        Image.new("CMYK", (200, 200), (0, 255, 255, 0)).save(source, "JPEG")
        destination = temp_dir / f"thumb.{suffix}"

        Thumbnails.of_files(source).size(50, 50).to_file(destination)

        with Image.open(destination) as written:
            assert written.format == format_name
            assert written.size == (50, 50)
            assert written.convert("RGB").getpixel((25, 25))[0] > 200

    def test_oversized_source_is_read_error(self, monkeypatch, sample_png):
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)

        with pytest.raises(ImageReadError):
            Thumbnails.of_files(sample_png).size(10, 10).as_image()

    def test_refuses_to_overwrite_own_source(self, sample_jpeg):
        original_length = len(sample_jpeg.read_bytes())

        with pytest.raises(DestinationExistsError, match="The destination file exists."):
            Thumbnails.of_files(sample_jpeg).size(50, 50).allow_overwrite(False).to_file(
                sample_jpeg
            )

        assert len(sample_jpeg.read_bytes()) == original_length

    def test_orientation_correction(self, tagged_jpeg_factory, upright_matcher):
        source = tagged_jpeg_factory(3)

        corrected = Thumbnails.of_files(source).size(100, 100).as_image()
        uncorrected = (
            Thumbnails.of_files(source)
            .size(100, 100)
            .use_exif_orientation(False)
            .as_image()
        )

        assert corrected.size == (100, 50)
        assert upright_matcher(corrected)
        assert not upright_matcher(uncorrected)

    @pytest.mark.parametrize("tag", [5, 6, 7, 8])
    def test_orientation_swaps_dimensions_before_sizing(
        self, tagged_jpeg_factory, upright_matcher, tag
    ):
        with Image.open(tagged_jpeg_factory(tag)) as stored:
            assert stored.size == (80, 160)

        thumbnail = Thumbnails.of_files(tagged_jpeg_factory(tag)).size(100, 100).as_image()

        assert thumbnail.size == (100, 50)
        assert upright_matcher(thumbnail)
