#!/usr/bin/env python3
"""
Unit tests for image sources and sinks.
"""

from io import BytesIO
from unittest.mock import MagicMock, patch

import pytest
import requests
from PIL import Image

from thumbnailer.config import Settings
from thumbnailer.enums import Orientation
from thumbnailer.exceptions import (
    DestinationExistsError,
    ImageReadError,
    ImageWriteError,
    SourceNotFoundError,
    UnsupportedFormatError,
)
from thumbnailer.services.thumbnail_pipeline.io.sinks import (
    FileImageSink,
    InMemoryImageSink,
    StreamImageSink,
)
from thumbnailer.services.thumbnail_pipeline.io.sources import (
    FileImageSource,
    InMemoryImageSource,
    StreamImageSource,
    UrlImageSource,
    make_image_source,
)


def png_bytes(size=(30, 20), color="green") -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, "PNG")
    return buffer.getvalue()


@pytest.mark.unit
class TestImageSources:
    """Test suite for image sources."""

    # ============================================================================
    # FILE SOURCE
    # ============================================================================

    def test_file_source_reads_format(self, sample_jpeg):
        source = FileImageSource(sample_jpeg)

        decoded = source.read()

        assert decoded.image.size == (200, 200)
        assert decoded.format_name == "JPEG"
        assert decoded.orientation is None
        assert source.input_format_name == "JPEG"
        assert source.source_file == sample_jpeg

    def test_file_source_reads_orientation(self, tagged_jpeg_factory):
        decoded = FileImageSource(tagged_jpeg_factory(6)).read()

        assert decoded.orientation == Orientation.RIGHT_TOP

    def test_file_source_missing(self, temp_dir):
        with pytest.raises(SourceNotFoundError):
            FileImageSource(temp_dir / "missing.png").read()

    def test_file_source_undecodable(self, temp_dir):
        path = temp_dir / "garbage.png"
        path.write_bytes(b"this is not an image")

        with pytest.raises(UnsupportedFormatError) as exc_info:
            FileImageSource(path).read()

        assert exc_info.value.format_name == UnsupportedFormatError.UNKNOWN

    def test_file_source_truncated(self, temp_dir, sample_png):
        path = temp_dir / "truncated.png"
        path.write_bytes(sample_png.read_bytes()[:100])

        with pytest.raises(ImageReadError):
            FileImageSource(path).read()

    def test_file_source_over_pixel_limit(self, monkeypatch, sample_png):
        """Test Pillow's decompression bomb guard surfaces as a read error."""
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)

        with pytest.raises(ImageReadError) as exc_info:
            FileImageSource(sample_png).read()

        assert isinstance(exc_info.value.__cause__, Image.DecompressionBombError)

    def test_stream_source_over_pixel_limit(self, monkeypatch):
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

        with pytest.raises(ImageReadError):
            StreamImageSource(BytesIO(png_bytes())).read()

    # ============================================================================
    # STREAM / IN-MEMORY SOURCES
    # ============================================================================

    def test_stream_source(self):
        stream = BytesIO(png_bytes())

        decoded = StreamImageSource(stream).read()

        assert decoded.format_name == "PNG"
        assert decoded.image.size == (30, 20)
        assert not stream.closed

    def test_stream_source_has_no_file(self):
        assert StreamImageSource(BytesIO()).source_file is None

    def test_in_memory_source(self, rgb_image):
        source = InMemoryImageSource(rgb_image)

        decoded = source.read()

        assert decoded.image is rgb_image
        assert decoded.format_name is None
        assert source.input_format_name is None
        assert source.source_file is None

    # ============================================================================
    # URL SOURCE
    # ============================================================================

    @patch("thumbnailer.services.thumbnail_pipeline.io.sources.requests.get")
    def test_url_source(self, mock_get):
        response = MagicMock()
        response.content = png_bytes()
        mock_get.return_value.__enter__.return_value = response
        settings = Settings(url_timeout_seconds=5, url_user_agent="tests")

        decoded = UrlImageSource("https://example.com/a.png", settings).read()

        assert decoded.format_name == "PNG"
        mock_get.assert_called_once_with(
            "https://example.com/a.png",
            timeout=5,
            headers={"User-Agent": "tests"},
        )
        response.raise_for_status.assert_called_once()

    @patch("thumbnailer.services.thumbnail_pipeline.io.sources.requests.get")
    def test_url_source_request_failure(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(ImageReadError) as exc_info:
            UrlImageSource("https://example.com/a.png", Settings()).read()

        assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)

    @patch("thumbnailer.services.thumbnail_pipeline.io.sources.requests.get")
    def test_url_source_http_error(self, mock_get):
        response = MagicMock()
        response.raise_for_status.side_effect = requests.exceptions.HTTPError("404")
        mock_get.return_value.__enter__.return_value = response

        with pytest.raises(ImageReadError):
            UrlImageSource("https://example.com/missing.png", Settings()).read()

    # ============================================================================
    # DISPATCH
    # ============================================================================

    def test_make_image_source(self, rgb_image, sample_png):
        assert isinstance(make_image_source(str(sample_png)), FileImageSource)
        assert isinstance(make_image_source(sample_png), FileImageSource)
        assert isinstance(make_image_source("http://example.com/x.png"), UrlImageSource)
        assert isinstance(make_image_source(BytesIO()), StreamImageSource)
        assert isinstance(make_image_source(rgb_image), InMemoryImageSource)

    def test_make_image_source_rejects_unknown(self):
        with pytest.raises(TypeError):
            make_image_source(42)


@pytest.mark.unit
class TestImageSinks:
    """Test suite for image sinks."""

    def test_file_sink_writes(self, temp_dir, rgb_image):
        sink = FileImageSink(temp_dir / "out.png")

        sink.write(rgb_image, "PNG")

        with Image.open(temp_dir / "out.png") as img:
            assert img.format == "PNG"

    def test_file_sink_appends_extension_on_mismatch(self, temp_dir, rgb_image):
        sink = FileImageSink(temp_dir / "out.png")

        sink.write(rgb_image, "JPEG")

        assert sink.destination_file == temp_dir / "out.png.jpg"
        assert (temp_dir / "out.png.jpg").exists()
        assert not (temp_dir / "out.png").exists()

    def test_file_sink_appends_extension_when_missing(self, temp_dir, rgb_image):
        sink = FileImageSink(temp_dir / "out")

        sink.write(rgb_image, "PNG")

        assert sink.destination_file == temp_dir / "out.png"

    def test_file_sink_matching_extension_case_insensitive(self, temp_dir, rgb_image):
        sink = FileImageSink(temp_dir / "out.JPEG")

        sink.write(rgb_image, "JPEG")

        assert sink.destination_file == temp_dir / "out.JPEG"

    def test_file_sink_refuses_overwrite(self, temp_dir, rgb_image):
        path = temp_dir / "exists.png"
        path.write_bytes(b"original")
        sink = FileImageSink(path, allow_overwrite=False)

        with pytest.raises(DestinationExistsError, match="The destination file exists."):
            sink.write(rgb_image, "PNG")

        assert path.read_bytes() == b"original"

    def test_file_sink_encode_failure_keeps_existing_file(self, temp_dir, rgb_image):
        path = temp_dir / "keep.png"
        path.write_bytes(b"original")
        sink = FileImageSink(path)

        with patch.object(Image.Image, "save", side_effect=OSError("encoder broke")):
            with pytest.raises(ImageWriteError):
                sink.write(rgb_image, "PNG")

        assert path.read_bytes() == b"original"

    def test_file_sink_preferred_format(self, temp_dir):
        assert FileImageSink(temp_dir / "a.GIF").preferred_output_format() == "GIF"
        assert FileImageSink(temp_dir / "a").preferred_output_format() is None

        with pytest.raises(UnsupportedFormatError):
            FileImageSink(temp_dir / "a.nope").preferred_output_format()

    def test_stream_sink_writes_and_leaves_open(self, rgb_image):
        stream = BytesIO()

        StreamImageSink(stream).write(rgb_image, "PNG")

        assert not stream.closed
        assert stream.getvalue().startswith(b"\x89PNG")

    def test_stream_sink_requires_format(self, rgb_image):
        with pytest.raises(UnsupportedFormatError):
            StreamImageSink(BytesIO()).write(rgb_image, None)

    def test_in_memory_sink(self, rgb_image):
        sink = InMemoryImageSink()

        sink.write(rgb_image)

        assert sink.image is rgb_image
        assert sink.requires_format is False
        assert sink.destination_file is None
