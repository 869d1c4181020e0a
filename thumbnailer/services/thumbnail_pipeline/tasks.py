# thumbnailer/services/thumbnail_pipeline/tasks.py
"""
Thumbnail Task

One unit of work: a source, a sink and the shared parameter. Running a task
performs decode -> orient -> resize -> decide format -> write for that item
only; nothing is kept once it returns.
"""

from dataclasses import dataclass

from PIL import Image

from ...enums import LoggerName, LogEmoji, LogSource
from ..logger import get_service_logger
from .formats import decide_output_format
from .io.sinks import ImageSink
from .io.sources import ImageSource
from .makers import make_thumbnail
from .models import ThumbnailParameter
from .orientation import correct_orientation

logger = get_service_logger(
    LoggerName.THUMBNAIL_PIPELINE, LogSource.PIPELINE, default_emoji=LogEmoji.THUMBNAIL
)


@dataclass
class SourceSinkThumbnailTask:
    """Pairs one image source with one image sink under a parameter."""

    source: ImageSource
    sink: ImageSink
    parameter: ThumbnailParameter

    def read(self) -> Image.Image:
        """Decode the source and apply EXIF orientation correction."""
        decoded = self.source.read()
        return correct_orientation(
            decoded.image,
            decoded.orientation,
            enabled=self.parameter.use_exif_orientation,
        )

    def write(self, image: Image.Image) -> None:
        """Resolve the output format and hand the thumbnail to the sink."""
        format_name = None
        if self.sink.requires_format:
            format_name = decide_output_format(
                self.parameter.output_format,
                self.source.input_format_name,
                self.sink,
            )
        self.sink.write(image, format_name, self.parameter)


def create_thumbnail(task: SourceSinkThumbnailTask) -> None:
    """
    Run a thumbnail task.

    Args:
        task: Source, sink and parameter for one item

    Raises:
        ThumbnailerError: Any decode, format or write failure of this item
    """
    source_image = task.read()
    thumbnail = make_thumbnail(source_image, task.parameter)
    task.write(thumbnail)
    logger.debug(
        f"Created thumbnail {thumbnail.size[0]}x{thumbnail.size[1]} "
        f"from {task.source!r} to {task.sink!r}"
    )
