# thumbnailer/services/thumbnail_pipeline/thumbnails.py
"""
Pipeline Orchestrator

Fluent entry point of the library:

    Thumbnails.of("a.jpg", "b.jpg").size(160, 160).to_files(Rename.PREFIX_DOT_THUMBNAIL)

Thumbnails.of*/from* collect the sources; ThumbnailsBuilder collects the
parameter options and ends in one terminal operation. Every terminal
operation resolves the parameter once, validates cardinality and provenance
before the first image is decoded, then runs one task per source in order.

Per-item policy:
- an existing destination with overwriting disallowed is skipped in batch
  writes and raises DestinationExistsError for single-file writes
- any other failure stops the batch and propagates
"""

from os import PathLike
from pathlib import Path
from typing import IO, Any, Iterable, Iterator, List, Optional, Union

from PIL import Image

from ...enums import FormatSelector, LoggerName, LogEmoji, LogSource, ScalingMode
from ...exceptions import (
    DestinationExhaustedError,
    DestinationExistsError,
    InvalidConfigurationError,
    MissingArgumentError,
    OutputFormatNotSpecifiedError,
    SourceProvenanceError,
    ThumbnailerError,
)
from ..logger import get_service_logger
from .io.sinks import FileImageSink, ImageSink, InMemoryImageSink, StreamImageSink
from .io.sources import (
    FileImageSource,
    ImageSource,
    InMemoryImageSource,
    StreamImageSource,
    UrlImageSource,
    make_image_source,
)
from .models import ThumbnailParameter
from .parameters import ThumbnailParameterBuilder
from .rename import Rename
from .resizers import Resizer, ResizerFactory
from .tasks import SourceSinkThumbnailTask, create_thumbnail

logger = get_service_logger(
    LoggerName.THUMBNAIL_PIPELINE, LogSource.PIPELINE, default_emoji=LogEmoji.THUMBNAIL
)

FileName = Union[str, PathLike]


class ThumbnailsBuilder:
    """
    Collects thumbnail options for a fixed list of sources.

    Option methods return the builder so calls can be chained; they raise
    InvalidConfigurationError as soon as an option conflicts with an earlier
    one.
    """

    def __init__(self, sources: List[ImageSource]):
        if not sources:
            raise MissingArgumentError("One or more source images must be specified.")
        self._sources = list(sources)
        self._parameter_builder = ThumbnailParameterBuilder()

    @property
    def sources(self) -> List[ImageSource]:
        return list(self._sources)

    # -------------------------------------------------------------------------
    # Options
    # -------------------------------------------------------------------------

    def size(self, width: int, height: int) -> "ThumbnailsBuilder":
        self._parameter_builder.size(width, height)
        return self

    def width(self, width: int) -> "ThumbnailsBuilder":
        self._parameter_builder.width(width)
        return self

    def height(self, height: int) -> "ThumbnailsBuilder":
        self._parameter_builder.height(height)
        return self

    def force_size(self, width: int, height: int) -> "ThumbnailsBuilder":
        self._parameter_builder.force_size(width, height)
        return self

    def scale(
        self, factor: float, height_factor: Optional[float] = None
    ) -> "ThumbnailsBuilder":
        self._parameter_builder.scale(factor, height_factor)
        return self

    def keep_aspect_ratio(self, keep: bool) -> "ThumbnailsBuilder":
        self._parameter_builder.keep_aspect_ratio(keep)
        return self

    def fit_within_dimensions(self, fit: bool) -> "ThumbnailsBuilder":
        self._parameter_builder.fit_within_dimensions(fit)
        return self

    def output_format(self, format_name: str) -> "ThumbnailsBuilder":
        self._parameter_builder.output_format(format_name)
        return self

    def use_original_format(self) -> "ThumbnailsBuilder":
        self._parameter_builder.use_original_format()
        return self

    def determine_output_format(self) -> "ThumbnailsBuilder":
        self._parameter_builder.determine_output_format()
        return self

    def output_format_type(self, format_type: str) -> "ThumbnailsBuilder":
        self._parameter_builder.output_format_type(format_type)
        return self

    def output_quality(self, quality: float) -> "ThumbnailsBuilder":
        self._parameter_builder.output_quality(quality)
        return self

    def image_type(self, mode: str) -> "ThumbnailsBuilder":
        self._parameter_builder.image_type(mode)
        return self

    def scaling_mode(self, mode: ScalingMode) -> "ThumbnailsBuilder":
        self._parameter_builder.scaling_mode(mode)
        return self

    def resizer(self, resizer: Resizer) -> "ThumbnailsBuilder":
        self._parameter_builder.resizer(resizer)
        return self

    def resizer_factory(self, factory: ResizerFactory) -> "ThumbnailsBuilder":
        self._parameter_builder.resizer_factory(factory)
        return self

    def allow_overwrite(self, allow: bool) -> "ThumbnailsBuilder":
        self._parameter_builder.allow_overwrite(allow)
        return self

    def use_exif_orientation(self, use: bool) -> "ThumbnailsBuilder":
        self._parameter_builder.use_exif_orientation(use)
        return self

    def build_parameter(self) -> ThumbnailParameter:
        """Resolve the options collected so far."""
        return self._parameter_builder.build()

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def _check_single_source(self, message: str) -> None:
        if len(self._sources) > 1:
            raise InvalidConfigurationError(message)

    def _check_file_provenance(self) -> None:
        for source in self._sources:
            if source.source_file is None:
                raise SourceProvenanceError(
                    "Cannot create thumbnails to files if original images are "
                    "not from files."
                )

    def _check_stream_format(self, parameter: ThumbnailParameter) -> None:
        if parameter.output_format != FormatSelector.DETERMINE:
            return
        for source in self._sources:
            if isinstance(source, InMemoryImageSource):
                raise OutputFormatNotSpecifiedError("Output format not specified.")

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    def _run(
        self, source: ImageSource, sink: ImageSink, parameter: ThumbnailParameter
    ) -> None:
        task = SourceSinkThumbnailTask(source=source, sink=sink, parameter=parameter)
        try:
            create_thumbnail(task)
        except DestinationExistsError:
            raise
        except ThumbnailerError as e:
            logger.error(
                f"Failed to create thumbnail from {source!r}",
                exception=e,
                emoji=LogEmoji.FAILED,
            )
            raise

    def _generate_images(self, parameter: ThumbnailParameter) -> Iterator[Image.Image]:
        for source in self._sources:
            sink = InMemoryImageSink()
            self._run(source, sink, parameter)
            yield sink.image

    def _write_files(
        self,
        destinations: Union[Iterable[FileName], Rename],
        destination_dir: Optional[FileName],
    ) -> List[Path]:
        if destinations is None:
            raise MissingArgumentError(
                "Destination file names or a rename strategy must be specified."
            )
        if isinstance(destinations, (str, PathLike)):
            raise InvalidConfigurationError(
                "Destination files must be an iterable of file names; use "
                "to_file() for a single destination."
            )

        parameter = self.build_parameter()

        directory: Optional[Path] = None
        if destination_dir is not None:
            directory = Path(destination_dir)
            if not directory.is_dir():
                raise InvalidConfigurationError("Given destination is not a directory.")

        if isinstance(destinations, Rename):
            self._check_file_provenance()
            names = self._renamed_destinations(destinations, directory, parameter)
        else:
            names = self._joined_destinations(destinations, directory)

        logger.info(
            f"Creating thumbnails for {len(self._sources)} source images",
            emoji=LogEmoji.PROCESSING,
        )

        written: List[Path] = []
        skipped = 0
        for source in self._sources:
            try:
                destination = next(names)
            except StopIteration:
                raise DestinationExhaustedError(
                    "Not enough file names provided by iterator."
                ) from None

            sink = FileImageSink(destination, allow_overwrite=parameter.allow_overwrite)
            try:
                self._run(source, sink, parameter)
            except DestinationExistsError:
                skipped += 1
                logger.debug(
                    f"Skipped {source!r}: {sink.destination_file} exists",
                    emoji=LogEmoji.SKIPPED,
                )
                continue
            written.append(sink.destination_file)

        logger.info(
            f"Created {len(written)} thumbnails ({skipped} skipped)",
            emoji=LogEmoji.COMPLETED,
        )
        return written

    def _renamed_destinations(
        self,
        rename: Rename,
        directory: Optional[Path],
        parameter: ThumbnailParameter,
    ) -> Iterator[Path]:
        for source in self._sources:
            source_file = source.source_file
            parent = directory if directory is not None else source_file.parent
            yield parent / rename.apply(source_file.name, parameter)

    @staticmethod
    def _joined_destinations(
        destinations: Iterable[FileName], directory: Optional[Path]
    ) -> Iterator[Path]:
        for destination in destinations:
            if directory is None:
                yield Path(destination)
            else:
                yield directory / destination

    # -------------------------------------------------------------------------
    # Terminal operations
    # -------------------------------------------------------------------------

    def as_image(self) -> Image.Image:
        """
        Create one thumbnail and return it as a PIL image.

        Raises:
            InvalidConfigurationError: More than one source was given
        """
        self._check_single_source(
            "Cannot create one thumbnail from multiple original images."
        )
        parameter = self.build_parameter()

        sink = InMemoryImageSink()
        self._run(self._sources[0], sink, parameter)
        return sink.image

    def as_images(self) -> List[Image.Image]:
        """Create a thumbnail for every source and return them in source order."""
        parameter = self.build_parameter()
        return list(self._generate_images(parameter))

    def iter_images(self) -> Iterator[Image.Image]:
        """
        Lazily create thumbnails, one per pull, in source order.

        The parameter is resolved immediately; each image is decoded and
        resized only when requested. The iterator is single-pass.
        """
        parameter = self.build_parameter()
        return self._generate_images(parameter)

    def to_file(self, path: FileName) -> None:
        """
        Write one thumbnail to a file.

        Raises:
            InvalidConfigurationError: More than one source was given
            DestinationExistsError: The file exists and overwriting is disallowed
        """
        self._check_single_source("Cannot output multiple thumbnails to one file.")
        if path is None:
            raise MissingArgumentError("Destination file must be specified.")
        parameter = self.build_parameter()

        sink = FileImageSink(path, allow_overwrite=parameter.allow_overwrite)
        self._run(self._sources[0], sink, parameter)

    def to_files(
        self,
        destinations: Union[Iterable[FileName], Rename],
        destination_dir: Optional[FileName] = None,
    ) -> None:
        """
        Write a thumbnail for every source.

        Args:
            destinations: Iterable of file names consumed one per source, or a
                Rename strategy applied to each source's file name
            destination_dir: Directory the destinations are placed in; with a
                Rename strategy, defaults to each source's own directory

        Raises:
            SourceProvenanceError: A Rename strategy was given for a source
                that is not a file
            DestinationExhaustedError: The file names ran out before the sources
        """
        self._write_files(destinations, destination_dir)

    def as_files(
        self,
        destinations: Union[Iterable[FileName], Rename],
        destination_dir: Optional[FileName] = None,
    ) -> List[Path]:
        """
        Same as to_files(), returning the paths actually written.

        Destinations skipped because they already exist are not included.
        """
        return self._write_files(destinations, destination_dir)

    def to_stream(self, stream: IO[bytes]) -> None:
        """
        Write one encoded thumbnail to a binary stream.

        Raises:
            InvalidConfigurationError: More than one source was given
            OutputFormatNotSpecifiedError: The source is an in-memory image and
                no output format was set
        """
        self._check_single_source(
            "Cannot output multiple thumbnails to a single stream."
        )
        if stream is None:
            raise MissingArgumentError("Output stream must be specified.")
        parameter = self.build_parameter()
        self._check_stream_format(parameter)

        self._run(self._sources[0], StreamImageSink(stream), parameter)

    def to_streams(self, streams: Iterable[IO[bytes]]) -> None:
        """
        Write one encoded thumbnail per source, consuming one stream per source.

        Raises:
            DestinationExhaustedError: The streams ran out before the sources
        """
        if streams is None:
            raise MissingArgumentError("Output streams must be specified.")
        parameter = self.build_parameter()
        self._check_stream_format(parameter)

        iterator = iter(streams)
        for source in self._sources:
            try:
                stream = next(iterator)
            except StopIteration:
                raise DestinationExhaustedError(
                    "Not enough output streams provided by iterator."
                ) from None
            self._run(source, StreamImageSink(stream), parameter)


class Thumbnails:
    """
    Factory for ThumbnailsBuilder.

    Example:
        image = Thumbnails.of("photo.jpg").size(200, 200).as_image()
    """

    @staticmethod
    def _builder(sources: Iterable[ImageSource]) -> ThumbnailsBuilder:
        return ThumbnailsBuilder(list(sources))

    @staticmethod
    def _require(items: Any) -> List[Any]:
        if items is None:
            raise MissingArgumentError("Cannot specify None for source images.")
        items = list(items)
        if not items:
            raise MissingArgumentError("One or more source images must be specified.")
        return items

    @staticmethod
    def of(*sources: Any) -> ThumbnailsBuilder:
        """
        Start from any mix of file names, paths, URLs, streams and PIL images.

        Strings beginning with http:// or https:// are fetched as URLs.
        """
        return Thumbnails._builder(
            make_image_source(s) for s in Thumbnails._require(sources)
        )

    @staticmethod
    def of_files(*files: FileName) -> ThumbnailsBuilder:
        return Thumbnails.from_files(files)

    @staticmethod
    def of_urls(*urls: str) -> ThumbnailsBuilder:
        return Thumbnails.from_urls(urls)

    @staticmethod
    def of_streams(*streams: IO[bytes]) -> ThumbnailsBuilder:
        return Thumbnails.from_streams(streams)

    @staticmethod
    def of_images(*images: Image.Image) -> ThumbnailsBuilder:
        return Thumbnails.from_images(images)

    @staticmethod
    def from_filenames(filenames: Iterable[str]) -> ThumbnailsBuilder:
        return Thumbnails.from_files(filenames)

    @staticmethod
    def from_files(files: Iterable[FileName]) -> ThumbnailsBuilder:
        return Thumbnails._builder(
            FileImageSource(f) for f in Thumbnails._require(files)
        )

    @staticmethod
    def from_urls(urls: Iterable[str]) -> ThumbnailsBuilder:
        return Thumbnails._builder(
            UrlImageSource(u) for u in Thumbnails._require(urls)
        )

    @staticmethod
    def from_streams(streams: Iterable[IO[bytes]]) -> ThumbnailsBuilder:
        return Thumbnails._builder(
            StreamImageSource(s) for s in Thumbnails._require(streams)
        )

    @staticmethod
    def from_images(images: Iterable[Image.Image]) -> ThumbnailsBuilder:
        return Thumbnails._builder(
            InMemoryImageSource(i) for i in Thumbnails._require(images)
        )
