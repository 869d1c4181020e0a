# thumbnailer/services/logger/logger_service.py
"""
Centralized Logger Service for thumbnailer.

Thin layer over loguru that gives every component a pre-configured logger:
- Type-safe enum-based logger names and sources
- Emoji prefixes with a three-tier priority system
- Structured context bound onto each loguru record

The library disables its own loguru records on import; applications opt in
with ``configure_logging()``.
"""

import sys
from typing import Any, Dict, Optional

from loguru import logger

from ...config import Settings, get_settings
from ...enums import LogEmoji, LoggerName, LogLevel, LogSource

PACKAGE_NAME = "thumbnailer"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[logger_name]}</cyan>:<cyan>{extra[source]}</cyan> - "
    "<level>{message}</level>"
)

_console_sink_id: Optional[int] = None


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Enable thumbnailer log records and install a console sink.

    Args:
        settings: Settings to read the level from (defaults to get_settings())
    """
    global _console_sink_id

    settings = settings or get_settings()
    logger.enable(PACKAGE_NAME)

    if _console_sink_id is not None:
        logger.remove(_console_sink_id)
        _console_sink_id = None

    if settings.log_to_console:
        _console_sink_id = logger.add(
            sys.stderr,
            level=LogLevel(settings.log_level).value,
            format=CONSOLE_FORMAT,
            filter=lambda record: record["extra"].get("package") == PACKAGE_NAME,
        )


class ServiceLogger:
    """
    Logger bound to one component.

    Emoji priority system (highest to lowest):
    1. Direct: emoji passed to the log method call
    2. Instance-set: default emoji given when the logger was created
    3. Fallback: emoji derived from the log level
    """

    def __init__(
        self,
        logger_name: LoggerName,
        source: LogSource = LogSource.SYSTEM,
        default_emoji: Optional[LogEmoji] = None,
    ):
        self.logger_name = logger_name
        self.source = source
        self.default_emoji = default_emoji
        self._logger = logger.bind(
            package=PACKAGE_NAME,
            logger_name=logger_name.value,
            source=source.value,
        )

    def _resolve_emoji(
        self, method_emoji: Optional[LogEmoji], fallback_emoji: LogEmoji
    ) -> LogEmoji:
        if method_emoji is not None:
            return method_emoji
        if self.default_emoji is not None:
            return self.default_emoji
        return fallback_emoji

    def _log(
        self,
        level: LogLevel,
        message: str,
        emoji: LogEmoji,
        extra_context: Optional[Dict[str, Any]] = None,
        exception: Optional[BaseException] = None,
    ) -> None:
        bound = self._logger.bind(**extra_context) if extra_context else self._logger
        if exception is not None:
            bound = bound.opt(exception=exception)
        bound.log(level.value, f"{emoji.value} {message}")

    def error(
        self,
        message: str,
        exception: Optional[BaseException] = None,
        extra_context: Optional[Dict[str, Any]] = None,
        emoji: Optional[LogEmoji] = None,
    ) -> None:
        """Log an error with emoji priority system."""
        self._log(
            LogLevel.ERROR,
            message,
            self._resolve_emoji(emoji, LogEmoji.ERROR),
            extra_context,
            exception,
        )

    def warning(
        self,
        message: str,
        extra_context: Optional[Dict[str, Any]] = None,
        emoji: Optional[LogEmoji] = None,
    ) -> None:
        """Log a warning with emoji priority system."""
        self._log(
            LogLevel.WARNING,
            message,
            self._resolve_emoji(emoji, LogEmoji.WARNING),
            extra_context,
        )

    def info(
        self,
        message: str,
        extra_context: Optional[Dict[str, Any]] = None,
        emoji: Optional[LogEmoji] = None,
    ) -> None:
        """Log an info message with emoji priority system."""
        self._log(
            LogLevel.INFO,
            message,
            self._resolve_emoji(emoji, LogEmoji.INFO),
            extra_context,
        )

    def debug(
        self,
        message: str,
        extra_context: Optional[Dict[str, Any]] = None,
        emoji: Optional[LogEmoji] = None,
    ) -> None:
        """Log a debug message with emoji priority system."""
        self._log(
            LogLevel.DEBUG,
            message,
            self._resolve_emoji(emoji, LogEmoji.DEBUG),
            extra_context,
        )


def get_service_logger(
    logger_name: LoggerName,
    source: LogSource = LogSource.SYSTEM,
    default_emoji: Optional[LogEmoji] = None,
) -> ServiceLogger:
    """
    Factory function to create a pre-configured logger for a specific component.

    Args:
        logger_name: The logger name enum to use for all calls
        source: The log source enum to use for all calls (defaults to SYSTEM)
        default_emoji: Instance-level default emoji that overrides level-based fallbacks

    Returns:
        ServiceLogger instance with error, warning, info, debug methods

    Example:
        from ..logger import get_service_logger
        from ...enums import LoggerName, LogSource

        logger = get_service_logger(LoggerName.RESIZER, LogSource.PIPELINE)
        logger.debug("Resized image")
    """
    return ServiceLogger(logger_name, source, default_emoji)
