#!/usr/bin/env python3
"""
Unit tests for settings and the logger service.
"""

import pytest
from loguru import logger
from pydantic import ValidationError

from thumbnailer.config import Settings
from thumbnailer.enums import LogEmoji, LoggerName, LogLevel, LogSource
from thumbnailer.services.logger import configure_logging, get_service_logger
from thumbnailer.services.logger.logger_service import PACKAGE_NAME


@pytest.fixture
def captured_records():
    """Enable thumbnailer records and collect them in a list."""
    records = []
    logger.enable(PACKAGE_NAME)
    sink_id = logger.add(lambda message: records.append(message.record), level="TRACE")
    yield records
    logger.remove(sink_id)
    logger.disable(PACKAGE_NAME)


@pytest.mark.unit
class TestSettings:
    """Test suite for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        for name in ("LOG_LEVEL", "URL_TIMEOUT_SECONDS", "URL_USER_AGENT"):
            monkeypatch.delenv(f"THUMBNAILER_{name}", raising=False)

        settings = Settings(_env_file=None)

        assert settings.log_level == LogLevel.WARNING
        assert settings.url_timeout_seconds == 30.0
        assert settings.url_user_agent == "thumbnailer"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("THUMBNAILER_LOG_LEVEL", "debug")
        monkeypatch.setenv("THUMBNAILER_URL_TIMEOUT_SECONDS", "2.5")

        settings = Settings(_env_file=None)

        assert settings.log_level == LogLevel.DEBUG
        assert settings.url_timeout_seconds == 2.5

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError, match="Invalid log level"):
            Settings(_env_file=None, log_level="chatty")

    @pytest.mark.parametrize("timeout", [0, -1, 601])
    def test_timeout_bounds(self, timeout):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, url_timeout_seconds=timeout)


@pytest.mark.unit
class TestServiceLogger:
    """Test suite for the component logger."""

    def test_library_is_silent_by_default(self):
        records = []
        sink_id = logger.add(lambda message: records.append(message.record))
        try:
            get_service_logger(LoggerName.SYSTEM).warning("hidden")
        finally:
            logger.remove(sink_id)

        assert records == []

    def test_binds_name_and_source(self, captured_records):
        service_logger = get_service_logger(LoggerName.RESIZER, LogSource.PIPELINE)

        service_logger.info("resized", extra_context={"steps": 3})

        record = captured_records[-1]
        assert record["level"].name == "INFO"
        assert record["extra"]["logger_name"] == "resizer"
        assert record["extra"]["source"] == "pipeline"
        assert record["extra"]["steps"] == 3

    def test_emoji_priority(self, captured_records):
        plain = get_service_logger(LoggerName.SYSTEM)
        with_default = get_service_logger(
            LoggerName.SYSTEM, default_emoji=LogEmoji.STORAGE
        )

        plain.warning("a")
        with_default.warning("b")
        with_default.warning("c", emoji=LogEmoji.NETWORK)

        messages = [record["message"] for record in captured_records[-3:]]
        assert messages == [
            f"{LogEmoji.WARNING.value} a",
            f"{LogEmoji.STORAGE.value} b",
            f"{LogEmoji.NETWORK.value} c",
        ]

    def test_error_attaches_exception(self, captured_records):
        try:
            raise ValueError("boom")
        except ValueError as e:
            get_service_logger(LoggerName.SYSTEM).error("failed", exception=e)

        record = captured_records[-1]
        assert record["level"].name == "ERROR"
        assert record["exception"].type is ValueError

    def test_configure_logging_enables_console(self, capsys):
        settings = Settings(_env_file=None, log_level="INFO", log_to_console=True)

        try:
            configure_logging(settings)
            get_service_logger(LoggerName.SYSTEM).info("visible")
            get_service_logger(LoggerName.SYSTEM).debug("below threshold")
        finally:
            configure_logging(Settings(_env_file=None, log_to_console=False))
            logger.disable(PACKAGE_NAME)

        err = capsys.readouterr().err
        assert "visible" in err
        assert "below threshold" not in err
