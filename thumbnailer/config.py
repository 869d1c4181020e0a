# thumbnailer/config.py
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .enums import LogLevel


class Settings(BaseSettings):
    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.WARNING,
        description="Logging level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_to_console: bool = Field(
        default=True,
        description="Install a stderr sink when configure_logging() is called",
    )

    # URL sources
    url_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=600,
        description="Timeout for fetching URL image sources",
    )
    url_user_agent: str = Field(
        default="thumbnailer",
        description="User-Agent header sent when fetching URL image sources",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v) -> LogLevel:
        """Validate log level is one of the allowed values"""
        if isinstance(v, LogLevel):
            return v
        allowed_levels = LogLevel.__members__.keys()
        v_upper = str(v).upper()
        if v_upper not in allowed_levels:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: {', '.join(allowed_levels)}"
            )
        return LogLevel[v_upper]

    model_config = SettingsConfigDict(
        env_prefix="THUMBNAILER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
