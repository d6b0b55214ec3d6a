"""Settings for project loading and the command line tools.

Values come from the environment (``RBXPROJECT_*``) or a ``.env`` file in the
working directory.
"""

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Port used for live sync when a project does not set servePort.
DEFAULT_SERVE_PORT = 34872


class ProjectSettings(BaseSettings):
    """Settings for loading projects."""

    model_config = SettingsConfigDict(
        env_prefix="RBXPROJECT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Log level for command line tools")
    default_serve_port: int = Field(
        default=DEFAULT_SERVE_PORT,
        ge=0,
        le=65535,
        description="Live sync port used when a project does not set servePort",
    )
    log_diagnostics: bool = Field(
        default=False,
        description="Log diagnostics found while loading a project as warnings",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()


@lru_cache(maxsize=1)
def get_settings() -> ProjectSettings:
    """Get the process wide settings instance."""
    settings = ProjectSettings()
    logger.debug(f"Loaded settings: {settings.model_dump()}")
    return settings
