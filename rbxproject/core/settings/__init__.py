"""Project settings."""

from .settings import DEFAULT_SERVE_PORT, ProjectSettings, get_settings

__all__ = [
    "DEFAULT_SERVE_PORT",
    "ProjectSettings",
    "get_settings",
]
