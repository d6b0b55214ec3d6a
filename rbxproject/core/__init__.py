"""Core models, errors and settings for project files."""

from .models import StrictBaseModel

__all__ = [
    "StrictBaseModel",
]
