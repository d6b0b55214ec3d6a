"""Error types raised while locating and loading project files."""

from .errors import (
    BaseError,
    ErrorContext,
    LoggingHandler,
    ProjectError,
    ProjectIoError,
    ProjectParseError,
)
from .models import ErrorContextData, ValidationErrorDetail

__all__ = [
    "BaseError",
    "ErrorContext",
    "ErrorContextData",
    "LoggingHandler",
    "ProjectError",
    "ProjectIoError",
    "ProjectParseError",
    "ValidationErrorDetail",
]
