"""Base error classes with structured error context.

This module provides the error types raised while locating, reading, parsing
and saving project files. Every failure a caller can see is a ProjectError;
the concrete subclass says whether the filesystem or the content was at fault.
"""

import logging
import traceback
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .models import ErrorContextData, ValidationErrorDetail

logger = logging.getLogger(__name__)


class ErrorContext:
    """Structured context information attached to every error."""

    def __init__(self, context_data: ErrorContextData):
        """Initialize error context.

        Args:
            context_data: Required error context data
        """
        self._data = context_data

    @classmethod
    def create(
        cls, file_path: str | Path, error_type: str, component: str, operation: str
    ) -> "ErrorContext":
        """Create a new error context with required data.

        Args:
            file_path: Project file the error relates to
            error_type: Type of error
            component: Component raising error
            operation: Operation being performed

        Returns:
            New ErrorContext instance
        """
        context_data = ErrorContextData(
            file_path=str(file_path),
            error_type=error_type,
            component=component,
            operation=operation,
        )
        return cls(context_data)

    @property
    def data(self) -> ErrorContextData:
        """Get the context data."""
        return self._data

    @property
    def timestamp(self) -> datetime:
        """Get the context creation timestamp."""
        return self._data.timestamp

    def __str__(self) -> str:
        return f"ErrorContext({self._data.model_dump()})"


class BaseError(Exception):
    """Base class for all package errors with context and cause tracking."""

    def __init__(self, message: str, context: ErrorContext, cause: Exception | None = None):
        """Initialize error.

        Args:
            message: Error message
            context: Required error context
            cause: Optional cause exception
        """
        self.message = message
        self.context = context
        self.cause = cause
        self.timestamp = datetime.now()
        self.traceback = traceback.format_exc()

        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary.

        Returns:
            Dictionary representation of error
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context.data.model_dump(),
            "cause": str(self.cause) if self.cause else None,
            "traceback": self.traceback,
        }

    def __str__(self) -> str:
        cause_str = f" (caused by: {self.cause})" if self.cause else ""
        return f"{self.__class__.__name__}: {self.message}{cause_str}"


class ProjectError(BaseError):
    """Error returned by any operation that handles projects."""

    def __init__(
        self,
        message: str,
        path: str | Path,
        operation: str,
        cause: Exception | None = None,
    ):
        self.path = Path(path)
        context = ErrorContext.create(
            file_path=path,
            error_type=type(self).__name__,
            component="project",
            operation=operation,
        )
        super().__init__(message, context, cause)


class ProjectIoError(ProjectError):
    """Reading or writing the project file failed."""

    def __init__(self, path: str | Path, cause: Exception, operation: str = "read"):
        super().__init__(f"Could not {operation} project file '{path}'", path, operation, cause)


class ProjectParseError(ProjectError):
    """The project file content does not match the project schema.

    Each entry of ``validation_errors`` points at the offending value using the
    key names found in the file, e.g. ``tree.ReplicatedStorage.$className``.
    """

    def __init__(
        self,
        path: str | Path,
        validation_errors: Sequence[ValidationErrorDetail],
        cause: Exception | None = None,
    ):
        self.validation_errors = list(validation_errors)
        super().__init__(f"Invalid project file '{path}'", path, "parse", cause)

    @classmethod
    def from_validation_error(
        cls, path: str | Path, exc: PydanticValidationError
    ) -> "ProjectParseError":
        details = [
            ValidationErrorDetail(
                location=_format_location(error["loc"]),
                message=error["msg"],
                error_type=error["type"],
            )
            for error in exc.errors(include_url=False)
        ]
        return cls(path, details, cause=exc)

    def __str__(self) -> str:
        base_str = super().__str__()
        if self.validation_errors:
            errors_str = "; ".join(
                f"{e.location}: {e.message}" for e in self.validation_errors[:3]
            )
            if len(self.validation_errors) > 3:
                errors_str += f" (and {len(self.validation_errors) - 3} more)"
            return f"{base_str} - {errors_str}"
        return base_str


def _format_location(loc: Sequence[int | str]) -> str:
    """Render a pydantic error location with the key names used in files.

    Children are stored under a ``children`` field but are written inline in
    the file, so that segment is dropped wherever it follows a node.
    """
    parts: list[str] = []
    in_node = False
    expect_child = False
    for segment in loc:
        segment = str(segment)
        if expect_child:
            parts.append(segment)
            expect_child = False
            in_node = True
            continue
        if in_node and segment == "children":
            expect_child = True
            continue
        parts.append(segment)
        in_node = segment == "tree" and len(parts) == 1
    return ".".join(parts) if parts else "<root>"


class LoggingHandler:
    """Error handler that logs errors with configurable verbosity."""

    def __init__(
        self,
        level: int = logging.ERROR,
        include_context: bool = True,
        include_traceback: bool = False,
        logger_name: str | None = None,
    ):
        """Initialize logging handler.

        Args:
            level: Logging level
            include_context: Whether to include context in logs
            include_traceback: Whether to include the cause traceback in logs
            logger_name: Optional custom logger name
        """
        self.level = level
        self.include_context = include_context
        self.include_traceback = include_traceback
        self.logger = logging.getLogger(logger_name or __name__)

    def __call__(self, error: BaseError) -> None:
        message = f"{type(error).__name__}: {error.message}"

        if isinstance(error, ProjectParseError):
            for detail in error.validation_errors:
                message += f"\n  {detail.location}: {detail.message}"

        if self.include_context and error.context:
            message += f"\nContext: {error.context.data.model_dump()}"

        if self.include_traceback and error.cause:
            cause_tb = "".join(
                traceback.format_exception(
                    type(error.cause), error.cause, error.cause.__traceback__
                )
            )
            message += f"\nCaused by: {cause_tb}"
        elif error.cause and not isinstance(error, ProjectParseError):
            message += f"\nCaused by: {error.cause}"

        self.logger.log(self.level, message)
