"""Tests for project error types."""

import logging
from datetime import datetime

import pytest
from pydantic import BaseModel, ValidationError as PydanticValidationError

from rbxproject.core.errors.errors import (
    BaseError,
    ErrorContext,
    LoggingHandler,
    ProjectError,
    ProjectIoError,
    ProjectParseError,
    _format_location,
)
from rbxproject.core.errors.models import ValidationErrorDetail


def make_detail(location: str) -> ValidationErrorDetail:
    return ValidationErrorDetail(location=location, message="bad value", error_type="value_error")


class TestErrorContext:
    """Test ErrorContext functionality."""

    def test_error_context_creation(self):
        context = ErrorContext.create(
            file_path="/games/default.project.json",
            error_type="ProjectIoError",
            component="project",
            operation="read",
        )

        assert context.data.file_path == "/games/default.project.json"
        assert context.data.operation == "read"
        assert isinstance(context.timestamp, datetime)
        assert "ErrorContext" in str(context)


class TestProjectErrors:
    """Test the project error hierarchy."""

    def test_project_error(self, tmp_path):
        error = ProjectError("No project found", tmp_path, "locate")

        assert isinstance(error, BaseError)
        assert error.path == tmp_path
        assert error.context.data.error_type == "ProjectError"
        assert error.context.data.component == "project"
        assert str(error) == "ProjectError: No project found"

    def test_io_error(self, tmp_path):
        cause = FileNotFoundError("gone")
        error = ProjectIoError(tmp_path / "a.project.json", cause)

        assert isinstance(error, ProjectError)
        assert error.cause is cause
        assert error.context.data.operation == "read"
        assert "Could not read project file" in error.message
        assert "caused by: gone" in str(error)

    def test_io_error_operation(self, tmp_path):
        error = ProjectIoError(tmp_path, PermissionError("denied"), operation="write")
        assert error.message.startswith("Could not write")

    def test_to_dict(self, tmp_path):
        error = ProjectIoError(tmp_path, OSError("boom"))

        data = error.to_dict()

        assert data["error_type"] == "ProjectIoError"
        assert data["cause"] == "boom"
        assert data["context"]["file_path"] == str(tmp_path)

    def test_parse_error_str_lists_details(self, tmp_path):
        error = ProjectParseError(tmp_path, [make_detail(f"tree.Child{i}") for i in range(5)])

        text = str(error)

        assert "tree.Child0: bad value" in text
        assert "tree.Child2: bad value" in text
        assert "tree.Child3" not in text
        assert "(and 2 more)" in text

    def test_parse_error_from_validation_error(self, tmp_path):
        class Sample(BaseModel):
            count: int

        with pytest.raises(PydanticValidationError) as exc_info:
            Sample.model_validate({"count": "many"})

        error = ProjectParseError.from_validation_error(tmp_path, exc_info.value)

        assert error.cause is exc_info.value
        assert error.validation_errors[0].location == "count"
        assert error.validation_errors[0].error_type == "int_parsing"


class TestFormatLocation:
    """Test rendering of error locations with file key names."""

    @pytest.mark.parametrize("loc, expected", [
        ((), "<root>"),
        (("foo",), "foo"),
        (("servePlaceIds", 0), "servePlaceIds.0"),
        (("tree", "$className"), "tree.$className"),
        (("tree", "children", "Workspace"), "tree.Workspace"),
        (("tree", "children", "A", "children", "B", "$path"), "tree.A.B.$path"),
        (("tree", "children", "children", "children", "x"), "tree.children.x"),
        (("tree", "$properties", "children"), "tree.$properties.children"),
    ])
    def test_format_location(self, loc, expected):
        assert _format_location(loc) == expected


class TestLoggingHandler:
    """Test LoggingHandler."""

    def test_logs_parse_details(self, tmp_path, caplog):
        handler = LoggingHandler(include_context=False)
        error = ProjectParseError(tmp_path, [make_detail("tree.Workspace")])

        with caplog.at_level(logging.ERROR):
            handler(error)

        assert "ProjectParseError" in caplog.text
        assert "tree.Workspace: bad value" in caplog.text

    def test_logs_context_and_cause(self, tmp_path, caplog):
        handler = LoggingHandler(level=logging.WARNING, logger_name="rbxproject.test")
        error = ProjectIoError(tmp_path, OSError("disk on fire"))

        with caplog.at_level(logging.WARNING, logger="rbxproject.test"):
            handler(error)

        assert "Context:" in caplog.text
        assert "disk on fire" in caplog.text
