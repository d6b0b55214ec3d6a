"""Strict Pydantic models for error handling."""

from datetime import datetime

from pydantic import Field

from rbxproject.core.models import StrictBaseModel


class ErrorContextData(StrictBaseModel):
    """Strict error context data model."""

    file_path: str = Field(..., description="Project file the error relates to")
    error_type: str = Field(..., description="Type of error")
    component: str = Field(..., description="Component that raised the error")
    operation: str = Field(..., description="Operation being performed")
    timestamp: datetime = Field(default_factory=datetime.now, description="When error occurred")


class ValidationErrorDetail(StrictBaseModel):
    """Strict validation error detail."""

    location: str = Field(..., description="Location of the offending value, using file key names")
    message: str = Field(..., description="Validation error message")
    error_type: str = Field(..., description="Type of validation error")
