"""Strict Pydantic base model shared by every project schema type.

Project files are a closed schema: unknown keys must fail loudly and parsed
values must not change after the loader hands them out.
"""

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """Base model with strict validation for project file schemas.

    It enforces:
    - strict=True: Type coercion is disabled, inputs must match exact types
    - extra="forbid": No additional fields allowed, misspelled keys fail
    - frozen=True: Immutable once constructed
    - validate_by_name/validate_by_alias: Python code builds models by field
      name, the loader parses files by alias only
    """

    model_config = ConfigDict(
        strict=True,              # No type coercion - fail fast on wrong types
        extra="forbid",           # No extra fields - fail fast on unknown keys
        frozen=True,              # Immutable - a reload builds a new value
        validate_default=True,
        validate_by_name=True,
        validate_by_alias=True,
        use_enum_values=False,
        arbitrary_types_allowed=False,
    )


__all__ = [
    "StrictBaseModel",
]
