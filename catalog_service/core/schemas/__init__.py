"""Shared pydantic schemas."""

from catalog_service.core.schemas.base import CustomBase, TimestampedBase
from catalog_service.core.schemas.problem_details import (
    FieldError,
    ProblemDetails,
    ValidationProblemDetails,
)

__all__ = [
    "CustomBase",
    "FieldError",
    "ProblemDetails",
    "TimestampedBase",
    "ValidationProblemDetails",
]
