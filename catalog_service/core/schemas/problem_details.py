"""RFC 7807 Problem Details schemas for error responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProblemDetails(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    See: https://datatracker.ietf.org/doc/html/rfc7807

    Example:
        return JSONResponse(
            status_code=404,
            content=ProblemDetails(
                type="not-found",
                title="Not Found",
                status=404,
                detail="Tool 'ruff' not found",
                instance="/api/v1/tools/ruff",
            ).model_dump(exclude_none=True),
        )
    """

    type: str = Field(default="about:blank", description="URI reference identifying the problem type")
    title: str = Field(description="Short, human-readable summary of the problem")
    status: int = Field(ge=100, le=599, description="HTTP status code")
    detail: str | None = Field(default=None, description="Explanation specific to this occurrence")
    instance: str | None = Field(default=None, description="URI of the specific occurrence")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "not-found",
                "title": "Not Found",
                "status": 404,
                "detail": "Tool 'ruff' not found",
                "instance": "/api/v1/tools/ruff",
            }
        },
    )


class FieldError(BaseModel):
    """One invalid request field."""

    field: str = Field(description="Dotted location of the field, e.g. query.limit")
    message: str
    type: str
    value: Any = None


class ValidationProblemDetails(ProblemDetails):
    """Problem Details carrying field-level validation errors."""

    errors: list[FieldError] = Field(default_factory=list)


__all__ = ["FieldError", "ProblemDetails", "ValidationProblemDetails"]
