"""Base schema classes for API payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CustomBase(BaseModel):
    """Base model with common configuration for all response schemas.

    Fields are snake_case in Python and camelCase on the wire.

    Example:
        class TagRead(CustomBase):
            id: str
            created_at: datetime

        TagRead.model_validate(tag).model_dump(by_alias=True)
        # {"id": "...", "createdAt": "..."}
    """

    model_config = ConfigDict(
        # Allow creation from ORM models (SQLAlchemy)
        from_attributes=True,
        # Use enum values instead of names
        use_enum_values=True,
        # Accept both field names and camelCase aliases
        populate_by_name=True,
        alias_generator=to_camel,
        # Ignore extra fields (silently drop unexpected data)
        extra="ignore",
    )


class TimestampedBase(CustomBase):
    """Base model with the timestamps every catalogue row carries."""

    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")


__all__ = ["CustomBase", "TimestampedBase"]
