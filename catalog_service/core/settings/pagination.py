"""Pagination settings for list endpoints.

Centralizes page-size limits and the continuation token parameters
(signing secret and lifetime) shared by every paginated repository.

Environment variables use PAGINATION_ prefix, except the signing secret
which is also accepted as CURSOR_SIGNING_SECRET.
Example: PAGINATION_MAX_LIMIT=100, CURSOR_SIGNING_SECRET=...
"""

from __future__ import annotations

from pydantic import AliasChoices, Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        default_limit: Page size when the request does not specify one.
        max_limit: Hard upper bound for a requested page size.
        tools_default_limit: Default page size for the tool listing feed.
        cursor_ttl_minutes: Lifetime of a continuation token.
        cursor_signing_secret: HMAC key for continuation tokens.
    """

    default_limit: int = Field(
        default=20,
        ge=1,
        le=1000,
        description="Default page size when limit not specified",
    )
    max_limit: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Maximum allowed page size (hard limit)",
    )
    tools_default_limit: int = Field(
        default=8,
        ge=1,
        le=1000,
        description="Default page size for the tool listing",
    )
    cursor_ttl_minutes: int = Field(
        default=60,
        ge=1,
        le=60 * 24 * 7,
        description="Minutes before a continuation token expires",
    )
    cursor_signing_secret: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "CURSOR_SIGNING_SECRET",
            "PAGINATION_CURSOR_SIGNING_SECRET",
        ),
        description="HMAC-SHA256 key used to sign continuation tokens",
    )

    @model_validator(mode="after")
    def validate_limits(self) -> PaginationSettings:
        """Ensure defaults fit inside the hard limit."""
        if self.default_limit > self.max_limit:
            msg = "default_limit cannot exceed max_limit"
            raise ValueError(msg)
        if self.tools_default_limit > self.max_limit:
            msg = "tools_default_limit cannot exceed max_limit"
            raise ValueError(msg)
        return self

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )
