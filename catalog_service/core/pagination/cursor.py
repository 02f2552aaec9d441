"""Signed, expiring continuation tokens.

A token records where the previous page ended: the id of its last row, the
sort key it was produced under, when it was issued and the sort values
needed to rebuild the keyset predicate.

Wire format:
    <base64url(JSON payload)>.<hex(HMAC-SHA256(base64url payload, secret))>

Example payload:
    {"id":"B","sortBy":"newest","timestamp":1767225600000,"fields":{"createdAt":"2026-01-01T00:00:01.000Z"}}

Tokens are signed, not encrypted. Anyone can read the payload; only holders
of the secret can produce one that validates.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import logging
import re
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from catalog_service.core.exceptions import CursorConfigurationError
from catalog_service.core.pagination.types import (
    CursorRejection,
    CursorState,
    CursorValidation,
)
from catalog_service.core.settings import get_app_settings, get_pagination_settings

if TYPE_CHECKING:
    from collections.abc import Callable

    from catalog_service.core.pagination.types import CursorScalar
    from catalog_service.core.settings import AppSettings, PaginationSettings

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(minutes=60)
DEV_SIGNING_SECRET = "dev-secret-change-in-production"

# Millisecond precision, or microsecond precision for values that need it.
_DATETIME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}(\d{3})?Z$")
_PAYLOAD_KEYS = ("id", "sortBy", "timestamp", "fields")


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64decode(data: str) -> bytes:
    padded = data + "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii"))


def format_cursor_datetime(value: datetime) -> str:
    """Render a datetime the way tokens carry it.

    Naive values are taken to be UTC (SQLite returns naive datetimes).
    Sub-millisecond precision is preserved so the keyset comparison
    stays exact.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    timespec = "milliseconds" if value.microsecond % 1000 == 0 else "microseconds"
    return value.isoformat(timespec=timespec).replace("+00:00", "Z")


def _serialize_field(key: str, value: CursorScalar) -> Any:
    if isinstance(value, datetime):
        return format_cursor_datetime(value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (bool, int, float, str)):
        return value
    msg = f"Cursor field {key!r} has unsupported type {type(value).__name__}"
    raise TypeError(msg)


def _hydrate_field(value: Any) -> CursorScalar:
    if isinstance(value, str) and _DATETIME_PATTERN.match(value):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    return value


class CursorCodec:
    """Encode and validate continuation tokens.

    The codec holds the signing secret and token lifetime. It is safe to
    share across concurrent requests: encoding and decoding only read
    that configuration.

    Usage:
        codec = CursorCodec("s3cret")
        token = codec.encode(CursorState(id="B", fields={"createdAt": ts}), "newest")
        state = codec.decode(token, "newest")  # CursorState or None

    Args:
        secret: HMAC-SHA256 signing key.
        ttl: How long an issued token stays valid.
        clock: Returns the current aware UTC time; injectable for tests.
    """

    def __init__(
        self,
        secret: str,
        *,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            msg = "Cursor signing secret must not be empty"
            raise ValueError(msg)
        self._secret = secret.encode("utf-8")
        self._ttl_ms = int(ttl.total_seconds() * 1000)
        self._clock = clock

    @classmethod
    def from_settings(
        cls,
        pagination: PaginationSettings,
        app: AppSettings,
    ) -> CursorCodec:
        """Build a codec from configuration.

        Raises:
            CursorConfigurationError: No secret is configured and the
                service runs in production.
        """
        secret = (
            pagination.cursor_signing_secret.get_secret_value()
            if pagination.cursor_signing_secret is not None
            else ""
        )
        if not secret:
            if app.is_production:
                raise CursorConfigurationError(extra={"environment": app.environment})
            logger.warning(
                "CURSOR_SIGNING_SECRET is not set, using the development signing secret",
                extra={"environment": app.environment},
            )
            secret = DEV_SIGNING_SECRET
        return cls(secret, ttl=timedelta(minutes=pagination.cursor_ttl_minutes))

    @property
    def ttl(self) -> timedelta:
        return timedelta(milliseconds=self._ttl_ms)

    def encode(self, state: CursorState, sort_by: str) -> str:
        """Mint a token for the row described by ``state``.

        Args:
            state: Id and sort values of the last row on the page.
            sort_by: Sort key the page was produced under.

        Returns:
            Opaque token string.

        Raises:
            TypeError: A field value is not a supported scalar.
        """
        payload = {
            "id": state.id,
            "sortBy": sort_by,
            "timestamp": self._now_ms(),
            "fields": {
                key: _serialize_field(key, value) for key, value in state.fields.items()
            },
        }
        encoded = _b64encode(json.dumps(payload, separators=(",", ":")).encode("utf-8"))
        return f"{encoded}.{self._sign(encoded)}"

    def decode(self, token: str | None, expected_sort_by: str) -> CursorState | None:
        """Return the cursor state, or None for any unusable token.

        Never raises. Use ``validate`` to learn why a token was refused.
        """
        return self.validate(token, expected_sort_by).state

    def validate(self, token: str | None, expected_sort_by: str) -> CursorValidation:
        """Check a token and report the reason when it is refused.

        Checks run in order: presence, shape, signature, payload, expiry,
        and finally that the token was issued for ``expected_sort_by``.

        Args:
            token: Token from the request, possibly None or empty.
            expected_sort_by: Sort key of the current request.

        Returns:
            CursorValidation carrying either the state or the rejection reason.
        """
        if not token:
            return CursorValidation(reason=CursorRejection.MISSING)

        encoded, sep, signature = token.rpartition(".")
        if not sep or not encoded or not signature or not encoded.isascii():
            return CursorValidation(reason=CursorRejection.INVALID_FORMAT)

        if not hmac.compare_digest(
            self._sign(encoded).encode("ascii"),
            signature.encode("utf-8", "backslashreplace"),
        ):
            return CursorValidation(reason=CursorRejection.TAMPERED)

        try:
            payload = json.loads(_b64decode(encoded).decode("utf-8"))
        except ValueError:
            return CursorValidation(reason=CursorRejection.INVALID_FORMAT)

        if not self._is_valid_payload(payload):
            return CursorValidation(reason=CursorRejection.INVALID_FORMAT)

        if self._now_ms() - payload["timestamp"] > self._ttl_ms:
            return CursorValidation(reason=CursorRejection.EXPIRED)

        if payload["sortBy"] != expected_sort_by:
            return CursorValidation(reason=CursorRejection.SORT_MISMATCH)

        try:
            fields = {
                key: _hydrate_field(value)
                for key, value in payload["fields"].items()
                if value is not None
            }
        except ValueError:
            return CursorValidation(reason=CursorRejection.INVALID_FORMAT)
        return CursorValidation(state=CursorState(id=payload["id"], fields=fields))

    def peek(self, token: str) -> dict[str, Any] | None:
        """Return the raw payload of a well-formed token without verifying it.

        Intended for diagnostics only; the result must not drive queries.
        """
        encoded, sep, _ = token.rpartition(".")
        if not sep:
            return None
        try:
            payload = json.loads(_b64decode(encoded).decode("utf-8"))
        except ValueError:
            return None
        return payload if isinstance(payload, dict) else None

    def _sign(self, data: str) -> str:
        return hmac.new(self._secret, data.encode("ascii"), hashlib.sha256).hexdigest()

    def _now_ms(self) -> int:
        return int(self._clock().timestamp() * 1000)

    @staticmethod
    def _is_valid_payload(payload: Any) -> bool:
        if not isinstance(payload, dict) or any(k not in payload for k in _PAYLOAD_KEYS):
            return False
        timestamp = payload["timestamp"]
        return (
            isinstance(payload["id"], str)
            and isinstance(payload["sortBy"], str)
            and isinstance(timestamp, int)
            and not isinstance(timestamp, bool)
            and isinstance(payload["fields"], dict)
            and all(
                value is None or isinstance(value, (bool, int, float, str))
                for value in payload["fields"].values()
            )
        )


@lru_cache(maxsize=1)
def get_cursor_codec() -> CursorCodec:
    """Process-wide codec built from cached settings.

    Testing:
        get_cursor_codec.cache_clear()
    """
    return CursorCodec.from_settings(get_pagination_settings(), get_app_settings())


__all__ = [
    "DEFAULT_TTL",
    "DEV_SIGNING_SECRET",
    "CursorCodec",
    "format_cursor_datetime",
    "get_cursor_codec",
]
