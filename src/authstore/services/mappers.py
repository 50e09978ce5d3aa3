"""Row to domain translation helpers.

Rows may be ORM instances or ``Row`` results from ``RETURNING`` clauses;
both expose columns as attributes.
"""

from datetime import UTC, datetime
from typing import Any

from authstore.schemas import (
    AdapterAccount,
    AdapterSession,
    AdapterUser,
    AdapterVerificationToken,
)


def as_utc(value: datetime | None) -> datetime | None:
    """Return value as an aware UTC datetime. Naive values are taken to be UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def coerce_expires_at(value: Any) -> int | None:
    """Normalize an account token expiry to integer seconds.

    Some drivers hand BIGINT back as text; fractional values are truncated.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise TypeError("expires_at must be numeric, not bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return _truncate(value)
    if isinstance(value, (str, bytes)):
        text = value.decode() if isinstance(value, bytes) else value
        text = text.strip()
        try:
            return int(text)
        except ValueError:
            return _truncate(float(text))
    return int(value)


def _truncate(value: float) -> int:
    try:
        return int(value)
    except OverflowError as e:
        raise ValueError(f"expires_at must be finite, got {value!r}") from e


def build_user(row: Any) -> AdapterUser:
    return AdapterUser(
        id=row.id,
        name=row.name,
        email=row.email,
        email_verified=as_utc(row.email_verified_at),
        image=None,
    )


def build_session(row: Any) -> AdapterSession:
    return AdapterSession(
        id=row.id,
        session_token=row.session_token,
        user_id=row.user_id,
        expires=as_utc(row.expires),
    )


def build_account(row: Any) -> AdapterAccount:
    return AdapterAccount(
        id=row.id,
        user_id=row.user_id,
        type=row.type,
        provider=row.provider,
        provider_account_id=row.provider_account_id,
        access_token=row.access_token,
        expires_at=coerce_expires_at(row.expires_at),
        refresh_token=row.refresh_token,
        id_token=row.id_token,
        scope=row.scope,
        session_state=row.session_state,
        token_type=row.token_type,
    )


def build_verification_token(row: Any) -> AdapterVerificationToken:
    return AdapterVerificationToken(
        identifier=row.identifier,
        token=row.token,
        expires=as_utc(row.expires),
    )
