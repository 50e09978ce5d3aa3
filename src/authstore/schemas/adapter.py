"""Shapes the authentication engine sends to and receives from the adapter.

Field names are snake_case in Python. The engine's camelCase names
(``userId``, ``sessionToken``, ``providerAccountId``, ``emailVerified``) are
aliases, so ``model_validate`` accepts either spelling and
``model_dump(by_alias=True)`` produces the engine's shape.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AdapterModel(BaseModel):
    """Base for adapter schemas."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class AdapterUser(AdapterModel):
    """A user as seen by the engine."""

    id: int
    name: str | None = None
    email: str | None = None
    email_verified: datetime | None = Field(default=None, alias="emailVerified")
    image: str | None = None


class AdapterUserCreate(AdapterModel):
    """Fields for creating a user."""

    name: str | None = None
    email: str | None = None
    email_verified: datetime | None = Field(default=None, alias="emailVerified")


class AdapterUserUpdate(AdapterModel):
    """Partial user update.

    Only fields that were explicitly supplied are written, so passing
    ``name=None`` clears the name while omitting ``name`` leaves it alone.
    """

    id: int
    name: str | None = None
    email: str | None = None
    email_verified: datetime | None = Field(default=None, alias="emailVerified")


class AdapterAccount(AdapterModel):
    """A provider account linked to a user.

    OAuth token fields keep their wire names (``access_token``, ``expires_at``...).
    """

    id: int | None = None
    user_id: int = Field(alias="userId")
    type: str
    provider: str
    provider_account_id: str = Field(alias="providerAccountId")
    access_token: str | None = None
    expires_at: int | None = None
    refresh_token: str | None = None
    id_token: str | None = None
    scope: str | None = None
    session_state: str | None = None
    token_type: str | None = None


class AdapterSession(AdapterModel):
    """A stored session."""

    id: int | None = None
    session_token: str = Field(alias="sessionToken")
    user_id: int = Field(alias="userId")
    expires: datetime


class AdapterSessionCreate(AdapterModel):
    """Fields for creating a session.

    ``user_id`` is optional here so a missing owner is reported by the
    adapter as a precondition error instead of a validation error.
    """

    session_token: str = Field(alias="sessionToken")
    user_id: int | None = Field(default=None, alias="userId")
    expires: datetime


class AdapterSessionUpdate(AdapterModel):
    """Partial session update keyed on the current session token."""

    session_token: str = Field(alias="sessionToken")
    new_session_token: str | None = Field(default=None, alias="newSessionToken")
    expires: datetime | None = None


class AdapterVerificationToken(AdapterModel):
    """A single-use verification token."""

    identifier: str
    token: str
    expires: datetime


class SessionAndUser(AdapterModel):
    """A session together with its owning user."""

    session: AdapterSession
    user: AdapterUser
