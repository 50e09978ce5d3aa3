"""Linked provider account model."""

from sqlalchemy import BigInteger, Text
from sqlmodel import Field, SQLModel


class Account(SQLModel, table=True):
    """An external identity (OAuth, email, credentials) linked to a user."""

    __tablename__ = "account"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(nullable=False)
    type: str = Field(max_length=255)
    provider: str = Field(max_length=255)
    provider_account_id: str = Field(max_length=255)
    refresh_token: str | None = Field(default=None, sa_type=Text)
    access_token: str | None = Field(default=None, sa_type=Text)
    expires_at: int | None = Field(
        default=None,
        sa_type=BigInteger,
        description="Access token expiry in seconds since the epoch",
    )
    id_token: str | None = Field(default=None, sa_type=Text)
    scope: str | None = Field(default=None, sa_type=Text)
    session_state: str | None = Field(default=None, sa_type=Text)
    token_type: str | None = Field(default=None, sa_type=Text)
