"""Verification token model for magic link auth."""

from datetime import datetime

from sqlalchemy import DateTime, Text
from sqlmodel import Field, SQLModel


class VerificationToken(SQLModel, table=True):
    """Single-use token for email verification / magic links."""

    __tablename__ = "verification_token"

    identifier: str = Field(primary_key=True, sa_type=Text, description="Email address")
    expires: datetime = Field(
        sa_type=DateTime(timezone=True),  # type: ignore[call-overload]
        nullable=False,
        description="Token expiration time",
    )
    token: str = Field(primary_key=True, sa_type=Text, description="Random verification token")
