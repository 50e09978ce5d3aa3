"""Database session model."""

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class UserSession(SQLModel, table=True):
    """A login session, looked up by its session token."""

    __tablename__ = "session"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(nullable=False)
    expires: datetime = Field(
        sa_type=DateTime(timezone=True),  # type: ignore[call-overload]
        nullable=False,
    )
    session_token: str = Field(max_length=255)
