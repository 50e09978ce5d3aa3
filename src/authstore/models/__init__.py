"""SQLModel database models."""

from authstore.models.account import Account
from authstore.models.session import UserSession
from authstore.models.user import User
from authstore.models.verification_token import VerificationToken

__all__ = [
    "Account",
    "User",
    "UserSession",
    "VerificationToken",
]
