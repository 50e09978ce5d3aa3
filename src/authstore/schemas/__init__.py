"""Caller-facing schemas exchanged with the authentication engine."""

from authstore.schemas.adapter import (
    AdapterAccount,
    AdapterSession,
    AdapterSessionCreate,
    AdapterSessionUpdate,
    AdapterUser,
    AdapterUserCreate,
    AdapterUserUpdate,
    AdapterVerificationToken,
    SessionAndUser,
)

__all__ = [
    "AdapterAccount",
    "AdapterSession",
    "AdapterSessionCreate",
    "AdapterSessionUpdate",
    "AdapterUser",
    "AdapterUserCreate",
    "AdapterUserUpdate",
    "AdapterVerificationToken",
    "SessionAndUser",
]
