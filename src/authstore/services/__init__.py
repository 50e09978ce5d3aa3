"""Adapter services."""

from authstore.services.adapter import (
    Adapter,
    AdapterError,
    MissingUserIdError,
    PostgresAdapter,
    UserNotFoundError,
)

__all__ = [
    "Adapter",
    "AdapterError",
    "MissingUserIdError",
    "PostgresAdapter",
    "UserNotFoundError",
]
