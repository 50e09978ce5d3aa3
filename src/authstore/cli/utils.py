"""Shared helpers for CLI commands."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from authstore.database import create_engine
from authstore.services import PostgresAdapter


@asynccontextmanager
async def open_adapter() -> AsyncGenerator[PostgresAdapter, None]:
    """Open an adapter on a fresh engine and dispose the engine afterwards."""
    engine = create_engine()
    try:
        yield PostgresAdapter(engine)
    finally:
        await engine.dispose()
