"""Async SQL persistence adapter for authentication users, sessions and tokens."""

__version__ = "0.1.0"
