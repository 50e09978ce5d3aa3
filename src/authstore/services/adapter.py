"""Persistence adapter for the authentication engine.

``PostgresAdapter`` implements the ``Adapter`` operation set on top of a
caller-owned SQLAlchemy ``AsyncEngine``. Each operation runs in its own
transaction: it commits when the operation returns and rolls back when it
raises. The engine itself is never disposed here.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Protocol, runtime_checkable

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlmodel import select

from authstore.models import Account, User, UserSession, VerificationToken
from authstore.schemas import (
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
from authstore.services.mappers import (
    as_utc,
    build_account,
    build_session,
    build_user,
    build_verification_token,
    coerce_expires_at,
)

logger = logging.getLogger(__name__)

# Bounds of the INTEGER (SERIAL) id columns
INT4_MIN = -(2**31)
INT4_MAX = 2**31 - 1


class AdapterError(Exception):
    """Base class for errors raised by the adapter itself."""

    pass


class MissingUserIdError(AdapterError, ValueError):
    """A session was requested without an owning user."""

    pass


class UserNotFoundError(AdapterError):
    """An update referenced a user that does not exist."""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


@runtime_checkable
class Adapter(Protocol):
    """Operations the authentication engine needs from its storage."""

    async def create_verification_token(
        self, verification_token: AdapterVerificationToken
    ) -> AdapterVerificationToken: ...

    async def use_verification_token(
        self, identifier: str, token: str
    ) -> AdapterVerificationToken | None: ...

    async def create_user(self, user: AdapterUserCreate) -> AdapterUser: ...

    async def get_user(self, user_id: int | str) -> AdapterUser | None: ...

    async def get_user_by_email(self, email: str) -> AdapterUser | None: ...

    async def get_user_by_account(
        self, provider: str, provider_account_id: str
    ) -> AdapterUser | None: ...

    async def update_user(self, user: AdapterUserUpdate) -> AdapterUser: ...

    async def link_account(self, account: AdapterAccount) -> AdapterAccount: ...

    async def create_session(self, session: AdapterSessionCreate) -> AdapterSession: ...

    async def get_session_and_user(self, session_token: str | None) -> SessionAndUser | None: ...

    async def update_session(self, session: AdapterSessionUpdate) -> AdapterSession | None: ...

    async def delete_session(self, session_token: str) -> None: ...

    async def unlink_account(self, provider: str, provider_account_id: str) -> None: ...

    async def delete_user(self, user_id: int) -> None: ...


class PostgresAdapter:
    """SQL implementation of ``Adapter``.

    Written against PostgreSQL (asyncpg) but uses only portable SQLAlchemy
    constructs, so any async dialect with RETURNING support works.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @asynccontextmanager
    async def _transaction(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._session_factory.begin() as session:
            yield session

    # Verification tokens

    async def create_verification_token(
        self, verification_token: AdapterVerificationToken
    ) -> AdapterVerificationToken:
        row = VerificationToken(
            identifier=verification_token.identifier,
            token=verification_token.token,
            expires=as_utc(verification_token.expires),
        )
        async with self._transaction() as session:
            session.add(row)
            await session.flush()

        logger.debug("Created verification token for %s", row.identifier)
        return build_verification_token(row)

    async def use_verification_token(
        self, identifier: str, token: str
    ) -> AdapterVerificationToken | None:
        """Consume a token. The delete and the read are one statement, so a
        token can be used at most once even under concurrent calls."""
        stmt = (
            delete(VerificationToken)
            .where(
                VerificationToken.identifier == identifier,  # type: ignore[arg-type]
                VerificationToken.token == token,  # type: ignore[arg-type]
            )
            .returning(
                VerificationToken.identifier,
                VerificationToken.expires,
                VerificationToken.token,
            )
            .execution_options(synchronize_session=False)
        )
        async with self._transaction() as session:
            result = await session.execute(stmt)
            row = result.one_or_none()

        if row is None:
            logger.debug("No verification token matched for %s", identifier)
            return None
        return build_verification_token(row)

    # Users

    async def create_user(self, user: AdapterUserCreate) -> AdapterUser:
        row = User(
            name=user.name,
            email=user.email,
            email_verified_at=as_utc(user.email_verified),
        )
        async with self._transaction() as session:
            session.add(row)
            await session.flush()

        logger.info("Created user %s", row.id)
        logger.debug("User %s email: %s", row.id, row.email)
        return build_user(row)

    async def get_user(self, user_id: int | str) -> AdapterUser | None:
        """Look up a user by id.

        An id that is not an integer, or is outside the INTEGER column range,
        cannot match any row and is treated as not found. Store failures
        propagate.
        """
        try:
            key = int(user_id)
        except (TypeError, ValueError):
            logger.debug("Ignoring malformed user id %r", user_id)
            return None

        if not INT4_MIN <= key <= INT4_MAX:
            logger.debug("Ignoring out of range user id %r", user_id)
            return None

        stmt = select(User).where(User.id == key)
        async with self._transaction() as session:
            result = await session.execute(stmt)
            row = result.scalar_one_or_none()

        return build_user(row) if row is not None else None

    async def get_user_by_email(self, email: str) -> AdapterUser | None:
        stmt = select(User).where(User.email == email).order_by(User.id).limit(1)  # type: ignore[arg-type]
        async with self._transaction() as session:
            result = await session.execute(stmt)
            row = result.scalars().first()

        return build_user(row) if row is not None else None

    async def get_user_by_account(
        self, provider: str, provider_account_id: str
    ) -> AdapterUser | None:
        stmt = (
            select(User)
            .join(Account, Account.user_id == User.id)  # type: ignore[arg-type]
            .where(
                Account.provider == provider,  # type: ignore[arg-type]
                Account.provider_account_id == provider_account_id,  # type: ignore[arg-type]
            )
            .order_by(Account.id)
            .limit(1)
        )
        async with self._transaction() as session:
            result = await session.execute(stmt)
            row = result.scalars().first()

        return build_user(row) if row is not None else None

    async def update_user(self, user: AdapterUserUpdate) -> AdapterUser:
        """Write only the fields the caller supplied and return the new row."""
        values: dict = {}
        if "name" in user.model_fields_set:
            values["name"] = user.name
        if "email" in user.model_fields_set:
            values["email"] = user.email
        if "email_verified" in user.model_fields_set:
            values["email_verified_at"] = as_utc(user.email_verified)

        async with self._transaction() as session:
            if values:
                stmt = (
                    update(User)
                    .where(User.id == user.id)  # type: ignore[arg-type]
                    .values(**values)
                    .returning(User.id, User.name, User.email, User.email_verified_at)
                    .execution_options(synchronize_session=False)
                )
                result = await session.execute(stmt)
                row = result.one_or_none()
            else:
                result = await session.execute(select(User).where(User.id == user.id))
                row = result.scalar_one_or_none()

        if row is None:
            raise UserNotFoundError(user.id)

        logger.debug("Updated user %s (%s)", user.id, ", ".join(sorted(values)) or "no changes")
        return build_user(row)

    async def delete_user(self, user_id: int) -> None:
        """Delete a user together with its sessions and accounts, atomically."""
        async with self._transaction() as session:
            sessions = await session.execute(
                delete(UserSession)
                .where(UserSession.user_id == user_id)  # type: ignore[arg-type]
                .execution_options(synchronize_session=False)
            )
            accounts = await session.execute(
                delete(Account)
                .where(Account.user_id == user_id)  # type: ignore[arg-type]
                .execution_options(synchronize_session=False)
            )
            await session.execute(
                delete(User)
                .where(User.id == user_id)  # type: ignore[arg-type]
                .execution_options(synchronize_session=False)
            )

        logger.info(
            "Deleted user %s (%d sessions, %d accounts)",
            user_id,
            sessions.rowcount,  # type: ignore[attr-defined]
            accounts.rowcount,  # type: ignore[attr-defined]
        )

    # Accounts

    async def link_account(self, account: AdapterAccount) -> AdapterAccount:
        row = Account(
            user_id=account.user_id,
            provider=account.provider,
            type=account.type,
            provider_account_id=account.provider_account_id,
            access_token=account.access_token,
            expires_at=coerce_expires_at(account.expires_at),
            refresh_token=account.refresh_token,
            id_token=account.id_token,
            scope=account.scope,
            session_state=account.session_state,
            token_type=account.token_type,
        )
        async with self._transaction() as session:
            session.add(row)
            await session.flush()

        logger.info(
            "Linked %s account %s to user %s", row.provider, row.provider_account_id, row.user_id
        )
        return build_account(row)

    async def unlink_account(self, provider: str, provider_account_id: str) -> None:
        stmt = (
            delete(Account)
            .where(
                Account.provider_account_id == provider_account_id,  # type: ignore[arg-type]
                Account.provider == provider,  # type: ignore[arg-type]
            )
            .execution_options(synchronize_session=False)
        )
        async with self._transaction() as session:
            await session.execute(stmt)

        logger.info("Unlinked %s account %s", provider, provider_account_id)

    # Sessions

    async def create_session(self, session: AdapterSessionCreate) -> AdapterSession:
        if session.user_id is None:
            raise MissingUserIdError("user_id is required to create a session")

        row = UserSession(
            user_id=session.user_id,
            expires=as_utc(session.expires),
            session_token=session.session_token,
        )
        async with self._transaction() as db:
            db.add(row)
            await db.flush()

        logger.debug("Created session %s for user %s", row.id, row.user_id)
        return build_session(row)

    async def get_session_and_user(self, session_token: str | None) -> SessionAndUser | None:
        """Return the session and its owner, or None when either is missing."""
        if session_token is None:
            return None

        stmt = (
            select(UserSession, User)
            .join(User, User.id == UserSession.user_id)  # type: ignore[arg-type]
            .where(UserSession.session_token == session_token)  # type: ignore[arg-type]
            .order_by(UserSession.id)
            .limit(1)
        )
        async with self._transaction() as db:
            result = await db.execute(stmt)
            row = result.first()

        if row is None:
            logger.debug("No live session for token")
            return None

        session_row, user_row = row
        return SessionAndUser(session=build_session(session_row), user=build_user(user_row))

    async def update_session(self, session: AdapterSessionUpdate) -> AdapterSession | None:
        """Apply the supplied changes (new token and/or expiry) to a session.

        Returns None when no session has the given token.
        """
        values: dict = {}
        if session.new_session_token is not None:
            values["session_token"] = session.new_session_token
        if session.expires is not None:
            values["expires"] = as_utc(session.expires)

        async with self._transaction() as db:
            if values:
                stmt = (
                    update(UserSession)
                    .where(UserSession.session_token == session.session_token)  # type: ignore[arg-type]
                    .values(**values)
                    .returning(
                        UserSession.id,
                        UserSession.session_token,
                        UserSession.user_id,
                        UserSession.expires,
                    )
                    .execution_options(synchronize_session=False)
                )
                result = await db.execute(stmt)
                row = result.first()
            else:
                result = await db.execute(
                    select(UserSession).where(UserSession.session_token == session.session_token)  # type: ignore[arg-type]
                )
                row = result.scalars().first()

        if row is None:
            return None
        return build_session(row)

    async def delete_session(self, session_token: str) -> None:
        stmt = (
            delete(UserSession)
            .where(UserSession.session_token == session_token)  # type: ignore[arg-type]
            .execution_options(synchronize_session=False)
        )
        async with self._transaction() as db:
            await db.execute(stmt)

        logger.debug("Deleted session")
