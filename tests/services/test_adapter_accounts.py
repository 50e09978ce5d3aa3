"""Adapter account operation tests."""

import pytest

from authstore.models import Account
from authstore.schemas import AdapterAccount, AdapterUser
from authstore.services import PostgresAdapter
from tests.conftest import count_rows


@pytest.mark.asyncio
async def test_link_account_returns_created_row(
    adapter: PostgresAdapter, user: AdapterUser, github_account: AdapterAccount
):
    """Test that all linked columns come back, with an integer expiry."""
    assert github_account.id is not None
    assert github_account.user_id == user.id
    assert github_account.provider == "github"
    assert github_account.type == "oauth"
    assert github_account.provider_account_id == "gh-1234"
    assert github_account.access_token == "gho_access"
    assert github_account.expires_at == 1_700_000_000
    assert isinstance(github_account.expires_at, int)
    assert github_account.token_type == "bearer"
    assert github_account.scope == "read:user user:email"
    assert github_account.refresh_token is None
    assert github_account.id_token is None
    assert github_account.session_state is None


@pytest.mark.asyncio
async def test_link_account_engine_payload(adapter: PostgresAdapter, user: AdapterUser):
    """Test the engine's wire shape, including an expiry sent as text."""
    payload = {
        "userId": user.id,
        "type": "oidc",
        "provider": "google",
        "providerAccountId": "g-42",
        "access_token": "ya29.token",
        "expires_at": "1712345678",
        "id_token": "eyJ...",
        "refresh_token": "1//refresh",
        "session_state": "state",
    }
    account = await adapter.link_account(AdapterAccount.model_validate(payload))

    assert account.expires_at == 1_712_345_678
    dumped = account.model_dump(by_alias=True)
    assert dumped["userId"] == user.id
    assert dumped["providerAccountId"] == "g-42"
    assert dumped["expires_at"] == 1_712_345_678
    assert dumped["refresh_token"] == "1//refresh"


@pytest.mark.asyncio
async def test_link_account_without_expiry(adapter: PostgresAdapter, user: AdapterUser):
    account = await adapter.link_account(
        AdapterAccount(
            user_id=user.id, type="email", provider="email", provider_account_id="a@x.com"
        )
    )
    assert account.expires_at is None


@pytest.mark.asyncio
async def test_unlink_account(
    adapter: PostgresAdapter, engine, user: AdapterUser, github_account: AdapterAccount
):
    """Test that unlinking removes only the matching provider identity."""
    await adapter.link_account(
        AdapterAccount(
            user_id=user.id, type="oauth", provider="gitlab", provider_account_id="gh-1234"
        )
    )

    await adapter.unlink_account("github", "gh-1234")

    assert await adapter.get_user_by_account("github", "gh-1234") is None
    assert await adapter.get_user_by_account("gitlab", "gh-1234") == user
    assert await count_rows(engine, Account) == 1


@pytest.mark.asyncio
async def test_unlink_missing_account_is_noop(adapter: PostgresAdapter, engine, github_account):
    await adapter.unlink_account("github", "nope")
    assert await count_rows(engine, Account) == 1
