"""CLI command tests."""

import pytest
from typer.testing import CliRunner

from authstore.cli import app
from authstore.config import settings

runner = CliRunner()


@pytest.fixture
def cli_db(tmp_path, monkeypatch):
    """Point the CLI at a fresh SQLite file with the schema created."""
    monkeypatch.setattr(settings, "database_url", f"sqlite+aiosqlite:///{tmp_path / 'auth.db'}")
    result = runner.invoke(app, ["db", "create"])
    assert result.exit_code == 0, result.output
    return settings.database_url


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "authstore v" in result.output


def test_schema_prints_ddl():
    result = runner.invoke(app, ["db", "schema"])
    assert result.exit_code == 0
    assert "CREATE TABLE verification_token" in result.output
    assert 'CREATE TABLE "user"' in result.output
    assert "PRIMARY KEY (identifier, token)" in result.output


def test_user_lifecycle(cli_db):
    result = runner.invoke(app, ["users", "create", "cli@example.com", "--name", "Cli", "--verified"])
    assert result.exit_code == 0, result.output
    assert "Created user" in result.output

    result = runner.invoke(app, ["users", "create", "cli@example.com"])
    assert result.exit_code == 1
    assert "already exists" in result.output

    result = runner.invoke(app, ["users", "show", "cli@example.com"])
    assert result.exit_code == 0
    assert "cli@example.com" in result.output

    result = runner.invoke(app, ["users", "list"])
    assert result.exit_code == 0
    assert "cli@example.com" in result.output

    result = runner.invoke(app, ["users", "delete", "cli@example.com", "--force"])
    assert result.exit_code == 0

    result = runner.invoke(app, ["users", "show", "cli@example.com"])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_token_can_be_consumed_once(cli_db):
    result = runner.invoke(app, ["tokens", "issue", "cli@example.com"])
    assert result.exit_code == 0, result.output
    token = result.output.splitlines()[0].strip()
    assert len(token) == 64

    result = runner.invoke(app, ["tokens", "consume", "cli@example.com", token])
    assert result.exit_code == 0, result.output
    assert "Token consumed" in result.output

    result = runner.invoke(app, ["tokens", "consume", "cli@example.com", token])
    assert result.exit_code == 1


def test_sessions_show_missing(cli_db):
    result = runner.invoke(app, ["sessions", "show", "nope"])
    assert result.exit_code == 1

    result = runner.invoke(app, ["sessions", "revoke", "nope"])
    assert result.exit_code == 0


def test_drop_requires_confirmation(cli_db):
    result = runner.invoke(app, ["db", "drop"], input="n\n")
    assert result.exit_code == 0
    assert "Cancelled" in result.output

    result = runner.invoke(app, ["db", "drop", "--force"])
    assert result.exit_code == 0
