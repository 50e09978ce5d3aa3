"""CLI commands using Typer."""

import typer

from authstore.cli.db import app as db_app
from authstore.cli.sessions import app as sessions_app
from authstore.cli.tokens import app as tokens_app
from authstore.cli.users import app as users_app
from authstore.logging import setup_logging

app = typer.Typer(name="authstore", help="Auth storage administration")

# Register sub-apps
app.add_typer(db_app, name="db")
app.add_typer(users_app, name="users")
app.add_typer(sessions_app, name="sessions")
app.add_typer(tokens_app, name="tokens")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
):
    """Configure logging before any command runs."""
    setup_logging("DEBUG" if verbose else None)


@app.command()
def version():
    """Show version information."""
    from authstore import __version__

    typer.echo(f"authstore v{__version__}")


if __name__ == "__main__":
    app()
