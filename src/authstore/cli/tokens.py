"""Verification token CLI commands."""

import asyncio
from datetime import UTC, datetime, timedelta
from secrets import token_hex

import typer
from rich.console import Console

from authstore.cli.utils import open_adapter
from authstore.config import settings
from authstore.schemas import AdapterVerificationToken

console = Console()
app = typer.Typer(help="Verification token commands")


@app.command("issue")
def issue_token(identifier: str = typer.Argument(..., help="Identifier, usually an email")):
    """Issue a verification token for an identifier."""

    async def _issue():
        token = token_hex(32)
        expires = datetime.now(UTC) + timedelta(minutes=settings.verification_token_expiration_minutes)

        async with open_adapter() as adapter:
            await adapter.create_verification_token(
                AdapterVerificationToken(identifier=identifier, token=token, expires=expires)
            )

        typer.echo(token)
        console.print(f"[dim]Expires: {expires}[/dim]")

    asyncio.run(_issue())


@app.command("consume")
def consume_token(
    identifier: str = typer.Argument(..., help="Identifier the token was issued for"),
    token: str = typer.Argument(..., help="Token value"),
):
    """Consume a verification token. A token can only be consumed once."""

    async def _consume():
        async with open_adapter() as adapter:
            used = await adapter.use_verification_token(identifier, token)

        if not used:
            console.print("[red]Error:[/red] Invalid or already used token")
            raise typer.Exit(1)

        if used.expires < datetime.now(UTC):
            console.print("[yellow]Warning:[/yellow] Token had already expired")
            raise typer.Exit(2)

        console.print(f"[green]Token consumed for:[/green] {used.identifier}")

    asyncio.run(_consume())
