"""Session inspection CLI commands."""

import asyncio

import typer
from rich.console import Console

from authstore.cli.utils import open_adapter

console = Console()
app = typer.Typer(help="Session commands")


@app.command("show")
def show_session(token: str = typer.Argument(..., help="Session token")):
    """Show a session and its owner."""

    async def _show():
        async with open_adapter() as adapter:
            found = await adapter.get_session_and_user(token)

        if not found:
            console.print("[red]Error:[/red] Session not found")
            raise typer.Exit(1)

        console.print(f"[cyan]Session:[/cyan] {found.session.id}")
        console.print(f"[cyan]User:[/cyan] {found.user.id} {found.user.email or ''}")
        console.print(f"[cyan]Expires:[/cyan] {found.session.expires.isoformat()}")

    asyncio.run(_show())


@app.command("revoke")
def revoke_session(token: str = typer.Argument(..., help="Session token")):
    """Delete a session."""

    async def _revoke():
        async with open_adapter() as adapter:
            await adapter.delete_session(token)

    asyncio.run(_revoke())
    console.print("[green]Session revoked[/green]")
