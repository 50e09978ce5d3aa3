"""User management CLI commands."""

import asyncio
from datetime import UTC, datetime

import typer
from rich.console import Console
from rich.table import Table
from sqlmodel import select

from authstore.cli.utils import open_adapter
from authstore.database import close_db, get_session_context
from authstore.models import User
from authstore.schemas import AdapterUserCreate

console = Console()
app = typer.Typer(help="User management commands")


@app.command("list")
def list_users():
    """List all users."""

    async def _list():
        try:
            async with get_session_context() as session:
                stmt = select(User).order_by(User.id)
                result = await session.execute(stmt)
                users = result.scalars().all()
        finally:
            await close_db()

        table = Table(title="Users")
        table.add_column("ID", style="cyan")
        table.add_column("Email", style="green")
        table.add_column("Name")
        table.add_column("Verified", style="dim")

        for user in users:
            verified = user.email_verified_at.strftime("%Y-%m-%d") if user.email_verified_at else "-"
            table.add_row(str(user.id), user.email or "-", user.name or "-", verified)

        console.print(table)

    asyncio.run(_list())


@app.command("show")
def show_user(email: str = typer.Argument(..., help="User email")):
    """Show a user and whether their email is verified."""

    async def _show():
        async with open_adapter() as adapter:
            user = await adapter.get_user_by_email(email)

        if not user:
            console.print(f"[red]Error:[/red] User {email} not found")
            raise typer.Exit(1)

        console.print(f"[cyan]ID:[/cyan] {user.id}")
        console.print(f"[cyan]Name:[/cyan] {user.name or '-'}")
        console.print(f"[cyan]Email:[/cyan] {user.email}")
        console.print(f"[cyan]Verified:[/cyan] {user.email_verified or 'no'}")

    asyncio.run(_show())


@app.command("create")
def create_user(
    email: str = typer.Argument(..., help="User email"),
    name: str | None = typer.Option(None, "--name", "-n", help="Display name"),
    verified: bool = typer.Option(False, "--verified", help="Mark the email as verified now"),
):
    """Create a new user."""

    async def _create():
        async with open_adapter() as adapter:
            if await adapter.get_user_by_email(email):
                console.print(f"[red]Error:[/red] User {email} already exists")
                raise typer.Exit(1)

            user = await adapter.create_user(
                AdapterUserCreate(
                    name=name,
                    email=email,
                    email_verified=datetime.now(UTC) if verified else None,
                )
            )

        name_str = f" ({name})" if name else ""
        console.print(f"[green]Created user:[/green] {email}{name_str} id={user.id}")

    asyncio.run(_create())


@app.command("delete")
def delete_user(
    email: str = typer.Argument(..., help="User email"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
):
    """Delete a user with all of their sessions and linked accounts."""

    async def _delete():
        async with open_adapter() as adapter:
            user = await adapter.get_user_by_email(email)
            if not user:
                console.print(f"[red]Error:[/red] User {email} not found")
                raise typer.Exit(1)

            if not force and not typer.confirm(f"Delete {email} and all their sessions?"):
                console.print("[dim]Cancelled[/dim]")
                raise typer.Exit(0)

            await adapter.delete_user(user.id)

        console.print(f"[green]Deleted user:[/green] {email}")

    asyncio.run(_delete())
