"""Database management CLI commands."""

import asyncio

import typer
from rich.console import Console
from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateTable
from sqlmodel import SQLModel

from authstore.cli.utils import open_adapter
from authstore.database import create_tables, drop_tables

console = Console()
app = typer.Typer(help="Database management commands")


@app.command("create")
def create():
    """Create all tables (development and tests; production uses migrations)."""

    async def _create():
        async with open_adapter() as adapter:
            await create_tables(adapter.engine)

    asyncio.run(_create())
    console.print("[green]Tables created[/green]")


@app.command("drop")
def drop(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
):
    """Drop all tables.

    WARNING: This will delete all data!
    """
    if not force:
        console.print("[bold red]WARNING:[/bold red] This will delete ALL auth data!")
        if not typer.confirm("Are you sure you want to continue?"):
            console.print("[dim]Cancelled[/dim]")
            raise typer.Exit(0)

    async def _drop():
        async with open_adapter() as adapter:
            await drop_tables(adapter.engine)

    asyncio.run(_drop())
    console.print("[green]Tables dropped[/green]")


@app.command("schema")
def schema():
    """Print the PostgreSQL DDL for all tables."""
    import authstore.models  # noqa: F401

    dialect = postgresql.dialect()
    for table in SQLModel.metadata.sorted_tables:
        ddl = str(CreateTable(table).compile(dialect=dialect)).strip()
        typer.echo(f"{ddl};\n")
