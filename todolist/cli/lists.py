"""CLI commands for inspecting stored lists."""

import asyncio
import selectors
import sys
from collections.abc import Coroutine
from typing import Any

import typer
from rich.console import Console
from rich.table import Table
from sqlalchemy.exc import SQLAlchemyError

from todolist.db.session import get_session_factory
from todolist.items.service import ItemService
from todolist.lists.service import TODAY_LIST_NAME, ListService, normalize_list_name

console = Console()
error_console = Console(stderr=True)


def run_async(coro: Coroutine[Any, Any, Any]) -> Any:
    """Run an async coroutine synchronously.

    On Windows, psycopg3 requires SelectorEventLoop instead of ProactorEventLoop.
    """
    if sys.platform == "win32":
        selector = selectors.SelectSelector()
        loop = asyncio.SelectorEventLoop(selector)
        try:
            return loop.run_until_complete(coro)
        finally:
            loop.close()
    else:
        return asyncio.run(coro)


def handle_db_error(e: SQLAlchemyError) -> None:
    """Handle store errors with a user-friendly message."""
    error_console.print("[red]Error: Unable to read from the store.[/red]")
    error_console.print(f"[dim]Details: {e!s}[/dim]")
    raise typer.Exit(1) from None


app = typer.Typer(help="Inspect stored lists")


@app.command("show")
def show_lists() -> None:
    """Show every list with its number of items."""

    async def _show() -> None:
        try:
            async with get_session_factory()() as db:
                today_count = await ItemService.count(db)
                lists = await ListService.get_all(db)

                table = Table(title=f"Lists ({len(lists) + 1} total)")
                table.add_column("Name", style="cyan")
                table.add_column("Items", justify="right")
                table.add_column("Path")
                table.add_column("Created")

                table.add_row(TODAY_LIST_NAME, str(today_count), "/", "[dim]-[/dim]")
                for todo_list, count in lists:
                    table.add_row(
                        todo_list.name,
                        str(count),
                        f"/{todo_list.name}",
                        todo_list.created_at.strftime("%Y-%m-%d %H:%M"),
                    )

                console.print(table)
        except SQLAlchemyError as e:
            handle_db_error(e)

    run_async(_show())


@app.command("items")
def show_items(
    name: str = typer.Argument(..., help="List name (case-insensitive)"),
) -> None:
    """Show the items of one list."""

    async def _items() -> None:
        list_name = normalize_list_name(name)
        try:
            async with get_session_factory()() as db:
                if list_name == TODAY_LIST_NAME:
                    items: list[Any] = await ItemService.get_all(db)
                else:
                    todo_list = await ListService.get_by_name(db, list_name)
                    if todo_list is None:
                        console.print(f"[red]No list named: {list_name}[/red]")
                        raise typer.Exit(1)
                    items = list(todo_list.items)

                if not items:
                    console.print(f"[yellow]{list_name} has no items.[/yellow]")
                    return

                table = Table(title=list_name)
                table.add_column("#", justify="right", style="dim")
                table.add_column("Item")
                table.add_column("ID", style="cyan")
                for index, item in enumerate(items, start=1):
                    table.add_row(str(index), item.name, item.id)

                console.print(table)
        except SQLAlchemyError as e:
            handle_db_error(e)

    run_async(_items())
