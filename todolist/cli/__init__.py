"""CLI module for running and inspecting the to-do list server."""

import typer

from todolist.cli.lists import app as lists_app

app = typer.Typer(
    name="todolist",
    help="To-do list server - CLI management tool",
    no_args_is_help=True,
)

app.add_typer(lists_app, name="lists", help="Inspect stored lists")


@app.command()
def serve(
    host: str | None = typer.Option(
        None, "--host", "-h", help="Host to bind to (default: HOST setting)"
    ),
    port: int | None = typer.Option(
        None, "--port", "-p", help="Port to bind to (default: PORT setting, 3000)"
    ),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload"),
) -> None:
    """Start the to-do list server."""
    import uvicorn

    from todolist.config.settings import get_settings

    settings = get_settings()
    uvicorn.run(
        "todolist.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@app.command()
def version() -> None:
    """Show the application version."""
    from importlib.metadata import PackageNotFoundError, version as get_version

    try:
        ver = get_version("todolist")
    except PackageNotFoundError:
        ver = "0.1.0 (development)"
    typer.echo(f"todolist version {ver}")


if __name__ == "__main__":
    app()
