"""Main CLI application module."""

import typer
from rich.console import Console

from .user_commands import users_app

console = Console()

# Create the main CLI application
app = typer.Typer(
    help="Contacts directory management tool",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register command groups
app.add_typer(users_app, name="users")


@app.command("init-db")
def init_db() -> None:
    """Create the database tables."""
    from src.contacts.runtime.init_db import init_db as create_tables

    try:
        create_tables()
    except Exception as e:
        console.print(f"[red]Failed to initialize database: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print("[green]Database tables created[/green]")


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host", help="Interface to bind"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to listen on"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the web application with uvicorn."""
    import uvicorn

    from src.contacts.runtime.context import get_config

    config = get_config()
    bind_host = host or config.app.host
    bind_port = port or config.app.port

    console.print(f"[blue]Server will be available at:[/blue] http://{bind_host}:{bind_port}")
    console.print("[dim]Press Ctrl+C to stop the server[/dim]")
    uvicorn.run(
        "src.contacts.api.http.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        access_log=False,
    )


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
