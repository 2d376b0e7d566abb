"""User account management CLI commands."""

import typer
from rich.console import Console
from rich.prompt import Confirm
from rich.table import Table

from src.contacts.core.security import hash_password
from src.contacts.core.services import DbSessionService
from src.contacts.entities.user import Role, User, UserRepository

console = Console()

# Create the users subcommand app
users_app = typer.Typer(help="Manage accounts that can sign in", no_args_is_help=True)


@users_app.command("list")
def list_users() -> None:
    """List all user accounts."""
    with DbSessionService().session_scope() as db:
        users = UserRepository(db).list_all()

    if not users:
        console.print("[yellow]No users found[/yellow]")
        return

    table = Table(title="Users")
    table.add_column("ID", style="cyan")
    table.add_column("Email", style="blue")
    table.add_column("Name", style="magenta")
    table.add_column("Role", style="yellow")

    for user in users:
        table.add_row(user.id or "", user.email, user.name, user.role.value)

    console.print(table)
    console.print(f"\n[green]Found {len(users)} users[/green]")


@users_app.command("add")
def add_user(
    email: str = typer.Argument(..., help="Login email address"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, help="Password"
    ),
    role: Role = typer.Option(Role.USER, "--role", "-r", help="Account role"),
    name: str = typer.Option("", "--name", "-n", help="Display name"),
) -> None:
    """Add a user who can sign in and manage contacts."""
    with DbSessionService().session_scope() as db:
        users = UserRepository(db)
        existing = users.get_by_email(email)
        if existing is None:
            created = users.create(
                User(
                    email=email,
                    name=name,
                    role=role,
                    password_hash=hash_password(password),
                )
            )

    if existing is not None:
        console.print(f"[red]User '{email}' already exists[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]Created {created.role.value} '{created.email}'[/green]")


@users_app.command("delete")
def delete_user(
    email: str = typer.Argument(..., help="Email of the user to delete"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
) -> None:
    """Delete a user account."""
    db_service = DbSessionService()
    with db_service.session_scope() as db:
        user = UserRepository(db).get_by_email(email)

    if user is None:
        console.print(f"[red]User '{email}' not found[/red]")
        raise typer.Exit(code=1)

    if not force and not Confirm.ask(f"Delete user '{user.email}'?"):
        console.print("[yellow]Deletion cancelled[/yellow]")
        return

    with db_service.session_scope() as db:
        UserRepository(db).delete(user.id)

    console.print(f"[green]Deleted user '{email}'[/green]")
