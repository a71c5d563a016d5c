"""Command: backoffice seed - Create the canonical roles and permissions."""

import asyncio
from typing import Any
from uuid import UUID

import typer
from rich.console import Console
from rich.table import Table


console = Console()


async def run_bootstrap(user_id: UUID | None, email: str | None) -> dict[str, Any]:
    from backoffice.core.database import async_session_factory
    from backoffice.core.permissions.seeds import bootstrap_permissions

    async with async_session_factory() as session:
        summary = await bootstrap_permissions(session, user_id=user_id, email=email)
        await session.commit()
    return summary


def seed(
    user_id: UUID | None = typer.Option(
        None, "--user-id", "-u", help="Auth user id to make Owner"
    ),
    email: str | None = typer.Option(
        None, "--email", "-e", help="Email for a newly created Owner profile"
    ),
) -> None:
    """Create or reset the Owner, Admin, Manager, User and Viewer roles.

    Rows of roles created by administrators are left alone.
    """
    from sqlalchemy.exc import SQLAlchemyError

    try:
        summary = asyncio.run(run_bootstrap(user_id, email))
    except (SQLAlchemyError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    table = Table(title="Roles", show_header=True)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Id", style="dim")
    for name, role_id in summary["roles"].items():
        table.add_row(name, role_id)

    console.print()
    console.print(table)
    console.print(
        f"\n[green]✓[/green] Created {summary['permissions_created']} permission rows"
    )
    if summary["owner_profile_id"]:
        console.print(
            f"[green]✓[/green] Owner {summary['owner_profile_id']} "
            f"({summary['owner_action']})"
        )
    else:
        console.print(
            "[yellow]Warning:[/yellow] No Owner assigned. "
            "Run again with --user-id to make someone Owner."
        )
