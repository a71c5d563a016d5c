"""Command: backoffice access - Show what a role can open and edit."""

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from backoffice.core.permissions.rules import EvaluationStrategy, PageGrant


console = Console()


async def load_role_grants(role_name: str) -> list[PageGrant] | None:
    """Load a role's rows by name; None when the role does not exist."""
    from sqlalchemy import select

    from backoffice.core.database import async_session_factory
    from backoffice.core.permissions.models import Role
    from backoffice.core.permissions.store import PermissionStore

    async with async_session_factory() as session:
        result = await session.execute(select(Role).where(Role.name == role_name))
        role = result.scalar_one_or_none()
        if role is None:
            return None
        rows = await PermissionStore(session).load_permissions(role.id)
        return [PageGrant(r.page_name, r.can_view, r.can_edit) for r in rows]


def _mark(value: bool) -> str:
    return "[green]yes[/green]" if value else "[red]no[/red]"


def access(
    role: str = typer.Argument(..., help="Role name, e.g. Manager"),
    strategy: EvaluationStrategy = typer.Option(
        EvaluationStrategy.STRICT, "--strategy", "-s", help="Evaluator to apply"
    ),
) -> None:
    """Evaluate every registered page for a role.

    Useful for checking a role after editing its matrix.
    """
    from sqlalchemy.exc import SQLAlchemyError

    from backoffice.core.errors import StoreError
    from backoffice.core.permissions import registry
    from backoffice.core.permissions.controller import decide

    try:
        grants = asyncio.run(load_role_grants(role))
    except StoreError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1) from e
    except (SQLAlchemyError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    if grants is None:
        console.print(f"[red]Error:[/red] Role '{role}' not found.")
        raise typer.Exit(1)

    table = Table(title=f"{role} ({strategy.value})", show_header=True)
    table.add_column("Page", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("View", no_wrap=True)
    table.add_column("Edit", no_wrap=True)

    for page in registry.get_available_pages():
        view, edit = decide(grants, page.path, strategy)
        table.add_row(page.path, page.display_name, _mark(view), _mark(edit))

    console.print()
    console.print(table)
    if not grants:
        console.print(f"[yellow]Warning:[/yellow] Role '{role}' has no permission rows.")
    console.print()
