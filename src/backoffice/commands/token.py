"""Command: backoffice token - Mint an access token for local use."""

from datetime import timedelta
from uuid import UUID

import typer
from rich.console import Console


console = Console()


def token(
    user_id: UUID = typer.Argument(..., help="Auth user id (the profile id)"),
    minutes: int = typer.Option(
        60, "--minutes", "-m", min=1, help="Lifetime of the token"
    ),
    email: str | None = typer.Option(None, "--email", "-e", help="Email claim"),
) -> None:
    """Print a signed bearer token for a user.

    Tokens are signed with the configured SECRET_KEY, so they only work
    against an API sharing that key.
    """
    from backoffice.config import settings
    from backoffice.core.auth import create_access_token

    if settings.is_production:
        console.print("[red]Error:[/red] Refusing to mint tokens in production.")
        raise typer.Exit(1)

    claims = {"email": email} if email else None
    print(
        create_access_token(
            user_id,
            expires_delta=timedelta(minutes=minutes),
            additional_claims=claims,
        )
    )
