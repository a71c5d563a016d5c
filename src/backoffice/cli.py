"""Back-office administration CLI."""

import typer
from rich.console import Console

from backoffice import __version__
from backoffice.commands import access, pages, seed, token


console = Console()

app = typer.Typer(
    name="backoffice",
    help="Administer roles and page permissions.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register commands
app.command(name="pages")(pages.pages)
app.command(name="seed")(seed.seed)
app.command(name="access")(access.access)
app.command(name="token")(token.token)


@app.callback(invoke_without_command=True)
def version_callback(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit."
    ),
) -> None:
    """Catering back-office CLI."""
    if version:
        console.print(f"[bold cyan]backoffice[/bold cyan] version {__version__}")
        raise typer.Exit()


def main() -> None:
    """Entry point for the CLI."""
    from backoffice.core.logging import configure_logging

    configure_logging()
    app()


if __name__ == "__main__":
    main()
