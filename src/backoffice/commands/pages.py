"""Command: backoffice pages - Show the registered dashboard pages."""

from rich.console import Console
from rich.tree import Tree


console = Console()


def pages() -> None:
    """Print the navigation registry as a tree.

    Lists every page that can be granted in the permission matrix.
    """
    from backoffice.core.permissions import registry

    tree = Tree("[bold cyan]Dashboard pages[/bold cyan]")
    full = registry.FULL_ACCESS_ENTRY
    tree.add(f"[magenta]{full.path}[/magenta]  {full.display_name}")

    for page in registry.get_available_pages():
        if page.parent_id is not None:
            continue
        branch = tree.add(f"[cyan]{page.path}[/cyan]  {page.display_name}")
        for child in registry.get_children(page.path):
            branch.add(f"[cyan]{child.path}[/cyan]  {child.display_name}")

    console.print()
    console.print(tree)
    console.print()
