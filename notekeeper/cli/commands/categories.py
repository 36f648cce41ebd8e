"""Category commands for the notekeeper CLI."""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from notekeeper.exceptions import NotekeeperError

from ..utils.settings import run_with_api

app = typer.Typer(help="Manage categories")
console = Console()


@app.command("list")
def list_categories():
    """List all categories."""
    try:
        categories = run_with_api(lambda api: api.categories.list_all())
    except NotekeeperError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if not categories:
        console.print("No categories found")
        return

    table = Table("ID", "Name", "Description")
    for category in categories:
        table.add_row(
            str(category.id) if category.id is not None else "",
            category.name,
            category.description or "",
        )
    console.print(table)


@app.command("create")
def create_category(
    name: str = typer.Argument(..., help="Name of the category"),
    description: Optional[str] = typer.Option(None, help="Optional description"),
):
    """Create a category."""
    try:
        category = run_with_api(lambda api: api.categories.create(name, description))
    except NotekeeperError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    console.print(f"Created category [bold]{category.name}[/bold] (id {category.id})")


@app.command("update")
def update_category(
    category_id: int = typer.Argument(..., help="ID of the category"),
    name: str = typer.Option(..., help="New name"),
    description: Optional[str] = typer.Option(None, help="New description"),
):
    """Rename a category or change its description."""
    try:
        category = run_with_api(
            lambda api: api.categories.update(category_id, name, description)
        )
    except NotekeeperError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    console.print(f"Updated category [bold]{category.name}[/bold]")


@app.command("delete")
def delete_category(
    category_id: int = typer.Argument(..., help="ID of the category to delete"),
    force: bool = typer.Option(
        False, "--force", "-f", help="Delete without confirmation"
    ),
):
    """Delete a category."""
    if not force:
        confirmed = typer.confirm(
            f"Are you sure you want to delete category {category_id}?"
        )
        if not confirmed:
            console.print("Deletion cancelled")
            return

    try:
        run_with_api(lambda api: api.categories.delete(category_id))
    except NotekeeperError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    console.print(f"Deleted category [bold]{category_id}[/bold]")
