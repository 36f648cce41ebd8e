"""Tag commands for the notekeeper CLI."""

import typer
from rich.console import Console
from rich.table import Table

from notekeeper.exceptions import NotekeeperError

from ..utils.settings import run_with_api

app = typer.Typer(help="Manage system and custom tags")
console = Console()


@app.command("list")
def list_tags():
    """List all tags."""
    try:
        tags = run_with_api(lambda api: api.tags.list_all())
    except NotekeeperError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if not tags:
        console.print("No tags found")
        return

    table = Table("ID", "Name", "Type")
    for tag in tags:
        table.add_row(
            str(tag.id) if tag.id is not None else "",
            tag.name,
            "system" if tag.is_system_tag else "custom",
        )
    console.print(table)


@app.command("create")
def create_tag(name: str = typer.Argument(..., help="Name of the new tag")):
    """Create a custom tag."""
    try:
        tag = run_with_api(lambda api: api.tags.create_custom(name))
    except NotekeeperError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    console.print(f'Tag "[bold]{tag.name}[/bold]" created (id {tag.id})')


@app.command("delete")
def delete_tag(
    tag_id: int = typer.Argument(..., help="ID of the tag to delete"),
    force: bool = typer.Option(
        False, "--force", "-f", help="Delete without confirmation"
    ),
):
    """Delete a custom tag. System tags cannot be deleted."""
    try:
        tag = run_with_api(lambda api: api.tags.get(tag_id))
    except NotekeeperError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if tag.is_system_tag:
        console.print(f'[bold red]Error:[/bold red] "{tag.name}" is a system tag')
        raise typer.Exit(1)

    if not force:
        confirmed = typer.confirm(
            f'Are you sure you want to delete the tag "{tag.name}"?'
        )
        if not confirmed:
            console.print("Deletion cancelled")
            return

    try:
        run_with_api(lambda api: api.tags.delete(tag_id))
    except NotekeeperError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    console.print(f'Tag "[bold]{tag.name}[/bold]" deleted')
