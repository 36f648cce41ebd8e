"""Notes commands for the notekeeper CLI."""

from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from notekeeper import Note, SearchCriteria
from notekeeper.drafts import add_tag
from notekeeper.exceptions import NotekeeperError
from notekeeper.models import Category

from ..utils.settings import run_with_api

app = typer.Typer(help="Create, edit, delete and search notes")
console = Console()


def _truncate(text: str, max_length: int = 60) -> str:
    if not text:
        return ""
    return text[:max_length] + "..." if len(text) > max_length else text


def _notes_table(notes: List[Note]) -> Table:
    table = Table("ID", "Title", "Category", "Tags", "Content")
    for note in notes:
        table.add_row(
            str(note.id) if note.id is not None else "",
            note.title,
            note.category_name or "",
            ", ".join(note.tag_names),
            _truncate(note.content),
        )
    return table


def _print_notes(notes: List[Note]) -> None:
    if not notes:
        console.print("No notes found")
        return
    console.print(_notes_table(notes))


async def _resolve_category(api, category_id: Optional[int]) -> Optional[Category]:
    if category_id is None:
        return None
    return await api.categories.get(category_id)


@app.command("list")
def list_notes():
    """List all notes."""
    try:
        notes = run_with_api(lambda api: api.notes.list_all())
    except NotekeeperError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    _print_notes(notes)


@app.command("show")
def show_note(note_id: int = typer.Argument(..., help="ID of the note")):
    """Show a single note."""
    try:
        note = run_with_api(lambda api: api.notes.get(note_id))
    except NotekeeperError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print(f"[bold]Note #{note.id}:[/bold] {note.title}")
    console.print(f"Category: {note.category_name or 'None'}")
    console.print(f"Tags: {', '.join(note.tag_names) or 'None'}")
    console.print()
    console.print(note.content)


@app.command("create")
def create_note(
    title: str = typer.Option(..., "--title", "-t", help="Title of the note"),
    content: str = typer.Option("", "--content", "-c", help="Body of the note"),
    tags: Optional[List[str]] = typer.Option(
        None, "--tag", help="Tag name (repeatable)"
    ),
    category_id: Optional[int] = typer.Option(
        None, "--category-id", help="ID of an existing category"
    ),
):
    """Create a new note."""

    async def _create(api):
        draft = Note(
            title=title,
            content=content,
            category=await _resolve_category(api, category_id),
        )
        for name in tags or []:
            draft = add_tag(draft, name)
        return await api.notes.create(draft)

    try:
        created = run_with_api(_create)
    except NotekeeperError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    console.print(f"Created note [bold]#{created.id}[/bold] {created.title}")


@app.command("update")
def update_note(
    note_id: int = typer.Argument(..., help="ID of the note"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    content: Optional[str] = typer.Option(None, "--content", "-c", help="New body"),
    tags: Optional[List[str]] = typer.Option(
        None, "--tag", help="Replace tags with these names (repeatable)"
    ),
    category_id: Optional[int] = typer.Option(
        None, "--category-id", help="Move the note to this category"
    ),
    clear_category: bool = typer.Option(
        False, "--no-category", help="Remove the note's category"
    ),
):
    """Update an existing note."""
    requested = (title, content, tags, category_id)
    if all(v is None for v in requested) and not clear_category:
        console.print("[yellow]Warning:[/yellow] No updates specified")
        return

    async def _update(api):
        # Start from the server's copy so untouched fields are preserved
        note = await api.notes.get(note_id)
        changes = {}
        if title is not None:
            changes["title"] = title
        if content is not None:
            changes["content"] = content
        if clear_category:
            changes["category"] = None
        elif category_id is not None:
            changes["category"] = await _resolve_category(api, category_id)
        note = note.model_copy(update=changes)
        if tags is not None:
            note = note.model_copy(update={"tags": []})
            for name in tags:
                note = add_tag(note, name)
        return await api.notes.update(note)

    try:
        updated = run_with_api(_update)
    except NotekeeperError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    console.print(f"Updated note [bold]#{updated.id}[/bold]")


@app.command("delete")
def delete_note(
    note_id: int = typer.Argument(..., help="ID of the note to delete"),
    force: bool = typer.Option(
        False, "--force", "-f", help="Delete without confirmation"
    ),
):
    """Delete a note."""
    if not force:
        confirmed = typer.confirm(f"Are you sure you want to delete note {note_id}?")
        if not confirmed:
            console.print("Deletion cancelled")
            return

    try:
        run_with_api(lambda api: api.notes.delete(note_id))
    except NotekeeperError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    console.print(f"Deleted note [bold]#{note_id}[/bold]")


@app.command("search")
def search_notes(
    tags: Optional[List[str]] = typer.Option(
        None, "--tag", help="Tag name (repeatable; any match)"
    ),
    category: str = typer.Option("", "--category", help="Category name"),
    title: str = typer.Option("", "--title", help="Title keyword"),
):
    """
    Search notes. Only one filter applies: tags, else category, else title.
    """
    criteria = SearchCriteria(tags=tuple(tags or ()), category=category, title=title)
    try:
        result = run_with_api(lambda api: api.search(criteria))
    except NotekeeperError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    console.print(f"Search by [bold]{result.mode.value}[/bold]: {len(result.notes)} found")
    _print_notes(result.notes)
