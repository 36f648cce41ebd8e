"""Tag editing on notes and drafts. Each helper returns a new Note."""

from __future__ import annotations

from .models import Note, Tag


def add_tag(note: Note, name: str) -> Note:
    clean = (name or "").strip()
    if not clean or any(t.name == clean for t in note.tags):
        return note
    return note.model_copy(update={"tags": [*note.tags, Tag(name=clean)]})


def remove_tag(note: Note, name: str) -> Note:
    return note.model_copy(update={"tags": [t for t in note.tags if t.name != name]})


def toggle_tag(note: Note, tag: Tag, selected: bool) -> Note:
    """Select or deselect ``tag`` (matched by id when both sides have one, else by name)."""
    present = any(t.matches(tag) for t in note.tags)
    if selected and not present:
        return note.model_copy(update={"tags": [*note.tags, tag]})
    if not selected and present:
        return note.model_copy(
            update={"tags": [t for t in note.tags if not t.matches(tag)]}
        )
    return note
