"""
Locally held collections and their reconciliation after mutations.

``NotesState`` is an immutable snapshot; every change produces a new one, so
a reader never sees a half-applied update. ``StateSynchronizer`` owns the
current snapshot and commits a mutation only after the server confirms it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Iterable, List, Optional, Tuple

from .models import Category, Note, Tag
from .services import NotesService, TagsService

LOGGER = logging.getLogger(__name__)

RECENT_WINDOW = 10

Listener = Callable[["NotesState"], None]


@dataclass(frozen=True)
class NoteStats:
    total: int
    recent: int
    categories: int


@dataclass(frozen=True)
class NotesState:
    notes: Tuple[Note, ...] = ()
    tags: Tuple[Tag, ...] = ()
    categories: Tuple[Category, ...] = ()

    @property
    def stats(self) -> NoteStats:
        # Derived on every read; never stored.
        in_use = {n.category.name for n in self.notes if n.category and n.category.name}
        return NoteStats(
            total=len(self.notes),
            recent=len(self.notes[:RECENT_WINDOW]),
            categories=len(in_use),
        )

    def find(self, note_id: int) -> Optional[Note]:
        return next((n for n in self.notes if n.id == note_id), None)


# --------------------------- Pure transitions --------------------------------


def with_created_note(state: NotesState, note: Note, *, prepend: bool = True) -> NotesState:
    notes = (note, *state.notes) if prepend else (*state.notes, note)
    return replace(state, notes=notes)


def with_updated_note(state: NotesState, note: Note) -> NotesState:
    if state.find(note.id) is None:
        LOGGER.warning("Updated note %s is not in the local cache; ignoring", note.id)
        return state
    return replace(
        state, notes=tuple(note if n.id == note.id else n for n in state.notes)
    )


def without_note(state: NotesState, note_id: int) -> NotesState:
    return replace(state, notes=tuple(n for n in state.notes if n.id != note_id))


def with_created_tag(state: NotesState, tag: Tag) -> NotesState:
    return replace(state, tags=(tag, *state.tags))


def without_tag(state: NotesState, tag_id: int) -> NotesState:
    return replace(state, tags=tuple(t for t in state.tags if t.id != tag_id))


# ------------------------------ Synchronizer ---------------------------------


class StateSynchronizer:
    """
    Holds the current ``NotesState`` and applies server-confirmed mutations.

    A mutation that raises leaves the held state untouched.
    """

    def __init__(
        self,
        notes: NotesService,
        tags: TagsService,
        state: Optional[NotesState] = None,
    ):
        self._notes = notes
        self._tags = tags
        self._state = state or NotesState()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> NotesState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with every new snapshot. Returns an unsubscribe."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def commit(self, state: NotesState) -> NotesState:
        if state is not self._state:
            self._state = state
            for listener in list(self._listeners):
                listener(state)
        return state

    def load(
        self,
        notes: Iterable[Note],
        tags: Optional[Iterable[Tag]] = None,
        categories: Optional[Iterable[Category]] = None,
    ) -> NotesState:
        current = self._state
        return self.commit(
            NotesState(
                notes=tuple(notes),
                tags=tuple(tags) if tags is not None else current.tags,
                categories=(
                    tuple(categories) if categories is not None else current.categories
                ),
            )
        )

    async def refresh_notes(self) -> NotesState:
        notes = await self._notes.list_all()
        return self.commit(replace(self._state, notes=tuple(notes)))

    async def create_note(self, draft, *, prepend: bool = True) -> Note:
        created = await self._notes.create(draft)
        self.commit(with_created_note(self._state, created, prepend=prepend))
        return created

    async def update_note(self, note) -> Note:
        updated = await self._notes.update(note)
        self.commit(with_updated_note(self._state, updated))
        return updated

    async def delete_note(self, note_id: int) -> None:
        await self._notes.delete(note_id)
        self.commit(without_note(self._state, note_id))

    async def create_tag(self, name: str) -> Tag:
        tag = await self._tags.create_custom(name)
        self.commit(with_created_tag(self._state, tag))
        return tag

    async def delete_tag(self, tag_id: int) -> None:
        await self._tags.delete(tag_id)
        self.commit(without_tag(self._state, tag_id))
