"""
Notes resource service.

Public API:
  - NotesService.list_all() -> List[Note]
  - NotesService.get(note_id) -> Note
  - NotesService.create(draft) -> Note
  - NotesService.update(note) -> Note
  - NotesService.delete(note_id) -> None
  - NotesService.search_by_tags(tag_names) -> List[Note]
  - NotesService.search_by_category(category_name) -> List[Note]

Every payload coming back is run through ``normalize`` before it is
validated, and the outgoing ``tags`` of a create/update is normalized too.
The two search operations fall back to a full fetch plus a local filter when
the server-side search endpoint fails.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Union

from notekeeper.exceptions import (
    CreateError,
    DeleteError,
    FetchError,
    NoteValidationError,
    TransportError,
    UpdateError,
)
from notekeeper.models import Note
from notekeeper.normalize import (
    normalize_note,
    normalize_note_list,
    normalize_tag_collection,
)

from .base import BaseService

LOGGER = logging.getLogger(__name__)

NoteInput = Union[Note, Mapping[str, Any]]


def filter_by_tag_names(notes: Iterable[Note], tag_names: Iterable[str]) -> List[Note]:
    """Notes carrying at least one of ``tag_names`` (OR across names)."""
    wanted = set(tag_names)
    return [n for n in notes if any(t.name in wanted for t in n.tags)]


def filter_by_category_name(notes: Iterable[Note], category_name: str) -> List[Note]:
    """Notes whose category name contains ``category_name``, ignoring case."""
    needle = category_name.lower()
    return [
        n
        for n in notes
        if n.category is not None and needle in (n.category.name or "").lower()
    ]


def filter_by_title(notes: Iterable[Note], keyword: str) -> List[Note]:
    """Notes whose title contains ``keyword``, ignoring case."""
    needle = keyword.lower()
    return [n for n in notes if needle in (n.title or "").lower()]


class NotesService(BaseService):
    ENDPOINT = "/notes"

    # ----------------------------- Helpers -----------------------------------

    def _note(self, data: Any, error_cls, message: str) -> Note:
        items = normalize_note_list(data)
        if not items:
            raise error_cls(f"{message}: empty response")
        return self._parse(Note, items[0], error_cls, message)

    def _notes(self, data: Any, message: str) -> List[Note]:
        return [
            self._parse(Note, item, FetchError, message)
            for item in normalize_note_list(data)
        ]

    @staticmethod
    def _coerce(note: NoteInput, error_cls, message: str) -> Note:
        if isinstance(note, Note):
            return note
        try:
            return Note.model_validate(normalize_note(note))
        except ValueError as e:
            raise error_cls(f"{message}: {e}") from e

    @staticmethod
    def _payload(note: Note) -> dict:
        payload = note.to_payload()
        payload["tags"] = normalize_tag_collection(payload.get("tags"))
        return payload

    # ----------------------------- CRUD --------------------------------------

    async def list_all(self) -> List[Note]:
        message = "Failed to fetch notes"
        data = await self._call(FetchError, message, "GET", self._path())
        notes = self._notes(data, message)
        LOGGER.info("Fetched %d notes.", len(notes))
        return notes

    async def get(self, note_id: int) -> Note:
        message = f"Failed to fetch note {note_id}"
        data = await self._call(FetchError, message, "GET", self._path(note_id))
        return self._note(data, FetchError, message)

    async def create(self, draft: NoteInput) -> Note:
        """
        Persist a draft and return the server's copy (with its new ``id``).
        Drafts with an empty title or an ``id`` already set are rejected
        before any request is made.
        """
        message = "Failed to create note"
        note = self._coerce(draft, NoteValidationError, message)
        if not note.title or not note.title.strip():
            raise NoteValidationError(f"{message}: title must not be empty")
        if note.is_persisted:
            raise NoteValidationError(f"{message}: draft already has id {note.id}")
        payload = self._payload(note)
        LOGGER.debug("Creating note with payload: %r", payload)
        data = await self._call(CreateError, message, "POST", self._path(), body=payload)
        created = self._note(data, CreateError, message)
        LOGGER.info("Created note %s.", created.id)
        return created

    async def update(self, note: NoteInput) -> Note:
        message = "Failed to update note"
        note = self._coerce(note, UpdateError, message)
        if not note.is_persisted:
            raise UpdateError(f"{message}: note has no id")
        data = await self._call(
            UpdateError,
            f"{message} {note.id}",
            "PUT",
            self._path(note.id),
            body=self._payload(note),
        )
        return self._note(data, UpdateError, f"{message} {note.id}")

    async def delete(self, note_id: int) -> None:
        await self._call(
            DeleteError, f"Failed to delete note {note_id}", "DELETE", self._path(note_id)
        )
        LOGGER.info("Deleted note %s.", note_id)

    # ----------------------------- Search ------------------------------------

    async def search_by_tags(self, tag_names: Iterable[str]) -> List[Note]:
        names = list(dict.fromkeys(tag_names))
        try:
            data = await self._transport.request(
                "GET", self._path("search", "tags"), params={"tags": ",".join(names)}
            )
        except TransportError as e:
            LOGGER.warning(
                "Tag search endpoint failed (%s); filtering all notes locally", e
            )
            return filter_by_tag_names(await self.list_all(), names)
        return self._notes(data, "Failed to search notes by tags")

    async def search_by_category(self, category_name: str) -> List[Note]:
        try:
            data = await self._transport.request(
                "GET",
                self._path("search", "category"),
                params={"category": category_name},
            )
        except TransportError as e:
            LOGGER.warning(
                "Category search endpoint failed (%s); filtering all notes locally", e
            )
            return filter_by_category_name(await self.list_all(), category_name)
        return self._notes(data, "Failed to search notes by category")
