"""
Search over notes with a single active filter.

Filters are not combined. When several are set the first of these wins:
tag selection, category, title keyword; with none set every note is
returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from .models import Note
from .services import NotesService
from .services.notes import filter_by_title

LOGGER = logging.getLogger(__name__)


class SearchMode(str, Enum):
    TAGS = "tags"
    CATEGORY = "category"
    TITLE = "title"
    ALL = "all"


@dataclass(frozen=True)
class SearchCriteria:
    tags: Tuple[str, ...] = ()
    category: str = ""
    title: str = ""

    @property
    def mode(self) -> SearchMode:
        if any(t for t in self.tags):
            return SearchMode.TAGS
        if self.category:
            return SearchMode.CATEGORY
        if self.title:
            return SearchMode.TITLE
        return SearchMode.ALL


@dataclass(frozen=True)
class SearchResult:
    mode: SearchMode
    notes: List[Note]


class NoteSearch:
    def __init__(self, notes: NotesService):
        self._notes = notes

    async def search(self, criteria: SearchCriteria) -> SearchResult:
        mode = criteria.mode
        LOGGER.debug("Searching notes: mode=%s criteria=%r", mode.value, criteria)
        if mode is SearchMode.TAGS:
            found = await self._notes.search_by_tags(t for t in criteria.tags if t)
        elif mode is SearchMode.CATEGORY:
            found = await self._notes.search_by_category(criteria.category)
        elif mode is SearchMode.TITLE:
            found = filter_by_title(await self._notes.list_all(), criteria.title)
        else:
            found = await self._notes.list_all()
        LOGGER.info("Search (%s) matched %d notes.", mode.value, len(found))
        return SearchResult(mode=mode, notes=found)
