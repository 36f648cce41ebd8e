"""
Entry point wiring the transport, services, search and local state.

    async with NotesApi(ApiConfig.from_env()) as api:
        state = await api.load_dashboard()
        print(state.stats.total)
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Tuple

import httpx

from .client import HttpTransport, ReachabilityProbe
from .config import ApiConfig
from .models import Category, Tag
from .search import NoteSearch, SearchCriteria, SearchResult
from .services import CategoriesService, NotesService, TagsService
from .state import NotesState, StateSynchronizer

LOGGER = logging.getLogger(__name__)


class NotesApi:
    def __init__(
        self,
        config: Optional[ApiConfig] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config or ApiConfig.from_env()
        self._transport = HttpTransport(self.config, client=client)
        self.notes = NotesService(self._transport)
        self.tags = TagsService(self._transport)
        self.categories = CategoriesService(self._transport)
        self.sync = StateSynchronizer(self.notes, self.tags)
        self._search = NoteSearch(self.notes)
        self._probe = ReachabilityProbe(self._transport, NotesService.ENDPOINT)
        LOGGER.info("NotesApi initialized for %s", self._transport.base_url)

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> "NotesApi":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    @property
    def state(self) -> NotesState:
        return self.sync.state

    async def check_health(self) -> Optional[bool]:
        """True online, False offline, None if superseded by a newer check."""
        return await self._probe.check()

    async def load_dashboard(self) -> NotesState:
        """
        Fetch notes, categories and tags together. If any fetch fails the
        error propagates and the held state is left as it was.
        """
        notes, categories, tags = await asyncio.gather(
            self.notes.list_all(),
            self.categories.list_all(),
            self.tags.list_all(),
        )
        return self.sync.load(notes, tags=tags, categories=categories)

    async def load_search_options(self) -> Tuple[List[Tag], List[Category]]:
        tags, categories = await asyncio.gather(
            self.tags.list_all(), self.categories.list_all()
        )
        return tags, categories

    async def search(self, criteria: SearchCriteria) -> SearchResult:
        return await self._search.search(criteria)
