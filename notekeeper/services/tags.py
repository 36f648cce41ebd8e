"""Tags resource service."""

from __future__ import annotations

import logging
from typing import List, Optional

from notekeeper.exceptions import (
    CreateError,
    DeleteError,
    FetchError,
    TagValidationError,
    TransportError,
    UpdateError,
)
from notekeeper.models import DEFAULT_SYSTEM_TAGS, Tag

from .base import BaseService

LOGGER = logging.getLogger(__name__)


class TagsService(BaseService):
    """
    System and custom tags.

    ``list_all`` is the one operation with an offline policy: if the backend
    cannot be reached it returns ``DEFAULT_SYSTEM_TAGS`` so tagging stays
    usable. That fallback is local only and never written back.
    """

    ENDPOINT = "/tags"

    async def list_all(self) -> List[Tag]:
        try:
            data = await self._transport.request("GET", self._path())
        except TransportError as e:
            LOGGER.warning("Failed to fetch tags (%s); using built-in defaults", e)
            return list(DEFAULT_SYSTEM_TAGS)
        tags = self._parse_list(Tag, data, FetchError, "Failed to fetch tags")
        LOGGER.info("Fetched %d tags.", len(tags))
        return tags

    async def get(self, tag_id: int) -> Tag:
        message = f"Failed to fetch tag {tag_id}"
        data = await self._call(FetchError, message, "GET", self._path(tag_id))
        return self._parse(Tag, data, FetchError, message)

    async def create_custom(self, name: Optional[str]) -> Tag:
        message = "Failed to create tag"
        clean = (name or "").strip()
        if not clean:
            raise TagValidationError(f"{message}: tag name must not be empty")
        data = await self._call(
            CreateError,
            message,
            "POST",
            self._path(),
            body={"name": clean, "isSystemTag": False},
        )
        tag = self._parse(Tag, data, CreateError, message)
        LOGGER.info("Created tag %r (id=%s).", tag.name, tag.id)
        return tag

    async def update(self, tag_id: int, tag: Tag) -> Tag:
        message = f"Failed to update tag {tag_id}"
        body = tag.to_payload()
        body.pop("id", None)
        data = await self._call(UpdateError, message, "PUT", self._path(tag_id), body=body)
        return self._parse(Tag, data, UpdateError, message)

    async def delete(self, tag_id: int) -> None:
        # Callers must not offer this for system tags; the server decides.
        await self._call(
            DeleteError, f"Failed to delete tag {tag_id}", "DELETE", self._path(tag_id)
        )
        LOGGER.info("Deleted tag %s.", tag_id)
