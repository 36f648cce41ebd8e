"""Categories resource service. Plain CRUD, no offline fallback."""

from __future__ import annotations

import logging
from typing import List, Optional

from notekeeper.exceptions import CreateError, DeleteError, FetchError, UpdateError
from notekeeper.models import Category

from .base import BaseService

LOGGER = logging.getLogger(__name__)


def _category_body(name: str, description: Optional[str]) -> dict:
    body = {"name": name}
    if description is not None:
        body["description"] = description
    return body


class CategoriesService(BaseService):
    ENDPOINT = "/categories"

    async def list_all(self) -> List[Category]:
        message = "Failed to fetch categories"
        data = await self._call(FetchError, message, "GET", self._path())
        categories = self._parse_list(Category, data, FetchError, message)
        LOGGER.info("Fetched %d categories.", len(categories))
        return categories

    async def get(self, category_id: int) -> Category:
        message = f"Failed to fetch category {category_id}"
        data = await self._call(FetchError, message, "GET", self._path(category_id))
        return self._parse(Category, data, FetchError, message)

    async def create(self, name: str, description: Optional[str] = None) -> Category:
        message = "Failed to create category"
        data = await self._call(
            CreateError,
            message,
            "POST",
            self._path(),
            body=_category_body(name, description),
        )
        return self._parse(Category, data, CreateError, message)

    async def update(
        self, category_id: int, name: str, description: Optional[str] = None
    ) -> Category:
        message = f"Failed to update category {category_id}"
        data = await self._call(
            UpdateError,
            message,
            "PUT",
            self._path(category_id),
            body=_category_body(name, description),
        )
        return self._parse(Category, data, UpdateError, message)

    async def delete(self, category_id: int) -> None:
        await self._call(
            DeleteError,
            f"Failed to delete category {category_id}",
            "DELETE",
            self._path(category_id),
        )
        LOGGER.info("Deleted category %s.", category_id)
