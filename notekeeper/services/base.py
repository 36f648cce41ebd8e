"""Shared plumbing for the resource services."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Type, TypeVar

from pydantic import ValidationError

from notekeeper.client import HttpTransport
from notekeeper.exceptions import OperationError, TransportError

from ..models._base import ApiModel

LOGGER = logging.getLogger(__name__)

M = TypeVar("M", bound=ApiModel)


class BaseService:
    """A resource service: one endpoint path on top of a shared transport."""

    ENDPOINT = ""

    def __init__(self, transport: HttpTransport):
        self._transport = transport

    def _path(self, *parts: object) -> str:
        return "/".join([self.ENDPOINT, *(str(p) for p in parts)])

    async def _call(
        self,
        error_cls: Type[OperationError],
        message: str,
        method: str,
        path: str,
        body: Optional[object] = None,
        params: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """Run a request, re-raising transport failures as ``error_cls``."""
        try:
            return await self._transport.request(method, path, body=body, params=params)
        except TransportError as e:
            LOGGER.error(
                "%s: kind=%s status=%s body=%r", message, e.kind.value, e.status, e.raw_body
            )
            raise error_cls(message, cause=e) from e

    @staticmethod
    def _parse(
        model: Type[M], data: Any, error_cls: Type[OperationError], message: str
    ) -> M:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            LOGGER.error("%s: response validation failed: %s", message, e)
            raise error_cls(f"{message}: unexpected response shape") from e

    @classmethod
    def _parse_list(
        cls,
        model: Type[M],
        items: Any,
        error_cls: Type[OperationError],
        message: str,
    ) -> List[M]:
        if items is None:
            return []
        if not isinstance(items, list):
            raise error_cls(f"{message}: expected a list, got {type(items).__name__}")
        return [cls._parse(model, item, error_cls, message) for item in items]
