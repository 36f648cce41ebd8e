"""
Reshape note payloads into one canonical form.

Servers have been seen encoding a note's ``tags`` as a JSON array, as an
object keyed by position, or (from Python callers) as a set. Everything that
enters or leaves the services goes through here so the rest of the library
only ever sees an ordered list.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence, Set
from typing import Any, Dict, List

LOGGER = logging.getLogger(__name__)


def normalize_tag_collection(tags: Any) -> List[Any]:
    """Return ``tags`` as an ordered list. Never raises."""
    if tags is None:
        return []
    if isinstance(tags, (str, bytes, bytearray)):
        LOGGER.debug("normalize.tags.scalar type=%s", type(tags).__name__)
        return []
    if isinstance(tags, list):
        return tags
    if isinstance(tags, Sequence):
        return list(tags)
    if isinstance(tags, Set):
        return list(tags)
    if isinstance(tags, Mapping):
        return [v for v in tags.values() if v is not None]
    LOGGER.debug("normalize.tags.unsupported type=%s", type(tags).__name__)
    return []


def normalize_note(raw: Mapping) -> Dict[str, Any]:
    """Shallow copy of ``raw`` with ``tags`` normalized; other fields untouched."""
    copy = dict(raw)
    copy["tags"] = normalize_tag_collection(raw.get("tags"))
    return copy


def normalize_note_list(raw: Any) -> List[Dict[str, Any]]:
    """
    Accept a list of note payloads or a bare note object and return a list of
    normalized payloads.
    """
    if not raw:
        return []
    if isinstance(raw, Mapping):
        items: List[Any] = [raw]
    elif isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
        items = list(raw)
    else:
        LOGGER.debug("normalize.notes.unsupported type=%s", type(raw).__name__)
        items = []
    out: List[Dict[str, Any]] = []
    for item in items:
        if not isinstance(item, Mapping):
            LOGGER.debug("normalize.notes.skip type=%s", type(item).__name__)
            continue
        out.append(normalize_note(item))
    return out
