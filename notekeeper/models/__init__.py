"""Public exports for notekeeper data models."""

from __future__ import annotations

from .entities import DEFAULT_SYSTEM_TAGS, Category, Note, Tag

__all__ = [
    "Category",
    "Note",
    "Tag",
    "DEFAULT_SYSTEM_TAGS",
]
