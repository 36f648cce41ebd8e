"""Resource services for the notes API."""

from .categories import CategoriesService
from .notes import NotesService
from .tags import TagsService

__all__ = ["NotesService", "TagsService", "CategoriesService"]
