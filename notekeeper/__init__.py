"""Client library for a REST notes/tags/categories API."""

from .api import NotesApi
from .config import ApiConfig
from .models import DEFAULT_SYSTEM_TAGS, Category, Note, Tag
from .search import SearchCriteria, SearchMode
from .state import NotesState, NoteStats

__all__ = [
    "NotesApi",
    "ApiConfig",
    "Note",
    "Tag",
    "Category",
    "DEFAULT_SYSTEM_TAGS",
    "SearchCriteria",
    "SearchMode",
    "NotesState",
    "NoteStats",
]
