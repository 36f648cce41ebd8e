"""Notes, tags and categories as held in memory."""

from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import Field

from ._base import ApiModel


class Category(ApiModel):
    id: Optional[int] = None
    name: str
    description: Optional[str] = None


class Tag(ApiModel):
    id: Optional[int] = None
    """Server-assigned; None until the tag is persisted."""

    name: str

    is_system_tag: bool = Field(False, alias="isSystemTag")
    """Predefined tags are immutable and cannot be deleted."""

    def matches(self, other: "Tag") -> bool:
        """Same tag: compared by ``id`` when both sides have one, else by ``name``."""
        if self.id is not None and other.id is not None:
            return self.id == other.id
        return self.name == other.name


class Note(ApiModel):
    id: Optional[int] = None
    """None for a draft; stable once the server has assigned it."""

    title: str
    content: str = ""
    tags: List[Tag] = Field(default_factory=list)
    category: Optional[Category] = None

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    @property
    def tag_names(self) -> List[str]:
        return [t.name for t in self.tags]

    @property
    def category_name(self) -> Optional[str]:
        return self.category.name if self.category is not None else None

    def to_payload(self) -> dict:
        # category is sent explicitly, null included
        payload = super().to_payload()
        payload["category"] = (
            self.category.to_payload() if self.category is not None else None
        )
        return payload


# Offered when the tags endpoint is unreachable; never written back.
DEFAULT_SYSTEM_TAGS: Tuple[Tag, ...] = tuple(
    Tag(id=i, name=name, is_system_tag=True)
    for i, name in enumerate(
        ("important", "urgent", "personal", "work", "idea", "reminder"), start=1
    )
)
