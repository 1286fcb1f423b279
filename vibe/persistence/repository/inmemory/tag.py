"""In-memory implementation of Tag repository for testing."""

from datetime import datetime
from typing import Iterable
from uuid import uuid4

from vibe.domain.model.tag import Tag
from vibe.domain.repository.tag import TagRepository
from vibe.domain.value import TagId, TagName


class InMemoryTagRepository(TagRepository):
    """In-memory implementation of TagRepository for testing."""

    def __init__(self) -> None:
        """Initialize empty repository."""
        self._tags: dict[TagId, Tag] = {}
        self._name_index: dict[str, TagId] = {}

    async def save(self, tag: Tag) -> Tag:
        """Save a tag directly (test seeding)."""
        self._tags[tag.id] = tag
        self._name_index[tag.name.key] = tag.id
        return tag

    async def find_by_ids(self, tag_ids: Iterable[TagId]) -> list[Tag]:
        """Find tags by ID."""
        return [self._tags[t] for t in set(tag_ids) if t in self._tags]

    async def get_or_create(self, name: TagName) -> Tag:
        """Return the matching tag or create it.

        No await between the lookup and the insert, so concurrent callers
        on the event loop cannot both create the same name.
        """
        tag_id = self._name_index.get(name.key)
        if tag_id:
            return self._tags[tag_id]

        tag = Tag(id=TagId(uuid4()), name=name, created_at=datetime.now())
        self._tags[tag.id] = tag
        self._name_index[name.key] = tag.id
        return tag

    async def find_all(self, limit: int = 100, order_by: str = "name") -> list[Tag]:
        """Find all tags."""
        tags = list(self._tags.values())

        # Sort by requested field
        if order_by == "created_at":
            tags.sort(key=lambda t: t.created_at, reverse=True)
        else:
            tags.sort(key=lambda t: t.name.key)

        return tags[:limit]
