"""Tag repository interface."""

from abc import ABC, abstractmethod
from typing import Iterable

from vibe.domain.model.tag import Tag
from vibe.domain.value import TagId, TagName


class TagRepository(ABC):
    """Repository interface for Tag aggregate."""

    @abstractmethod
    async def find_by_ids(self, tag_ids: Iterable[TagId]) -> list[Tag]:
        """Find tags by ID in a single query.

        Args:
            tag_ids: Tag identifiers

        Returns:
            List of found tags (may be fewer than requested)
        """
        pass

    @abstractmethod
    async def get_or_create(self, name: TagName) -> Tag:
        """Return the tag matching ``name`` case-insensitively, creating it
        with the given casing if none exists.

        Must be safe against concurrent creation of the same name.

        Args:
            name: Tag name

        Returns:
            Existing or newly created tag
        """
        pass

    @abstractmethod
    async def find_all(self, limit: int = 100, order_by: str = "name") -> list[Tag]:
        """Find all tags.

        Args:
            limit: Maximum number of tags to return
            order_by: Field to order by ('name' or 'created_at')

        Returns:
            List of tags
        """
        pass
