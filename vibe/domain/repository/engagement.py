"""Vote, rating and bookmark repository interfaces.

All three records are keyed by (story_id, user_id).
"""

from abc import ABC, abstractmethod
from typing import Optional

from vibe.domain.model.bookmark import Bookmark
from vibe.domain.model.rating import Rating
from vibe.domain.model.vote import Vote
from vibe.domain.value import StoryId, UserId


class VoteRepository(ABC):
    """Repository for Vote entity."""

    @abstractmethod
    async def find(self, story_id: StoryId, user_id: UserId) -> Optional[Vote]:
        """Find a user's vote on a story.

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Save a vote (create).

        Raises:
            IntegrityError: If the user already voted on the story
        """
        pass

    @abstractmethod
    async def delete(self, story_id: StoryId, user_id: UserId) -> bool:
        """Delete a user's vote on a story.

        Returns:
            True if a vote was deleted, False if no vote existed
        """
        pass


class RatingRepository(ABC):
    """Repository for Rating entity.

    Ratings are create-only: there is deliberately no update or delete.
    """

    @abstractmethod
    async def find(self, story_id: StoryId, user_id: UserId) -> Optional[Rating]:
        """Find a user's rating of a story.

        Returns:
            The rating if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, rating: Rating) -> Rating:
        """Save a rating (create).

        Raises:
            IntegrityError: If the user already rated the story
        """
        pass


class BookmarkRepository(ABC):
    """Repository for Bookmark entity."""

    @abstractmethod
    async def find(self, story_id: StoryId, user_id: UserId) -> Optional[Bookmark]:
        """Find a user's bookmark of a story."""
        pass

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> list[Bookmark]:
        """Find a user's bookmarks, newest first."""
        pass

    @abstractmethod
    async def save(self, bookmark: Bookmark) -> Bookmark:
        """Save a bookmark (create)."""
        pass

    @abstractmethod
    async def delete(self, story_id: StoryId, user_id: UserId) -> bool:
        """Delete a bookmark.

        Returns:
            True if a bookmark was deleted, False if none existed
        """
        pass
