"""Story repository interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import Optional

from vibe.domain.model.story import Story
from vibe.domain.value import StoryId, TagId


class StoryRepository(ABC):
    """Repository for Story aggregate.

    Defines the contract for story persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, story_id: StoryId) -> Optional[Story]:
        """Find a story by ID.

        Args:
            story_id: The story's unique identifier

        Returns:
            The story if found, None otherwise
        """
        pass

    @abstractmethod
    def locked(self, story_id: StoryId) -> AbstractAsyncContextManager[Optional[Story]]:
        """Open a critical section serializing mutations of one story.

        Every read-then-write on records keyed by this story (votes,
        ratings, bookmarks, reports, comment moderation) must happen inside
        the block. Yields the story as read under the lock, or None if it
        does not exist.

        Args:
            story_id: The story to lock

        Returns:
            Async context manager yielding the locked story
        """
        pass

    @abstractmethod
    async def save(self, story: Story) -> Story:
        """Save a story (create or update).

        Args:
            story: The story to save

        Returns:
            The saved story
        """
        pass

    @abstractmethod
    async def adjust_counters(
        self,
        story_id: StoryId,
        vote_delta: int = 0,
        rating_sum_delta: int = 0,
        rating_count_delta: int = 0,
        approved_comment_delta: int = 0,
    ) -> Story:
        """Atomically add deltas to the story's counters.

        Uses SQL-level increments so concurrent adjustments commute.

        Args:
            story_id: The story ID
            vote_delta: Change to vote_count
            rating_sum_delta: Change to rating_sum
            rating_count_delta: Change to rating_count
            approved_comment_delta: Change to approved_comment_count

        Returns:
            The story with updated counters
        """
        pass

    @abstractmethod
    async def set_tags(self, story_id: StoryId, tag_ids: frozenset[TagId]) -> Story:
        """Replace the story's tag assignment.

        Args:
            story_id: The story ID
            tag_ids: The complete new tag set

        Returns:
            The story with updated tags
        """
        pass

    @abstractmethod
    async def release(self) -> None:
        """End the current read so no connection is held while idle.

        Only for read-only callers about to block for a long time (the
        change feed). Later reads start a fresh transaction.
        """
        pass
