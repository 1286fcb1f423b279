"""In-memory story repository for testing."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy.exc import IntegrityError

from vibe.domain.model.story import Story
from vibe.domain.repository.story import StoryRepository
from vibe.domain.value import StoryId, TagId


class InMemoryStoryRepository(StoryRepository):
    """In-memory implementation of StoryRepository for testing.

    ``locked`` uses one asyncio.Lock per story, standing in for the row
    lock the PostgreSQL implementation takes.
    """

    def __init__(self) -> None:
        self._stories: dict[StoryId, Story] = {}
        self._locks: dict[StoryId, asyncio.Lock] = {}
        self.release_count = 0

    async def find_by_id(self, story_id: StoryId) -> Optional[Story]:
        """Find a story by ID."""
        return self._stories.get(story_id)

    @asynccontextmanager
    async def locked(self, story_id: StoryId) -> AsyncIterator[Optional[Story]]:
        """Serialize mutations of one story."""
        lock = self._locks.setdefault(story_id, asyncio.Lock())
        async with lock:
            yield self._stories.get(story_id)

    async def save(self, story: Story) -> Story:
        """Save a story."""
        self._stories[story.id] = story
        return story

    async def adjust_counters(
        self,
        story_id: StoryId,
        vote_delta: int = 0,
        rating_sum_delta: int = 0,
        rating_count_delta: int = 0,
        approved_comment_delta: int = 0,
    ) -> Story:
        """Add deltas to the story's counters.

        Raises:
            IntegrityError: If a counter would go negative
        """
        story = self._stories[story_id]
        counters = {
            "vote_count": story.vote_count + vote_delta,
            "rating_sum": story.rating_sum + rating_sum_delta,
            "rating_count": story.rating_count + rating_count_delta,
            "approved_comment_count": (
                story.approved_comment_count + approved_comment_delta
            ),
        }
        negative = [name for name, value in counters.items() if value < 0]
        if negative:
            raise IntegrityError(f"Negative counter: {negative}", None, Exception())

        updated = story.model_copy(update=counters)
        self._stories[story_id] = updated
        return updated

    async def set_tags(self, story_id: StoryId, tag_ids: frozenset[TagId]) -> Story:
        """Replace the story's tag assignment."""
        updated = self._stories[story_id].model_copy(
            update={"tag_ids": frozenset(tag_ids)}
        )
        self._stories[story_id] = updated
        return updated

    async def release(self) -> None:
        """Nothing is held; count calls so tests can see the feed let go."""
        self.release_count += 1
