"""PostgreSQL implementation of Story repository."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from vibe.domain.model import Story
from vibe.domain.repository import StoryRepository
from vibe.domain.value import StoryId, TagId
from vibe.persistence.mappers import row_to_story, story_to_dict
from vibe.persistence.tables import stories_table, story_tags_table


class PostgresStoryRepository(StoryRepository):
    """PostgreSQL implementation of StoryRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _load(
        self, story_id: StoryId, for_update: bool = False
    ) -> Optional[Story]:
        stmt = select(stories_table).where(stories_table.c.id == story_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if not row:
            return None

        tags = await self.session.execute(
            select(story_tags_table.c.tag_id).where(
                story_tags_table.c.story_id == story_id
            )
        )
        return row_to_story(row._asdict(), tags.scalars().all())

    async def find_by_id(self, story_id: StoryId) -> Optional[Story]:
        """Find a story by ID."""
        return await self._load(story_id)

    @asynccontextmanager
    async def locked(self, story_id: StoryId) -> AsyncIterator[Optional[Story]]:
        """Lock the story row until the request transaction ends.

        ``SELECT ... FOR UPDATE`` holds the row lock until commit or
        rollback, which happens after this block when the request scope
        closes.
        """
        yield await self._load(story_id, for_update=True)

    async def save(self, story: Story) -> Story:
        """Save a story (create or update)."""
        story_dict = story_to_dict(story)
        exists = await self.session.execute(
            select(stories_table.c.id).where(stories_table.c.id == story.id)
        )
        if exists.scalar_one_or_none():
            await self.session.execute(
                update(stories_table)
                .where(stories_table.c.id == story.id)
                .values(**story_dict)
            )
        else:
            await self.session.execute(insert(stories_table).values(**story_dict))
        await self.session.flush()
        await self._replace_tags(story.id, story.tag_ids)
        return story

    async def adjust_counters(
        self,
        story_id: StoryId,
        vote_delta: int = 0,
        rating_sum_delta: int = 0,
        rating_count_delta: int = 0,
        approved_comment_delta: int = 0,
    ) -> Story:
        """Atomically add deltas to the story's counters."""
        stmt = (
            update(stories_table)
            .where(stories_table.c.id == story_id)
            .values(
                vote_count=stories_table.c.vote_count + vote_delta,
                rating_sum=stories_table.c.rating_sum + rating_sum_delta,
                rating_count=stories_table.c.rating_count + rating_count_delta,
                approved_comment_count=(
                    stories_table.c.approved_comment_count + approved_comment_delta
                ),
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
        story = await self._load(story_id)
        assert story is not None, "counters adjusted on a missing story"
        return story

    async def set_tags(self, story_id: StoryId, tag_ids: frozenset[TagId]) -> Story:
        """Replace the story's tag assignment."""
        await self._replace_tags(story_id, tag_ids)
        story = await self._load(story_id)
        assert story is not None, "tags set on a missing story"
        return story

    async def _replace_tags(self, story_id: StoryId, tag_ids: frozenset[TagId]) -> None:
        await self.session.execute(
            delete(story_tags_table).where(story_tags_table.c.story_id == story_id)
        )
        if tag_ids:
            await self.session.execute(
                insert(story_tags_table),
                [{"story_id": story_id, "tag_id": tag_id} for tag_id in tag_ids],
            )
        await self.session.flush()

    async def release(self) -> None:
        """Commit the read-only transaction so its connection returns to the pool."""
        if self.session.in_transaction():
            await self.session.commit()
