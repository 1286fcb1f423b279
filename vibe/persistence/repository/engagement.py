"""PostgreSQL implementations of Vote, Rating and Bookmark repositories."""

from typing import Optional

from sqlalchemy import and_, delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from vibe.domain.model import Bookmark, Rating, Vote
from vibe.domain.repository import (
    BookmarkRepository,
    RatingRepository,
    VoteRepository,
)
from vibe.domain.value import StoryId, UserId
from vibe.persistence.mappers import row_to_bookmark, row_to_rating, row_to_vote
from vibe.persistence.tables import bookmarks_table, ratings_table, votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find(self, story_id: StoryId, user_id: UserId) -> Optional[Vote]:
        """Find a user's vote on a story."""
        stmt = select(votes_table).where(
            and_(votes_table.c.story_id == story_id, votes_table.c.user_id == user_id)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def save(self, vote: Vote) -> Vote:
        """Save a vote (create)."""
        async with self.session.begin_nested():
            await self.session.execute(insert(votes_table).values(**vote.model_dump()))
        return vote

    async def delete(self, story_id: StoryId, user_id: UserId) -> bool:
        """Delete a user's vote on a story."""
        stmt = delete(votes_table).where(
            and_(votes_table.c.story_id == story_id, votes_table.c.user_id == user_id)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]


class PostgresRatingRepository(RatingRepository):
    """PostgreSQL implementation of RatingRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find(self, story_id: StoryId, user_id: UserId) -> Optional[Rating]:
        """Find a user's rating of a story."""
        stmt = select(ratings_table).where(
            and_(
                ratings_table.c.story_id == story_id,
                ratings_table.c.user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_rating(row._asdict()) if row else None

    async def save(self, rating: Rating) -> Rating:
        """Save a rating (create).

        The insert runs in a savepoint so a duplicate leaves the request
        transaction usable.

        Raises:
            IntegrityError: If the user already rated the story
        """
        async with self.session.begin_nested():
            await self.session.execute(
                insert(ratings_table).values(**rating.model_dump())
            )
        return rating


class PostgresBookmarkRepository(BookmarkRepository):
    """PostgreSQL implementation of BookmarkRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find(self, story_id: StoryId, user_id: UserId) -> Optional[Bookmark]:
        """Find a user's bookmark of a story."""
        stmt = select(bookmarks_table).where(
            and_(
                bookmarks_table.c.story_id == story_id,
                bookmarks_table.c.user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_bookmark(row._asdict()) if row else None

    async def find_by_user(self, user_id: UserId) -> list[Bookmark]:
        """Find a user's bookmarks, newest first."""
        stmt = (
            select(bookmarks_table)
            .where(bookmarks_table.c.user_id == user_id)
            .order_by(bookmarks_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_bookmark(row._asdict()) for row in result.fetchall()]

    async def save(self, bookmark: Bookmark) -> Bookmark:
        """Save a bookmark (create)."""
        async with self.session.begin_nested():
            await self.session.execute(
                insert(bookmarks_table).values(**bookmark.model_dump())
            )
        return bookmark

    async def delete(self, story_id: StoryId, user_id: UserId) -> bool:
        """Delete a bookmark."""
        stmt = delete(bookmarks_table).where(
            and_(
                bookmarks_table.c.story_id == story_id,
                bookmarks_table.c.user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
