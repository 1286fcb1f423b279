"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from vibe.domain.model import Comment
from vibe.domain.repository import CommentRepository
from vibe.domain.value import CommentId, CommentStatus, StoryId
from vibe.persistence.mappers import comment_to_dict, row_to_comment
from vibe.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_story(
        self,
        story_id: StoryId,
        status: Optional[CommentStatus] = None,
    ) -> List[Comment]:
        """Find comments on a story, oldest first."""
        stmt = select(comments_table).where(comments_table.c.story_id == story_id)
        if status is not None:
            stmt = stmt.where(comments_table.c.status == status.value)
        stmt = stmt.order_by(comments_table.c.created_at, comments_table.c.id)

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_by_status(
        self,
        status: CommentStatus,
        story_id: Optional[StoryId] = None,
        limit: int = 100,
    ) -> List[Comment]:
        """Find comments in a moderation state, oldest first."""
        stmt = select(comments_table).where(comments_table.c.status == status.value)
        if story_id is not None:
            stmt = stmt.where(comments_table.c.story_id == story_id)
        stmt = stmt.order_by(comments_table.c.created_at).limit(limit)

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Save a new comment."""
        stmt = insert(comments_table).values(**comment_to_dict(comment))
        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def update_status(self, comment: Comment) -> Comment:
        """Persist a comment's moderation fields."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment.id)
            .values(
                status=comment.status.value,
                moderated_at=comment.moderated_at,
                moderated_by=comment.moderated_by,
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return comment
