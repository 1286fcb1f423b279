"""In-memory comment repository for testing."""

from typing import Optional

from vibe.domain.model.comment import Comment
from vibe.domain.repository.comment import CommentRepository
from vibe.domain.value import CommentId, CommentStatus, StoryId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_story(
        self,
        story_id: StoryId,
        status: Optional[CommentStatus] = None,
    ) -> list[Comment]:
        """Find comments on a story, oldest first."""
        comments = [c for c in self._comments.values() if c.story_id == story_id]
        if status is not None:
            comments = [c for c in comments if c.status == status]

        comments.sort(key=lambda c: (c.created_at, str(c.id)))
        return comments

    async def find_by_status(
        self,
        status: CommentStatus,
        story_id: Optional[StoryId] = None,
        limit: int = 100,
    ) -> list[Comment]:
        """Find comments in a moderation state, oldest first."""
        comments = [c for c in self._comments.values() if c.status == status]
        if story_id is not None:
            comments = [c for c in comments if c.story_id == story_id]

        comments.sort(key=lambda c: c.created_at)
        return comments[:limit]

    async def save(self, comment: Comment) -> Comment:
        """Save a new comment."""
        self._comments[comment.id] = comment
        return comment

    async def update_status(self, comment: Comment) -> Comment:
        """Persist a comment's moderation fields."""
        self._comments[comment.id] = comment
        return comment
