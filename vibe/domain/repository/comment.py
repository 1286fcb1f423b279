"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from vibe.domain.model.comment import Comment
from vibe.domain.value import CommentId, CommentStatus, StoryId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_story(
        self,
        story_id: StoryId,
        status: Optional[CommentStatus] = None,
    ) -> List[Comment]:
        """Find comments on a story ordered by creation time.

        Args:
            story_id: The story ID
            status: Only return comments in this state (None for all)

        Returns:
            List of comments, oldest first
        """
        pass

    @abstractmethod
    async def find_by_status(
        self,
        status: CommentStatus,
        story_id: Optional[StoryId] = None,
        limit: int = 100,
    ) -> List[Comment]:
        """Find comments in a moderation state, oldest first.

        Args:
            status: The moderation state
            story_id: Restrict to one story (None for all stories)
            limit: Maximum number of comments to return

        Returns:
            List of comments
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a new comment.

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def update_status(self, comment: Comment) -> Comment:
        """Persist a comment's moderation fields.

        Args:
            comment: The comment carrying its new status

        Returns:
            The updated comment
        """
        pass
