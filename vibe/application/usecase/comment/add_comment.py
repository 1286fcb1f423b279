"""Add comment use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from vibe.domain.service import CommentService
from vibe.domain.value import CommentId, CommentStatus, StoryId, UserId


class AddCommentRequest(BaseModel):
    """Add comment request."""

    story_id: str  # UUID string
    author_id: str  # User ID from authenticated user
    content: str
    parent_id: str | None = None  # Parent comment ID for replies


class AddCommentResponse(BaseModel):
    """Add comment response."""

    comment_id: str
    story_id: str
    parent_id: str | None
    depth: int
    status: CommentStatus
    created_at: datetime


class AddCommentUseCase:
    """Use case for commenting on a story or replying to a comment.

    New comments are held for moderation and are not visible until a
    moderator approves them.
    """

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize add comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: AddCommentRequest) -> AddCommentResponse:
        """Execute add comment flow.

        Args:
            request: Add comment request

        Returns:
            The pending comment

        Raises:
            ValidationError: If the content is too short or too long
            NotFoundError: If the story or parent comment is not found
        """
        with logfire.span(
            "add_comment.execute",
            story_id=request.story_id,
            author_id=request.author_id,
            is_reply=request.parent_id is not None,
        ):
            parent_id = (
                CommentId(UUID(request.parent_id)) if request.parent_id else None
            )
            comment = await self.comment_service.add_comment(
                story_id=StoryId(UUID(request.story_id)),
                author_id=UserId(UUID(request.author_id)),
                content=request.content,
                parent_id=parent_id,
            )

            return AddCommentResponse(
                comment_id=str(comment.id),
                story_id=str(comment.story_id),
                parent_id=str(comment.parent_id) if comment.parent_id else None,
                depth=comment.depth,
                status=comment.status,
                created_at=comment.created_at,
            )
