"""Get comments use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from vibe.domain.model import Comment
from vibe.domain.service import CommentService
from vibe.domain.value import CommentStatus, StoryId


class CommentItem(BaseModel):
    """Comment item in response."""

    comment_id: str
    story_id: str
    author_id: str
    content: str
    parent_id: str | None
    depth: int
    status: CommentStatus
    created_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentItem":
        """Build a response item from a domain comment."""
        return cls(
            comment_id=str(comment.id),
            story_id=str(comment.story_id),
            author_id=str(comment.author_id),
            content=comment.content,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            depth=comment.depth,
            status=comment.status,
            created_at=comment.created_at,
        )


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    story_id: str  # UUID string


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    story_id: str
    comments: list[CommentItem]
    total: int


class GetCommentsUseCase:
    """Use case for getting the approved comments on a story in thread order."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Pending and rejected comments are never returned here. Replies
        follow their parent so the list renders as a thread directly.

        Args:
            request: Get comments request with story ID

        Returns:
            Approved comments in thread order
        """
        story_id = StoryId(UUID(request.story_id))

        comments = await self.comment_service.list_approved(story_id)

        items = [CommentItem.from_comment(comment) for comment in comments]
        return GetCommentsResponse(
            story_id=request.story_id,
            comments=items,
            total=len(items),
        )
