"""List pending comments use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from vibe.domain.service import CommentService
from vibe.domain.value import StoryId

from .get_comments import CommentItem


class ListPendingCommentsRequest(BaseModel):
    """List pending comments request."""

    story_id: str | None = None  # Restrict the queue to one story
    limit: int = Field(default=100, ge=1, le=100)


class ListPendingCommentsResponse(BaseModel):
    """Moderation queue."""

    comments: list[CommentItem]
    total: int


class ListPendingCommentsUseCase:
    """Use case for reading the comment moderation queue, oldest first."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(
        self, request: ListPendingCommentsRequest
    ) -> ListPendingCommentsResponse:
        story_id = StoryId(UUID(request.story_id)) if request.story_id else None
        comments = await self.comment_service.list_pending(
            story_id=story_id, limit=request.limit
        )
        items = [CommentItem.from_comment(c) for c in comments]
        return ListPendingCommentsResponse(comments=items, total=len(items))
