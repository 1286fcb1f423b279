"""Moderate comment use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from vibe.domain.service import CommentService
from vibe.domain.value import CommentId, CommentStatus, ModerationDecision, UserId


class ModerateCommentRequest(BaseModel):
    """Moderate comment request."""

    comment_id: str  # UUID string
    moderator_id: str  # User ID of the acting moderator
    decision: ModerationDecision


class ModerateCommentResponse(BaseModel):
    """Moderate comment response."""

    comment_id: str
    story_id: str
    status: CommentStatus
    moderated_at: datetime | None


class ModerateCommentUseCase:
    """Use case for approving or rejecting a pending comment.

    Moderator privilege is checked by the caller before this runs.
    """

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize moderate comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: ModerateCommentRequest) -> ModerateCommentResponse:
        """Execute moderate comment flow.

        Raises:
            NotFoundError: If comment not found
            StateConflictError: If the comment is no longer pending
        """
        comment = await self.comment_service.moderate(
            comment_id=CommentId(UUID(request.comment_id)),
            decision=request.decision,
            moderator_id=UserId(UUID(request.moderator_id)),
        )
        return ModerateCommentResponse(
            comment_id=str(comment.id),
            story_id=str(comment.story_id),
            status=comment.status,
            moderated_at=comment.moderated_at,
        )
