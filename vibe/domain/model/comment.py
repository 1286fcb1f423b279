"""Comment entity.

Comments are threaded discussions on stories. Every comment is held for
moderation and only becomes publicly visible once approved.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from vibe.domain.error import StateConflictError
from vibe.domain.model.common import DomainModel
from vibe.domain.value import CommentId, CommentStatus, StoryId, UserId
from vibe.domain.value.types import ModerationDecision


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on a story or a reply to another comment.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - depth: Nesting level (0 for top-level, increments with each reply)

    Moderation: pending -> approved | rejected, both terminal.
    """

    id: CommentId
    story_id: StoryId
    author_id: UserId
    content: str = Field(min_length=1, max_length=10000)
    parent_id: Optional[CommentId] = None
    depth: int = Field(default=0, ge=0)
    status: CommentStatus = CommentStatus.PENDING
    created_at: datetime = Field(default_factory=datetime.now)
    moderated_at: Optional[datetime] = None
    moderated_by: Optional[UserId] = None

    @property
    def is_pending(self) -> bool:
        return self.status == CommentStatus.PENDING

    def moderate(
        self, decision: ModerationDecision, moderator_id: UserId, at: datetime
    ) -> "Comment":
        """Return this comment with the moderation decision applied.

        Raises:
            StateConflictError: If the comment was already moderated
        """
        if not self.is_pending:
            raise StateConflictError(
                "comment", str(self.id), self.status.value, decision.value
            )
        return self.model_copy(
            update={
                "status": decision.resulting_status,
                "moderated_at": at,
                "moderated_by": moderator_id,
            }
        )
