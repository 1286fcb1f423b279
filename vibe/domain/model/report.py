"""Report entity.

Reports flag a story for moderator review.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from vibe.domain.error import StateConflictError
from vibe.domain.model.common import DomainModel
from vibe.domain.value import ReportId, ReportOutcome, ReportStatus, StoryId, UserId


class Report(DomainModel):
    """Abuse report against a story.

    Business rules:
    - At most one pending report per (story, reporter)
    - pending -> resolved | dismissed, both terminal
    - A reporter may file again once their earlier report is closed
    """

    id: ReportId
    story_id: StoryId
    reporter_id: UserId
    reason: str = Field(min_length=1, max_length=1000)
    status: ReportStatus = ReportStatus.PENDING
    created_at: datetime = Field(default_factory=datetime.now)
    resolved_at: Optional[datetime] = None
    resolved_by: Optional[UserId] = None

    def resolve(
        self, outcome: ReportOutcome, moderator_id: UserId, at: datetime
    ) -> "Report":
        """Return this report closed with the given outcome.

        Raises:
            StateConflictError: If the report is already closed
        """
        if self.status != ReportStatus.PENDING:
            raise StateConflictError(
                "report", str(self.id), self.status.value, "resolve"
            )
        return self.model_copy(
            update={
                "status": outcome.resulting_status,
                "resolved_at": at,
                "resolved_by": moderator_id,
            }
        )
