"""Create report use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from vibe.application.usecase.base import BaseUseCase
from vibe.domain.service import ReportService
from vibe.domain.value import ReportStatus, StoryId, UserId


class CreateReportRequest(BaseModel):
    """Create report request."""

    story_id: str  # UUID string
    reporter_id: str  # User ID from authenticated user
    reason: str


class CreateReportResponse(BaseModel):
    """Create report response."""

    report_id: str
    story_id: str
    status: ReportStatus
    created_at: datetime


class CreateReportUseCase(BaseUseCase):
    """Use case for flagging a story for moderator review."""

    def __init__(self, report_service: ReportService) -> None:
        """Initialize create report use case.

        Args:
            report_service: Report domain service
        """
        self.report_service = report_service

    async def execute(self, request: CreateReportRequest) -> CreateReportResponse:
        """Execute create report flow.

        Raises:
            ValidationError: If the reason is blank or too long
            NotFoundError: If story not found
            DuplicateActionError: If the reporter already has a pending
                report on the story
        """
        report = await self.report_service.create_report(
            story_id=StoryId(UUID(request.story_id)),
            reporter_id=UserId(UUID(request.reporter_id)),
            reason=request.reason,
        )
        return CreateReportResponse(
            report_id=str(report.id),
            story_id=str(report.story_id),
            status=report.status,
            created_at=report.created_at,
        )
