"""List reports use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel, Field

from vibe.application.usecase.base import BaseUseCase
from vibe.domain.service import ReportService
from vibe.domain.value import ReportStatus


class ReportItem(BaseModel):
    """Report item in response."""

    report_id: str
    story_id: str
    reporter_id: str
    reason: str
    status: ReportStatus
    created_at: datetime
    resolved_at: datetime | None
    resolved_by: str | None


class ListReportsRequest(BaseModel):
    """List reports request."""

    status: ReportStatus | None = None
    limit: int = Field(default=100, ge=1, le=100)


class ListReportsResponse(BaseModel):
    """List reports response."""

    reports: list[ReportItem]
    total: int


class ListReportsUseCase(BaseUseCase):
    """Use case for the moderators' report queue, newest first."""

    def __init__(self, report_service: ReportService) -> None:
        self.report_service = report_service

    async def execute(self, request: ListReportsRequest) -> ListReportsResponse:
        """Execute list reports flow."""
        with logfire.span(
            "list_reports.execute",
            status=request.status.value if request.status else None,
            limit=request.limit,
        ):
            reports = await self.report_service.list_reports(
                status=request.status, limit=request.limit
            )
            items = [
                ReportItem(
                    report_id=str(r.id),
                    story_id=str(r.story_id),
                    reporter_id=str(r.reporter_id),
                    reason=r.reason,
                    status=r.status,
                    created_at=r.created_at,
                    resolved_at=r.resolved_at,
                    resolved_by=str(r.resolved_by) if r.resolved_by else None,
                )
                for r in reports
            ]
            return ListReportsResponse(reports=items, total=len(items))
