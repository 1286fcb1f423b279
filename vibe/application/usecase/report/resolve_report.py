"""Resolve report use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from vibe.application.usecase.base import BaseUseCase
from vibe.domain.service import ReportService
from vibe.domain.value import ReportId, ReportOutcome, ReportStatus, UserId


class ResolveReportRequest(BaseModel):
    """Resolve report request."""

    report_id: str  # UUID string
    moderator_id: str  # User ID of the acting moderator
    outcome: ReportOutcome


class ResolveReportResponse(BaseModel):
    """Resolve report response."""

    report_id: str
    status: ReportStatus
    resolved_at: datetime | None


class ResolveReportUseCase(BaseUseCase):
    """Use case for closing a report as resolved or dismissed."""

    def __init__(self, report_service: ReportService) -> None:
        self.report_service = report_service

    async def execute(self, request: ResolveReportRequest) -> ResolveReportResponse:
        """Execute resolve report flow.

        Raises:
            NotFoundError: If report not found
            StateConflictError: If the report is already closed
        """
        report = await self.report_service.resolve(
            report_id=ReportId(UUID(request.report_id)),
            outcome=request.outcome,
            moderator_id=UserId(UUID(request.moderator_id)),
        )
        return ResolveReportResponse(
            report_id=str(report.id),
            status=report.status,
            resolved_at=report.resolved_at,
        )
