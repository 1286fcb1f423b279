"""In-memory report repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from vibe.domain.model.report import Report
from vibe.domain.repository.report import ReportRepository
from vibe.domain.value import ReportId, ReportStatus, StoryId, UserId


class InMemoryReportRepository(ReportRepository):
    """In-memory implementation of ReportRepository for testing."""

    def __init__(self) -> None:
        self._reports: dict[ReportId, Report] = {}

    async def find_by_id(self, report_id: ReportId) -> Optional[Report]:
        """Find a report by ID."""
        return self._reports.get(report_id)

    async def find_pending(
        self, story_id: StoryId, reporter_id: UserId
    ) -> Optional[Report]:
        """Find the reporter's open report on a story."""
        for report in self._reports.values():
            if (
                report.story_id == story_id
                and report.reporter_id == reporter_id
                and report.status == ReportStatus.PENDING
            ):
                return report
        return None

    async def find_by_status(
        self, status: Optional[ReportStatus] = None, limit: int = 100
    ) -> list[Report]:
        """Find reports, newest first."""
        reports = list(self._reports.values())
        if status is not None:
            reports = [r for r in reports if r.status == status]

        reports.sort(key=lambda r: r.created_at, reverse=True)
        return reports[:limit]

    async def save(self, report: Report) -> Report:
        """Save a new report.

        Raises:
            IntegrityError: If the reporter already has a pending report
        """
        if await self.find_pending(report.story_id, report.reporter_id):
            raise IntegrityError("Duplicate pending report", None, Exception())

        self._reports[report.id] = report
        return report

    async def update_status(self, report: Report) -> Report:
        """Persist a report's resolution fields."""
        self._reports[report.id] = report
        return report
