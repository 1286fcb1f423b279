"""PostgreSQL implementation of Report repository."""

from typing import Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from vibe.domain.model import Report
from vibe.domain.repository import ReportRepository
from vibe.domain.value import ReportId, ReportStatus, StoryId, UserId
from vibe.persistence.mappers import report_to_dict, row_to_report
from vibe.persistence.tables import reports_table


class PostgresReportRepository(ReportRepository):
    """PostgreSQL implementation of ReportRepository.

    The partial unique index ``uq_reports_pending_per_reporter`` backs the
    one-pending-report rule.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, report_id: ReportId) -> Optional[Report]:
        """Find a report by ID."""
        stmt = select(reports_table).where(reports_table.c.id == report_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_report(row._asdict()) if row else None

    async def find_pending(
        self, story_id: StoryId, reporter_id: UserId
    ) -> Optional[Report]:
        """Find the reporter's open report on a story."""
        stmt = select(reports_table).where(
            and_(
                reports_table.c.story_id == story_id,
                reports_table.c.reporter_id == reporter_id,
                reports_table.c.status == ReportStatus.PENDING.value,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_report(row._asdict()) if row else None

    async def find_by_status(
        self, status: Optional[ReportStatus] = None, limit: int = 100
    ) -> list[Report]:
        """Find reports, newest first."""
        stmt = select(reports_table)
        if status is not None:
            stmt = stmt.where(reports_table.c.status == status.value)
        stmt = stmt.order_by(reports_table.c.created_at.desc()).limit(limit)

        result = await self.session.execute(stmt)
        return [row_to_report(row._asdict()) for row in result.fetchall()]

    async def save(self, report: Report) -> Report:
        """Save a new report.

        Raises:
            IntegrityError: If the reporter already has a pending report
        """
        async with self.session.begin_nested():
            await self.session.execute(
                insert(reports_table).values(**report_to_dict(report))
            )
        return report

    async def update_status(self, report: Report) -> Report:
        """Persist a report's resolution fields."""
        stmt = (
            update(reports_table)
            .where(reports_table.c.id == report.id)
            .values(
                status=report.status.value,
                resolved_at=report.resolved_at,
                resolved_by=report.resolved_by,
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return report
