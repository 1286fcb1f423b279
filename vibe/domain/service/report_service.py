"""Report domain service."""

from datetime import datetime
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from vibe.config import EngagementSettings
from vibe.domain.error import DuplicateActionError, NotFoundError, ValidationError
from vibe.domain.model.report import Report
from vibe.domain.repository import ReportRepository, StoryRepository
from vibe.domain.value import (
    ReportId,
    ReportOutcome,
    ReportStatus,
    StoryId,
    UserId,
)

from .base import Service

DUPLICATE_REPORT_MESSAGE = (
    "You have already reported this story, and it is pending review."
)


class ReportService(Service):
    """Domain service for abuse reports."""

    def __init__(
        self,
        report_repository: ReportRepository,
        story_repository: StoryRepository,
        settings: EngagementSettings,
    ) -> None:
        """Initialize report service.

        Args:
            report_repository: Report repository
            story_repository: Story repository
            settings: Engagement limits
        """
        self.report_repository = report_repository
        self.story_repository = story_repository
        self.settings = settings

    async def create_report(
        self, story_id: StoryId, reporter_id: UserId, reason: str
    ) -> Report:
        """File a report against a story.

        Only a genuine second pending report from the same reporter is
        treated as a duplicate; every other failure keeps its own kind.

        Args:
            story_id: Story ID
            reporter_id: Reporting user ID
            reason: Free-text reason

        Returns:
            The pending report

        Raises:
            ValidationError: If the reason is blank or too long
            NotFoundError: If the story does not exist
            DuplicateActionError: If the reporter already has a pending
                report on this story
        """
        with logfire.span(
            "report_service.create_report",
            story_id=str(story_id),
            reporter_id=str(reporter_id),
        ):
            reason = reason.strip()
            if not reason:
                raise ValidationError("Please provide a reason for reporting.")
            if len(reason) > self.settings.report_reason_max_length:
                raise ValidationError(
                    f"Reason must be at most "
                    f"{self.settings.report_reason_max_length} characters long"
                )

            async with self.story_repository.locked(story_id) as story:
                if story is None:
                    logfire.warn("Report on non-existent story", story_id=str(story_id))
                    raise NotFoundError("Story", str(story_id))

                if await self.report_repository.find_pending(story_id, reporter_id):
                    logfire.warn(
                        "Duplicate pending report",
                        story_id=str(story_id),
                        reporter_id=str(reporter_id),
                    )
                    raise DuplicateActionError(DUPLICATE_REPORT_MESSAGE)

                report = Report(
                    id=ReportId(uuid4()),
                    story_id=story_id,
                    reporter_id=reporter_id,
                    reason=reason,
                    status=ReportStatus.PENDING,
                    created_at=datetime.now(),
                )
                try:
                    saved = await self.report_repository.save(report)
                except IntegrityError:
                    logfire.warn(
                        "Duplicate pending report rejected by constraint",
                        story_id=str(story_id),
                        reporter_id=str(reporter_id),
                    )
                    raise DuplicateActionError(DUPLICATE_REPORT_MESSAGE)

            logfire.info(
                "Report created", report_id=str(saved.id), story_id=str(story_id)
            )
            return saved

    async def resolve(
        self, report_id: ReportId, outcome: ReportOutcome, moderator_id: UserId
    ) -> Report:
        """Close a pending report.

        Args:
            report_id: Report ID
            outcome: Resolved or dismissed
            moderator_id: Acting moderator

        Returns:
            The closed report

        Raises:
            NotFoundError: If the report does not exist
            StateConflictError: If the report is already closed
        """
        with logfire.span(
            "report_service.resolve",
            report_id=str(report_id),
            outcome=outcome.value,
            moderator_id=str(moderator_id),
        ):
            report = await self.report_repository.find_by_id(report_id)
            if not report:
                raise NotFoundError("Report", str(report_id))

            async with self.story_repository.locked(report.story_id):
                current = await self.report_repository.find_by_id(report_id)
                if not current:
                    raise NotFoundError("Report", str(report_id))
                resolved = current.resolve(outcome, moderator_id, datetime.now())
                await self.report_repository.update_status(resolved)

            logfire.info(
                "Report resolved",
                report_id=str(report_id),
                status=resolved.status.value,
            )
            return resolved

    async def list_reports(
        self, status: ReportStatus | None = None, limit: int = 100
    ) -> list[Report]:
        """Get reports, newest first.

        Args:
            status: Only reports in this state (None for all)
            limit: Maximum number of reports to return
        """
        with logfire.span(
            "report_service.list_reports",
            status=status.value if status else None,
            limit=limit,
        ):
            reports = await self.report_repository.find_by_status(status, limit=limit)
            logfire.info("Reports retrieved", count=len(reports))
            return reports
