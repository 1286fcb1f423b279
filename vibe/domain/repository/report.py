"""Report repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from vibe.domain.model.report import Report
from vibe.domain.value import ReportId, ReportStatus, StoryId, UserId


class ReportRepository(ABC):
    """Repository for Report entity."""

    @abstractmethod
    async def find_by_id(self, report_id: ReportId) -> Optional[Report]:
        """Find a report by ID.

        Returns:
            The report if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_pending(
        self, story_id: StoryId, reporter_id: UserId
    ) -> Optional[Report]:
        """Find the reporter's open report on a story, if any."""
        pass

    @abstractmethod
    async def find_by_status(
        self, status: Optional[ReportStatus] = None, limit: int = 100
    ) -> list[Report]:
        """Find reports, newest first.

        Args:
            status: Only return reports in this state (None for all)
            limit: Maximum number of reports to return
        """
        pass

    @abstractmethod
    async def save(self, report: Report) -> Report:
        """Save a new report.

        Raises:
            IntegrityError: If the reporter already has a pending report
                on the story
        """
        pass

    @abstractmethod
    async def update_status(self, report: Report) -> Report:
        """Persist a report's resolution fields."""
        pass
