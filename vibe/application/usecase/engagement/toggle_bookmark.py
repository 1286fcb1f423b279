"""Toggle bookmark use case."""

from uuid import UUID

from pydantic import BaseModel

from vibe.domain.service import EngagementService
from vibe.domain.value import StoryId, UserId


class ToggleBookmarkRequest(BaseModel):
    """Toggle bookmark request."""

    story_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class ToggleBookmarkResponse(BaseModel):
    """Toggle bookmark response."""

    story_id: str
    bookmarked: bool


class ToggleBookmarkUseCase:
    """Use case for saving a story to, or removing it from, a reading list."""

    def __init__(self, engagement_service: EngagementService) -> None:
        self.engagement_service = engagement_service

    async def execute(self, request: ToggleBookmarkRequest) -> ToggleBookmarkResponse:
        """Execute toggle bookmark flow."""
        result = await self.engagement_service.toggle_bookmark(
            StoryId(UUID(request.story_id)), UserId(UUID(request.user_id))
        )
        return ToggleBookmarkResponse(
            story_id=request.story_id, bookmarked=result.bookmarked
        )
