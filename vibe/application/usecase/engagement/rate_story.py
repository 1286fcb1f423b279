"""Rate story use case."""

from uuid import UUID

from pydantic import BaseModel

from vibe.domain.service import EngagementService
from vibe.domain.value import StoryId, UserId


class RateStoryRequest(BaseModel):
    """Rate story request."""

    story_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    value: int


class RateStoryResponse(BaseModel):
    """Rate story response."""

    story_id: str
    value: int
    accepted: bool


class RateStoryUseCase:
    """Use case for giving a story its one-time star rating."""

    def __init__(self, engagement_service: EngagementService) -> None:
        """Initialize rate story use case.

        Args:
            engagement_service: Engagement domain service
        """
        self.engagement_service = engagement_service

    async def execute(self, request: RateStoryRequest) -> RateStoryResponse:
        """Execute rate story flow.

        Raises:
            ValidationError: If the value is out of range
            NotFoundError: If story not found
            DuplicateActionError: If the user already rated the story
        """
        result = await self.engagement_service.rate(
            StoryId(UUID(request.story_id)),
            UserId(UUID(request.user_id)),
            request.value,
        )
        return RateStoryResponse(
            story_id=request.story_id,
            value=request.value,
            accepted=result.accepted,
        )
