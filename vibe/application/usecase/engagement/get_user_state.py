"""Get user state use case."""

from uuid import UUID

from pydantic import BaseModel

from vibe.domain.service import EngagementService
from vibe.domain.value import StoryId, UserId


class GetUserStateRequest(BaseModel):
    """Get user state request."""

    story_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class GetUserStateResponse(BaseModel):
    """What the user has done on a story."""

    story_id: str
    voted: bool
    rating: int | None
    bookmarked: bool


class GetUserStateUseCase:
    """Use case for reading the user's own vote, rating and bookmark."""

    def __init__(self, engagement_service: EngagementService) -> None:
        """Initialize get user state use case.

        Args:
            engagement_service: Engagement domain service
        """
        self.engagement_service = engagement_service

    async def execute(self, request: GetUserStateRequest) -> GetUserStateResponse:
        """Execute get user state flow.

        Raises:
            NotFoundError: If story not found
        """
        state = await self.engagement_service.get_user_state(
            StoryId(UUID(request.story_id)), UserId(UUID(request.user_id))
        )
        return GetUserStateResponse(
            story_id=request.story_id,
            voted=state.voted,
            rating=state.rating,
            bookmarked=state.bookmarked,
        )
