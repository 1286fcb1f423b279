"""Toggle vote use case."""

from uuid import UUID

from pydantic import BaseModel

from vibe.domain.service import EngagementService
from vibe.domain.value import StoryId, UserId, VoteAction


class ToggleVoteRequest(BaseModel):
    """Toggle vote request."""

    story_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class ToggleVoteResponse(BaseModel):
    """Toggle vote response."""

    story_id: str
    action: VoteAction
    vote_count: int


class ToggleVoteUseCase:
    """Use case for upvoting a story or taking the upvote back."""

    def __init__(self, engagement_service: EngagementService) -> None:
        """Initialize toggle vote use case.

        Args:
            engagement_service: Engagement domain service
        """
        self.engagement_service = engagement_service

    async def execute(self, request: ToggleVoteRequest) -> ToggleVoteResponse:
        """Execute toggle vote flow.

        Args:
            request: Toggle vote request

        Returns:
            Action taken and the new vote count

        Raises:
            NotFoundError: If story not found
        """
        story_id = StoryId(UUID(request.story_id))
        user_id = UserId(UUID(request.user_id))

        result = await self.engagement_service.toggle_vote(story_id, user_id)

        return ToggleVoteResponse(
            story_id=request.story_id,
            action=result.action,
            vote_count=result.new_count,
        )
