"""Get story use case."""

from uuid import UUID

from pydantic import BaseModel

from vibe.domain.service import StoryService
from vibe.domain.value import StoryId


class GetStoryRequest(BaseModel):
    """Get story request."""

    story_id: str  # UUID string


class GetStoryResponse(BaseModel):
    """Public engagement view of a story."""

    story_id: str
    vote_count: int
    average_rating: float
    approved_comment_count: int
    tag_ids: list[str]


class GetStoryUseCase:
    """Use case for reading a story's counters and tags."""

    def __init__(self, story_service: StoryService) -> None:
        """Initialize get story use case.

        Args:
            story_service: Story domain service
        """
        self.story_service = story_service

    async def execute(self, request: GetStoryRequest) -> GetStoryResponse:
        """Execute get story flow.

        Raises:
            NotFoundError: If story not found
        """
        projection = await self.story_service.project(StoryId(UUID(request.story_id)))

        return GetStoryResponse(
            story_id=str(projection.story_id),
            vote_count=projection.vote_count,
            average_rating=projection.average_rating,
            approved_comment_count=projection.approved_comment_count,
            tag_ids=sorted(str(t) for t in projection.tag_ids),
        )
