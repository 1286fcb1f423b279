"""Update story tags use case."""

from uuid import UUID

from pydantic import BaseModel

from vibe.domain.service import StoryService
from vibe.domain.value import StoryId, TagId, UserId


class UpdateStoryTagsRequest(BaseModel):
    """Update story tags request."""

    story_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    tag_ids: list[str] = []
    new_tag_names: list[str] = []


class UpdateStoryTagsResponse(BaseModel):
    """Update story tags response."""

    story_id: str
    tag_ids: list[str]


class UpdateStoryTagsUseCase:
    """Use case for the author re-tagging their story."""

    def __init__(self, story_service: StoryService) -> None:
        self.story_service = story_service

    async def execute(self, request: UpdateStoryTagsRequest) -> UpdateStoryTagsResponse:
        """Execute update story tags flow.

        Raises:
            NotFoundError: If story not found
            NotAuthorizedError: If the user is not the author
            ValidationError: If the tag references resolve to nothing
        """
        story = await self.story_service.update_tags(
            story_id=StoryId(UUID(request.story_id)),
            user_id=UserId(UUID(request.user_id)),
            tag_ids=[TagId(UUID(t)) for t in request.tag_ids],
            new_tag_names=request.new_tag_names,
        )
        return UpdateStoryTagsResponse(
            story_id=str(story.id),
            tag_ids=sorted(str(t) for t in story.tag_ids),
        )
