"""Watch story use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from vibe.adapter.notifier import StoryChangeBroker
from vibe.config import NotificationSettings
from vibe.domain.service import StoryService
from vibe.domain.value import StoryField, StoryId

from .get_story import GetStoryRequest, GetStoryResponse, GetStoryUseCase


class WatchStoryRequest(BaseModel):
    """Watch story request."""

    story_id: str  # UUID string
    since: int = Field(default=0, ge=0)  # Last version the client has seen


class WatchStoryResponse(BaseModel):
    """Long-poll answer.

    ``changed`` is False when the wait timed out; ``version`` is then the
    version the client already had.
    """

    story_id: str
    changed: bool
    version: int
    fields: list[StoryField]
    story: GetStoryResponse


class WatchStoryUseCase:
    """Use case for long-polling a story's engagement changes.

    Only whole-projection refreshes are offered: the response names the
    fields that moved and carries the current projection.
    """

    def __init__(
        self,
        story_service: StoryService,
        broker: StoryChangeBroker,
        settings: NotificationSettings,
    ) -> None:
        """Initialize watch story use case.

        Args:
            story_service: Story domain service
            broker: Story change broker
            settings: Long-poll configuration
        """
        self.story_service = story_service
        self.broker = broker
        self.settings = settings

    async def execute(self, request: WatchStoryRequest) -> WatchStoryResponse:
        """Wait for the story to move past ``request.since``.

        Raises:
            NotFoundError: If story not found
        """
        story_id = StoryId(UUID(request.story_id))
        # No database connection is held across the wait
        await self.story_service.prepare_watch(story_id)

        current = self.broker.current_version(story_id)
        if request.since > current:
            # Client is ahead of this process (e.g. after a restart): resync
            return WatchStoryResponse(
                story_id=request.story_id,
                changed=True,
                version=current,
                fields=list(StoryField),
                story=await self._project(request.story_id),
            )

        event = await self.broker.wait_for_change(
            story_id,
            since=request.since,
            timeout=self.settings.long_poll_timeout_seconds,
        )
        story = await self._project(request.story_id)

        if event is None or event.version <= request.since:
            return WatchStoryResponse(
                story_id=request.story_id,
                changed=False,
                version=request.since,
                fields=[],
                story=story,
            )

        return WatchStoryResponse(
            story_id=request.story_id,
            changed=True,
            version=event.version,
            fields=sorted(event.fields, key=lambda f: f.value),
            story=story,
        )

    async def _project(self, story_id: str) -> GetStoryResponse:
        return await GetStoryUseCase(self.story_service).execute(
            GetStoryRequest(story_id=story_id)
        )
