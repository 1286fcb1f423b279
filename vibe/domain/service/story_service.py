"""Story domain service."""

from typing import Iterable, Sequence

import logfire

from vibe.domain.error import NotAuthorizedError, NotFoundError
from vibe.domain.model.story import Story
from vibe.domain.repository import StoryRepository
from vibe.domain.value import StoryField, StoryId, StoryProjection, TagId, UserId

from .base import Service
from .notifier import ChangeNotifier
from .tag_service import TagService


class StoryService(Service):
    """Domain service for the story read model and tag assignment."""

    def __init__(
        self,
        story_repository: StoryRepository,
        tag_service: TagService,
        notifier: ChangeNotifier,
    ) -> None:
        """Initialize story service.

        Args:
            story_repository: Story repository
            tag_service: Tag domain service
            notifier: Story change notifier
        """
        self.story_repository = story_repository
        self.tag_service = tag_service
        self.notifier = notifier

    async def get_story_by_id(self, story_id: StoryId) -> Story | None:
        """Get a story by ID.

        Args:
            story_id: Story ID

        Returns:
            Story if found, None otherwise
        """
        with logfire.span("story_service.get_story_by_id", story_id=str(story_id)):
            story = await self.story_repository.find_by_id(story_id)
            if not story:
                logfire.warn("Story not found", story_id=str(story_id))
            return story

    async def prepare_watch(self, story_id: StoryId) -> None:
        """Check a story exists, then end the read before a long wait.

        Raises:
            NotFoundError: If the story does not exist
        """
        story = await self.get_story_by_id(story_id)
        await self.story_repository.release()
        if not story:
            raise NotFoundError("Story", str(story_id))

    async def project(self, story_id: StoryId) -> StoryProjection:
        """Build the public engagement view of a story.

        Counters are maintained transactionally by the mutations, so this is
        a pure read of the current story row.

        Raises:
            NotFoundError: If the story does not exist
        """
        story = await self.get_story_by_id(story_id)
        if not story:
            raise NotFoundError("Story", str(story_id))

        return StoryProjection(
            story_id=story.id,
            vote_count=story.vote_count,
            average_rating=story.average_rating,
            approved_comment_count=story.approved_comment_count,
            tag_ids=story.tag_ids,
        )

    async def update_tags(
        self,
        story_id: StoryId,
        user_id: UserId,
        tag_ids: Iterable[TagId],
        new_tag_names: Sequence[str],
    ) -> Story:
        """Replace a story's tags with the resolved set.

        Args:
            story_id: Story ID
            user_id: Editing user; must be the story author
            tag_ids: Existing tag IDs to keep or add
            new_tag_names: Free-text tag names to resolve or create

        Returns:
            Story with its new tag set

        Raises:
            NotFoundError: If the story does not exist
            NotAuthorizedError: If the user is not the story author
            ValidationError: If the tag references resolve to nothing
        """
        with logfire.span(
            "story_service.update_tags", story_id=str(story_id), user_id=str(user_id)
        ):
            story = await self.get_story_by_id(story_id)
            if not story:
                raise NotFoundError("Story", str(story_id))
            if story.author_id != user_id:
                logfire.warn(
                    "Unauthorized retag attempt",
                    story_id=str(story_id),
                    user_id=str(user_id),
                )
                raise NotAuthorizedError("story", str(story_id), str(user_id))

            resolved = await self.tag_service.resolve(tag_ids, new_tag_names)

            async with self.story_repository.locked(story_id) as current:
                if current is None:
                    raise NotFoundError("Story", str(story_id))
                updated = await self.story_repository.set_tags(story_id, resolved)

            if updated.tag_ids != current.tag_ids:
                self.notifier.notify(story_id, [StoryField.TAG_IDS])

            logfire.info(
                "Story tags updated", story_id=str(story_id), count=len(resolved)
            )
            return updated
