"""Unit tests for StoryService."""

from uuid import uuid4

import pytest

from vibe.adapter.notifier import StoryChangeBroker
from vibe.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from vibe.domain.repository import StoryRepository, TagRepository
from vibe.domain.service import EngagementService, StoryService
from vibe.domain.value import StoryField, StoryId, TagName, UserId
from tests.conftest import make_story
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestProject:
    """Tests for StoryService.project."""

    @pytest.mark.asyncio
    async def test_unrated_story_has_zero_average(self, unit_env):
        """A fresh story should project zeroed counters."""
        # Arrange
        service = await unit_env.get(StoryService)
        story = await make_story(await unit_env.get(StoryRepository))

        # Act
        projection = await service.project(story.id)

        # Assert
        assert projection.story_id == story.id
        assert projection.vote_count == 0
        assert projection.average_rating == 0.0
        assert projection.approved_comment_count == 0
        assert projection.tag_ids == frozenset()

    @pytest.mark.asyncio
    async def test_projection_reflects_engagement(self, unit_env):
        """Votes and ratings should show up in the projection."""
        # Arrange
        service = await unit_env.get(StoryService)
        engagement = await unit_env.get(EngagementService)
        story = await make_story(await unit_env.get(StoryRepository))
        await engagement.toggle_vote(story.id, UserId(uuid4()))
        await engagement.rate(story.id, UserId(uuid4()), 4)
        await engagement.rate(story.id, UserId(uuid4()), 1)

        # Act
        projection = await service.project(story.id)

        # Assert
        assert projection.vote_count == 1
        assert projection.average_rating == 2.5

    @pytest.mark.asyncio
    async def test_project_missing_story_raises(self, unit_env):
        """Projecting an unknown story should raise NotFoundError."""
        # Arrange
        service = await unit_env.get(StoryService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.project(StoryId(uuid4()))


class TestUpdateTags:
    """Tests for StoryService.update_tags."""

    @pytest.mark.asyncio
    async def test_author_can_retag_story(self, unit_env):
        """The author should be able to replace the story's tags."""
        # Arrange
        service = await unit_env.get(StoryService)
        tag_repo = await unit_env.get(TagRepository)
        broker = await unit_env.get(StoryChangeBroker)
        author_id = UserId(uuid4())
        story = await make_story(await unit_env.get(StoryRepository), author_id)

        # Act
        updated = await service.update_tags(story.id, author_id, [], ["Science"])

        # Assert
        tag = await tag_repo.get_or_create(TagName("science"))
        assert updated.tag_ids == frozenset({tag.id})
        event = await broker.wait_for_change(story.id, since=0, timeout=0.1)
        assert event.fields == frozenset({StoryField.TAG_IDS})

    @pytest.mark.asyncio
    async def test_unchanged_tags_do_not_notify(self, unit_env):
        """Re-applying the same tag set should not publish a change."""
        # Arrange
        service = await unit_env.get(StoryService)
        broker = await unit_env.get(StoryChangeBroker)
        author_id = UserId(uuid4())
        story = await make_story(await unit_env.get(StoryRepository), author_id)
        await service.update_tags(story.id, author_id, [], ["Science"])

        # Act
        await service.update_tags(story.id, author_id, [], ["science"])

        # Assert
        assert broker.current_version(story.id) == 1

    @pytest.mark.asyncio
    async def test_non_author_cannot_retag(self, unit_env):
        """Only the author may change a story's tags."""
        # Arrange
        service = await unit_env.get(StoryService)
        story = await make_story(await unit_env.get(StoryRepository))

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await service.update_tags(story.id, UserId(uuid4()), [], ["Science"])

    @pytest.mark.asyncio
    async def test_empty_tag_set_is_rejected(self, unit_env):
        """A story cannot be left without tags."""
        # Arrange
        service = await unit_env.get(StoryService)
        author_id = UserId(uuid4())
        story = await make_story(await unit_env.get(StoryRepository), author_id)

        # Act & Assert
        with pytest.raises(ValidationError):
            await service.update_tags(story.id, author_id, [], ["  "])
