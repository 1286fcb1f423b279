"""Unit tests for the story read and change feed use cases."""

import asyncio
from uuid import uuid4

import pytest

from vibe.adapter.notifier import StoryChangeBroker
from vibe.application.usecase.story.update_story_tags import (
    UpdateStoryTagsRequest,
    UpdateStoryTagsUseCase,
)
from vibe.application.usecase.story.watch_story import (
    WatchStoryRequest,
    WatchStoryUseCase,
)
from vibe.config import NotificationSettings
from vibe.domain.error import NotFoundError
from vibe.domain.repository import StoryRepository
from vibe.domain.service import EngagementService, StoryService
from vibe.domain.value import StoryField, UserId
from tests.conftest import make_story
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _watch_use_case(unit_env, timeout: float = 0.05) -> WatchStoryUseCase:
    return WatchStoryUseCase(
        story_service=await unit_env.get(StoryService),
        broker=await unit_env.get(StoryChangeBroker),
        settings=NotificationSettings(long_poll_timeout_seconds=timeout),
    )


class TestWatchStoryUseCase:
    """Tests for WatchStoryUseCase."""

    @pytest.mark.asyncio
    async def test_times_out_without_change(self, unit_env):
        """With nothing new the answer should be 'unchanged'."""
        # Arrange
        use_case = await _watch_use_case(unit_env)
        story = await make_story(await unit_env.get(StoryRepository))

        # Act
        response = await use_case.execute(WatchStoryRequest(story_id=str(story.id)))

        # Assert
        assert response.changed is False
        assert response.version == 0
        assert response.fields == []
        assert response.story.vote_count == 0

    @pytest.mark.asyncio
    async def test_returns_pending_change_at_once(self, unit_env):
        """A client behind the current version gets the change right away."""
        # Arrange
        use_case = await _watch_use_case(unit_env, timeout=5)
        engagement = await unit_env.get(EngagementService)
        story = await make_story(await unit_env.get(StoryRepository))
        await engagement.toggle_vote(story.id, UserId(uuid4()))

        # Act
        response = await use_case.execute(
            WatchStoryRequest(story_id=str(story.id), since=0)
        )

        # Assert
        assert response.changed is True
        assert response.version == 1
        assert response.fields == [StoryField.VOTE_COUNT]
        assert response.story.vote_count == 1

    @pytest.mark.asyncio
    async def test_wakes_on_new_change(self, unit_env):
        """A waiting client should be answered when the story changes."""
        # Arrange
        use_case = await _watch_use_case(unit_env, timeout=5)
        engagement = await unit_env.get(EngagementService)
        story = await make_story(await unit_env.get(StoryRepository))
        watch = asyncio.create_task(
            use_case.execute(WatchStoryRequest(story_id=str(story.id), since=0))
        )
        await asyncio.sleep(0.01)

        # Act
        await engagement.rate(story.id, UserId(uuid4()), 4)
        response = await asyncio.wait_for(watch, timeout=1)

        # Assert
        assert response.changed is True
        assert response.fields == [StoryField.AVERAGE_RATING]
        assert response.story.average_rating == 4.0

    @pytest.mark.asyncio
    async def test_reports_all_fields_changed_since_version(self, unit_env):
        """A client two changes behind should hear about both fields."""
        # Arrange
        use_case = await _watch_use_case(unit_env, timeout=5)
        engagement = await unit_env.get(EngagementService)
        story = await make_story(await unit_env.get(StoryRepository))
        await engagement.toggle_vote(story.id, UserId(uuid4()))
        await engagement.rate(story.id, UserId(uuid4()), 5)

        # Act
        response = await use_case.execute(
            WatchStoryRequest(story_id=str(story.id), since=0)
        )

        # Assert
        assert response.version == 2
        assert response.fields == [StoryField.AVERAGE_RATING, StoryField.VOTE_COUNT]
        assert response.story.vote_count == 1
        assert response.story.average_rating == 5.0

    @pytest.mark.asyncio
    async def test_releases_story_read_before_waiting(self, unit_env):
        """The existence check must be finished before the long wait starts."""
        # Arrange
        use_case = await _watch_use_case(unit_env, timeout=5)
        story_repo = await unit_env.get(StoryRepository)
        engagement = await unit_env.get(EngagementService)
        story = await make_story(story_repo)
        released_before = story_repo.release_count

        # Act
        watch = asyncio.create_task(
            use_case.execute(WatchStoryRequest(story_id=str(story.id), since=0))
        )
        await asyncio.sleep(0.01)
        released_while_waiting = story_repo.release_count - released_before
        await engagement.toggle_vote(story.id, UserId(uuid4()))
        response = await asyncio.wait_for(watch, timeout=1)

        # Assert
        assert response.changed is True
        assert released_while_waiting == 1

    @pytest.mark.asyncio
    async def test_client_ahead_is_resynced(self, unit_env):
        """A version the server never issued should trigger a full refresh."""
        # Arrange
        use_case = await _watch_use_case(unit_env, timeout=5)
        story = await make_story(await unit_env.get(StoryRepository))

        # Act
        response = await use_case.execute(
            WatchStoryRequest(story_id=str(story.id), since=42)
        )

        # Assert
        assert response.changed is True
        assert response.version == 0
        assert set(response.fields) == set(StoryField)

    @pytest.mark.asyncio
    async def test_missing_story_raises(self, unit_env):
        """Watching an unknown story should raise NotFoundError."""
        # Arrange
        use_case = await _watch_use_case(unit_env)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(WatchStoryRequest(story_id=str(uuid4())))


class TestUpdateStoryTagsUseCase:
    """Tests for UpdateStoryTagsUseCase."""

    @pytest.mark.asyncio
    async def test_retag_returns_sorted_ids(self, unit_env):
        """The response should list the story's new tag IDs."""
        # Arrange
        use_case = await unit_env.get(UpdateStoryTagsUseCase)
        author_id = UserId(uuid4())
        story = await make_story(await unit_env.get(StoryRepository), author_id)

        # Act
        response = await use_case.execute(
            UpdateStoryTagsRequest(
                story_id=str(story.id),
                user_id=str(author_id),
                new_tag_names=["Physics", "Biology"],
            )
        )

        # Assert
        assert response.story_id == str(story.id)
        assert len(response.tag_ids) == 2
        assert response.tag_ids == sorted(response.tag_ids)
