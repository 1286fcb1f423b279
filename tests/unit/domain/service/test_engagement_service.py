"""Unit tests for EngagementService."""

import asyncio
from uuid import uuid4

import pytest

from vibe.adapter.notifier import StoryChangeBroker
from vibe.domain.error import DuplicateActionError, NotFoundError, ValidationError
from vibe.domain.repository import StoryRepository
from vibe.domain.service import EngagementService
from vibe.domain.value import StoryField, StoryId, UserId, VoteAction
from tests.conftest import make_story
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestToggleVote:
    """Tests for EngagementService.toggle_vote."""

    @pytest.mark.asyncio
    async def test_first_toggle_adds_vote(self, unit_env):
        """First toggle should add the vote and bump the count."""
        # Arrange
        service = await unit_env.get(EngagementService)
        story = await make_story(await unit_env.get(StoryRepository))
        user_id = UserId(uuid4())

        # Act
        result = await service.toggle_vote(story.id, user_id)

        # Assert
        assert result.action == VoteAction.ADDED
        assert result.new_count == 1

    @pytest.mark.asyncio
    async def test_second_toggle_removes_vote(self, unit_env):
        """Toggling twice should leave the story as it was."""
        # Arrange
        service = await unit_env.get(EngagementService)
        story_repo = await unit_env.get(StoryRepository)
        story = await make_story(story_repo)
        user_id = UserId(uuid4())

        # Act
        await service.toggle_vote(story.id, user_id)
        result = await service.toggle_vote(story.id, user_id)

        # Assert
        assert result.action == VoteAction.REMOVED
        assert result.new_count == 0
        state = await service.get_user_state(story.id, user_id)
        assert state.voted is False
        assert (await story_repo.find_by_id(story.id)).vote_count == 0

    @pytest.mark.asyncio
    async def test_votes_from_different_users_accumulate(self, unit_env):
        """Each user contributes at most one vote."""
        # Arrange
        service = await unit_env.get(EngagementService)
        story = await make_story(await unit_env.get(StoryRepository))

        # Act
        await service.toggle_vote(story.id, UserId(uuid4()))
        result = await service.toggle_vote(story.id, UserId(uuid4()))

        # Assert
        assert result.new_count == 2

    @pytest.mark.asyncio
    async def test_concurrent_toggles_keep_count_consistent(self, unit_env):
        """Concurrent toggles by many users should all be counted."""
        # Arrange
        service = await unit_env.get(EngagementService)
        story_repo = await unit_env.get(StoryRepository)
        story = await make_story(story_repo)
        users = [UserId(uuid4()) for _ in range(20)]

        # Act
        await asyncio.gather(*(service.toggle_vote(story.id, u) for u in users))

        # Assert
        assert (await story_repo.find_by_id(story.id)).vote_count == 20

    @pytest.mark.asyncio
    async def test_concurrent_toggles_by_same_user_cancel_out(self, unit_env):
        """An even number of toggles by one user should leave no vote."""
        # Arrange
        service = await unit_env.get(EngagementService)
        story_repo = await unit_env.get(StoryRepository)
        story = await make_story(story_repo)
        user_id = UserId(uuid4())

        # Act
        await asyncio.gather(
            *(service.toggle_vote(story.id, user_id) for _ in range(4))
        )

        # Assert
        assert (await story_repo.find_by_id(story.id)).vote_count == 0

    @pytest.mark.asyncio
    async def test_vote_on_missing_story_raises(self, unit_env):
        """Voting on an unknown story should raise NotFoundError."""
        # Arrange
        service = await unit_env.get(EngagementService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.toggle_vote(StoryId(uuid4()), UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_vote_publishes_change(self, unit_env):
        """A vote toggle should advance the story's change version."""
        # Arrange
        service = await unit_env.get(EngagementService)
        broker = await unit_env.get(StoryChangeBroker)
        story = await make_story(await unit_env.get(StoryRepository))

        # Act
        await service.toggle_vote(story.id, UserId(uuid4()))

        # Assert
        assert broker.current_version(story.id) == 1
        event = await broker.wait_for_change(story.id, since=0, timeout=0.1)
        assert event.fields == frozenset({StoryField.VOTE_COUNT})


class TestRate:
    """Tests for EngagementService.rate."""

    @pytest.mark.asyncio
    async def test_rate_updates_average(self, unit_env):
        """Ratings should feed the story's average."""
        # Arrange
        service = await unit_env.get(EngagementService)
        story_repo = await unit_env.get(StoryRepository)
        story = await make_story(story_repo)

        # Act
        await service.rate(story.id, UserId(uuid4()), 5)
        result = await service.rate(story.id, UserId(uuid4()), 2)

        # Assert
        assert result.accepted is True
        updated = await story_repo.find_by_id(story.id)
        assert updated.rating_count == 2
        assert updated.average_rating == 3.5

    @pytest.mark.asyncio
    async def test_second_rating_is_rejected(self, unit_env):
        """A user may rate a story only once; totals stay unchanged."""
        # Arrange
        service = await unit_env.get(EngagementService)
        story_repo = await unit_env.get(StoryRepository)
        story = await make_story(story_repo)
        user_id = UserId(uuid4())
        await service.rate(story.id, user_id, 4)

        # Act & Assert
        with pytest.raises(DuplicateActionError, match="already rated"):
            await service.rate(story.id, user_id, 1)

        updated = await story_repo.find_by_id(story.id)
        assert updated.rating_sum == 4
        assert updated.rating_count == 1
        state = await service.get_user_state(story.id, user_id)
        assert state.rating == 4

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [0, 6, -1])
    async def test_out_of_range_rating_raises(self, unit_env, value):
        """Ratings outside 1-5 should be rejected before touching the story."""
        # Arrange
        service = await unit_env.get(EngagementService)
        story = await make_story(await unit_env.get(StoryRepository))

        # Act & Assert
        with pytest.raises(ValidationError):
            await service.rate(story.id, UserId(uuid4()), value)

    @pytest.mark.asyncio
    async def test_rate_missing_story_raises(self, unit_env):
        """Rating an unknown story should raise NotFoundError."""
        # Arrange
        service = await unit_env.get(EngagementService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.rate(StoryId(uuid4()), UserId(uuid4()), 3)

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_ratings_accept_one(self, unit_env):
        """Racing ratings by one user should leave exactly one recorded."""
        # Arrange
        service = await unit_env.get(EngagementService)
        story_repo = await unit_env.get(StoryRepository)
        story = await make_story(story_repo)
        user_id = UserId(uuid4())

        # Act
        results = await asyncio.gather(
            service.rate(story.id, user_id, 3),
            service.rate(story.id, user_id, 5),
            return_exceptions=True,
        )

        # Assert
        errors = [r for r in results if isinstance(r, Exception)]
        assert len(errors) == 1
        assert isinstance(errors[0], DuplicateActionError)
        assert (await story_repo.find_by_id(story.id)).rating_count == 1


class TestBookmarks:
    """Tests for bookmark toggling and listing."""

    @pytest.mark.asyncio
    async def test_toggle_bookmark_on_and_off(self, unit_env):
        """Bookmark toggle should flip the bookmarked state."""
        # Arrange
        service = await unit_env.get(EngagementService)
        story = await make_story(await unit_env.get(StoryRepository))
        user_id = UserId(uuid4())

        # Act
        first = await service.toggle_bookmark(story.id, user_id)
        second = await service.toggle_bookmark(story.id, user_id)

        # Assert
        assert first.bookmarked is True
        assert second.bookmarked is False
        assert await service.list_bookmarks(user_id) == []

    @pytest.mark.asyncio
    async def test_list_bookmarks_newest_first(self, unit_env):
        """Bookmarks should be listed newest first and only for the user."""
        # Arrange
        service = await unit_env.get(EngagementService)
        story_repo = await unit_env.get(StoryRepository)
        older = await make_story(story_repo)
        newer = await make_story(story_repo)
        user_id = UserId(uuid4())
        await service.toggle_bookmark(older.id, user_id)
        await asyncio.sleep(0.001)
        await service.toggle_bookmark(newer.id, user_id)
        await service.toggle_bookmark(older.id, UserId(uuid4()))

        # Act
        bookmarks = await service.list_bookmarks(user_id)

        # Assert
        assert [b.story_id for b in bookmarks] == [newer.id, older.id]

    @pytest.mark.asyncio
    async def test_bookmark_does_not_publish_change(self, unit_env):
        """Bookmarks are private and do not move the public projection."""
        # Arrange
        service = await unit_env.get(EngagementService)
        broker = await unit_env.get(StoryChangeBroker)
        story = await make_story(await unit_env.get(StoryRepository))

        # Act
        await service.toggle_bookmark(story.id, UserId(uuid4()))

        # Assert
        assert broker.current_version(story.id) == 0

    @pytest.mark.asyncio
    async def test_bookmark_missing_story_raises(self, unit_env):
        """Bookmarking an unknown story should raise NotFoundError."""
        # Arrange
        service = await unit_env.get(EngagementService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.toggle_bookmark(StoryId(uuid4()), UserId(uuid4()))


class TestUserState:
    """Tests for EngagementService.get_user_state."""

    @pytest.mark.asyncio
    async def test_fresh_user_has_no_engagement(self, unit_env):
        """A user who never engaged should see an empty state."""
        # Arrange
        service = await unit_env.get(EngagementService)
        story = await make_story(await unit_env.get(StoryRepository))

        # Act
        state = await service.get_user_state(story.id, UserId(uuid4()))

        # Assert
        assert state.voted is False
        assert state.rating is None
        assert state.bookmarked is False

    @pytest.mark.asyncio
    async def test_state_reflects_all_actions(self, unit_env):
        """State should report vote, rating and bookmark together."""
        # Arrange
        service = await unit_env.get(EngagementService)
        story = await make_story(await unit_env.get(StoryRepository))
        user_id = UserId(uuid4())
        await service.toggle_vote(story.id, user_id)
        await service.rate(story.id, user_id, 2)
        await service.toggle_bookmark(story.id, user_id)

        # Act
        state = await service.get_user_state(story.id, user_id)

        # Assert
        assert state.voted is True
        assert state.rating == 2
        assert state.bookmarked is True
