"""Integration tests for the PostgreSQL repositories.

These run against a migrated database named by DATABASE__URL and are
skipped when it is not set.
"""

import os
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vibe.domain.error import DuplicateActionError
from vibe.domain.model import Vote
from vibe.domain.repository import StoryRepository, TagRepository, VoteRepository
from vibe.domain.service import EngagementService, ReportService
from vibe.domain.value import TagName, UserId
from tests.conftest import make_story
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    not os.environ.get("DATABASE__URL"), reason="DATABASE__URL not set"
)

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


class TestPostgresRepositories:
    """Integration tests for constraint handling and counters."""

    @pytest.mark.asyncio
    async def test_duplicate_vote_leaves_session_usable(self, integration_env):
        """A rejected insert must not abort the surrounding transaction."""
        # Arrange
        story_repo = await integration_env.get(StoryRepository)
        vote_repo = await integration_env.get(VoteRepository)
        story = await make_story(story_repo)
        vote = Vote(story_id=story.id, user_id=UserId(uuid4()))
        await vote_repo.save(vote)

        # Act
        with pytest.raises(IntegrityError):
            await vote_repo.save(vote)

        # Assert
        assert await vote_repo.find(story.id, vote.user_id) is not None

    @pytest.mark.asyncio
    async def test_counters_follow_toggles(self, integration_env):
        """Counter increments should be applied in SQL."""
        # Arrange
        service = await integration_env.get(EngagementService)
        story_repo = await integration_env.get(StoryRepository)
        story = await make_story(story_repo)

        # Act
        await service.toggle_vote(story.id, UserId(uuid4()))
        await service.rate(story.id, UserId(uuid4()), 3)

        # Assert
        reloaded = await story_repo.find_by_id(story.id)
        assert reloaded.vote_count == 1
        assert reloaded.rating_sum == 3

    @pytest.mark.asyncio
    async def test_pending_report_unique_per_reporter(self, integration_env):
        """The partial unique index should back the duplicate check."""
        # Arrange
        service = await integration_env.get(ReportService)
        story = await make_story(await integration_env.get(StoryRepository))
        reporter_id = UserId(uuid4())
        await service.create_report(story.id, reporter_id, "spam")

        # Act & Assert
        with pytest.raises(DuplicateActionError):
            await service.create_report(story.id, reporter_id, "spam")

    @pytest.mark.asyncio
    async def test_get_or_create_is_case_insensitive(self, integration_env):
        """Tags differing only in case should share a row."""
        # Arrange
        tag_repo = await integration_env.get(TagRepository)
        name = f"Topic-{uuid4().hex[:8]}"

        # Act
        first = await tag_repo.get_or_create(TagName(name))
        second = await tag_repo.get_or_create(TagName(name.lower()))

        # Assert
        assert first.id == second.id
        assert second.name.root == name

    @pytest.mark.asyncio
    async def test_release_ends_read_transaction(self, integration_env):
        """A released story read should not keep its connection checked out."""
        # Arrange
        session = await integration_env.get(AsyncSession)
        story_repo = await integration_env.get(StoryRepository)
        story = await make_story(story_repo)
        await story_repo.find_by_id(story.id)

        # Act
        await story_repo.release()

        # Assert
        assert not session.in_transaction()
        assert await story_repo.find_by_id(story.id) is not None
