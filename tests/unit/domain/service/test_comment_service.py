"""Unit tests for CommentService."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from vibe.adapter.notifier import StoryChangeBroker
from vibe.domain.error import NotFoundError, StateConflictError, ValidationError
from vibe.domain.model import Comment
from vibe.domain.repository import StoryRepository
from vibe.domain.service import CommentService, thread_order
from vibe.domain.value import (
    CommentId,
    CommentStatus,
    ModerationDecision,
    StoryField,
    StoryId,
    UserId,
)
from tests.conftest import make_story
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

VALID_TEXT = "This is a thoughtful comment."


class TestAddComment:
    """Tests for CommentService.add_comment."""

    @pytest.mark.asyncio
    async def test_new_comment_is_pending(self, unit_env):
        """New comments should be held for moderation at depth 0."""
        # Arrange
        service = await unit_env.get(CommentService)
        story = await make_story(await unit_env.get(StoryRepository))

        # Act
        comment = await service.add_comment(story.id, UserId(uuid4()), VALID_TEXT)

        # Assert
        assert comment.status == CommentStatus.PENDING
        assert comment.depth == 0
        assert comment.parent_id is None

    @pytest.mark.asyncio
    async def test_content_is_stripped(self, unit_env):
        """Surrounding whitespace should not be stored."""
        # Arrange
        service = await unit_env.get(CommentService)
        story = await make_story(await unit_env.get(StoryRepository))

        # Act
        comment = await service.add_comment(
            story.id, UserId(uuid4()), f"   {VALID_TEXT}\n\n"
        )

        # Assert
        assert comment.content == VALID_TEXT

    @pytest.mark.asyncio
    async def test_short_comment_is_rejected(self, unit_env):
        """Comments under 10 characters after trimming should be rejected."""
        # Arrange
        service = await unit_env.get(CommentService)
        story = await make_story(await unit_env.get(StoryRepository))

        # Act & Assert
        with pytest.raises(ValidationError, match="at least 10 characters"):
            await service.add_comment(story.id, UserId(uuid4()), "   too short   ")

    @pytest.mark.asyncio
    async def test_comment_on_missing_story_raises(self, unit_env):
        """Commenting on an unknown story should raise NotFoundError."""
        # Arrange
        service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.add_comment(StoryId(uuid4()), UserId(uuid4()), VALID_TEXT)

    @pytest.mark.asyncio
    async def test_reply_depth_follows_parent(self, unit_env):
        """A reply should sit one level below its parent."""
        # Arrange
        service = await unit_env.get(CommentService)
        story = await make_story(await unit_env.get(StoryRepository))
        root = await service.add_comment(story.id, UserId(uuid4()), VALID_TEXT)
        child = await service.add_comment(
            story.id, UserId(uuid4()), VALID_TEXT, parent_id=root.id
        )

        # Act
        grandchild = await service.add_comment(
            story.id, UserId(uuid4()), VALID_TEXT, parent_id=child.id
        )

        # Assert
        assert child.depth == 1
        assert grandchild.depth == 2
        assert grandchild.parent_id == child.id

    @pytest.mark.asyncio
    async def test_reply_to_missing_parent_raises(self, unit_env):
        """Replying to an unknown comment should raise NotFoundError."""
        # Arrange
        service = await unit_env.get(CommentService)
        story = await make_story(await unit_env.get(StoryRepository))

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.add_comment(
                story.id, UserId(uuid4()), VALID_TEXT, parent_id=CommentId(uuid4())
            )

    @pytest.mark.asyncio
    async def test_reply_to_comment_on_other_story_raises(self, unit_env):
        """A parent from another story is treated as not found."""
        # Arrange
        service = await unit_env.get(CommentService)
        story_repo = await unit_env.get(StoryRepository)
        story = await make_story(story_repo)
        other = await make_story(story_repo)
        foreign = await service.add_comment(other.id, UserId(uuid4()), VALID_TEXT)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.add_comment(
                story.id, UserId(uuid4()), VALID_TEXT, parent_id=foreign.id
            )


class TestModerate:
    """Tests for comment moderation and visibility."""

    @pytest.mark.asyncio
    async def test_pending_comments_are_not_visible(self, unit_env):
        """Only approved comments should be listed publicly."""
        # Arrange
        service = await unit_env.get(CommentService)
        story = await make_story(await unit_env.get(StoryRepository))
        await service.add_comment(story.id, UserId(uuid4()), VALID_TEXT)

        # Act
        visible = await service.list_approved(story.id)

        # Assert
        assert visible == []

    @pytest.mark.asyncio
    async def test_approve_makes_comment_visible_and_counts_it(self, unit_env):
        """Approval should publish the comment and bump the counter."""
        # Arrange
        service = await unit_env.get(CommentService)
        story_repo = await unit_env.get(StoryRepository)
        broker = await unit_env.get(StoryChangeBroker)
        story = await make_story(story_repo)
        comment = await service.add_comment(story.id, UserId(uuid4()), VALID_TEXT)
        moderator_id = UserId(uuid4())

        # Act
        moderated = await service.moderate(
            comment.id, ModerationDecision.APPROVE, moderator_id
        )

        # Assert
        assert moderated.status == CommentStatus.APPROVED
        assert moderated.moderated_by == moderator_id
        assert moderated.moderated_at is not None
        assert [c.id for c in await service.list_approved(story.id)] == [comment.id]
        assert (await story_repo.find_by_id(story.id)).approved_comment_count == 1
        event = await broker.wait_for_change(story.id, since=0, timeout=0.1)
        assert event.fields == frozenset({StoryField.APPROVED_COMMENT_COUNT})

    @pytest.mark.asyncio
    async def test_rejected_comment_stays_hidden(self, unit_env):
        """Rejection should neither publish nor count the comment."""
        # Arrange
        service = await unit_env.get(CommentService)
        story_repo = await unit_env.get(StoryRepository)
        broker = await unit_env.get(StoryChangeBroker)
        story = await make_story(story_repo)
        comment = await service.add_comment(story.id, UserId(uuid4()), VALID_TEXT)

        # Act
        moderated = await service.moderate(
            comment.id, ModerationDecision.REJECT, UserId(uuid4())
        )

        # Assert
        assert moderated.status == CommentStatus.REJECTED
        assert await service.list_approved(story.id) == []
        assert (await story_repo.find_by_id(story.id)).approved_comment_count == 0
        assert broker.current_version(story.id) == 0

    @pytest.mark.asyncio
    async def test_second_moderation_conflicts(self, unit_env):
        """A comment can be moderated only once; the count moves once."""
        # Arrange
        service = await unit_env.get(CommentService)
        story_repo = await unit_env.get(StoryRepository)
        story = await make_story(story_repo)
        comment = await service.add_comment(story.id, UserId(uuid4()), VALID_TEXT)
        await service.moderate(comment.id, ModerationDecision.APPROVE, UserId(uuid4()))

        # Act & Assert
        with pytest.raises(StateConflictError, match="approved"):
            await service.moderate(
                comment.id, ModerationDecision.APPROVE, UserId(uuid4())
            )

        assert (await story_repo.find_by_id(story.id)).approved_comment_count == 1

    @pytest.mark.asyncio
    async def test_moderate_missing_comment_raises(self, unit_env):
        """Moderating an unknown comment should raise NotFoundError."""
        # Arrange
        service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.moderate(
                CommentId(uuid4()), ModerationDecision.APPROVE, UserId(uuid4())
            )

    @pytest.mark.asyncio
    async def test_pending_queue_lists_oldest_first(self, unit_env):
        """The moderation queue should only hold pending comments."""
        # Arrange
        service = await unit_env.get(CommentService)
        story_repo = await unit_env.get(StoryRepository)
        story = await make_story(story_repo)
        other = await make_story(story_repo)
        first = await service.add_comment(story.id, UserId(uuid4()), VALID_TEXT)
        second = await service.add_comment(story.id, UserId(uuid4()), VALID_TEXT)
        elsewhere = await service.add_comment(other.id, UserId(uuid4()), VALID_TEXT)
        await service.moderate(first.id, ModerationDecision.REJECT, UserId(uuid4()))

        # Act
        for_story = await service.list_pending(story_id=story.id)
        everywhere = await service.list_pending()

        # Assert
        assert [c.id for c in for_story] == [second.id]
        assert {c.id for c in everywhere} == {second.id, elsewhere.id}


class TestThreadOrder:
    """Tests for thread_order."""

    @staticmethod
    def _comment(story_id, created_at, parent=None):
        return Comment(
            id=CommentId(uuid4()),
            story_id=story_id,
            author_id=UserId(uuid4()),
            content=VALID_TEXT,
            parent_id=parent.id if parent else None,
            depth=parent.depth + 1 if parent else 0,
            status=CommentStatus.APPROVED,
            created_at=created_at,
        )

    def test_replies_follow_their_parent(self):
        """Replies should come right after their parent, siblings by age."""
        # Arrange
        story_id = StoryId(uuid4())
        start = datetime(2025, 1, 1)
        first = self._comment(story_id, start)
        second = self._comment(story_id, start + timedelta(minutes=1))
        late_reply = self._comment(story_id, start + timedelta(minutes=5), first)
        early_reply = self._comment(story_id, start + timedelta(minutes=2), first)
        nested = self._comment(story_id, start + timedelta(minutes=3), early_reply)

        # Act
        ordered = thread_order([second, late_reply, nested, first, early_reply])

        # Assert
        assert [c.id for c in ordered] == [
            first.id,
            early_reply.id,
            nested.id,
            late_reply.id,
            second.id,
        ]

    def test_orphaned_reply_is_top_level(self):
        """A reply whose parent is hidden should still be listed."""
        # Arrange
        story_id = StoryId(uuid4())
        start = datetime(2025, 1, 1)
        hidden_parent = self._comment(story_id, start)
        reply = self._comment(story_id, start + timedelta(minutes=1), hidden_parent)

        # Act
        ordered = thread_order([reply])

        # Assert
        assert ordered == [reply]
