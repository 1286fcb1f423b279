"""Comment domain service."""

from collections import defaultdict
from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire

from vibe.config import EngagementSettings
from vibe.domain.error import NotFoundError, ValidationError
from vibe.domain.model.comment import Comment
from vibe.domain.repository import CommentRepository, StoryRepository
from vibe.domain.value import (
    CommentId,
    CommentStatus,
    ModerationDecision,
    StoryField,
    StoryId,
    UserId,
)

from .base import Service
from .notifier import ChangeNotifier


def thread_order(comments: list[Comment]) -> list[Comment]:
    """Arrange comments depth-first so every parent precedes its replies.

    Siblings are ordered by creation time. A comment whose parent is not in
    ``comments`` is treated as top-level.
    """
    present = {c.id for c in comments}
    children: dict[Optional[CommentId], list[Comment]] = defaultdict(list)
    for comment in sorted(comments, key=lambda c: (c.created_at, str(c.id))):
        parent = comment.parent_id if comment.parent_id in present else None
        children[parent].append(comment)

    ordered: list[Comment] = []
    stack = list(reversed(children[None]))
    while stack:
        comment = stack.pop()
        ordered.append(comment)
        stack.extend(reversed(children[comment.id]))
    return ordered


class CommentService(Service):
    """Domain service for comment creation and moderation."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        story_repository: StoryRepository,
        notifier: ChangeNotifier,
        settings: EngagementSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            story_repository: Story repository
            notifier: Story change notifier
            settings: Engagement limits
        """
        self.comment_repository = comment_repository
        self.story_repository = story_repository
        self.notifier = notifier
        self.settings = settings

    async def add_comment(
        self,
        story_id: StoryId,
        author_id: UserId,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a pending comment on a story or a reply to another comment.

        Args:
            story_id: Story ID
            author_id: Author user ID
            content: Comment text (surrounding whitespace is stripped)
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment, held for moderation

        Raises:
            ValidationError: If content is too short or too long
            NotFoundError: If the story or parent comment does not exist,
                or the parent belongs to another story
        """
        with logfire.span(
            "comment_service.add_comment",
            story_id=str(story_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            content = content.strip()
            if len(content) < self.settings.comment_min_length:
                raise ValidationError(
                    f"Comment must be at least "
                    f"{self.settings.comment_min_length} characters long"
                )
            if len(content) > self.settings.comment_max_length:
                raise ValidationError(
                    f"Comment must be at most "
                    f"{self.settings.comment_max_length} characters long"
                )

            if not await self.story_repository.find_by_id(story_id):
                logfire.warn("Comment on non-existent story", story_id=str(story_id))
                raise NotFoundError("Story", str(story_id))

            # If replying, verify parent exists and calculate depth
            depth = 0
            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.error(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        story_id=str(story_id),
                    )
                    raise NotFoundError("Comment", str(parent_id))
                if parent.story_id != story_id:
                    logfire.error(
                        "Parent comment does not belong to story",
                        parent_id=str(parent_id),
                        parent_story_id=str(parent.story_id),
                        target_story_id=str(story_id),
                    )
                    raise NotFoundError("Comment", str(parent_id))
                depth = parent.depth + 1

            comment = Comment(
                id=CommentId(uuid4()),
                story_id=story_id,
                author_id=author_id,
                content=content,
                parent_id=parent_id,
                depth=depth,
                status=CommentStatus.PENDING,
                created_at=datetime.now(),
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                story_id=str(story_id),
                depth=depth,
            )
            return saved

    async def list_approved(self, story_id: StoryId) -> list[Comment]:
        """Get the approved comments on a story in thread order.

        Args:
            story_id: Story ID

        Returns:
            Approved comments, parents before replies
        """
        with logfire.span("comment_service.list_approved", story_id=str(story_id)):
            comments = await self.comment_repository.find_by_story(
                story_id, status=CommentStatus.APPROVED
            )
            ordered = thread_order(comments)
            logfire.info(
                "Approved comments retrieved",
                story_id=str(story_id),
                count=len(ordered),
            )
            return ordered

    async def list_pending(
        self, story_id: StoryId | None = None, limit: int = 100
    ) -> list[Comment]:
        """Get the moderation queue, oldest first.

        Args:
            story_id: Restrict to one story (None for all stories)
            limit: Maximum number of comments to return
        """
        with logfire.span(
            "comment_service.list_pending",
            story_id=str(story_id) if story_id else None,
            limit=limit,
        ):
            return await self.comment_repository.find_by_status(
                CommentStatus.PENDING, story_id=story_id, limit=limit
            )

    async def moderate(
        self,
        comment_id: CommentId,
        decision: ModerationDecision,
        moderator_id: UserId,
    ) -> Comment:
        """Approve or reject a pending comment.

        Approval increments the story's approved comment count in the same
        transaction. The caller is responsible for checking that
        ``moderator_id`` holds the moderator role.

        Args:
            comment_id: Comment ID
            decision: Approve or reject
            moderator_id: Acting moderator

        Returns:
            The moderated comment

        Raises:
            NotFoundError: If the comment does not exist
            StateConflictError: If the comment was already moderated
        """
        with logfire.span(
            "comment_service.moderate",
            comment_id=str(comment_id),
            decision=decision.value,
            moderator_id=str(moderator_id),
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn(
                    "Moderation of non-existent comment", comment_id=str(comment_id)
                )
                raise NotFoundError("Comment", str(comment_id))

            async with self.story_repository.locked(comment.story_id):
                # Re-read under the lock; another moderator may have won the race
                current = await self.comment_repository.find_by_id(comment_id)
                if not current:
                    raise NotFoundError("Comment", str(comment_id))

                moderated = current.moderate(decision, moderator_id, datetime.now())
                await self.comment_repository.update_status(moderated)

                if decision is ModerationDecision.APPROVE:
                    await self.story_repository.adjust_counters(
                        comment.story_id, approved_comment_delta=1
                    )

            if decision is ModerationDecision.APPROVE:
                self.notifier.notify(
                    comment.story_id, [StoryField.APPROVED_COMMENT_COUNT]
                )

            logfire.info(
                "Comment moderated",
                comment_id=str(comment_id),
                story_id=str(comment.story_id),
                status=moderated.status.value,
            )
            return moderated
