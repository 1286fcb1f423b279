"""Engagement domain service: votes, ratings and bookmarks."""

from datetime import datetime

import logfire
from sqlalchemy.exc import IntegrityError

from vibe.config import EngagementSettings
from vibe.domain.error import DuplicateActionError, NotFoundError, ValidationError
from vibe.domain.model import Bookmark, Rating, Vote
from vibe.domain.repository import (
    BookmarkRepository,
    RatingRepository,
    StoryRepository,
    VoteRepository,
)
from vibe.domain.value import (
    BookmarkToggleResult,
    RatingResult,
    StoryField,
    StoryId,
    UserId,
    UserStoryState,
    VoteAction,
    VoteToggleResult,
)

from .base import Service
from .notifier import ChangeNotifier


class EngagementService(Service):
    """Domain service for per-user engagement with stories.

    Every mutation runs inside the story's critical section so the
    existence check, the record write and the counter update are one
    atomic unit.
    """

    def __init__(
        self,
        story_repository: StoryRepository,
        vote_repository: VoteRepository,
        rating_repository: RatingRepository,
        bookmark_repository: BookmarkRepository,
        notifier: ChangeNotifier,
        settings: EngagementSettings,
    ) -> None:
        """Initialize engagement service.

        Args:
            story_repository: Story repository
            vote_repository: Vote repository
            rating_repository: Rating repository
            bookmark_repository: Bookmark repository
            notifier: Story change notifier
            settings: Engagement limits
        """
        self.story_repository = story_repository
        self.vote_repository = vote_repository
        self.rating_repository = rating_repository
        self.bookmark_repository = bookmark_repository
        self.notifier = notifier
        self.settings = settings

    async def toggle_vote(self, story_id: StoryId, user_id: UserId) -> VoteToggleResult:
        """Add the user's vote if absent, remove it if present.

        Args:
            story_id: Story ID
            user_id: User ID

        Returns:
            Action taken and the story's new vote count

        Raises:
            NotFoundError: If the story does not exist
        """
        with logfire.span(
            "engagement_service.toggle_vote",
            story_id=str(story_id),
            user_id=str(user_id),
        ):
            async with self.story_repository.locked(story_id) as story:
                if story is None:
                    logfire.warn("Vote on non-existent story", story_id=str(story_id))
                    raise NotFoundError("Story", str(story_id))

                removed = await self.vote_repository.delete(story_id, user_id)
                if removed:
                    action = VoteAction.REMOVED
                    updated = await self.story_repository.adjust_counters(
                        story_id, vote_delta=-1
                    )
                else:
                    action = VoteAction.ADDED
                    await self.vote_repository.save(
                        Vote(
                            story_id=story_id,
                            user_id=user_id,
                            created_at=datetime.now(),
                        )
                    )
                    updated = await self.story_repository.adjust_counters(
                        story_id, vote_delta=1
                    )

            self.notifier.notify(story_id, [StoryField.VOTE_COUNT])
            logfire.info(
                "Vote toggled",
                story_id=str(story_id),
                user_id=str(user_id),
                action=action.value,
                vote_count=updated.vote_count,
            )
            return VoteToggleResult(action=action, new_count=updated.vote_count)

    async def rate(
        self, story_id: StoryId, user_id: UserId, value: int
    ) -> RatingResult:
        """Rate a story once.

        Args:
            story_id: Story ID
            user_id: User ID
            value: Star rating

        Returns:
            Acceptance acknowledgement

        Raises:
            ValidationError: If value is outside the allowed range
            NotFoundError: If the story does not exist
            DuplicateActionError: If the user already rated the story
        """
        with logfire.span(
            "engagement_service.rate",
            story_id=str(story_id),
            user_id=str(user_id),
            value=value,
        ):
            low, high = self.settings.rating_min, self.settings.rating_max
            if not low <= value <= high:
                raise ValidationError(f"Rating must be between {low} and {high}")

            async with self.story_repository.locked(story_id) as story:
                if story is None:
                    logfire.warn("Rating on non-existent story", story_id=str(story_id))
                    raise NotFoundError("Story", str(story_id))

                if await self.rating_repository.find(story_id, user_id):
                    logfire.warn(
                        "Duplicate rating attempt",
                        story_id=str(story_id),
                        user_id=str(user_id),
                    )
                    raise DuplicateActionError("You have already rated this story")

                rating = Rating(
                    story_id=story_id,
                    user_id=user_id,
                    value=value,
                    created_at=datetime.now(),
                )
                try:
                    await self.rating_repository.save(rating)
                except IntegrityError:
                    logfire.warn(
                        "Duplicate rating rejected by constraint",
                        story_id=str(story_id),
                        user_id=str(user_id),
                    )
                    raise DuplicateActionError("You have already rated this story")

                await self.story_repository.adjust_counters(
                    story_id, rating_sum_delta=value, rating_count_delta=1
                )

            self.notifier.notify(story_id, [StoryField.AVERAGE_RATING])
            logfire.info("Story rated", story_id=str(story_id), value=value)
            return RatingResult(accepted=True)

    async def toggle_bookmark(
        self, story_id: StoryId, user_id: UserId
    ) -> BookmarkToggleResult:
        """Bookmark the story if not bookmarked, otherwise remove the bookmark.

        Raises:
            NotFoundError: If the story does not exist
        """
        with logfire.span(
            "engagement_service.toggle_bookmark",
            story_id=str(story_id),
            user_id=str(user_id),
        ):
            async with self.story_repository.locked(story_id) as story:
                if story is None:
                    raise NotFoundError("Story", str(story_id))

                removed = await self.bookmark_repository.delete(story_id, user_id)
                if not removed:
                    await self.bookmark_repository.save(
                        Bookmark(
                            story_id=story_id,
                            user_id=user_id,
                            created_at=datetime.now(),
                        )
                    )

            logfire.info(
                "Bookmark toggled",
                story_id=str(story_id),
                user_id=str(user_id),
                bookmarked=not removed,
            )
            return BookmarkToggleResult(bookmarked=not removed)

    async def get_user_state(
        self, story_id: StoryId, user_id: UserId
    ) -> UserStoryState:
        """Get the user's vote, rating and bookmark on a story.

        Raises:
            NotFoundError: If the story does not exist
        """
        with logfire.span(
            "engagement_service.get_user_state",
            story_id=str(story_id),
            user_id=str(user_id),
        ):
            if not await self.story_repository.find_by_id(story_id):
                raise NotFoundError("Story", str(story_id))

            vote = await self.vote_repository.find(story_id, user_id)
            rating = await self.rating_repository.find(story_id, user_id)
            bookmark = await self.bookmark_repository.find(story_id, user_id)
            return UserStoryState(
                voted=vote is not None,
                rating=rating.value if rating else None,
                bookmarked=bookmark is not None,
            )

    async def list_bookmarks(self, user_id: UserId) -> list[Bookmark]:
        """Get the user's bookmarks, newest first."""
        with logfire.span("engagement_service.list_bookmarks", user_id=str(user_id)):
            bookmarks = await self.bookmark_repository.find_by_user(user_id)
            logfire.info(
                "Bookmarks retrieved", user_id=str(user_id), count=len(bookmarks)
            )
            return bookmarks
