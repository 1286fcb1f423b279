"""In-memory vote, rating and bookmark repositories for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from vibe.domain.model import Bookmark, Rating, Vote
from vibe.domain.repository import (
    BookmarkRepository,
    RatingRepository,
    VoteRepository,
)
from vibe.domain.value import StoryId, UserId


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: dict[tuple[StoryId, UserId], Vote] = {}

    async def find(self, story_id: StoryId, user_id: UserId) -> Optional[Vote]:
        """Find a user's vote on a story."""
        return self._votes.get((story_id, user_id))

    async def save(self, vote: Vote) -> Vote:
        """Save a vote.

        Raises:
            IntegrityError: If vote already exists (duplicate)
        """
        key = (vote.story_id, vote.user_id)
        if key in self._votes:
            raise IntegrityError("Duplicate vote", None, Exception())

        self._votes[key] = vote
        return vote

    async def delete(self, story_id: StoryId, user_id: UserId) -> bool:
        """Delete a user's vote on a story."""
        return self._votes.pop((story_id, user_id), None) is not None


class InMemoryRatingRepository(RatingRepository):
    """In-memory implementation of RatingRepository for testing."""

    def __init__(self) -> None:
        self._ratings: dict[tuple[StoryId, UserId], Rating] = {}

    async def find(self, story_id: StoryId, user_id: UserId) -> Optional[Rating]:
        """Find a user's rating of a story."""
        return self._ratings.get((story_id, user_id))

    async def save(self, rating: Rating) -> Rating:
        """Save a rating.

        Raises:
            IntegrityError: If the user already rated the story
        """
        key = (rating.story_id, rating.user_id)
        if key in self._ratings:
            raise IntegrityError("Duplicate rating", None, Exception())

        self._ratings[key] = rating
        return rating


class InMemoryBookmarkRepository(BookmarkRepository):
    """In-memory implementation of BookmarkRepository for testing."""

    def __init__(self) -> None:
        self._bookmarks: dict[tuple[StoryId, UserId], Bookmark] = {}

    async def find(self, story_id: StoryId, user_id: UserId) -> Optional[Bookmark]:
        """Find a user's bookmark of a story."""
        return self._bookmarks.get((story_id, user_id))

    async def find_by_user(self, user_id: UserId) -> list[Bookmark]:
        """Find a user's bookmarks, newest first."""
        bookmarks = [b for b in self._bookmarks.values() if b.user_id == user_id]
        bookmarks.sort(key=lambda b: b.created_at, reverse=True)
        return bookmarks

    async def save(self, bookmark: Bookmark) -> Bookmark:
        """Save a bookmark."""
        key = (bookmark.story_id, bookmark.user_id)
        if key in self._bookmarks:
            raise IntegrityError("Duplicate bookmark", None, Exception())

        self._bookmarks[key] = bookmark
        return bookmark

    async def delete(self, story_id: StoryId, user_id: UserId) -> bool:
        """Delete a bookmark."""
        return self._bookmarks.pop((story_id, user_id), None) is not None
