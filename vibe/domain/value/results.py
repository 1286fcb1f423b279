"""Result value objects returned by engagement operations and read models."""

from typing import Optional

from pydantic import Field

from vibe.domain.value.common import ValueObject
from vibe.domain.value.identifiers import StoryId, TagId
from vibe.domain.value.types import StoryField, VoteAction


class VoteToggleResult(ValueObject):
    """Outcome of a vote toggle and the story's vote count after it."""

    action: VoteAction
    new_count: int = Field(ge=0)


class RatingResult(ValueObject):
    """Acknowledgement of an accepted rating."""

    accepted: bool = True


class BookmarkToggleResult(ValueObject):
    """Whether the story is bookmarked after the toggle."""

    bookmarked: bool


class UserStoryState(ValueObject):
    """A single user's engagement with a story."""

    voted: bool
    rating: Optional[int] = None
    bookmarked: bool


class StoryProjection(ValueObject):
    """Read-side aggregate of a story's public engagement."""

    story_id: StoryId
    vote_count: int
    average_rating: float
    approved_comment_count: int
    tag_ids: frozenset[TagId]


class StoryChanged(ValueObject):
    """Notification that projected fields of a story changed.

    ``version`` is assigned by the broker when the event is published.
    """

    story_id: StoryId
    fields: frozenset[StoryField]
    version: int = 0
