"""Story aggregate root.

Stories are submitted by a separate flow; this service only maintains
their engagement counters and tag assignment.
"""

from datetime import datetime

from pydantic import Field

from vibe.domain.model.common import DomainModel
from vibe.domain.value import StoryId, TagId, UserId


class Story(DomainModel):
    """Story aggregate root.

    Counters are denormalized from the vote, rating and comment records and
    are only ever changed in the same transaction as those records.
    """

    id: StoryId
    author_id: UserId
    title: str = Field(min_length=1, max_length=300)
    vote_count: int = Field(default=0, ge=0)
    rating_sum: int = Field(default=0, ge=0)
    rating_count: int = Field(default=0, ge=0)
    approved_comment_count: int = Field(default=0, ge=0)
    tag_ids: frozenset[TagId] = frozenset()
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def average_rating(self) -> float:
        """Mean star rating, 0 when unrated."""
        if self.rating_count == 0:
            return 0.0
        return self.rating_sum / self.rating_count
