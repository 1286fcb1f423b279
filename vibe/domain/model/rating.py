"""Rating entity."""

from datetime import datetime

from pydantic import Field

from vibe.domain.model.common import DomainModel
from vibe.domain.value import StoryId, UserId


class Rating(DomainModel):
    """A one-time 1-5 star rating.

    There is no update or delete path: once written a rating is permanent.
    """

    story_id: StoryId
    user_id: UserId
    value: int = Field(ge=1, le=5)
    created_at: datetime = Field(default_factory=datetime.now)
