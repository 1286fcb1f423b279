"""Vote entity.

Votes are upvote-only and keyed by (story, user): a user either has a
vote on a story or does not.
"""

from datetime import datetime

from pydantic import Field

from vibe.domain.model.common import DomainModel
from vibe.domain.value import StoryId, UserId


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per story (enforced by the primary key)
    - Created and deleted by toggling, never updated
    """

    story_id: StoryId
    user_id: UserId
    created_at: datetime = Field(default_factory=datetime.now)
