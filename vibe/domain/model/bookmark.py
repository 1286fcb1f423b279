"""Bookmark entity."""

from datetime import datetime

from pydantic import Field

from vibe.domain.model.common import DomainModel
from vibe.domain.value import StoryId, UserId


class Bookmark(DomainModel):
    """Private bookmark of a story. Not counted on the story."""

    story_id: StoryId
    user_id: UserId
    created_at: datetime = Field(default_factory=datetime.now)
