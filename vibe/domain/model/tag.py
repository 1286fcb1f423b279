"""Tag entity for categorizing stories."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from vibe.domain.model.common import DomainModel
from vibe.domain.value import TagId, TagName


class Tag(DomainModel):
    """Tag entity for categorizing stories.

    Names are unique case-insensitively; the stored name keeps the casing
    it was first created with. Display attributes are carried but never
    interpreted here.
    """

    id: TagId
    name: TagName
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    show_in_header: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
