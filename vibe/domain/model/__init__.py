"""Domain model entities for Vibe."""

from vibe.domain.model.bookmark import Bookmark
from vibe.domain.model.comment import Comment
from vibe.domain.model.rating import Rating
from vibe.domain.model.report import Report
from vibe.domain.model.story import Story
from vibe.domain.model.tag import Tag
from vibe.domain.model.vote import Vote

__all__ = [
    "Story",
    "Vote",
    "Rating",
    "Bookmark",
    "Comment",
    "Report",
    "Tag",
]
