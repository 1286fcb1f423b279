"""Repository interfaces for Vibe domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from vibe.domain.repository.comment import CommentRepository
from vibe.domain.repository.engagement import (
    BookmarkRepository,
    RatingRepository,
    VoteRepository,
)
from vibe.domain.repository.report import ReportRepository
from vibe.domain.repository.story import StoryRepository
from vibe.domain.repository.tag import TagRepository

__all__ = [
    "StoryRepository",
    "VoteRepository",
    "RatingRepository",
    "BookmarkRepository",
    "CommentRepository",
    "ReportRepository",
    "TagRepository",
]
