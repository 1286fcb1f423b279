"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .engagement import (
    InMemoryBookmarkRepository,
    InMemoryRatingRepository,
    InMemoryVoteRepository,
)
from .report import InMemoryReportRepository
from .story import InMemoryStoryRepository
from .tag import InMemoryTagRepository

__all__ = [
    "InMemoryBookmarkRepository",
    "InMemoryCommentRepository",
    "InMemoryRatingRepository",
    "InMemoryReportRepository",
    "InMemoryStoryRepository",
    "InMemoryTagRepository",
    "InMemoryVoteRepository",
]
