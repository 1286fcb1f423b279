"""PostgreSQL repository implementations."""

from .comment import PostgresCommentRepository
from .engagement import (
    PostgresBookmarkRepository,
    PostgresRatingRepository,
    PostgresVoteRepository,
)
from .report import PostgresReportRepository
from .story import PostgresStoryRepository
from .tag import PostgresTagRepository

__all__ = [
    "PostgresBookmarkRepository",
    "PostgresCommentRepository",
    "PostgresRatingRepository",
    "PostgresReportRepository",
    "PostgresStoryRepository",
    "PostgresTagRepository",
    "PostgresVoteRepository",
]
