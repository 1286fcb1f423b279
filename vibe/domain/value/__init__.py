"""Domain value objects for Vibe."""

from vibe.domain.value.identifiers import (
    CommentId,
    ReportId,
    StoryId,
    TagId,
    UserId,
)
from vibe.domain.value.results import (
    BookmarkToggleResult,
    RatingResult,
    StoryChanged,
    StoryProjection,
    UserStoryState,
    VoteToggleResult,
)
from vibe.domain.value.types import (
    CommentStatus,
    ModerationDecision,
    ReportOutcome,
    ReportStatus,
    StoryField,
    TagName,
    VoteAction,
)

__all__ = [
    # Identifiers
    "UserId",
    "StoryId",
    "CommentId",
    "ReportId",
    "TagId",
    # Types
    "CommentStatus",
    "ModerationDecision",
    "ReportOutcome",
    "ReportStatus",
    "StoryField",
    "TagName",
    "VoteAction",
    # Results
    "BookmarkToggleResult",
    "RatingResult",
    "StoryChanged",
    "StoryProjection",
    "UserStoryState",
    "VoteToggleResult",
]
