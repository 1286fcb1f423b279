"""Domain value objects for Vibe.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum

from pydantic import field_validator

from vibe.domain.value.common import RootValueObject


class VoteAction(str, Enum):
    """Outcome of a vote toggle."""

    ADDED = "added"
    REMOVED = "removed"


class CommentStatus(str, Enum):
    """Moderation state of a comment.

    pending -> approved and pending -> rejected are the only transitions.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ModerationDecision(str, Enum):
    """Decision a moderator takes on a pending comment."""

    APPROVE = "approve"
    REJECT = "reject"

    @property
    def resulting_status(self) -> CommentStatus:
        """Comment status this decision moves a pending comment to."""
        if self is ModerationDecision.APPROVE:
            return CommentStatus.APPROVED
        return CommentStatus.REJECTED


class ReportStatus(str, Enum):
    """Lifecycle state of an abuse report."""

    PENDING = "pending"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class ReportOutcome(str, Enum):
    """Terminal outcome chosen by a moderator for a pending report."""

    RESOLVED = "resolved"
    DISMISSED = "dismissed"

    @property
    def resulting_status(self) -> ReportStatus:
        """Report status this outcome moves a pending report to."""
        return ReportStatus(self.value)


class StoryField(str, Enum):
    """Projected story fields that change notifications refer to."""

    VOTE_COUNT = "vote_count"
    AVERAGE_RATING = "average_rating"
    APPROVED_COMMENT_COUNT = "approved_comment_count"
    TAG_IDS = "tag_ids"


class TagName(RootValueObject[str]):
    """Display name of a tag.

    Surrounding whitespace is stripped; original casing is preserved.
    Two names are the same tag when their ``key`` values match.
    Examples: 'AI', 'Games', 'Developer Tools'
    """

    @field_validator("root")
    @classmethod
    def validate_tag_name(cls, v: str) -> str:
        """Validate tag name is not blank."""
        v = v.strip()
        if not v:
            raise ValueError("Tag name must not be blank")
        return v

    @property
    def key(self) -> str:
        """Case-insensitive lookup key."""
        return self.root.lower()
