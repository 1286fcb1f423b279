"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Iterable
from uuid import UUID

from vibe.domain.model import Bookmark, Comment, Rating, Report, Story, Tag, Vote
from vibe.domain.value import (
    CommentId,
    CommentStatus,
    ReportId,
    ReportStatus,
    StoryId,
    TagId,
    TagName,
    UserId,
)


def _uuid(value: Any) -> UUID:
    """Normalize a UUID column value (drivers may return str)."""
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> UUID | None:
    return _uuid(value) if value is not None else None


def row_to_story(row: Dict[str, Any], tag_ids: Iterable[Any] = ()) -> Story:
    """Convert database row to Story domain model.

    Args:
        row: Database row as dict
        tag_ids: Tag IDs from the story_tags junction table

    Returns:
        Story domain model
    """
    return Story(
        id=StoryId(_uuid(row["id"])),
        author_id=UserId(_uuid(row["author_id"])),
        title=row["title"],
        vote_count=row["vote_count"],
        rating_sum=row["rating_sum"],
        rating_count=row["rating_count"],
        approved_comment_count=row["approved_comment_count"],
        tag_ids=frozenset(TagId(_uuid(t)) for t in tag_ids),
        created_at=row["created_at"],
    )


def story_to_dict(story: Story) -> Dict[str, Any]:
    """Convert Story domain model to a stories row (tags excluded)."""
    return story.model_dump(exclude={"tag_ids"})


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        story_id=StoryId(_uuid(row["story_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        created_at=row["created_at"],
    )


def row_to_rating(row: Dict[str, Any]) -> Rating:
    """Convert database row to Rating domain model."""
    return Rating(
        story_id=StoryId(_uuid(row["story_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        value=row["value"],
        created_at=row["created_at"],
    )


def row_to_bookmark(row: Dict[str, Any]) -> Bookmark:
    """Convert database row to Bookmark domain model."""
    return Bookmark(
        story_id=StoryId(_uuid(row["story_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        created_at=row["created_at"],
    )


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    parent_id = _optional_uuid(row.get("parent_id"))
    moderated_by = _optional_uuid(row.get("moderated_by"))
    return Comment(
        id=CommentId(_uuid(row["id"])),
        story_id=StoryId(_uuid(row["story_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        content=row["content"],
        parent_id=CommentId(parent_id) if parent_id else None,
        depth=row["depth"],
        status=CommentStatus(row["status"]),
        created_at=row["created_at"],
        moderated_at=row.get("moderated_at"),
        moderated_by=UserId(moderated_by) if moderated_by else None,
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    data = comment.model_dump()
    data["status"] = comment.status.value
    return data


def row_to_report(row: Dict[str, Any]) -> Report:
    """Convert database row to Report domain model."""
    resolved_by = _optional_uuid(row.get("resolved_by"))
    return Report(
        id=ReportId(_uuid(row["id"])),
        story_id=StoryId(_uuid(row["story_id"])),
        reporter_id=UserId(_uuid(row["reporter_id"])),
        reason=row["reason"],
        status=ReportStatus(row["status"]),
        created_at=row["created_at"],
        resolved_at=row.get("resolved_at"),
        resolved_by=UserId(resolved_by) if resolved_by else None,
    )


def report_to_dict(report: Report) -> Dict[str, Any]:
    """Convert Report domain model to database dict."""
    data = report.model_dump()
    data["status"] = report.status.value
    return data


def row_to_tag(row: Dict[str, Any]) -> Tag:
    """Convert database row to Tag domain model."""
    return Tag(
        id=TagId(_uuid(row["id"])),
        name=TagName(row["name"]),
        background_color=row.get("background_color"),
        text_color=row.get("text_color"),
        show_in_header=row.get("show_in_header", False),
        created_at=row["created_at"],
    )


def tag_to_dict(tag: Tag) -> Dict[str, Any]:
    """Convert Tag domain model to database dict."""
    data = tag.model_dump()
    data["name"] = tag.name.root
    return data
