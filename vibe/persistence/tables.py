"""SQLAlchemy table definitions for Vibe.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
    func,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# TAGS TABLE
# ============================================================================
tags_table = Table(
    "tags",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(50), nullable=False),  # Casing of first creation
    Column("background_color", String(32), nullable=True),
    Column("text_color", String(32), nullable=True),
    Column("show_in_header", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# Case-insensitive uniqueness; also the conflict target for get-or-create
Index("uq_tags_name_lower", func.lower(tags_table.c.name), unique=True)

# ============================================================================
# STORIES TABLE (engagement counters only; submission is external)
# ============================================================================
stories_table = Table(
    "stories",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("author_id", UUID, nullable=False),
    Column("title", String(300), nullable=False),
    Column("vote_count", Integer, nullable=False, server_default="0"),
    Column("rating_sum", Integer, nullable=False, server_default="0"),
    Column("rating_count", Integer, nullable=False, server_default="0"),
    Column("approved_comment_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("vote_count >= 0", name="vote_count_non_negative"),
    CheckConstraint("rating_sum >= 0", name="rating_sum_non_negative"),
    CheckConstraint("rating_count >= 0", name="rating_count_non_negative"),
    CheckConstraint(
        "approved_comment_count >= 0", name="approved_comment_count_non_negative"
    ),
)

Index("idx_stories_author_id", stories_table.c.author_id)

# ============================================================================
# STORY_TAGS TABLE (junction table for many-to-many relationship)
# ============================================================================
story_tags_table = Table(
    "story_tags",
    metadata,
    Column(
        "story_id", UUID, ForeignKey("stories.id", ondelete="CASCADE"), nullable=False
    ),
    Column("tag_id", UUID, ForeignKey("tags.id", ondelete="RESTRICT"), nullable=False),
    PrimaryKeyConstraint("story_id", "tag_id", name="pk_story_tags"),
)

Index("idx_story_tags_tag_id", story_tags_table.c.tag_id)

# ============================================================================
# VOTES TABLE
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column(
        "story_id", UUID, ForeignKey("stories.id", ondelete="CASCADE"), nullable=False
    ),
    Column("user_id", UUID, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("story_id", "user_id", name="pk_votes"),
)

Index("idx_votes_user_id", votes_table.c.user_id)

# ============================================================================
# RATINGS TABLE (create-only)
# ============================================================================
ratings_table = Table(
    "ratings",
    metadata,
    Column(
        "story_id", UUID, ForeignKey("stories.id", ondelete="CASCADE"), nullable=False
    ),
    Column("user_id", UUID, nullable=False),
    Column("value", Integer, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("story_id", "user_id", name="pk_ratings"),
    CheckConstraint("value BETWEEN 1 AND 5", name="rating_value_range"),
)

# ============================================================================
# BOOKMARKS TABLE
# ============================================================================
bookmarks_table = Table(
    "bookmarks",
    metadata,
    Column(
        "story_id", UUID, ForeignKey("stories.id", ondelete="CASCADE"), nullable=False
    ),
    Column("user_id", UUID, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("story_id", "user_id", name="pk_bookmarks"),
)

Index("idx_bookmarks_user_id", bookmarks_table.c.user_id, bookmarks_table.c.created_at)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "story_id", UUID, ForeignKey("stories.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column("author_id", UUID, nullable=False),
    Column("content", Text, nullable=False),
    Column("depth", Integer, nullable=False, server_default="0"),
    Column(
        "status",
        Enum(
            "pending",
            "approved",
            "rejected",
            name="comment_status",
            create_type=False,
        ),
        nullable=False,
        server_default="pending",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("moderated_at", TIMESTAMP(timezone=True), nullable=True),
    Column("moderated_by", UUID, nullable=True),
    CheckConstraint("depth >= 0", name="depth_non_negative"),
)

Index(
    "idx_comments_story_status",
    comments_table.c.story_id,
    comments_table.c.status,
    comments_table.c.created_at,
)
Index("idx_comments_parent_id", comments_table.c.parent_id)

# ============================================================================
# REPORTS TABLE
# ============================================================================
reports_table = Table(
    "reports",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "story_id", UUID, ForeignKey("stories.id", ondelete="CASCADE"), nullable=False
    ),
    Column("reporter_id", UUID, nullable=False),
    Column("reason", Text, nullable=False),
    Column(
        "status",
        Enum(
            "pending",
            "resolved",
            "dismissed",
            name="report_status",
            create_type=False,
        ),
        nullable=False,
        server_default="pending",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("resolved_at", TIMESTAMP(timezone=True), nullable=True),
    Column("resolved_by", UUID, nullable=True),
)

# At most one open report per reporter per story
Index(
    "uq_reports_pending_per_reporter",
    reports_table.c.story_id,
    reports_table.c.reporter_id,
    unique=True,
    postgresql_where=text("status = 'pending'"),
)
Index(
    "idx_reports_status_created_at",
    reports_table.c.status,
    reports_table.c.created_at,
)
