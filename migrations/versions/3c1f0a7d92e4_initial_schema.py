"""initial_schema

Create the engagement and moderation schema:
- Tags (case-insensitive unique names)
- Stories (denormalized engagement counters) and story_tags
- Votes, ratings and bookmarks (one row per story and user)
- Comments (threaded, moderated)
- Reports (at most one pending per reporter and story)

Revision ID: 3c1f0a7d92e4
Revises:
Create Date: 2026-10-17 10:12:44.318202

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0a7d92e4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def _story_fk() -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(["story_id"], ["stories.id"], ondelete="CASCADE")


def upgrade() -> None:
    """Upgrade schema."""
    # Enable required extensions
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE comment_status AS ENUM ('pending', 'approved', 'rejected');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE report_status AS ENUM ('pending', 'resolved', 'dismissed');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # TAGS table
    # ========================================================================
    op.create_table(
        "tags",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("background_color", sa.String(32), nullable=True),
        sa.Column("text_color", sa.String(32), nullable=True),
        sa.Column(
            "show_in_header", sa.Boolean(), nullable=False, server_default="false"
        ),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    # Case-insensitive uniqueness; conflict target for get-or-create
    op.execute("CREATE UNIQUE INDEX uq_tags_name_lower ON tags (lower(name))")

    # ========================================================================
    # STORIES table
    # ========================================================================
    op.create_table(
        "stories",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("vote_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("rating_sum", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("rating_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "approved_comment_count", sa.Integer(), nullable=False, server_default="0"
        ),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("vote_count >= 0", name="vote_count_non_negative"),
        sa.CheckConstraint("rating_sum >= 0", name="rating_sum_non_negative"),
        sa.CheckConstraint("rating_count >= 0", name="rating_count_non_negative"),
        sa.CheckConstraint(
            "approved_comment_count >= 0",
            name="approved_comment_count_non_negative",
        ),
    )
    op.create_index("idx_stories_author_id", "stories", ["author_id"])

    # ========================================================================
    # STORY_TAGS junction table
    # ========================================================================
    op.create_table(
        "story_tags",
        sa.Column("story_id", sa.UUID(), nullable=False),
        sa.Column("tag_id", sa.UUID(), nullable=False),
        _story_fk(),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("story_id", "tag_id", name="pk_story_tags"),
    )
    op.create_index("idx_story_tags_tag_id", "story_tags", ["tag_id"])

    # ========================================================================
    # VOTES, RATINGS, BOOKMARKS tables (one row per story and user)
    # ========================================================================
    op.create_table(
        "votes",
        sa.Column("story_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        _created_at(),
        _story_fk(),
        sa.PrimaryKeyConstraint("story_id", "user_id", name="pk_votes"),
    )
    op.create_index("idx_votes_user_id", "votes", ["user_id"])

    op.create_table(
        "ratings",
        sa.Column("story_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("value", sa.Integer(), nullable=False),
        _created_at(),
        _story_fk(),
        sa.PrimaryKeyConstraint("story_id", "user_id", name="pk_ratings"),
        sa.CheckConstraint("value BETWEEN 1 AND 5", name="rating_value_range"),
    )

    op.create_table(
        "bookmarks",
        sa.Column("story_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        _created_at(),
        _story_fk(),
        sa.PrimaryKeyConstraint("story_id", "user_id", name="pk_bookmarks"),
    )
    op.create_index("idx_bookmarks_user_id", "bookmarks", ["user_id", "created_at"])

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("story_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("depth", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "status",
            postgresql.ENUM(
                "pending",
                "approved",
                "rejected",
                name="comment_status",
                create_type=False,
            ),
            nullable=False,
            server_default="pending",
        ),
        _created_at(),
        sa.Column("moderated_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("moderated_by", sa.UUID(), nullable=True),
        _story_fk(),
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("depth >= 0", name="depth_non_negative"),
    )
    op.create_index(
        "idx_comments_story_status",
        "comments",
        ["story_id", "status", "created_at"],
    )
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])

    # ========================================================================
    # REPORTS table
    # ========================================================================
    op.create_table(
        "reports",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("story_id", sa.UUID(), nullable=False),
        sa.Column("reporter_id", sa.UUID(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(
                "pending",
                "resolved",
                "dismissed",
                name="report_status",
                create_type=False,
            ),
            nullable=False,
            server_default="pending",
        ),
        _created_at(),
        sa.Column("resolved_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("resolved_by", sa.UUID(), nullable=True),
        _story_fk(),
        sa.PrimaryKeyConstraint("id"),
    )
    # At most one open report per reporter per story
    op.create_index(
        "uq_reports_pending_per_reporter",
        "reports",
        ["story_id", "reporter_id"],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
    )
    op.create_index(
        "idx_reports_status_created_at", "reports", ["status", "created_at"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("reports")
    op.drop_table("comments")
    op.drop_table("bookmarks")
    op.drop_table("ratings")
    op.drop_table("votes")
    op.drop_table("story_tags")
    op.drop_table("stories")
    op.drop_table("tags")

    # Drop ENUM types
    op.execute("DROP TYPE IF EXISTS report_status")
    op.execute("DROP TYPE IF EXISTS comment_status")
