"""PostgreSQL implementation of Tag repository."""

from datetime import datetime
from typing import Iterable
from uuid import uuid4

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from vibe.domain.model.tag import Tag
from vibe.domain.repository.tag import TagRepository
from vibe.domain.value import TagId, TagName
from vibe.persistence.mappers import row_to_tag, tag_to_dict
from vibe.persistence.tables import tags_table


class PostgresTagRepository(TagRepository):
    """PostgreSQL implementation of TagRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def find_by_ids(self, tag_ids: Iterable[TagId]) -> list[Tag]:
        """Find tags by ID in a single query."""
        ids = list(tag_ids)
        if not ids:
            return []

        stmt = select(tags_table).where(tags_table.c.id.in_(ids))
        result = await self.session.execute(stmt)
        return [row_to_tag(row._asdict()) for row in result.fetchall()]

    async def get_or_create(self, name: TagName) -> Tag:
        """Insert the tag unless a case-insensitive match exists, then read it.

        ``ON CONFLICT DO NOTHING`` against the ``lower(name)`` unique index
        makes concurrent creation of the same name converge on one row.
        """
        candidate = Tag(id=TagId(uuid4()), name=name, created_at=datetime.now())
        stmt = (
            insert(tags_table)
            .values(**tag_to_dict(candidate))
            .on_conflict_do_nothing(index_elements=[func.lower(tags_table.c.name)])
        )
        await self.session.execute(stmt)
        await self.session.flush()

        result = await self.session.execute(
            select(tags_table).where(func.lower(tags_table.c.name) == name.key)
        )
        return row_to_tag(result.one()._asdict())

    async def find_all(self, limit: int = 100, order_by: str = "name") -> list[Tag]:
        """Find all tags."""
        stmt = select(tags_table).limit(limit)

        # Order by requested field
        if order_by == "created_at":
            stmt = stmt.order_by(tags_table.c.created_at.desc())
        else:
            stmt = stmt.order_by(func.lower(tags_table.c.name))

        result = await self.session.execute(stmt)
        return [row_to_tag(row._asdict()) for row in result.fetchall()]
