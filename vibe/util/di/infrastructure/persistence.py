"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, alias, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from vibe.adapter.notifier import StoryChangeBroker, TransactionalChangeNotifier
from vibe.config import Settings
from vibe.domain.repository import (
    BookmarkRepository,
    CommentRepository,
    RatingRepository,
    ReportRepository,
    StoryRepository,
    TagRepository,
    VoteRepository,
)
from vibe.domain.service import ChangeNotifier
from vibe.persistence.database import create_engine, create_session_factory
from vibe.persistence.repository import (
    PostgresBookmarkRepository,
    PostgresCommentRepository,
    PostgresRatingRepository,
    PostgresReportRepository,
    PostgresStoryRepository,
    PostgresTagRepository,
    PostgresVoteRepository,
)
from vibe.util.di.base import ProviderBase
from vibe.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base.

    Implementations provide the repositories and the ChangeNotifier, since
    when a change may be published depends on how writes become durable.
    """

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    def get_transactional_notifier(
        self, broker: StoryChangeBroker
    ) -> TransactionalChangeNotifier:
        """Provide the per-request notification buffer."""
        return TransactionalChangeNotifier(broker)

    notifier = alias(source=TransactionalChangeNotifier, provides=ChangeNotifier)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        notifier: TransactionalChangeNotifier,
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is automatically committed at the end of the request
        if no exception occurred, or rolled back if an exception was raised.
        Buffered story changes are published only after the commit.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.info("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                notifier.discard()
                raise
            notifier.flush()

    @provide(scope=Scope.REQUEST)
    def get_story_repository(self, session: AsyncSession) -> StoryRepository:
        """Provide Story repository."""
        return PostgresStoryRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, session: AsyncSession) -> VoteRepository:
        """Provide Vote repository."""
        return PostgresVoteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_rating_repository(self, session: AsyncSession) -> RatingRepository:
        """Provide Rating repository."""
        return PostgresRatingRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_bookmark_repository(self, session: AsyncSession) -> BookmarkRepository:
        """Provide Bookmark repository."""
        return PostgresBookmarkRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_report_repository(self, session: AsyncSession) -> ReportRepository:
        """Provide Report repository."""
        return PostgresReportRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_tag_repository(self, session: AsyncSession) -> TagRepository:
        """Provide Tag repository."""
        return PostgresTagRepository(session)
