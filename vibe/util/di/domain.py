"""Domain layer DI providers."""

from dishka import Scope, provide

from vibe.config import AuthSettings, EngagementSettings
from vibe.domain.repository import (
    BookmarkRepository,
    CommentRepository,
    RatingRepository,
    ReportRepository,
    StoryRepository,
    TagRepository,
    VoteRepository,
)
from vibe.domain.service import (
    ChangeNotifier,
    CommentService,
    EngagementService,
    JWTService,
    ReportService,
    StoryService,
    TagService,
)
from vibe.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_engagement_service(
        self,
        story_repository: StoryRepository,
        vote_repository: VoteRepository,
        rating_repository: RatingRepository,
        bookmark_repository: BookmarkRepository,
        notifier: ChangeNotifier,
        settings: EngagementSettings,
    ) -> EngagementService:
        """Provide vote/rating/bookmark domain service."""
        return EngagementService(
            story_repository=story_repository,
            vote_repository=vote_repository,
            rating_repository=rating_repository,
            bookmark_repository=bookmark_repository,
            notifier=notifier,
            settings=settings,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        story_repository: StoryRepository,
        notifier: ChangeNotifier,
        settings: EngagementSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            story_repository=story_repository,
            notifier=notifier,
            settings=settings,
        )

    @provide
    def get_report_service(
        self,
        report_repository: ReportRepository,
        story_repository: StoryRepository,
        settings: EngagementSettings,
    ) -> ReportService:
        """Provide report domain service."""
        return ReportService(
            report_repository=report_repository,
            story_repository=story_repository,
            settings=settings,
        )

    @provide
    def get_tag_service(
        self, tag_repository: TagRepository, settings: EngagementSettings
    ) -> TagService:
        """Provide tag domain service."""
        return TagService(tag_repository=tag_repository, settings=settings)

    @provide
    def get_story_service(
        self,
        story_repository: StoryRepository,
        tag_service: TagService,
        notifier: ChangeNotifier,
    ) -> StoryService:
        """Provide story domain service."""
        return StoryService(
            story_repository=story_repository,
            tag_service=tag_service,
            notifier=notifier,
        )
