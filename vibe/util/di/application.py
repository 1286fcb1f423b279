"""Application layer DI providers."""

from dishka import Scope, provide

from vibe.adapter.notifier import StoryChangeBroker
from vibe.application.usecase.comment import (
    AddCommentUseCase,
    GetCommentsUseCase,
    ListPendingCommentsUseCase,
    ModerateCommentUseCase,
)
from vibe.application.usecase.engagement import (
    GetUserStateUseCase,
    ListBookmarksUseCase,
    RateStoryUseCase,
    ToggleBookmarkUseCase,
    ToggleVoteUseCase,
)
from vibe.application.usecase.report import (
    CreateReportUseCase,
    ListReportsUseCase,
    ResolveReportUseCase,
)
from vibe.application.usecase.story import (
    GetStoryUseCase,
    UpdateStoryTagsUseCase,
    WatchStoryUseCase,
)
from vibe.application.usecase.tag import ListTagsUseCase, ResolveTagsUseCase
from vibe.config import NotificationSettings
from vibe.domain.service import (
    CommentService,
    EngagementService,
    ReportService,
    StoryService,
    TagService,
)
from vibe.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Engagement use cases
    @provide(scope=Scope.REQUEST)
    def get_toggle_vote_use_case(
        self, engagement_service: EngagementService
    ) -> ToggleVoteUseCase:
        """Provide toggle vote use case."""
        return ToggleVoteUseCase(engagement_service=engagement_service)

    @provide(scope=Scope.REQUEST)
    def get_rate_story_use_case(
        self, engagement_service: EngagementService
    ) -> RateStoryUseCase:
        """Provide rate story use case."""
        return RateStoryUseCase(engagement_service=engagement_service)

    @provide(scope=Scope.REQUEST)
    def get_toggle_bookmark_use_case(
        self, engagement_service: EngagementService
    ) -> ToggleBookmarkUseCase:
        """Provide toggle bookmark use case."""
        return ToggleBookmarkUseCase(engagement_service=engagement_service)

    @provide(scope=Scope.REQUEST)
    def get_user_state_use_case(
        self, engagement_service: EngagementService
    ) -> GetUserStateUseCase:
        """Provide get user state use case."""
        return GetUserStateUseCase(engagement_service=engagement_service)

    @provide(scope=Scope.REQUEST)
    def get_list_bookmarks_use_case(
        self, engagement_service: EngagementService
    ) -> ListBookmarksUseCase:
        """Provide list bookmarks use case."""
        return ListBookmarksUseCase(engagement_service=engagement_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_add_comment_use_case(
        self, comment_service: CommentService
    ) -> AddCommentUseCase:
        """Provide add comment use case."""
        return AddCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self, comment_service: CommentService
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_list_pending_comments_use_case(
        self, comment_service: CommentService
    ) -> ListPendingCommentsUseCase:
        """Provide moderation queue use case."""
        return ListPendingCommentsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_moderate_comment_use_case(
        self, comment_service: CommentService
    ) -> ModerateCommentUseCase:
        """Provide moderate comment use case."""
        return ModerateCommentUseCase(comment_service=comment_service)

    # Report use cases
    @provide(scope=Scope.REQUEST)
    def get_create_report_use_case(
        self, report_service: ReportService
    ) -> CreateReportUseCase:
        """Provide create report use case."""
        return CreateReportUseCase(report_service=report_service)

    @provide(scope=Scope.REQUEST)
    def get_resolve_report_use_case(
        self, report_service: ReportService
    ) -> ResolveReportUseCase:
        """Provide resolve report use case."""
        return ResolveReportUseCase(report_service=report_service)

    @provide(scope=Scope.REQUEST)
    def get_list_reports_use_case(
        self, report_service: ReportService
    ) -> ListReportsUseCase:
        """Provide list reports use case."""
        return ListReportsUseCase(report_service=report_service)

    # Tag use cases
    @provide(scope=Scope.REQUEST)
    def get_list_tags_use_case(self, tag_service: TagService) -> ListTagsUseCase:
        """Provide list tags use case."""
        return ListTagsUseCase(tag_service=tag_service)

    @provide(scope=Scope.REQUEST)
    def get_resolve_tags_use_case(self, tag_service: TagService) -> ResolveTagsUseCase:
        """Provide resolve tags use case."""
        return ResolveTagsUseCase(tag_service=tag_service)

    # Story use cases
    @provide(scope=Scope.REQUEST)
    def get_get_story_use_case(self, story_service: StoryService) -> GetStoryUseCase:
        """Provide get story use case."""
        return GetStoryUseCase(story_service=story_service)

    @provide(scope=Scope.REQUEST)
    def get_update_story_tags_use_case(
        self, story_service: StoryService
    ) -> UpdateStoryTagsUseCase:
        """Provide update story tags use case."""
        return UpdateStoryTagsUseCase(story_service=story_service)

    @provide(scope=Scope.REQUEST)
    def get_watch_story_use_case(
        self,
        story_service: StoryService,
        broker: StoryChangeBroker,
        settings: NotificationSettings,
    ) -> WatchStoryUseCase:
        """Provide story change long-poll use case."""
        return WatchStoryUseCase(
            story_service=story_service, broker=broker, settings=settings
        )
