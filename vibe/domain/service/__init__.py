"""Domain services."""

from .base import Service
from .comment_service import CommentService, thread_order
from .engagement_service import EngagementService
from .jwt_service import JWTService
from .notifier import ChangeNotifier
from .report_service import ReportService
from .story_service import StoryService
from .tag_service import TagService

__all__ = [
    "ChangeNotifier",
    "CommentService",
    "EngagementService",
    "JWTService",
    "ReportService",
    "Service",
    "StoryService",
    "TagService",
    "thread_order",
]
