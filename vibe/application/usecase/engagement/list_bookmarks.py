"""List bookmarks use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from vibe.domain.service import EngagementService
from vibe.domain.value import UserId


class BookmarkItem(BaseModel):
    """Bookmark item in response."""

    story_id: str
    created_at: datetime


class ListBookmarksRequest(BaseModel):
    """List bookmarks request."""

    user_id: str  # User ID from authenticated user


class ListBookmarksResponse(BaseModel):
    """List bookmarks response."""

    bookmarks: list[BookmarkItem]
    total: int


class ListBookmarksUseCase:
    """Use case for listing the user's reading list, newest first."""

    def __init__(self, engagement_service: EngagementService) -> None:
        self.engagement_service = engagement_service

    async def execute(self, request: ListBookmarksRequest) -> ListBookmarksResponse:
        """Execute list bookmarks flow."""
        with logfire.span("list_bookmarks.execute", user_id=request.user_id):
            bookmarks = await self.engagement_service.list_bookmarks(
                UserId(UUID(request.user_id))
            )
            items = [
                BookmarkItem(story_id=str(b.story_id), created_at=b.created_at)
                for b in bookmarks
            ]
            return ListBookmarksResponse(bookmarks=items, total=len(items))
