"""Engagement use cases (votes, ratings, bookmarks)."""

from .get_user_state import (
    GetUserStateRequest,
    GetUserStateResponse,
    GetUserStateUseCase,
)
from .list_bookmarks import (
    BookmarkItem,
    ListBookmarksRequest,
    ListBookmarksResponse,
    ListBookmarksUseCase,
)
from .rate_story import RateStoryRequest, RateStoryResponse, RateStoryUseCase
from .toggle_bookmark import (
    ToggleBookmarkRequest,
    ToggleBookmarkResponse,
    ToggleBookmarkUseCase,
)
from .toggle_vote import ToggleVoteRequest, ToggleVoteResponse, ToggleVoteUseCase

__all__ = [
    "BookmarkItem",
    "GetUserStateRequest",
    "GetUserStateResponse",
    "GetUserStateUseCase",
    "ListBookmarksRequest",
    "ListBookmarksResponse",
    "ListBookmarksUseCase",
    "RateStoryRequest",
    "RateStoryResponse",
    "RateStoryUseCase",
    "ToggleBookmarkRequest",
    "ToggleBookmarkResponse",
    "ToggleBookmarkUseCase",
    "ToggleVoteRequest",
    "ToggleVoteResponse",
    "ToggleVoteUseCase",
]
