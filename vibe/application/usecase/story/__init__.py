"""Story use cases."""

from .get_story import GetStoryRequest, GetStoryResponse, GetStoryUseCase
from .update_story_tags import (
    UpdateStoryTagsRequest,
    UpdateStoryTagsResponse,
    UpdateStoryTagsUseCase,
)
from .watch_story import (
    WatchStoryRequest,
    WatchStoryResponse,
    WatchStoryUseCase,
)

__all__ = [
    "GetStoryRequest",
    "GetStoryResponse",
    "GetStoryUseCase",
    "UpdateStoryTagsRequest",
    "UpdateStoryTagsResponse",
    "UpdateStoryTagsUseCase",
    "WatchStoryRequest",
    "WatchStoryResponse",
    "WatchStoryUseCase",
]
