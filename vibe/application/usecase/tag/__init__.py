"""Tag use cases."""

from .list_tags import ListTagsRequest, ListTagsResponse, ListTagsUseCase, TagItem
from .resolve_tags import ResolveTagsRequest, ResolveTagsResponse, ResolveTagsUseCase

__all__ = [
    "ListTagsRequest",
    "ListTagsResponse",
    "ListTagsUseCase",
    "ResolveTagsRequest",
    "ResolveTagsResponse",
    "ResolveTagsUseCase",
    "TagItem",
]
