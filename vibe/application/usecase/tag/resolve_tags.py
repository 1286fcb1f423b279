"""Resolve tags use case."""

from uuid import UUID

from pydantic import BaseModel

from vibe.domain.service import TagService
from vibe.domain.value import TagId


class ResolveTagsRequest(BaseModel):
    """Resolve tags request."""

    tag_ids: list[str] = []  # Existing tag UUIDs
    new_tag_names: list[str] = []  # Free-text names, matched case-insensitively


class ResolveTagsResponse(BaseModel):
    """Resolve tags response."""

    tag_ids: list[str]


class ResolveTagsUseCase:
    """Use case for turning tag references into canonical tag IDs.

    Called by story submission before a story is created; names without a
    case-insensitive match become new tags.
    """

    def __init__(self, tag_service: TagService) -> None:
        """Initialize resolve tags use case.

        Args:
            tag_service: Tag domain service
        """
        self.tag_service = tag_service

    async def execute(self, request: ResolveTagsRequest) -> ResolveTagsResponse:
        """Execute resolve tags flow.

        Raises:
            ValidationError: If the references resolve to nothing, an ID is
                unknown, or a name is too long
        """
        resolved = await self.tag_service.resolve(
            existing_tag_ids=[TagId(UUID(t)) for t in request.tag_ids],
            new_tag_names=request.new_tag_names,
        )
        return ResolveTagsResponse(tag_ids=sorted(str(t) for t in resolved))
