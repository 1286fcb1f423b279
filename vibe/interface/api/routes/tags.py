"""Tag routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel, ConfigDict, Field

from vibe.application.usecase.tag import (
    ListTagsRequest,
    ListTagsResponse,
    ListTagsUseCase,
    ResolveTagsRequest,
    ResolveTagsResponse,
    ResolveTagsUseCase,
)
from vibe.domain.error import DomainError
from vibe.domain.service import JWTService
from vibe.interface.api.auth import require_user_id
from vibe.interface.error import bad_request, to_http_exception

router = APIRouter(
    prefix="/tags",
    tags=["tags"],
    route_class=DishkaRoute,
)


@router.get(
    "",
    response_model=ListTagsResponse,
    summary="List all available tags",
    description="Get a list of all available tags for categorizing stories.",
)
async def list_tags(
    use_case: FromDishka[ListTagsUseCase],
    limit: int = 100,
    order_by: str = "name",
) -> ListTagsResponse:
    """List all available tags.

    Args:
        use_case: List tags use case (injected)
        limit: Maximum number of tags to return (1-100)
        order_by: Sort order ('name' or 'created_at')

    Returns:
        List of tags

    Example:
        GET /tags?limit=10&order_by=name
    """
    with logfire.span("api.list_tags", limit=limit, order_by=order_by):
        try:
            request = ListTagsRequest(limit=limit, order_by=order_by)
        except ValueError as e:
            raise bad_request(e)
        return await use_case.execute(request)


class ResolveTagsAPIRequest(BaseModel):
    """API request for resolving tag references."""

    model_config = ConfigDict(extra="forbid")

    tag_ids: list[str] = Field(default_factory=list)
    new_tag_names: list[str] = Field(default_factory=list)


@router.post("/resolve", response_model=ResolveTagsResponse)
async def resolve_tags(
    request: ResolveTagsAPIRequest,
    use_case: FromDishka[ResolveTagsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ResolveTagsResponse:
    """Resolve existing tag IDs and free-text names into tag IDs.

    Requires authentication, since unmatched names create new tags.

    Example:
        POST /tags/resolve {"new_tag_names": ["Alpha", "beta"]}
    """
    require_user_id(jwt_service, auth_token, "create tags")

    try:
        return await use_case.execute(
            ResolveTagsRequest(
                tag_ids=request.tag_ids, new_tag_names=request.new_tag_names
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)
