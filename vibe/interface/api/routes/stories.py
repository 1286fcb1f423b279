"""Story routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel, ConfigDict, Field

from vibe.application.usecase.story import (
    GetStoryRequest,
    GetStoryResponse,
    GetStoryUseCase,
    UpdateStoryTagsRequest,
    UpdateStoryTagsResponse,
    UpdateStoryTagsUseCase,
    WatchStoryRequest,
    WatchStoryResponse,
    WatchStoryUseCase,
)
from vibe.domain.error import DomainError
from vibe.domain.service import JWTService
from vibe.interface.api.auth import require_user_id
from vibe.interface.error import bad_request, to_http_exception

router = APIRouter(prefix="/stories", tags=["stories"], route_class=DishkaRoute)


@router.get("/{story_id}", response_model=GetStoryResponse)
async def get_story(
    story_id: str,
    get_story_use_case: FromDishka[GetStoryUseCase],
) -> GetStoryResponse:
    """Get a story's vote count, average rating, comment count and tags.

    Public endpoint - no authentication required.
    """
    try:
        return await get_story_use_case.execute(GetStoryRequest(story_id=story_id))
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)


@router.get("/{story_id}/changes", response_model=WatchStoryResponse)
async def watch_story(
    story_id: str,
    watch_story_use_case: FromDishka[WatchStoryUseCase],
    since: int = 0,
) -> WatchStoryResponse:
    """Long-poll for changes to a story's engagement view.

    Answers as soon as the story's version exceeds ``since``, or with
    ``changed: false`` once the configured timeout elapses. Clients pass the
    returned ``version`` back as ``since`` on their next call.

    Args:
        story_id: Story UUID
        watch_story_use_case: Watch story use case from DI
        since: Last version the client has seen

    Returns:
        Change description and the current projection
    """
    with logfire.span("api.watch_story", story_id=story_id, since=since):
        try:
            return await watch_story_use_case.execute(
                WatchStoryRequest(story_id=story_id, since=since)
            )
        except DomainError as e:
            raise to_http_exception(e)
        except ValueError as e:
            raise bad_request(e)


class UpdateStoryTagsAPIRequest(BaseModel):
    """API request for re-tagging a story."""

    model_config = ConfigDict(extra="forbid")

    tag_ids: list[str] = Field(default_factory=list)
    new_tag_names: list[str] = Field(default_factory=list)


@router.put("/{story_id}/tags", response_model=UpdateStoryTagsResponse)
async def update_story_tags(
    story_id: str,
    request: UpdateStoryTagsAPIRequest,
    update_story_tags_use_case: FromDishka[UpdateStoryTagsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UpdateStoryTagsResponse:
    """Replace a story's tags.

    Only the story author can re-tag. Unknown names become new tags.

    Raises:
        HTTPException: If not authenticated, not the author, story not
            found, or the tags resolve to nothing
    """
    user_id = require_user_id(jwt_service, auth_token, "edit tags")

    try:
        return await update_story_tags_use_case.execute(
            UpdateStoryTagsRequest(
                story_id=story_id,
                user_id=user_id,
                tag_ids=request.tag_ids,
                new_tag_names=request.new_tag_names,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)
