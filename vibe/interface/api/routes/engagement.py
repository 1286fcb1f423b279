"""Vote, rating and bookmark routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel, ConfigDict

from vibe.application.usecase.engagement import (
    GetUserStateRequest,
    GetUserStateResponse,
    GetUserStateUseCase,
    ListBookmarksRequest,
    ListBookmarksResponse,
    ListBookmarksUseCase,
    RateStoryRequest,
    RateStoryResponse,
    RateStoryUseCase,
    ToggleBookmarkRequest,
    ToggleBookmarkResponse,
    ToggleBookmarkUseCase,
    ToggleVoteRequest,
    ToggleVoteResponse,
    ToggleVoteUseCase,
)
from vibe.domain.error import DomainError
from vibe.domain.service import JWTService
from vibe.interface.api.auth import require_user_id
from vibe.interface.error import bad_request, to_http_exception

router = APIRouter(tags=["engagement"], route_class=DishkaRoute)


@router.post("/stories/{story_id}/vote", response_model=ToggleVoteResponse)
async def toggle_vote(
    story_id: str,
    toggle_vote_use_case: FromDishka[ToggleVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ToggleVoteResponse:
    """Upvote a story, or remove the upvote if already given.

    Requires authentication.

    Args:
        story_id: Story UUID
        toggle_vote_use_case: Toggle vote use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Whether the vote was added or removed, and the new count

    Raises:
        HTTPException: If not authenticated or story not found
    """
    user_id = require_user_id(jwt_service, auth_token, "vote")

    try:
        return await toggle_vote_use_case.execute(
            ToggleVoteRequest(story_id=story_id, user_id=user_id)
        )
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)


class RateStoryAPIRequest(BaseModel):
    """API request for rating a story."""

    model_config = ConfigDict(extra="forbid")

    value: int


@router.post("/stories/{story_id}/rating", response_model=RateStoryResponse)
async def rate_story(
    story_id: str,
    request: RateStoryAPIRequest,
    rate_story_use_case: FromDishka[RateStoryUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RateStoryResponse:
    """Rate a story from 1 to 5 stars.

    A rating is final; a second attempt is rejected with 409.
    """
    user_id = require_user_id(jwt_service, auth_token, "rate")

    try:
        return await rate_story_use_case.execute(
            RateStoryRequest(story_id=story_id, user_id=user_id, value=request.value)
        )
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)


@router.post("/stories/{story_id}/bookmark", response_model=ToggleBookmarkResponse)
async def toggle_bookmark(
    story_id: str,
    toggle_bookmark_use_case: FromDishka[ToggleBookmarkUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ToggleBookmarkResponse:
    """Bookmark a story, or remove the bookmark if present."""
    user_id = require_user_id(jwt_service, auth_token, "bookmark")

    try:
        return await toggle_bookmark_use_case.execute(
            ToggleBookmarkRequest(story_id=story_id, user_id=user_id)
        )
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)


@router.get("/stories/{story_id}/me", response_model=GetUserStateResponse)
async def get_user_state(
    story_id: str,
    get_user_state_use_case: FromDishka[GetUserStateUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetUserStateResponse:
    """Get the current user's vote, rating and bookmark on a story."""
    user_id = require_user_id(jwt_service, auth_token, "view your engagement")

    try:
        return await get_user_state_use_case.execute(
            GetUserStateRequest(story_id=story_id, user_id=user_id)
        )
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)


@router.get("/users/me/bookmarks", response_model=ListBookmarksResponse)
async def list_my_bookmarks(
    list_bookmarks_use_case: FromDishka[ListBookmarksUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListBookmarksResponse:
    """Get the current user's bookmarks, newest first."""
    user_id = require_user_id(jwt_service, auth_token, "view bookmarks")
    return await list_bookmarks_use_case.execute(ListBookmarksRequest(user_id=user_id))
