"""Comment routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel, ConfigDict, Field

from vibe.application.usecase.comment import (
    AddCommentRequest,
    AddCommentResponse,
    AddCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
)
from vibe.domain.error import DomainError
from vibe.domain.service import JWTService
from vibe.interface.api.auth import require_user_id
from vibe.interface.error import bad_request, to_http_exception

router = APIRouter(prefix="/stories", tags=["comments"], route_class=DishkaRoute)


class AddCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    model_config = ConfigDict(extra="forbid")

    content: str = Field(max_length=10000)
    parent_id: str | None = None  # Parent comment ID for replies


@router.post(
    "/{story_id}/comments",
    response_model=AddCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    story_id: str,
    request: AddCommentAPIRequest,
    add_comment_use_case: FromDishka[AddCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> AddCommentResponse:
    """Comment on a story or reply to another comment.

    Requires authentication. The comment is held for moderation and is not
    listed until approved.

    Args:
        story_id: Story UUID
        request: Comment creation data
        add_comment_use_case: Add comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        The pending comment

    Raises:
        HTTPException: If not authenticated, validation fails, or the story
            or parent comment is not found
    """
    user_id = require_user_id(jwt_service, auth_token, "comment")

    try:
        return await add_comment_use_case.execute(
            AddCommentRequest(
                story_id=story_id,
                author_id=user_id,
                content=request.content,
                parent_id=request.parent_id,
            )
        )
    except DomainError as e:
        logfire.warn("Comment creation failed", story_id=story_id, error=str(e))
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)


@router.get("/{story_id}/comments", response_model=GetCommentsResponse)
async def get_comments(
    story_id: str,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
) -> GetCommentsResponse:
    """Get approved comments on a story, replies following their parent.

    Public endpoint - no authentication required.
    """
    try:
        return await get_comments_use_case.execute(
            GetCommentsRequest(story_id=story_id)
        )
    except ValueError as e:
        raise bad_request(e)
