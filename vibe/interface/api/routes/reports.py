"""Report routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel, ConfigDict

from vibe.application.usecase.report import (
    CreateReportRequest,
    CreateReportResponse,
    CreateReportUseCase,
)
from vibe.domain.error import DomainError
from vibe.domain.service import JWTService
from vibe.interface.api.auth import require_user_id
from vibe.interface.error import bad_request, to_http_exception

router = APIRouter(prefix="/stories", tags=["reports"], route_class=DishkaRoute)


class CreateReportAPIRequest(BaseModel):
    """API request for reporting a story."""

    model_config = ConfigDict(extra="forbid")

    reason: str


@router.post(
    "/{story_id}/reports",
    response_model=CreateReportResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_report(
    story_id: str,
    request: CreateReportAPIRequest,
    create_report_use_case: FromDishka[CreateReportUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateReportResponse:
    """Report a story for moderator review.

    Requires authentication. A reporter may hold one pending report per
    story; a new one can be filed once the previous is closed.
    """
    user_id = require_user_id(jwt_service, auth_token, "report")

    try:
        return await create_report_use_case.execute(
            CreateReportRequest(
                story_id=story_id, reporter_id=user_id, reason=request.reason
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)
