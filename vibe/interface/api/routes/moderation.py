"""Moderation routes.

All routes require a token carrying the moderator role.
"""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel, ConfigDict

from vibe.application.usecase.comment import (
    ListPendingCommentsRequest,
    ListPendingCommentsResponse,
    ListPendingCommentsUseCase,
    ModerateCommentRequest,
    ModerateCommentResponse,
    ModerateCommentUseCase,
)
from vibe.application.usecase.report import (
    ListReportsRequest,
    ListReportsResponse,
    ListReportsUseCase,
    ResolveReportRequest,
    ResolveReportResponse,
    ResolveReportUseCase,
)
from vibe.domain.error import DomainError
from vibe.domain.service import JWTService
from vibe.domain.value import ModerationDecision, ReportOutcome, ReportStatus
from vibe.interface.api.auth import require_moderator_id
from vibe.interface.error import bad_request, to_http_exception

router = APIRouter(prefix="/moderation", tags=["moderation"], route_class=DishkaRoute)


@router.get("/comments", response_model=ListPendingCommentsResponse)
async def list_pending_comments(
    use_case: FromDishka[ListPendingCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    story_id: str | None = None,
    limit: int = 100,
    auth_token: str | None = Cookie(default=None),
) -> ListPendingCommentsResponse:
    """Get comments awaiting moderation, oldest first."""
    require_moderator_id(jwt_service, auth_token)

    try:
        return await use_case.execute(
            ListPendingCommentsRequest(story_id=story_id, limit=limit)
        )
    except ValueError as e:
        raise bad_request(e)


class ModerateCommentAPIRequest(BaseModel):
    """API request for moderating a comment."""

    model_config = ConfigDict(extra="forbid")

    decision: ModerationDecision


@router.post("/comments/{comment_id}", response_model=ModerateCommentResponse)
async def moderate_comment(
    comment_id: str,
    request: ModerateCommentAPIRequest,
    use_case: FromDishka[ModerateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ModerateCommentResponse:
    """Approve or reject a pending comment.

    Raises:
        HTTPException: 409 if the comment was already moderated
    """
    moderator_id = require_moderator_id(jwt_service, auth_token)

    try:
        return await use_case.execute(
            ModerateCommentRequest(
                comment_id=comment_id,
                moderator_id=moderator_id,
                decision=request.decision,
            )
        )
    except DomainError as e:
        logfire.warn("Moderation failed", comment_id=comment_id, error=str(e))
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)


@router.get("/reports", response_model=ListReportsResponse)
async def list_reports(
    use_case: FromDishka[ListReportsUseCase],
    jwt_service: FromDishka[JWTService],
    status: ReportStatus | None = None,
    limit: int = 100,
    auth_token: str | None = Cookie(default=None),
) -> ListReportsResponse:
    """Get reports, newest first, optionally filtered by status."""
    require_moderator_id(jwt_service, auth_token)

    try:
        return await use_case.execute(ListReportsRequest(status=status, limit=limit))
    except ValueError as e:
        raise bad_request(e)


class ResolveReportAPIRequest(BaseModel):
    """API request for closing a report."""

    model_config = ConfigDict(extra="forbid")

    outcome: ReportOutcome


@router.post("/reports/{report_id}", response_model=ResolveReportResponse)
async def resolve_report(
    report_id: str,
    request: ResolveReportAPIRequest,
    use_case: FromDishka[ResolveReportUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ResolveReportResponse:
    """Resolve or dismiss a pending report."""
    moderator_id = require_moderator_id(jwt_service, auth_token)

    try:
        return await use_case.execute(
            ResolveReportRequest(
                report_id=report_id,
                moderator_id=moderator_id,
                outcome=request.outcome,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)
