"""Request authentication helpers.

Tokens come from the ``auth_token`` cookie set by the identity provider.
"""

import logfire
from fastapi import HTTPException, status

from vibe.domain.service import JWTService


def require_user_id(
    jwt_service: JWTService, auth_token: str | None, action: str
) -> str:
    """Return the authenticated user's ID.

    Args:
        jwt_service: JWT service for token verification
        auth_token: JWT token from cookie
        action: What the caller is trying to do, for the error message

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return user_id


def require_moderator_id(jwt_service: JWTService, auth_token: str | None) -> str:
    """Return the authenticated moderator's ID.

    Raises:
        HTTPException: 401 if the token is missing or invalid, 403 if it
            lacks the moderator role
    """
    payload = jwt_service.get_payload_from_token(auth_token)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to moderate",
        )
    if not jwt_service.is_moderator(payload):
        logfire.warn("Moderation attempt without role", user_id=payload.user_id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Moderator role required",
        )
    return payload.user_id
