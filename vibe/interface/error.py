"""Interface layer errors.

Domain errors keep their kind and reason up to here; this module decides
the HTTP status each kind maps to.
"""

import logfire
from fastapi import HTTPException, status

from vibe.domain.error import (
    DomainError,
    DuplicateActionError,
    NotAuthorizedError,
    NotFoundError,
    StateConflictError,
    ValidationError,
)

STATUS_BY_ERROR: dict[type[DomainError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotAuthorizedError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateActionError: status.HTTP_409_CONFLICT,
    StateConflictError: status.HTTP_409_CONFLICT,
}


def to_http_exception(error: DomainError) -> HTTPException:
    """Translate a domain error into an HTTPException.

    Args:
        error: Error raised by a use case

    Returns:
        HTTPException carrying the error's reason as ``detail``
    """
    status_code = next(
        (code for kind, code in STATUS_BY_ERROR.items() if isinstance(error, kind)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    if status_code >= 500:
        logfire.error(
            "Unmapped domain error", error=str(error), kind=type(error).__name__
        )
    return HTTPException(status_code=status_code, detail=str(error))


def bad_request(error: ValueError) -> HTTPException:
    """Malformed identifiers and request values."""
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
