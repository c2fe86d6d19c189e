"""Translation of use case failures into HTTP errors."""

from typing import Any, Protocol

from fastapi import HTTPException, status


ERROR_STATUS: dict[str, int] = {
    "InvalidCredentials": status.HTTP_401_UNAUTHORIZED,
    "Unauthorized": status.HTTP_403_FORBIDDEN,
    "ProfileIncomplete": status.HTTP_403_FORBIDDEN,
    "NotWhitelisted": status.HTTP_403_FORBIDDEN,
    "WindowExpired": status.HTTP_403_FORBIDDEN,
    "NotFound": status.HTTP_404_NOT_FOUND,
    "DuplicateUser": status.HTTP_409_CONFLICT,
    "DuplicateAddress": status.HTTP_409_CONFLICT,
    "DuplicateEmail": status.HTTP_409_CONFLICT,
    "AlreadyVoted": status.HTTP_409_CONFLICT,
    "ElectionTerminated": status.HTTP_409_CONFLICT,
    "NotOngoing": status.HTTP_409_CONFLICT,
    "NotDraft": status.HTTP_409_CONFLICT,
    "NotTerminated": status.HTTP_409_CONFLICT,
    "InvalidWindow": status.HTTP_400_BAD_REQUEST,
    "OutOfWindow": status.HTTP_400_BAD_REQUEST,
    "InvalidCandidate": status.HTTP_400_BAD_REQUEST,
    "ValidationError": status.HTTP_400_BAD_REQUEST,
    "Internal": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class _Result(Protocol):
    success: bool
    error_code: str | None
    error_message: str | None


def status_for(error_code: str | None) -> int:
    return ERROR_STATUS.get(error_code or "", status.HTTP_500_INTERNAL_SERVER_ERROR)


def raise_for_failure(result: _Result) -> None:
    """Raise HTTPException when a use case reported failure."""
    if result.success:
        return
    detail: dict[str, Any] = {
        "code": result.error_code,
        "message": result.error_message,
    }
    headers = (
        {"WWW-Authenticate": "Bearer"}
        if result.error_code == "InvalidCredentials"
        else None
    )
    raise HTTPException(
        status_code=status_for(result.error_code), detail=detail, headers=headers
    )
