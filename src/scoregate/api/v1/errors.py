"""Mapping from core rejections to HTTP errors."""

from fastapi import HTTPException, status

from scoregate.core.errors import RejectionCode, StoreUnavailable, SubmissionRejected

REJECTION_STATUS: dict[RejectionCode, int] = {
    RejectionCode.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    RejectionCode.SCORE_INVALID: status.HTTP_400_BAD_REQUEST,
    RejectionCode.SESSION_REQUIRED: status.HTTP_403_FORBIDDEN,
    RejectionCode.SESSION_INVALID: status.HTTP_403_FORBIDDEN,
    RejectionCode.SESSION_DEVICE_MISMATCH: status.HTTP_403_FORBIDDEN,
    RejectionCode.SESSION_EXPIRED: status.HTTP_403_FORBIDDEN,
    RejectionCode.SESSION_USED: status.HTTP_403_FORBIDDEN,
    RejectionCode.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    RejectionCode.NAME_TAKEN: status.HTTP_409_CONFLICT,
    RejectionCode.CONTACT_TAKEN: status.HTTP_409_CONFLICT,
}


def http_error(exc: SubmissionRejected | StoreUnavailable) -> HTTPException:
    """Translate a rejection or store failure into the matching HTTPException."""
    if isinstance(exc, StoreUnavailable):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="store_unavailable"
        )
    return HTTPException(status_code=REJECTION_STATUS[exc.code], detail=exc.code.value)
