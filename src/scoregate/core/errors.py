"""Outcomes and failures of the score submission core."""

from __future__ import annotations

from enum import Enum


class RejectionCode(str, Enum):
    """Client-correctable reasons a submission is refused."""

    INVALID_INPUT = "invalid_input"
    SCORE_INVALID = "score_invalid"
    SESSION_REQUIRED = "session_required"
    SESSION_INVALID = "session_invalid"
    SESSION_DEVICE_MISMATCH = "session_device_mismatch"
    SESSION_EXPIRED = "session_expired"
    SESSION_USED = "session_used"
    RATE_LIMITED = "rate_limited"
    NAME_TAKEN = "name_taken"
    CONTACT_TAKEN = "contact_taken"


class SubmissionRejected(Exception):
    """Raised when a submission is refused for an expected reason."""

    def __init__(self, code: RejectionCode, detail: str | None = None) -> None:
        self.code = code
        self.detail = detail or code.value
        super().__init__(f"{code.value}: {self.detail}")


class StoreUnavailable(Exception):
    """Raised when the player record store cannot be reached or fails."""
