"""Structural and range checks for incoming score claims."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

from scoregate.core.errors import RejectionCode, SubmissionRejected
from scoregate.repositories.record_store import Mode

__all__ = ["PlayerIdentity", "ScoreClaim", "ScoreValidator", "ValidatedScore"]

logger = logging.getLogger(__name__)


def _describe(score: int | float) -> str:
    # str() of a very long int is slow and capped by the interpreter.
    if isinstance(score, int) and score.bit_length() > 64:
        return f"<int of {score.bit_length()} bits>"
    return str(score)


@dataclass(frozen=True)
class ScoreClaim:
    """Untrusted submission exactly as the client sent it."""

    device_id: Any = None
    player_name: Any = None
    score: Any = None
    mode: Any = None
    contact: Any = None
    session_id: Any = None


@dataclass(frozen=True)
class PlayerIdentity:
    device_id: str
    player_name: str
    contact: str | None = None


@dataclass(frozen=True)
class ValidatedScore:
    device_id: str
    player_name: str
    score: float
    mode: Mode = "solo"
    contact: str | None = None


class ScoreValidator:
    """Normalizes a claim or rejects it with a named reason.

    Checks run in a fixed order and the first failure wins; nothing is
    mutated here.
    """

    def __init__(
        self,
        *,
        score_ceiling: int = 9999,
        max_player_name_length: int = 32,
        max_device_id_length: int = 64,
        max_contact_length: int = 128,
    ) -> None:
        self.score_ceiling = score_ceiling
        self.max_player_name_length = max_player_name_length
        self.max_device_id_length = max_device_id_length
        self.max_contact_length = max_contact_length

    @staticmethod
    def _required_text(value: Any, field: str, max_length: int) -> str:
        if not isinstance(value, str) or not value.strip():
            raise SubmissionRejected(RejectionCode.INVALID_INPUT, f"{field} is required")
        return value.strip()[:max_length]

    def _contact(self, value: Any) -> str | None:
        if value is None or isinstance(value, bool):
            return None
        if not isinstance(value, str | int | float):
            raise SubmissionRejected(RejectionCode.INVALID_INPUT, "contact must be a string")
        contact = str(value).strip()[: self.max_contact_length]
        return contact or None

    def validate_identity(
        self, *, player_name: Any, device_id: Any, contact: Any = None
    ) -> PlayerIdentity:
        """Validate the name/device/contact triple used by registration."""
        return PlayerIdentity(
            player_name=self._required_text(
                player_name, "playerName", self.max_player_name_length
            ),
            device_id=self._required_text(device_id, "deviceId", self.max_device_id_length),
            contact=self._contact(contact),
        )

    def validate(self, claim: ScoreClaim) -> ValidatedScore:
        identity = self.validate_identity(
            player_name=claim.player_name, device_id=claim.device_id, contact=None
        )

        score = claim.score
        if (
            isinstance(score, bool)
            or not isinstance(score, int | float)
            # Ints are exact and may be too large to convert to float.
            or (isinstance(score, float) and not math.isfinite(score))
            or score < 0
        ):
            raise SubmissionRejected(
                RejectionCode.INVALID_INPUT, "score must be a non-negative number"
            )
        if score > self.score_ceiling:
            logger.warning(
                "[anti-cheat] Rejected score %s from device %s",
                _describe(score),
                identity.device_id[:8],
            )
            raise SubmissionRejected(RejectionCode.SCORE_INVALID, "score_invalid")

        mode: Mode = "versus" if claim.mode == "versus" else "solo"
        return ValidatedScore(
            device_id=identity.device_id,
            player_name=identity.player_name,
            score=score,
            mode=mode,
            contact=self._contact(claim.contact),
        )
