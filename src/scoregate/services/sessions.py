"""Single-use game session tokens.

A token is minted when a game starts and must be presented with the score
when the game ends. Consuming it marks the session as used so that the same
submission cannot be replayed, while a short grace window lets a client whose
response was lost retry without being rejected.
"""

from __future__ import annotations

import logging
import re
import secrets
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from threading import Lock

from scoregate.core.clock import Clock
from scoregate.core.errors import RejectionCode, SubmissionRejected
from scoregate.core.locks import KeyedLocks

__all__ = ["ConsumeOutcome", "HeldToken", "SessionToken", "SessionTokenRegistry"]

logger = logging.getLogger(__name__)

TOKEN_BYTES = 16
_TOKEN_PATTERN = re.compile(r"[0-9a-f]{32}")


@dataclass
class SessionToken:
    """Server-side state of one issued session."""

    id: str
    device_id: str
    issued_at: float
    used_at: float | None = None


class ConsumeOutcome(str, Enum):
    """Result of presenting a valid token."""

    CONSUMED = "consumed"
    REPLAY = "replay"


class HeldToken:
    """A validated token whose per-token lock is held by the caller."""

    def __init__(self, token: SessionToken, *, replay: bool, now: float) -> None:
        self.token = token
        self.replay = replay
        self.now = now

    def consume(self) -> None:
        """Mark the session used; this is the single moment of consumption."""
        if self.replay or self.token.used_at is not None:
            raise RuntimeError("session token already consumed")
        self.token.used_at = self.now

    def restore(self) -> None:
        """Undo ``consume`` after a failure that left no persisted effect."""
        if self.token.used_at == self.now:
            self.token.used_at = None


class SessionTokenRegistry:
    """Issues, validates and consumes session tokens bound to a device.

    Every check-then-mutate sequence on a token runs under a lock scoped to
    that token id, so concurrent submissions for different devices never wait
    on each other. The index lock only guards dictionary access and is never
    held while a token is being examined.
    """

    def __init__(
        self,
        clock: Clock,
        *,
        ttl_seconds: float,
        grace_seconds: float,
        max_device_id_length: int = 64,
        locks: KeyedLocks | None = None,
    ) -> None:
        self._clock = clock
        self.ttl_seconds = ttl_seconds
        self.grace_seconds = grace_seconds
        self.max_device_id_length = max_device_id_length
        self._tokens: dict[str, SessionToken] = {}
        self._index_lock = Lock()
        self._locks = locks or KeyedLocks()

    def issue(self, device_id: object) -> str:
        """Mint a token for ``device_id`` and return its opaque identifier."""
        if not isinstance(device_id, str) or not device_id.strip():
            raise SubmissionRejected(RejectionCode.INVALID_INPUT, "deviceId required")
        bound_device = device_id.strip()[: self.max_device_id_length]
        token_id = secrets.token_hex(TOKEN_BYTES)
        token = SessionToken(id=token_id, device_id=bound_device, issued_at=self._clock.now())
        with self._index_lock:
            self._tokens[token_id] = token
        return token_id

    def get(self, token_id: str) -> SessionToken | None:
        with self._index_lock:
            return self._tokens.get(token_id)

    def __len__(self) -> int:
        with self._index_lock:
            return len(self._tokens)

    def _discard(self, token_id: str) -> None:
        with self._index_lock:
            self._tokens.pop(token_id, None)

    @contextmanager
    def hold(self, token_id: object, device_id: str) -> Iterator[HeldToken]:
        """Validate a presented token and keep it locked for the caller.

        Raises ``SubmissionRejected`` for a missing, unknown, foreign, expired
        or spent token. A token used within the grace window is yielded with
        ``replay`` set; the caller must not consume it again.
        """
        if not isinstance(token_id, str) or not _TOKEN_PATTERN.fullmatch(token_id):
            logger.warning(
                "[security] Score rejected: no session token from device %s", device_id[:8]
            )
            raise SubmissionRejected(RejectionCode.SESSION_REQUIRED, "session token required")

        with self._locks.hold(f"token:{token_id}"):
            token = self.get(token_id)
            if token is None:
                raise SubmissionRejected(RejectionCode.SESSION_INVALID, "unknown session")
            if token.device_id != device_id:
                logger.warning(
                    "[security] Session %s... presented by device %s, issued to %s",
                    token_id[:8],
                    device_id[:8],
                    token.device_id[:8],
                )
                raise SubmissionRejected(
                    RejectionCode.SESSION_DEVICE_MISMATCH, "session belongs to another device"
                )

            now = self._clock.now()
            if now - token.issued_at > self.ttl_seconds:
                self._discard(token_id)
                raise SubmissionRejected(RejectionCode.SESSION_EXPIRED, "session expired")

            replay = False
            if token.used_at is not None:
                if now - token.used_at >= self.grace_seconds:
                    raise SubmissionRejected(RejectionCode.SESSION_USED, "session already used")
                replay = True

            yield HeldToken(token, replay=replay, now=now)

    def validate_and_consume(self, token_id: object, device_id: str) -> ConsumeOutcome:
        """Consume a token in one step, reporting whether this was a retry."""
        with self.hold(token_id, device_id) as held:
            if held.replay:
                return ConsumeOutcome.REPLAY
            held.consume()
            return ConsumeOutcome.CONSUMED

    def sweep(self, now: float | None = None) -> int:
        """Forget tokens issued longer ago than TTL plus grace."""
        if now is None:
            now = self._clock.now()
        cutoff = now - self.ttl_seconds - self.grace_seconds
        with self._index_lock:
            stale = [token_id for token_id, token in self._tokens.items() if token.issued_at < cutoff]
            for token_id in stale:
                del self._tokens[token_id]
        if stale:
            logger.debug("Swept %d expired session tokens", len(stale))
        return len(stale)
