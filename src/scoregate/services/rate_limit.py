"""Per-device submission cooldown."""

from __future__ import annotations

import logging
from threading import Lock

from scoregate.core.clock import Clock

__all__ = ["SubmissionRateLimiter"]

logger = logging.getLogger(__name__)


class SubmissionRateLimiter:
    """Rejects a device's submissions that arrive inside the cooldown."""

    def __init__(
        self,
        clock: Clock,
        *,
        cooldown_seconds: float,
        prune_threshold: int = 500,
        prune_slack_seconds: float = 5,
    ) -> None:
        self._clock = clock
        self.cooldown_seconds = cooldown_seconds
        self.prune_threshold = prune_threshold
        self.prune_slack_seconds = prune_slack_seconds
        self._last_submit: dict[str, float] = {}
        self._lock = Lock()

    def check_and_record(self, device_id: str, now: float | None = None) -> bool:
        """Return True when the device is still cooling down.

        A rejected call leaves the recorded timestamp untouched.
        """
        if now is None:
            now = self._clock.now()
        with self._lock:
            last = self._last_submit.get(device_id)
            if last is not None and now - last < self.cooldown_seconds:
                return True
            self._last_submit[device_id] = now
            if len(self._last_submit) > self.prune_threshold:
                self._prune_locked(now)
        return False

    def rollback(self, device_id: str, recorded_at: float) -> None:
        """Drop a timestamp recorded for a submission that did not complete."""
        with self._lock:
            if self._last_submit.get(device_id) == recorded_at:
                del self._last_submit[device_id]

    def last_submit(self, device_id: str) -> float | None:
        with self._lock:
            return self._last_submit.get(device_id)

    def prune(self, now: float | None = None) -> int:
        if now is None:
            now = self._clock.now()
        with self._lock:
            return self._prune_locked(now)

    def _prune_locked(self, now: float) -> int:
        cutoff = now - self.cooldown_seconds - self.prune_slack_seconds
        stale = [device for device, last in self._last_submit.items() if last < cutoff]
        for device in stale:
            del self._last_submit[device]
        if stale:
            logger.debug("Pruned %d rate limit entries", len(stale))
        return len(stale)

    def __len__(self) -> int:
        with self._lock:
            return len(self._last_submit)
