"""Background expiry of session tokens and rate limit entries."""

from __future__ import annotations

import asyncio
import logging

from scoregate.services.rate_limit import SubmissionRateLimiter
from scoregate.services.sessions import SessionTokenRegistry

logger = logging.getLogger(__name__)


class MaintenanceWorker:
    """Periodically sweeps expired tokens and prunes stale cooldowns.

    Runs on its own timer, independent of request handling.
    """

    def __init__(
        self,
        registry: SessionTokenRegistry,
        rate_limiter: SubmissionRateLimiter,
        *,
        interval_seconds: float,
    ) -> None:
        self.registry = registry
        self.rate_limiter = rate_limiter
        self.interval_seconds = max(0.01, float(interval_seconds))
        self._task: asyncio.Task[None] | None = None
        self._stopping = asyncio.Event()

    async def start(self) -> None:
        """Start the background loop."""
        if self._task is None or self._task.done():
            self._stopping.clear()
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop the background loop and wait for it to finish."""
        if self._task is None:
            return
        self._stopping.set()
        await self._task
        self._task = None

    def run_once(self) -> tuple[int, int]:
        swept = self.registry.sweep()
        pruned = self.rate_limiter.prune()
        if swept or pruned:
            logger.info("Maintenance removed %d sessions and %d cooldowns", swept, pruned)
        return swept, pruned

    async def _run(self) -> None:
        while not self._stopping.is_set():
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self.interval_seconds)
            except TimeoutError:
                self.run_once()
