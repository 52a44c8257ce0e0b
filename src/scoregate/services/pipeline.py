"""The per-submission decision procedure."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from scoregate.core.clock import Clock, WallClock
from scoregate.core.errors import RejectionCode, StoreUnavailable, SubmissionRejected
from scoregate.core.settings import Settings, settings
from scoregate.repositories.record_store import PlayerRecord, PlayerRecordStore
from scoregate.services.merge import ScoreMerger
from scoregate.services.rate_limit import SubmissionRateLimiter
from scoregate.services.sessions import SessionTokenRegistry
from scoregate.services.validation import ScoreClaim, ScoreValidator

__all__ = ["SubmissionPipeline", "SubmissionResult", "build_pipeline"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionResult:
    """Terminal success of a submission.

    ``record`` is None only for a grace-window retry from a device that has
    no stored record in the claimed mode.
    """

    record: PlayerRecord | None
    created: bool = False
    replayed: bool = False


class SubmissionPipeline:
    """Decides whether a submitted score is persisted, exactly once.

    Evaluation order: claim validation, session token checks, rate limit,
    token consumption, then the merge. A store failure after consumption
    undoes both the consumption and the rate limit record so the client can
    safely retry.
    """

    def __init__(
        self,
        *,
        registry: SessionTokenRegistry,
        rate_limiter: SubmissionRateLimiter,
        validator: ScoreValidator,
        merger: ScoreMerger,
    ) -> None:
        self.registry = registry
        self.rate_limiter = rate_limiter
        self.validator = validator
        self.merger = merger

    def issue_session(self, device_id: Any) -> str:
        return self.registry.issue(device_id)

    def submit(self, store: PlayerRecordStore, claim: ScoreClaim) -> SubmissionResult:
        validated = self.validator.validate(claim)
        device_id = validated.device_id

        with self.registry.hold(claim.session_id, device_id) as held:
            if held.replay:
                # Idempotent retry: report the record as it stands now.
                current = store.find_by_device(device_id, validated.mode)
                return SubmissionResult(record=current, replayed=True)

            if self.rate_limiter.check_and_record(device_id, held.now):
                logger.info("Rate limited submission from device %s", device_id[:8])
                raise SubmissionRejected(
                    RejectionCode.RATE_LIMITED, "Too many requests, wait a moment."
                )

            held.consume()
            try:
                merged = self.merger.merge(store, validated)
            except StoreUnavailable:
                held.restore()
                self.rate_limiter.rollback(device_id, held.now)
                raise

        return SubmissionResult(record=merged.record, created=merged.created)

    def register(
        self,
        store: PlayerRecordStore,
        *,
        player_name: Any,
        device_id: Any,
        contact: Any = None,
    ) -> SubmissionResult:
        identity = self.validator.validate_identity(
            player_name=player_name, device_id=device_id, contact=contact
        )
        merged = self.merger.register(store, identity)
        return SubmissionResult(record=merged.record, created=merged.created)


def build_pipeline(config: Settings = settings, clock: Clock | None = None) -> SubmissionPipeline:
    """Wire the submission components from configuration."""
    clock = clock or WallClock()
    return SubmissionPipeline(
        registry=SessionTokenRegistry(
            clock,
            ttl_seconds=config.session_ttl_seconds,
            grace_seconds=config.session_grace_seconds,
            max_device_id_length=config.max_device_id_length,
        ),
        rate_limiter=SubmissionRateLimiter(
            clock,
            cooldown_seconds=config.rate_limit_cooldown_seconds,
            prune_threshold=config.rate_limit_prune_threshold,
            prune_slack_seconds=config.rate_limit_prune_slack_seconds,
        ),
        validator=ScoreValidator(
            score_ceiling=config.score_ceiling,
            max_player_name_length=config.max_player_name_length,
            max_device_id_length=config.max_device_id_length,
            max_contact_length=config.max_contact_length,
        ),
        merger=ScoreMerger(),
    )
