"""Combining an accepted score with the player's stored record."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass

from scoregate.core.errors import RejectionCode, SubmissionRejected
from scoregate.core.locks import KeyedLocks
from scoregate.repositories.record_store import PlayerRecord, PlayerRecordStore
from scoregate.services.validation import PlayerIdentity, ValidatedScore

__all__ = ["MergeResult", "ScoreMerger", "round_score"]


def round_score(score: float) -> int:
    """Round half up, so 12.5 becomes 13."""
    return int(math.floor(score + 0.5))


@dataclass(frozen=True)
class MergeResult:
    record: PlayerRecord
    created: bool


class ScoreMerger:
    """Applies uniqueness checks and the best-score merge.

    Names and contacts belong to the first device that claims them. The
    stored score only ever rises, the name and contact follow the latest
    claim, and every accepted submission advances the play count.
    """

    def __init__(self, locks: KeyedLocks | None = None) -> None:
        self._locks = locks or KeyedLocks()

    @staticmethod
    def _lock_keys(device_id: str, player_name: str, contact: str | None) -> list[str]:
        keys = [f"device:{device_id}", f"name:{player_name}"]
        if contact is not None:
            keys.append(f"contact:{contact}")
        return keys

    @staticmethod
    def _check_unique(
        store: PlayerRecordStore, device_id: str, player_name: str, contact: str | None
    ) -> None:
        owner = store.find_by_name(player_name)
        if owner is not None and owner.device_id != device_id:
            raise SubmissionRejected(RejectionCode.NAME_TAKEN, "name_taken")
        if contact is not None:
            owner = store.find_by_contact(contact)
            if owner is not None and owner.device_id != device_id:
                raise SubmissionRejected(RejectionCode.CONTACT_TAKEN, "contact_taken")

    def merge(self, store: PlayerRecordStore, claim: ValidatedScore) -> MergeResult:
        with self._locks.hold(*self._lock_keys(claim.device_id, claim.player_name, claim.contact)):
            self._check_unique(store, claim.device_id, claim.player_name, claim.contact)

            existing = store.find_by_device(claim.device_id, claim.mode)
            if existing is None:
                record = PlayerRecord(
                    device_id=claim.device_id,
                    player_name=claim.player_name,
                    score=round_score(claim.score),
                    mode=claim.mode,
                    contact=claim.contact,
                    play_count=1,
                )
                return MergeResult(store.upsert(record), created=True)

            record = dataclasses.replace(
                existing,
                score=max(existing.score, round_score(claim.score)),
                player_name=claim.player_name,
                play_count=existing.play_count + 1,
                contact=claim.contact if claim.contact is not None else existing.contact,
            )
            return MergeResult(store.upsert(record), created=False)

    def register(self, store: PlayerRecordStore, identity: PlayerIdentity) -> MergeResult:
        """Claim a name (and contact) for a device before any game is played.

        Updates whichever record the device already has, otherwise creates a
        zero-score solo placeholder.
        """
        keys = self._lock_keys(identity.device_id, identity.player_name, identity.contact)
        with self._locks.hold(*keys):
            self._check_unique(store, identity.device_id, identity.player_name, identity.contact)

            existing = store.find_any_by_device(identity.device_id)
            if existing is None:
                record = PlayerRecord(
                    device_id=identity.device_id,
                    player_name=identity.player_name,
                    score=0,
                    mode="solo",
                    contact=identity.contact,
                    play_count=0,
                )
                return MergeResult(store.upsert(record), created=True)

            record = dataclasses.replace(
                existing,
                player_name=identity.player_name,
                contact=identity.contact if identity.contact is not None else existing.contact,
            )
            return MergeResult(store.upsert(record), created=False)
