"""Player record contract shared by the submission core and its stores."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import UTC, datetime
from threading import Lock
from typing import Literal, Protocol

Mode = Literal["solo", "versus"]
MODES: tuple[Mode, ...] = ("solo", "versus")

__all__ = ["MODES", "InMemoryRecordStore", "Mode", "PlayerRecord", "PlayerRecordStore"]


@dataclass(frozen=True)
class PlayerRecord:
    """Snapshot of one player's standing for a device and mode."""

    device_id: str
    player_name: str
    score: int
    mode: Mode = "solo"
    contact: str | None = None
    play_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "deviceId": self.device_id,
            "playerName": self.player_name,
            "score": self.score,
            "mode": self.mode,
            "contact": self.contact,
            "playCount": self.play_count,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


class PlayerRecordStore(Protocol):
    """Persistence operations the submission core relies on.

    Implementations raise ``StoreUnavailable`` on connectivity or storage
    failures and must never partially apply an ``upsert``.
    """

    def find_by_device(self, device_id: str, mode: Mode) -> PlayerRecord | None: ...

    def find_any_by_device(self, device_id: str) -> PlayerRecord | None: ...

    def find_by_name(self, name: str) -> PlayerRecord | None: ...

    def find_by_contact(self, contact: str) -> PlayerRecord | None: ...

    def upsert(self, record: PlayerRecord) -> PlayerRecord: ...

    def list_top(
        self, *, mode: Mode | None, since: datetime | None, limit: int
    ) -> list[PlayerRecord]: ...


class InMemoryRecordStore:
    """Dict-backed store for tests and single-process deployments."""

    def __init__(self) -> None:
        self._records: dict[tuple[str, str], PlayerRecord] = {}
        self._lock = Lock()

    def find_by_device(self, device_id: str, mode: Mode) -> PlayerRecord | None:
        with self._lock:
            return self._records.get((device_id, mode))

    def find_any_by_device(self, device_id: str) -> PlayerRecord | None:
        with self._lock:
            for record in self._records.values():
                if record.device_id == device_id:
                    return record
        return None

    def find_by_name(self, name: str) -> PlayerRecord | None:
        with self._lock:
            for record in self._records.values():
                if record.player_name == name:
                    return record
        return None

    def find_by_contact(self, contact: str) -> PlayerRecord | None:
        with self._lock:
            for record in self._records.values():
                if record.contact == contact:
                    return record
        return None

    def upsert(self, record: PlayerRecord) -> PlayerRecord:
        now = datetime.now(UTC)
        key = (record.device_id, record.mode)
        with self._lock:
            existing = self._records.get(key)
            created_at = existing.created_at if existing else now
            stored = dataclasses.replace(record, created_at=created_at, updated_at=now)
            self._records[key] = stored
            return stored

    def list_top(
        self, *, mode: Mode | None, since: datetime | None, limit: int
    ) -> list[PlayerRecord]:
        with self._lock:
            records = [
                record
                for record in self._records.values()
                if record.score > 0
                and (mode is None or record.mode == mode)
                and (since is None or (record.updated_at and record.updated_at >= since))
            ]
        epoch = datetime.min.replace(tzinfo=UTC)
        records.sort(key=lambda r: r.created_at or epoch)
        records.sort(key=lambda r: r.score, reverse=True)
        return records[:limit]

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
