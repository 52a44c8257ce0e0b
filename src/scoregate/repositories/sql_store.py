"""SQLAlchemy-backed player record store."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import cast

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from scoregate.models import PlayerScore
from scoregate.repositories.record_store import Mode, PlayerRecord
from scoregate.core.errors import StoreUnavailable

__all__ = ["SqlRecordStore"]

logger = logging.getLogger(__name__)


def _aware(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes; everything is stored as UTC.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_record(row: PlayerScore) -> PlayerRecord:
    return PlayerRecord(
        device_id=row.device_id,
        player_name=row.player_name,
        score=int(row.score),
        mode=cast(Mode, row.mode),
        contact=row.contact,
        play_count=int(row.play_count or 0),
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )


class SqlRecordStore:
    """Thin wrapper around database access for player score rows."""

    def __init__(self, session: Session) -> None:
        """Initialize the store with a synchronous SQLAlchemy session."""
        self.session = session

    def _first(self, stmt) -> PlayerRecord | None:
        try:
            row = self.session.execute(stmt.limit(1)).scalars().first()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Player record lookup failed: %s", exc, exc_info=True)
            raise StoreUnavailable("player record lookup failed") from exc
        return _to_record(row) if row is not None else None

    def find_by_device(self, device_id: str, mode: Mode) -> PlayerRecord | None:
        return self._first(
            select(PlayerScore).where(PlayerScore.device_id == device_id, PlayerScore.mode == mode)
        )

    def find_any_by_device(self, device_id: str) -> PlayerRecord | None:
        return self._first(
            select(PlayerScore).where(PlayerScore.device_id == device_id).order_by(PlayerScore.id)
        )

    def find_by_name(self, name: str) -> PlayerRecord | None:
        return self._first(select(PlayerScore).where(PlayerScore.player_name == name))

    def find_by_contact(self, contact: str) -> PlayerRecord | None:
        return self._first(select(PlayerScore).where(PlayerScore.contact == contact))

    def upsert(self, record: PlayerRecord) -> PlayerRecord:
        """Insert or replace the row for the record's device and mode.

        The write is committed before returning; any failure rolls the
        session back and surfaces as ``StoreUnavailable``.
        """
        try:
            row = (
                self.session.execute(
                    select(PlayerScore).where(
                        PlayerScore.device_id == record.device_id,
                        PlayerScore.mode == record.mode,
                    )
                )
                .scalars()
                .first()
            )
            if row is None:
                row = PlayerScore(device_id=record.device_id, mode=record.mode)
                self.session.add(row)
            row.player_name = record.player_name
            row.score = record.score
            row.contact = record.contact
            row.play_count = record.play_count
            self.session.commit()
            self.session.refresh(row)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Player record upsert failed: %s", exc, exc_info=True)
            raise StoreUnavailable("player record upsert failed") from exc
        return _to_record(row)

    def list_top(
        self, *, mode: Mode | None, since: datetime | None, limit: int
    ) -> list[PlayerRecord]:
        stmt = select(PlayerScore).where(PlayerScore.score > 0)
        if mode is not None:
            stmt = stmt.where(PlayerScore.mode == mode)
        if since is not None:
            stmt = stmt.where(PlayerScore.updated_at >= since)
        stmt = stmt.order_by(PlayerScore.score.desc(), PlayerScore.created_at.asc()).limit(limit)
        try:
            rows = self.session.execute(stmt).scalars().all()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Leaderboard query failed: %s", exc, exc_info=True)
            raise StoreUnavailable("leaderboard query failed") from exc
        return [_to_record(row) for row in rows]
