"""Persisted leaderboard rows."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, Enum, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from scoregate.db.session import Base


def _utcnow() -> datetime:
    return datetime.now(UTC)


class PlayerScore(Base):
    """Best score and play count for one device in one game mode."""

    __tablename__ = "player_scores"
    __table_args__ = (
        UniqueConstraint("device_id", "mode", name="uq_player_scores_device_mode"),
        Index("ix_player_scores_mode_score", "mode", "score"),
        Index("ix_player_scores_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    device_id: Mapped[str] = mapped_column(String(64), nullable=False)
    # Uniqueness is per owning device, so a device may reuse its name across modes.
    player_name: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    mode: Mapped[str] = mapped_column(
        Enum("solo", "versus", name="score_mode"), nullable=False, default="solo"
    )
    contact: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)
    play_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )
