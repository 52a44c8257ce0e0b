"""Per-device logo tap counters."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from scoregate.db.session import Base


def _utcnow() -> datetime:
    return datetime.now(UTC)


class LogoTap(Base):
    """Highest cumulative tap count a device has reported for a brand."""

    __tablename__ = "logo_taps"
    __table_args__ = (UniqueConstraint("brand", "device_id", name="uq_logo_taps_brand_device"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    brand: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    device_id: Mapped[str] = mapped_column(String(64), nullable=False)
    taps: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )
