"""Storage for client-reported logo tap counters."""

from __future__ import annotations

import logging
from collections import defaultdict
from threading import Lock
from typing import Protocol

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from scoregate.core.errors import StoreUnavailable
from scoregate.models import LogoTap

__all__ = ["InMemoryTapStore", "SqlTapStore", "TapCounterStore"]

logger = logging.getLogger(__name__)


class TapCounterStore(Protocol):
    """Watermark storage: a stored count only ever moves up."""

    def raise_watermark(self, brand: str, device_id: str, reported: int) -> int: ...

    def totals(self) -> dict[str, int]: ...


class InMemoryTapStore:
    def __init__(self) -> None:
        self._taps: dict[tuple[str, str], int] = {}
        self._lock = Lock()

    def raise_watermark(self, brand: str, device_id: str, reported: int) -> int:
        key = (brand, device_id)
        with self._lock:
            stored = max(self._taps.get(key, 0), reported)
            self._taps[key] = stored
            return stored

    def totals(self) -> dict[str, int]:
        totals: dict[str, int] = defaultdict(int)
        with self._lock:
            for (brand, _device), taps in self._taps.items():
                totals[brand] += taps
        return dict(totals)


class SqlTapStore:
    """Tap counters in the ``logo_taps`` table."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def raise_watermark(self, brand: str, device_id: str, reported: int) -> int:
        try:
            row = (
                self.session.execute(
                    select(LogoTap).where(LogoTap.brand == brand, LogoTap.device_id == device_id)
                )
                .scalars()
                .first()
            )
            if row is None:
                row = LogoTap(brand=brand, device_id=device_id, taps=reported)
                self.session.add(row)
            elif reported > row.taps:
                row.taps = reported
            self.session.commit()
            stored = int(row.taps)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Logo tap update failed: %s", exc, exc_info=True)
            raise StoreUnavailable("logo tap update failed") from exc
        return stored

    def totals(self) -> dict[str, int]:
        stmt = select(LogoTap.brand, func.sum(LogoTap.taps)).group_by(LogoTap.brand)
        try:
            rows = self.session.execute(stmt).all()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Logo tap totals query failed: %s", exc, exc_info=True)
            raise StoreUnavailable("logo tap totals query failed") from exc
        return {brand: int(total or 0) for brand, total in rows}
