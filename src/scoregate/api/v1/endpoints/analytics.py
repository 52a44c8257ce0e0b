"""Logo tap analytics endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from scoregate.api.v1.errors import http_error
from scoregate.core.errors import StoreUnavailable, SubmissionRejected
from scoregate.db.session import get_db
from scoregate.repositories import SqlTapStore, TapCounterStore
from scoregate.schemas.analytics import LogoTapReport
from scoregate.services.analytics import TapCounter

router = APIRouter(prefix="/analytics", tags=["analytics"])


def get_tap_counter(request: Request) -> TapCounter:
    return request.app.state.tap_counter


def get_tap_store(db: Annotated[Session, Depends(get_db)]) -> TapCounterStore:
    return SqlTapStore(db)


TapCounterDep = Annotated[TapCounter, Depends(get_tap_counter)]
TapStoreDep = Annotated[TapCounterStore, Depends(get_tap_store)]


@router.post("/logo")
def report_logo_taps(
    payload: LogoTapReport, counter: TapCounterDep, store: TapStoreDep
) -> dict[str, object]:
    """Record a device's cumulative tap count for a brand logo."""
    try:
        taps = counter.record(
            store, brand=payload.brand, device_id=payload.device_id, taps=payload.taps
        )
    except (SubmissionRejected, StoreUnavailable) as exc:
        raise http_error(exc) from exc
    return {"ok": True, "taps": taps}


@router.get("/logo")
def logo_tap_totals(counter: TapCounterDep, store: TapStoreDep) -> dict[str, int]:
    """Return total taps per brand across all devices."""
    try:
        return counter.totals(store)
    except StoreUnavailable as exc:
        raise http_error(exc) from exc
