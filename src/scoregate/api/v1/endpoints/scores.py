"""Score submission endpoints."""

from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from scoregate.api.v1.errors import http_error
from scoregate.core.errors import StoreUnavailable, SubmissionRejected
from scoregate.core.settings import settings
from scoregate.db.session import get_db
from scoregate.repositories import PlayerRecordStore, SqlRecordStore
from scoregate.repositories.record_store import MODES, Mode
from scoregate.schemas.scores import RegistrationRequest, ScoreSubmission, SessionRequest
from scoregate.services.pipeline import SubmissionPipeline, SubmissionResult

router = APIRouter(prefix="/scores", tags=["scores"])

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


def get_pipeline(request: Request) -> SubmissionPipeline:
    """Return the pipeline owned by the running application."""
    return request.app.state.pipeline


def get_record_store(db: Annotated[Session, Depends(get_db)]) -> PlayerRecordStore:
    """Return a record store bound to the request's database session."""
    return SqlRecordStore(db)


PipelineDep = Annotated[SubmissionPipeline, Depends(get_pipeline)]
StoreDep = Annotated[PlayerRecordStore, Depends(get_record_store)]


def _parse_limit(raw: str | None) -> int:
    """Read the leading integer of a query value; junk or non-positive means default."""
    match = _LEADING_INT.match(raw or "")
    if match is None:
        return settings.leaderboard_default_limit
    digits = match.group(0).strip()
    if len(digits.lstrip("+-")) > 9:
        if digits.startswith("-"):
            return settings.leaderboard_default_limit
        return settings.leaderboard_max_limit
    value = int(digits)
    return value if value > 0 else settings.leaderboard_default_limit


def _render(result: SubmissionResult, response: Response) -> dict[str, Any]:
    if result.record is None:
        return {"ok": True, "reused": True}
    if result.created:
        response.status_code = status.HTTP_201_CREATED
    return result.record.to_dict()


@router.post("/session")
def start_session(payload: SessionRequest, pipeline: PipelineDep) -> dict[str, str]:
    """Issue a one-time session token at game start."""
    try:
        session_id = pipeline.issue_session(payload.device_id)
    except SubmissionRejected as exc:
        raise http_error(exc) from exc
    return {"sessionId": session_id}


@router.get("")
def list_scores(
    store: StoreDep,
    mode: Annotated[str | None, Query()] = None,
    period: Annotated[str | None, Query()] = None,
    limit: Annotated[str | None, Query()] = None,
) -> list[dict[str, Any]]:
    """Return the leaderboard, best scores first.

    Args:
        store: Player record store
        mode: Optional 'solo' or 'versus' filter; other values are ignored
        period: 'week' restricts to records updated in the last 7 days
        limit: Row cap, defaulting to the configured leaderboard size
    """
    row_cap = min(_parse_limit(limit), settings.leaderboard_max_limit)
    mode_filter: Mode | None = mode if mode in MODES else None  # type: ignore[assignment]
    since = datetime.now(UTC) - timedelta(days=7) if period == "week" else None
    try:
        records = store.list_top(mode=mode_filter, since=since, limit=row_cap)
    except StoreUnavailable as exc:
        raise http_error(exc) from exc
    return [record.to_dict() for record in records]


@router.post("/register")
def register_player(
    payload: RegistrationRequest,
    response: Response,
    pipeline: PipelineDep,
    store: StoreDep,
) -> dict[str, Any]:
    """Claim a player name (and optional contact) for a device."""
    try:
        result = pipeline.register(
            store,
            player_name=payload.player_name,
            device_id=payload.device_id,
            contact=payload.contact,
        )
    except (SubmissionRejected, StoreUnavailable) as exc:
        raise http_error(exc) from exc
    return _render(result, response)


@router.post("")
def submit_score(
    payload: ScoreSubmission,
    response: Response,
    pipeline: PipelineDep,
    store: StoreDep,
) -> dict[str, Any]:
    """Submit a finished game's score together with its session token."""
    try:
        result = pipeline.submit(store, payload.to_claim())
    except (SubmissionRejected, StoreUnavailable) as exc:
        raise http_error(exc) from exc
    return _render(result, response)
