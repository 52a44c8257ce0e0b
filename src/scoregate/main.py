# src/scoregate/main.py
"""Main entry point for the score gate service."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scoregate.api.v1 import analytics_router, competition_router, scores_router
from scoregate.core.settings import settings
from scoregate.db.session import create_tables
from scoregate.services.analytics import TapCounter
from scoregate.services.maintenance import MaintenanceWorker
from scoregate.services.pipeline import build_pipeline

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Score Gate API",
    description="Session-gated leaderboard score submission",
    version=settings.app_version,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

app.include_router(scores_router, prefix="/api/v1")
app.include_router(analytics_router, prefix="/api/v1")
app.include_router(competition_router, prefix="/api/v1")

# Tokens and cooldowns are owned by the app instance, not by module globals.
app.state.pipeline = build_pipeline()
app.state.tap_counter = TapCounter(
    max_brand_length=settings.max_brand_length,
    max_device_id_length=settings.max_device_id_length,
    max_reported_taps=settings.max_reported_taps,
)
app.state.maintenance_worker = None


@app.on_event("startup")
async def on_startup() -> None:
    if settings.sync_on_boot:
        create_tables()
        logger.info("Database tables ensured")
    pipeline = app.state.pipeline
    worker = MaintenanceWorker(
        pipeline.registry,
        pipeline.rate_limiter,
        interval_seconds=settings.session_sweep_interval_seconds,
    )
    await worker.start()
    app.state.maintenance_worker = worker


@app.on_event("shutdown")
async def on_shutdown() -> None:
    worker: MaintenanceWorker | None = getattr(app.state, "maintenance_worker", None)
    if worker:
        await worker.stop()
    app.state.maintenance_worker = None


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok", "now": datetime.now(UTC).isoformat()}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("scoregate.main:app", host="0.0.0.0", port=4000, reload=settings.debug)
