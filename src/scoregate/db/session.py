"""Engine and session factory for the player record tables."""

from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from scoregate.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Populate Base.metadata before create_all can run.
import scoregate.models  # noqa: E402,F401


def build_engine(url: str, *, echo: bool = False) -> Engine:
    """Create an engine usable from FastAPI's worker threads.

    SQLite connections are opened without the same-thread check, and an
    in-memory SQLite database is pinned to one shared connection so every
    session sees the same tables.
    """
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True, echo=echo)
    options: dict[str, object] = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        options["poolclass"] = StaticPool
    return create_engine(url, echo=echo, **options)


engine = build_engine(settings.database_url, echo=settings.sql_debug)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a request-scoped session and always close it."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind: Engine | None = None) -> None:
    """Create missing tables; existing ones are left untouched."""
    Base.metadata.create_all(bind=bind or engine)
