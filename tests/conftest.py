# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SYNC_ON_BOOT", "false")

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from scoregate.core.settings import Settings
from scoregate.db.session import Base, build_engine, create_tables
from scoregate.db.session import get_db as app_get_db
from scoregate.main import app as fastapi_app
from scoregate.repositories import InMemoryRecordStore
from scoregate.services.pipeline import SubmissionPipeline, build_pipeline

TEST_DB_URL = "sqlite://"
START_TIME = 1_700_000_000.0


class FakeClock:
    """Manually advanced clock for deterministic expiry tests."""

    def __init__(self, start: float = START_TIME) -> None:
        self.current = start

    def now(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Provide a Settings instance with the stock defaults."""
    return Settings()


@pytest.fixture()
def pipeline(clock: FakeClock, test_settings: Settings) -> SubmissionPipeline:
    return build_pipeline(test_settings, clock=clock)


@pytest.fixture()
def memory_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL)
    create_tables(engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def app(db_session: Session, pipeline: SubmissionPipeline) -> Iterator[FastAPI]:
    def _get_db_override() -> Generator[Session, None, None]:
        yield db_session

    original_pipeline = fastapi_app.state.pipeline
    fastapi_app.dependency_overrides[app_get_db] = _get_db_override
    fastapi_app.state.pipeline = pipeline
    try:
        yield fastapi_app
    finally:
        fastapi_app.dependency_overrides.pop(app_get_db, None)
        fastapi_app.state.pipeline = original_pipeline


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client
