"""Tests for logo tap watermark counters."""

from unittest.mock import patch

import pytest
from fastapi import status
from sqlalchemy.exc import OperationalError

from scoregate.core.errors import RejectionCode, StoreUnavailable, SubmissionRejected
from scoregate.repositories import InMemoryTapStore, SqlTapStore
from scoregate.services.analytics import TapCounter

LOGO = "/api/v1/analytics/logo"


@pytest.fixture()
def counter() -> TapCounter:
    return TapCounter(max_reported_taps=1000)


@pytest.fixture(params=["memory", "sql"])
def tap_store(request, db_session):
    if request.param == "memory":
        return InMemoryTapStore()
    return SqlTapStore(db_session)


def test_reported_counts_only_raise_the_watermark(counter, tap_store) -> None:
    assert counter.record(tap_store, brand="acme", device_id="D1", taps=5) == 5
    assert counter.record(tap_store, brand="acme", device_id="D1", taps=5) == 5
    assert counter.record(tap_store, brand="acme", device_id="D1", taps=3) == 5
    assert counter.record(tap_store, brand="acme", device_id="D1", taps=9) == 9

    assert counter.totals(tap_store) == {"acme": 9}


def test_totals_sum_devices_per_brand(counter, tap_store) -> None:
    counter.record(tap_store, brand="acme", device_id="D1", taps=4)
    counter.record(tap_store, brand="acme", device_id="D2", taps=6)
    counter.record(tap_store, brand="globex", device_id="D1", taps=1)

    assert counter.totals(tap_store) == {"acme": 10, "globex": 1}


def test_brand_and_device_are_normalized(counter, tap_store) -> None:
    counter.record(tap_store, brand="  " + "b" * 40, device_id=None, taps=2)
    counter.record(tap_store, brand="b" * 32, device_id="   ", taps=1)

    assert counter.totals(tap_store) == {"b" * 32: 2}


@pytest.mark.parametrize(
    ("brand", "taps"),
    [(None, 1), ("  ", 1), ("acme", None), ("acme", -1), ("acme", 1.5), ("acme", True), ("acme", 1001)],
)
def test_bad_reports_are_rejected(counter, brand, taps) -> None:
    with pytest.raises(SubmissionRejected) as excinfo:
        counter.record(InMemoryTapStore(), brand=brand, device_id="D1", taps=taps)
    assert excinfo.value.code is RejectionCode.INVALID_INPUT


def test_sql_failures_surface_as_store_unavailable(db_session) -> None:
    store = SqlTapStore(db_session)
    error = OperationalError("SELECT", {}, Exception("down"))
    with patch.object(db_session, "execute", side_effect=error):
        with pytest.raises(StoreUnavailable):
            store.raise_watermark("acme", "D1", 1)
        with pytest.raises(StoreUnavailable):
            store.totals()


def test_logo_endpoints(client) -> None:
    first = client.post(LOGO, json={"brand": "acme", "deviceId": "D1", "taps": 3})
    assert first.status_code == status.HTTP_200_OK
    assert first.json() == {"ok": True, "taps": 3}

    retried = client.post(LOGO, json={"brand": "acme", "deviceId": "D1", "taps": 3})
    assert retried.json()["taps"] == 3
    client.post(LOGO, json={"brand": "acme", "deviceId": "D2", "taps": 2})

    assert client.get(LOGO).json() == {"acme": 5}

    missing = client.post(LOGO, json={"deviceId": "D1", "taps": 1})
    assert missing.status_code == status.HTTP_400_BAD_REQUEST
    assert missing.json()["detail"] == "invalid_input"
