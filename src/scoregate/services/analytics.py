"""Logo tap analytics.

Clients report their cumulative tap count rather than single taps, and the
stored value is raised to the highest count seen. A retried or duplicated
report therefore changes nothing.
"""

from __future__ import annotations

from typing import Any

from scoregate.core.errors import RejectionCode, SubmissionRejected
from scoregate.core.locks import KeyedLocks
from scoregate.repositories.tap_store import TapCounterStore

__all__ = ["TapCounter"]

UNKNOWN_DEVICE = "unknown"


class TapCounter:
    def __init__(
        self,
        *,
        max_brand_length: int = 32,
        max_device_id_length: int = 64,
        max_reported_taps: int = 1_000_000,
        locks: KeyedLocks | None = None,
    ) -> None:
        self.max_brand_length = max_brand_length
        self.max_device_id_length = max_device_id_length
        self.max_reported_taps = max_reported_taps
        self._locks = locks or KeyedLocks()

    def record(self, store: TapCounterStore, *, brand: Any, device_id: Any, taps: Any) -> int:
        """Store ``max(stored, taps)`` for the brand/device pair and return it."""
        if not isinstance(brand, str) or not brand.strip():
            raise SubmissionRejected(RejectionCode.INVALID_INPUT, "brand is required")
        if isinstance(taps, bool) or not isinstance(taps, int) or taps < 0:
            raise SubmissionRejected(
                RejectionCode.INVALID_INPUT, "taps must be a non-negative integer"
            )
        if taps > self.max_reported_taps:
            raise SubmissionRejected(RejectionCode.INVALID_INPUT, "taps out of range")

        normalized_brand = brand.strip()[: self.max_brand_length]
        device = device_id.strip() if isinstance(device_id, str) else ""
        device = device[: self.max_device_id_length] or UNKNOWN_DEVICE

        with self._locks.hold(f"tap:{normalized_brand}:{device}"):
            return store.raise_watermark(normalized_brand, device, taps)

    @staticmethod
    def totals(store: TapCounterStore) -> dict[str, int]:
        """Sum of every device's watermark, per brand."""
        return store.totals()
