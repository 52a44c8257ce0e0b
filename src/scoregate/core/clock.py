"""Time sources injected into the submission components."""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Anything that can report the current time in epoch seconds."""

    def now(self) -> float: ...


class WallClock:
    """Clock backed by the system wall time."""

    def now(self) -> float:
        return time.time()
