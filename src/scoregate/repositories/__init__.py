"""Player record and tap counter storage backends."""

from .record_store import InMemoryRecordStore, Mode, PlayerRecord, PlayerRecordStore
from .sql_store import SqlRecordStore
from .tap_store import InMemoryTapStore, SqlTapStore, TapCounterStore

__all__ = [
    "InMemoryRecordStore",
    "InMemoryTapStore",
    "Mode",
    "PlayerRecord",
    "PlayerRecordStore",
    "SqlRecordStore",
    "SqlTapStore",
    "TapCounterStore",
]
