"""Striped locks keyed by arbitrary strings."""

from __future__ import annotations

import hashlib
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from threading import Lock

DEFAULT_STRIPES = 64


class KeyedLocks:
    """A fixed pool of locks shared out by key hash.

    Two operations on the same key always serialize; operations on unrelated
    keys only contend when their keys land on the same stripe.
    """

    def __init__(self, stripes: int = DEFAULT_STRIPES) -> None:
        if stripes <= 0:
            raise ValueError("stripes must be positive")
        self._locks = [Lock() for _ in range(stripes)]

    def _stripe(self, key: str) -> int:
        # Stable across processes, unlike the builtin str hash.
        digest = hashlib.blake2b(key.encode("utf-8"), digest_size=8).digest()
        return int.from_bytes(digest, "big") % len(self._locks)

    @contextmanager
    def hold(self, *keys: str) -> Iterator[None]:
        """Hold the locks for every key; stripes are taken in ascending order."""
        stripes = sorted({self._stripe(key) for key in keys})
        with ExitStack() as stack:
            for index in stripes:
                stack.enter_context(self._locks[index])
            yield
