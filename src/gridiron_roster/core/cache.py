"""In-memory key/value store with a per-entry absolute expiry."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    expires_at: float


class ExpiringCache:
    """Thread-safe TTL cache.

    Expiry is enforced when an entry is read: a ``get`` on an entry whose
    ``expires_at`` is at or before ``now`` deletes it and reports a miss.
    There is no background sweep and no size bound. Keys are built by callers,
    who must put enough context in them (season, limit, lowercased name) to
    avoid collisions.

    ``None`` is a storable value, so callers that cache negative results
    should pass an explicit ``default`` sentinel to ``get``.
    """

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            if entry.expires_at <= self._clock():
                del self._entries[key]
                return default
            return entry.value

    def set(self, key: str, value: Any, ttl_s: float) -> None:
        if ttl_s <= 0:
            raise ValueError(f"ttl_s must be positive, got {ttl_s}")
        with self._lock:
            self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + ttl_s)

    def __len__(self) -> int:
        # Includes entries that have expired but not been read since.
        with self._lock:
            return len(self._entries)
