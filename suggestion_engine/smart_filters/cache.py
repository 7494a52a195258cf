from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any


def make_key(prefix: str, *parts: Any) -> str:
    """Compose an opaque cache key, e.g. ``smart_filters:41.0:29.0:abc``."""
    return ":".join([prefix, *("" if p is None else str(p) for p in parts)])


class TTLCache:
    """In-process key/value store with per-entry expiry.

    Each operation touches a single key with one dict read or write, so
    independent keys can be used from concurrent tasks without locking.
    The clock is injectable so tests can move time forward.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, dict[str, Any]] = {}
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry and self._clock() < entry["expires_at"]:
            self._hits += 1
            return entry["value"]
        if entry:
            self._entries.pop(key, None)
        self._misses += 1
        return None

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        self._entries[key] = {"value": value, "expires_at": self._clock() + ttl_seconds}

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def stats(self) -> dict:
        total = self._hits + self._misses
        return {
            "size": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / total * 100, 1) if total > 0 else 0.0,
        }

    def clear(self) -> None:
        self._entries.clear()
        self._hits = 0
        self._misses = 0
