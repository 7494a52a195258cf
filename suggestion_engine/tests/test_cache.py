from __future__ import annotations

from suggestion_engine.smart_filters.cache import TTLCache, make_key


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_make_key():
    assert make_key("smart_filters", 41.0, 29.0, "abc") == "smart_filters:41.0:29.0:abc"
    assert make_key("smart_filters", 41.0, 29.0, None) == "smart_filters:41.0:29.0:"


def test_miss_then_hit():
    cache = TTLCache(clock=FakeClock())
    assert cache.get("k") is None
    cache.set("k", "v", ttl_seconds=60)
    assert cache.get("k") == "v"

    stats = cache.stats()
    assert stats == {"size": 1, "hits": 1, "misses": 1, "hit_rate": 50.0}


def test_entry_expires():
    clock = FakeClock()
    cache = TTLCache(clock=clock)
    cache.set("k", "v", ttl_seconds=60)

    clock.now = 59.9
    assert cache.get("k") == "v"
    clock.now = 60.0
    assert cache.get("k") is None
    assert cache.stats()["size"] == 0


def test_independent_keys():
    cache = TTLCache(clock=FakeClock())
    cache.set("a", 1, ttl_seconds=10)
    cache.set("b", 2, ttl_seconds=10)
    cache.delete("a")
    assert cache.get("a") is None
    assert cache.get("b") == 2


def test_clear_resets_stats():
    cache = TTLCache(clock=FakeClock())
    cache.set("k", "v", ttl_seconds=10)
    cache.get("k")
    cache.clear()
    assert cache.stats() == {"size": 0, "hits": 0, "misses": 0, "hit_rate": 0.0}
