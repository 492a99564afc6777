"""Tests for the in-memory metadata cache."""

import threading
import time

import pytest

from valuecast.cache import InMemoryCache, MetadataCache


def test_factory_result_memoized(cache):
    calls = []

    def factory():
        calls.append(1)
        return [1, 2, 3, 4, 5, 6]

    first = cache.get("test", factory)
    second = cache.get("test", factory)

    assert first == [1, 2, 3, 4, 5, 6]
    assert second is first
    assert len(calls) == 1


def test_get_without_factory(cache):
    assert cache.get("missing") is None

    cache.set("users", [111])

    assert cache.get("users") == [111]


def test_set_replaces_value(cache):
    cache.set("key", 1)
    cache.set("key", 2)

    assert cache.get("key", lambda: 3) == 2


def test_remove_and_clear(cache):
    cache.set("a", 1)
    cache.set("b", 2)

    assert cache.remove("a")
    assert not cache.remove("a")
    assert "a" not in cache
    assert len(cache) == 1

    cache.clear()

    assert len(cache) == 0


def test_failing_factory_stores_nothing(cache):
    def boom():
        raise RuntimeError("factory failed")

    with pytest.raises(RuntimeError, match="factory failed"):
        cache.get("key", boom)

    assert "key" not in cache
    assert not cache._key_locks
    assert cache.get("key", lambda: "ok") == "ok"


def test_key_locks_released_after_compute(cache):
    cache.get("a", lambda: 1)

    assert not cache._key_locks
    assert not cache._waiters


def test_concurrent_first_access_computes_once(cache):
    """CRITICAL: Concurrent first computations for one key run the factory once.

    Why: Every caller must see the same, fully computed entry.
    """
    calls = []
    calls_lock = threading.Lock()
    barrier = threading.Barrier(8)
    results = []

    def factory():
        with calls_lock:
            calls.append(1)
        time.sleep(0.05)
        return object()

    def worker():
        barrier.wait()
        results.append(cache.get("shared", factory))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(calls) == 1
    assert len(results) == 8
    assert all(result is results[0] for result in results)


def test_satisfies_metadata_cache_protocol():
    assert isinstance(InMemoryCache(), MetadataCache)
