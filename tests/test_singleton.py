import logging
import random
import threading

from cachemanager.cache import CacheManager
from cachemanager.config import C


class TestSharedInstance:
    def test_same_instance(self):
        assert CacheManager.get_instance() is CacheManager.get_instance()

    def test_first_capacity_wins(self, caplog):
        first = CacheManager.get_instance(5)
        with caplog.at_level(logging.WARNING):
            second = CacheManager.get_instance(10)
        assert first is second
        assert second.get_capacity() == 5
        assert "ignoring capacity 10" in caplog.text

    def test_same_capacity_does_not_warn(self, caplog):
        CacheManager.get_instance(5)
        with caplog.at_level(logging.WARNING):
            CacheManager.get_instance(5)
            CacheManager.get_instance()
        assert "ignoring capacity" not in caplog.text

    def test_default_capacity_from_config(self):
        C["cache_capacity"] = 11
        assert CacheManager.get_instance().get_capacity() == 11

    def test_shared_state(self):
        cache1 = CacheManager.get_instance()
        cache2 = CacheManager.get_instance()
        cache1.set("test-key", "test-value")
        assert cache2.get("test-key") == "test-value"

    def test_reset_instance(self):
        first = CacheManager.get_instance(5)
        first.set("a", 1)
        CacheManager.reset_instance()
        assert not CacheManager.has_instance()
        second = CacheManager.get_instance(7)
        assert second is not first
        assert second.get_capacity() == 7
        assert second.size() == 0

    def test_resize_shared_instance(self):
        CacheManager.get_instance(5).resize(20)
        assert CacheManager.get_instance().get_capacity() == 20


class _CountingCacheManager(CacheManager):
    constructed = 0

    def __init__(self, capacity=None):
        type(self).constructed += 1
        super().__init__(capacity)


def test_concurrent_first_access_builds_one_instance():
    n_threads = 16
    barrier = threading.Barrier(n_threads)
    results = []

    def worker():
        barrier.wait()
        results.append(_CountingCacheManager.get_instance(8))

    threads = [threading.Thread(target=worker) for _ in range(n_threads)]
    try:
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert _CountingCacheManager.constructed == 1
        assert len({id(r) for r in results}) == 1
    finally:
        _CountingCacheManager.reset_instance()


def test_concurrent_operations_keep_invariants():
    cache = CacheManager(50)
    n_threads, n_ops = 8, 1000
    gets = [0] * n_threads
    max_sizes = [0] * n_threads

    def worker(idx):
        rng = random.Random(idx)
        for _ in range(n_ops):
            key = f"k{rng.randrange(100)}"
            if rng.random() < 0.5:
                cache.set(key, idx)
            else:
                cache.get(key)
                gets[idx] += 1
            max_sizes[idx] = max(max_sizes[idx], cache.size())

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(n_threads)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    stats = cache.stats()
    assert stats["total"] == sum(gets)
    assert max(max_sizes) <= 50
    assert stats["size"] <= 50
    assert len(cache.get_all()) == stats["size"]
