#  Copyright (c) Microsoft Corporation.
#  Licensed under the MIT License.
import logging

import fire

import cachemanager
from cachemanager.cache import CacheManager, read_through
from cachemanager.log import get_module_logger, TimeInspector
from cachemanager.utils.exceptions import CacheManagerException

logger = get_module_logger("cli", logging.INFO)


class CacheCLI:
    """
    This is the cachemanager CLI entrance.
    Every command runs one usage scenario against a freshly reset shared cache, prints what
    it observes and returns the final statistics.

    For examples:

        cachemanager lru_eviction
        cachemanager --config_path cache.yaml all

    """

    def __init__(self, config_path=None):
        if config_path is not None:
            cachemanager.init_from_yaml_conf(config_path)
            logger.info(f"Load config succeed: {config_path}")

    @staticmethod
    def _fresh(capacity=None):
        CacheManager.reset_instance()
        return CacheManager.get_instance(capacity)

    def basic_usage(self):
        cache = self._fresh(5)

        cache.set("user-1", {"id": 1, "name": "Alice", "email": "alice@example.com"})
        cache.set("user-2", {"id": 2, "name": "Bob", "email": "bob@example.com"})
        cache.set("user-3", {"id": 3, "name": "Charlie", "email": "charlie@example.com"})

        print("User:", cache.get("user-1"))
        stats = cache.stats()
        print("Stats:", stats)
        return stats

    def lru_eviction(self):
        cache = self._fresh(3)

        cache.set("entry-1", "Value 1")
        cache.set("entry-2", "Value 2")
        cache.set("entry-3", "Value 3")
        print("Initial:", cache.get_all())

        cache.get("entry-1")
        cache.set("entry-4", "Value 4")

        print("After eviction:", cache.get_all())
        print("Size:", f"{cache.size()}/{cache.get_capacity()}")
        return cache.stats()

    def singleton(self):
        self._fresh()
        cache1 = CacheManager.get_instance()
        cache2 = CacheManager.get_instance()

        cache1.set("test-key", "test-value")

        print("cache1 is cache2:", cache1 is cache2)
        print("Value from cache1:", cache1.get("test-key"))
        print("Value from cache2:", cache2.get("test-key"))
        return cache1.stats()

    def api_caching(self):
        cache = self._fresh(10)

        mock_database = {
            "user-123": {"id": 123, "name": "John Doe", "role": "admin"},
            "user-456": {"id": 456, "name": "Jane Smith", "role": "user"},
        }
        api_calls = []

        def load_user(user_id):
            api_calls.append(user_id)
            return mock_database.get(user_id)

        with TimeInspector.logt("api caching"):
            print("1st call:", read_through(cache, "user-123", load_user))
            print("2nd call (cached):", read_through(cache, "user-123", load_user))
            print("3rd call:", read_through(cache, "user-456", load_user))

        print("API calls:", len(api_calls))
        stats = cache.stats()
        print("Stats:", stats)
        return stats

    def error_handling(self):
        cache = self._fresh()

        for call, args in ((cache.set, ("", "value")), (cache.set, ("key", None)), (cache.resize, (-5,))):
            try:
                call(*args)
            except CacheManagerException as e:
                print(f"{type(e).__name__}: {e}")
        return cache.stats()

    def size_management(self):
        cache = self._fresh(5)

        for i in range(1, 6):
            cache.set(f"item-{i}", f"Value {i}")

        print("Initial size:", f"{cache.size()}/{cache.get_capacity()}")
        print("Items:", list(cache.get_all()))

        cache.resize(3)
        print("After resize to 3:", list(cache.get_all()))

        cache.resize(10)
        print("After resize to 10:", f"{cache.size()}/{cache.get_capacity()}")
        return cache.stats()

    def operations(self):
        cache = self._fresh()

        cache.set("key-1", "Value 1")
        cache.set("key-2", "Value 2")
        cache.set("key-3", "Value 3")

        print("Initial size:", cache.size())
        print("Has key-1:", cache.has("key-1"))

        cache.remove("key-2")
        print("After remove key-2:", cache.get_all())

        cache.clear()
        print("After clear size:", cache.size())
        return cache.stats()

    def all(self):
        """run every scenario, returns their statistics by name"""
        results = {}
        for name in (
            "basic_usage",
            "lru_eviction",
            "singleton",
            "api_caching",
            "error_handling",
            "size_management",
            "operations",
        ):
            print(f"\n=== {name} ===")
            results[name] = getattr(self, name)()
        return results


def run():
    fire.Fire(CacheCLI)


if __name__ == "__main__":
    run()
