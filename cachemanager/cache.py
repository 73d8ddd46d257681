# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.


import threading
from typing import Any, Callable, Dict, Hashable, Iterator, List, Optional, Tuple

from .config import C
from .log import get_module_logger
from .utils import check_positive_int, is_valid_key
from .utils.exceptions import InvalidKeyError, InvalidValueError


class _Node:
    __slots__ = ("key", "value", "prev", "next")

    def __init__(self, key=None, value=None):
        self.key = key
        self.value = value
        self.prev = None
        self.next = None


class LRUCacheUnit:
    """LRU Cache Unit.

    Entries are kept in a doubly linked list ordered from the least recently used (head)
    to the most recently used (tail), and indexed by key, so that both moving an entry to
    the tail and unlinking it from the middle are O(1).
    """

    def __init__(self, size_limit: int):
        self.size_limit = size_limit
        self._index: Dict[Hashable, _Node] = {}
        # sentinels, never exposed
        self._head = _Node()
        self._tail = _Node()
        self._head.next = self._tail
        self._tail.prev = self._head

    def _unlink(self, node: _Node):
        node.prev.next = node.next
        node.next.prev = node.prev
        node.prev = node.next = None

    def _append(self, node: _Node):
        last = self._tail.prev
        last.next = node
        node.prev = last
        node.next = self._tail
        self._tail.prev = node

    def move_to_end(self, key):
        node = self._index[key]
        self._unlink(node)
        self._append(node)

    def put(self, key, value) -> Optional[Tuple[Any, Any]]:
        """set `key` as the latest item, returns the evicted (key, value) if the unit was full"""
        node = self._index.get(key)
        if node is not None:
            # update in place never evicts
            node.value = value
            self.move_to_end(key)
            return None

        evicted = None
        if len(self._index) >= self.size_limit:
            evicted = self.popitem(last=False)

        node = _Node(key, value)
        self._index[key] = node
        self._append(node)
        return evicted

    def __setitem__(self, key, value):
        self.put(key, value)

    def __getitem__(self, key):
        node = self._index[key]
        self._unlink(node)
        self._append(node)
        return node.value

    def __contains__(self, key):
        return key in self._index

    def __len__(self):
        return len(self._index)

    def __iter__(self) -> Iterator:
        return self.keys()

    def __repr__(self):
        return f"{self.__class__.__name__}<size_limit:{self.size_limit} total_size:{len(self)}>\n{dict(self.items())!r}"

    def peek(self, key, default=None):
        """get the value without touching the recency order"""
        node = self._index.get(key)
        return default if node is None else node.value

    def keys(self) -> Iterator:
        node = self._head.next
        while node is not self._tail:
            yield node.key
            node = node.next

    def items(self) -> Iterator[Tuple[Any, Any]]:
        node = self._head.next
        while node is not self._tail:
            yield node.key, node.value
            node = node.next

    def set_limit_size(self, limit: int) -> List[Tuple[Any, Any]]:
        """set the limit and evict the oldest items beyond it, returns the evicted items"""
        self.size_limit = limit
        evicted = []
        while len(self._index) > self.size_limit:
            evicted.append(self.popitem(last=False))
        return evicted

    def clear(self):
        self._index.clear()
        self._head.next = self._tail
        self._tail.prev = self._head

    def popitem(self, last=True):
        if not self._index:
            raise KeyError("popitem(): cache unit is empty")
        node = self._tail.prev if last else self._head.next
        self._unlink(node)
        del self._index[node.key]
        return node.key, node.value

    def pop(self, key):
        node = self._index.pop(key)
        self._unlink(node)
        return node.value


class CacheManager:
    """Key-value LRU cache with hit/miss statistics.

    One shared instance is available through :meth:`get_instance`; independent instances
    can still be created directly. Every public operation holds the instance lock, so the
    reordering done by :meth:`get` is atomic with the read.

    .. note::

        ``get_instance`` only honours ``capacity`` on the call that creates the shared
        instance. Later calls return the existing instance unchanged and log a warning if
        a different capacity was asked for. Use :meth:`resize` to reconfigure it.
    """

    _instance: Optional["CacheManager"] = None
    _instance_lock = threading.Lock()

    logger = get_module_logger("CacheManager")

    def __init__(self, capacity: Optional[int] = None):
        capacity = C.cache_capacity if capacity is None else capacity
        check_positive_int(capacity)

        self._lock = threading.RLock()
        self._unit = LRUCacheUnit(capacity)
        self._hits = 0
        self._misses = 0

    @classmethod
    def get_instance(cls, capacity: Optional[int] = None) -> "CacheManager":
        """Get the shared instance, creating it with `capacity` on the first call.

        Parameters
        ----------
        capacity : int, optional
            capacity of the shared instance; ``C.cache_capacity`` if None.
            Ignored once the shared instance exists.
        """
        instance = cls._instance
        if instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls(capacity)
                    cls.logger.debug(f"shared cache created with capacity {cls._instance.get_capacity()}")
                    return cls._instance
                instance = cls._instance

        if capacity is not None and capacity != instance.get_capacity():
            cls.logger.warning(
                f"shared cache already exists with capacity {instance.get_capacity()}, "
                f"ignoring capacity {capacity!r}; call resize() to change it"
            )
        return instance

    @classmethod
    def reset_instance(cls):
        """drop the shared instance, the next `get_instance` builds a fresh one"""
        with cls._instance_lock:
            cls._instance = None
        cls.logger.debug("shared cache reset")

    @classmethod
    def has_instance(cls) -> bool:
        return cls._instance is not None

    def get(self, key) -> Any:
        """
        Get the value of `key` and mark it as most recently used.

        :return: the cached value; None on a miss.
        """
        with self._lock:
            if not isinstance(key, str) or key not in self._unit:
                self._misses += 1
                return None
            self._hits += 1
            return self._unit[key]

    def set(self, key: str, value: Any):
        """
        Store `value` under `key` as the most recently used entry.

        Inserting a new key into a full cache evicts the least recently used entry first.

        :raises InvalidKeyError: `key` is not a non-empty string.
        :raises InvalidValueError: `value` is None.
        """
        if not is_valid_key(key):
            raise InvalidKeyError(f"Cache key must be a non-empty string, your key is {key!r}")
        if value is None:
            raise InvalidValueError("Cache value cannot be None")

        with self._lock:
            evicted = self._unit.put(key, value)
        if evicted is not None:
            self.logger.debug(f"evict {evicted[0]!r}")

    def has(self, key) -> bool:
        """check existence without affecting the LRU order or the statistics"""
        if not isinstance(key, str):
            return False
        with self._lock:
            return key in self._unit

    def remove(self, key) -> bool:
        """
        :return: True if `key` was removed, False if not found
        """
        if not isinstance(key, str):
            return False
        with self._lock:
            if key not in self._unit:
                return False
            self._unit.pop(key)
            return True

    def clear(self):
        """remove all entries and reset the statistics"""
        with self._lock:
            self._unit.clear()
            self._hits = 0
            self._misses = 0

    def resize(self, new_capacity: int):
        """
        Set a new capacity, evicting least recently used entries while over it.

        :raises InvalidConfigError: `new_capacity` is not a positive integer.
        """
        check_positive_int(new_capacity)
        with self._lock:
            evicted = self._unit.set_limit_size(new_capacity)
        self.logger.info(f"resize to {new_capacity}, {len(evicted)} item(s) evicted")
        if evicted:
            self.logger.debug(f"evict {[k for k, _ in evicted]!r}")

    def size(self) -> int:
        with self._lock:
            return len(self._unit)

    def get_capacity(self) -> int:
        return self._unit.size_limit

    def stats(self) -> dict:
        """
        :return: dict with hits, misses, total, hit_rate, size and capacity.
            hit_rate is a percentage rounded to ``C.hit_rate_precision`` decimals, 0.0 when nothing was read.
        """
        precision = C.hit_rate_precision
        with self._lock:
            hits, misses = self._hits, self._misses
            size, capacity = len(self._unit), self._unit.size_limit
        total = hits + misses
        hit_rate = round(hits / total * 100, precision) if total > 0 else 0.0
        return {
            "hits": hits,
            "misses": misses,
            "total": total,
            "hit_rate": hit_rate,
            "size": size,
            "capacity": capacity,
        }

    def get_all(self) -> dict:
        """snapshot of all entries from least to most recently used, for debugging"""
        with self._lock:
            return dict(self._unit.items())

    def __len__(self):
        return self.size()

    def __contains__(self, key):
        return self.has(key)

    def __repr__(self):
        return f"{self.__class__.__name__}<capacity:{self.get_capacity()} size:{self.size()}>"


def read_through(cache: CacheManager, key: str, loader: Callable[[str], Any]) -> Any:
    """
    Read `key` from `cache`; on a miss load it with `loader` and store the result.

    None returned by `loader` means "not found" and is not stored.

    Parameters
    ----------
    cache : CacheManager
        the cache to read from and populate.
    key : str
        cache key, also passed to `loader`.
    loader : Callable[[str], Any]
        function doing the real lookup.
    """
    value = cache.get(key)
    if value is not None:
        return value

    value = loader(key)
    if value is not None:
        cache.set(key, value)
    return value
