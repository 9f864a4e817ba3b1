"""In-memory response cache with a write TTL and LRU capacity bound."""

import logging
import threading
import time
from collections import OrderedDict
from typing import Any, Callable, Dict, Hashable, Tuple

from prometheus_client import Counter

from .config import CACHE_MAX_ENTRIES, CACHE_TTL_SECONDS

logger = logging.getLogger(__name__)

CACHE_REQUESTS = Counter(
    "response_cache_requests_total",
    "Response cache lookups",
    ["cache", "result"],
)


class ResponseCache:
    """Cache-aside store wrapping compute functions.

    Entries expire ``ttl`` seconds after they were written. Once ``maxsize``
    entries are held, inserting another evicts the least recently used one.
    ``compute`` runs outside the lock, so two concurrent misses on the same
    key may both compute; the later write wins.
    """

    def __init__(
        self,
        name: str,
        ttl: float = CACHE_TTL_SECONDS,
        maxsize: int = CACHE_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.name = name
        self.ttl = ttl
        self.maxsize = maxsize
        self._clock = clock
        self._entries: "OrderedDict[Hashable, Tuple[float, Any]]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                expires_at, value = entry
                if now < expires_at:
                    self._entries.move_to_end(key)
                    self._hits += 1
                    CACHE_REQUESTS.labels(cache=self.name, result="hit").inc()
                    return value
                del self._entries[key]
            self._misses += 1
        CACHE_REQUESTS.labels(cache=self.name, result="miss").inc()

        value = compute()
        self._store(key, value)
        return value

    def _store(self, key: Hashable, value: Any) -> None:
        expires_at = self._clock() + self.ttl
        with self._lock:
            self._entries[key] = (expires_at, value)
            self._entries.move_to_end(key)
            while len(self._entries) > self.maxsize:
                evicted, _ = self._entries.popitem(last=False)
                self._evictions += 1
                logger.debug("Evicted %s from %s cache", evicted, self.name)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
                "size": len(self._entries),
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


asteroid_cache = ResponseCache("asteroids")
airport_cache = ResponseCache("airports")
station_cache = ResponseCache("stations")
