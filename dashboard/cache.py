# dashboard/cache.py
"""
In-process cache for the data behind dashboard pages.

Entries are keyed by route path and query string. Write actions call
``revalidate_path()`` with the route they touched so the next request to
that page, whatever its query string, goes back to the database.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple

logger = logging.getLogger(__name__)


@dataclass
class _CacheEntry:
    value: Any
    expires_at: float


class PageCache:
    """
    Path-keyed cache with a fixed TTL.

    A ``ttl_seconds`` of 0 disables caching without changing call sites.
    """

    def __init__(self, ttl_seconds: float = 60.0) -> None:
        self._store: Dict[Tuple[str, str], _CacheEntry] = {}
        # bumped on every revalidation so loads that started earlier are not stored
        self._generations: Dict[str, int] = {}
        self._clears = 0
        self._lock = threading.Lock()
        self._ttl = ttl_seconds

    @property
    def enabled(self) -> bool:
        return self._ttl > 0

    def get_or_load(self, path: str, query: str, loader: Callable[[], Any]) -> Any:
        """Return the cached value for (path, query), running ``loader`` on a miss."""
        key = (path, query)
        now = time.monotonic()

        with self._lock:
            entry = self._store.get(key)
            if entry is not None and now <= entry.expires_at:
                logger.debug("Page cache hit: path=%s query=%r", path, query)
                return entry.value
            if entry is not None:
                del self._store[key]
            generation = (self._clears, self._generations.get(path, 0))

        value = loader()

        if self.enabled:
            with self._lock:
                if generation == (self._clears, self._generations.get(path, 0)):
                    self._store[key] = _CacheEntry(value=value, expires_at=now + self._ttl)
                else:
                    logger.debug("Discarding load for %s revalidated mid-flight", path)

        return value

    def revalidate_path(self, path: str) -> int:
        """Drop every entry cached for ``path``. Returns the count removed."""
        with self._lock:
            self._generations[path] = self._generations.get(path, 0) + 1
            keys = [k for k in self._store if k[0] == path]
            for k in keys:
                del self._store[k]

        logger.info("Revalidated %s (%d entries dropped)", path, len(keys))
        return len(keys)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
            self._clears += 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
