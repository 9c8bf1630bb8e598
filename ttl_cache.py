# ttl_cache.py
import logging
import math
import time
from typing import Any, Awaitable, Callable, Hashable

from cachetools import TTLCache

logger = logging.getLogger(__name__)


class ResponseCache:
    """Memoizes awaited results by key, expiring them after ``ttl`` seconds.

    Expired entries are only dropped when the cache is touched. Two concurrent
    misses for the same key both run their fetcher; the last one to finish wins.
    Failed fetches are never stored.
    """

    def __init__(self, ttl: float = 600, maxsize: float = math.inf,
                 timer: Callable[[], float] = time.monotonic):
        self._store = TTLCache(maxsize=maxsize, ttl=ttl, timer=timer)

    async def get_or_fetch(self, key: Hashable, fetcher: Callable[[], Awaitable[Any]]) -> Any:
        try:
            return self._store[key]
        except KeyError:
            pass
        logger.debug("cache miss: %s", key)
        value = await fetcher()
        self._store[key] = value
        return value

    def __contains__(self, key: Hashable) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)
