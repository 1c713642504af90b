"""
Bounded in-process cache with LRU size eviction and write-time TTL.
"""

import time
from typing import Any, Callable, Dict, Optional

from cachetools import LRUCache, TTLCache

from ..config import CacheType
from ..errors import ConfigurationError
from ..metrics import CacheMetrics
from ..models import CodeMap
from ..provider import TranslationProvider
from .base import CodeMapCache


class BoundedTranslationCache(CodeMapCache):
    """
    Caches whole code maps per key, evicting on size or age.

    Eviction always drops the whole map for a key; individual codes are never
    evicted. ``ttl`` is measured from when the map was written, so reads do not
    extend it. Without a ``ttl`` only the LRU size bound applies.

    Args:
        provider: Source of code maps
        max_size: Maximum number of translation keys held
        ttl: Seconds a map stays valid after it is written, or None
        timer: Clock used for expiry; defaults to ``time.monotonic``
        metrics: Metrics sink; defaults to the process-wide collector
    """

    strategy = CacheType.BOUNDED

    def __init__(self,
                 provider: TranslationProvider,
                 max_size: int = 1000,
                 ttl: Optional[float] = 3600.0,
                 timer: Callable[[], float] = time.monotonic,
                 metrics: Optional[CacheMetrics] = None):
        if max_size is None or max_size <= 0:
            raise ConfigurationError("max_size must be positive", "max_size")
        if ttl is not None and ttl <= 0:
            raise ConfigurationError("ttl must be positive", "ttl")

        super().__init__(provider, metrics)
        self.max_size = max_size
        self.ttl = ttl

        if ttl is None:
            self._maps = LRUCache(maxsize=max_size)
        else:
            self._maps = TTLCache(maxsize=max_size, ttl=ttl, timer=timer)

        self.logger.info("Initialized bounded cache", max_size=max_size, ttl=ttl)

    def _get_entry(self, key: str) -> Optional[CodeMap]:
        return self._maps.get(key)

    def _put_entry(self, key: str, code_map: CodeMap) -> None:
        self._maps[key] = code_map

    def _remove_entry(self, key: str) -> bool:
        return self._maps.pop(key, None) is not None

    def _clear_entries(self) -> int:
        # cachetools caches are not thread-safe; callers hold self._lock
        count = len(self._maps)
        self._maps.clear()
        return count

    def get_stats(self) -> Dict[str, Any]:
        stats = super().get_stats()
        with self._lock:
            if isinstance(self._maps, TTLCache):
                self._maps.expire()
            stats["cached_keys"] = len(self._maps)
        stats["max_size"] = self.max_size
        stats["ttl_seconds"] = self.ttl
        return stats
