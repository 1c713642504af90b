"""
Common contract for translation cache strategies.
"""

import threading
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..config import CacheType
from ..logging import get_logger
from ..metrics import CacheMetrics, get_default_metrics
from ..models import CodeMap, Resolution
from ..provider import TranslationProvider, load_code_map
from .single_flight import SingleFlight


class TranslationCache(ABC):
    """A lookup path from (key, code) to a label, backed by a provider."""

    strategy: CacheType

    def __init__(self, provider: TranslationProvider, metrics: Optional[CacheMetrics] = None):
        self.provider = provider
        self.metrics = metrics or get_default_metrics()
        self.logger = get_logger(f"translabel.cache.{self.strategy.value}")

        self._stats_lock = threading.Lock()
        self._counts = {"hits": 0, "misses": 0, "loads": 0, "load_errors": 0}

    @abstractmethod
    def get(self, key: str, code: str) -> Resolution:
        """Resolve ``code`` under ``key``, loading from the provider on a miss."""

    def invalidate(self, key: str) -> None:
        """Drop whatever is cached for ``key``."""

    def clear(self) -> None:
        """Drop every cached entry."""

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._stats_lock:
            counts = dict(self._counts)
        lookups = counts["hits"] + counts["misses"]
        counts["hit_rate"] = counts["hits"] / lookups if lookups else 0.0
        counts["strategy"] = self.strategy.value
        return counts

    def _load(self, key: str) -> CodeMap:
        """Fetch a fresh code map, recording timings and outcome."""
        start = time.perf_counter()
        try:
            code_map = load_code_map(self.provider, key)
        except Exception:
            self._count("load_errors")
            self.metrics.record_load(self.strategy.value, time.perf_counter() - start, success=False)
            raise

        self._count("loads")
        self.metrics.record_load(self.strategy.value, time.perf_counter() - start, success=True)
        return code_map

    def _record_hit(self) -> None:
        self._count("hits")
        self.metrics.record_hit(self.strategy.value)

    def _record_miss(self) -> None:
        self._count("misses")
        self.metrics.record_miss(self.strategy.value)

    def _count(self, name: str) -> None:
        with self._stats_lock:
            self._counts[name] += 1


class CodeMapCache(TranslationCache):
    """
    Base for in-process strategies that cache the whole code map per key.

    Population goes through a single-flight table so that concurrent misses
    for one key produce exactly one provider call. Each key carries a
    generation that ``invalidate`` and ``clear`` advance; a load that started
    under an older generation is returned to its callers but never stored.

    Subclasses supply the entry storage; every ``_*_entry`` hook is called with
    ``self._lock`` held.
    """

    def __init__(self, provider: TranslationProvider, metrics: Optional[CacheMetrics] = None):
        super().__init__(provider, metrics)
        self._flights = SingleFlight()
        self._lock = threading.Lock()
        self._epoch = 0
        self._generations: Dict[str, int] = {}

    @abstractmethod
    def _get_entry(self, key: str) -> Optional[CodeMap]:
        """Return the cached map for ``key`` or None."""

    @abstractmethod
    def _put_entry(self, key: str, code_map: CodeMap) -> None:
        """Cache ``code_map`` under ``key``."""

    @abstractmethod
    def _remove_entry(self, key: str) -> bool:
        """Drop ``key``; return whether anything was cached."""

    @abstractmethod
    def _clear_entries(self) -> int:
        """Drop everything; return how many keys were cached."""

    def get(self, key: str, code: str) -> Resolution:
        code_map = self._lookup(key)
        if code_map is not None:
            self._record_hit()
        else:
            self._record_miss()
            code_map = self._flights.do(key, lambda: self._populate(key))

        return Resolution.of(code_map.get(code))

    def get_code_map(self, key: str) -> CodeMap:
        """Return the whole cached map for ``key``, loading it if needed."""
        code_map = self._lookup(key)
        if code_map is None:
            code_map = self._flights.do(key, lambda: self._populate(key))
        return code_map

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._generations[key] = self._generations.get(key, 0) + 1
            removed = self._remove_entry(key)
        self._flights.forget(key)

        if removed:
            self.metrics.record_invalidation(self.strategy.value)
            self.logger.info("Invalidated code map", key=key)

    def clear(self) -> None:
        with self._lock:
            self._epoch += 1
            self._generations.clear()
            count = self._clear_entries()
        self._flights.forget_all()
        self.logger.info("Cleared all code maps", count=count)

    def _lookup(self, key: str) -> Optional[CodeMap]:
        with self._lock:
            return self._get_entry(key)

    def _generation(self, key: str):
        return self._epoch, self._generations.get(key, 0)

    def _populate(self, key: str) -> CodeMap:
        with self._lock:
            generation = self._generation(key)
            # A flight that finished just before this one may already have stored it
            code_map = self._get_entry(key)
        if code_map is not None:
            return code_map

        code_map = self._load(key)

        with self._lock:
            current = self._generation(key) == generation
            if current:
                self._put_entry(key, code_map)

        if current:
            self.logger.info("Cached code map", key=key, codes=len(code_map))
        else:
            self.logger.info("Discarded code map loaded before invalidation", key=key)
        return code_map
