"""
Redis-backed translation cache.

Each translation key is stored as one Redis hash of code -> label under
``prefix + key`` with an expiry set every time the hash is rewritten. A marker
field is written alongside the codes so that a present hash without the
requested code is a definitive "not found" rather than a reason to reload.
"""

import re
from datetime import timedelta
from typing import Any, Dict, Optional, Union

import redis

from ..config import CacheType, DEFAULT_REDIS_KEY_PREFIX
from ..errors import ConfigurationError, StoreError
from ..metrics import CacheMetrics
from ..models import CodeMap, NOT_FOUND, Resolution, freeze_code_map
from ..provider import TranslationProvider
from .base import TranslationCache
from .single_flight import SingleFlight

# Reserved hash field; a code equal to it is never resolved
LOADED_MARKER = "\x00translabel:loaded"

_GLOB_CHARS = re.compile(r"([*?\[\]\\])")


class RedisTranslationCache(TranslationCache):
    """
    Code maps cached in Redis hashes with a TTL.

    Store failures raise StoreError; the provider is never consulted as a
    fallback for a broken store. Concurrent misses inside one process share a
    single provider load.
    """

    strategy = CacheType.REDIS

    def __init__(self,
                 provider: TranslationProvider,
                 client: redis.Redis,
                 ttl: Union[int, float, timedelta] = 3600,
                 key_prefix: str = DEFAULT_REDIS_KEY_PREFIX,
                 metrics: Optional[CacheMetrics] = None):
        if client is None:
            raise ConfigurationError("a Redis client is required", "client")
        if isinstance(ttl, timedelta):
            ttl = ttl.total_seconds()
        if ttl is None or ttl <= 0:
            raise ConfigurationError("ttl must be positive", "ttl")
        if not key_prefix:
            raise ConfigurationError("key_prefix must be a non-empty string", "key_prefix")

        super().__init__(provider, metrics)
        self.client = client
        self.key_prefix = key_prefix
        # EXPIRE takes whole seconds; round sub-second TTLs up rather than to zero
        self.ttl_seconds = max(1, int(round(ttl)))
        self._flights = SingleFlight()

        self.logger.info("Initialized Redis cache", key_prefix=key_prefix, ttl=self.ttl_seconds)

    def cache_key(self, key: str) -> str:
        """Generate the Redis key holding the hash for ``key``."""
        return f"{self.key_prefix}{key}"

    def get(self, key: str, code: str) -> Resolution:
        if code == LOADED_MARKER:
            return NOT_FOUND

        label, loaded = self._read(key, code)
        if label is not None:
            self._record_hit()
            return Resolution(label, True)
        if loaded:
            self._record_hit()
            return NOT_FOUND

        self._record_miss()
        code_map = self._flights.do(key, lambda: self._reload(key))
        return Resolution.of(code_map.get(code))

    def invalidate(self, key: str) -> None:
        cache_key = self.cache_key(key)
        try:
            removed = self.client.delete(cache_key)
        except redis.RedisError as e:
            raise StoreError(key, f"delete failed: {e}") from e

        if removed:
            self.metrics.record_invalidation(self.strategy.value)
            self.logger.info("Invalidated code map", key=key, cache_key=cache_key)

    def clear(self) -> None:
        """Delete every hash under this cache's prefix."""
        pattern = _GLOB_CHARS.sub(r"\\\1", self.key_prefix) + "*"
        try:
            keys = list(self.client.scan_iter(match=pattern, count=500))
            if keys:
                self.client.delete(*keys)
        except redis.RedisError as e:
            raise StoreError(pattern, f"clear failed: {e}") from e

        self.logger.info("Cleared Redis cache", pattern=pattern, keys_count=len(keys))

    def get_stats(self) -> Dict[str, Any]:
        stats = super().get_stats()
        stats["key_prefix"] = self.key_prefix
        stats["ttl_seconds"] = self.ttl_seconds
        return stats

    def _read(self, key: str, code: str):
        """Return (label, hash_present) for ``code`` in one round trip."""
        try:
            label, marker = self.client.hmget(self.cache_key(key), [code, LOADED_MARKER])
        except redis.RedisError as e:
            self.logger.error("Redis read failed", key=key, error=str(e))
            raise StoreError(key, f"read failed: {e}") from e

        return _decode(label), marker is not None

    def _reload(self, key: str) -> CodeMap:
        # A flight that finished after our HMGET may already have written the hash
        code_map = self._read_map(key)
        if code_map is not None:
            return code_map

        code_map = self._load(key)
        self._write(key, code_map)
        return code_map

    def _read_map(self, key: str) -> Optional[CodeMap]:
        """Return the whole stored map for ``key``, or None if it is not loaded."""
        try:
            raw = self.client.hgetall(self.cache_key(key))
        except redis.RedisError as e:
            self.logger.error("Redis read failed", key=key, error=str(e))
            raise StoreError(key, f"read failed: {e}") from e

        stored = {_decode(field): _decode(value) for field, value in (raw or {}).items()}
        if stored.pop(LOADED_MARKER, None) is None:
            return None
        return freeze_code_map(key, stored)

    def _write(self, key: str, code_map: CodeMap) -> None:
        cache_key = self.cache_key(key)
        mapping = dict(code_map)
        mapping[LOADED_MARKER] = "1"

        try:
            pipe = self.client.pipeline(transaction=True)
            pipe.delete(cache_key)
            pipe.hset(cache_key, mapping=mapping)
            pipe.expire(cache_key, self.ttl_seconds)
            pipe.execute()
        except redis.RedisError as e:
            self.logger.error("Redis write failed", key=key, error=str(e))
            raise StoreError(key, f"write failed: {e}") from e

        self.logger.info("Cached code map", key=key, codes=len(code_map), ttl=self.ttl_seconds)


def _decode(value) -> Optional[str]:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value
