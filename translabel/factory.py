"""
Builds translation caches and services from settings.
"""

from typing import Optional

import redis

from .caching import (
    BoundedTranslationCache,
    NoOpTranslationCache,
    RedisTranslationCache,
    TranslationCache,
    UnboundedTranslationCache,
)
from .config import CacheType, TranslationCacheSettings, get_settings
from .errors import ConfigurationError
from .logging import configure_logging, get_logger
from .metrics import CacheMetrics
from .provider import TranslationProvider
from .service import TranslationService

logger = get_logger("translabel.factory")


def create_redis_client(settings: TranslationCacheSettings) -> redis.Redis:
    """Create a Redis client from settings."""
    return redis.Redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=settings.redis_socket_timeout,
        socket_timeout=settings.redis_socket_timeout,
        health_check_interval=30
    )


def build_cache(provider: TranslationProvider,
                settings: Optional[TranslationCacheSettings] = None,
                redis_client: Optional[redis.Redis] = None,
                metrics: Optional[CacheMetrics] = None) -> TranslationCache:
    """Instantiate the cache strategy selected by ``settings.cache_type``."""
    if provider is None:
        raise ConfigurationError("a translation provider is required", "provider")
    settings = settings or get_settings()
    cache_type = settings.cache_type

    if cache_type == CacheType.NONE:
        cache = NoOpTranslationCache(provider, metrics=metrics)
    elif cache_type == CacheType.UNBOUNDED:
        cache = UnboundedTranslationCache(provider, metrics=metrics)
    elif cache_type == CacheType.BOUNDED:
        cache = BoundedTranslationCache(
            provider,
            max_size=settings.max_size,
            ttl=settings.ttl_seconds,
            metrics=metrics
        )
    elif cache_type == CacheType.REDIS:
        client = redis_client if redis_client is not None else create_redis_client(settings)
        cache = RedisTranslationCache(
            provider,
            client,
            ttl=settings.redis_ttl_seconds,
            key_prefix=settings.redis_key_prefix,
            metrics=metrics
        )
    else:
        raise ConfigurationError(f"Unknown cache type: {cache_type}", "cache_type")

    logger.info("Registered translation cache", strategy=cache_type.value)
    return cache


def build_translation_service(provider: TranslationProvider,
                              settings: Optional[TranslationCacheSettings] = None,
                              redis_client: Optional[redis.Redis] = None,
                              metrics: Optional[CacheMetrics] = None) -> TranslationService:
    """Build a TranslationService wired to the configured cache, configuring logging first."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    return TranslationService(build_cache(provider, settings, redis_client, metrics))
