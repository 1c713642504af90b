"""
Translation cache strategies.

- noop: no caching, every lookup calls the provider
- unbounded: whole code map per key, kept until invalidated
- bounded: whole code map per key with LRU size bound and write-time TTL
- redis_store: code map per key in a Redis hash with an expiry

All strategies share the TranslationCache contract and collapse concurrent
loads of the same key into one provider call where they cache.
"""

from .base import TranslationCache, CodeMapCache
from .bounded import BoundedTranslationCache
from .noop import NoOpTranslationCache
from .redis_store import RedisTranslationCache
from .single_flight import SingleFlight
from .unbounded import UnboundedTranslationCache

__all__ = [
    "TranslationCache",
    "CodeMapCache",
    "NoOpTranslationCache",
    "UnboundedTranslationCache",
    "BoundedTranslationCache",
    "RedisTranslationCache",
    "SingleFlight",
]
