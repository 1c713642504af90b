"""
Resolution service: the public entry point for code -> label lookups.
"""

from typing import Any, Dict, Optional

from .caching import (
    BoundedTranslationCache,
    NoOpTranslationCache,
    TranslationCache,
    UnboundedTranslationCache,
)
from .config import CacheType
from .errors import ConfigurationError, InvalidKeyError
from .failure import FailurePolicy, FailureStrategy, apply_failure_policy
from .logging import get_logger, reset_translation_key, set_translation_key
from .models import NOT_FOUND, Resolution
from .provider import TranslationProvider


class TranslationService:
    """
    Resolves codes to labels through a cache strategy.

    The service owns no global state: every instance wraps the cache it was
    given, so differently configured services can live side by side.
    """

    def __init__(self, cache: TranslationCache):
        if cache is None:
            raise ConfigurationError("a cache strategy is required", "cache")
        self.cache = cache
        self.logger = get_logger("translabel.service")

    @classmethod
    def from_provider(cls,
                      provider: TranslationProvider,
                      cache_type: CacheType = CacheType.UNBOUNDED,
                      **options) -> "TranslationService":
        """Build a service with an in-process cache strategy around ``provider``."""
        if cache_type == CacheType.NONE:
            cache = NoOpTranslationCache(provider, **options)
        elif cache_type == CacheType.UNBOUNDED:
            cache = UnboundedTranslationCache(provider, **options)
        elif cache_type == CacheType.BOUNDED:
            cache = BoundedTranslationCache(provider, **options)
        else:
            raise ConfigurationError(
                f"{cache_type.value} caches need external wiring; use translabel.factory",
                "cache_type"
            )
        return cls(cache)

    def resolve(self, key: str, code: Optional[str]) -> Resolution:
        """
        Resolve ``code`` under translation key ``key``.

        Returns NOT_FOUND without touching the cache when ``code`` is None or
        empty. Raises ProviderError or StoreError when the lookup itself
        breaks; a missing mapping is never an exception.
        """
        if not key or not isinstance(key, str):
            raise InvalidKeyError(details={"key": key})
        if code is None or code == "":
            return NOT_FOUND
        if not isinstance(code, str):
            code = str(code)

        token = set_translation_key(key)
        try:
            resolution = self.cache.get(key, code)
        finally:
            reset_translation_key(token)

        if not resolution.found:
            self.logger.debug("No label for code", key=key, code=code)
        return resolution

    def translate(self,
                  key: str,
                  code: Optional[str],
                  on_failure: FailurePolicy = FailureStrategy.NULL) -> Optional[str]:
        """Resolve and apply ``on_failure`` when there is no label."""
        return apply_failure_policy(key, code, self.resolve(key, code), on_failure)

    def invalidate(self, key: str) -> None:
        """Drop the cached mapping for ``key``."""
        self.cache.invalidate(key)

    def clear(self) -> None:
        """Drop every cached mapping."""
        self.cache.clear()

    def get_stats(self) -> Dict[str, Any]:
        return self.cache.get_stats()
