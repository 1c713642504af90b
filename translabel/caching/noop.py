"""
Pass-through strategy: every lookup goes to the provider.
"""

from ..config import CacheType
from ..models import Resolution
from .base import TranslationCache


class NoOpTranslationCache(TranslationCache):
    """Loads the full code map on every call; nothing is retained."""

    strategy = CacheType.NONE

    def get(self, key: str, code: str) -> Resolution:
        self._record_miss()
        return Resolution.of(self._load(key).get(code))
