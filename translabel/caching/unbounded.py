"""
Unbounded per-key code map cache.
"""

from typing import Any, Dict, Optional

from ..config import CacheType
from ..metrics import CacheMetrics
from ..models import CodeMap
from ..provider import TranslationProvider
from .base import CodeMapCache


class UnboundedTranslationCache(CodeMapCache):
    """Keeps every loaded code map until it is explicitly invalidated."""

    strategy = CacheType.UNBOUNDED

    def __init__(self, provider: TranslationProvider, metrics: Optional[CacheMetrics] = None):
        super().__init__(provider, metrics)
        self._maps: Dict[str, CodeMap] = {}

    def _get_entry(self, key: str) -> Optional[CodeMap]:
        return self._maps.get(key)

    def _put_entry(self, key: str, code_map: CodeMap) -> None:
        self._maps[key] = code_map

    def _remove_entry(self, key: str) -> bool:
        return self._maps.pop(key, None) is not None

    def _clear_entries(self) -> int:
        count = len(self._maps)
        self._maps.clear()
        return count

    def get_stats(self) -> Dict[str, Any]:
        stats = super().get_stats()
        with self._lock:
            stats["cached_keys"] = len(self._maps)
        return stats
