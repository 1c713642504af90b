"""
Lookup providers supply the full code map for a translation key.
"""

import time
from abc import ABC, abstractmethod
from typing import Callable, Dict, Mapping, Optional

from .errors import ProviderError, TranslationError
from .logging import get_logger
from .models import CodeMap, freeze_code_map

logger = get_logger("translabel.provider")


class TranslationProvider(ABC):
    """
    Source of code -> label mappings.

    Implementations may be slow (database, file, remote API) and must be safe
    to call concurrently for different keys. Transport failures must raise;
    an empty mapping means "no codes defined for this key".
    """

    @abstractmethod
    def load(self, key: str) -> Mapping[str, str]:
        """Return the full code map for ``key``."""


class DictTranslationProvider(TranslationProvider):
    """Provider over a static nested dict, e.g. parsed from a config file."""

    def __init__(self, tables: Dict[str, Mapping[str, str]]):
        self._tables = {key: dict(table) for key, table in tables.items()}

    def load(self, key: str) -> Mapping[str, str]:
        return self._tables.get(key, {})


class CallableTranslationProvider(TranslationProvider):
    """Adapts a plain ``key -> mapping`` function."""

    def __init__(self, func: Callable[[str], Optional[Mapping[str, str]]]):
        self._func = func

    def load(self, key: str) -> Mapping[str, str]:
        return self._func(key)


def load_code_map(provider: TranslationProvider, key: str) -> CodeMap:
    """Call the provider and freeze its result, wrapping failures in ProviderError."""
    start = time.perf_counter()
    try:
        raw = provider.load(key)
    except TranslationError:
        raise
    except Exception as e:
        logger.error("Provider load failed", key=key, error=str(e))
        raise ProviderError(key, str(e) or type(e).__name__) from e

    code_map = freeze_code_map(key, raw)
    logger.debug(
        "Provider load completed",
        key=key,
        codes=len(code_map),
        duration=time.perf_counter() - start
    )
    return code_map
