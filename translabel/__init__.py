"""
translabel: resolve coded values (status, gender, ...) to human-readable labels.

Modules:

- provider: lookup providers that supply the code map for a translation key
- caching: pluggable cache strategies (none, unbounded, bounded, redis)
- service: TranslationService.resolve(key, code) -> Resolution
- failure: fallback policies applied when a code has no label
- translator: fills label fields on records
- factory / config: wiring from pydantic-settings configuration
- errors / logging / metrics: error types, structlog setup, Prometheus metrics
"""

from .caching import (
    BoundedTranslationCache,
    NoOpTranslationCache,
    RedisTranslationCache,
    TranslationCache,
    UnboundedTranslationCache,
)
from .config import CacheType, TranslationCacheSettings, get_settings
from .errors import (
    ConfigurationError,
    InvalidKeyError,
    ProviderError,
    StoreError,
    TranslationError,
)
from .factory import build_cache, build_translation_service
from .failure import (
    EmptyStringFailureHandler,
    FailureHandler,
    FailureStrategy,
    NullFailureHandler,
    OriginalValueFailureHandler,
    apply_failure_policy,
    get_handler,
)
from .models import CodeMap, NOT_FOUND, Resolution
from .provider import CallableTranslationProvider, DictTranslationProvider, TranslationProvider
from .service import TranslationService
from .translator import RecordTranslator, TranslatedField

__version__ = "1.0.0"

__all__ = [
    "TranslationService",
    "TranslationProvider",
    "DictTranslationProvider",
    "CallableTranslationProvider",
    "TranslationCache",
    "NoOpTranslationCache",
    "UnboundedTranslationCache",
    "BoundedTranslationCache",
    "RedisTranslationCache",
    "CacheType",
    "TranslationCacheSettings",
    "get_settings",
    "build_cache",
    "build_translation_service",
    "FailureStrategy",
    "FailureHandler",
    "NullFailureHandler",
    "EmptyStringFailureHandler",
    "OriginalValueFailureHandler",
    "apply_failure_policy",
    "get_handler",
    "RecordTranslator",
    "TranslatedField",
    "CodeMap",
    "Resolution",
    "NOT_FOUND",
    "TranslationError",
    "ProviderError",
    "StoreError",
    "ConfigurationError",
    "InvalidKeyError",
]
