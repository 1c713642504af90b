"""
Configuration for translabel cache selection and bounds.
"""

from enum import Enum
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CacheType(str, Enum):
    """Available cache strategies."""
    NONE = "none"              # Always delegate to the provider
    UNBOUNDED = "unbounded"    # Whole code map per key, kept until invalidated
    BOUNDED = "bounded"        # Whole code map per key, LRU size bound and write-time TTL
    REDIS = "redis"            # Hash per key in Redis with an explicit TTL


DEFAULT_REDIS_KEY_PREFIX = "translabel:"


class TranslationCacheSettings(BaseSettings):
    """Settings consumed when a translation service is wired up."""

    model_config = SettingsConfigDict(
        env_prefix="TRANSLABEL_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    cache_type: CacheType = Field(default=CacheType.UNBOUNDED)
    log_level: str = Field(default="info", pattern=r"(?i)^(debug|info|warning|error|critical)$")

    # Bounded in-process cache
    max_size: int = Field(default=1000, gt=0)
    ttl_seconds: Optional[float] = Field(default=3600.0, gt=0)

    # Redis store
    redis_url: str = Field(default="redis://localhost:6379/0")
    redis_key_prefix: str = Field(default=DEFAULT_REDIS_KEY_PREFIX, min_length=1)
    redis_ttl_seconds: int = Field(default=3600, gt=0)
    redis_socket_timeout: float = Field(default=5.0, gt=0)


def get_settings(**overrides) -> TranslationCacheSettings:
    """Load settings from the environment, applying explicit overrides."""
    return TranslationCacheSettings(**overrides)
