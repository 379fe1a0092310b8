"""Translation cache package.

Provides the cache port used by the translation manager and its Redis implementation.
"""

from __future__ import annotations

from core.cache.interface import CacheInterface
from core.cache.redis_cache import RedisCacheManager

__all__: list[str] = ["CacheInterface", "RedisCacheManager"]
