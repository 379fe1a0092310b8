# ruff: noqa: BLE001
"""Redis-backed translation cache.

Stores successful translation results as JSON strings with a per-entry expiry.
Every store fault is logged and reported to the caller as a miss or a no-op.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from redis.asyncio import Redis

from core.cache.interface import CacheInterface
from models.translation_models import TranslationResult
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from config.loader import Config

__all__: list[str] = ["RedisCacheManager"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class RedisCacheManager(CacheInterface):
    """Translation cache stored in Redis.

    Keys are stored as ``{KEY_PREFIX}{key}``. The connection is opened by ``component_load``
    and closed by ``component_teardown``. If Redis cannot be reached at start-up, the manager
    runs in degraded mode where every lookup is a miss and every write is skipped.

    Attributes:
        config (Config): Application configuration.
        key_prefix (str): Namespace prepended to every key.
        default_ttl (timedelta): Expiry used when ``set`` is called without a TTL.
    """

    def __init__(self, config: Config, client: Redis | None = None) -> None:
        """Initialize the cache manager.

        Args:
            config (Config): Application configuration.
            client (Redis | None): Pre-built client; created from ``REDIS.URL`` on load when omitted.
        """
        self.config: Config = config
        self.key_prefix: str = config.REDIS.KEY_PREFIX
        self.default_ttl: timedelta = timedelta(hours=config.REDIS.CACHE_EXPIRATION_HOURS)
        self._client: Redis | None = client
        self._is_available: bool = client is not None
        logger.debug("RedisCacheManager instance created")

    @property
    def is_available(self) -> bool:
        """Check whether the cache store is connected.

        Returns:
            bool: False before loading and in degraded mode.
        """
        return self._is_available and self._client is not None

    async def component_load(self) -> None:
        """Connect to Redis and verify the connection with a ping."""
        logger.info("RedisCacheManager initialization started")
        if self._client is None:
            self._client = Redis.from_url(self.config.REDIS.URL, decode_responses=True)
        try:
            await self._client.ping()
        except Exception as err:
            logger.error("Redis connection failed, translation cache disabled: %s", err)
            self._is_available = False
            return
        self._is_available = True
        logger.info("RedisCacheManager initialized successfully")

    async def component_teardown(self) -> None:
        """Close the Redis connection."""
        logger.info("RedisCacheManager shutdown started")
        if self._client is not None:
            try:
                await self._client.aclose()
                logger.info("Redis connection closed")
            except Exception as err:
                logger.error("Error closing Redis connection: %s", err)
        self._client = None
        self._is_available = False
        logger.info("RedisCacheManager shutdown completed")

    def _store_key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    async def get(self, key: str) -> TranslationResult | None:
        if not self.is_available or self._client is None:
            logger.debug("Cache unavailable, lookup skipped: '%s'", key)
            return None

        try:
            raw: str | None = await self._client.get(self._store_key(key))
        except Exception as err:
            logger.error("Cache lookup failed for '%s': %s", key, err)
            return None

        if raw is None:
            return None

        try:
            return TranslationResult.from_json(raw)
        except Exception as err:
            logger.error("Failed to decode cached entry '%s': %s", key, err)
            return None

    async def set(self, key: str, value: TranslationResult, ttl: timedelta | None = None) -> None:
        if not value.success:
            logger.warning("Refusing to cache a failed translation result: '%s'", key)
            return
        if not self.is_available or self._client is None:
            logger.debug("Cache unavailable, write skipped: '%s'", key)
            return

        expiry: timedelta = ttl if ttl is not None else self.default_ttl
        try:
            await self._client.set(self._store_key(key), value.to_json(), ex=expiry)
            logger.debug("Cached translation '%s' (expires in %s)", key, expiry)
        except Exception as err:
            logger.error("Cache write failed for '%s': %s", key, err)

    async def remove(self, key: str) -> None:
        if not self.is_available or self._client is None:
            return

        try:
            await self._client.delete(self._store_key(key))
        except Exception as err:
            logger.error("Cache delete failed for '%s': %s", key, err)
