"""Unit tests for core.cache.redis_cache module."""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from types import SimpleNamespace
from typing import TYPE_CHECKING, cast
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from core.cache import redis_cache as redis_cache_module
from core.cache.interface import CacheInterface
from core.cache.redis_cache import RedisCacheManager
from models.translation_models import TranslationRequest, TranslationResult

if TYPE_CHECKING:
    from config.loader import Config


REQUEST: TranslationRequest = TranslationRequest(source_language="en", target_language="es", text="hello")


@pytest.fixture
def config() -> Config:
    return cast(
        "Config",
        SimpleNamespace(
            REDIS=SimpleNamespace(
                URL="redis://localhost:6379/0",
                KEY_PREFIX="translation:",
                CACHE_EXPIRATION_HOURS=24,
            )
        ),
    )


@pytest.fixture
def client() -> MagicMock:
    mock = MagicMock()
    mock.ping = AsyncMock(return_value=True)
    mock.get = AsyncMock(return_value=None)
    mock.set = AsyncMock(return_value=True)
    mock.delete = AsyncMock(return_value=1)
    mock.aclose = AsyncMock()
    return mock


@pytest.fixture
async def cache(config: Config, client: MagicMock) -> RedisCacheManager:
    manager = RedisCacheManager(config, client=client)
    await manager.component_load()
    return manager


def test_derive_key_format() -> None:
    key: str = CacheInterface.derive_key("EN", " es ", "hello")

    prefix, suffix = key.rsplit(":", 1)
    assert prefix == "en:es"
    assert len(suffix) == 32


def test_derive_key_is_deterministic() -> None:
    assert CacheInterface.derive_key("en", "es", "hello") == CacheInterface.derive_key("en", "es", "hello")


def test_derive_key_distinguishes_contexts() -> None:
    keys: set[str] = {
        CacheInterface.derive_key("en", "es", "hello", ""),
        CacheInterface.derive_key("en", "es", "hello", "factory"),
        CacheInterface.derive_key("en", "es", "hello", "nonprofit"),
    }

    assert len(keys) == 3
    assert CacheInterface.derive_key("en", "es", "hello", "factory").endswith(":factory")


def test_derive_key_distinguishes_texts_and_directions() -> None:
    assert CacheInterface.derive_key("en", "es", "hello") != CacheInterface.derive_key("en", "es", "hello!")
    assert CacheInterface.derive_key("en", "es", "hello") != CacheInterface.derive_key("es", "en", "hello")


def test_derive_key_keeps_separator_inside_language_apart() -> None:
    left: str = CacheInterface.derive_key("en:es", "fr", "hello")
    right: str = CacheInterface.derive_key("en", "es:fr", "hello")

    assert left != right
    assert left.startswith("en%3Aes:fr:")
    assert right.startswith("en:es%3Afr:")


def test_derive_key_normalizes_unicode() -> None:
    composed = "caf\u00e9"
    decomposed = "cafe\u0301"

    assert CacheInterface.derive_key("fr", "en", composed) == CacheInterface.derive_key("fr", "en", decomposed)


@pytest.mark.asyncio
async def test_component_load_creates_client_from_url(config: Config, monkeypatch: pytest.MonkeyPatch) -> None:
    created = MagicMock()
    created.ping = AsyncMock(return_value=True)
    from_url = MagicMock(return_value=created)
    monkeypatch.setattr(redis_cache_module.Redis, "from_url", from_url)
    manager = RedisCacheManager(config)

    await manager.component_load()

    from_url.assert_called_once_with("redis://localhost:6379/0", decode_responses=True)
    assert manager.is_available is True


@pytest.mark.asyncio
async def test_failed_ping_enters_degraded_mode(
    config: Config, client: MagicMock, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.ERROR)
    client.ping.side_effect = RedisConnectionError("refused")
    manager = RedisCacheManager(config, client=client)

    await manager.component_load()

    assert manager.is_available is False
    assert await manager.get("key") is None
    await manager.set("key", TranslationResult.succeeded(REQUEST, "hola"))
    client.get.assert_not_awaited()
    client.set.assert_not_awaited()
    assert any("Redis connection failed" in rec.message for rec in caplog.records)


@pytest.mark.asyncio
async def test_get_miss_returns_none(cache: RedisCacheManager, client: MagicMock) -> None:
    assert await cache.get("en:es:abc") is None
    client.get.assert_awaited_once_with("translation:en:es:abc")


@pytest.mark.asyncio
async def test_set_then_get_returns_equal_result(cache: RedisCacheManager, client: MagicMock) -> None:
    result: TranslationResult = TranslationResult.succeeded(REQUEST, "hola")

    await cache.set("en:es:abc", result)
    stored_key, stored_value = client.set.await_args.args
    client.get.return_value = stored_value

    assert stored_key == "translation:en:es:abc"
    assert client.set.await_args.kwargs["ex"] == timedelta(hours=24)
    assert await cache.get("en:es:abc") == result


@pytest.mark.asyncio
async def test_set_uses_explicit_ttl(cache: RedisCacheManager, client: MagicMock) -> None:
    await cache.set("k", TranslationResult.succeeded(REQUEST, "hola"), ttl=timedelta(minutes=5))

    assert client.set.await_args.kwargs["ex"] == timedelta(minutes=5)


@pytest.mark.asyncio
async def test_failed_result_is_not_written(cache: RedisCacheManager, client: MagicMock) -> None:
    await cache.set("k", TranslationResult.failed(REQUEST, "Translation failed: down"))

    client.set.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_transport_error_is_a_miss(
    cache: RedisCacheManager, client: MagicMock, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.ERROR)
    client.get.side_effect = RedisConnectionError("reset")

    assert await cache.get("k") is None
    assert any("Cache lookup failed" in rec.message for rec in caplog.records)


@pytest.mark.asyncio
async def test_undecodable_entry_is_a_miss(cache: RedisCacheManager, client: MagicMock) -> None:
    client.get.return_value = "{not json"

    assert await cache.get("k") is None


@pytest.mark.asyncio
async def test_set_transport_error_is_swallowed(cache: RedisCacheManager, client: MagicMock) -> None:
    client.set.side_effect = RedisConnectionError("reset")

    await cache.set("k", TranslationResult.succeeded(REQUEST, "hola"))

    client.set.assert_awaited_once()


@pytest.mark.asyncio
async def test_remove_deletes_prefixed_key(cache: RedisCacheManager, client: MagicMock) -> None:
    await cache.remove("k")

    client.delete.assert_awaited_once_with("translation:k")


@pytest.mark.asyncio
async def test_remove_transport_error_is_swallowed(cache: RedisCacheManager, client: MagicMock) -> None:
    client.delete.side_effect = RedisConnectionError("reset")

    await cache.remove("k")


@pytest.mark.asyncio
async def test_cancellation_propagates_from_get(cache: RedisCacheManager, client: MagicMock) -> None:
    client.get.side_effect = asyncio.CancelledError()

    with pytest.raises(asyncio.CancelledError):
        await cache.get("k")


@pytest.mark.asyncio
async def test_teardown_closes_client(cache: RedisCacheManager, client: MagicMock) -> None:
    await cache.component_teardown()

    client.aclose.assert_awaited_once()
    assert cache.is_available is False
    assert await cache.get("k") is None
