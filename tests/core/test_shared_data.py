from __future__ import annotations

from types import SimpleNamespace
from typing import TYPE_CHECKING, cast
from unittest.mock import AsyncMock

import pytest

from core.cache.redis_cache import RedisCacheManager
from core.evaluation.service import EvaluationService
from core.shared_data import SharedData
from core.trans.manager import TransManager

if TYPE_CHECKING:
    from config.loader import Config


@pytest.fixture
def config() -> Config:
    return cast(
        "Config",
        SimpleNamespace(
            OLLAMA=SimpleNamespace(
                BASE_URL="http://localhost:11434",
                TIMEOUT=5.0,
                MODEL_NAME="llama3.1",
                SYSTEM_PROMPT="",
                FACTORY_SYSTEM_PROMPT="",
                NONPROFIT_SYSTEM_PROMPT="",
            ),
            REDIS=SimpleNamespace(URL="redis://localhost:6379/0", KEY_PREFIX="translation:", CACHE_EXPIRATION_HOURS=24),
        ),
    )


@pytest.mark.asyncio
async def test_async_init_wires_components(config: Config) -> None:
    shared_data = SharedData(config)

    await shared_data.async_init()

    assert shared_data.config is config
    assert isinstance(shared_data.cache_manager, RedisCacheManager)
    assert isinstance(shared_data.trans_manager, TransManager)
    assert isinstance(shared_data.evaluation_service, EvaluationService)
    assert shared_data.trans_manager.cache_manager is shared_data.cache_manager
    assert shared_data.evaluation_service.trans_manager is shared_data.trans_manager


@pytest.mark.asyncio
async def test_load_and_teardown_order(config: Config, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []
    shared_data = SharedData(config)
    await shared_data.async_init()
    monkeypatch.setattr(
        shared_data.cache_manager, "component_load", AsyncMock(side_effect=lambda: calls.append("cache_load"))
    )
    monkeypatch.setattr(
        shared_data.trans_manager, "initialize", AsyncMock(side_effect=lambda: calls.append("trans_init"))
    )
    monkeypatch.setattr(
        shared_data.trans_manager, "shutdown_engines", AsyncMock(side_effect=lambda: calls.append("trans_close"))
    )
    monkeypatch.setattr(
        shared_data.cache_manager, "component_teardown", AsyncMock(side_effect=lambda: calls.append("cache_close"))
    )

    await shared_data.component_load()
    await shared_data.component_teardown()

    assert calls == ["cache_load", "trans_init", "trans_close", "cache_close"]
