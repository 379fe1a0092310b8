"""Shared data management for service components.

This module defines the SharedData class, a centralized container for the resources shared by
the HTTP handlers: configuration, the translation cache, the translation manager and the
evaluation service. Every component is created once per process.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from core.cache.redis_cache import RedisCacheManager
from core.evaluation.service import EvaluationService
from core.trans.manager import TransManager
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable

    from config.loader import Config
    from models.translation_models import TranslationEvent


__all__: list[str] = ["SharedData"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


@dataclass
class SharedData:
    _config: Config = field()
    _event_sink: Callable[[TranslationEvent], None] | None = field(default=None)
    _cache_manager: RedisCacheManager = field(init=False)
    _trans_manager: TransManager = field(init=False)
    _evaluation_service: EvaluationService = field(init=False)

    async def async_init(self) -> None:
        self._cache_manager = RedisCacheManager(self.config)
        self._trans_manager = TransManager(self.config, self._cache_manager, event_sink=self._event_sink)
        self._evaluation_service = EvaluationService(self._trans_manager)

    async def component_load(self) -> None:
        """Connect the cache and initialize the completion backend."""
        await self._cache_manager.component_load()
        await self._trans_manager.initialize()
        logger.info("Shared components loaded")

    async def component_teardown(self) -> None:
        """Release network resources in reverse order of loading."""
        await self._trans_manager.shutdown_engines()
        await self._cache_manager.component_teardown()
        logger.info("Shared components released")

    @property
    def config(self) -> Config:
        return self._config

    @property
    def cache_manager(self) -> RedisCacheManager:
        return self._cache_manager

    @property
    def trans_manager(self) -> TransManager:
        return self._trans_manager

    @property
    def evaluation_service(self) -> EvaluationService:
        return self._evaluation_service
