# ruff: noqa: BLE001
from __future__ import annotations

import asyncio
import time
from dataclasses import replace
from typing import TYPE_CHECKING, Final, TypeAlias

from core.cache.interface import CacheInterface
from core.trans.engines import OllamaCompletion  # noqa: F401
from core.trans.interface import (
    BackendTimeoutError,
    CompletionInterface,
    ResponseFormatError,
    TranslateExceptionError,
)
from core.trans.prompt_builder import PromptBuilder
from models.ollama_models import OllamaRequest
from models.translation_models import TranslationEvent, TranslationResult
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable

    from config.loader import Config
    from core.trans.prompt_builder import PromptPair
    from models.ollama_models import OllamaResponse
    from models.translation_models import EventKind, TranslationContext, TranslationRequest

    EventSink: TypeAlias = Callable[[TranslationEvent], None]


__all__: list[str] = ["TransManager"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

DEFAULT_ENGINE_NAME: Final[str] = "ollama"
FAILURE_MESSAGE_PREFIX: Final[str] = "Translation failed: "


class TransManager:
    """Cache-aside translation orchestrator.

    A request is looked up in the cache under a key derived from its languages, text and
    resolved context. On a miss the completion backend is called with the prompts of that
    context, and a successful result is written back to the cache. Backend failures become
    failed results and are never cached.

    Attributes:
        config (Config): Application configuration.
        cache_manager (CacheInterface | None): Result cache; None disables caching.
        prompt_builder (PromptBuilder): Prompt construction for each context.
    """

    def __init__(
        self,
        config: Config,
        cache_manager: CacheInterface | None = None,
        prompt_builder: PromptBuilder | None = None,
        event_sink: EventSink | None = None,
        engine: CompletionInterface | None = None,
    ) -> None:
        """Initialize the TransManager.

        Args:
            config (Config): Application configuration.
            cache_manager (CacheInterface | None): Result cache.
            prompt_builder (PromptBuilder | None): Prompt builder; built from the configuration when omitted.
            event_sink (EventSink | None): Receives a TranslationEvent for each cache and backend outcome.
            engine (CompletionInterface | None): Completion backend; selected from the registry on
                ``initialize`` when omitted.
        """
        self.config: Config = config
        self.cache_manager: CacheInterface | None = cache_manager
        self.prompt_builder: PromptBuilder = prompt_builder or PromptBuilder(config)
        self._event_sink: EventSink | None = event_sink
        self._engine: CompletionInterface | None = engine
        logger.debug("Registered completion backends: %s", CompletionInterface.registered)

    async def initialize(self) -> None:
        """Create and initialize the completion backend.

        Raises:
            TranslateExceptionError: If the backend is not registered or fails to initialize.
        """
        logger.info("TransManager initialization started")
        if self._engine is None:
            _cls: type[CompletionInterface] | None = CompletionInterface.registered.get(DEFAULT_ENGINE_NAME)
            if _cls is None:
                msg: str = f"Completion backend not found: '{DEFAULT_ENGINE_NAME}'"
                raise TranslateExceptionError(msg)
            self._engine = _cls()

        try:
            self._engine.initialize(self.config)
        except (RuntimeError, ValueError) as err:
            msg = f"Failed to initialize completion backend '{self._engine.engine_name}': {err}"
            raise TranslateExceptionError(msg) from err
        logger.info("Completion backend initialized: '%s'", self._engine.engine_name)

    @property
    def engine(self) -> CompletionInterface:
        """Get the active completion backend.

        Raises:
            TranslateExceptionError: If no backend has been set or initialized.
        """
        if self._engine is None:
            msg = "No completion backend available"
            raise TranslateExceptionError(msg)
        return self._engine

    async def shutdown_engines(self) -> None:
        """Release the resources held by the completion backend."""
        if self._engine is None:
            return
        try:
            await self._engine.close()
            logger.info("Completion backend closed: '%s'", self._engine.engine_name)
        except Exception as err:
            logger.error("Error closing completion backend: %s", err)

    async def translate(self, request: TranslationRequest) -> TranslationResult:
        """Translate one request, serving it from the cache when possible.

        Args:
            request (TranslationRequest): The validated translation request.

        Returns:
            TranslationResult: A successful result, or a failed result whose error message
                starts with "Translation failed: ".

        Raises:
            asyncio.CancelledError: If the calling task is cancelled.
        """
        context: TranslationContext = request.resolved_context
        cache_key: str = CacheInterface.derive_key(
            request.source_language,
            request.target_language,
            request.text,
            context.key_suffix,
        )

        if self.cache_manager is not None:
            cached: TranslationResult | None = await self.cache_manager.get(cache_key)
            if cached is not None:
                self._emit("cache_hit", cache_key, context)
                # Keys ignore language case, so echo this request's own fields.
                return replace(
                    cached,
                    source_language=request.source_language,
                    target_language=request.target_language,
                    original_text=request.text,
                )
        self._emit("cache_miss", cache_key, context)

        prompts: PromptPair = self.prompt_builder.build_prompt(request, context)
        logger.debug(
            "Translating '%s' (%s -> %s)",
            StringUtils.truncate(request.text),
            request.source_language,
            request.target_language,
        )

        started: float = time.monotonic()
        try:
            translated_text: str = await self._generate(prompts)
        except TranslateExceptionError as err:
            latency: float = time.monotonic() - started
            logger.error("Translation backend failure (%s): %s", type(err).__name__, err)
            self._emit("backend_failure", cache_key, context, latency_sec=latency, error_kind=type(err).__name__)
            return TranslationResult.failed(request, f"{FAILURE_MESSAGE_PREFIX}{err}")

        latency = time.monotonic() - started
        self._emit("backend_success", cache_key, context, latency_sec=latency)

        result: TranslationResult = TranslationResult.succeeded(request, translated_text)
        if self.cache_manager is not None:
            await self.cache_manager.set(cache_key, result)
        return result

    async def _generate(self, prompts: PromptPair) -> str:
        """Call the backend under the configured timeout and return the stripped response text.

        Raises:
            TranslateExceptionError: On any backend, timeout or format failure.
        """
        ollama_request: OllamaRequest = OllamaRequest(
            model=self.config.OLLAMA.MODEL_NAME,
            prompt=prompts.user,
            system=prompts.system,
            stream=False,
        )
        try:
            async with asyncio.timeout(self.config.OLLAMA.TIMEOUT):
                response: OllamaResponse = await self.engine.generate(ollama_request)
        except TimeoutError as err:
            msg: str = f"No response from the backend within {self.config.OLLAMA.TIMEOUT:.1f} seconds"
            raise BackendTimeoutError(msg) from err

        translated_text: str = StringUtils.ensure_str(response.response).strip()
        if not translated_text:
            msg = "Failed to deserialize response from the backend: empty response"
            raise ResponseFormatError(msg)
        return translated_text

    def _emit(
        self,
        kind: EventKind,
        cache_key: str,
        context: TranslationContext,
        *,
        latency_sec: float | None = None,
        error_kind: str | None = None,
    ) -> None:
        event: TranslationEvent = TranslationEvent(
            kind=kind,
            cache_key=cache_key,
            context=context,
            latency_sec=latency_sec,
            error_kind=error_kind,
        )
        logger.debug("Translation event: %s", event)
        if self._event_sink is None:
            return
        try:
            self._event_sink(event)
        except Exception as err:
            logger.error("Translation event sink failed: %s", err)
