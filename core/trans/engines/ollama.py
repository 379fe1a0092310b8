from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

from core.trans.interface import (
    BackendResponseError,
    BackendTimeoutError,
    CompletionInterface,
    ResponseFormatError,
    TranslateExceptionError,
)
from handlers.async_comm import (
    AsyncCommError,
    AsyncCommInvalidContentTypeError,
    AsyncCommTimeoutError,
    AsyncHttp,
)
from models.ollama_models import OllamaResponse
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from config.loader import Config
    from models.ollama_models import OllamaRequest

__all__: list[str] = ["OllamaCompletion"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

GENERATE_PATH: Final[str] = "/api/generate"


class OllamaCompletion(CompletionInterface):
    """Completion backend for a local or remote Ollama server.

    One ``AsyncHttp`` session is shared by all concurrent requests. Transport errors are mapped to
    the backend exception taxonomy; no retries are performed here.
    """

    def __init__(self, http: AsyncHttp | None = None) -> None:
        self._http: AsyncHttp | None = http
        self._timeout: float = 0.0
        self._available: bool = False

    @property
    def is_available(self) -> bool:
        return self._available

    @staticmethod
    def fetch_engine_name() -> str:
        return "ollama"

    @property
    def http(self) -> AsyncHttp:
        if self._http is None:
            msg = "Ollama backend has not been initialized."
            raise TranslateExceptionError(msg)
        return self._http

    def initialize(self, config: Config) -> None:
        if self._http is None:
            self._http = AsyncHttp(base_url=config.OLLAMA.BASE_URL)
        self._timeout = config.OLLAMA.TIMEOUT
        self._available = True
        logger.info("Ollama backend ready: '%s' (timeout %.1f sec)", config.OLLAMA.BASE_URL, self._timeout)

    async def generate(self, request: OllamaRequest) -> OllamaResponse:
        logger.debug("Ollama request: model='%s', prompt length=%d", request.model, len(request.prompt))
        try:
            payload: Any = await self.http.post(
                url=GENERATE_PATH,
                data=request.to_dict(),
                total_timeout=self._timeout,
            )
        except AsyncCommTimeoutError as err:
            msg = f"Ollama did not respond within {self._timeout:.1f} seconds"
            raise BackendTimeoutError(msg) from err
        except AsyncCommInvalidContentTypeError as err:
            msg = f"Malformed response from Ollama: {err}"
            raise ResponseFormatError(msg) from err
        except AsyncCommError as err:
            msg = f"Ollama request failed: {err}"
            raise BackendResponseError(msg) from err

        return self._parse_response(payload)

    @staticmethod
    def _parse_response(payload: Any) -> OllamaResponse:
        """Validate and deserialize the ``/api/generate`` response body.

        Raises:
            ResponseFormatError: If the body is not an object with a string ``response`` field.
        """
        if not isinstance(payload, dict):
            msg = f"Failed to deserialize response from Ollama: expected an object, got {type(payload).__name__}"
            raise ResponseFormatError(msg)
        if not isinstance(payload.get("response"), str):
            msg = "Failed to deserialize response from Ollama: missing 'response' field"
            raise ResponseFormatError(msg)

        try:
            return OllamaResponse.from_dict(payload)
        except (KeyError, TypeError, ValueError) as err:
            msg = f"Failed to deserialize response from Ollama: {err}"
            raise ResponseFormatError(msg) from err

    async def close(self) -> None:
        self._available = False
        if self._http is not None:
            await self._http.close()
