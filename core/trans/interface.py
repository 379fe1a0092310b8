"""This module defines the abstract base class for completion backends and the translation exceptions.

A completion backend turns an ``OllamaRequest`` (model, prompt, system prompt) into an
``OllamaResponse``. Every backend failure is raised as a subclass of ``TranslateExceptionError``
so that the translation manager can turn it into a failed result.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from config.loader import Config
    from models.ollama_models import OllamaRequest, OllamaResponse

__all__: list[str] = [
    "BackendResponseError",
    "BackendTimeoutError",
    "CompletionInterface",
    "ResponseFormatError",
    "TranslateExceptionError",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class TranslateExceptionError(Exception):
    """An error occurred while obtaining a translation from the backend."""


class BackendResponseError(TranslateExceptionError):
    """The backend could not be reached or answered with a non-success status."""


class BackendTimeoutError(TranslateExceptionError):
    """The backend did not answer within the configured timeout."""


class ResponseFormatError(TranslateExceptionError):
    """The backend answered with a payload that could not be deserialized."""


class CompletionInterface(ABC):
    """Abstract base class for completion backends.

    Subclasses are registered by their distinguished name when they are defined, so the backend
    can be selected by name at start-up.

    Attributes:
        registered (ClassVar[dict[str, type[CompletionInterface]]]): Registered backend classes,
            keyed by their distinguished names.
    """

    registered: ClassVar[dict[str, type[CompletionInterface]]] = {}

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        if not hasattr(cls, "fetch_engine_name") or not callable(cls.fetch_engine_name):
            msg = "Subclasses of CompletionInterface must implement the static method fetch_engine_name()."
            raise TypeError(msg)

        if not isinstance(cls.fetch_engine_name(), str) or cls.fetch_engine_name() == "":
            return  # Unnamed backends (test doubles) are allowed but not registered.

        if cls.fetch_engine_name() in cls.registered:
            msg: str = f"A completion backend with the name '{cls.fetch_engine_name()}' is already registered."
            raise ValueError(msg)

        cls.registered[cls.fetch_engine_name()] = cls

    @property
    def engine_name(self) -> str:
        return self.fetch_engine_name()

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Check if the backend has been initialized and can accept requests."""
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def fetch_engine_name() -> str:
        """Fetch the distinguished name of the backend.

        Called during class registration in __init_subclass__, so the implementation must be
        available at subclass definition time.

        Returns:
            str: The distinguished name of the backend.
        """
        raise NotImplementedError

    @abstractmethod
    def initialize(self, config: Config) -> None:
        """Initialize the backend with the given configuration.

        Args:
            config (Config): Configuration object containing the backend settings.
        """
        raise NotImplementedError

    @abstractmethod
    async def generate(self, request: OllamaRequest) -> OllamaResponse:
        """Request a non-streaming completion.

        Args:
            request (OllamaRequest): Model, prompt and system prompt.

        Returns:
            OllamaResponse: The completion.

        Raises:
            BackendResponseError: If the backend is unreachable or answers with an error status.
            BackendTimeoutError: If the backend does not answer in time.
            ResponseFormatError: If the response body is malformed.
        """
        raise NotImplementedError

    @abstractmethod
    async def close(self) -> None:
        """Release network resources held by the backend."""
        raise NotImplementedError
