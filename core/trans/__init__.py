"""Translation orchestration and completion backends.

This package provides the cache-aside translation manager, the per-context prompt builder,
and the completion backend interface with its Ollama implementation.
"""

from core.trans.interface import (
    BackendResponseError,
    BackendTimeoutError,
    CompletionInterface,
    ResponseFormatError,
    TranslateExceptionError,
)
from core.trans.manager import TransManager
from core.trans.prompt_builder import PromptBuilder, PromptPair

__all__: list[str] = [
    "BackendResponseError",
    "BackendTimeoutError",
    "CompletionInterface",
    "PromptBuilder",
    "PromptPair",
    "ResponseFormatError",
    "TransManager",
    "TranslateExceptionError",
]
