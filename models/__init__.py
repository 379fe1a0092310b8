"""Data models for the translation service.

This package contains dataclass definitions for configuration, translation requests and results,
Ollama API payloads, and evaluation results.
"""

from __future__ import annotations

from models.config_models import Config
from models.evaluation_models import EvaluationOutcome, EvaluationRequest, EvaluationResult
from models.ollama_models import OllamaRequest, OllamaResponse
from models.translation_models import (
    TranslationContext,
    TranslationEvent,
    TranslationRequest,
    TranslationResult,
)

__all__: list[str] = [
    "Config",
    "EvaluationOutcome",
    "EvaluationRequest",
    "EvaluationResult",
    "OllamaRequest",
    "OllamaResponse",
    "TranslationContext",
    "TranslationEvent",
    "TranslationRequest",
    "TranslationResult",
]
