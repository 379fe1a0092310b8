"""Models for translation requests, results, contexts and observability events."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, TypeAlias

from dataclasses_json import DataClassJsonMixin, LetterCase, dataclass_json

__all__: list[str] = [
    "EventKind",
    "TranslationContext",
    "TranslationEvent",
    "TranslationRequest",
    "TranslationResult",
]

EventKind: TypeAlias = Literal["cache_hit", "cache_miss", "backend_success", "backend_failure"]


class TranslationContext(Enum):
    """Domain context selecting a prompt variant and a cache-key namespace.

    The value of each member is its cache-key suffix, so every context has its own namespace.
    """

    DEFAULT = ""
    FACTORY = "factory"
    NONPROFIT = "nonprofit"

    @property
    def key_suffix(self) -> str:
        return self.value

    @classmethod
    def resolve(cls, tag: str | None) -> TranslationContext:
        """Resolve a request context tag, ignoring case and surrounding whitespace.

        Unknown or empty tags resolve to DEFAULT.

        Args:
            tag (str | None): Context tag from the request.

        Returns:
            TranslationContext: The resolved context.
        """
        if not tag:
            return cls.DEFAULT
        return cls[_CONTEXT_ALIASES.get(tag.strip().lower(), "DEFAULT")]


_CONTEXT_ALIASES: dict[str, str] = {
    "factory": "FACTORY",
    "maquila": "FACTORY",
    "nonprofit": "NONPROFIT",
    "non-profit": "NONPROFIT",
    "filantro": "NONPROFIT",
}


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class TranslationRequest(DataClassJsonMixin):
    """A request to translate one text.

    Attributes:
        source_language (str): Source language name or code.
        target_language (str): Target language name or code.
        text (str): Text to translate, embedded verbatim in the prompt.
        context (str): Optional case-insensitive domain tag (see TranslationContext).
    """

    source_language: str
    target_language: str
    text: str
    context: str = ""

    @property
    def resolved_context(self) -> TranslationContext:
        return TranslationContext.resolve(self.context)


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class TranslationResult(DataClassJsonMixin):
    """Outcome of one translate call.

    A successful result carries the translated text. A failed result only echoes the request
    fields and carries an error message; it is never partially translated.

    Attributes:
        source_language (str): Echo of the request source language.
        target_language (str): Echo of the request target language.
        original_text (str): Echo of the request text.
        translated_text (str): Translation, empty on failure.
        success (bool): Whether the translation succeeded.
        error_message (str | None): Human-readable failure reason.
    """

    source_language: str = ""
    target_language: str = ""
    original_text: str = ""
    translated_text: str = ""
    success: bool = False
    error_message: str | None = None

    @classmethod
    def succeeded(cls, request: TranslationRequest, translated_text: str) -> TranslationResult:
        return cls(
            source_language=request.source_language,
            target_language=request.target_language,
            original_text=request.text,
            translated_text=translated_text,
            success=True,
        )

    @classmethod
    def failed(cls, request: TranslationRequest, error_message: str) -> TranslationResult:
        return cls(
            source_language=request.source_language,
            target_language=request.target_language,
            original_text=request.text,
            success=False,
            error_message=error_message,
        )


@dataclass(frozen=True)
class TranslationEvent:
    """Structured observability record emitted by the translation manager.

    Attributes:
        kind (EventKind): What happened.
        cache_key (str): Derived cache key of the request.
        context (TranslationContext): Resolved request context.
        latency_sec (float | None): Backend call duration, for backend events.
        error_kind (str | None): Exception class name, for backend failures.
    """

    kind: EventKind
    cache_key: str
    context: TranslationContext
    latency_sec: float | None = None
    error_kind: str | None = None
