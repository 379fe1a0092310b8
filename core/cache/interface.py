"""This module defines the abstract cache port used by the translation manager.

Implementations store successful ``TranslationResult`` objects under keys produced by
``derive_key``. Store faults are never raised to the caller: a failed lookup is a miss
and a failed write is a no-op.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING
from urllib.parse import quote

from utils.string_utils import StringUtils

if TYPE_CHECKING:
    from datetime import timedelta

    from models.translation_models import TranslationResult

__all__: list[str] = ["CacheInterface"]


class CacheInterface(ABC):
    """Abstract base class for translation result caches."""

    @abstractmethod
    async def get(self, key: str) -> TranslationResult | None:
        """Look up a cached result.

        Args:
            key (str): Key produced by ``derive_key``.

        Returns:
            TranslationResult | None: The cached result, or None on a miss or a store fault.
        """
        raise NotImplementedError

    @abstractmethod
    async def set(self, key: str, value: TranslationResult, ttl: timedelta | None = None) -> None:
        """Store a result.

        Args:
            key (str): Key produced by ``derive_key``.
            value (TranslationResult): Result to store.
            ttl (timedelta | None): Expiry; None uses the implementation default.
        """
        raise NotImplementedError

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Delete a cached result if it exists."""
        raise NotImplementedError

    @staticmethod
    def derive_key(source_language: str, target_language: str, text: str, context_suffix: str = "") -> str:
        """Derive the cache key for a request.

        The key is ``"{src}:{tgt}:{hash}"`` with ``":{suffix}"`` appended for a non-empty
        context suffix. Language codes are compared case-insensitively and percent-encoded,
        so a ``:`` inside a language name cannot shift the field boundaries.

        Args:
            source_language (str): Source language of the request.
            target_language (str): Target language of the request.
            text (str): Text to translate.
            context_suffix (str): Key suffix of the resolved context.

        Returns:
            str: The cache key.
        """
        src: str = quote(StringUtils.ensure_str(source_language).strip().lower(), safe="")
        tgt: str = quote(StringUtils.ensure_str(target_language).strip().lower(), safe="")
        key: str = f"{src}:{tgt}:{StringUtils.text_hash(StringUtils.ensure_str(text))}"
        if context_suffix:
            key = f"{key}:{context_suffix}"
        return key
