from __future__ import annotations

import hashlib
import unicodedata
from typing import Final

__all__: list[str] = ["StringUtils"]

TEXT_HASH_LENGTH: Final[int] = 32  # Hex characters kept from the SHA-256 digest.


class StringUtils:
    """Static helpers for text normalization and cache-key hashing."""

    @staticmethod
    def ensure_str(value: str | None) -> str:
        """Return the value as a string, or an empty string if None.

        Whitespace is preserved; callers strip where they need to.

        Args:
            value (str | None): The value to convert.

        Returns:
            str: The value as a string.
        """
        if not isinstance(value, str):
            value = str(value) if value is not None else ""
        return value

    @staticmethod
    def is_blank(value: str | None) -> bool:
        """Check whether the value is None, empty, or whitespace only."""
        return not StringUtils.ensure_str(value).strip()

    @staticmethod
    def normalize_text(text: str) -> str:
        """Normalize text using Unicode NFC normalization.

        Args:
            text (str): Text to normalize.

        Returns:
            str: Normalized text.
        """
        return unicodedata.normalize("NFC", text)

    @staticmethod
    def text_hash(text: str) -> str:
        """Hash text for use inside a cache key.

        The text is NFC-normalized first so that canonically equivalent strings share a key.
        The digest is stable across processes, unlike ``hash()``.

        Args:
            text (str): Text to hash.

        Returns:
            str: Truncated SHA-256 hex digest.
        """
        normalized: str = StringUtils.normalize_text(text)
        return hashlib.sha256(normalized.encode("utf-8")).hexdigest()[:TEXT_HASH_LENGTH]

    @staticmethod
    def truncate(value: str, limit: int = 50) -> str:
        """Shorten text for log output."""
        value = StringUtils.ensure_str(value)
        if limit <= 0 or len(value) <= limit:
            return value
        return value[:limit] + "..."
