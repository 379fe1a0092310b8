"""Sentence-level BLEU score between a reference and a candidate translation.

Tokens are maximal runs of Unicode letters or single punctuation characters, lower-cased.
N-gram precision uses set membership against the reference (no count clipping), and the
score is the brevity penalty times the geometric mean of the n-gram precisions.
"""

from __future__ import annotations

import math
import unicodedata
from typing import ClassVar

__all__: list[str] = ["BleuScoreEvaluator", "InvalidInputError"]


class InvalidInputError(ValueError):
    """The candidate translation or the n-gram order cannot be scored."""


class BleuScoreEvaluator:
    """Pure BLEU scorer.

    Attributes:
        DEFAULT_MAX_N (ClassVar[int]): Highest n-gram order used when none is given.
    """

    DEFAULT_MAX_N: ClassVar[int] = 4

    @staticmethod
    def tokenize(text: str) -> list[str]:
        """Split text into lower-case letter runs and single punctuation characters.

        Whitespace, digits and symbols separate tokens and are discarded.

        Args:
            text (str): Text to tokenize.

        Returns:
            list[str]: Tokens in order.
        """
        tokens: list[str] = []
        word: list[str] = []
        for char in text.lower():
            category: str = unicodedata.category(char)
            if category.startswith("L"):
                word.append(char)
                continue
            if word:
                tokens.append("".join(word))
                word = []
            if category.startswith("P"):
                tokens.append(char)
        if word:
            tokens.append("".join(word))
        return tokens

    @staticmethod
    def ngrams(tokens: list[str], n: int) -> list[str]:
        """Return the space-joined n-grams of a token list, in order."""
        return [" ".join(tokens[i : i + n]) for i in range(len(tokens) - n + 1)]

    @classmethod
    def compute_bleu(cls, reference: str, candidate: str, max_n: int | None = None) -> float:
        """Compute the BLEU score of a candidate against a reference.

        Args:
            reference (str): Reference translation.
            candidate (str): Machine translation to score.
            max_n (int | None): Highest n-gram order; DEFAULT_MAX_N when None.

        Returns:
            float: Score in [0, 1]. 1.0 for identical non-empty texts.

        Raises:
            InvalidInputError: If the candidate has no tokens or max_n is less than 1.
        """
        order: int = cls.DEFAULT_MAX_N if max_n is None else max_n
        if order < 1:
            msg: str = f"max_n must be at least 1, got {order}"
            raise InvalidInputError(msg)

        reference_tokens: list[str] = cls.tokenize(reference)
        candidate_tokens: list[str] = cls.tokenize(candidate)
        if not candidate_tokens:
            msg = "Candidate translation contains no tokens"
            raise InvalidInputError(msg)

        precisions: list[float] = []
        for n in range(1, order + 1):
            candidate_ngrams: list[str] = cls.ngrams(candidate_tokens, n)
            if not candidate_ngrams:
                precisions.append(0.0)
                continue
            reference_ngrams: set[str] = set(cls.ngrams(reference_tokens, n))
            matches: int = sum(1 for gram in candidate_ngrams if gram in reference_ngrams)
            precisions.append(matches / len(candidate_ngrams))

        brevity_penalty: float = cls.brevity_penalty(len(reference_tokens), len(candidate_tokens))
        if any(p == 0.0 for p in precisions):
            return 0.0
        geometric_mean: float = math.exp(sum(math.log(p) for p in precisions) / order)
        return brevity_penalty * geometric_mean

    @staticmethod
    def brevity_penalty(reference_length: int, candidate_length: int) -> float:
        """Penalty for candidates shorter than the reference.

        Raises:
            InvalidInputError: If the candidate length is zero.
        """
        if candidate_length <= 0:
            msg = "Candidate translation contains no tokens"
            raise InvalidInputError(msg)
        if candidate_length >= reference_length:
            return 1.0
        return math.exp(1 - reference_length / candidate_length)
