"""Models for translation quality evaluation."""

from __future__ import annotations

from dataclasses import dataclass

from dataclasses_json import DataClassJsonMixin, LetterCase, dataclass_json

from models.translation_models import TranslationRequest, TranslationResult

__all__: list[str] = ["EvaluationOutcome", "EvaluationRequest", "EvaluationResult"]


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class EvaluationRequest(DataClassJsonMixin):
    """Translate a request and score it against a human reference.

    Attributes:
        translation_request (TranslationRequest): The translation to perform.
        reference_translation (str): Human reference translation.
    """

    translation_request: TranslationRequest
    reference_translation: str


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class EvaluationResult(DataClassJsonMixin):
    """Score of a machine translation against a reference.

    Attributes:
        reference (str): Reference translation.
        translation (str): Machine translation.
        bleu_score (float): BLEU score in [0, 1].
    """

    reference: str
    translation: str
    bleu_score: float


@dataclass
class EvaluationOutcome:
    """Result of the evaluate operation.

    Attributes:
        translation (TranslationResult): The underlying translate result.
        evaluation (EvaluationResult | None): Score, or None if translation or scoring failed.
        error_message (str | None): Failure reason when evaluation is None.
    """

    translation: TranslationResult
    evaluation: EvaluationResult | None = None
    error_message: str | None = None

    @property
    def success(self) -> bool:
        return self.evaluation is not None
