from __future__ import annotations

from typing import TYPE_CHECKING

from core.evaluation.bleu import BleuScoreEvaluator, InvalidInputError
from models.evaluation_models import EvaluationOutcome, EvaluationResult
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from core.trans.manager import TransManager
    from models.evaluation_models import EvaluationRequest
    from models.translation_models import TranslationResult

__all__: list[str] = ["EvaluationService"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class EvaluationService:
    """Translate a request and score the translation against a reference with BLEU."""

    def __init__(self, trans_manager: TransManager, evaluator: type[BleuScoreEvaluator] = BleuScoreEvaluator) -> None:
        self.trans_manager: TransManager = trans_manager
        self.evaluator: type[BleuScoreEvaluator] = evaluator

    async def evaluate(self, request: EvaluationRequest) -> EvaluationOutcome:
        """Evaluate one request.

        Args:
            request (EvaluationRequest): Translation request and reference translation.

        Returns:
            EvaluationOutcome: The score on success. On a translation failure, the failed
                translation result with its error message and no score.
        """
        translation: TranslationResult = await self.trans_manager.translate(request.translation_request)
        if not translation.success:
            logger.warning("Evaluation skipped, translation failed: %s", translation.error_message)
            return EvaluationOutcome(translation=translation, error_message=translation.error_message)

        try:
            score: float = self.evaluator.compute_bleu(request.reference_translation, translation.translated_text)
        except InvalidInputError as err:
            logger.warning("BLEU score could not be computed: %s", err)
            return EvaluationOutcome(translation=translation, error_message=str(err))

        logger.debug("BLEU score %.4f for '%s'", score, request.reference_translation)
        return EvaluationOutcome(
            translation=translation,
            evaluation=EvaluationResult(
                reference=request.reference_translation,
                translation=translation.translated_text,
                bleu_score=score,
            ),
        )
