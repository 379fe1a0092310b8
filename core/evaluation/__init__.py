"""Translation quality evaluation.

Provides the BLEU scorer and the service that translates a request and scores the result
against a human reference.
"""

from core.evaluation.bleu import BleuScoreEvaluator, InvalidInputError
from core.evaluation.service import EvaluationService

__all__: list[str] = ["BleuScoreEvaluator", "EvaluationService", "InvalidInputError"]
