from __future__ import annotations

import pytest

from models.evaluation_models import EvaluationOutcome, EvaluationRequest, EvaluationResult
from models.ollama_models import OllamaResponse
from models.translation_models import TranslationContext, TranslationRequest, TranslationResult


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("factory", TranslationContext.FACTORY),
        ("Factory", TranslationContext.FACTORY),
        ("  FACTORY ", TranslationContext.FACTORY),
        ("Maquila", TranslationContext.FACTORY),
        ("nonprofit", TranslationContext.NONPROFIT),
        ("Non-Profit", TranslationContext.NONPROFIT),
        ("filantro", TranslationContext.NONPROFIT),
        ("", TranslationContext.DEFAULT),
        (None, TranslationContext.DEFAULT),
        ("legal", TranslationContext.DEFAULT),
    ],
)
def test_context_resolution(tag: str | None, expected: TranslationContext) -> None:
    assert TranslationContext.resolve(tag) is expected


def test_each_context_has_its_own_key_suffix() -> None:
    suffixes: list[str] = [context.key_suffix for context in TranslationContext]

    assert len(set(suffixes)) == len(suffixes)
    assert TranslationContext.DEFAULT.key_suffix == ""


def test_request_reads_camel_case_json() -> None:
    request: TranslationRequest = TranslationRequest.from_dict(
        {"sourceLanguage": "en", "targetLanguage": "es", "text": "hi", "context": "Factory"}
    )

    assert request.source_language == "en"
    assert request.target_language == "es"
    assert request.resolved_context is TranslationContext.FACTORY


def test_succeeded_result_echoes_request() -> None:
    request = TranslationRequest(source_language="en", target_language="es", text="hi")

    result: TranslationResult = TranslationResult.succeeded(request, "hola")

    assert result.to_dict() == {
        "sourceLanguage": "en",
        "targetLanguage": "es",
        "originalText": "hi",
        "translatedText": "hola",
        "success": True,
        "errorMessage": None,
    }


def test_failed_result_has_no_translation() -> None:
    request = TranslationRequest(source_language="en", target_language="es", text="hi")

    result: TranslationResult = TranslationResult.failed(request, "Translation failed: down")

    assert result.success is False
    assert result.translated_text == ""
    assert result.error_message == "Translation failed: down"


def test_ollama_response_ignores_extra_fields() -> None:
    response: OllamaResponse = OllamaResponse.from_dict(
        {"model": "llama3.1", "response": "hola", "done": True, "eval_count": 12, "context": [1, 2]}
    )

    assert response.response == "hola"


def test_evaluation_request_reads_nested_request() -> None:
    request: EvaluationRequest = EvaluationRequest.from_dict(
        {
            "translationRequest": {"sourceLanguage": "en", "targetLanguage": "es", "text": "hi"},
            "referenceTranslation": "hola",
        }
    )

    assert request.translation_request.text == "hi"
    assert request.translation_request.context == ""
    assert request.reference_translation == "hola"


def test_evaluation_outcome_success_follows_score() -> None:
    request = TranslationRequest(source_language="en", target_language="es", text="hi")
    translation: TranslationResult = TranslationResult.succeeded(request, "hola")

    scored = EvaluationOutcome(translation=translation, evaluation=EvaluationResult("hola", "hola", 1.0))
    unscored = EvaluationOutcome(translation=translation, error_message="no tokens")

    assert scored.success is True
    assert unscored.success is False
