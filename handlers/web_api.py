# ruff: noqa: BLE001
"""HTTP interface of the translation service.

Routes:
    POST /api/translation: Translate a text, optionally in a domain context.
    POST /api/evaluation: Translate a text and score it against a reference with BLEU.
    GET /health: Liveness probe.

Handlers validate the inbound JSON, delegate to the shared components, and map outcomes to
HTTP status codes. Every error response is a JSON object with an ``error`` field.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Final

from aiohttp import web

from core.shared_data import SharedData
from core.version import VERSION
from models.evaluation_models import EvaluationRequest
from models.translation_models import TranslationRequest
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Awaitable, Callable

    from models.evaluation_models import EvaluationOutcome
    from models.translation_models import TranslationResult

__all__: list[str] = ["SHARED_DATA_KEY", "RequestValidationError", "TranslationWebApi"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

SHARED_DATA_KEY: Final[web.AppKey[SharedData]] = web.AppKey("shared_data", SharedData)

TRANSLATION_PATH: Final[str] = "/api/translation"
EVALUATION_PATH: Final[str] = "/api/evaluation"
HEALTH_PATH: Final[str] = "/health"

INVALID_EVALUATION_MESSAGE: Final[str] = "Invalid request."
EVALUATION_FAILURE_PREFIX: Final[str] = "Error in translation service: "

CORS_HEADERS: Final[dict[str, str]] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "*",
}


class RequestValidationError(Exception):
    """The inbound request body is malformed or misses a required field."""


class TranslationWebApi:
    """aiohttp application exposing the translation and evaluation operations.

    Attributes:
        shared_data (SharedData): Components shared by all handlers.
    """

    def __init__(self, shared_data: SharedData) -> None:
        self.shared_data: SharedData = shared_data

    def create_app(self, *, manage_lifecycle: bool = True) -> web.Application:
        """Build the aiohttp application.

        Args:
            manage_lifecycle (bool): Load the shared components on start-up and release them on
                clean-up. Disable when the components are managed by the caller.

        Returns:
            web.Application: The configured application.
        """
        app = web.Application(middlewares=[cors_middleware, error_middleware])
        app[SHARED_DATA_KEY] = self.shared_data
        app.router.add_post(TRANSLATION_PATH, self.handle_translation)
        app.router.add_post(EVALUATION_PATH, self.handle_evaluation)
        app.router.add_get(HEALTH_PATH, self.handle_health)
        if manage_lifecycle:
            app.on_startup.append(self._on_startup)
            app.on_cleanup.append(self._on_cleanup)
        return app

    async def _on_startup(self, app: web.Application) -> None:
        _ = app
        await self.shared_data.async_init()
        await self.shared_data.component_load()
        logger.info("Translation service started")

    async def _on_cleanup(self, app: web.Application) -> None:
        _ = app
        await self.shared_data.component_teardown()
        logger.info("Translation service stopped")

    async def handle_translation(self, request: web.Request) -> web.Response:
        try:
            payload: dict[str, Any] = await read_json_object(request)
            trans_request: TranslationRequest = parse_translation_request(payload)
        except RequestValidationError as err:
            logger.debug("Rejected translation request: %s", err)
            return error_response(str(err), status=400)

        logger.info(
            "Received translation request from %s to %s",
            trans_request.source_language,
            trans_request.target_language,
        )
        result: TranslationResult = await self.shared_data.trans_manager.translate(trans_request)
        status: int = 200 if result.success else 500
        return web.json_response(result.to_dict(), status=status)

    async def handle_evaluation(self, request: web.Request) -> web.Response:
        try:
            payload: dict[str, Any] = await read_json_object(request)
            eval_request: EvaluationRequest = parse_evaluation_request(payload)
        except RequestValidationError as err:
            logger.debug("Rejected evaluation request: %s", err)
            return error_response(INVALID_EVALUATION_MESSAGE, status=400)

        outcome: EvaluationOutcome = await self.shared_data.evaluation_service.evaluate(eval_request)
        if outcome.evaluation is None:
            message: str = StringUtils.ensure_str(outcome.error_message)
            return error_response(f"{EVALUATION_FAILURE_PREFIX}{message}", status=500)
        return web.json_response(outcome.evaluation.to_dict())

    async def handle_health(self, request: web.Request) -> web.Response:
        _ = request
        return web.json_response({"status": "ok", "version": VERSION})


async def read_json_object(request: web.Request) -> dict[str, Any]:
    """Read the request body as a JSON object.

    Raises:
        RequestValidationError: If the body is not valid JSON or not an object.
    """
    try:
        payload: Any = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as err:
        msg = "Request body must be valid JSON"
        raise RequestValidationError(msg) from err
    if not isinstance(payload, dict):
        msg = "Request body must be a JSON object"
        raise RequestValidationError(msg)
    return payload


def parse_translation_request(payload: dict[str, Any]) -> TranslationRequest:
    """Validate a translation request body.

    Args:
        payload (dict[str, Any]): Decoded JSON body with camelCase keys.

    Returns:
        TranslationRequest: The validated request.

    Raises:
        RequestValidationError: If a required field is missing or blank, or the context is not a string.
    """
    required: tuple[tuple[str, str], ...] = (
        ("sourceLanguage", "Source language is required"),
        ("targetLanguage", "Target language is required"),
        ("text", "Text to translate is required"),
    )
    for key, message in required:
        value: Any = payload.get(key)
        if not isinstance(value, str) or StringUtils.is_blank(value):
            raise RequestValidationError(message)

    context: Any = payload.get("context")
    if context is not None and not isinstance(context, str):
        msg = "Context must be a string"
        raise RequestValidationError(msg)

    return TranslationRequest(
        source_language=payload["sourceLanguage"],
        target_language=payload["targetLanguage"],
        text=payload["text"],
        context=context or "",
    )


def parse_evaluation_request(payload: dict[str, Any]) -> EvaluationRequest:
    """Validate an evaluation request body.

    Raises:
        RequestValidationError: If the nested translation request is missing or invalid, or the
            reference translation is blank.
    """
    nested: Any = payload.get("translationRequest")
    if not isinstance(nested, dict):
        msg = "translationRequest is required"
        raise RequestValidationError(msg)

    reference: Any = payload.get("referenceTranslation")
    if not isinstance(reference, str) or StringUtils.is_blank(reference):
        msg = "referenceTranslation is required"
        raise RequestValidationError(msg)

    return EvaluationRequest(
        translation_request=parse_translation_request(nested),
        reference_translation=reference,
    )


def error_response(message: str, *, status: int) -> web.Response:
    return web.json_response({"error": message}, status=status)


@web.middleware
async def error_middleware(
    request: web.Request,
    handler: Callable[[web.Request], Awaitable[web.StreamResponse]],
) -> web.StreamResponse:
    """Turn unexpected handler exceptions into a JSON 500 response without a traceback."""
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except Exception as err:
        logger.exception("Unhandled error on %s %s: %s", request.method, request.path, err)
        return error_response("Internal server error", status=500)


@web.middleware
async def cors_middleware(
    request: web.Request,
    handler: Callable[[web.Request], Awaitable[web.StreamResponse]],
) -> web.StreamResponse:
    """Allow cross-origin calls from any origin and answer preflight requests."""
    if request.method == "OPTIONS":
        return web.Response(status=204, headers=CORS_HEADERS)
    try:
        response: web.StreamResponse = await handler(request)
    except web.HTTPException as exc:
        exc.headers.update(CORS_HEADERS)
        raise
    response.headers.update(CORS_HEADERS)
    return response
