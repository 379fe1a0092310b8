"""Ollama API data models.

Payloads of the ``/api/generate`` endpoint used with ``stream=false``.
"""

from __future__ import annotations

from dataclasses import dataclass

from dataclasses_json import DataClassJsonMixin, Undefined, dataclass_json

__all__: list[str] = ["OllamaRequest", "OllamaResponse"]


@dataclass_json
@dataclass
class OllamaRequest(DataClassJsonMixin):
    """Completion request body.

    Attributes:
        model (str): Model identifier, e.g. "llama3.1".
        prompt (str): User prompt.
        system (str | None): System prompt overriding the model default.
        stream (bool): Always False; the whole response is returned in one body.
    """

    model: str
    prompt: str
    system: str | None = None
    stream: bool = False


@dataclass_json(undefined=Undefined.EXCLUDE)
@dataclass
class OllamaResponse(DataClassJsonMixin):
    """Completion response body.

    Ollama also returns timing and context fields; they are ignored.

    Attributes:
        model (str): Model that produced the response.
        response (str): Generated text.
        done (bool): Whether generation finished.
    """

    model: str = ""
    response: str = ""
    done: bool = False
