"""System and user prompt construction for each translation context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from models.translation_models import TranslationContext
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from config.loader import Config
    from models.translation_models import TranslationRequest

__all__: list[str] = ["PromptBuilder", "PromptPair"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

USER_PROMPT_TEMPLATE: Final[str] = "Translate the following text from {source_language} to {target_language}:\n\n"

DEFAULT_SYSTEM_PROMPT: Final[str] = (
    "You are a translation assistant. Your task is to accurately translate text "
    "from {source_language} to {target_language}. "
    "Only respond with the translated text, without any additional comments or explanations."
)

FACTORY_SYSTEM_PROMPT: Final[str] = (
    DEFAULT_SYSTEM_PROMPT + " The text comes from the maquiladora and manufacturing industry. "
    "Words such as 'planta' or 'plant' refer to an industrial plant or factory building, "
    "never to vegetation. Prefer the industrial meaning of any ambiguous term."
)

NONPROFIT_SYSTEM_PROMPT: Final[str] = (
    DEFAULT_SYSTEM_PROMPT + " The text comes from the philanthropy and non-profit sector. "
    "The abbreviation 'OSC' means 'Organización de la Sociedad Civil' (civil society organization); "
    "translate it with the equivalent term of the target language."
)


@dataclass(frozen=True)
class PromptPair:
    """Prompts sent to the completion backend.

    Attributes:
        system (str): System prompt selecting the translation behavior.
        user (str): User prompt containing the text to translate.
    """

    system: str
    user: str


class PromptBuilder:
    """Build the (system, user) prompt pair for a request and context.

    System prompt templates may contain ``{source_language}`` and ``{target_language}``
    placeholders. A non-empty configured override replaces the built-in template of its context.
    """

    def __init__(self, config: Config | None = None) -> None:
        self._templates: dict[TranslationContext, str] = {
            TranslationContext.DEFAULT: DEFAULT_SYSTEM_PROMPT,
            TranslationContext.FACTORY: FACTORY_SYSTEM_PROMPT,
            TranslationContext.NONPROFIT: NONPROFIT_SYSTEM_PROMPT,
        }
        if config is not None:
            overrides: dict[TranslationContext, str] = {
                TranslationContext.DEFAULT: config.OLLAMA.SYSTEM_PROMPT,
                TranslationContext.FACTORY: config.OLLAMA.FACTORY_SYSTEM_PROMPT,
                TranslationContext.NONPROFIT: config.OLLAMA.NONPROFIT_SYSTEM_PROMPT,
            }
            for context, template in overrides.items():
                if template.strip():
                    logger.debug("Using configured system prompt for context '%s'", context.name)
                    self._templates[context] = template

    def system_template(self, context: TranslationContext) -> str:
        return self._templates.get(context, self._templates[TranslationContext.DEFAULT])

    def build_prompt(self, request: TranslationRequest, context: TranslationContext) -> PromptPair:
        """Build the prompts for one request.

        The request text is appended verbatim; only the language names are substituted.

        Args:
            request (TranslationRequest): The translation request.
            context (TranslationContext): The resolved request context.

        Returns:
            PromptPair: System and user prompts.
        """
        languages: dict[str, str] = {
            "source_language": request.source_language,
            "target_language": request.target_language,
        }
        system: str = _fill(self.system_template(context), languages)
        user: str = USER_PROMPT_TEMPLATE.format(**languages) + request.text
        return PromptPair(system=system, user=user)


def _fill(template: str, values: dict[str, str]) -> str:
    # Configured prompts may contain literal braces, so str.format is not used.
    for name, value in values.items():
        template = template.replace("{" + name + "}", value)
    return template
