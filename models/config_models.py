"""Configuration data models for the translation service.

Each dataclass is one INI section. Field names match the INI keys and every field carries the
default used when the key is absent from the file.
"""

from __future__ import annotations

from dataclasses import dataclass, field

__all__: list[str] = [
    "Config",
    "General",
    "Ollama",
    "Redis",
    "Server",
]


@dataclass
class General:
    DEBUG: bool = False
    VERSION: str = ""
    LOG_FILE: str = ""
    SCRIPT_NAME: str = ""


@dataclass
class Server:
    HOST: str = "0.0.0.0"  # noqa: S104
    PORT: int = 8080


@dataclass
class Ollama:
    BASE_URL: str = "http://localhost:11434"
    TIMEOUT: float = 60.0
    MODEL_NAME: str = "llama3.1"
    # Empty prompt overrides fall back to the built-in prompts in core.trans.prompt_builder.
    SYSTEM_PROMPT: str = ""
    FACTORY_SYSTEM_PROMPT: str = ""
    NONPROFIT_SYSTEM_PROMPT: str = ""


@dataclass
class Redis:
    URL: str = "redis://localhost:6379/0"
    KEY_PREFIX: str = "translation:"
    CACHE_EXPIRATION_HOURS: int = 24


@dataclass
class Config:
    GENERAL: General = field(default_factory=General)
    SERVER: Server = field(default_factory=Server)
    OLLAMA: Ollama = field(default_factory=Ollama)
    REDIS: Redis = field(default_factory=Redis)
