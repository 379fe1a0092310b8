"""Completion backend implementations.

This package contains concrete implementations of ``CompletionInterface``. Importing it registers
every backend by name so that the translation manager can select one from the configuration.

Modules:
- OllamaCompletion: Non-streaming completions from an Ollama server.
"""

from core.trans.engines.ollama import OllamaCompletion

__all__: list[str] = ["OllamaCompletion"]
