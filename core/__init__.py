"""Core components of the translation service.

This package contains the shared data container, the translation cache, the cache-aside
translation manager with its completion backends, and translation quality evaluation.
"""

from core.shared_data import SharedData
from core.version import VERSION

__all__: list[str] = [
    "VERSION",
    "SharedData",
]
