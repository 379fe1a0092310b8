"""Network handlers for the translation service.

This package provides the asynchronous HTTP client used to reach the completion backend.
The inbound HTTP interface lives in ``handlers.web_api`` and is imported by the entry point.
"""

from handlers.async_comm import AsyncCommError, AsyncCommInvalidContentTypeError, AsyncCommTimeoutError, AsyncHttp

__all__: list[str] = [
    "AsyncCommError",
    "AsyncCommInvalidContentTypeError",
    "AsyncCommTimeoutError",
    "AsyncHttp",
]
