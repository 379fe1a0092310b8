"""Asynchronous HTTP communication utilities.

This module provides the ``AsyncHttp`` client used to talk to the inference backend.
It wraps one shared aiohttp session, decodes JSON responses, and maps aiohttp
failures (timeouts, refused connections, error statuses) to ``AsyncCommError`` subclasses.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Final, Literal, Self

import aiohttp
from aiohttp.client import ClientSession

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from aiohttp.client import ClientResponse


__all__: list[str] = [
    "AsyncCommError",
    "AsyncCommInvalidContentTypeError",
    "AsyncCommTimeoutError",
    "AsyncHttp",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

HTTPMethod = Literal["POST"]

CONNECT_TIMEOUT: Final[float] = 1.0
JSON_CONTENT_TYPE: Final[str] = "application/json"


class AsyncHttp:
    """Asynchronous HTTP client with one shared session.

    The session is safe to use from many concurrent tasks; it is created lazily on first use
    (or on entering the context) and closed by ``close()``.

    Response bodies are decoded as JSON; any other content type is an error.
    """

    def __init__(self, *, base_url: str = "") -> None:
        logger.info("%s initializing", self.__class__.__name__)
        self.base_url: str = base_url.rstrip("/")
        self.__session: ClientSession | None = None

    async def __aenter__(self) -> Self:
        logger.debug("%s entering context", self.__class__.__name__)
        self.initialize_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        _ = exc_type, exc_val, exc_tb
        logger.debug("%s exiting context", self.__class__.__name__)
        await self.close()

    def initialize_session(self) -> None:
        """Create the aiohttp session if it does not exist or has been closed."""
        if self.__session is None or self.__session.closed:
            self.__session = ClientSession()
            logger.debug("%s session initialized", self.__class__.__name__)

    @property
    def session(self) -> ClientSession:
        if self.__session is None or self.__session.closed:
            self.initialize_session()
        return self.__session  # type: ignore[return-value]

    @property
    def is_open(self) -> bool:
        return self.__session is not None and not self.__session.closed

    async def close(self) -> None:
        """Close the aiohttp session if it is open."""
        if self.__session and not self.__session.closed:
            await self.__session.close()
        logger.info("%s session closed", self.__class__.__name__)

    async def post(
        self,
        *,
        url: str,
        data: Any | None = None,
        total_timeout: float = 10.0,
    ) -> Any:
        """Perform an asynchronous HTTP POST request with a JSON body.

        Args:
            url (str): Absolute URL, or a path relative to ``base_url``.
            data (Any | None): JSON-serializable request body.
            total_timeout (float): Total timeout for the request in seconds. 0 or less means no timeout.

        Returns:
            Any: The decoded response body.

        Raises:
            AsyncCommTimeoutError: If the request times out.
            AsyncCommError: If the connection fails or the server answers with an error status.
            AsyncCommInvalidContentTypeError: If the response content type is not supported.
        """
        return await self._request("POST", url=url, total_timeout=total_timeout, json=data)

    async def decode_response(self, resp: ClientResponse) -> Any:
        """Decode a JSON response body.

        Args:
            resp (ClientResponse): The response object from the aiohttp request.

        Returns:
            Any: The decoded body, or None for an empty body.

        Raises:
            AsyncCommInvalidContentTypeError: If the body is not JSON.
        """
        content_type: str = resp.headers.get("Content-Type", "").split(";")[0].strip()
        logger.debug("'Content-Type': '%s'", content_type)

        raw: bytes = await resp.read()
        if not raw:
            logger.debug("Received empty response")
            return None

        if content_type != JSON_CONTENT_TYPE:
            msg: str = f"Unknown Content-Type '{content_type}'"
            raise AsyncCommInvalidContentTypeError(msg)

        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as err:
            msg = f"Undecodable '{content_type}' response body"
            raise AsyncCommInvalidContentTypeError(msg) from err

    def _resolve_url(self, url: str) -> str:
        if url.startswith(("http://", "https://")) or not self.base_url:
            return url
        return f"{self.base_url}/{url.lstrip('/')}"

    async def _request(
        self,
        method: HTTPMethod,
        *,
        url: str,
        total_timeout: float,
        **kwargs: Any,
    ) -> Any:
        url = self._resolve_url(url)
        logger.debug("[%s] url=%s timeout=%s", method, url, total_timeout)
        if total_timeout <= 0:
            _timeout = aiohttp.ClientTimeout(total=None)
        elif total_timeout < CONNECT_TIMEOUT:
            # Keep the connect timeout from exceeding a short total timeout.
            _timeout = aiohttp.ClientTimeout(total=total_timeout)
        else:
            _timeout = aiohttp.ClientTimeout(connect=CONNECT_TIMEOUT, total=total_timeout)

        try:
            async with self.session.request(method=method, url=url, timeout=_timeout, **kwargs) as resp:
                resp.raise_for_status()
                return await self.decode_response(resp)

        except TimeoutError as err:
            logger.debug(err)
            msg = "Timeout due to a lack of response from the server."
            raise AsyncCommTimeoutError(msg) from err
        except ConnectionResetError as err:
            logger.debug(err)
            msg = "The connection to the server has been disconnected."
            raise AsyncCommError(msg) from err
        except aiohttp.ClientConnectorError as err:
            logger.debug(err)
            msg = "The server is not running, or the port is closed."
            raise AsyncCommError(msg) from err
        except aiohttp.ClientResponseError as err:
            logger.debug(err)
            msg = "Error response from the server."
            raise AsyncCommError(msg, response=err) from err
        except aiohttp.ClientError as err:
            logger.debug(err)
            msg = f"HTTP client error: {err}"
            raise AsyncCommError(msg) from err


class AsyncCommError(Exception):
    """Base class for asynchronous communication errors.

    Attributes:
        msg (str): Error message, including the HTTP status when a response is attached.
        status (int | None): HTTP status of the error response, if any.
    """

    def __init__(self, msg: str | BaseException, **kwargs: Any) -> None:
        self.msg: str = str(msg)
        self.status: int | None = None

        rsp: aiohttp.ClientResponseError | None = kwargs.pop("response", None)
        if isinstance(rsp, aiohttp.ClientResponseError):
            self.status = rsp.status
            self.msg = f"{self.msg}: status='{rsp.status}'"

        super().__init__(self.msg)


class AsyncCommTimeoutError(AsyncCommError):
    """Error raised when a request does not complete within the timeout."""


class AsyncCommInvalidContentTypeError(AsyncCommError):
    """Error raised when a response body cannot be decoded."""
