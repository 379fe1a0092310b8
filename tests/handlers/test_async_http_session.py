from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from handlers.async_comm import AsyncCommError, AsyncCommInvalidContentTypeError, AsyncHttp

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


@pytest.fixture
async def server() -> AsyncIterator[TestServer]:
    async def echo(request: web.Request) -> web.Response:
        body: Any = await request.json()
        return web.json_response({"echo": body})

    async def html(request: web.Request) -> web.Response:
        _ = request
        return web.Response(text="<html></html>", content_type="text/html")

    async def broken_json(request: web.Request) -> web.Response:
        _ = request
        return web.Response(text="{not json", content_type="application/json")

    async def empty(request: web.Request) -> web.Response:
        _ = request
        return web.Response(status=200, content_type="application/json")

    async def not_found(request: web.Request) -> web.Response:
        _ = request
        return web.json_response({"error": "missing"}, status=404)

    app = web.Application()
    app.router.add_post("/echo", echo)
    app.router.add_post("/html", html)
    app.router.add_post("/broken", broken_json)
    app.router.add_post("/empty", empty)
    app.router.add_post("/missing", not_found)
    test_server = TestServer(app)
    await test_server.start_server()
    yield test_server
    await test_server.close()


@pytest.fixture
async def http(server: TestServer) -> AsyncIterator[AsyncHttp]:
    client = AsyncHttp(base_url=f"http://{server.host}:{server.port}/")
    yield client
    await client.close()


@pytest.mark.asyncio
async def test_session_is_created_lazily(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG)

    http = AsyncHttp()
    assert http.is_open is False

    _ = http.session

    assert http.is_open is True
    assert any("AsyncHttp session initialized" in rec.message for rec in caplog.records)
    await http.close()


@pytest.mark.asyncio
async def test_reenter_after_close_reinitializes_session(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG)
    http = AsyncHttp()

    async with http:
        pass
    assert http.is_open is False

    caplog.clear()
    async with http:
        assert http.is_open is True

    assert any("AsyncHttp session initialized" in rec.message for rec in caplog.records)


@pytest.mark.asyncio
async def test_post_resolves_relative_path_and_decodes_json(http: AsyncHttp) -> None:
    assert await http.post(url="/echo", data={"a": 1}) == {"echo": {"a": 1}}
    assert await http.post(url="echo", data=[1, 2]) == {"echo": [1, 2]}


@pytest.mark.asyncio
async def test_empty_body_decodes_to_none(http: AsyncHttp) -> None:
    assert await http.post(url="/empty", data={}) is None


@pytest.mark.asyncio
async def test_non_json_content_type_raises(http: AsyncHttp) -> None:
    with pytest.raises(AsyncCommInvalidContentTypeError):
        await http.post(url="/html", data={})


@pytest.mark.asyncio
async def test_undecodable_json_raises(http: AsyncHttp) -> None:
    with pytest.raises(AsyncCommInvalidContentTypeError):
        await http.post(url="/broken", data={})


@pytest.mark.asyncio
async def test_error_status_is_attached_to_exception(http: AsyncHttp) -> None:
    with pytest.raises(AsyncCommError) as exc_info:
        await http.post(url="/missing", data={})

    assert exc_info.value.status == 404
    assert "404" in exc_info.value.msg


@pytest.mark.asyncio
async def test_absolute_url_ignores_base_url(server: TestServer) -> None:
    client = AsyncHttp(base_url="http://unused.invalid")
    try:
        assert await client.post(url=f"http://{server.host}:{server.port}/echo", data={"b": 2}) == {"echo": {"b": 2}}
    finally:
        await client.close()
