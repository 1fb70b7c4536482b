from __future__ import annotations

import socket

import aiohttp
import pytest
from aiohttp import test_utils, web

from ticketsync._transport import HttpTransport
from ticketsync.exceptions import TicketSyncDecodeError, TicketSyncTransportError


def _app() -> web.Application:
    async def users(_request: web.Request) -> web.Response:
        return web.json_response([{"userId": "u1"}])

    async def moved(_request: web.Request) -> web.Response:
        raise web.HTTPFound("/users")

    async def broken(_request: web.Request) -> web.Response:
        return web.Response(status=503, text="backend unavailable")

    async def garbage(_request: web.Request) -> web.Response:
        return web.Response(text="<html>sign in</html>", content_type="text/html")

    async def latin1(_request: web.Request) -> web.Response:
        return web.Response(body=b'[{"userId": "u1", "fullName": "\xff"}]', content_type="application/json")

    async def non_finite(_request: web.Request) -> web.Response:
        return web.Response(text='[{"userId": "u1", "sn": NaN}]', content_type="application/json")

    async def nested(_request: web.Request) -> web.Response:
        return web.Response(text="[" * 100_000 + "]" * 100_000, content_type="application/json")

    app = web.Application()
    app.router.add_get("/users", users)
    app.router.add_get("/moved", moved)
    app.router.add_get("/broken", broken)
    app.router.add_get("/garbage", garbage)
    app.router.add_get("/latin1", latin1)
    app.router.add_get("/non-finite", non_finite)
    app.router.add_get("/nested", nested)
    return app


def _unused_port() -> int:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return int(sock.getsockname()[1])


@pytest.mark.asyncio
async def test_get_json_decodes_array_and_follows_redirects() -> None:
    async with test_utils.TestServer(_app()) as server, aiohttp.ClientSession() as session:
        transport = HttpTransport(session)
        assert await transport.get_json(str(server.make_url("/users"))) == [{"userId": "u1"}]
        assert await transport.get_json(str(server.make_url("/moved"))) == [{"userId": "u1"}]


@pytest.mark.asyncio
async def test_non_2xx_is_a_transport_error() -> None:
    async with test_utils.TestServer(_app()) as server, aiohttp.ClientSession() as session:
        url = str(server.make_url("/broken"))
        with pytest.raises(TicketSyncTransportError) as exc_info:
            await HttpTransport(session).get_json(url)
    assert exc_info.value.status_code == 503
    assert exc_info.value.endpoint == url


@pytest.mark.asyncio
async def test_invalid_json_is_a_decode_error() -> None:
    async with test_utils.TestServer(_app()) as server, aiohttp.ClientSession() as session:
        with pytest.raises(TicketSyncDecodeError, match="Invalid JSON"):
            await HttpTransport(session).get_json(str(server.make_url("/garbage")))


@pytest.mark.asyncio
async def test_connection_failure_is_a_transport_error() -> None:
    url = f"http://127.0.0.1:{_unused_port()}/users"
    async with aiohttp.ClientSession() as session:
        with pytest.raises(TicketSyncTransportError) as exc_info:
            await HttpTransport(session).get_json(url)
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/latin1", "/non-finite", "/nested"])
async def test_undecodable_body_is_a_decode_error(path: str) -> None:
    async with test_utils.TestServer(_app()) as server, aiohttp.ClientSession() as session:
        url = str(server.make_url(path))
        with pytest.raises(TicketSyncDecodeError) as exc_info:
            await HttpTransport(session).get_json(url)
    assert exc_info.value.endpoint == url
