"""
Tests for the GeoGuessr API client against a local aiohttp server.
"""

import asyncio
import json

import aiohttp
import pytest
from aiohttp import web
from aiohttp import test_utils

from autosaver.api import ClientConfig, GeoGuessrClient
from autosaver.sync.candidates import EndpointFamily

pytestmark = pytest.mark.network

RECORD_BODY = b'{"gameId":"g1",  "rounds":[]}'


def make_app(seen):
    async def feed(request):
        seen.append(("feed", request.query.get("paginationToken"), request.headers.get("Cookie")))
        if request.query.get("paginationToken") == "page-2":
            return web.json_response({"entries": []})
        return web.json_response({
            "entries": [{"time": "2024-05-01T10:00:00Z", "payload": "{}"}],
            "paginationToken": "page-2",
        })

    async def duel(request):
        seen.append(("duels", request.match_info["game_id"], request.headers.get("Cookie")))
        return web.Response(body=RECORD_BODY, content_type="application/json")

    async def battle_royale(request):
        seen.append(("battle-royale", request.match_info["game_id"], request.headers.get("Cookie")))
        raise web.HTTPNotFound()

    async def broken_feed(request):
        return web.json_response(["not", "a", "page"])

    app = web.Application()
    app.router.add_get("/feed", feed)
    app.router.add_get("/broken", broken_feed)
    app.router.add_get("/api/duels/{game_id}", duel)
    app.router.add_get("/api/battle-royale/{game_id}", battle_royale)
    return app


def with_client(scenario, feed_path="/feed"):
    """Run scenario(client, seen) against a fresh local server."""
    seen = []

    async def main():
        server = test_utils.TestServer(make_app(seen))
        await server.start_server()
        try:
            config = ClientConfig(
                ncfa_cookie="secret",
                timeout=5,
                feed_url=str(server.make_url(feed_path)),
                gameserver_url=str(server.make_url("/api")),
            )
            async with GeoGuessrClient(config) as client:
                return await scenario(client), seen, client.api_calls
        finally:
            await server.close()

    return asyncio.run(main())


class TestFeed:
    """Tests for fetch_feed_page()."""

    def test_first_page(self):
        page, seen, calls = with_client(lambda client: client.fetch_feed_page(None))
        assert len(page.entries) == 1
        assert page.next_cursor == "page-2"
        assert seen == [("feed", None, "_ncfa=secret")]
        assert calls == 1

    def test_cursor_sent_and_last_page(self):
        page, seen, _ = with_client(lambda client: client.fetch_feed_page("page-2"))
        assert page.entries == []
        assert page.next_cursor is None
        assert seen[0][1] == "page-2"

    def test_unexpected_shape(self):
        with pytest.raises(ValueError):
            with_client(lambda client: client.fetch_feed_page(None), feed_path="/broken")


class TestRecords:
    """Tests for fetch_record()."""

    def test_body_returned_unmodified(self):
        body, seen, _ = with_client(lambda client: client.fetch_record("g1", EndpointFamily.DUELS))
        assert body == RECORD_BODY
        assert seen == [("duels", "g1", "_ncfa=secret")]

    def test_http_error_raised(self):
        with pytest.raises(aiohttp.ClientResponseError):
            with_client(lambda client: client.fetch_record("g2", EndpointFamily.BATTLE_ROYALE))


class TestRecordUrl:
    """Tests for EndpointFamily.record_url()."""

    def test_urls(self):
        assert EndpointFamily.DUELS.record_url("g1", "https://example.test/api/") == "https://example.test/api/duels/g1"
        assert EndpointFamily.BATTLE_ROYALE.record_url("g1", "https://example.test/api") == (
            "https://example.test/api/battle-royale/g1"
        )

    def test_default_base(self):
        assert EndpointFamily.DUELS.record_url("g1").endswith("/duels/g1")
