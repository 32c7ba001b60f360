from __future__ import annotations

import httpx
import pytest

from conftest import html_response, make_transport
from riskmap.core.errors import FetchError
from riskmap.core.http import fetch, fetch_text, make_client

A = "https://a.test/page"
B = "https://b.test/moved"


class TestFetch:
    @pytest.mark.asyncio
    async def test_ok(self, cfg):
        async with make_client(cfg, transport=make_transport({A: html_response("héllo")})) as client:
            assert await fetch_text(client, A) == "héllo"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [301, 302])
    async def test_follows_301_and_302(self, cfg, status):
        routes = {
            A: httpx.Response(status, headers={"Location": B}),
            B: html_response("there"),
        }
        async with make_client(cfg, transport=make_transport(routes)) as client:
            assert await fetch(client, A) == b"there"

    @pytest.mark.asyncio
    async def test_relative_location(self, cfg):
        routes = {
            A: httpx.Response(302, headers={"Location": "/elsewhere"}),
            "https://a.test/elsewhere": html_response("ok"),
        }
        async with make_client(cfg, transport=make_transport(routes)) as client:
            assert await fetch(client, A) == b"ok"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [303, 307, 404, 500])
    async def test_other_statuses_fail(self, cfg, status):
        routes = {A: httpx.Response(status, headers={"Location": B}), B: html_response("x")}
        async with make_client(cfg, transport=make_transport(routes)) as client:
            with pytest.raises(FetchError) as exc:
                await fetch(client, A)
        assert exc.value.status == status

    @pytest.mark.asyncio
    async def test_redirect_loop(self, cfg):
        routes = {A: httpx.Response(302, headers={"Location": A})}
        async with make_client(cfg, transport=make_transport(routes)) as client:
            with pytest.raises(FetchError, match="too many redirects"):
                await fetch(client, A, max_redirects=3)

    @pytest.mark.asyncio
    async def test_network_error(self, cfg):
        def boom(request):
            raise httpx.ConnectError("refused", request=request)

        async with make_client(cfg, transport=make_transport({A: boom})) as client:
            with pytest.raises(FetchError):
                await fetch(client, A)

    @pytest.mark.asyncio
    async def test_sends_browser_headers(self, cfg):
        seen = {}

        def capture(request):
            seen.update(request.headers)
            return html_response("ok")

        async with make_client(cfg, transport=make_transport({A: capture})) as client:
            await fetch(client, A)
        assert seen["user-agent"] == cfg.http_user_agent
        assert seen["accept"].startswith("text/html")
