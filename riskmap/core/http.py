# riskmap/core/http.py
"""
Transport layer shared by the feed, boundary and NOTAM fetchers.

Redirects are followed by hand: only 301/302 are honoured, everything else
that is not a 200 is a FetchError. Nothing here retries.
"""
from __future__ import annotations

from typing import Dict, Optional

import httpx

from riskmap.core.errors import FetchError
from riskmap.core.settings import Settings

_REDIRECT_STATUSES = (301, 302)


def default_headers(user_agent: str) -> Dict[str, str]:
    return {
        "User-Agent": user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    }


def make_client(
    cfg: Settings,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=cfg.http_timeout_s,
        follow_redirects=False,
        headers=default_headers(cfg.http_user_agent),
        transport=transport,
    )


async def fetch(client: httpx.AsyncClient, url: str, *, max_redirects: int = 5) -> bytes:
    current = url
    for _ in range(max_redirects + 1):
        try:
            r = await client.get(current)
        except httpx.HTTPError as e:
            raise FetchError(current, f"request failed: {e}") from e

        if r.status_code in _REDIRECT_STATUSES:
            location = r.headers.get("location")
            if not location:
                raise FetchError(current, f"redirect {r.status_code} without Location", status=r.status_code)
            current = str(r.url.join(location))
            continue

        if r.status_code != 200:
            raise FetchError(current, f"Failed to fetch: {r.status_code}", status=r.status_code)

        return r.content

    raise FetchError(url, f"too many redirects (>{max_redirects})")


async def fetch_text(client: httpx.AsyncClient, url: str, *, max_redirects: int = 5) -> str:
    data = await fetch(client, url, max_redirects=max_redirects)
    return data.decode("utf-8", errors="replace")
