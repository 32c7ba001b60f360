"""
Shared fixtures: a miniature SafeAirspace site and boundary dataset served
through httpx.MockTransport, so no test touches the network.
"""
from __future__ import annotations

from typing import Callable, Dict, List, Union

import httpx
import orjson
import pytest

from riskmap.core.settings import Settings

BASE_URL = "https://safeairspace.test"
BOUNDARIES_URL = "https://boundaries.test/countries.geojson"

Route = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


def feature(iso3: str, name: str, coordinates, gtype: str = "Polygon") -> dict:
    return {
        "type": "Feature",
        "properties": {"ISO3166-1-Alpha-3": iso3, "name": name},
        "geometry": {"type": gtype, "coordinates": coordinates},
    }


def square(x: float, y: float, size: float = 1) -> list:
    return [[[x, y], [x + size, y], [x + size, y + size], [x, y + size], [x, y]]]


FRANCE_RINGS = [[[1.5, 2], [3, 4], [5, 6], [1.5, 2]]]


@pytest.fixture
def boundary_features() -> List[dict]:
    return [
        feature("FRA", "France", FRANCE_RINGS),
        feature("SAU", "Saudi Arabia", square(45, 24)),
        feature("GTM", "Guatemala", square(-91, 15)),
        feature("HND", "Honduras", square(-87, 14)),
        feature("PAN", "Panama", [square(-80, 8), square(-79, 9, 0.5)], gtype="MultiPolygon"),
        feature("-99", "Kosovo", square(20, 42)),
        feature("MEX", "Mexico", square(-100, 20)),
    ]


@pytest.fixture
def boundaries_doc(boundary_features) -> dict:
    return {"type": "FeatureCollection", "features": boundary_features}


@pytest.fixture
def cfg(tmp_path) -> Settings:
    return Settings(
        SAFEAIRSPACE_BASE_URL=BASE_URL,
        BOUNDARIES_URL=BOUNDARIES_URL,
        KML_DIR=str(tmp_path / "kmls"),
        MANIFEST_PATH=str(tmp_path / "kml-manifest.json"),
        MANIFEST_BASE_URL="https://example.test/kmls",
    )


def make_transport(routes: Dict[str, Route], calls: List[str] | None = None) -> httpx.MockTransport:
    """Exact-URL router; anything unknown is a 404."""

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        if calls is not None:
            calls.append(url)
        route = routes.get(url)
        if route is None:
            return httpx.Response(404, text="not found")
        if callable(route):
            return route(request)
        return route

    return httpx.MockTransport(handler)


def html_response(text: str) -> httpx.Response:
    return httpx.Response(200, text=text, headers={"content-type": "text/html; charset=utf-8"})


def json_response(doc) -> httpx.Response:
    return httpx.Response(200, content=orjson.dumps(doc), headers={"content-type": "application/json"})


def notice_block(
    *,
    source: str = "France",
    reference: str = "LFFF A1234/24",
    issued: str = "01 Mar 2024",
    valid: str = "PERM",
    plain: str = "Airspace closed <b>below</b> FL100.",
    content: str = "A1234/24 NOTAMN<br>Q) LFFF",
) -> str:
    parts = ['<div class="page-country-source">']
    if source is not None:
        parts.append(f'<div class="page-country-source-country">Source: {source}</div>')
    if reference is not None:
        parts.append(f'<div class="page-country-source-ref">Reference: <a href="#">{reference}</a></div>')
    if issued is not None:
        parts.append(f"<p>Issued: <strong>{issued}</strong>, valid until: <strong>{valid}</strong></p>")
    if plain is not None:
        parts.append(
            '<div class="page-country-source-plain"><span class="highlight">Plain English:</span> '
            f"{plain}</div>"
        )
    if content is not None:
        parts.append(f'<div class="page-country-source-content">{content}</div>')
    parts.append("</div><!-- .page-country-source -->")
    return "".join(parts)
