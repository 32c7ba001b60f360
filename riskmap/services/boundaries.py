# riskmap/services/boundaries.py
"""
Country boundary index.

Loads a GeoJSON FeatureCollection of national polygons once per run and makes
each feature reachable by ISO3 code or by its exact display name.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import httpx
import orjson

from riskmap.core.contracts import GeoJSON
from riskmap.core.errors import BoundaryLoadError, FetchError
from riskmap.core.http import fetch
from riskmap.core.settings import Settings

logger = logging.getLogger(__name__)


class BoundaryIndex:
    def __init__(
        self,
        features: Iterable[GeoJSON],
        *,
        iso3_property: str = "ISO3166-1-Alpha-3",
        name_property: str = "name",
        unknown_iso3: str = "-99",
    ) -> None:
        self.iso3_property = iso3_property
        self.name_property = name_property
        self.unknown_iso3 = unknown_iso3
        self._by_iso3: Dict[str, GeoJSON] = {}
        self._by_name: Dict[str, GeoJSON] = {}
        self._count = 0

        # Later features overwrite earlier ones that share a key; features
        # without an object for properties are skipped
        for feature in features:
            if not isinstance(feature, dict) or not isinstance(feature.get("properties"), dict):
                continue
            self._count += 1
            iso3 = self.iso3_of(feature)
            if iso3:
                self._by_iso3[iso3] = feature
            name = feature["properties"].get(name_property)
            if name:
                self._by_name[str(name)] = feature

    def __len__(self) -> int:
        return self._count

    def iso3_of(self, feature: GeoJSON) -> Optional[str]:
        props = feature.get("properties")
        iso3 = props.get(self.iso3_property) if isinstance(props, dict) else None
        if not iso3 or str(iso3) == self.unknown_iso3:
            return None
        return str(iso3)

    def by_iso3(self, code: str) -> Optional[GeoJSON]:
        return self._by_iso3.get(code)

    def by_name(self, name: str) -> Optional[GeoJSON]:
        return self._by_name.get(name)

    def lookup(self, key: str) -> Optional[GeoJSON]:
        """ISO3 first, then exact display name."""
        return self._by_iso3.get(key) or self._by_name.get(key)

    @classmethod
    def from_geojson(cls, doc: Any, **kwargs: Any) -> "BoundaryIndex":
        if not isinstance(doc, dict) or not isinstance(doc.get("features"), list):
            raise BoundaryLoadError("boundary dataset is not a GeoJSON FeatureCollection")
        return cls(doc["features"], **kwargs)


def parse_boundaries(raw: bytes, cfg: Settings) -> BoundaryIndex:
    try:
        doc = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise BoundaryLoadError(f"boundary dataset is not valid JSON: {e}") from e

    return BoundaryIndex.from_geojson(
        doc,
        iso3_property=cfg.boundaries_iso3_property,
        name_property=cfg.boundaries_name_property,
        unknown_iso3=cfg.boundaries_unknown_iso3,
    )


async def load_boundaries(client: httpx.AsyncClient, cfg: Settings) -> BoundaryIndex:
    """
    Read BOUNDARIES_PATH if set, otherwise fetch BOUNDARIES_URL.

    Raises BoundaryLoadError on any failure: without boundaries no placemark
    can be produced.
    """
    if cfg.boundaries_path:
        logger.info("boundaries source=file path=%s", cfg.boundaries_path)
        try:
            raw = Path(cfg.boundaries_path).read_bytes()
        except OSError as e:
            raise BoundaryLoadError(f"cannot read {cfg.boundaries_path}: {e}") from e
    else:
        logger.info("boundaries source=url url=%s", cfg.boundaries_url)
        try:
            raw = await fetch(client, cfg.boundaries_url, max_redirects=cfg.http_max_redirects)
        except FetchError as e:
            raise BoundaryLoadError(f"cannot fetch country boundaries: {e}") from e

    index = parse_boundaries(raw, cfg)
    logger.info("boundaries loaded features=%d", len(index))
    return index
