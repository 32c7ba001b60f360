# riskmap/services/resolver.py
"""
Advisory → geometry resolution.

Each strategy looks at one advisory and either claims it (returns a
GeometryResolution) or passes (returns None). Strategies run in order and the
first claim wins. A claim may carry no geometry: a registered region whose
member countries are all missing from the boundary index stays unresolved
rather than falling through to single-country lookups.

Pure: no I/O, no clock.
"""
from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from riskmap.core.contracts import AdvisoryRecord, GeometryResolution
from riskmap.core.countries import display_name_for, iso3_for, region_members
from riskmap.services.boundaries import BoundaryIndex
from riskmap.services.geometry import combine_geometries, feature_geometry

logger = logging.getLogger(__name__)

Strategy = Callable[[AdvisoryRecord, BoundaryIndex], Optional[GeometryResolution]]


def _by_region_alias(record: AdvisoryRecord, index: BoundaryIndex) -> Optional[GeometryResolution]:
    members = region_members(record.key, display_name_for(record.key, record.display_name))
    if not members:
        return None
    features = [index.by_iso3(code) for code in members]
    found = [f for f in features if f is not None]
    if len(found) < len(members):
        logger.debug(
            "region %s: %d/%d members in boundary index",
            record.key, len(found), len(members),
        )
    return GeometryResolution(geometry=combine_geometries(found), iso3=None, strategy="region")


def _by_iso3_table(record: AdvisoryRecord, index: BoundaryIndex) -> Optional[GeometryResolution]:
    code = iso3_for(record.key, display_name_for(record.key, record.display_name))
    if not code:
        return None
    geometry = feature_geometry(index.by_iso3(code))
    if geometry is None:
        return None
    return GeometryResolution(geometry=geometry, iso3=code, strategy="iso3")


def _feature_resolution(index: BoundaryIndex, name: str, strategy: str) -> Optional[GeometryResolution]:
    feature = index.lookup(name)
    geometry = feature_geometry(feature)
    if geometry is None:
        return None
    return GeometryResolution(
        geometry=geometry,
        iso3=index.iso3_of(feature),
        strategy=strategy,  # type: ignore[arg-type]
    )


def _by_display_name(record: AdvisoryRecord, index: BoundaryIndex) -> Optional[GeometryResolution]:
    return _feature_resolution(index, display_name_for(record.key, record.display_name), "display_name")


def _by_advisory_key(record: AdvisoryRecord, index: BoundaryIndex) -> Optional[GeometryResolution]:
    return _feature_resolution(index, record.key, "key")


DEFAULT_STRATEGIES: Tuple[Strategy, ...] = (
    _by_region_alias,
    _by_iso3_table,
    _by_display_name,
    _by_advisory_key,
)


class Resolver:
    def __init__(self, index: BoundaryIndex, strategies: Sequence[Strategy] = DEFAULT_STRATEGIES) -> None:
        self.index = index
        self.strategies = tuple(strategies)

    def resolve(self, record: AdvisoryRecord) -> GeometryResolution:
        for strategy in self.strategies:
            res = strategy(record, self.index)
            if res is not None:
                return res
        return GeometryResolution()

    def resolve_all(
        self, records: Sequence[AdvisoryRecord]
    ) -> Tuple[List[Tuple[AdvisoryRecord, GeometryResolution]], List[str]]:
        """Resolve in input order; returns (resolved pairs, unmapped display names)."""
        resolved: List[Tuple[AdvisoryRecord, GeometryResolution]] = []
        unmapped: List[str] = []
        for record in records:
            res = self.resolve(record)
            if res.resolved:
                resolved.append((record, res))
            else:
                unmapped.append(display_name_for(record.key, record.display_name))
        return resolved, unmapped
