# riskmap/services/pipeline.py
"""
SafeAirspace → KML update run.

    feed page ─┐
               ├─ extract → filter → NOTAMs (batched) → resolve → KML → file
    boundaries ┘

Only a missing feed page or boundary dataset fails the run; per-country
NOTAM failures and unmapped advisories are reported and skipped.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

import httpx

from riskmap.core.contracts import AdvisoryRecord, NoticeRecord, OutputFeature, UpdateReport
from riskmap.core.countries import RISK_LABELS, RISK_LEVELS, display_name_for
from riskmap.core.errors import BoundaryLoadError, FeedUnavailableError, FetchError
from riskmap.core.http import fetch_text, make_client
from riskmap.core.settings import Settings, settings as default_settings
from riskmap.core.time import utc_now_iso
from riskmap.services.advisories import extract_advisories, reportable
from riskmap.services.boundaries import load_boundaries
from riskmap.services.kml import build_kml
from riskmap.services.manifest import build_manifest, write_manifest
from riskmap.services.notices import NoticeFetcher
from riskmap.services.resolver import Resolver

logger = logging.getLogger(__name__)


def build_features(
    records: List[AdvisoryRecord],
    resolver: Resolver,
    notices: Dict[str, List[NoticeRecord]],
    *,
    generated_at: str,
) -> tuple[List[OutputFeature], List[str]]:
    resolved, unmapped = resolver.resolve_all(records)
    features = [
        OutputFeature(
            key=rec.key,
            display_name=display_name_for(rec.key, rec.display_name),
            level=rec.effective_level,  # type: ignore[arg-type]
            warning=rec.warning,
            news=rec.news,
            geometry=res.geometry,  # type: ignore[arg-type]
            iso3=res.iso3,
            notices=notices.get(rec.key, []),
            generated_at=generated_at,
        )
        for rec, res in resolved
    ]
    return features, unmapped


class SafeAirspace:
    def __init__(
        self,
        *,
        cfg: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.cfg = cfg or default_settings
        self.transport = transport

    @property
    def output_path(self) -> Path:
        return Path(self.cfg.kml_dir) / self.cfg.safeairspace_kml_filename

    async def update(self) -> UpdateReport:
        cfg = self.cfg
        generated_at = utc_now_iso()
        logger.info("safeairspace update start")

        async with make_client(cfg, transport=self.transport) as client:
            try:
                page = await fetch_text(
                    client,
                    cfg.safeairspace_base_url.rstrip("/") + "/",
                    max_redirects=cfg.http_max_redirects,
                )
            except FetchError as e:
                return self._failed(generated_at, FeedUnavailableError(f"cannot fetch feed page: {e}"))
            logger.info("feed page fetched kb=%.1f", len(page) / 1024)

            try:
                index = await load_boundaries(client, cfg)
            except BoundaryLoadError as e:
                return self._failed(generated_at, e)

            records = reportable(extract_advisories(page).values())
            logger.info("advisories reportable=%d", len(records))

            notices: Dict[str, List[NoticeRecord]] = {}
            warnings_out: List[str] = []
            if cfg.notices_enabled and records:
                fetcher = NoticeFetcher(
                    client,
                    base_url=cfg.safeairspace_base_url,
                    batch_size=cfg.notices_batch_size,
                    max_redirects=cfg.http_max_redirects,
                )
                notices = await fetcher.fetch_all(records)
                warnings_out.extend(fetcher.warnings)

        features, unmapped = build_features(records, Resolver(index), notices, generated_at=generated_at)

        kml = build_kml(features, generated_at=generated_at, base_url=cfg.safeairspace_base_url)
        out_path = self.output_path
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(kml, encoding="utf-8")
        except OSError as e:
            return self._failed(generated_at, e)

        by_level = {lvl: 0 for lvl in RISK_LEVELS}
        for f in features:
            by_level[f.level] += 1

        report = UpdateReport(
            ok=True,
            output=str(out_path),
            created_at=generated_at,
            advisories=len(records),
            mapped=len(features),
            unmapped=unmapped,
            by_level=by_level,
            notices=sum(len(n) for n in notices.values()),
            notice_countries=len(notices),
            warnings=warnings_out,
        )
        log_summary(report)
        return report

    def _failed(self, generated_at: str, err: Exception) -> UpdateReport:
        logger.error("safeairspace update failed: %s", err)
        return UpdateReport(ok=False, created_at=generated_at, error=str(err))


def log_summary(report: UpdateReport) -> None:
    logger.info("SafeAirspace KML updated: %s", report.output)
    logger.info("  Countries mapped: %d", report.mapped)
    logger.info("  Total NOTAMs: %d", report.notices)
    for lvl in RISK_LEVELS:
        logger.info("  Level %d (%s): %d", lvl, RISK_LABELS[lvl], report.by_level.get(lvl, 0))
    if report.unmapped:
        logger.info("  Unmapped: %s", ", ".join(report.unmapped))


async def run_update(
    cfg: Optional[Settings] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> UpdateReport:
    """Regenerate the SafeAirspace KML, then refresh the manifest if it succeeded."""
    cfg = cfg or default_settings
    report = await SafeAirspace(cfg=cfg, transport=transport).update()
    if not report.ok:
        return report
    try:
        write_manifest(cfg.manifest_path, build_manifest(cfg.kml_dir, cfg.kml_base_url()))
    except OSError as e:
        logger.error("manifest write failed: %s", e)
        return report.model_copy(update={"ok": False, "error": f"cannot write manifest: {e}"})
    return report
