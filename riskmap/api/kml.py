from __future__ import annotations

import logging
import re
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

from riskmap.core.contracts import KmlManifest, UpdateReport
from riskmap.core.errors import not_found, service_unavailable
from riskmap.core.settings import settings
from riskmap.services.manifest import build_manifest
from riskmap.services.pipeline import run_update

logger = logging.getLogger(__name__)

router = APIRouter()

KML_MEDIA_TYPE = "application/vnd.google-earth.kml+xml"

# Plain file names only; no path separators or dot-dot
_SAFE_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def _kml_dir() -> Path:
    return Path(settings.kml_dir).resolve()


@router.get("/manifest", response_model=KmlManifest)
def get_manifest() -> KmlManifest:
    return build_manifest(_kml_dir(), settings.kml_base_url())


@router.get("/kmls/{name}.kml")
def get_kml(name: str):
    if not _SAFE_NAME_RE.match(name):
        not_found("kml_not_found", f"unknown kml: {name}")

    path = (_kml_dir() / f"{name}.kml").resolve()
    if path.parent != _kml_dir() or not path.is_file():
        not_found("kml_missing", f"missing kml at {path}")

    return FileResponse(str(path), media_type=KML_MEDIA_TYPE)


@router.post("/refresh", response_model=UpdateReport)
async def refresh() -> UpdateReport:
    report = await run_update(settings)
    if not report.ok:
        logger.error("refresh failed: %s", report.error)
        service_unavailable("update_failed", report.error or "update failed")
    return report
