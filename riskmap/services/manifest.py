# riskmap/services/manifest.py
"""
kml-manifest.json: the list of published KML files the static viewer reads
instead of scanning the directory.
"""
from __future__ import annotations

import logging
from pathlib import Path

import orjson

from riskmap.core.contracts import KmlManifest, ManifestFile
from riskmap.core.time import mtime_iso, utc_now_iso

logger = logging.getLogger(__name__)


def build_manifest(kml_dir: str | Path, base_url: str) -> KmlManifest:
    root = Path(kml_dir)
    files: list[ManifestFile] = []
    if root.is_dir():
        for path in root.iterdir():
            if not path.is_file() or path.suffix != ".kml":
                continue
            st = path.stat()
            files.append(
                ManifestFile(
                    name=path.name,
                    url=f"{base_url.rstrip('/')}/{path.name}",
                    size=st.st_size,
                    updated=mtime_iso(st.st_mtime),
                )
            )
    files.sort(key=lambda f: f.name)
    return KmlManifest(lastUpdate=utc_now_iso(), files=files)


def write_manifest(path: str | Path, manifest: KmlManifest) -> None:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(orjson.dumps(manifest.model_dump(), option=orjson.OPT_INDENT_2))
    logger.info("manifest written files=%d path=%s", len(manifest.files), out)
