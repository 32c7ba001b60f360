#!/usr/bin/env python3
"""
scripts/update_kml.py

Regenerate kmls/safeairspace-warnings.kml from SafeAirspace.net and refresh
kml-manifest.json.

Exit status is 0 unless the run failed outright (feed page or country
boundaries unavailable). Missing NOTAMs or unmapped countries are reported
but do not fail the run.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from riskmap.core.settings import Settings  # noqa: E402
from riskmap.services.pipeline import run_update  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Update SafeAirspace KML")
    ap.add_argument("--kml-dir", default=None, help="Output directory (default: $KML_DIR or kmls)")
    ap.add_argument("--boundaries", default=None, help="Local countries GeoJSON instead of downloading")
    ap.add_argument("--manifest", default=None, help="Manifest path (default: $MANIFEST_PATH)")
    ap.add_argument("--no-notices", action="store_true", help="Skip per-country NOTAM pages")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides: dict[str, object] = {}
    if args.kml_dir:
        overrides["KML_DIR"] = args.kml_dir
    if args.boundaries:
        overrides["BOUNDARIES_PATH"] = args.boundaries
    if args.manifest:
        overrides["MANIFEST_PATH"] = args.manifest
    if args.no_notices:
        overrides["NOTICES_ENABLED"] = False
    cfg = Settings(**overrides)

    print("Starting KML update...")
    print("======================\n")

    report = asyncio.run(run_update(cfg))

    print("\n======================")
    print("KML update complete!")
    if report.ok:
        print(f"  Success: 1 ({Path(report.output or '').name})")
        print(f"  Countries mapped: {report.mapped}")
        print(f"  Unmapped: {len(report.unmapped)}")
        print(f"  Total NOTAMs: {report.notices}")
        for level, count in sorted(report.by_level.items()):
            print(f"  Level {level}: {count}")
        for w in report.warnings:
            print(f"  warning: {w}")
    else:
        print("  Failed: 1")
        print(f"  error: {report.error}")

    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
