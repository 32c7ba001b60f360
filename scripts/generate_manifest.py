#!/usr/bin/env python3
"""
scripts/generate_manifest.py

Write kml-manifest.json listing every KML in the output directory, so the
viewer does not have to scan it.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from riskmap.core.settings import Settings  # noqa: E402
from riskmap.services.manifest import build_manifest, write_manifest  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    cfg = Settings()
    ap = argparse.ArgumentParser(description="Generate kml-manifest.json")
    ap.add_argument("--kml-dir", default=cfg.kml_dir)
    ap.add_argument("--output", default=cfg.manifest_path)
    ap.add_argument("--base-url", default=cfg.kml_base_url())
    args = ap.parse_args(argv)

    manifest = build_manifest(args.kml_dir, args.base_url)
    write_manifest(args.output, manifest)
    print(f"Generated manifest with {len(manifest.files)} files")
    return 0


if __name__ == "__main__":
    sys.exit(main())
