# riskmap/services/advisories.py
"""
SafeAirspace feed-page extraction.

The home page embeds one JS string literal per country and advisory kind:

    FranceWarning = '<p>...</p>';
    FranceNews = '...';

plus a listing whose items carry the human label and risk level:

    <li data-feed-item-country="Saudi Arabia" ... data-feed-item-warn-level="2">

All three are folded into one AdvisoryRecord per feed token. Nothing in this
module raises on malformed input; a literal that does not match simply
contributes nothing.
"""
from __future__ import annotations

import html
import re
from typing import Dict, Iterable, List, Optional

from riskmap.core.contracts import AdvisoryRecord
from riskmap.core.countries import RISK_LEVELS

_WARNING_RE = re.compile(r"(\w+)Warning\s*=\s*'((?:[^'\\]|\\.)*)'")
_NEWS_RE = re.compile(r"(\w+)News\s*=\s*'((?:[^'\\]|\\.)*)'")
_LEVEL_RE = re.compile(r'data-feed-item-country="([^"]+)"[^>]*data-feed-item-warn-level="(\d)"')

_JS_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)
_JS_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "'": "'", '"': '"', "\\": "\\"}

_WS_RE = re.compile(r"\s+")


def unescape_js_literal(s: str) -> str:
    """Undo JS single-quoted string escapes; unknown escapes are kept verbatim."""
    return _JS_ESCAPE_RE.sub(lambda m: _JS_ESCAPES.get(m.group(1), m.group(0)), s)


def strip_html(text: str) -> str:
    text = re.sub(r"<br\s*/?>", "\n", text, flags=re.IGNORECASE)
    text = re.sub(r"<[^>]+>", "", text)
    text = html.unescape(text).replace("\xa0", " ")
    return text.strip()


def normalize_key(name: str) -> str:
    return _WS_RE.sub("", name)


def _find_existing_key(records: Dict[str, AdvisoryRecord], key: str) -> Optional[str]:
    # First match in discovery order wins when two tokens collide
    needle = key.lower()
    for k in records:
        if normalize_key(k).lower() == needle:
            return k
    return None


def _fold_literals(
    records: Dict[str, AdvisoryRecord],
    page: str,
    pattern: re.Pattern[str],
    field: str,
) -> None:
    for m in pattern.finditer(page):
        key = normalize_key(m.group(1))
        content = unescape_js_literal(m.group(2))
        if not content:
            continue
        rec = records.get(key)
        if rec is None:
            rec = records[key] = AdvisoryRecord(key=key)
        setattr(rec, field, content)


def extract_advisories(page: str) -> Dict[str, AdvisoryRecord]:
    """
    Parse the feed page into {feed token: AdvisoryRecord}.

    Order is discovery order: warning literals first, then news-only tokens,
    then listing entries that matched nothing already seen.
    """
    records: Dict[str, AdvisoryRecord] = {}

    _fold_literals(records, page, _WARNING_RE, "warning")
    _fold_literals(records, page, _NEWS_RE, "news")

    for m in _LEVEL_RE.finditer(page):
        display = m.group(1).strip()
        level = int(m.group(2))
        if level not in RISK_LEVELS:
            continue
        key = normalize_key(display)
        if not key:
            continue

        target = key if key in records else _find_existing_key(records, key)
        if target is None:
            records[key] = AdvisoryRecord(key=key, display_name=display, level=level)  # type: ignore[arg-type]
            continue

        rec = records[target]
        rec.level = level  # type: ignore[assignment]
        rec.display_name = display

    return records


def reportable(records: Iterable[AdvisoryRecord]) -> List[AdvisoryRecord]:
    """Records carrying a warning or a level; news-only tokens are feed noise."""
    return [r for r in records if r.is_reportable]
