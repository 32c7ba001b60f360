# riskmap/services/notices.py
"""
NOTAM enrichment from SafeAirspace country detail pages.

Each page lists zero or more "page-country-source" blocks. Every sub-field is
matched independently; a missing one becomes "" instead of dropping the block.
Fetches run in fixed-size batches: a batch fully settles before the next one
starts, so at most `batch_size` requests are in flight.
"""
from __future__ import annotations

import asyncio
import logging
import re
from typing import Awaitable, Callable, Dict, List, Sequence, Tuple, TypeVar

import httpx

from riskmap.core.contracts import AdvisoryRecord, NoticeRecord
from riskmap.core.countries import country_slug, display_name_for
from riskmap.core.http import fetch_text
from riskmap.services.advisories import strip_html

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

_BLOCK_RE = re.compile(
    r'<div class="page-country-source">([\s\S]*?)</div><!-- \.page-country-source -->'
)
_SOURCE_RE = re.compile(r'<div class="page-country-source-country">Source:\s*([^<]+)</div>')
_REF_RE = re.compile(r'<div class="page-country-source-ref">Reference:\s*<a[^>]*>([^<]+)</a>')
_ISSUED_RE = re.compile(
    r"Issued:\s*<strong>([^<]+)</strong>,\s*valid until:\s*<strong>([^<]+)</strong>"
)
_PLAIN_RE = re.compile(
    r'<div class="page-country-source-plain"><span class="highlight">Plain English:</span>\s*([\s\S]*?)</div>'
)
_CONTENT_RE = re.compile(r'<div class="page-country-source-content">([\s\S]*?)</div>')


def detail_url(base_url: str, name: str) -> str:
    return f"{base_url.rstrip('/')}/{country_slug(name)}/"


def _group(pattern: re.Pattern[str], text: str, idx: int = 1) -> str:
    m = pattern.search(text)
    return m.group(idx).strip() if m else ""


def parse_notice_block(block: str) -> NoticeRecord:
    issued = _ISSUED_RE.search(block)
    return NoticeRecord(
        source=_group(_SOURCE_RE, block),
        reference=_group(_REF_RE, block),
        issued_at=issued.group(1).strip() if issued else "",
        valid_until=issued.group(2).strip() if issued else "",
        summary=strip_html(_group(_PLAIN_RE, block)),
        full_text=strip_html(_group(_CONTENT_RE, block)),
    )


def parse_notices(page: str) -> List[NoticeRecord]:
    out: List[NoticeRecord] = []
    for m in _BLOCK_RE.finditer(page):
        notice = parse_notice_block(m.group(1))
        if notice.source or notice.reference or notice.summary:
            out.append(notice)
    return out


async def run_in_batches(
    items: Sequence[T],
    worker: Callable[[T], Awaitable[R]],
    *,
    batch_size: int,
) -> List[R]:
    """Run `worker` over `items`, at most `batch_size` at a time, batch by batch, preserving order."""
    if batch_size < 1:
        raise ValueError("batch_size must be >= 1")
    results: List[R] = []
    for start in range(0, len(items), batch_size):
        batch = items[start:start + batch_size]
        results.extend(await asyncio.gather(*(worker(it) for it in batch)))
    return results


class NoticeFetcher:
    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        base_url: str,
        batch_size: int = 5,
        max_redirects: int = 5,
    ) -> None:
        self.client = client
        self.base_url = base_url
        self.batch_size = batch_size
        self.max_redirects = max_redirects
        self.warnings: List[str] = []

    async def fetch_country(self, name: str) -> List[NoticeRecord]:
        """Notices for one country; any failure yields []."""
        url = detail_url(self.base_url, name)
        try:
            page = await fetch_text(self.client, url, max_redirects=self.max_redirects)
            return parse_notices(page)
        except Exception as e:
            logger.warning("notices_fetch_failed country=%s error=%s", name, e)
            self.warnings.append(f"notices:{name} failed: {e}")
            return []

    async def fetch_all(self, records: Sequence[AdvisoryRecord]) -> Dict[str, List[NoticeRecord]]:
        """{advisory key: notices}; countries without notices are left out."""

        async def one(record: AdvisoryRecord) -> Tuple[str, List[NoticeRecord]]:
            name = display_name_for(record.key, record.display_name)
            return record.key, await self.fetch_country(name)

        pairs = await run_in_batches(records, one, batch_size=self.batch_size)
        out = {key: notices for key, notices in pairs if notices}
        logger.info(
            "notices fetched=%d countries=%d requested=%d",
            sum(len(v) for v in out.values()), len(out), len(records),
        )
        return out
