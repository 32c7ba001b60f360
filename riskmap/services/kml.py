# riskmap/services/kml.py
"""
KML document assembly for the SafeAirspace overlay.

Features are bucketed by risk level (1 = Do Not Fly ... 4 = Monitor); each
non-empty bucket becomes a Folder. Placemark order inside a bucket is the
order features were handed in.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from riskmap.core.contracts import NoticeRecord, OutputFeature
from riskmap.core.countries import (
    DEFAULT_HEADING_COLOR,
    RISK_COLORS,
    RISK_HEADING_COLORS,
    RISK_LABELS,
    RISK_LEVELS,
    RISK_LINE_WIDTHS,
)
from riskmap.services.advisories import strip_html
from riskmap.services.geometry import geometry_to_kml
from riskmap.services.notices import detail_url

KML_NAMESPACE = "http://www.opengis.net/kml/2.2"
DOCUMENT_NAME = "Safe Airspace - Aviation Risk Map"
SOURCE_ATTRIBUTION = "SafeAirspace.net"

_XML_ESCAPES = {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;", "'": "&apos;"}


def escape_xml(text: str) -> str:
    return "".join(_XML_ESCAPES.get(ch, ch) for ch in text)


def _cdata(text: str) -> str:
    # "]]>" cannot appear inside a CDATA section; split it across two sections
    return "<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def group_by_level(features: Iterable[OutputFeature]) -> Dict[int, List[OutputFeature]]:
    buckets: Dict[int, List[OutputFeature]] = {lvl: [] for lvl in RISK_LEVELS}
    for f in features:
        buckets[f.level].append(f)
    return buckets


# ──────────────────────────────────────────────────────────────
# Placemark description (HTML balloon)
# ──────────────────────────────────────────────────────────────

def _notices_table(notices: Sequence[NoticeRecord]) -> List[str]:
    parts = [
        f"<h4>Active NOTAMs ({len(notices)}):</h4>\n",
        '<table border="1" cellpadding="5" style="border-collapse: collapse; width: 100%;">\n',
        '<tr style="background-color: #333;"><th>Source</th><th>Reference</th>'
        "<th>Issued</th><th>Valid To</th></tr>\n",
    ]
    for n in notices:
        parts.append(
            "<tr>"
            f"<td>{escape_xml(n.source)}</td>"
            f"<td>{escape_xml(n.reference)}</td>"
            f"<td>{escape_xml(n.issued_at)}</td>"
            f"<td>{escape_xml(n.valid_until)}</td>"
            "</tr>\n"
        )
        if n.summary:
            parts.append(
                '<tr><td colspan="4" style="font-size: 0.9em; padding: 8px;">'
                f"<strong>Summary:</strong> {escape_xml(n.summary)}"
                "</td></tr>\n"
            )
    parts.append("</table>\n")
    return parts


def build_description(feature: OutputFeature, *, base_url: str) -> str:
    level = feature.level
    label = RISK_LABELS[level]
    color = RISK_HEADING_COLORS.get(level, DEFAULT_HEADING_COLOR)

    parts = [
        f"<h2>{escape_xml(feature.display_name)}</h2>\n",
        f'<h3 style="color: {color}">Risk Level {level}: {label}</h3>\n',
    ]
    if feature.news:
        parts.append(f"<h4>Latest News:</h4>\n<p>{escape_xml(strip_html(feature.news))}</p>\n")
    if feature.warning:
        parts.append(f"<h4>Warning Summary:</h4>\n<p>{escape_xml(strip_html(feature.warning))}</p>\n")
    if feature.notices:
        parts.extend(_notices_table(feature.notices))

    link = escape_xml(detail_url(base_url, feature.display_name))
    parts.append(f'<p><a href="{link}">View Full Details on {SOURCE_ATTRIBUTION}</a></p>\n')
    parts.append(f"<p><i>Data source: {SOURCE_ATTRIBUTION} | Updated: {feature.generated_at}</i></p>")
    return "".join(parts)


# ──────────────────────────────────────────────────────────────
# Document
# ──────────────────────────────────────────────────────────────

def _style(level: int) -> str:
    colors = RISK_COLORS[level]
    return (
        f'    <Style id="level{level}">\n'
        "      <PolyStyle>\n"
        f"        <color>{colors['fill']}</color>\n"
        "        <outline>1</outline>\n"
        "      </PolyStyle>\n"
        "      <LineStyle>\n"
        f"        <color>{colors['outline']}</color>\n"
        f"        <width>{RISK_LINE_WIDTHS[level]}</width>\n"
        "      </LineStyle>\n"
        "      <BalloonStyle>\n"
        "        <bgColor>ff1a1a2e</bgColor>\n"
        "        <textColor>ffffffff</textColor>\n"
        "      </BalloonStyle>\n"
        "    </Style>\n"
    )


def _placemark(feature: OutputFeature, *, base_url: str) -> str:
    level = feature.level
    return (
        "      <Placemark>\n"
        f"        <name>{escape_xml(feature.display_name)}</name>\n"
        f"        <description>{_cdata(build_description(feature, base_url=base_url))}</description>\n"
        f"        <styleUrl>{feature.style_url}</styleUrl>\n"
        "        <ExtendedData>\n"
        f'          <Data name="RiskLevel"><value>{level}</value></Data>\n'
        f'          <Data name="RiskLabel"><value>{RISK_LABELS[level]}</value></Data>\n'
        f'          <Data name="ISO3"><value>{escape_xml(feature.iso3 or "")}</value></Data>\n'
        f'          <Data name="Source"><value>{SOURCE_ATTRIBUTION}</value></Data>\n'
        f'          <Data name="LastUpdate"><value>{feature.generated_at}</value></Data>\n'
        "        </ExtendedData>\n"
        f"{geometry_to_kml(feature.geometry)}\n"
        "      </Placemark>\n"
    )


def build_kml(features: Sequence[OutputFeature], *, generated_at: str, base_url: str) -> str:
    out: List[str] = [
        '<?xml version="1.0" encoding="UTF-8"?>\n',
        f'<kml xmlns="{KML_NAMESPACE}">\n',
        "  <Document>\n",
        f"    <name>{DOCUMENT_NAME}</name>\n",
        "    <description>Aviation risk warnings and NOTAMs from "
        f"{SOURCE_ATTRIBUTION}. Updated: {generated_at}</description>\n",
    ]
    out.extend(_style(level) for level in RISK_LEVELS)

    for level, bucket in group_by_level(features).items():
        if not bucket:
            continue
        out.append("    <Folder>\n")
        out.append(f"      <name>Level {level} - {RISK_LABELS[level]} ({len(bucket)})</name>\n")
        out.append(f"      <open>{1 if level <= 2 else 0}</open>\n")
        out.extend(_placemark(f, base_url=base_url) for f in bucket)
        out.append("    </Folder>\n")

    out.append("  </Document>\n</kml>\n")
    return "".join(out)
