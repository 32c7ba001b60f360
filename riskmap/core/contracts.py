from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


GeoJSON = Dict[str, Any]

RiskLevel = Literal[1, 2, 3, 4]

# Strategy that produced a geometry (or claimed the record without one)
ResolutionStrategy = Literal["region", "iso3", "display_name", "key"]

DEFAULT_RISK_LEVEL = 3


# ──────────────────────────────────────────────────────────────
# Advisory feed
# ──────────────────────────────────────────────────────────────

class AdvisoryRecord(BaseModel):
    key: str                              # token as embedded in the feed ("SaudiArabia")
    display_name: Optional[str] = None    # from the data-feed-item listing
    level: Optional[RiskLevel] = None
    warning: Optional[str] = None         # raw (HTML) warning literal
    news: Optional[str] = None            # raw (HTML) news literal

    @property
    def is_reportable(self) -> bool:
        return bool(self.warning) or self.level is not None

    @property
    def effective_level(self) -> int:
        return self.level if self.level is not None else DEFAULT_RISK_LEVEL


class NoticeRecord(BaseModel):
    source: str = ""
    reference: str = ""
    issued_at: str = ""
    valid_until: str = ""
    summary: str = ""
    full_text: str = ""


# ──────────────────────────────────────────────────────────────
# Geometry
# ──────────────────────────────────────────────────────────────

class GeometryResolution(BaseModel):
    geometry: Optional[GeoJSON] = None    # Polygon | MultiPolygon
    iso3: Optional[str] = None            # single-country matches only
    strategy: Optional[ResolutionStrategy] = None

    @property
    def resolved(self) -> bool:
        return self.geometry is not None


# ──────────────────────────────────────────────────────────────
# Output
# ──────────────────────────────────────────────────────────────

class OutputFeature(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    display_name: str
    level: RiskLevel
    warning: Optional[str] = None
    news: Optional[str] = None
    geometry: GeoJSON
    iso3: Optional[str] = None
    notices: List[NoticeRecord] = Field(default_factory=list)
    generated_at: str                     # shared by the whole run

    @property
    def style_url(self) -> str:
        return f"#level{self.level}"


class UpdateReport(BaseModel):
    ok: bool
    output: Optional[str] = None
    created_at: str
    advisories: int = 0
    mapped: int = 0
    unmapped: List[str] = Field(default_factory=list)
    by_level: Dict[int, int] = Field(default_factory=dict)
    notices: int = 0
    notice_countries: int = 0
    warnings: List[str] = Field(default_factory=list)
    error: Optional[str] = None


# ──────────────────────────────────────────────────────────────
# Manifest (consumed by the static viewer)
# ──────────────────────────────────────────────────────────────

class ManifestFile(BaseModel):
    name: str
    url: str
    size: int
    updated: str


class KmlManifest(BaseModel):
    lastUpdate: str
    files: List[ManifestFile] = Field(default_factory=list)
