from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    # ──────────────────────────────────────────────────────────────
    # SafeAirspace feed
    # Feed page carries the <Country>Warning / <Country>News literals and the
    # data-feed-item listing; detail pages live at {base}/{slug}/
    # ──────────────────────────────────────────────────────────────

    safeairspace_base_url: str = Field(default="https://safeairspace.net", alias="SAFEAIRSPACE_BASE_URL")

    # ──────────────────────────────────────────────────────────────
    # Country boundaries (datasets/geo-countries, Natural Earth derived)
    # ──────────────────────────────────────────────────────────────

    boundaries_url: str = Field(
        default="https://raw.githubusercontent.com/datasets/geo-countries/master/data/countries.geojson",
        alias="BOUNDARIES_URL",
    )
    # Local copy takes priority over the URL when set
    boundaries_path: str | None = Field(default=None, alias="BOUNDARIES_PATH")
    boundaries_iso3_property: str = Field(default="ISO3166-1-Alpha-3", alias="BOUNDARIES_ISO3_PROPERTY")
    boundaries_name_property: str = Field(default="name", alias="BOUNDARIES_NAME_PROPERTY")
    boundaries_unknown_iso3: str = Field(default="-99", alias="BOUNDARIES_UNKNOWN_ISO3")

    # ──────────────────────────────────────────────────────────────
    # Output
    # ──────────────────────────────────────────────────────────────

    kml_dir: str = Field(default="kmls", alias="KML_DIR")
    safeairspace_kml_filename: str = Field(default="safeairspace-warnings.kml", alias="SAFEAIRSPACE_KML_FILENAME")

    manifest_path: str = Field(default="kml-manifest.json", alias="MANIFEST_PATH")
    github_repository: str = Field(default="TannerTunstall/MapPipeline", alias="GITHUB_REPOSITORY")
    manifest_base_url: str | None = Field(default=None, alias="MANIFEST_BASE_URL")

    # ──────────────────────────────────────────────────────────────
    # NOTAM enrichment (per-country detail pages)
    # ──────────────────────────────────────────────────────────────

    notices_enabled: bool = Field(default=True, alias="NOTICES_ENABLED")
    notices_batch_size: int = Field(default=5, alias="NOTICES_BATCH_SIZE")

    # ──────────────────────────────────────────────────────────────
    # HTTP
    # ──────────────────────────────────────────────────────────────

    http_timeout_s: float = Field(default=30.0, alias="HTTP_TIMEOUT_S")
    http_max_redirects: int = Field(default=5, alias="HTTP_MAX_REDIRECTS")
    http_user_agent: str = Field(
        default="Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
        alias="HTTP_USER_AGENT",
    )

    def kml_base_url(self) -> str:
        if self.manifest_base_url:
            return self.manifest_base_url.rstrip("/")
        return f"https://raw.githubusercontent.com/{self.github_repository}/main/kmls"


settings = Settings()
