from __future__ import annotations

from typing import Optional

from fastapi import HTTPException


class RiskMapError(Exception):
    pass


class FetchError(RiskMapError):
    """Transport failure: network fault, non-200 status or a broken redirect chain."""

    def __init__(self, url: str, message: str, *, status: Optional[int] = None) -> None:
        super().__init__(f"{message} ({url})")
        self.url = url
        self.status = status


class BoundaryLoadError(RiskMapError):
    """Boundary dataset could not be fetched or parsed. Fatal for a run."""


class FeedUnavailableError(RiskMapError):
    """Advisory feed page could not be fetched. Fatal for a run."""


def not_found(code: str, message: str):
    raise HTTPException(status_code=404, detail={"code": code, "message": message})


def service_unavailable(code: str, message: str):
    raise HTTPException(status_code=503, detail={"code": code, "message": message})
