from __future__ import annotations

import time
from importlib.metadata import PackageNotFoundError, version

from fastapi import APIRouter

from castnotes.schemas.meta import HealthResponse, StatusResponse

router = APIRouter(prefix="/meta", tags=["meta"])

_START_TIME = time.monotonic()


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok")


@router.get("/status", response_model=StatusResponse)
def status() -> StatusResponse:
    try:
        app_version = version("castnotes")
    except PackageNotFoundError:
        app_version = None

    return StatusResponse(
        status="ok",
        version=app_version,
        uptime_seconds=time.monotonic() - _START_TIME,
    )
