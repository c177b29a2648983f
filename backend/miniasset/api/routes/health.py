"""Health & Readiness Checks — liveness and readiness endpoints.

Invariants:
    - GET /api/v1/health/ always returns 200 if process is up (liveness)
    - GET /api/v1/health/ready returns 503 if asset definitions fail to load
      or the output directory is not writable (readiness)
"""

import asyncio
import logging
import os

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from miniasset.api.routes.dependencies import get_asset_factory
from miniasset.core.errors import MiniAssetError
from miniasset.infrastructure.asset_factory import AssetFactory

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness check. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "miniasset",
        "version": "0.1.0",
    }


@router.get("/ready")
async def readiness_check(factory: AssetFactory = Depends(get_asset_factory)):
    """Readiness check — asset definitions and cache directory."""
    checks = {"definitions": "healthy", "output_dir": "healthy"}
    try:
        await asyncio.to_thread(factory.asset_collection)
    except MiniAssetError as e:
        logger.error(f"Readiness: {e.message}", extra={"error_code": e.code})
        checks["definitions"] = "unavailable"
    if not _is_writable_dir(factory.output_dir):
        checks["output_dir"] = "unavailable"

    if any(v != "healthy" for v in checks.values()):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": checks},
        )
    return {"status": "ready", "checks": checks}


def _is_writable_dir(path) -> bool:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError:
        return False
    return os.access(path, os.W_OK)
