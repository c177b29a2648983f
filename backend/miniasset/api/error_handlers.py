"""Error Handlers — global exception handlers for the JSON API routes.

Invariants:
    - MiniAssetError → structured JSON with error code, message, severity
    - Exception (catch-all) → never leaks internal details
    - Asset responses never reach these handlers: the engine answers build
      failures itself with plain-text 400s
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from miniasset.core.errors import MiniAssetError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_miniasset_error_handler(app)
    _register_generic_error_handler(app)


def _register_miniasset_error_handler(app: FastAPI) -> None:

    @app.exception_handler(MiniAssetError)
    async def miniasset_error_handler(request: Request, exc: MiniAssetError):
        logger.error(
            f"MiniAssetError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )
