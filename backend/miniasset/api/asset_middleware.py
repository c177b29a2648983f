"""Asset Middleware — ASGI boundary between the host app and the AssetEngine.

Invariants:
    - Only http scopes are inspected; lifespan/websocket pass straight through
    - PassThrough decisions call the wrapped app with the untouched scope
    - AssetResponse decisions are answered here; the wrapped app never runs
    - Development grade: builds are compiled in-process on first request
"""

from __future__ import annotations

from starlette.responses import Response
from starlette.types import ASGIApp
from starlette.types import Receive
from starlette.types import Scope
from starlette.types import Send

from miniasset.core.domain_types import AssetRequest, AssetResponse, PassThrough
from miniasset.services.decision_engine import AssetEngine


class AssetMiddleware:
    """Serve compiled builds for paths under the engine's URL prefix."""

    def __init__(self, app: ASGIApp, engine: AssetEngine) -> None:
        self.app = app
        self.engine = engine

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = AssetRequest(
            path=scope.get("path", ""), method=scope.get("method", "GET"),
        )
        decision = await self.engine.handle(request)
        match decision:
            case PassThrough():
                await self.app(scope, receive, send)
            case AssetResponse():
                response = Response(
                    content=decision.body,
                    status_code=decision.status,
                    headers=decision.headers,
                )
                await response(scope, receive, send)
