"""Decision Engine — one request in, one Decision out.

Invariants:
    - Paths outside the prefix pass through without loading the collection
    - The collection is loaded in a worker thread, off the event loop
    - Unknown build names pass through (indistinguishable from foreign URLs)
    - Built → 200 with the build's content type; BuildFailed → 400 plain text
    - handle() never raises; the engine keeps no per-request state
"""

import asyncio
import logging

from miniasset.core.capability_protocols import CollectionProvider
from miniasset.core.content_types import content_type_for
from miniasset.core.domain_types import (
    AssetRequest, AssetResponse, Build, BuildFailed, Built, Decision,
    PassThrough, RouteMiss,
)
from miniasset.core.errors import MiniAssetError
from miniasset.core.resolve_build import asset_target_name, lookup_build
from miniasset.services.build_gateway import BUILD_FAILED, BuildCacheGateway

logger = logging.getLogger(__name__)

DEFAULT_URL_PREFIX = "/asset/"
ERROR_CONTENT_TYPE = "text/plain; charset=utf-8"


class AssetEngine:
    """Routes asset requests to the gateway and shapes the response."""

    def __init__(
        self,
        collections: CollectionProvider,
        gateway: BuildCacheGateway,
        url_prefix: str = DEFAULT_URL_PREFIX,
    ):
        self._collections = collections
        self._gateway = gateway
        self.url_prefix = url_prefix

    async def handle(self, request: AssetRequest) -> Decision:
        name = asset_target_name(request.path, self.url_prefix)
        if name is None:
            return PassThrough(RouteMiss.NOT_ASSET)
        try:
            collection = await asyncio.to_thread(self._collections.asset_collection)
        except MiniAssetError as e:
            logger.error(
                f"Asset definitions unavailable: {e.message}",
                extra={"path": request.path, "error_code": e.code},
            )
            return self._error(BuildFailed(code=e.code, message=e.message))
        except Exception as e:
            logger.error(
                f"Asset definitions unavailable: {e}",
                extra={"path": request.path, "error_code": BUILD_FAILED},
                exc_info=True,
            )
            return self._error(BuildFailed(code=BUILD_FAILED, message=str(e)))

        resolved = lookup_build(name, collection)
        match resolved:
            case RouteMiss():
                logger.debug(
                    f"Unknown build at {request.path}", extra={"path": request.path},
                )
                return PassThrough(resolved)
            case Build():
                return await self._serve(resolved)

    async def _serve(self, build: Build) -> AssetResponse:
        outcome = await self._gateway.fetch(build)
        match outcome:
            case Built(contents=contents):
                return AssetResponse(
                    status=200,
                    body=contents,
                    headers={"content-type": content_type_for(build.ext)},
                )
            case BuildFailed():
                return self._error(outcome)

    @staticmethod
    def _error(failure: BuildFailed) -> AssetResponse:
        return AssetResponse(
            status=400,
            body=failure.message.encode("utf-8"),
            headers={"content-type": ERROR_CONTENT_TYPE},
        )
