"""Build Cache Gateway — cached bytes when fresh, compile-and-write otherwise.

Invariants:
    - fetch() never raises: every capability failure becomes BuildFailed
    - A failed write after a successful compile is a failure; the compiled
      bytes are not returned
    - At most one compile-and-write per build name runs at a time per process
    - Fresh reads never take the per-build lock
    - Single attempt per request, no retry

Design Decisions:
    - Capabilities are blocking, so each call runs via asyncio.to_thread
    - Freshness re-checked after the lock is acquired: a request that waited
      on another's compile reads that result instead of compiling again
"""

import asyncio
import logging
import time

from miniasset.core.capability_protocols import Cacher, Compiler
from miniasset.core.domain_types import Build, BuildFailed, BuildOutcome, Built
from miniasset.core.errors import MiniAssetError

logger = logging.getLogger(__name__)

BUILD_FAILED = "BUILD_FAILED"


class BuildCacheGateway:
    """Produces compiled bytes for a Build, preferring the cache."""

    def __init__(self, compiler: Compiler, cacher: Cacher):
        self._compiler = compiler
        self._cacher = cacher
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock_for(self, name: str) -> asyncio.Lock:
        lock = self._locks.get(name)
        if lock is None:
            lock = self._locks[name] = asyncio.Lock()
        return lock

    async def fetch(self, build: Build) -> BuildOutcome:
        started = time.perf_counter()
        try:
            outcome = await self._fetch(build)
        except MiniAssetError as e:
            logger.error(
                f"Build failed for {build.name}: {e.message}",
                extra={"build_name": build.name, "error_code": e.code},
            )
            return BuildFailed(code=e.code, message=e.message)
        except Exception as e:
            logger.error(
                f"Build failed for {build.name}: {e}",
                extra={"build_name": build.name, "error_code": BUILD_FAILED},
                exc_info=True,
            )
            return BuildFailed(code=BUILD_FAILED, message=str(e))
        logger.info(
            f"Served {build.name}",
            extra={
                "build_name": build.name,
                "cache": "hit" if outcome.from_cache else "miss",
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return outcome

    async def _fetch(self, build: Build) -> Built:
        if await asyncio.to_thread(self._cacher.is_fresh, build):
            return Built(await asyncio.to_thread(self._cacher.read, build), from_cache=True)

        async with self._lock_for(build.name):
            if await asyncio.to_thread(self._cacher.is_fresh, build):
                return Built(
                    await asyncio.to_thread(self._cacher.read, build), from_cache=True,
                )
            contents = await asyncio.to_thread(self._compiler.generate, build)
            await asyncio.to_thread(self._cacher.write, build, contents)
            return Built(contents, from_cache=False)
