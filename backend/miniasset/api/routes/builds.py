"""Builds API — inspect configured builds and drop their cache entries.

Invariants:
    - Listing never compiles anything; freshness is the cacher's judgement
    - Unknown build names → 404 via ResourceNotFoundError
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, Response, status

from miniasset.api.routes.dependencies import get_app_settings, get_asset_factory
from miniasset.config import Settings
from miniasset.core.content_types import content_type_for
from miniasset.core.domain_types import Build, RouteMiss
from miniasset.core.errors import ResourceNotFoundError
from miniasset.core.resolve_build import lookup_build
from miniasset.infrastructure.asset_factory import AssetFactory
from miniasset.schemas.builds import BuildList, BuildSummary

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/builds", tags=["builds"])


@router.get("", response_model=BuildList)
async def list_builds(
    factory: AssetFactory = Depends(get_asset_factory),
    settings: Settings = Depends(get_app_settings),
):
    collection = await asyncio.to_thread(factory.asset_collection)
    builds = [
        await _summarize(build, factory, settings.asset_url_prefix)
        for build in collection
    ]
    return BuildList(builds=builds, count=len(builds))


@router.get("/{name}", response_model=BuildSummary)
async def get_build(
    name: str,
    factory: AssetFactory = Depends(get_asset_factory),
    settings: Settings = Depends(get_app_settings),
):
    build = await _find(name, factory)
    return await _summarize(build, factory, settings.asset_url_prefix)


@router.delete("/{name}/cache", status_code=status.HTTP_204_NO_CONTENT)
async def invalidate_build(
    name: str, factory: AssetFactory = Depends(get_asset_factory),
):
    build = await _find(name, factory)
    await asyncio.to_thread(factory.cacher().invalidate, build)
    logger.info(f"Invalidated cache for {name}", extra={"build_name": name})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


async def _find(name: str, factory: AssetFactory) -> Build:
    collection = await asyncio.to_thread(factory.asset_collection)
    resolved = lookup_build(name, collection)
    if resolved is RouteMiss.UNKNOWN_BUILD:
        raise ResourceNotFoundError("Build", name)
    return resolved


async def _summarize(build: Build, factory: AssetFactory, prefix: str) -> BuildSummary:
    fresh = await asyncio.to_thread(factory.cacher().is_fresh, build)
    return BuildSummary(
        name=build.name,
        ext=build.ext,
        content_type=content_type_for(build.ext),
        url=f"{prefix}{build.name}",
        sources=[str(s) for s in build.sources],
        filters=list(build.filters),
        fresh=fresh,
    )
