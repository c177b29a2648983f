"""miniasset API — FastAPI application entry point.

Invariants:
    - AssetMiddleware wraps every route: asset paths never reach the routers
    - The AssetFactory (and so the parsed collection) is shared by all requests
    - Global error handlers map MiniAssetError → structured JSON responses
    - Logging configured on startup via lifespan context manager
"""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from miniasset.api.asset_middleware import AssetMiddleware
from miniasset.api.error_handlers import register_error_handlers
from miniasset.api.routes import builds, health
from miniasset.config import Settings, get_settings
from miniasset.core.errors import MiniAssetError
from miniasset.infrastructure.asset_factory import AssetFactory
from miniasset.infrastructure.observability import setup_logging
from miniasset.services.build_gateway import BuildCacheGateway
from miniasset.services.decision_engine import AssetEngine

logger = logging.getLogger(__name__)


def build_engine(factory: AssetFactory, url_prefix: str) -> AssetEngine:
    gateway = BuildCacheGateway(factory.compiler(), factory.cacher())
    return AssetEngine(factory, gateway, url_prefix)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    try:
        collection = await asyncio.to_thread(app.state.asset_factory.asset_collection)
        logger.info(
            f"miniasset started with {len(collection)} build(s) "
            f"under {settings.asset_url_prefix}",
        )
    except MiniAssetError as e:
        # Asset requests answer 400 with this message until the file is fixed
        logger.warning(
            f"Asset definitions not loaded at startup: {e.message}",
            extra={"error_code": e.code},
        )
    yield
    logger.info("miniasset shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    factory = AssetFactory(
        settings.asset_config_path,
        settings.asset_output_dir,
        reload=settings.asset_reload_config,
    )
    engine = build_engine(factory, settings.asset_url_prefix)

    app = FastAPI(title="miniasset", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.asset_factory = factory
    app.state.asset_engine = engine

    app.add_middleware(AssetMiddleware, engine=engine)

    # Routes — explicit registration
    app.include_router(health.router)
    app.include_router(builds.router)

    register_error_handlers(app)
    return app


app = create_app()
