"""
FastAPI Application Factory
Creates the addon app around the host's manifest and handlers
"""
from contextlib import asynccontextmanager
from typing import Mapping, Optional
from fastapi import FastAPI
from stremio_addon.api.endpoints import manifest, catalog, meta, stream, health
from stremio_addon.core.config import Settings, settings
from stremio_addon.middleware.chain import build_middleware
from stremio_addon.models.stremio import Manifest
from stremio_addon.services.registry import (
    CatalogHandler,
    HandlerRegistry,
    MetaHandler,
    StreamHandler,
)
import logging

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    addon = app.state.registry.manifest
    logger.info(f"Starting addon {addon.id} {addon.version}")
    logger.info(f"Resources: {', '.join(addon.resource_names())}, types: {', '.join(addon.types)}")
    if not app.state.settings.LOG_REQUESTS:
        logger.info("Request logging disabled")

    yield

    logger.info(f"Shutting down addon {addon.id}")


def create_app(
    addon_manifest: Manifest,
    catalog_handlers: Optional[Mapping[str, CatalogHandler]] = None,
    meta_handlers: Optional[Mapping[str, MetaHandler]] = None,
    stream_handlers: Optional[Mapping[str, StreamHandler]] = None,
    config: Optional[Settings] = None,
) -> FastAPI:
    """
    Create and configure the addon application

    Args:
        addon_manifest: Manifest to serve
        catalog_handlers: Media type -> catalog handler
        meta_handlers: Media type -> meta handler
        stream_handlers: Media type -> stream handler
        config: Settings, defaults to the environment-derived settings

    Raises:
        ValueError: If handlers don't match the manifest
    """
    config = config or settings
    registry = HandlerRegistry(
        addon_manifest,
        catalog_handlers=catalog_handlers,
        meta_handlers=meta_handlers,
        stream_handlers=stream_handlers,
    )

    # The request pipeline wraps every route; built once, never per request
    middleware = build_middleware(
        log_requests=config.LOG_REQUESTS,
        print_recovery_stack=config.PRINT_RECOVERY_STACK,
    )

    app = FastAPI(
        title=addon_manifest.name,
        description=addon_manifest.description,
        version=addon_manifest.version,
        docs_url="/docs" if config.DEBUG else None,
        redoc_url="/redoc" if config.DEBUG else None,
        openapi_url="/openapi.json" if config.DEBUG else None,
        middleware=middleware,
        lifespan=lifespan,
    )
    app.state.registry = registry
    app.state.settings = config

    # Include routers
    app.include_router(health.router)
    app.include_router(manifest.router)
    if registry.catalog_handlers:
        app.include_router(catalog.router)
    if registry.meta_handlers:
        app.include_router(meta.router)
    if registry.stream_handlers:
        app.include_router(stream.router)

    return app
