"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .api.dependencies import BridgeServices
from .api.routes import bod, diagnostics
from .config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    services = app.state.services
    if services is not None:
        logger.info("Closing Kai API client")
        services.client.close()


def create_app(settings: Settings | None = None, services: BridgeServices | None = None) -> FastAPI:
    """Build the bridge app; services are created from settings on first use when not given."""
    config = settings or default_settings
    app = FastAPI(title=config.app_name, version=config.version, lifespan=lifespan)
    app.state.settings = config
    app.state.services = services

    app.include_router(bod.router)
    app.include_router(diagnostics.router)
    return app


app = create_app()
