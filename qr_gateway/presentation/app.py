"""
FastAPI application factory.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from application.api_facade import GatewayFacade
from infrastructure.settings import Settings, get_settings
from loggers import logger
from presentation.handlers import register_exception_handlers
from presentation.routes import api_router, health_router


def create_app(
    facade: Optional[GatewayFacade] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        facade: Pre-built facade. Built from settings when omitted.
        settings: Application settings. Read from the environment when omitted.

    Returns:
        Configured application.
    """
    settings = settings or get_settings()
    if facade is None:
        facade = GatewayFacade.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            f"Starting QR gateway | sandbox={settings.yappy.sandbox} "
            f"store={settings.storage.backend}"
        )
        yield
        await app.state.facade.shutdown()
        logger.info("QR gateway stopped")

    debug = settings.server.debug
    app = FastAPI(
        title="QR Payment Gateway",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if debug else None,
        redoc_url="/redoc" if debug else None,
    )
    app.state.facade = facade

    register_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(api_router, prefix="/api")
    return app
