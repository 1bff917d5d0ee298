"""
QR Payment Gateway - Main entry point.

Builds the FastAPI application from environment settings and serves it
with uvicorn.
"""

import uvicorn

from infrastructure.settings import get_settings
from loggers import logger
from presentation.app import create_app


# =============================================================================
# Main Entry Point
# =============================================================================


def main() -> None:
    """
    Main entry point for the gateway service.

    Reads settings, assembles the application and starts the HTTP server.
    """
    settings = get_settings()
    app = create_app(settings=settings)

    logger.info(f"Serving on {settings.server.host}:{settings.server.port}")
    uvicorn.run(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,
    )


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.info("Application stopped by user")
