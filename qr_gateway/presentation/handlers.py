"""
Exception handlers for the HTTP surface.

Maps the gateway exception hierarchy to status codes and the
``{ok, error}`` response body.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from core.exceptions import GatewayError, NotFoundError, ValidationError
from loggers import logger


def status_for(exc: GatewayError) -> int:
    """Get the HTTP status code for a gateway error."""
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def _gateway_exception_handler(request: Request, exc: GatewayError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            f"{request.method} {request.url.path} failed | "
            f"{exc.code}: {exc.message} details={exc.details}"
        )
    else:
        logger.warning(f"{request.method} {request.url.path} rejected | {exc.message}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


async def _general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path} | "
        f"{type(exc).__name__}: {exc}",
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"ok": False, "error": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the app."""
    app.add_exception_handler(GatewayError, _gateway_exception_handler)
    app.add_exception_handler(Exception, _general_exception_handler)
