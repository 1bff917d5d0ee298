"""
API routes.

Thin handlers: read the request, call the gateway facade, wrap the result
in the ``{ok, data, message}`` envelope. Errors propagate to the
handlers registered in ``presentation.handlers``.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request

from application.api_facade import GatewayFacade


api_router = APIRouter(tags=["payments"])
health_router = APIRouter(tags=["health"])


def get_facade(request: Request) -> GatewayFacade:
    return request.app.state.facade


async def read_json_body(request: Request) -> dict[str, Any]:
    """Get the JSON object body; missing or non-JSON bodies read as empty."""
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


@health_router.get("/health")
async def health_check() -> dict[str, Any]:
    return {"ok": True}


# =============================================================================
# Device Sessions
# =============================================================================


@api_router.post("/open-device")
async def open_device(
    request: Request,
    facade: GatewayFacade = Depends(get_facade),
) -> dict[str, Any]:
    """Open a device session with the payment provider."""
    body = await read_json_body(request)
    session = await facade.open_device(body)
    return {"ok": True, "data": session.to_dict()}


@api_router.delete("/close-device")
async def close_device(
    request: Request,
    facade: GatewayFacade = Depends(get_facade),
) -> dict[str, Any]:
    """
    Close a device session.

    Body ``{"sessionId": ...}`` is optional; without it the last stored
    session is closed.
    """
    body = await read_json_body(request)
    summary = await facade.close_device(body)
    return {"ok": True, "data": summary.to_dict()}


# =============================================================================
# Payments
# =============================================================================


@api_router.post("/generate-qrcode/{qr_type}")
async def generate_qr_code(
    qr_type: str,
    request: Request,
    facade: GatewayFacade = Depends(get_facade),
) -> dict[str, Any]:
    """Generate a DYN or HYB payment QR code."""
    body = await read_json_body(request)
    result = await facade.generate_qr_code(qr_type, body)
    return {
        "ok": True,
        "message": "QR Code generated successfully",
        "data": result.to_dict(),
    }


@api_router.get("/transaction/{transaction_id}")
async def get_transaction(
    transaction_id: str,
    facade: GatewayFacade = Depends(get_facade),
) -> dict[str, Any]:
    status = await facade.get_transaction(transaction_id)
    return {"ok": True, "data": status.to_dict()}


@api_router.put("/transaction/{transaction_id}")
async def cancel_transaction(
    transaction_id: str,
    facade: GatewayFacade = Depends(get_facade),
) -> dict[str, Any]:
    result = await facade.cancel_transaction(transaction_id)
    return {
        "ok": True,
        "message": result.message,
        "data": {
            "transactionId": result.transaction_id,
            "status": result.status,
        },
    }
