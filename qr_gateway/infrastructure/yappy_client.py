"""
Yappy payment provider client.

Implements the device and payment datasources over the Yappy HTTP API.
A call is successful only when the HTTP status is 2xx AND the body carries
status.code == "YP-0000"; anything else is a RemoteServiceError.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from configs import YAPPY_SUCCESS_CODE
from core.exceptions import RemoteServiceError, RemoteTimeoutError
from core.interfaces import DeviceDatasource, PaymentDatasource
from core.value_objects import CancelResult, DeviceSummary, QRCodeResult, TransactionStatus
from domain.requests import (
    OpenDeviceRequest,
    PaymentRequest,
    TransactionCancelRequest,
    TransactionLookupRequest,
)
from infrastructure.settings import YappySettings
from loggers import logger


# =============================================================================
# HTTP Client
# =============================================================================


def section(data: dict[str, Any], key: str) -> dict[str, Any]:
    """Get a nested object from a provider answer; anything else reads as {}."""
    value = data.get(key)
    return value if isinstance(value, dict) else {}


class YappyClient:
    """
    Low-level HTTP access to the Yappy API.

    Opens one httpx.AsyncClient per call with the configured timeout.
    """

    def __init__(self, settings: YappySettings) -> None:
        """
        Initialize the client.

        Args:
            settings: Provider credentials, base URL and timeout.
        """
        self._settings = settings

    @property
    def base_url(self) -> str:
        return self._settings.active_base_url.rstrip("/")

    def _headers(self, token: Optional[str]) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "api-key": self._settings.api_key,
            "secret-key": self._settings.secret_key,
        }
        if token:
            headers["authorization"] = token
        return headers

    async def request(
        self,
        method: str,
        path: str,
        token: Optional[str] = None,
        payload: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """
        Send a request and return the decoded body of a successful answer.

        Raises:
            RemoteTimeoutError: No answer before the configured timeout.
            RemoteServiceError: Network failure, HTTP error or business error.
        """
        if not self.base_url:
            raise RemoteServiceError("Yappy base URL is not configured")

        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self._settings.timeout) as client:
                response = await client.request(
                    method,
                    url,
                    headers=self._headers(token),
                    json=payload,
                )
        except httpx.TimeoutException as e:
            logger.error(f"Yappy {method} {path} timed out: {e}")
            raise RemoteTimeoutError("Request timeout - Yappy API did not respond in time")
        except httpx.RequestError as e:
            logger.error(f"Yappy {method} {path} network error: {e}")
            raise RemoteServiceError(f"Network error - Could not connect to Yappy API: {e}")

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        status = section(data, "status")
        code = status.get("code")
        if response.is_error or code != YAPPY_SUCCESS_CODE:
            message = (
                data.get("message")
                or data.get("error")
                or status.get("description")
                or f"Yappy API error: {response.status_code}"
            )
            logger.error(
                f"Yappy {method} {path} failed: http={response.status_code} code={code} message={message}"
            )
            raise RemoteServiceError(
                str(message),
                status_code=response.status_code,
                details={"provider_code": code},
            )

        return data


# =============================================================================
# Device Datasource
# =============================================================================


class YappyDeviceDatasource(DeviceDatasource):
    """Device session calls (open/close) against Yappy."""

    def __init__(self, client: YappyClient) -> None:
        self._client = client

    async def open_device(self, request: OpenDeviceRequest) -> str:
        payload = {
            "body": {
                "device": {
                    "id": request.id_device,
                    "name": request.name_device,
                    "user": request.user_device,
                },
                "group_id": request.group_id,
            }
        }
        data = await self._client.request("POST", "/session/device", payload=payload)
        token = section(data, "body").get("token")
        if not token:
            raise RemoteServiceError("Yappy API did not return a token")
        return token

    async def close_device(self, token: str) -> DeviceSummary:
        data = await self._client.request("DELETE", "/session/device", token=token)
        summary = section(section(data, "body"), "summary")
        return DeviceSummary(
            transactions=summary.get("transactions") or 0,
            amount=summary.get("amount") or 0,
        )


# =============================================================================
# Payment Datasource
# =============================================================================


class YappyPaymentDatasource(PaymentDatasource):
    """QR generation and transaction calls against Yappy."""

    def __init__(self, client: YappyClient) -> None:
        self._client = client

    async def generate_qr_code(self, request: PaymentRequest, token: str) -> QRCodeResult:
        body: dict[str, Any] = {"charge_amount": request.charge_amount()}
        if request.order_id:
            body["order_id"] = request.order_id
        if request.description:
            body["description"] = request.description

        data = await self._client.request(
            "POST",
            f"/qr/generate/{request.type.value}",
            token=token,
            payload={"body": body},
        )
        result = section(data, "body")
        if not result.get("hash") or not result.get("transactionId"):
            raise RemoteServiceError("Invalid response from Yappy API: missing required fields")

        return QRCodeResult(
            qr_code_url=result["hash"],
            transaction_id=result["transactionId"],
            amount=request.total,
            expires_at=result.get("date"),
            type=request.type,
            order_id=request.order_id,
            description=request.description,
        )

    async def get_transaction(
        self,
        request: TransactionLookupRequest,
        token: str,
    ) -> TransactionStatus:
        data = await self._client.request(
            "GET", f"/transaction/{request.transaction_id}", token=token
        )
        return TransactionStatus(
            transaction_id=request.transaction_id,
            status=section(data, "body").get("status"),
        )

    async def cancel_transaction(
        self,
        request: TransactionCancelRequest,
        token: str,
    ) -> CancelResult:
        data = await self._client.request(
            "PUT", f"/transaction/{request.transaction_id}", token=token
        )
        return CancelResult(
            transaction_id=request.transaction_id,
            status=section(data, "body").get("status") or "CANCELLED",
            message=section(data, "status").get("message") or "Transaction cancelled successfully",
        )
