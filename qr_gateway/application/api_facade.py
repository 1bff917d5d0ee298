"""
API Facade - Unified interface for the QR payment gateway.

Accepts raw request data, runs the validators, and dispatches to the
device and payment services. Also assembles the concrete infrastructure
from settings.
"""

from typing import Any, Mapping, Optional, TypeVar

from redis.asyncio import Redis

from application.device_service import DeviceService
from application.payment_service import PaymentService
from core.exceptions import ValidationError
from core.interfaces import DeviceDatasource, PaymentDatasource, SessionRepository
from core.value_objects import CancelResult, DeviceSummary, Err, QRCodeResult, QRType, Result, TransactionStatus
from domain.device_session import DeviceSession
from domain.requests import (
    validate_close_device,
    validate_open_device,
    validate_payment_request,
    validate_transaction_cancel,
    validate_transaction_lookup,
)
from domain.token_provider import TokenProvider
from infrastructure.json_repository import JsonSessionRepository
from infrastructure.memory_repository import InMemorySessionRepository
from infrastructure.redis_repository import RedisSessionRepository
from infrastructure.settings import Settings
from infrastructure.yappy_client import YappyClient, YappyDeviceDatasource, YappyPaymentDatasource
from loggers import logger


T = TypeVar("T")


def unwrap(result: Result[T]) -> T:
    """Get the validated value or raise ValidationError with the message."""
    if isinstance(result, Err):
        raise ValidationError(result.error)
    return result.value


class GatewayFacade:
    """
    Facade for the gateway API.

    Every public method takes untrusted input and raises a GatewayError
    subclass on failure.
    """

    def __init__(
        self,
        session_repository: SessionRepository,
        device_datasource: DeviceDatasource,
        payment_datasource: PaymentDatasource,
        default_device: Mapping[str, Any],
        redis: Optional[Redis] = None,
    ) -> None:
        """
        Initialize the facade.

        Args:
            session_repository: Store holding device sessions.
            device_datasource: Provider client for device sessions.
            payment_datasource: Provider client for payments.
            default_device: Raw device descriptor for on-demand provisioning.
            redis: Redis client owned by the facade, closed on shutdown.
        """
        self._redis = redis
        self.session_repository = session_repository
        self.token_provider = TokenProvider(session_repository, device_datasource, default_device)
        self.device_service = DeviceService(device_datasource, session_repository)
        self.payment_service = PaymentService(payment_datasource, self.token_provider)

    @classmethod
    def from_settings(cls, settings: Settings) -> "GatewayFacade":
        """
        Build the facade with the infrastructure selected by settings.

        Raises:
            ValueError: Unknown session store backend.
        """
        redis: Optional[Redis] = None
        backend = settings.storage.backend
        if backend == "json":
            repository: SessionRepository = JsonSessionRepository(settings.storage.sessions_file)
        elif backend == "redis":
            redis = Redis(
                host=settings.redis.host,
                port=settings.redis.port,
                db=settings.redis.db,
                decode_responses=settings.redis.decode_responses,
            )
            repository = RedisSessionRepository(redis)
        elif backend == "memory":
            repository = InMemorySessionRepository()
        else:
            raise ValueError(f"Unknown session store: {backend}")

        logger.info(f"Using {backend} session store")
        client = YappyClient(settings.yappy)
        return cls(
            session_repository=repository,
            device_datasource=YappyDeviceDatasource(client),
            payment_datasource=YappyPaymentDatasource(client),
            default_device=settings.device.as_raw(),
            redis=redis,
        )

    async def shutdown(self) -> None:
        """Release owned connections."""
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None

    # =========================================================================
    # Device Operations
    # =========================================================================

    async def open_device(self, body: Mapping[str, Any]) -> DeviceSession:
        """Open a device session from a raw device descriptor."""
        request = unwrap(validate_open_device(body))
        return await self.device_service.open_device(request)

    async def close_device(self, body: Mapping[str, Any]) -> DeviceSummary:
        """
        Close a device session.

        Without a sessionId in the body the last stored session is closed.
        """
        session_id = body.get("sessionId")
        if not session_id:
            session_id = await self.device_service.latest_session_id()
        request = unwrap(validate_close_device({"sessionId": session_id}))
        return await self.device_service.close_device(request)

    # =========================================================================
    # Payment Operations
    # =========================================================================

    async def generate_qr_code(self, qr_type: str, body: Mapping[str, Any]) -> QRCodeResult:
        """Generate a QR code; qr_type comes from the URL path."""
        if not qr_type:
            raise ValidationError("Device type is required in URL path")
        parsed = QRType.parse(qr_type)
        if parsed is None:
            raise ValidationError('Device type must be either "DYN" or "HYB"')

        request = unwrap(validate_payment_request({**body, "type": parsed.value}))
        return await self.payment_service.generate_qr_code(request)

    async def get_transaction(self, transaction_id: Any) -> TransactionStatus:
        """Get the status of a transaction."""
        request = unwrap(validate_transaction_lookup({"transactionId": transaction_id}))
        return await self.payment_service.get_transaction(request)

    async def cancel_transaction(self, transaction_id: Any) -> CancelResult:
        """Cancel a transaction."""
        request = unwrap(validate_transaction_cancel({"transactionId": transaction_id}))
        return await self.payment_service.cancel_transaction(request)
