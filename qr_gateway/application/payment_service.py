"""
Payment Service - Application service for QR payment operations.

Obtains a bearer token from the token provider and forwards the validated
request to the payment provider. QR generation may open a new device
session; status and cancel calls require one to exist already.
"""

from core.exceptions import RemoteServiceError, RemoteTimeoutError
from core.interfaces import PaymentDatasource
from core.value_objects import CancelResult, QRCodeResult, TransactionStatus
from domain.requests import PaymentRequest, TransactionCancelRequest, TransactionLookupRequest
from domain.token_provider import TokenProvider
from loggers import logger


class PaymentService:
    """
    Application service for payment operations.

    No call is retried; provider failures surface to the caller.
    """

    def __init__(
        self,
        payment_datasource: PaymentDatasource,
        token_provider: TokenProvider,
    ) -> None:
        """
        Initialize the payment service.

        Args:
            payment_datasource: Provider client for payment calls.
            token_provider: Supplies the bearer token for each call.
        """
        self._payments = payment_datasource
        self._tokens = token_provider

    async def generate_qr_code(self, request: PaymentRequest) -> QRCodeResult:
        """
        Generate a payment QR code, provisioning a session if needed.

        Args:
            request: Validated payment request.

        Returns:
            QR payload and transaction data.

        Raises:
            RemoteTimeoutError: The provider did not answer in time.
            RemoteServiceError: The provider rejected or failed the call.
        """
        logger.info(f"Generating {request.type.value} QR code for {request.total:.2f}")
        token = await self._tokens.acquire(provision=True)
        try:
            result = await self._payments.generate_qr_code(request, token)
        except RemoteTimeoutError:
            raise
        except RemoteServiceError as e:
            raise RemoteServiceError(
                f"Failed to generate QR code: {e.message}",
                status_code=e.status_code,
            ) from e

        logger.info(f"QR code generated, transaction {result.transaction_id}")
        return result

    async def get_transaction(self, request: TransactionLookupRequest) -> TransactionStatus:
        """
        Get the provider status of a transaction.

        Raises:
            NoActiveSessionError: No non-expired session is stored.
        """
        token = await self._tokens.acquire(provision=False)
        try:
            status = await self._payments.get_transaction(request, token)
        except RemoteTimeoutError:
            raise
        except RemoteServiceError as e:
            raise RemoteServiceError(
                f"Failed to get transaction: {e.message}",
                status_code=e.status_code,
            ) from e

        logger.info(f"Transaction {status.transaction_id} status: {status.status}")
        return status

    async def cancel_transaction(self, request: TransactionCancelRequest) -> CancelResult:
        """
        Cancel a pending transaction.

        Raises:
            NoActiveSessionError: No non-expired session is stored.
        """
        token = await self._tokens.acquire(provision=False)
        try:
            result = await self._payments.cancel_transaction(request, token)
        except RemoteTimeoutError:
            raise
        except RemoteServiceError as e:
            raise RemoteServiceError(
                f"Failed to cancel transaction: {e.message}",
                status_code=e.status_code,
            ) from e

        logger.info(f"Transaction {result.transaction_id} cancelled: {result.status}")
        return result
