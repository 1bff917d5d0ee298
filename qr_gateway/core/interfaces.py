"""
Interfaces for the QR payment gateway.

Defines the contracts for session persistence and for the remote payment
provider. Orchestration code depends only on these abstractions; concrete
implementations live in the infrastructure layer and are injected.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from core.value_objects import CancelResult, DeviceSummary, QRCodeResult, TransactionStatus
    from domain.device_session import DeviceSession
    from domain.requests import (
        OpenDeviceRequest,
        PaymentRequest,
        TransactionCancelRequest,
        TransactionLookupRequest,
    )


# =============================================================================
# Repository Interfaces
# =============================================================================


class SessionRepository(ABC):
    """
    Persistence contract for device sessions.

    Every operation may raise StorageError on an underlying I/O failure.
    A missing session is not an error: lookups return None or an empty list.
    """

    @abstractmethod
    async def save(self, session: DeviceSession) -> None:
        """Insert or overwrite a session by its id."""
        ...

    @abstractmethod
    async def find_by_id(self, session_id: str) -> Optional[DeviceSession]:
        """
        Find a session by id.

        Returns:
            The session, or None if it is not stored.
        """
        ...

    @abstractmethod
    async def delete(self, session_id: str) -> None:
        """Remove a session if present."""
        ...

    @abstractmethod
    async def find_all(self) -> list[DeviceSession]:
        """
        List every stored session.

        Returns:
            Sessions in insertion order; empty when nothing was stored yet.
        """
        ...


# =============================================================================
# Remote Provider Interfaces
# =============================================================================


class DeviceDatasource(ABC):
    """Device-authentication calls of the payment provider."""

    @abstractmethod
    async def open_device(self, request: OpenDeviceRequest) -> str:
        """
        Open a device session with the provider.

        Returns:
            Bearer token issued by the provider.
        """
        ...

    @abstractmethod
    async def close_device(self, token: str) -> DeviceSummary:
        """
        Close the device session identified by its token.

        Returns:
            Usage summary of the closed session.
        """
        ...


class PaymentDatasource(ABC):
    """Payment calls of the provider. All of them need a bearer token."""

    @abstractmethod
    async def generate_qr_code(self, request: PaymentRequest, token: str) -> QRCodeResult:
        """Generate a QR code for the validated payment request."""
        ...

    @abstractmethod
    async def get_transaction(
        self,
        request: TransactionLookupRequest,
        token: str,
    ) -> TransactionStatus:
        """Fetch the current status of a transaction."""
        ...

    @abstractmethod
    async def cancel_transaction(
        self,
        request: TransactionCancelRequest,
        token: str,
    ) -> CancelResult:
        """Cancel a pending transaction."""
        ...
