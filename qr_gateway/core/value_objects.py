"""
Value Objects for the QR payment gateway.

Immutable objects that represent values in the domain.
Value objects are compared by value, not by identity.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Generic, Optional, TypeVar, Union


T = TypeVar("T")


# =============================================================================
# Enums
# =============================================================================


class QRType(str, Enum):
    """QR code flavours supported by the provider."""

    DYN = "DYN"
    HYB = "HYB"

    @classmethod
    def parse(cls, value: Any) -> Optional["QRType"]:
        """Case-insensitive lookup, None when the value is not a known type."""
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return None


# =============================================================================
# Validation Result
# =============================================================================


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful validation carrying the validated request."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed validation carrying a single error message."""

    error: str

    @property
    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]


# =============================================================================
# Remote Results
# =============================================================================


@dataclass(frozen=True)
class QRCodeResult:
    """
    Result of a QR generation.

    Attributes:
        qr_code_url: QR payload (the provider's hash).
        transaction_id: Provider transaction identifier.
        amount: Charged total.
        expires_at: Provider date attached to the QR, if any.
        type: QR type requested.
        order_id: Merchant order reference, if any.
        description: Payment description, if any.
    """

    qr_code_url: str
    transaction_id: str
    amount: Decimal
    expires_at: Optional[str] = None
    type: Optional[QRType] = None
    order_id: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "qrCodeUrl": self.qr_code_url,
            "transactionId": self.transaction_id,
            "amount": float(self.amount),
            "expiresAt": self.expires_at,
            "type": self.type.value if self.type else None,
            "orderId": self.order_id,
            "description": self.description,
        }


@dataclass(frozen=True)
class TransactionStatus:
    """Current provider status of a transaction."""

    transaction_id: str
    status: Optional[str]

    def to_dict(self) -> dict[str, Any]:
        return {"transactionId": self.transaction_id, "status": self.status}


@dataclass(frozen=True)
class CancelResult:
    """Outcome of a transaction cancellation."""

    transaction_id: str
    status: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "transactionId": self.transaction_id,
            "status": self.status,
            "message": self.message,
        }


@dataclass(frozen=True)
class DeviceSummary:
    """Usage summary returned by the provider when a device is closed."""

    transactions: int = 0
    amount: float = 0

    def to_dict(self) -> dict[str, Any]:
        return {"transactions": self.transactions, "amount": self.amount}
