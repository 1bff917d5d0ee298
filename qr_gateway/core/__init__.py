"""
Core module - Foundation layer with no external dependencies.

Contains:
- Exceptions
- Interfaces (ABCs)
- Value Objects
"""

from .exceptions import (
    GatewayError,
    ValidationError,
    NotFoundError,
    NoActiveSessionError,
    RemoteServiceError,
    RemoteTimeoutError,
    StorageError,
)
from .interfaces import (
    SessionRepository,
    DeviceDatasource,
    PaymentDatasource,
)
from .value_objects import (
    QRType,
    Ok,
    Err,
    Result,
    QRCodeResult,
    TransactionStatus,
    CancelResult,
    DeviceSummary,
)


__all__ = [
    # Exceptions
    "GatewayError",
    "ValidationError",
    "NotFoundError",
    "NoActiveSessionError",
    "RemoteServiceError",
    "RemoteTimeoutError",
    "StorageError",
    # Interfaces
    "SessionRepository",
    "DeviceDatasource",
    "PaymentDatasource",
    # Value Objects
    "QRType",
    "Ok",
    "Err",
    "Result",
    "QRCodeResult",
    "TransactionStatus",
    "CancelResult",
    "DeviceSummary",
]
