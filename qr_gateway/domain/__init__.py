"""
Domain layer - Business logic and domain entities.

Contains:
- Device session entity
- Validated requests
- Token provisioning policy
"""

from .device_session import DeviceSession
from .requests import (
    PaymentRequest,
    TransactionLookupRequest,
    TransactionCancelRequest,
    OpenDeviceRequest,
    CloseDeviceRequest,
    validate_payment_request,
    validate_transaction_lookup,
    validate_transaction_cancel,
    validate_open_device,
    validate_close_device,
)
from .token_provider import TokenProvider


__all__ = [
    # Entities
    "DeviceSession",
    # Requests
    "PaymentRequest",
    "TransactionLookupRequest",
    "TransactionCancelRequest",
    "OpenDeviceRequest",
    "CloseDeviceRequest",
    "validate_payment_request",
    "validate_transaction_lookup",
    "validate_transaction_cancel",
    "validate_open_device",
    "validate_close_device",
    # Policies
    "TokenProvider",
]
