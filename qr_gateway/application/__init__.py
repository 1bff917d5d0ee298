"""
Application layer - Application services and use cases.

Contains:
- Device service
- Payment service
- API facade
"""

from .device_service import DeviceService
from .payment_service import PaymentService
from .api_facade import GatewayFacade


__all__ = [
    "DeviceService",
    "PaymentService",
    "GatewayFacade",
]
