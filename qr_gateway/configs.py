"""
Configuration module for the QR payment gateway.

This module provides the static constants shared by the domain,
the provider client and the session stores, plus the logging
destinations. Service settings live in infrastructure.settings.
"""

import os
from decimal import Decimal
from typing import Final

from dotenv import load_dotenv


load_dotenv()


# =============================================================================
# Logging Configuration
# =============================================================================

LOG_FILE: Final[str] = os.getenv("LOG_FILE", "logs/qr_gateway.log")
LOG_LEVEL: Final[str] = os.getenv("LOG_LEVEL", "DEBUG").upper()
LOKI_URL: Final[str] = os.getenv("LOKI_URL", "")


# =============================================================================
# Provider Configuration
# =============================================================================

YAPPY_SUCCESS_CODE: Final[str] = "YP-0000"
REMOTE_TIMEOUT_SECONDS: Final[float] = 30.0


# =============================================================================
# Session Configuration
# =============================================================================

DEFAULT_SESSION_EXPIRES_IN: Final[int] = 21600  # 6 hours
DEFAULT_SESSIONS_FILE: Final[str] = "data/sessions.json"

REDIS_SESSIONS_KEY: Final[str] = "device_sessions"
REDIS_SESSIONS_ORDER_KEY: Final[str] = "device_sessions:order"


# =============================================================================
# Validation Rules
# =============================================================================

AMOUNT_FIELDS: Final[tuple[str, ...]] = ("sub_total", "tax", "tip", "discount")
AMOUNT_PRECISION: Final[Decimal] = Decimal("0.01")
TOTAL_TOLERANCE: Final[Decimal] = Decimal("0.01")
# Significant digits an amount may carry once rounded to 2 decimals
AMOUNT_MAX_DIGITS: Final[int] = 38
MIN_TRANSACTION_ID_LENGTH: Final[int] = 10

DEVICE_FIELDS: Final[tuple[str, ...]] = ("idDevice", "nameDevice", "userDevice", "groupId")
