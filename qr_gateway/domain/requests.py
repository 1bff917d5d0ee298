"""
Validated requests for the gateway operations.

Each validate_* function turns an untrusted mapping (a JSON body or path
parameters) into an immutable request object. Validators never raise:
they return Ok(request) or Err(message), checking fields in a fixed order
and stopping at the first failure so the message is deterministic.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation, localcontext
from typing import Any, Mapping, Optional

from configs import (
    AMOUNT_FIELDS,
    AMOUNT_MAX_DIGITS,
    AMOUNT_PRECISION,
    DEVICE_FIELDS,
    MIN_TRANSACTION_ID_LENGTH,
    TOTAL_TOLERANCE,
)
from core.value_objects import Err, Ok, QRType, Result


UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

# Rounded amounts carry at most AMOUNT_MAX_DIGITS digits. The breakdown sum
# keeps headroom for the carry of adding four of them.
AMOUNT_CONTEXT = Context(prec=AMOUNT_MAX_DIGITS, rounding=ROUND_HALF_UP)
SUM_CONTEXT = Context(prec=AMOUNT_MAX_DIGITS + 2, rounding=ROUND_HALF_UP)


# =============================================================================
# Helpers
# =============================================================================


def round2(value: Any, context: Context = AMOUNT_CONTEXT) -> Decimal:
    """
    Round a number to 2 decimals, half up.

    Raises InvalidOperation when the rounded value needs more digits than
    the context allows.
    """
    return Decimal(str(value)).quantize(AMOUNT_PRECISION, context=context)


def is_number(value: Any) -> bool:
    """Check for a finite int, float or Decimal. Booleans are not numbers."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, Decimal):
        return value.is_finite()
    return False


def _check_amount(raw: Mapping[str, Any], name: str, allow_zero: bool = True) -> Optional[str]:
    value = raw.get(name)
    if value is None:
        return f"{name} is required"
    if not is_number(value):
        return f"{name} must be a valid number"
    try:
        round2(value)
    except InvalidOperation:
        return f"{name} must be a valid number"
    if allow_zero and value < 0:
        return f"{name} cannot be negative"
    if not allow_zero and value <= 0:
        return f"{name} must be greater than 0"
    return None


def _check_optional_text(raw: Mapping[str, Any], name: str) -> Optional[str]:
    value = raw.get(name)
    if value is not None and (not isinstance(value, str) or not value.strip()):
        return f"{name} must be a non-empty string if provided"
    return None


# =============================================================================
# Payment Requests
# =============================================================================


@dataclass(frozen=True)
class PaymentRequest:
    """
    Validated QR payment request.

    Produced by validate_payment_request(); every amount is rounded to
    2 decimals and total matches the breakdown.
    """

    sub_total: Decimal
    tax: Decimal
    tip: Decimal
    discount: Decimal
    total: Decimal
    type: QRType
    order_id: Optional[str] = None
    description: Optional[str] = None

    def charge_amount(self) -> dict[str, float]:
        """Get the amount breakdown as sent to the provider."""
        return {
            "sub_total": float(self.sub_total),
            "tax": float(self.tax),
            "tip": float(self.tip),
            "discount": float(self.discount),
            "total": float(self.total),
        }


def validate_payment_request(raw: Mapping[str, Any]) -> Result[PaymentRequest]:
    """
    Validate the body of a QR generation request.

    Order: sub_total, tax, tip, discount (required, number, non-negative),
    total (required, number, positive), type (required, DYN or HYB),
    total consistency, then the optional order_id and description.
    """
    for name in AMOUNT_FIELDS:
        error = _check_amount(raw, name)
        if error:
            return Err(error)

    error = _check_amount(raw, "total", allow_zero=False)
    if error:
        return Err(error)

    raw_type = raw.get("type")
    if not raw_type:
        return Err("type is required")
    qr_type = QRType.parse(raw_type)
    if qr_type is None:
        return Err('type must be either "DYN" or "HYB"')

    sub_total, tax, tip, discount = (Decimal(str(raw[name])) for name in AMOUNT_FIELDS)
    provided = round2(raw["total"])
    with localcontext(SUM_CONTEXT):
        calculated = round2(sub_total + tax + tip - discount, SUM_CONTEXT)
        mismatch = abs(calculated - provided) > TOTAL_TOLERANCE
    if mismatch:
        return Err(f"total mismatch: expected {calculated} but got {provided}")

    for name in ("order_id", "description"):
        error = _check_optional_text(raw, name)
        if error:
            return Err(error)

    order_id = raw.get("order_id")
    description = raw.get("description")
    return Ok(
        PaymentRequest(
            sub_total=round2(sub_total),
            tax=round2(tax),
            tip=round2(tip),
            discount=round2(discount),
            total=provided,
            type=qr_type,
            order_id=order_id.strip() if order_id is not None else None,
            description=description.strip() if description is not None else None,
        )
    )


# =============================================================================
# Transaction Requests
# =============================================================================


@dataclass(frozen=True)
class TransactionLookupRequest:
    """Validated transaction status query."""

    transaction_id: str


@dataclass(frozen=True)
class TransactionCancelRequest:
    """Validated transaction cancellation."""

    transaction_id: str


def _validate_transaction_id(value: Any) -> Result[str]:
    if not value:
        return Err("transactionId is required")
    if not isinstance(value, str):
        return Err("transactionId must be a string")
    trimmed = value.strip()
    if not trimmed:
        return Err("transactionId cannot be empty")
    if len(trimmed) < MIN_TRANSACTION_ID_LENGTH:
        return Err(f"transactionId must be at least {MIN_TRANSACTION_ID_LENGTH} characters")
    return Ok(trimmed)


def validate_transaction_lookup(raw: Mapping[str, Any]) -> Result[TransactionLookupRequest]:
    """Validate a transaction status query."""
    result = _validate_transaction_id(raw.get("transactionId"))
    if isinstance(result, Err):
        return result
    return Ok(TransactionLookupRequest(transaction_id=result.value))


def validate_transaction_cancel(raw: Mapping[str, Any]) -> Result[TransactionCancelRequest]:
    """
    Validate a transaction cancellation.

    The id is read from transactionId, falling back to transaction_id.
    """
    value = raw.get("transactionId") or raw.get("transaction_id")
    result = _validate_transaction_id(value)
    if isinstance(result, Err):
        return result
    return Ok(TransactionCancelRequest(transaction_id=result.value))


# =============================================================================
# Device Requests
# =============================================================================


@dataclass(frozen=True)
class OpenDeviceRequest:
    """Validated device descriptor for the device-authentication exchange."""

    id_device: str
    name_device: str
    user_device: str
    group_id: str


@dataclass(frozen=True)
class CloseDeviceRequest:
    """Validated reference to the session to close."""

    session_id: str


def validate_open_device(raw: Mapping[str, Any]) -> Result[OpenDeviceRequest]:
    """Validate a device descriptor; every field must be a non-empty string."""
    for name in DEVICE_FIELDS:
        value = raw.get(name)
        if not isinstance(value, str) or not value.strip():
            return Err(f'Invalid or missing "{name}" field')
    return Ok(
        OpenDeviceRequest(
            id_device=raw["idDevice"],
            name_device=raw["nameDevice"],
            user_device=raw["userDevice"],
            group_id=raw["groupId"],
        )
    )


def validate_close_device(raw: Mapping[str, Any]) -> Result[CloseDeviceRequest]:
    """Validate a close-device request; sessionId must be a UUID."""
    session_id = raw.get("sessionId")
    if not session_id:
        return Err("sessionId is required")
    if not isinstance(session_id, str):
        return Err("sessionId must be a string")
    trimmed = session_id.strip()
    if not trimmed:
        return Err("sessionId cannot be empty")
    if not UUID_PATTERN.match(trimmed):
        return Err("sessionId must be a valid UUID")
    return Ok(CloseDeviceRequest(session_id=trimmed))
