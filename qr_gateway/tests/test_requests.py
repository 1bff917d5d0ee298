"""
Unit tests for the request validators.
"""

from decimal import Decimal, InvalidOperation

import pytest

from core.value_objects import Err, Ok, QRType
from domain.requests import (
    is_number,
    round2,
    validate_close_device,
    validate_open_device,
    validate_payment_request,
    validate_transaction_cancel,
    validate_transaction_lookup,
)


def payment_body(**overrides):
    body = {
        "sub_total": 10,
        "tax": 0.7,
        "tip": 1,
        "discount": 0,
        "total": 11.7,
        "type": "DYN",
    }
    body.update(overrides)
    return body


# =============================================================================
# Helpers
# =============================================================================


class TestHelpers:
    """Tests for numeric helpers."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (1.005, Decimal("1.01")),
            (2.675, Decimal("2.68")),
            (10, Decimal("10.00")),
            (0.125, Decimal("0.13")),
        ],
    )
    def test_round2_half_up(self, value, expected):
        assert round2(value) == expected

    def test_round2_large_magnitude(self):
        assert round2(1e27) == Decimal("1000000000000000000000000000.00")

    def test_round2_too_many_digits(self):
        with pytest.raises(InvalidOperation):
            round2(10**40)

    @pytest.mark.parametrize("value", [0, 1, -3, 1.5, Decimal("2.25")])
    def test_is_number(self, value):
        assert is_number(value)

    @pytest.mark.parametrize(
        "value",
        [True, False, "10", None, float("nan"), float("inf"), Decimal("NaN"), [1]],
    )
    def test_is_not_number(self, value):
        assert not is_number(value)


# =============================================================================
# Payment Request
# =============================================================================


class TestValidatePaymentRequest:
    """Tests for the QR generation request validator."""

    def test_valid_request(self):
        result = validate_payment_request(payment_body())

        assert isinstance(result, Ok)
        request = result.value
        assert request.sub_total == Decimal("10.00")
        assert request.tax == Decimal("0.70")
        assert request.total == Decimal("11.70")
        assert request.type is QRType.DYN
        assert request.order_id is None
        assert request.description is None

    def test_type_is_case_insensitive(self):
        result = validate_payment_request(payment_body(type="hyb"))
        assert result.value.type is QRType.HYB

    def test_amounts_rounded_half_up(self):
        result = validate_payment_request(
            payment_body(sub_total=1.005, tax=0, tip=0, discount=0, total=1.01)
        )
        assert isinstance(result, Ok)
        assert result.value.sub_total == Decimal("1.01")

    def test_total_within_tolerance(self):
        result = validate_payment_request(payment_body(total=11.71))
        assert isinstance(result, Ok)

    def test_total_outside_tolerance(self):
        result = validate_payment_request(payment_body(total=11.72))
        assert result == Err("total mismatch: expected 11.70 but got 11.72")

    def test_total_mismatch_message(self):
        result = validate_payment_request(
            payment_body(sub_total=100, tax=7, tip=0, discount=0, total=100)
        )
        assert result.error == "total mismatch: expected 107.00 but got 100.00"

    @pytest.mark.parametrize(
        "sub_total, tax, tip, discount, total",
        [
            (10, 0.7, 1, 0, 11.7),
            (1.005, 0, 0, 0, 1.01),
            (2.675, 0.125, 0, 0, 2.80),
            (Decimal("0.004"), Decimal("0.001"), 0, 0, Decimal("0.01")),
            (Decimal("99.994"), Decimal("0.006"), 0, 0, 100),
            (Decimal("1234567.891"), Decimal("100.125"), 0.5, 50, Decimal("1234618.52")),
            (20, 0, 0, 5, 15.01),
            (1e27, 0, 0, 0, 1e27),
            (Decimal("1E+35"), Decimal("1E+35"), Decimal("1E+35"), 0, Decimal("3E+35")),
        ],
    )
    def test_consistent_breakdown_accepted(self, sub_total, tax, tip, discount, total):
        result = validate_payment_request(
            payment_body(sub_total=sub_total, tax=tax, tip=tip, discount=discount, total=total)
        )

        assert isinstance(result, Ok)
        request = result.value
        assert request.sub_total == round2(sub_total)
        assert request.tax == round2(tax)
        assert request.tip == round2(tip)
        assert request.discount == round2(discount)
        assert request.total == round2(total)

    @pytest.mark.parametrize(
        "sub_total, tax, tip, discount, total, expected, got",
        [
            (10, 0.7, 1, 0, 11.72, "11.70", "11.72"),
            (10, 0, 0, 0, 9.98, "10.00", "9.98"),
            (Decimal("0.005"), 0, 0, 0, 0.03, "0.01", "0.03"),
            (Decimal("0.004"), 0, 0, 0, 0.02, "0.00", "0.02"),
            (20, 0, 0, 5, 15.02, "15.00", "15.02"),
            (
                1e27,
                0,
                0,
                0,
                Decimal("1000000000000000000000000001"),
                "1000000000000000000000000000.00",
                "1000000000000000000000000001.00",
            ),
        ],
    )
    def test_inconsistent_breakdown_rejected(
        self, sub_total, tax, tip, discount, total, expected, got
    ):
        result = validate_payment_request(
            payment_body(sub_total=sub_total, tax=tax, tip=tip, discount=discount, total=total)
        )

        assert result == Err(f"total mismatch: expected {expected} but got {got}")

    @pytest.mark.parametrize("field", ["sub_total", "tax", "tip", "discount", "total"])
    @pytest.mark.parametrize("huge", [10**40, 1e300, Decimal("1E+100")])
    def test_amount_beyond_precision(self, field, huge):
        result = validate_payment_request(payment_body(**{field: huge}))
        assert result == Err(f"{field} must be a valid number")

    def test_large_breakdown_never_raises(self):
        result = validate_payment_request(
            {"sub_total": 1e27, "tax": 0, "tip": 0, "discount": 0, "total": 1e27, "type": "DYN"}
        )
        assert isinstance(result, Ok)
        assert result.value.total == Decimal("1E+27")

    def test_discount_subtracted(self):
        result = validate_payment_request(
            payment_body(sub_total=20, tax=0, tip=0, discount=5, total=15)
        )
        assert isinstance(result, Ok)
        assert result.value.discount == Decimal("5.00")

    def test_optional_text_trimmed(self):
        result = validate_payment_request(
            payment_body(order_id="  ORD-1 ", description=" Mesa 4 ")
        )
        assert result.value.order_id == "ORD-1"
        assert result.value.description == "Mesa 4"

    def test_charge_amount(self):
        request = validate_payment_request(payment_body()).value
        assert request.charge_amount() == {
            "sub_total": 10.0,
            "tax": 0.7,
            "tip": 1.0,
            "discount": 0.0,
            "total": 11.7,
        }

    @pytest.mark.parametrize("field", ["sub_total", "tax", "tip", "discount", "total"])
    def test_missing_amount(self, field):
        body = payment_body()
        del body[field]
        assert validate_payment_request(body) == Err(f"{field} is required")

    @pytest.mark.parametrize("bad", ["10", True, float("nan"), float("inf")])
    def test_amount_not_a_number(self, bad):
        result = validate_payment_request(payment_body(tax=bad))
        assert result == Err("tax must be a valid number")

    def test_negative_amount(self):
        result = validate_payment_request(payment_body(tip=-1))
        assert result == Err("tip cannot be negative")

    @pytest.mark.parametrize("total", [0, -5])
    def test_total_must_be_positive(self, total):
        result = validate_payment_request(payment_body(total=total))
        assert result == Err("total must be greater than 0")

    def test_missing_type(self):
        body = payment_body()
        del body["type"]
        assert validate_payment_request(body) == Err("type is required")

    def test_invalid_type(self):
        result = validate_payment_request(payment_body(type="XYZ"))
        assert result == Err('type must be either "DYN" or "HYB"')

    @pytest.mark.parametrize("field", ["order_id", "description"])
    @pytest.mark.parametrize("value", ["", "   ", 123])
    def test_invalid_optional_text(self, field, value):
        result = validate_payment_request(payment_body(**{field: value}))
        assert result == Err(f"{field} must be a non-empty string if provided")

    def test_check_order_first_failure_wins(self):
        """Test the first failing field decides the message."""
        body = {"sub_total": -1, "tax": "x", "total": 0, "type": "XYZ"}
        assert validate_payment_request(body) == Err("sub_total cannot be negative")

    def test_type_checked_before_arithmetic(self):
        result = validate_payment_request(payment_body(total=50, type="nope"))
        assert result == Err('type must be either "DYN" or "HYB"')

    def test_arithmetic_checked_before_optional_text(self):
        result = validate_payment_request(payment_body(total=50, order_id=""))
        assert result.error.startswith("total mismatch")


# =============================================================================
# Transaction Requests
# =============================================================================


class TestValidateTransactionLookup:
    """Tests for the transaction status validator."""

    def test_valid(self):
        result = validate_transaction_lookup({"transactionId": "  TXN-0000000001  "})
        assert isinstance(result, Ok)
        assert result.value.transaction_id == "TXN-0000000001"

    @pytest.mark.parametrize("value", [None, "", 0])
    def test_required(self, value):
        result = validate_transaction_lookup({"transactionId": value})
        assert result == Err("transactionId is required")

    def test_must_be_string(self):
        result = validate_transaction_lookup({"transactionId": 1234567890123})
        assert result == Err("transactionId must be a string")

    def test_whitespace_only(self):
        result = validate_transaction_lookup({"transactionId": "     "})
        assert result == Err("transactionId cannot be empty")

    def test_too_short(self):
        result = validate_transaction_lookup({"transactionId": "SHORT"})
        assert result == Err("transactionId must be at least 10 characters")

    def test_length_measured_after_trim(self):
        result = validate_transaction_lookup({"transactionId": "  123456789  "})
        assert result == Err("transactionId must be at least 10 characters")

    def test_exactly_ten_characters(self):
        result = validate_transaction_lookup({"transactionId": "1234567890"})
        assert isinstance(result, Ok)


class TestValidateTransactionCancel:
    """Tests for the transaction cancellation validator."""

    def test_camel_case_key(self):
        result = validate_transaction_cancel({"transactionId": "TXN-0000000001"})
        assert result.value.transaction_id == "TXN-0000000001"

    def test_snake_case_fallback(self):
        result = validate_transaction_cancel({"transaction_id": "TXN-0000000002"})
        assert result.value.transaction_id == "TXN-0000000002"

    def test_camel_case_wins(self):
        result = validate_transaction_cancel(
            {"transactionId": "TXN-0000000001", "transaction_id": "TXN-0000000002"}
        )
        assert result.value.transaction_id == "TXN-0000000001"

    def test_required(self):
        assert validate_transaction_cancel({}) == Err("transactionId is required")


# =============================================================================
# Device Requests
# =============================================================================


class TestValidateOpenDevice:
    """Tests for the open-device validator."""

    def test_valid(self, default_device):
        result = validate_open_device(default_device)
        assert isinstance(result, Ok)
        assert result.value.id_device == "CAJA-01"
        assert result.value.group_id == "GRP-001"

    @pytest.mark.parametrize("field", ["idDevice", "nameDevice", "userDevice", "groupId"])
    def test_missing_field(self, default_device, field):
        del default_device[field]
        assert validate_open_device(default_device) == Err(f'Invalid or missing "{field}" field')

    def test_non_string_field(self, default_device):
        default_device["nameDevice"] = 42
        assert validate_open_device(default_device) == Err('Invalid or missing "nameDevice" field')

    def test_blank_field(self, default_device):
        default_device["userDevice"] = "  "
        assert validate_open_device(default_device) == Err('Invalid or missing "userDevice" field')


class TestValidateCloseDevice:
    """Tests for the close-device validator."""

    def test_valid(self):
        session_id = "3f2b8c1e-9a4d-4e6f-8b7a-1c2d3e4f5a6b"
        result = validate_close_device({"sessionId": session_id})
        assert result.value.session_id == session_id

    def test_required(self):
        assert validate_close_device({}) == Err("sessionId is required")

    def test_must_be_string(self):
        assert validate_close_device({"sessionId": 123}) == Err("sessionId must be a string")

    def test_whitespace_only(self):
        assert validate_close_device({"sessionId": "   "}) == Err("sessionId cannot be empty")

    def test_not_a_uuid(self):
        result = validate_close_device({"sessionId": "not-a-uuid"})
        assert result == Err("sessionId must be a valid UUID")
