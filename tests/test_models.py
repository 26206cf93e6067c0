"""Tests for the response records, the coupon request and form helpers."""
from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import get_args

import pytest
from pydantic import ValidationError

from paddle_sdk.models import (
    SUBSCRIPTION_STATES,
    CouponCreate,
    LicenseValidationResponse,
    OrderResponse,
    Product,
    SubscriptionListResponse,
    SubscriptionState,
)
from paddle_sdk.utils import (
    form_bool,
    form_number,
    format_date,
    join_ids,
    normalize_currency,
    validate_id,
)


PRODUCT = {
    "product_id": "123",
    "name": "Test Product",
    "description": "Test Description",
    "base_price": 99.99,
    "currency": "USD",
}


class TestRecords:

    def test_records_are_frozen(self):
        product = Product.model_validate(PRODUCT)

        with pytest.raises(ValidationError):
            product.name = "Renamed"

    def test_unknown_fields_are_kept(self):
        product = Product.model_validate({**PRODUCT, "icon": "https://example.com/i.png"})

        assert product.icon == "https://example.com/i.png"

    def test_iso_timestamp_with_offset(self):
        body = {
            "success": True,
            "response": {
                "order_id": "1",
                "status": "completed",
                "total": "1.00",
                "currency": "USD",
                "created_at": "2024-01-01T12:00:00Z",
            },
        }

        order = OrderResponse.model_validate(body).response

        assert order.created_at == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_bad_timestamp_fails_validation(self):
        body = {
            "success": True,
            "response": [{
                "subscription_id": "s",
                "plan_id": "p",
                "status": "active",
                "next_payment_date": "next tuesday",
                "amount": 1,
                "currency": "USD",
                "customer_id": "c",
            }],
        }

        with pytest.raises(ValidationError):
            SubscriptionListResponse.model_validate(body)

    def test_license_counts_are_ints(self):
        body = {
            "success": True,
            "response": {
                "license_code": "K",
                "is_valid": False,
                "expiry_date": "2023-01-01",
                "activations_limit": "5",
                "times_activated": 5,
            },
        }

        lic = LicenseValidationResponse.model_validate(body).response

        assert lic.is_valid is False
        assert lic.activations_limit == 5
        assert lic.expiry_date == datetime(2023, 1, 1)


class TestSubscriptionStates:

    def test_states_match_the_literal(self):
        assert SUBSCRIPTION_STATES == get_args(SubscriptionState)
        assert "past_due" in SUBSCRIPTION_STATES


class TestCouponCreate:

    def _make(self, **overrides):
        fields = {"discount_type": "percentage", "discount_amount": 10, "coupon_type": "product"}
        fields.update(overrides)
        return CouponCreate(**fields)

    def test_defaults_in_form(self):
        form = self._make().to_form()

        assert form == {
            "discount_type": "percentage",
            "discount_amount": "10",
            "coupon_type": "product",
            "coupon_prefix": "",
            "num_coupons": "1",
            "description": "",
            "product_ids": "",
            "allowed_uses": "1",
            "currency": "USD",
        }

    def test_datetime_expiry_becomes_date(self):
        coupon = self._make(expiry_date=datetime(2024, 12, 31, 23, 59))

        assert coupon.expiry_date == date(2024, 12, 31)
        assert coupon.to_form()["expires"] == "2024-12-31"

    def test_float_amount_has_no_artifacts(self):
        assert self._make(discount_amount=0.1).to_form()["discount_amount"] == "0.1"

    @pytest.mark.parametrize("amount", [0, -5, "-0.01"])
    def test_amount_must_be_positive(self, amount):
        with pytest.raises(ValidationError):
            self._make(discount_amount=amount)

    @pytest.mark.parametrize("field", ["num_coupons", "allowed_uses"])
    def test_counts_must_be_positive(self, field):
        with pytest.raises(ValidationError):
            self._make(**{field: 0})

    def test_wire_name_expires_is_accepted(self):
        coupon = CouponCreate.model_validate({
            "discount_type": "flat",
            "discount_amount": "5",
            "coupon_type": "checkout",
            "expires": "2024-12-31",
        })

        assert coupon.expiry_date == date(2024, 12, 31)
        assert coupon.to_form()["expires"] == "2024-12-31"

    def test_unknown_field_is_rejected(self):
        with pytest.raises(ValidationError):
            self._make(expiry="2024-12-31")

    def test_request_text_is_trimmed(self):
        assert self._make(coupon_prefix=" SUMMER ").to_form()["coupon_prefix"] == "SUMMER"

    def test_bad_currency(self):
        with pytest.raises(ValidationError):
            self._make(currency="dollars")


class TestFormHelpers:

    def test_form_bool(self):
        assert form_bool(True) == "true"
        assert form_bool(False) == "false"

    @pytest.mark.parametrize(
        "value, expected",
        [
            (Decimal("20"), "20"),
            (Decimal("9.990"), "9.990"),
            (Decimal("1E+2"), "100"),
            (29.99, "29.99"),
            (7, "7"),
        ],
    )
    def test_form_number(self, value, expected):
        assert form_number(value) == expected

    def test_form_number_rejects_bool(self):
        with pytest.raises(TypeError):
            form_number(True)

    def test_format_date(self):
        assert format_date(None) is None
        assert format_date(date(2024, 1, 5)) == "2024-01-05"
        assert format_date(datetime(2024, 1, 5, 23, 0)) == "2024-01-05"

    def test_join_ids(self):
        assert join_ids([1, " 2 ", "3"]) == "1,2,3"
        assert join_ids([]) == ""

    def test_normalize_currency(self):
        assert normalize_currency(" eur ") == "EUR"
        with pytest.raises(ValueError):
            normalize_currency("EURO")

    @pytest.mark.parametrize("value", ["", "  ", None, 123])
    def test_validate_id(self, value):
        with pytest.raises(ValueError):
            validate_id("product_id", value)
