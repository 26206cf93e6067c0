from __future__ import annotations
from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Any, Dict, List, Literal, Optional, get_args

from dateutil.parser import isoparse
from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from .utils import form_number, format_date, join_ids, normalize_currency


def _parse_timestamp(value: Any) -> Any:
    # Paddle mixes "2024-01-01", "2024-01-01 12:00:00" and full ISO 8601
    if isinstance(value, str):
        return isoparse(value.strip())
    return value


Timestamp = Annotated[datetime, BeforeValidator(_parse_timestamp)]


# =============================================================================
# Base model: immutable, permissive to avoid breaking on API additions
# =============================================================================
class _APIModel(BaseModel):
    """
    Frozen model that accepts extra fields so the SDK doesn't break
    when Paddle adds response properties.
    """
    model_config = ConfigDict(
        extra="allow",
        frozen=True,
        populate_by_name=True,   # allow using field names when aliases exist
        coerce_numbers_to_str=True,  # Paddle sends numeric ids
    )


class _Envelope(_APIModel):
    """
    Every vendor API answer looks like {"success": bool, "response": ...}.
    Subclasses pin the type of `response`; it is required, so a body
    without it fails validation instead of producing an empty record.
    """
    success: bool


# =============================================================================
# Products
# =============================================================================
class Product(_APIModel):
    product_id: str = Field(validation_alias=AliasChoices("product_id", "id"))
    name: str
    description: str
    base_price: Decimal
    currency: str


class ProductResponse(_Envelope):
    response: Product


# =============================================================================
# Orders
# =============================================================================
class Order(_APIModel):
    order_id: str
    status: str
    total: Decimal
    currency: str
    created_at: Timestamp


class OrderResponse(_Envelope):
    response: Order


# =============================================================================
# Subscriptions
# =============================================================================
SubscriptionState = Literal["active", "past_due", "trialing", "paused", "deleted"]

SUBSCRIPTION_STATES = get_args(SubscriptionState)


class Subscription(_APIModel):
    """
    Subscription user as listed by /subscription/users.
    Older payloads use `state` and `user_id`; both are accepted.
    """
    subscription_id: str
    plan_id: str
    status: str = Field(validation_alias=AliasChoices("status", "state"))
    next_payment_date: Timestamp
    amount: Decimal
    currency: str
    customer_id: str = Field(validation_alias=AliasChoices("customer_id", "user_id"))


class SubscriptionListResponse(_Envelope):
    response: List[Subscription]


class SubscriptionUpdate(_APIModel):
    subscription_id: str
    new_plan_id: str = Field(validation_alias=AliasChoices("new_plan_id", "plan_id"))
    next_payment_date: Timestamp
    new_amount: Decimal


class SubscriptionUpdateResponse(_Envelope):
    response: SubscriptionUpdate


class SubscriptionCancellation(_APIModel):
    subscription_id: str
    status: str
    cancellation_effective_date: Optional[Timestamp] = None


class SubscriptionCancelResponse(_Envelope):
    response: SubscriptionCancellation


# =============================================================================
# Coupons
# =============================================================================
class CouponCreate(BaseModel):
    """
    Request body for /product/create_coupon.

    Strict about its keys: a misspelt field raises instead of being
    dropped. The wire name `expires` is accepted for `expiry_date`.
    """
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
    )

    discount_type: str              # "flat" | "percentage"
    discount_amount: Decimal
    coupon_type: str                # "product" | "checkout"
    coupon_prefix: str = ""
    num_coupons: int = 1
    description: str = ""
    expiry_date: Optional[date] = Field(
        None, validation_alias=AliasChoices("expiry_date", "expires")
    )
    product_ids: List[str] = Field(default_factory=list)
    allowed_uses: int = 1
    currency: str = "USD"

    @field_validator("discount_amount")
    @classmethod
    def _amount_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("discount_amount must be positive.")
        return v

    @field_validator("num_coupons", "allowed_uses")
    @classmethod
    def _count_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1.")
        return v

    @field_validator("expiry_date", mode="before")
    @classmethod
    def _date_only(cls, v: Any) -> Any:
        return v.date() if isinstance(v, datetime) else v

    @field_validator("product_ids", mode="before")
    @classmethod
    def _ids_as_str(cls, v: Any) -> Any:
        if isinstance(v, (list, tuple)):
            return [str(i) for i in v]
        return v

    @field_validator("currency")
    @classmethod
    def _currency_norm(cls, v: str) -> str:
        return normalize_currency(v)

    def to_form(self) -> Dict[str, str]:
        """Form fields as posted to the vendor API (credentials excluded)."""
        form = {
            "discount_type": self.discount_type,
            "discount_amount": form_number(self.discount_amount),
            "coupon_type": self.coupon_type,
            "coupon_prefix": self.coupon_prefix,
            "num_coupons": str(self.num_coupons),
            "description": self.description,
            "expires": format_date(self.expiry_date),
            "product_ids": join_ids(self.product_ids),
            "allowed_uses": str(self.allowed_uses),
            "currency": self.currency,
        }
        return {k: v for k, v in form.items() if v is not None}


class Coupon(_APIModel):
    coupon_code: str
    discount_type: str
    discount_amount: Decimal
    expiry_date: Optional[Timestamp] = Field(
        None, validation_alias=AliasChoices("expiry_date", "expires")
    )
    allowed_uses: int
    times_used: int


class CouponResponse(_Envelope):
    response: Coupon


class CouponListResponse(_Envelope):
    response: List[Coupon]


class CouponDeleteResponse(_APIModel):
    success: bool
    message: Optional[str] = None


# =============================================================================
# Licenses
# =============================================================================
class LicenseValidation(_APIModel):
    license_code: str
    is_valid: bool
    expiry_date: Optional[Timestamp] = None
    activations_limit: int
    times_activated: int


class LicenseValidationResponse(_Envelope):
    response: LicenseValidation


class LicenseActivation(_APIModel):
    license_code: str
    activated: bool
    message: str


class LicenseActivationResponse(_Envelope):
    response: LicenseActivation


__all__ = [
    "Timestamp",
    "Product",
    "ProductResponse",
    "Order",
    "OrderResponse",
    "SubscriptionState",
    "SUBSCRIPTION_STATES",
    "Subscription",
    "SubscriptionListResponse",
    "SubscriptionUpdate",
    "SubscriptionUpdateResponse",
    "SubscriptionCancellation",
    "SubscriptionCancelResponse",
    "CouponCreate",
    "Coupon",
    "CouponResponse",
    "CouponListResponse",
    "CouponDeleteResponse",
    "LicenseValidation",
    "LicenseValidationResponse",
    "LicenseActivation",
    "LicenseActivationResponse",
]
