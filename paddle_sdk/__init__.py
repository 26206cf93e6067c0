"""
Paddle-Python SDK

Async client for the Paddle vendor API (api/2.0):
- Products & orders
- Subscription users (list/update plan/cancel)
- Coupons (create/list/delete)
- License keys (validate/activate)
- Webhook signature verification (RSA/SHA-1) & alert routing
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------
__version__ = "0.1.0"

# ---------------------------------------------------------------------------
# Public API re-exports
# ---------------------------------------------------------------------------
from .config import PaddleConfig, PaddleEnvironment
from .client import PaddleClient
from .errors import (
    PaddleSDKError,
    PaddleConfigError,
    PaddleHTTPError,
    PaddleDeserializationError,
    PaddleAPIError,
    PaddleCancelledError,
    PaddleWebhookError,
)
from .models import (
    Product,
    ProductResponse,
    Order,
    OrderResponse,
    Subscription,
    SubscriptionListResponse,
    SubscriptionUpdate,
    SubscriptionUpdateResponse,
    SubscriptionCancellation,
    SubscriptionCancelResponse,
    CouponCreate,
    Coupon,
    CouponResponse,
    CouponListResponse,
    CouponDeleteResponse,
    LicenseValidation,
    LicenseValidationResponse,
    LicenseActivation,
    LicenseActivationResponse,
)
from .resources import (
    ProductsAPI,
    OrdersAPI,
    SubscriptionsAPI,
    CouponsAPI,
    LicensesAPI,
    # webhook helpers re-exported via resources.__all__
    WebhookEvent,
    parse_event,
    serialize_webhook_data,
    verify_payload,
    verify_signature,
)
from .debug import dprint, djson, is_enabled as debug_enabled, set_debug as set_debug_enabled

__all__ = (
    "__version__",
    # core
    "PaddleConfig",
    "PaddleEnvironment",
    "PaddleClient",
    # errors
    "PaddleSDKError",
    "PaddleConfigError",
    "PaddleHTTPError",
    "PaddleDeserializationError",
    "PaddleAPIError",
    "PaddleCancelledError",
    "PaddleWebhookError",
    # models
    "Product",
    "ProductResponse",
    "Order",
    "OrderResponse",
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
    # resources
    "ProductsAPI",
    "OrdersAPI",
    "SubscriptionsAPI",
    "CouponsAPI",
    "LicensesAPI",
    # webhook helpers
    "WebhookEvent",
    "parse_event",
    "serialize_webhook_data",
    "verify_payload",
    "verify_signature",
    # debug controls
    "dprint",
    "djson",
    "debug_enabled",
    "set_debug_enabled",
)
