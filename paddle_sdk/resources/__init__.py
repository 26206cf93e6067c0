from __future__ import annotations

"""
Resource APIs for the Paddle SDK.

Public exports:

- ProductsAPI
- OrdersAPI
- SubscriptionsAPI
- CouponsAPI
- LicensesAPI

Webhook helpers:

- WebhookEvent
- serialize_webhook_data
- verify_signature
- verify_payload
- parse_event
"""

from .products import ProductsAPI
from .orders import OrdersAPI
from .subscriptions import SubscriptionsAPI
from .coupons import CouponsAPI
from .licenses import LicensesAPI
from .webhooks import (
    SIGNATURE_FIELD,
    WebhookEvent,
    parse_event,
    serialize_webhook_data,
    split_signature,
    verify_payload,
    verify_signature,
)

__all__ = (
    "ProductsAPI",
    "OrdersAPI",
    "SubscriptionsAPI",
    "CouponsAPI",
    "LicensesAPI",
    "SIGNATURE_FIELD",
    "WebhookEvent",
    "parse_event",
    "serialize_webhook_data",
    "split_signature",
    "verify_payload",
    "verify_signature",
)
