from __future__ import annotations
from typing import TYPE_CHECKING, Optional

from ..debug import dprint
from ..models import OrderResponse
from ..utils import validate_id

if TYPE_CHECKING:
    from ..client import PaddleClient


class OrdersAPI:
    """Order lookups (GET /order/details)."""

    def __init__(self, client: "PaddleClient"):
        self.client = client

    async def get(self, order_id: str, *, timeout: Optional[float] = None) -> OrderResponse:
        validate_id("order_id", order_id)
        dprint("orders.get()", {"order_id": order_id}, force=self.client.config.debug)
        return await self.client.get(
            "/order/details",
            params={"order_id": order_id},
            model=OrderResponse,
            timeout=timeout,
        )


__all__ = ["OrdersAPI"]
