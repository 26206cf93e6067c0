from __future__ import annotations
from typing import TYPE_CHECKING, Optional

from ..debug import dprint
from ..models import ProductResponse
from ..utils import validate_id

if TYPE_CHECKING:
    from ..client import PaddleClient


class ProductsAPI:
    """
    Products API.

    GET /product/get_products?product_id=...
    """

    def __init__(self, client: "PaddleClient"):
        self.client = client

    async def get(self, product_id: str, *, timeout: Optional[float] = None) -> ProductResponse:
        """
        Fetch a single product.

        Parameters
        ----------
        product_id : str
            The Paddle product id.
        timeout : Optional[float]
            Abort the call after this many seconds (PaddleCancelledError).

        Returns
        -------
        ProductResponse
            `.response` holds the typed Product.
        """
        validate_id("product_id", product_id)
        dprint("products.get()", {"product_id": product_id}, force=self.client.config.debug)
        return await self.client.get(
            "/product/get_products",
            params={"product_id": product_id},
            model=ProductResponse,
            timeout=timeout,
        )


__all__ = ["ProductsAPI"]
