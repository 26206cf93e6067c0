from __future__ import annotations
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..debug import dprint, djson
from ..models import CouponCreate, CouponDeleteResponse, CouponListResponse, CouponResponse
from ..utils import validate_id

if TYPE_CHECKING:
    from ..client import PaddleClient


class CouponsAPI:
    """
    Coupons API.

    Common flows:
      - Create a batch of coupon codes for a set of products.
      - List coupons (optionally only those for one product).
      - Delete a coupon code from a product.
    """

    def __init__(self, client: "PaddleClient"):
        self.client = client

    # ---- Create ----
    async def create(
        self,
        request: CouponCreate,
        *,
        timeout: Optional[float] = None,
    ) -> CouponResponse:
        """
        Create coupon(s).

        Parameters
        ----------
        request : CouponCreate
            Discount, prefix, quantity, expiry, product ids, allowed uses, currency.
            A plain dict is accepted and validated into a CouponCreate.

        Returns
        -------
        CouponResponse
        """
        if not isinstance(request, CouponCreate):
            request = CouponCreate.model_validate(request)
        body = request.to_form()
        djson("coupons.create body", body, force=self.client.config.debug)
        return await self.client.post(
            "/product/create_coupon",
            data=body,
            model=CouponResponse,
            timeout=timeout,
        )

    # ---- List ----
    async def list(
        self,
        product_id: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
    ) -> CouponListResponse:
        params: Dict[str, Any] = {}
        if product_id:
            params["product_id"] = product_id
        dprint("coupons.list()", params, force=self.client.config.debug)
        return await self.client.get(
            "/product/list_coupons",
            params=params,
            model=CouponListResponse,
            timeout=timeout,
        )

    # ---- Delete ----
    async def delete(
        self,
        coupon_code: str,
        product_id: str,
        *,
        timeout: Optional[float] = None,
    ) -> CouponDeleteResponse:
        validate_id("coupon_code", coupon_code)
        validate_id("product_id", product_id)
        dprint("coupons.delete()", {"coupon_code": coupon_code, "product_id": product_id}, force=self.client.config.debug)
        return await self.client.post(
            "/product/delete_coupon",
            data={"coupon_code": coupon_code, "product_id": product_id},
            model=CouponDeleteResponse,
            timeout=timeout,
        )


__all__ = ["CouponsAPI"]
