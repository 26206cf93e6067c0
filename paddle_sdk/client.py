from __future__ import annotations

import asyncio
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from . import __version__ as SDK_VERSION
from .config import PaddleConfig, PaddleEnvironment
from .debug import dprint, djson, scrub_params, scrub_url
from .errors import (
    PaddleAPIError,
    PaddleCancelledError,
    PaddleDeserializationError,
    PaddleHTTPError,
)
from .models import (
    CouponCreate,
    CouponDeleteResponse,
    CouponListResponse,
    CouponResponse,
    LicenseActivationResponse,
    LicenseValidationResponse,
    OrderResponse,
    ProductResponse,
    SubscriptionCancelResponse,
    SubscriptionListResponse,
    SubscriptionState,
    SubscriptionUpdateResponse,
)
from .resources import (
    CouponsAPI,
    LicensesAPI,
    OrdersAPI,
    ProductsAPI,
    SubscriptionsAPI,
    verify_signature,
)


M = TypeVar("M", bound=BaseModel)


def _safe_url(url: httpx.URL) -> str:
    # never let the auth code leak into error messages
    return scrub_url(str(url))


def _error_body(r: httpx.Response) -> Any:
    if not r.content:
        return {}
    try:
        return r.json()
    except ValueError:
        return r.text


class PaddleClient:
    """
    Async client for the Paddle vendor API (api/2.0).

    - Sends `vendor_id` + `vendor_auth_code` with every call
      (query string on GET, form fields on POST).
    - Maps the {"success", "response"} envelope into frozen pydantic records.
    - Non-2xx -> PaddleHTTPError, 2xx with the wrong shape ->
      PaddleDeserializationError, per-call `timeout` -> PaddleCancelledError.
    - No retries, no caching; every call is independent.
    """

    def __init__(
        self,
        api_key: str,
        vendor_id: str,
        environment: Union[PaddleEnvironment, str] = PaddleEnvironment.PRODUCTION,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
        base_url: Optional[str] = None,
        debug: bool = False,
    ):
        config = PaddleConfig(
            api_key=api_key,
            vendor_id=vendor_id,
            environment=environment,
            base_url=base_url,
            timeout=30.0 if timeout is None else timeout,
            debug=debug,
        )
        # tracing is per instance; the process-wide flag is left alone
        self.config = config.validate()

        self._owns_client = http_client is None
        if http_client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                headers={"User-Agent": f"paddle-sdk-python/{SDK_VERSION}"},
            )
        else:
            self._client = http_client
            if not str(self._client.base_url):
                self._client.base_url = self.config.base_url

        self.products = ProductsAPI(self)
        self.orders = OrdersAPI(self)
        self.subscriptions = SubscriptionsAPI(self)
        self.coupons = CouponsAPI(self)
        self.licenses = LicensesAPI(self)

        dprint(
            "Client init",
            {
                **self.config.masked(),
                "http_base_url": str(self._client.base_url),
                "owns_http_client": self._owns_client,
                "sdk_version": SDK_VERSION,
            },
            force=self.config.debug,
        )

    # ------------ alt constructors ------------
    @classmethod
    def from_config(
        cls,
        config: PaddleConfig,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "PaddleClient":
        return cls(
            config.api_key,
            config.vendor_id,
            config.environment,
            http_client=http_client,
            timeout=config.timeout,
            base_url=config.base_url,
            debug=config.debug,
        )

    @classmethod
    def from_env(cls, *, http_client: Optional[httpx.AsyncClient] = None) -> "PaddleClient":
        """Build a client from PADDLE_* environment variables (see PaddleConfig.from_env)."""
        return cls.from_config(PaddleConfig.from_env(), http_client=http_client)

    # ------------ context manager support ------------
    async def __aenter__(self) -> "PaddleClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        dprint("Client aclose()", {"owns_http_client": self._owns_client}, force=self.config.debug)
        if self._owns_client:
            await self._client.aclose()

    # ------------ internal helpers ------------
    def _credentials(self) -> Dict[str, str]:
        return {
            "vendor_id": self.config.vendor_id,
            "vendor_auth_code": self.config.api_key,
        }

    async def _send(self, method: str, path: str, *, timeout: Optional[float], **kwargs: Any) -> httpx.Response:
        dprint("HTTP send", {"method": method, "path": path, "timeout": timeout}, force=self.config.debug)
        if timeout is None:
            return await self._client.request(method, path, **kwargs)
        if timeout <= 0:
            raise ValueError("timeout must be a positive number of seconds.")
        try:
            return await asyncio.wait_for(self._client.request(method, path, **kwargs), timeout)
        except asyncio.TimeoutError as e:
            dprint("HTTP send cancelled", {"method": method, "path": path, "timeout": timeout}, force=self.config.debug)
            raise PaddleCancelledError(method, path, timeout) from e

    def _handle(self, r: httpx.Response, model: Type[M]) -> M:
        method = r.request.method
        url = _safe_url(r.request.url)
        dprint("Response", {"status": r.status_code, "method": method, "url": url}, force=self.config.debug)

        if not r.is_success:
            raise PaddleHTTPError(r.status_code, _error_body(r), method=method, url=url)

        try:
            body = r.json()
        except ValueError as e:
            raise PaddleDeserializationError(
                f"{model.__name__}: response body is not valid JSON", r.text, model=model.__name__
            ) from e

        djson("Response body", body, force=self.config.debug)

        if not isinstance(body, dict):
            raise PaddleDeserializationError(
                f"{model.__name__}: expected a JSON object, got {type(body).__name__}",
                body,
                model=model.__name__,
            )

        error = body.get("error")
        if body.get("success") is False and isinstance(error, dict):
            raise PaddleAPIError(error.get("code"), str(error.get("message") or "request failed"), body)

        try:
            return model.model_validate(body)
        except ValidationError as e:
            raise PaddleDeserializationError(
                f"{model.__name__}: unexpected response shape ({e.error_count()} error(s))",
                body,
                model=model.__name__,
            ) from e

    # ------------ public request helpers ------------
    async def get(
        self,
        path: str,
        *,
        model: Type[M],
        params: Optional[Mapping[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> M:
        query = {**(params or {}), **self._credentials()}
        dprint("GET", {"path": path, "params": scrub_params(query)}, force=self.config.debug)
        r = await self._send("GET", path, timeout=timeout, params=query)
        return self._handle(r, model)

    async def post(
        self,
        path: str,
        *,
        model: Type[M],
        data: Optional[Mapping[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> M:
        form = {**(data or {}), **self._credentials()}
        dprint("POST", {"path": path}, force=self.config.debug)
        djson("Request form", scrub_params(form), force=self.config.debug)
        r = await self._send("POST", path, timeout=timeout, data=form)
        return self._handle(r, model)

    # ------------ typed operations ------------
    async def get_product(self, product_id: str, *, timeout: Optional[float] = None) -> ProductResponse:
        return await self.products.get(product_id, timeout=timeout)

    async def get_order(self, order_id: str, *, timeout: Optional[float] = None) -> OrderResponse:
        return await self.orders.get(order_id, timeout=timeout)

    async def list_subscriptions(
        self,
        plan_id: str,
        state: Optional[SubscriptionState] = None,
        page: int = 1,
        *,
        timeout: Optional[float] = None,
    ) -> SubscriptionListResponse:
        return await self.subscriptions.list(plan_id, state=state, page=page, timeout=timeout)

    async def update_subscription_plan(
        self,
        subscription_id: str,
        new_plan_id: str,
        prorate: bool = True,
        *,
        timeout: Optional[float] = None,
    ) -> SubscriptionUpdateResponse:
        return await self.subscriptions.update_plan(
            subscription_id, new_plan_id, prorate=prorate, timeout=timeout
        )

    async def cancel_subscription(
        self, subscription_id: str, *, timeout: Optional[float] = None
    ) -> SubscriptionCancelResponse:
        return await self.subscriptions.cancel(subscription_id, timeout=timeout)

    async def create_coupon(self, request: CouponCreate, *, timeout: Optional[float] = None) -> CouponResponse:
        return await self.coupons.create(request, timeout=timeout)

    async def list_coupons(
        self, product_id: Optional[str] = None, *, timeout: Optional[float] = None
    ) -> CouponListResponse:
        return await self.coupons.list(product_id, timeout=timeout)

    async def delete_coupon(
        self, coupon_code: str, product_id: str, *, timeout: Optional[float] = None
    ) -> CouponDeleteResponse:
        return await self.coupons.delete(coupon_code, product_id, timeout=timeout)

    async def validate_license(
        self, product_id: str, license_key: str, *, timeout: Optional[float] = None
    ) -> LicenseValidationResponse:
        return await self.licenses.validate(product_id, license_key, timeout=timeout)

    async def activate_license(
        self, product_id: str, license_key: str, *, timeout: Optional[float] = None
    ) -> LicenseActivationResponse:
        return await self.licenses.activate(product_id, license_key, timeout=timeout)

    @staticmethod
    def validate_webhook_signature(signature: str, webhook_data: Mapping[str, str], public_key: str) -> bool:
        """Check a webhook's `p_signature` against the remaining fields. Never raises."""
        return verify_signature(signature, webhook_data, public_key)


__all__ = ["PaddleClient"]
