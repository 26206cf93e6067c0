from __future__ import annotations
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..debug import dprint, djson
from ..models import (
    SUBSCRIPTION_STATES,
    SubscriptionCancelResponse,
    SubscriptionListResponse,
    SubscriptionState,
    SubscriptionUpdateResponse,
)
from ..utils import form_bool, validate_id

if TYPE_CHECKING:
    from ..client import PaddleClient


# ------------------------ validation helpers ------------------------

def _validate_state(state: Optional[str]) -> Optional[str]:
    if state is None:
        return None
    if not isinstance(state, str) or state.strip().lower() not in SUBSCRIPTION_STATES:
        raise ValueError(f"state must be one of {list(SUBSCRIPTION_STATES)}")
    return state.strip().lower()

def _validate_page(page: int) -> int:
    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise ValueError("page must be an integer >= 1.")
    return page


class SubscriptionsAPI:
    """
    Subscription users API.

    - `list(plan_id, state=..., page=...)`  GET  /subscription/users
    - `update_plan(...)`                    POST /subscription/users/update
    - `cancel(subscription_id)`             POST /subscription/users/cancel
    """

    def __init__(self, client: "PaddleClient"):
        self.client = client

    # ------------------------ read ------------------------

    async def list(
        self,
        plan_id: str,
        *,
        state: Optional[SubscriptionState] = None,
        page: int = 1,
        timeout: Optional[float] = None,
    ) -> SubscriptionListResponse:
        """List subscribers of a plan, one page at a time. An empty page is an empty list."""
        validate_id("plan_id", plan_id)
        state = _validate_state(state)
        page = _validate_page(page)

        params: Dict[str, Any] = {"plan": plan_id, "page": page}
        if state:
            params["state"] = state
        dprint("subscriptions.list()", params, force=self.client.config.debug)
        return await self.client.get(
            "/subscription/users",
            params=params,
            model=SubscriptionListResponse,
            timeout=timeout,
        )

    # ------------------------ actions ------------------------

    async def update_plan(
        self,
        subscription_id: str,
        new_plan_id: str,
        *,
        prorate: bool = True,
        timeout: Optional[float] = None,
    ) -> SubscriptionUpdateResponse:
        """Move a subscription to another plan, prorating the current cycle by default."""
        validate_id("subscription_id", subscription_id)
        validate_id("new_plan_id", new_plan_id)

        body = {
            "subscription_id": subscription_id,
            "plan_id": new_plan_id,
            "prorate": form_bool(prorate),
        }
        djson("subscriptions.update_plan body", body, force=self.client.config.debug)
        return await self.client.post(
            "/subscription/users/update",
            data=body,
            model=SubscriptionUpdateResponse,
            timeout=timeout,
        )

    async def cancel(
        self,
        subscription_id: str,
        *,
        timeout: Optional[float] = None,
    ) -> SubscriptionCancelResponse:
        """
        Cancel a subscription. `cancellation_effective_date` on the result is
        None when Paddle does not report one.
        """
        validate_id("subscription_id", subscription_id)
        dprint("subscriptions.cancel()", {"subscription_id": subscription_id}, force=self.client.config.debug)
        return await self.client.post(
            "/subscription/users/cancel",
            data={"subscription_id": subscription_id},
            model=SubscriptionCancelResponse,
            timeout=timeout,
        )


__all__ = ["SubscriptionsAPI"]
