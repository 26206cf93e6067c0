from __future__ import annotations
from typing import TYPE_CHECKING, Dict, Optional

from ..debug import dprint, mask_value
from ..models import LicenseActivationResponse, LicenseValidationResponse
from ..utils import validate_id

if TYPE_CHECKING:
    from ..client import PaddleClient


def _license_form(product_id: str, license_key: str) -> Dict[str, str]:
    validate_id("product_id", product_id)
    validate_id("license_key", license_key)
    return {"product_id": product_id, "license_code": license_key}


class LicensesAPI:
    """
    License keys.

    `validate` checks a key without consuming anything; `activate` uses up
    one unit of the key's activation quota.
    """

    def __init__(self, client: "PaddleClient"):
        self.client = client

    async def validate(
        self,
        product_id: str,
        license_key: str,
        *,
        timeout: Optional[float] = None,
    ) -> LicenseValidationResponse:
        body = _license_form(product_id, license_key)
        dprint("licenses.validate()", {"product_id": product_id, "license_key": mask_value(license_key)}, force=self.client.config.debug)
        return await self.client.post(
            "/license/verify",
            data=body,
            model=LicenseValidationResponse,
            timeout=timeout,
        )

    async def activate(
        self,
        product_id: str,
        license_key: str,
        *,
        timeout: Optional[float] = None,
    ) -> LicenseActivationResponse:
        body = _license_form(product_id, license_key)
        dprint("licenses.activate()", {"product_id": product_id, "license_key": mask_value(license_key)}, force=self.client.config.debug)
        return await self.client.post(
            "/license/activate",
            data=body,
            model=LicenseActivationResponse,
            timeout=timeout,
        )


__all__ = ["LicensesAPI"]
