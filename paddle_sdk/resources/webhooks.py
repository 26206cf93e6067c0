from __future__ import annotations

import base64
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import quote

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.serialization import load_pem_public_key
from pydantic import BaseModel, ConfigDict, Field

from ..debug import dprint, djson, scrub_params
from ..errors import PaddleWebhookError


# Form field carrying the detached signature in every Paddle Classic webhook.
SIGNATURE_FIELD = "p_signature"


# ------------------------
# Models
# ------------------------

class WebhookEvent(BaseModel):
    """
    Paddle Classic webhook (form-encoded alert).
    Common fields are lifted; everything (minus the signature) stays in `data`.
    """
    alert_name: Optional[str] = None
    alert_id: Optional[str] = None
    event_time: Optional[str] = None

    data: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="allow", frozen=True)


# ------------------------
# Canonicalization
# ------------------------

def _escape(value: str) -> str:
    # RFC 3986 component escaping: only A-Z a-z 0-9 - _ . ~ survive, space -> %20
    return quote(value, safe="")

def serialize_webhook_data(data: Mapping[str, str]) -> str:
    """
    Canonical string the signature is computed over:
    entries sorted by key, values percent-encoded, joined as k=v&k=v.
    Input order never matters.
    """
    return "&".join(f"{key}={_escape(value)}" for key, value in sorted(data.items()))


# ------------------------
# Signature verification
# ------------------------

def _load_public_key(public_key: str | bytes) -> rsa.RSAPublicKey:
    if isinstance(public_key, str):
        public_key = public_key.encode("utf-8")
    key = load_pem_public_key(public_key)
    if not isinstance(key, rsa.RSAPublicKey):
        raise TypeError(f"expected an RSA public key, got {type(key).__name__}")
    return key

def _check(signature: str, data: Mapping[str, str], public_key: str | bytes) -> None:
    key = _load_public_key(public_key)
    sig_bytes = base64.b64decode(signature, validate=True)
    payload = serialize_webhook_data(data).encode("utf-8")
    key.verify(sig_bytes, payload, padding.PKCS1v15(), hashes.SHA1())

def verify_signature(signature: str, data: Mapping[str, str], public_key: str | bytes) -> bool:
    """
    Verify a webhook's detached signature.

    Args:
      signature: base64 `p_signature` value.
      data: every webhook field EXCEPT `p_signature`, values as strings.
      public_key: PEM-encoded RSA public key from the vendor dashboard.

    Returns:
      True only when the RSA/SHA-1/PKCS#1 v1.5 signature matches the
      canonicalized payload. Malformed keys, bad base64 and mismatches all
      give False; this function does not raise.
    """
    try:
        _check(signature, data, public_key)
    except InvalidSignature:
        dprint("webhooks.verify_signature() mismatch")
        return False
    except Exception as e:  # bad key, bad base64, wrong types: all mean "not verified"
        dprint("webhooks.verify_signature() malformed input", {"error": repr(e)})
        return False
    dprint("webhooks.verify_signature() ok")
    return True


def split_signature(fields: Mapping[str, Any]) -> Tuple[Optional[str], Dict[str, str]]:
    """
    Separate `p_signature` from the rest of a posted webhook form.
    Values are coerced to str the way they arrive over the wire.
    """
    signature = fields.get(SIGNATURE_FIELD)
    rest = {str(k): "" if v is None else str(v) for k, v in fields.items() if k != SIGNATURE_FIELD}
    return (str(signature) if signature else None), rest

def verify_payload(fields: Mapping[str, Any], public_key: str | bytes) -> bool:
    """Verify a full webhook form (signature included). Missing signature -> False."""
    signature, rest = split_signature(fields)
    if not signature:
        dprint("webhooks.verify_payload() no signature field")
        return False
    return verify_signature(signature, rest, public_key)


# ------------------------
# Parsing
# ------------------------

def parse_event(
    fields: Mapping[str, Any],
    *,
    public_key: Optional[str | bytes] = None,
    skip_verification: bool = False,
) -> WebhookEvent:
    """
    Verify (unless skipped) and parse a posted Paddle webhook form.

    Args:
      fields: the form fields as received, `p_signature` included.
      public_key: PEM public key (required unless skip_verification=True).
      skip_verification: set True for local/dev only.

    Raises:
      PaddleWebhookError when the key is missing or the signature does not verify.
    """
    dprint("webhooks.parse_event() begin", {"skip_verification": skip_verification})
    if not skip_verification:
        if not public_key:
            raise PaddleWebhookError("webhook public key missing")
        if not verify_payload(fields, public_key):
            raise PaddleWebhookError("signature verification failed")

    _, data = split_signature(fields)
    djson("webhooks.parse_event() payload", scrub_params(data))
    return WebhookEvent(
        alert_name=data.get("alert_name"),
        alert_id=data.get("alert_id"),
        event_time=data.get("event_time"),
        data=data,
    )


__all__ = [
    "SIGNATURE_FIELD",
    "WebhookEvent",
    "serialize_webhook_data",
    "verify_signature",
    "verify_payload",
    "split_signature",
    "parse_event",
]
