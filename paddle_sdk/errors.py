from __future__ import annotations
from typing import Any, Optional, Dict

from .debug import dprint, djson


class PaddleSDKError(Exception):
    """Base exception for all Paddle SDK errors."""
    pass


class PaddleConfigError(PaddleSDKError, ValueError):
    """Raised when configuration/credentials are invalid or missing."""
    pass


class PaddleWebhookError(PaddleSDKError):
    """Raised by the webhook parsing helpers for signature/format errors."""
    pass


class PaddleCancelledError(PaddleSDKError, TimeoutError):
    """Raised when a per-call timeout elapses and the request is aborted."""

    def __init__(self, method: str, url: str, timeout: float):
        self.method = method
        self.url = url
        self.timeout = timeout
        super().__init__(f"{method} {url} cancelled after {timeout}s")


class PaddleDeserializationError(PaddleSDKError):
    """
    A 2xx response whose body does not match the expected shape.

    Kept distinct from PaddleHTTPError so callers can tell "the server said no"
    apart from "the server said yes but the body is not what we expected".
    """

    def __init__(self, message: str, payload: Any = None, *, model: Optional[str] = None):
        self.payload = payload
        self.model = model
        dprint("PaddleDeserializationError", {"model": model, "message": message})
        super().__init__(message)


class PaddleAPIError(PaddleSDKError):
    """
    The API answered with a well-formed error envelope:
    {"success": false, "error": {"code": 107, "message": "..."}}
    """

    def __init__(self, code: Optional[Any], message: str, payload: Any = None):
        self.code = code
        self.message = message
        self.payload = payload
        dprint("PaddleAPIError", {"code": code, "message": message})
        super().__init__(f"[{code}] {message}" if code is not None else message)


def _error_object(payload: Any) -> Dict[str, Any]:
    # Paddle's vendor API reports failures as {"success": false, "error": {"code": 107, "message": "..."}}
    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        return payload["error"]
    return {}


class PaddleHTTPError(PaddleSDKError):
    """
    Any non-2xx HTTP response, whatever the body says.

    `payload` is the parsed JSON body, or the raw text when the body is not
    JSON (proxies and load balancers answer with HTML or plain text).
    `code` and `message_text` are lifted from Paddle's `error` object when
    one is present.
    """

    def __init__(
        self,
        status: int,
        payload: Any,
        *,
        method: Optional[str] = None,
        url: Optional[str] = None,
    ):
        self.status = int(status)
        self.payload = payload
        self.method = method
        self.url = url

        error = _error_object(payload)
        self.code: Optional[str] = str(error["code"]) if error.get("code") is not None else None
        if isinstance(error.get("message"), str) and error["message"].strip():
            self.message_text = error["message"].strip()
        elif isinstance(payload, str) and payload.strip():
            self.message_text = payload.strip()[:240]
        else:
            self.message_text = f"HTTP {self.status}"

        dprint("PaddleHTTPError", self.to_dict())
        djson("PaddleHTTPError payload", payload)

        head = " ".join(p for p in (f"HTTP {self.status}", method, url, f"[{self.code}]" if self.code else None) if p)
        super().__init__(f"{head}: {self.message_text}")

    def __repr__(self) -> str:
        return f"PaddleHTTPError(status={self.status}, code={self.code!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Summary for logs; the url never carries the auth code."""
        return {
            "status": self.status,
            "method": self.method,
            "url": self.url,
            "code": self.code,
            "message": self.message_text,
        }


__all__ = [
    "PaddleSDKError",
    "PaddleConfigError",
    "PaddleHTTPError",
    "PaddleDeserializationError",
    "PaddleAPIError",
    "PaddleCancelledError",
    "PaddleWebhookError",
]
