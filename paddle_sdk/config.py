from __future__ import annotations

import os
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Union

from dotenv import load_dotenv

from .debug import dprint
from .errors import PaddleConfigError


SANDBOX_BASE_URL = "https://sandbox-vendors.paddle.com/api/2.0"
PRODUCTION_BASE_URL = "https://vendors.paddle.com/api/2.0"

DEFAULT_TIMEOUT = 30.0


# ----------------------------- helpers -----------------------------

def _parse_bool(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    v = value.strip().lower()
    return v not in ("0", "false", "no", "off", "")


def _parse_float(value: Optional[str], default: float) -> float:
    try:
        return float(value) if value is not None else default
    except ValueError:
        return default


def _normalize_base_url(url: Optional[str]) -> Optional[str]:
    url = (url or "").strip()
    if not url:
        return None
    # Remove trailing slash to avoid double slashes when building paths
    return url[:-1] if url.endswith("/") else url


def _mask(token: Optional[str]) -> str:
    """Mask sensitive values for debug printing."""
    if not token:
        return "(empty)"
    t = token.strip()
    if len(t) <= 10:
        return "***"
    return t[:4] + "..." + t[-2:]


# ----------------------------- environment -----------------------------

class PaddleEnvironment(str, Enum):
    """Which Paddle vendor API to talk to."""

    SANDBOX = "sandbox"
    PRODUCTION = "production"

    @property
    def base_url(self) -> str:
        return SANDBOX_BASE_URL if self is PaddleEnvironment.SANDBOX else PRODUCTION_BASE_URL

    @classmethod
    def parse(cls, value: Union["PaddleEnvironment", str, None]) -> "PaddleEnvironment":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise PaddleConfigError(
            f"environment must be one of {[e.value for e in cls]}, got {value!r}"
        )


# ----------------------------- config -----------------------------

@dataclass(frozen=True)
class PaddleConfig:
    """
    Immutable client configuration.

    Credentials are always passed explicitly; only `from_env()` reads
    the process environment (and a `.env` file, if present).
    """

    api_key: str
    vendor_id: str
    environment: PaddleEnvironment = PaddleEnvironment.PRODUCTION

    # Routing / network
    base_url: Optional[str] = None  # None -> derived from environment
    timeout: float = DEFAULT_TIMEOUT

    # Diagnostics
    debug: bool = False

    def __post_init__(self) -> None:
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "environment", PaddleEnvironment.parse(self.environment))
        object.__setattr__(
            self,
            "base_url",
            _normalize_base_url(self.base_url) or self.environment.base_url,
        )
        try:
            object.__setattr__(self, "timeout", float(self.timeout))
        except (TypeError, ValueError):
            raise PaddleConfigError(f"timeout must be a number of seconds, got {self.timeout!r}")
        object.__setattr__(self, "debug", bool(self.debug))

    # -------- validation & utils --------
    def validate(self) -> "PaddleConfig":
        """Fail fast when the vendor credentials are missing."""
        if not isinstance(self.api_key, str) or not self.api_key.strip():
            dprint("Config validation failed: api_key missing")
            raise PaddleConfigError("api_key is required and must be a non-empty string.")
        if not isinstance(self.vendor_id, str) or not self.vendor_id.strip():
            dprint("Config validation failed: vendor_id missing")
            raise PaddleConfigError("vendor_id is required and must be a non-empty string.")
        dprint("Config validation OK", self.masked())
        return self

    def masked(self) -> dict:
        """Return a sanitized dict for logging/diagnostics."""
        return {
            "api_key": _mask(self.api_key),
            "vendor_id": self.vendor_id,
            "environment": self.environment.value,
            "base_url": self.base_url,
            "timeout": self.timeout,
            "debug": self.debug,
        }

    def copy_with(self, **changes: Any) -> "PaddleConfig":
        """Create a modified copy (handy in tests)."""
        if "environment" in changes and "base_url" not in changes:
            # a new environment means a new default base URL
            changes["base_url"] = None
        return replace(self, **changes)

    # -------- alt constructors --------
    @classmethod
    def from_env(cls) -> "PaddleConfig":
        """
        Build config from PADDLE_* environment variables (.env considered).

          PADDLE_API_KEY, PADDLE_VENDOR_ID   required
          PADDLE_ENVIRONMENT                 sandbox | production (default)
          PADDLE_BASE_URL                    optional override
          PADDLE_TIMEOUT                     seconds (default 30)
          PADDLE_DEBUG                       1/0
        """
        load_dotenv()
        env = os.environ
        cfg = cls(
            api_key=env.get("PADDLE_API_KEY", ""),
            vendor_id=env.get("PADDLE_VENDOR_ID", ""),
            environment=env.get("PADDLE_ENVIRONMENT", PaddleEnvironment.PRODUCTION.value),
            base_url=env.get("PADDLE_BASE_URL"),
            timeout=_parse_float(env.get("PADDLE_TIMEOUT"), DEFAULT_TIMEOUT),
            debug=_parse_bool(env.get("PADDLE_DEBUG"), False),
        )
        return cfg.validate()


__all__ = [
    "PaddleEnvironment",
    "PaddleConfig",
    "SANDBOX_BASE_URL",
    "PRODUCTION_BASE_URL",
]
