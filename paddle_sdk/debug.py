from __future__ import annotations
import os
import json
import datetime
from typing import Any, Dict, Mapping, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

# ------------------------------------------------------------------------------
# Debug flag: PADDLE_DEBUG=1 turns tracing on, set_debug() flips it at runtime
# ------------------------------------------------------------------------------
_FALSY = ("0", "false", "no", "off", "")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() not in _FALSY


_DEBUG_ENABLED = _env_flag("PADDLE_DEBUG", "0")

def is_enabled() -> bool:
    return _DEBUG_ENABLED

def set_debug(enabled: bool) -> None:
    """Enable/disable debug printing at runtime."""
    global _DEBUG_ENABLED
    _DEBUG_ENABLED = bool(enabled)

# ------------------------------------------------------------------------------
# Masking of vendor credentials, license keys and webhook signatures
# ------------------------------------------------------------------------------
SENSITIVE_PARAM_KEYS = {"vendor_auth_code", "api_key"}
PARTIAL_MASK_KEYS = {"license_code", "p_signature"}

MAX_JSON_CHARS = int(os.getenv("PADDLE_DEBUG_MAX_JSON", "50000"))

def _ts() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")

def mask_value(val: Optional[str]) -> Optional[str]:
    """Keep a short prefix/suffix of a license key or signature so log lines can be correlated."""
    if val is None:
        return None
    if len(val) <= 6:
        return "***"
    return f"{val[:3]}...{val[-2:]}"

def _scrub_one(key: str, value: Any) -> Any:
    lk = key.lower()
    if lk in SENSITIVE_PARAM_KEYS:
        return "***"
    if lk in PARTIAL_MASK_KEYS:
        return mask_value(str(value)) or "***"
    if isinstance(value, Mapping):
        return scrub_params(value)
    return value

def scrub_params(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Sanitized copy of query/form fields (or a webhook form) for safe logging.
    Nested mappings are scrubbed too.
    """
    return {k: _scrub_one(str(k), v) for k, v in (params or {}).items()}

def scrub_url(url: str) -> str:
    """Mask credential query parameters inside a full URL."""
    parts = urlsplit(url)
    if not parts.query:
        return url
    query = [(k, _scrub_one(k, v)) for k, v in parse_qsl(parts.query, keep_blank_values=True)]
    return urlunsplit(parts._replace(query=urlencode(query, safe="*")))

def _render(data: Any) -> str:
    try:
        s = json.dumps(data, ensure_ascii=False, indent=2, default=str)
    except (TypeError, ValueError):
        s = repr(data)
    if len(s) > MAX_JSON_CHARS:
        s = s[:MAX_JSON_CHARS] + "... (truncated)"
    return s

# ------------------------------------------------------------------------------
# Printing helpers
# ------------------------------------------------------------------------------
def dprint(*args: Any, force: bool = False) -> None:
    """Print a trace line when debugging is on globally, or `force` is set by a debug-enabled client."""
    if _DEBUG_ENABLED or force:
        print("[PaddleSDK]", _ts(), *args, flush=True)

def djson(label: str, data: Any, *, force: bool = False) -> None:
    if _DEBUG_ENABLED or force:
        print("[PaddleSDK]", _ts(), f"{label}:", _render(data), flush=True)
