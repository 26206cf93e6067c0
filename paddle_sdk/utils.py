from __future__ import annotations
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, Optional

# ==============================================================================
# Form-value formatting
# ==============================================================================

def normalize_currency(code: str) -> str:
    """
    Normalize an ISO currency code to the upper-case form Paddle expects.
    """
    if not isinstance(code, str) or len(code.strip()) != 3:
        raise ValueError("currency must be a 3-letter ISO code, e.g. 'USD'.")
    return code.strip().upper()


def form_bool(value: bool) -> str:
    """Render a bool the way the vendor API reads it ("true"/"false")."""
    return "true" if value else "false"


def form_number(value: Decimal | int | float) -> str:
    """
    Render a number without float artifacts or exponent notation
    (Decimal("20") -> "20", Decimal("9.990") -> "9.990").
    """
    if isinstance(value, bool):
        raise TypeError("expected a number, got bool")
    if isinstance(value, float):
        value = Decimal(str(value))
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(int(value))


def format_date(value: Optional[date | datetime]) -> Optional[str]:
    """ISO calendar date (YYYY-MM-DD), or None when absent."""
    if value is None:
        return None
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime("%Y-%m-%d")


def join_ids(ids: Iterable[Any]) -> str:
    """Comma-join a list of ids ("1,2,3")."""
    return ",".join(str(i).strip() for i in ids)


def validate_id(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} is required and must be a non-empty string.")
    return value


__all__ = [
    "normalize_currency",
    "form_bool",
    "form_number",
    "format_date",
    "join_ids",
    "validate_id",
]
