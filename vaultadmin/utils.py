"""
Unit conversion helpers for billing data.
"""

from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from vaultadmin.constants import (
    BYTES_PER_GIGABYTE,
    CURRENCY_QUANTUM,
    MINOR_UNITS_PER_MAJOR,
    STORAGE_UNITS,
)


def readable_bytes_size(size: int) -> str:
    """
    Format a byte count for humans, e.g. ``1536 -> "1.5 KB"``.

    Uses powers of 1024, at most two decimals and thousands separators.
    """
    if size <= 0:
        return f"0 {STORAGE_UNITS[0]}"

    digit_groups = 0
    while (
        digit_groups < len(STORAGE_UNITS) - 1
        and size >= 1024 ** (digit_groups + 1)
    ):
        digit_groups += 1

    value = Decimal(size) / (Decimal(1024) ** digit_groups)
    value = value.quantize(CURRENCY_QUANTUM, rounding=ROUND_HALF_UP)
    formatted = f"{value:,.2f}".rstrip("0").rstrip(".")
    return f"{formatted} {STORAGE_UNITS[digit_groups]}"


def bytes_to_gigabytes(size: Optional[int]) -> float:
    """Convert bytes to GB rounded to 2 decimals; unset usage counts as 0."""
    if size is None:
        return 0.0
    return round(size / BYTES_PER_GIGABYTE, 2)


def minor_units_to_decimal(amount: Optional[int]) -> Decimal:
    """Convert Stripe integer minor units to a currency amount (1999 -> 19.99)."""
    if amount is None:
        return Decimal("0.00")
    return (Decimal(amount) / MINOR_UNITS_PER_MAJOR).quantize(
        CURRENCY_QUANTUM, rounding=ROUND_HALF_UP
    )


def from_unix_timestamp(value) -> Optional[datetime]:
    """Convert Stripe unix seconds to an aware UTC datetime, keeping None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromtimestamp(value, tz=timezone.utc)


def stripe_field(record, key: str, default=None):
    """
    Read ``key`` from a Stripe record, returning ``default`` when it is absent.

    ``StripeObject`` is not a dict and has no ``.get()``; membership and item
    access work on it and on plain dicts alike.
    """
    if record is None or key not in record:
        return default
    return record[key]
