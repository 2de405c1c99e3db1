"""Shared validation utilities"""

from datetime import datetime, timezone
from typing import Optional

MSG_PAYMENT_MISSING = "Either hourly rate or full gig amount must be provided"
MSG_PAYMENT_BOTH = "Cannot provide both hourly rate and full gig amount"


def utcnow() -> datetime:
    """Current time as a naive UTC datetime, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive UTC; naive values are assumed to be UTC already."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def validate_payment_option(hourly_rate, full_gig_amount) -> None:
    """
    Enforce that exactly one payment term is present.

    Shared by gigs and proposals; an artist counter-offer follows the same
    rule as the venue's posting.

    Raises:
        ValueError: If neither or both are provided
    """
    has_hourly_rate = hourly_rate is not None
    has_full_amount = full_gig_amount is not None

    if not has_hourly_rate and not has_full_amount:
        raise ValueError(MSG_PAYMENT_MISSING)
    if has_hourly_rate and has_full_amount:
        raise ValueError(MSG_PAYMENT_BOTH)


def validate_length(value: Optional[str], label: str, min_length: int, max_length: int) -> str:
    """
    Trim a required string and check its length.

    Raises:
        ValueError: If the value is empty or outside the bounds
    """
    value = (value or "").strip()
    if not value:
        raise ValueError(f"{label} is required")
    if not min_length <= len(value) <= max_length:
        raise ValueError(f"{label} must be between {min_length} and {max_length} characters")
    return value


def format_duration(seconds: int) -> str:
    """Format a duration in seconds as HH:MM:SS."""
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
