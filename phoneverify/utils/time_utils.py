"""
phoneverify/utils/time_utils.py

Purpose: Time and expiry helpers

- Timezone-aware "now"
- Verification code expiry calculations
"""

from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """
    Returns the current time as a timezone-aware UTC datetime.
    """
    return datetime.now(timezone.utc)


def calculate_code_expiry(issued_at: datetime, ttl_seconds: int = 120) -> datetime:
    """
    Calculates the absolute expiry timestamp of a verification code.
    """
    return issued_at + timedelta(seconds=ttl_seconds)


def is_code_expired(expires_at: datetime, now: datetime) -> bool:
    """
    Checks if a code has expired. A code is still valid at the exact
    expiry instant.
    """
    return now > expires_at
