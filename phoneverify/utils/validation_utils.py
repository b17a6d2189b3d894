"""
phoneverify/utils/validation_utils.py

Purpose: Input validation

- Phone number length check
- Log-safe masking of phone numbers
"""

from typing import Optional

PHONE_NUMBER_LENGTH = 10


def validate_phone_number(phone: Optional[str]) -> bool:
    """
    Validates a phone number for code issuance.

    Only the length is checked (exactly 10 characters); the character set
    is not inspected.

    Args:
        phone: Phone number string

    Returns:
        True if the number has exactly 10 characters
    """
    if not phone:
        return False

    return len(phone) == PHONE_NUMBER_LENGTH


def mask_phone_number(phone: Optional[str]) -> str:
    """
    Masks all but the last four characters of a phone number for logging.

    Example:
        9876543210 -> ******3210
    """
    if not phone:
        return "<none>"

    if len(phone) <= 4:
        return "*" * len(phone)

    return "*" * (len(phone) - 4) + phone[-4:]
