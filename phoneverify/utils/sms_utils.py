"""
phoneverify/utils/sms_utils.py

Purpose: SMS message builders

- Formats recipient numbers to E.164
- Builds the verification SMS body
"""

VERIFICATION_SMS_TEMPLATE = "Your verification code is: {code}"


def format_e164_number(phone_number: str, country_code: str = "+91") -> str:
    """
    Prefixes a national number with its country calling code.

    Args:
        phone_number: National number, e.g. 9876543210
        country_code: Calling code with leading +, e.g. +91

    Returns:
        E.164 number, e.g. +919876543210
    """
    return f"{country_code}{phone_number}"


def build_verification_sms(code: str) -> str:
    """
    Builds the SMS body carrying a verification code.
    """
    return VERIFICATION_SMS_TEMPLATE.format(code=code)
