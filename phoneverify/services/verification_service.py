"""
phoneverify/services/verification_service.py

Purpose: Phone verification workflow

- Generates 6-digit codes and stores them with an expiry
- Hands the code to the SMS sender
- Checks submitted codes: single use, removed on success or expiry,
  kept on mismatch so the user can retry inside the TTL
- A new request for the same number overwrites the pending code (resend)
"""

import secrets
from datetime import datetime
from typing import Callable, Optional, Union

from phoneverify.core.config import settings
from phoneverify.core.exceptions import (
    CodeExpiredError,
    CodeMismatchError,
    CodeNotFoundError,
    DeliveryRejectedError,
    DeliverySendFailureError,
    InvalidInputError,
)
from phoneverify.core.logging import get_logger, LogContext
from phoneverify.models.verification_entry import VerificationEntry
from phoneverify.services.code_store import CodeStore, InMemoryCodeStore
from phoneverify.services.sms_sender import DeliveryFailureKind, SmsSender, create_sms_sender
from phoneverify.utils.constants import CODE_MAX, CODE_MIN, CODE_SENT_MESSAGE, CODE_VERIFIED_MESSAGE
from phoneverify.utils.sms_utils import build_verification_sms, format_e164_number
from phoneverify.utils.time_utils import calculate_code_expiry, utc_now
from phoneverify.utils.validation_utils import mask_phone_number, validate_phone_number

logger = get_logger(__name__)


def generate_verification_code() -> str:
    """
    Returns a uniformly random code in [100000, 999999] as a string.
    """
    return str(CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1))


class VerificationService:
    """Issues and checks one-time SMS verification codes."""

    def __init__(
        self,
        store: CodeStore,
        sender: SmsSender,
        ttl_seconds: int = 120,
        country_code: str = "+91",
        clock: Callable[[], datetime] = utc_now,
        code_generator: Callable[[], str] = generate_verification_code
    ):
        self.store = store
        self.sender = sender
        self.ttl_seconds = ttl_seconds
        self.country_code = country_code
        self._clock = clock
        self._generate_code = code_generator

    async def request_code(self, phone_number: Optional[str]) -> str:
        """
        Issues a new code for phone_number and sends it by SMS.

        The code is stored before the send attempt, so it stays valid until
        it expires even when delivery fails.

        Args:
            phone_number: 10-character national number

        Returns:
            Confirmation message

        Raises:
            InvalidInputError: phone number missing or not 10 characters
            DeliveryRejectedError: provider refused the recipient as unverified
            DeliverySendFailureError: any other delivery failure
        """
        if not validate_phone_number(phone_number):
            logger.info("Rejected code request with invalid phone number")
            raise InvalidInputError()

        with LogContext(phone=mask_phone_number(phone_number)):
            code = self._generate_code()
            expires_at = calculate_code_expiry(self._clock(), self.ttl_seconds)

            # Overwrites any pending code for this number
            self.store.put(phone_number, VerificationEntry(code=code, expires_at=expires_at))
            logger.info("Verification code issued", extra={"outcome": "issued"})

            result = await self.sender.send(
                format_e164_number(phone_number, self.country_code),
                build_verification_sms(code)
            )

            if result.success:
                logger.info("Verification code sent", extra={"outcome": "sent"})
                return CODE_SENT_MESSAGE

            if result.failure_kind == DeliveryFailureKind.RECIPIENT_UNVERIFIED:
                logger.warning(
                    "Recipient is not verified with the SMS provider",
                    extra={"outcome": "rejected", "provider_code": result.provider_code}
                )
                raise DeliveryRejectedError(phone_number)

            logger.error(
                f"Error sending SMS: {result.error}",
                extra={"outcome": "send_failed", "provider_code": result.provider_code}
            )
            raise DeliverySendFailureError()

    def verify_code(self, phone_number: Optional[str], code: Optional[Union[str, int]]) -> str:
        """
        Checks a submitted code against the pending one.

        Args:
            phone_number: Number the code was issued for
            code: Code typed by the user; only an identical string matches

        Returns:
            Confirmation message

        Raises:
            CodeNotFoundError: nothing pending for this number
            CodeExpiredError: pending code outlived its TTL (entry removed)
            CodeMismatchError: wrong code (entry kept)
        """
        with LogContext(phone=mask_phone_number(phone_number)):
            entry = self.store.get(phone_number) if phone_number else None

            if entry is None:
                logger.info("No pending verification code", extra={"outcome": "not_found"})
                raise CodeNotFoundError()

            if entry.is_expired(self._clock()):
                self.store.remove(phone_number)
                logger.info("Verification code expired", extra={"outcome": "expired"})
                raise CodeExpiredError()

            if code != entry.code:
                logger.info("Incorrect verification code", extra={"outcome": "mismatch"})
                raise CodeMismatchError()

            self.store.remove(phone_number)
            logger.info("Phone number verified", extra={"outcome": "verified"})
            return CODE_VERIFIED_MESSAGE

    def purge_expired(self) -> int:
        """Drops expired codes from the store."""
        return self.store.purge_expired(self._clock())


# Global service instance
_verification_service: Optional[VerificationService] = None


def get_verification_service() -> VerificationService:
    """Get or create the verification service instance."""
    global _verification_service
    if _verification_service is None:
        _verification_service = VerificationService(
            store=InMemoryCodeStore(),
            sender=create_sms_sender(settings),
            ttl_seconds=settings.CODE_TTL_SECONDS,
            country_code=settings.COUNTRY_CODE
        )
    return _verification_service
