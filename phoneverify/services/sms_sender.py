"""
phoneverify/services/sms_sender.py

Purpose: Outbound SMS delivery

- SmsSender: provider-neutral send(to, body) capability
- TwilioSmsSender: Twilio Programmable Messaging REST API over httpx
- ConsoleSmsSender: logs messages instead of sending (local development)
- Classifies provider failures (recipient unverified vs. everything else)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import httpx

from phoneverify.core.config import Settings, settings
from phoneverify.core.logging import get_logger

logger = get_logger(__name__)


class DeliveryFailureKind(str, Enum):
    """Why a message could not be delivered."""

    RECIPIENT_UNVERIFIED = "RECIPIENT_UNVERIFIED"
    FAILED = "FAILED"


@dataclass
class SmsSendResult:
    """Outcome of a single send call."""

    success: bool
    message_sid: Optional[str] = None
    status: Optional[str] = None
    error: Optional[str] = None
    provider_code: Optional[int] = None
    failure_kind: Optional[DeliveryFailureKind] = None

    @classmethod
    def sent(cls, message_sid: Optional[str] = None, status: Optional[str] = None) -> "SmsSendResult":
        return cls(success=True, message_sid=message_sid, status=status)

    @classmethod
    def failed(
        cls,
        error: str,
        kind: DeliveryFailureKind = DeliveryFailureKind.FAILED,
        provider_code: Optional[int] = None
    ) -> "SmsSendResult":
        return cls(success=False, error=error, failure_kind=kind, provider_code=provider_code)


class SmsSender(ABC):
    """Sends a text message to an E.164 number."""

    @abstractmethod
    async def send(self, to_phone: str, message: str) -> SmsSendResult:
        ...

    def is_configured(self) -> bool:
        return True


class TwilioSmsSender(SmsSender):
    """Service for sending SMS messages via the Twilio REST API"""

    def __init__(
        self,
        account_sid: Optional[str],
        auth_token: Optional[str],
        from_number: Optional[str],
        base_url: str = "https://api.twilio.com/2010-04-01",
        unverified_error_code: int = 21608,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self.base_url = f"{base_url.rstrip('/')}/Accounts/{account_sid}"
        self.unverified_error_code = unverified_error_code
        self.timeout = timeout
        self._transport = transport

    async def send(self, to_phone: str, message: str) -> SmsSendResult:
        """
        Sends an SMS via Twilio.

        Args:
            to_phone: Recipient phone (+919876543210)
            message: Message text

        Returns:
            SmsSendResult; on failure `failure_kind` tells whether Twilio
            rejected the recipient as unverified
        """
        if not self.is_configured():
            logger.error("Twilio credentials are not configured")
            return SmsSendResult.failed("Twilio is not configured")

        url = f"{self.base_url}/Messages.json"
        data = {
            "From": self.from_number,
            "To": to_phone,
            "Body": message
        }

        try:
            logger.info("📤 Sending verification SMS via Twilio")

            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    url,
                    data=data,
                    auth=(self.account_sid, self.auth_token)
                )

            if response.status_code in (200, 201):
                result = response.json()
                logger.info(
                    "✅ SMS accepted by Twilio",
                    extra={"message_sid": result.get("sid")}
                )
                return SmsSendResult.sent(result.get("sid"), result.get("status"))

            return self._failure_from_response(response)

        except httpx.TimeoutException:
            logger.error("Twilio API timeout")
            return SmsSendResult.failed("Twilio API timeout")
        except httpx.HTTPError as e:
            logger.error(f"Twilio transport error: {e}", exc_info=True)
            return SmsSendResult.failed(str(e))

    def _failure_from_response(self, response: httpx.Response) -> SmsSendResult:
        """Maps a non-2xx Twilio response to a failed result."""
        try:
            payload = response.json()
        except ValueError:
            payload = {}

        provider_code = payload.get("code") if isinstance(payload, dict) else None
        error = (payload.get("message") if isinstance(payload, dict) else None) or response.text

        if provider_code == self.unverified_error_code:
            kind = DeliveryFailureKind.RECIPIENT_UNVERIFIED
            logger.warning(
                "Twilio rejected unverified recipient",
                extra={"provider_code": provider_code}
            )
        else:
            kind = DeliveryFailureKind.FAILED
            logger.error(
                f"❌ Twilio API error: {response.status_code} - {error}",
                extra={"provider_code": provider_code}
            )

        return SmsSendResult.failed(
            f"Twilio API error: {response.status_code} - {error}",
            kind=kind,
            provider_code=provider_code
        )

    def is_configured(self) -> bool:
        """Check if Twilio is properly configured"""
        return bool(
            self.account_sid
            and self.auth_token
            and self.from_number
            and self.account_sid != "your_twilio_sid"
        )


class ConsoleSmsSender(SmsSender):
    """Writes messages to the log instead of sending them."""

    async def send(self, to_phone: str, message: str) -> SmsSendResult:
        logger.info(f"📨 [console SMS] to={to_phone} body={message!r}")
        return SmsSendResult.sent(status="logged")


def create_sms_sender(config: Optional[Settings] = None) -> SmsSender:
    """Builds the sender selected by SMS_BACKEND."""
    config = config or settings

    if config.SMS_BACKEND == "console":
        return ConsoleSmsSender()

    return TwilioSmsSender(
        account_sid=config.TWILIO_ACCOUNT_SID,
        auth_token=config.TWILIO_AUTH_TOKEN,
        from_number=config.TWILIO_PHONE_NUMBER,
        base_url=config.TWILIO_API_BASE_URL,
        unverified_error_code=config.TWILIO_UNVERIFIED_ERROR_CODE,
        timeout=config.SMS_SEND_TIMEOUT_SECONDS
    )
