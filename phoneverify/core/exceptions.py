from typing import Optional


class VerificationError(Exception):
    """
    Base exception for the phone verification service.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500):
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(self.message)


class InvalidInputError(VerificationError):
    """
    Raised when the request carries a malformed phone number.
    """
    def __init__(self, message: str = "Invalid phone number. Please enter a 10-digit number."):
        super().__init__(message, code="INVALID_INPUT", status_code=400)


class CodeNotFoundError(VerificationError):
    """
    Raised when no code is pending for the phone number.
    """
    def __init__(self, message: str = "No verification code found for this phone number."):
        super().__init__(message, code="NOT_FOUND", status_code=400)


class CodeExpiredError(VerificationError):
    """
    Raised when the pending code outlived its TTL.
    """
    def __init__(self, message: str = "Verification code has expired. Please request a new code."):
        super().__init__(message, code="EXPIRED", status_code=400)


class CodeMismatchError(VerificationError):
    """
    Raised when the submitted code differs from the pending one.
    """
    def __init__(self, message: str = "Incorrect verification code."):
        super().__init__(message, code="MISMATCH", status_code=400)


class DeliveryRejectedError(VerificationError):
    """
    Raised when the SMS provider refuses the recipient.
    """
    def __init__(self, phone_number: str, message: Optional[str] = None):
        self.phone_number = phone_number
        message = message or f"The number {phone_number} is unverified. Please verify the number first."
        super().__init__(message, code="DELIVERY_REJECTED", status_code=400)


class DeliverySendFailureError(VerificationError):
    """
    Raised when an SMS could not be sent for any other reason.
    """
    def __init__(self, message: str = "Failed to send verification code. Please try again."):
        super().__init__(message, code="DELIVERY_FAILED", status_code=500)
