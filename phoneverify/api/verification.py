"""
phoneverify/api/verification.py

Purpose: Phone verification endpoints

- POST /send-verification-code: issue a code and send it by SMS
- POST /verify-code: check a submitted code
- Errors are raised by the service and rendered by core/errors.py
"""

from fastapi import APIRouter, Depends

from phoneverify.schemas.response import MessageResponse
from phoneverify.schemas.verification import SendCodeRequest, VerifyCodeRequest
from phoneverify.services.verification_service import VerificationService, get_verification_service

router = APIRouter()


@router.post("/send-verification-code", response_model=MessageResponse)
async def send_verification_code(
    request: SendCodeRequest,
    service: VerificationService = Depends(get_verification_service)
):
    """
    Sends a 6-digit verification code to the given 10-digit number.
    The code is valid for two minutes; requesting again replaces it.
    """
    message = await service.request_code(request.phone_number)
    return MessageResponse(message=message)


@router.post("/verify-code", response_model=MessageResponse)
async def verify_code(
    request: VerifyCodeRequest,
    service: VerificationService = Depends(get_verification_service)
):
    """
    Verifies a code previously sent to the number. A code can be used once.
    """
    message = service.verify_code(request.phone_number, request.code)
    return MessageResponse(message=message)
