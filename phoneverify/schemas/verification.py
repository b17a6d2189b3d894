"""
phoneverify/schemas/verification.py

Purpose: Request payload schemas for the verification endpoints

- Field names follow the public JSON contract (camelCase)
- Fields are optional here; presence and length are checked by the
  verification service so clients always get the documented messages
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Union


class SendCodeRequest(BaseModel):
    """Body of POST /send-verification-code."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"example": {"phoneNumber": "9876543210"}},
    )

    phone_number: Optional[str] = Field(
        default=None,
        alias="phoneNumber",
        description="10-digit phone number without country code"
    )


class VerifyCodeRequest(BaseModel):
    """Body of POST /verify-code."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"example": {"phoneNumber": "9876543210", "code": "482193"}},
    )

    phone_number: Optional[str] = Field(
        default=None,
        alias="phoneNumber",
        description="Phone number the code was issued for"
    )
    code: Optional[Union[str, int]] = Field(
        default=None,
        description="6-digit code received over SMS; a non-string never matches"
    )
