"""
phoneverify/models/verification_entry.py

Purpose: Pending verification code model

- The 6-digit code issued to a phone number
- Absolute expiry timestamp (UTC)
"""

from dataclasses import dataclass
from datetime import datetime

from phoneverify.utils.time_utils import is_code_expired


@dataclass(frozen=True)
class VerificationEntry:
    """A code waiting to be verified."""
    code: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """The entry is still valid at the exact expiry instant."""
        return is_code_expired(self.expires_at, now)
