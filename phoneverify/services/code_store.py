"""
phoneverify/services/code_store.py

Purpose: Storage for pending verification codes

- Maps phone number -> VerificationEntry (at most one per number)
- Insert overwrites, remove is idempotent
- Time-based purge of expired entries (driven by the background sweeper)
- Process-local; contents are lost on restart
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Optional

from phoneverify.models.verification_entry import VerificationEntry
from phoneverify.core.logging import get_logger

logger = get_logger(__name__)


class CodeStore(ABC):
    """
    Key-value store for pending verification codes.

    Implementations must not evict expired entries on get(): the
    verification flow needs to see an expired entry to report it.
    """

    @abstractmethod
    def put(self, phone_number: str, entry: VerificationEntry) -> None:
        """Insert or overwrite the entry for phone_number."""

    @abstractmethod
    def get(self, phone_number: str) -> Optional[VerificationEntry]:
        """Return the entry for phone_number, or None."""

    @abstractmethod
    def remove(self, phone_number: str) -> None:
        """Delete the entry for phone_number; no-op if absent."""

    @abstractmethod
    def purge_expired(self, now: datetime) -> int:
        """Delete every entry expired at `now`, returning how many were removed."""

    @abstractmethod
    def __len__(self) -> int:
        ...


class InMemoryCodeStore(CodeStore):
    """
    Dict-backed store.

    None of the methods await, so each call is atomic with respect to
    other requests running on the same event loop.
    """

    def __init__(self):
        self._entries: Dict[str, VerificationEntry] = {}

    def put(self, phone_number: str, entry: VerificationEntry) -> None:
        self._entries[phone_number] = entry

    def get(self, phone_number: str) -> Optional[VerificationEntry]:
        return self._entries.get(phone_number)

    def remove(self, phone_number: str) -> None:
        self._entries.pop(phone_number, None)

    def purge_expired(self, now: datetime) -> int:
        expired = [
            phone_number
            for phone_number, entry in self._entries.items()
            if entry.is_expired(now)
        ]
        for phone_number in expired:
            del self._entries[phone_number]

        if expired:
            logger.debug(f"Purged {len(expired)} expired verification codes")

        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, phone_number: str) -> bool:
        return phone_number in self._entries
