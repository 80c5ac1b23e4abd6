"""Pending-registration ledger — in-memory staging for OTP sign-ups.

One entry per email: the candidate account, a 6-digit code and an expiry.
A new request for the same email replaces the previous entry, so only the
most recent code is ever valid. Nothing here is persisted; a restart drops
every pending registration.

All reads and writes go through a single lock. The lock is never held while
awaiting the email sender or talking to the database.
"""

import secrets
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

import structlog

logger = structlog.get_logger(__name__)

CODE_MIN = 100000
CODE_MAX = 999999
DEFAULT_TTL = timedelta(minutes=5)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def generate_code() -> str:
    """Uniformly random 6-digit numeric code (100000-999999)."""
    return str(CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1))


@dataclass(frozen=True)
class RegistrationCandidate:
    """Account data waiting for email verification."""
    username: str
    password: str
    email: str
    full_name: Optional[str] = None
    phone: Optional[str] = None

    def as_user_fields(self) -> dict:
        return {
            "username": self.username,
            "password": self.password,
            "email": self.email,
            "full_name": self.full_name,
            "phone": self.phone,
        }


@dataclass(frozen=True)
class PendingRegistration:
    candidate: RegistrationCandidate
    code: str
    expires_at: datetime
    created_at: datetime = field(default_factory=utc_now)

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


class PendingRegistrationLedger:
    """Thread-safe map of email -> PendingRegistration."""

    def __init__(
        self,
        ttl: timedelta = DEFAULT_TTL,
        clock: Clock = utc_now,
        code_factory: Callable[[], str] = generate_code,
    ):
        self.ttl = ttl
        self._clock = clock
        self._code_factory = code_factory
        self._entries: Dict[str, PendingRegistration] = {}
        self._lock = threading.Lock()

    def now(self) -> datetime:
        return self._clock()

    def stage(self, candidate: RegistrationCandidate) -> PendingRegistration:
        """Create (or replace) the entry for the candidate's email."""
        key = normalize_email(candidate.email)
        now = self._clock()
        entry = PendingRegistration(
            candidate=candidate,
            code=self._code_factory(),
            expires_at=now + self.ttl,
            created_at=now,
        )
        with self._lock:
            replaced = key in self._entries
            self._entries[key] = entry
        logger.info("Registration staged", email=key, replaced=replaced, expires_at=entry.expires_at.isoformat())
        return entry

    def get(self, email: str) -> Optional[PendingRegistration]:
        with self._lock:
            return self._entries.get(normalize_email(email))

    def discard(self, email: str, entry: Optional[PendingRegistration] = None) -> bool:
        """Remove the entry for email.

        With `entry`, remove only if it is still the live one; a newer
        staging for the same email is left alone.
        """
        key = normalize_email(email)
        with self._lock:
            current = self._entries.get(key)
            if current is None:
                return False
            if entry is not None and current is not entry:
                return False
            del self._entries[key]
            return True

    def sweep(self) -> int:
        """Drop every expired entry. Returns the number removed."""
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.info("Expired registrations swept", removed=len(expired))
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, email: str) -> bool:
        with self._lock:
            return normalize_email(email) in self._entries
