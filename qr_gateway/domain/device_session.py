"""
Device Session - authentication session opened with the payment provider.

A session pairs a locally generated id with the bearer token issued by
the provider and the window during which that token is valid. Expiry is
evaluated on read; nothing evicts sessions in the background.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from configs import DEFAULT_SESSION_EXPIRES_IN
from core.exceptions import ValidationError


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


def format_timestamp(timestamp_ms: int) -> str:
    """Format epoch milliseconds as ISO-8601 UTC, e.g. 2025-01-01T00:00:00.000Z."""
    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class DeviceSession:
    """
    Immutable device session.

    Build instances with create_new() or from_storage(); both enforce the
    required fields.

    Attributes:
        session_id: Unique local identifier (UUID4).
        token: Bearer token issued by the provider.
        created_at: Creation time in epoch milliseconds.
        expires_in: Validity window in seconds.
    """

    session_id: str
    token: str
    created_at: int
    expires_in: int = DEFAULT_SESSION_EXPIRES_IN

    @classmethod
    def create_new(cls, token: str) -> DeviceSession:
        """
        Create a brand new session for a freshly issued token.

        Args:
            token: Token returned by the provider.

        Returns:
            Session with a generated id, created now, with the default expiry.

        Raises:
            ValidationError: If the token is empty.
        """
        if not token:
            raise ValidationError("Token is required")
        return cls(
            session_id=str(uuid.uuid4()),
            token=token,
            created_at=now_ms(),
        )

    @classmethod
    def from_storage(
        cls,
        session_id: str,
        token: str,
        created_at: Optional[int] = None,
        expires_in: Optional[int] = None,
    ) -> DeviceSession:
        """
        Rebuild a session read back from a store.

        A falsy created_at (missing or 0) is replaced by the current time, so
        such a record comes back as a fresh session.

        Raises:
            ValidationError: If session_id or token is empty.
        """
        if not session_id:
            raise ValidationError("Session ID is required")
        if not token:
            raise ValidationError("Token is required")
        return cls(
            session_id=session_id,
            token=token,
            created_at=int(created_at) if created_at else now_ms(),
            expires_in=DEFAULT_SESSION_EXPIRES_IN if expires_in is None else int(expires_in),
        )

    @property
    def expiration_timestamp(self) -> int:
        """Get the expiration instant in epoch milliseconds."""
        return self.created_at + self.expires_in * 1000

    @property
    def expires_at(self) -> str:
        """Get the expiration instant as an ISO-8601 string."""
        return format_timestamp(self.expiration_timestamp)

    def is_expired(self, now: Optional[int] = None) -> bool:
        """
        Check whether the token is no longer valid.

        The expiration instant itself already counts as expired.

        Args:
            now: Reference time in epoch milliseconds (defaults to the clock).
        """
        current = now_ms() if now is None else now
        return current >= self.expiration_timestamp

    def time_remaining(self, now: Optional[int] = None) -> int:
        """Get whole seconds left before expiry, never negative."""
        current = now_ms() if now is None else now
        return max(0, (self.expiration_timestamp - current) // 1000)

    def to_storage(self) -> dict[str, Any]:
        """Convert to the persisted representation."""
        return {
            "sessionId": self.session_id,
            "token": self.token,
            "createdAt": self.created_at,
            "expiresIn": self.expires_in,
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        result = self.to_storage()
        result["expiresAt"] = self.expires_at
        result["isExpired"] = self.is_expired()
        return result
