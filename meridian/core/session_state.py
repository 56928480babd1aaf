"""Session State - the authenticated-state record held for the life of the client.

Invariants:
    - A Session always has credential material; "no session" is None, never an
      empty Session
    - expires_at is fixed at creation (no renewal) and timezone-aware (UTC)
    - is_past_expiry() reports clock state only; it never decides is_active()

Design Decisions:
    - Frozen dataclass: SessionStore swaps the whole record on create/destroy,
      so a reader holding a reference always sees one consistent session
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from meridian.core.domain_types import CredentialMaterial
from meridian.schemas.user import UserProfile


@dataclass(frozen=True)
class Session:
    credential: CredentialMaterial
    expires_at: datetime
    profile: UserProfile | None = None

    @classmethod
    def start(
        cls,
        credential: CredentialMaterial,
        profile: UserProfile | None,
        timeout_seconds: float,
        now: datetime | None = None,
    ) -> "Session":
        now = now or datetime.now(timezone.utc)
        return cls(
            credential=credential,
            expires_at=now + timedelta(seconds=timeout_seconds),
            profile=profile,
        )

    def remaining_seconds(self, now: datetime | None = None) -> float:
        now = now or datetime.now(timezone.utc)
        return max(0.0, (self.expires_at - now).total_seconds())

    def is_past_expiry(self, now: datetime | None = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return now >= self.expires_at
