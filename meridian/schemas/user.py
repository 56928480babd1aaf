"""User Schemas - the minimal identity the client caches for display.

Invariants:
    - UserProfile.id is always present; display_name is never empty
    - Backend user payloads are read, never validated beyond the fields used here

Design Decisions:
    - from_user_payload returns None instead of raising: a missing profile must
      not block authenticated calls
    - camelCase backend keys mapped once here, the rest of the client is snake_case
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class UserProfile(BaseModel):
    """Cached identity for UI display - not authoritative."""
    model_config = ConfigDict(frozen=True)

    id: int | str
    display_name: str
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None

    @classmethod
    def from_user_payload(cls, data: Any) -> "UserProfile | None":
        """Build from a backend user object ({id, firstName, lastName, username})."""
        if not isinstance(data, dict) or data.get("id") is None:
            return None
        first = data.get("firstName") or None
        last = data.get("lastName") or None
        username = data.get("username") or None
        full_name = " ".join(p for p in (first, last) if p)
        return cls(
            id=data["id"],
            display_name=full_name or username or str(data["id"]),
            username=username,
            first_name=first,
            last_name=last,
        )
