"""Auth Schemas - the credential-exchange response of POST /auth.

Invariants:
    - token is a non-empty string; user is passed through opaquely

Design Decisions:
    - AliasChoices accepts token / access_token / accessToken: the backend owns the
      field name and has not fixed it
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, Field


class AuthTokenResponse(BaseModel):
    """Success body of the credential exchange."""
    token: str = Field(
        min_length=1,
        validation_alias=AliasChoices("token", "access_token", "accessToken"),
    )
    user: dict[str, Any] | None = None
