"""Banking API - typed helpers over RequestGateway for each backend endpoint.

Invariants:
    - Every helper returns the gateway's RequestOutcome unchanged, except
      find_by_username which normalizes list / object / empty to one user or None
    - Payloads are passed through opaquely (backend owns the user/account schemas)
    - Path parameters are URL-encoded; query values use encodeURIComponent rules

Design Decisions:
    - Grouped as users / accounts sub-APIs so page code reads api.users.get_me()
"""

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from meridian.core.domain_types import HttpMethod
from meridian.core.outcomes import RequestOutcome, Success
from meridian.schemas.auth import AuthTokenResponse
from meridian.services.request_gateway import RequestGateway


def _segment(value: int | str) -> str:
    return quote(str(value), safe="")


class UsersApi:
    def __init__(self, gateway: RequestGateway):
        self._gateway = gateway

    async def get_all(self) -> RequestOutcome:
        return await self._gateway.call("/users")

    async def get_by_id(self, user_id: int | str) -> RequestOutcome:
        return await self._gateway.call(f"/users/{_segment(user_id)}")

    async def create(self, user_data: dict[str, Any]) -> RequestOutcome:
        return await self._gateway.call("/users", HttpMethod.POST, body=user_data)

    async def get_me(
        self, extra_headers: Mapping[str, str] | None = None,
    ) -> RequestOutcome:
        """Current authenticated user's profile."""
        return await self._gateway.call("/users/me", extra_headers=extra_headers)

    async def find_by_username(
        self, username: str, extra_headers: Mapping[str, str] | None = None,
    ) -> RequestOutcome:
        """Query the backend for one username instead of filtering client-side.

        Success payload is the user object, or None when nothing matched.
        """
        outcome = await self._gateway.call(
            f"/users?username={_segment(username)}", extra_headers=extra_headers,
        )
        if not isinstance(outcome, Success):
            return outcome
        data = outcome.payload
        if isinstance(data, list):
            return Success(data[0] if data else None)
        return Success(data or None)


class AccountsApi:
    def __init__(self, gateway: RequestGateway):
        self._gateway = gateway

    async def get_by_user_id(self, user_id: int | str) -> RequestOutcome:
        """Success payload is a list of account objects (None on an empty body)."""
        return await self._gateway.call(
            f"/users/{_segment(user_id)}/accounts",
            payload_type=list[dict[str, Any]],
        )

    async def create(
        self, user_id: int | str, account_data: dict[str, Any],
    ) -> RequestOutcome:
        """account_data must include accountType (CHECKING, SAVINGS, ...)."""
        return await self._gateway.call(
            f"/users/{_segment(user_id)}/accounts", HttpMethod.POST, body=account_data,
        )


class BankingApi:
    """Entry point for page code: api.authenticate(), api.users, api.accounts."""

    def __init__(self, gateway: RequestGateway):
        self.gateway = gateway
        self.users = UsersApi(gateway)
        self.accounts = AccountsApi(gateway)

    async def authenticate(self, username: str, password: str) -> RequestOutcome:
        """Credential exchange. Success payload is an AuthTokenResponse."""
        return await self.gateway.call(
            "/auth", HttpMethod.POST,
            body={"username": username, "password": password},
            payload_type=AuthTokenResponse,
        )
