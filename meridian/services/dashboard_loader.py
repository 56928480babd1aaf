"""Dashboard Loader - protected-page bootstrap: guard, profile, accounts.

Invariants:
    - require_auth() runs first; on REDIRECT nothing else is fetched (returns None)
    - A profile fetched from /users/me is cached on the session, so later loads
      skip the fetch
    - AuthExpired at any step navigates to login and returns None
    - Network and HTTP failures come back in DashboardView.error; the page stays
      usable and load() can simply be called again
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from meridian.core.domain_types import GuardDecision, Page
from meridian.core.outcomes import RequestOutcome
from meridian.schemas.user import UserProfile
from meridian.services.banking_api import BankingApi
from meridian.services.session_store import SessionStore

logger = logging.getLogger(__name__)

MISSING_PROFILE_MESSAGE = "User data not found. Please login again."


@dataclass
class DashboardView:
    profile: UserProfile | None
    accounts: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None

    @property
    def has_accounts(self) -> bool:
        return bool(self.accounts)


class DashboardLoader:
    def __init__(self, api: BankingApi, session_store: SessionStore):
        self.api = api
        self.session_store = session_store

    async def load(self) -> DashboardView | None:
        if self.session_store.require_auth() is GuardDecision.REDIRECT:
            return None

        session = self.session_store.snapshot()
        profile = session.profile if session is not None else None
        if profile is None:
            outcome = await self.api.users.get_me()
            if outcome.requires_login:
                return self._leave(outcome)
            if not outcome.ok:
                return DashboardView(profile=None, error=outcome.error_message)
            profile = UserProfile.from_user_payload(outcome.payload)
            if profile is None:
                return DashboardView(profile=None, error=MISSING_PROFILE_MESSAGE)
            if session is not None:
                self.session_store.attach_profile(profile, session.credential)

        outcome = await self.api.accounts.get_by_user_id(profile.id)
        if outcome.requires_login:
            return self._leave(outcome)
        if not outcome.ok:
            logger.info(f"Dashboard accounts unavailable: {outcome.error_message}")
            return DashboardView(profile=profile, error=outcome.error_message)
        return DashboardView(profile=profile, accounts=outcome.payload or [])

    def _leave(self, outcome: RequestOutcome) -> None:
        logger.info(f"Leaving dashboard: {outcome.error_message}")
        self.session_store.navigator.navigate(Page.LOGIN)
        return None
