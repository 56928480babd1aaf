"""Auth Flows - login, logout and signup as the entry pages drive them.

Invariants:
    - Form input validated before any request; first failing field reported
    - Exactly one SessionStore.create() per successful login, with the profile
      when one could be obtained
    - A missing profile never fails a login (GET /users/me is best-effort)
    - Successful login navigates to the dashboard; successful signup to login
    - ResponseParseError propagates (contract violation, already logged by the gateway)

Design Decisions:
    - Protocol chosen by configuration (token exchange or basic auth): which one
      the backend treats as authoritative is unresolved, CredentialMaterial
      carries either
    - Basic login probes find_by_username with the candidate credential in
      extra_headers: no session exists yet, so the gateway would send none
"""

import logging
from dataclasses import dataclass

from pydantic import ValidationError

from meridian.core.domain_types import (
    AuthProtocol, CredentialMaterial, OpaqueToken, Page, UsernamePassword,
)
from meridian.core.outcomes import HttpError, RequestOutcome, Success
from meridian.schemas.forms import LoginForm, SignupForm, first_form_error
from meridian.schemas.user import UserProfile
from meridian.services.banking_api import BankingApi
from meridian.services.session_store import SessionStore

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid username or password"


@dataclass
class FlowResult:
    """What a form page needs to render after submit."""
    success: bool
    error: str | None = None
    field: str | None = None
    profile: UserProfile | None = None


def _failure(outcome: RequestOutcome) -> FlowResult:
    return FlowResult(success=False, error=outcome.error_message)


class LoginFlow:
    """Login page logic: redirect when already signed in, sign in, sign out."""

    def __init__(
        self,
        api: BankingApi,
        session_store: SessionStore,
        protocol: AuthProtocol | None = None,
    ):
        self.api = api
        self.session_store = session_store
        self.protocol = protocol or session_store.settings.auth_protocol

    def redirect_if_authenticated(self) -> bool:
        if self.session_store.is_active():
            self.session_store.navigator.navigate(Page.DASHBOARD)
            return True
        return False

    async def login(self, username: str, password: str) -> FlowResult:
        try:
            form = LoginForm(username=username, password=password)
        except ValidationError as e:
            err = first_form_error(e)
            return FlowResult(success=False, error=err.message, field=err.field)

        if self.protocol is AuthProtocol.TOKEN:
            exchanged = await self._exchange_token(form)
        else:
            exchanged = await self._verify_basic(form)
        if isinstance(exchanged, FlowResult):
            logger.info(f"Login failed ({self.protocol.value}): {exchanged.error}")
            return exchanged

        credential, profile = exchanged
        if profile is None:
            profile = await self._fetch_profile(credential)
        self.session_store.create(credential, profile)
        self.session_store.navigator.navigate(Page.DASHBOARD)
        return FlowResult(success=True, profile=profile)

    def logout(self) -> None:
        self.session_store.logout()

    async def _exchange_token(
        self, form: LoginForm,
    ) -> tuple[CredentialMaterial, UserProfile | None] | FlowResult:
        outcome = await self.api.authenticate(form.username, form.password)
        if not isinstance(outcome, Success):
            return self._login_failure(outcome)
        payload = outcome.payload
        return OpaqueToken(payload.token), UserProfile.from_user_payload(payload.user)

    async def _verify_basic(
        self, form: LoginForm,
    ) -> tuple[CredentialMaterial, UserProfile | None] | FlowResult:
        credential = UsernamePassword(form.username, form.password)
        outcome = await self.api.users.find_by_username(
            form.username,
            extra_headers={"Authorization": credential.authorization_header()},
        )
        if not isinstance(outcome, Success):
            return self._login_failure(outcome)
        if outcome.payload is None:
            return FlowResult(success=False, error=INVALID_CREDENTIALS_MESSAGE)
        return credential, UserProfile.from_user_payload(outcome.payload)

    async def _fetch_profile(self, credential: CredentialMaterial) -> UserProfile | None:
        outcome = await self.api.users.get_me(
            extra_headers={"Authorization": credential.authorization_header()},
        )
        if isinstance(outcome, Success):
            return UserProfile.from_user_payload(outcome.payload)
        logger.info(f"Profile unavailable after login: {outcome.error_message}")
        return None

    @staticmethod
    def _login_failure(outcome: RequestOutcome) -> FlowResult:
        # A rejected credential exchange is a bad password, not an expired session
        if outcome.requires_login or (
            isinstance(outcome, HttpError) and outcome.status_code == 401
        ):
            return FlowResult(success=False, error=INVALID_CREDENTIALS_MESSAGE)
        return _failure(outcome)


class SignupFlow:
    """Signup page logic: create the user, then send them to login."""

    def __init__(self, api: BankingApi, session_store: SessionStore):
        self.api = api
        self.session_store = session_store

    def redirect_if_authenticated(self) -> bool:
        if self.session_store.is_active():
            self.session_store.navigator.navigate(Page.DASHBOARD)
            return True
        return False

    async def sign_up(
        self, first_name: str, last_name: str, username: str, password: str,
    ) -> FlowResult:
        try:
            form = SignupForm(
                first_name=first_name, last_name=last_name,
                username=username, password=password,
            )
        except ValidationError as e:
            err = first_form_error(e)
            return FlowResult(success=False, error=err.message, field=err.field)

        outcome = await self.api.users.create(form.to_user_payload())
        if outcome.requires_login:
            self.session_store.navigator.navigate(Page.LOGIN)
            return _failure(outcome)
        if not isinstance(outcome, Success):
            logger.info(f"Signup failed: {outcome.error_message}")
            return _failure(outcome)
        self.session_store.navigator.navigate(Page.LOGIN)
        return FlowResult(success=True)
