"""Session Store - single owner of the login session and its expiry timer.

Invariants:
    - At most one expiry timer is armed; create() cancels the previous one first
    - A superseded or cancelled timer never notifies (generation check under lock)
    - is_active() is true iff credential material is present; expires_at is NOT
      compared against the wall clock on reads (expiry is the timer's job)
    - destroy() is idempotent and also disarms the timer
    - create/destroy/timer-fire are serialized by one RLock; reads take no lock
      and see one whole Session reference
    - The expiry notice runs outside the lock; a create() made while it is
      showing survives the expiry that raised it

Design Decisions:
    - Write-through to SessionStorage: a store rebuilt over the same storage
      (page reload in the same tab) can restore() the session
    - Notification and navigation happen outside the lock: the notifier may
      block, and the navigator may call back into read-only queries of this store
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone

from pydantic import ValidationError

from meridian.config import Settings, get_settings
from meridian.core.boundary_protocols import Navigator, Notifier
from meridian.core.domain_types import (
    CredentialMaterial, GuardDecision, OpaqueToken, Page, UsernamePassword,
)
from meridian.core.session_state import Session
from meridian.infrastructure.session_storage import (
    MemorySessionStorage, SessionStorage, get_json, set_json,
)
from meridian.infrastructure.timers import (
    LoopTimerScheduler, TimerHandle, TimerScheduler,
)
from meridian.schemas.user import UserProfile
from meridian.services.navigation import PageNavigator

logger = logging.getLogger(__name__)

EXPIRY_NOTICE = "Your session has expired. Please login again."


def log_expiry_notice(message: str) -> None:
    """Default notifier - a WARNING log line, so expiry is never silent."""
    logger.warning(message)


class SessionStore:
    """Durable (client-lifetime) storage and lifecycle control of the Session."""

    def __init__(
        self,
        settings: Settings | None = None,
        storage: SessionStorage | None = None,
        scheduler: TimerScheduler | None = None,
        navigator: Navigator | None = None,
        notifier: Notifier | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.settings = settings or get_settings()
        self.navigator = navigator or PageNavigator()
        self._storage = storage if storage is not None else MemorySessionStorage()
        self._scheduler = scheduler or LoopTimerScheduler()
        self._notify = notifier or log_expiry_notice
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._lock = threading.RLock()
        self._session: Session | None = None
        self._timer: TimerHandle | None = None
        self._timer_generation = 0

    # ─── Lifecycle ───────────────────────────────────────────────

    def create(
        self, credential: CredentialMaterial, profile: UserProfile | None = None,
    ) -> None:
        """Persist a new session and (re)arm the expiry timer."""
        with self._lock:
            self._cancel_timer()
            session = Session.start(
                credential, profile,
                self.settings.session_timeout_seconds, now=self._clock(),
            )
            self._clear_storage()
            self._persist(session)
            self._session = session
            self._arm_timer(self.settings.session_timeout_seconds)
        logger.info(
            f"Session created ({type(credential).__name__}), "
            f"expires at {session.expires_at.isoformat()}",
        )

    def destroy(self) -> None:
        """Clear all session fields. Safe to call when already empty."""
        with self._lock:
            had_session = self._session is not None
            self._cancel_timer()
            self._session = None
            self._clear_storage()
        if had_session:
            logger.info("Session destroyed")

    def restore(self) -> bool:
        """Rehydrate a session left in storage. Returns True if one was restored."""
        with self._lock:
            session = self._load_persisted()
            if session is None:
                self._clear_storage()
                return False
            self._cancel_timer()
            self._session = session
            self._arm_timer(session.remaining_seconds(now=self._clock()))
        logger.info("Session restored from storage")
        return True

    def suspend(self) -> None:
        """Disarm the timer but keep the persisted session (client shutdown)."""
        with self._lock:
            self._cancel_timer()

    def attach_profile(
        self, profile: UserProfile, credential: CredentialMaterial,
    ) -> bool:
        """Cache a late-fetched profile on the session it was fetched for.

        Ignored (returns False) when that session has since been replaced or
        destroyed. Expiry and the armed timer are left untouched.
        """
        with self._lock:
            session = self._session
            if session is None or session.credential != credential:
                return False
            self._session = replace(session, profile=profile)
            set_json(self._storage, self.settings.user_key, profile.model_dump(mode="json"))
        return True

    def logout(self) -> None:
        """Destroy the session and return to the entry page."""
        self.destroy()
        self.navigator.navigate(Page.LOGIN)

    # ─── Queries ─────────────────────────────────────────────────

    def snapshot(self) -> Session | None:
        return self._session

    def current_credential(self) -> CredentialMaterial | None:
        session = self._session
        return session.credential if session is not None else None

    def current_profile(self) -> UserProfile | None:
        session = self._session
        return session.profile if session is not None else None

    @property
    def expires_at(self) -> datetime | None:
        session = self._session
        return session.expires_at if session is not None else None

    def is_active(self) -> bool:
        return self._session is not None

    def guard(self) -> GuardDecision:
        """REDIRECT means: stop initializing and navigate to the entry page."""
        return GuardDecision.ALLOW if self.is_active() else GuardDecision.REDIRECT

    def require_auth(self) -> GuardDecision:
        """guard() plus the navigation a protected page performs on REDIRECT."""
        decision = self.guard()
        if decision is GuardDecision.REDIRECT:
            self.navigator.navigate(Page.LOGIN)
        return decision

    # ─── Expiry timer ────────────────────────────────────────────

    def _arm_timer(self, delay_seconds: float) -> None:
        self._timer_generation += 1
        generation = self._timer_generation
        self._timer = self._scheduler.schedule(
            delay_seconds, lambda: self._on_timer_fired(generation),
        )

    def _cancel_timer(self) -> None:
        # Bumping the generation also neutralizes a callback already in flight
        self._timer_generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timer_fired(self, generation: int) -> None:
        with self._lock:
            if generation != self._timer_generation or self._session is None:
                return
            self._timer = None
        # The notifier may block on user acknowledgement
        self._notify(EXPIRY_NOTICE)
        with self._lock:
            if generation != self._timer_generation:
                # A create() or destroy() landed while the notice was up
                return
            self.destroy()
        self.navigator.navigate(Page.LOGIN)

    # ─── Persistence ─────────────────────────────────────────────

    def _persist(self, session: Session) -> None:
        s = self.settings
        credential = session.credential
        if isinstance(credential, OpaqueToken):
            self._storage.set_item(s.token_key, credential.token)
        else:
            set_json(self._storage, s.credentials_key, {
                "username": credential.username,
                "password": credential.password,
            })
        if session.profile is not None:
            set_json(self._storage, s.user_key, session.profile.model_dump(mode="json"))
        self._storage.set_item(s.expires_key, session.expires_at.isoformat())

    def _clear_storage(self) -> None:
        s = self.settings
        for key in (s.token_key, s.credentials_key, s.user_key, s.expires_key):
            self._storage.remove_item(key)

    def _load_persisted(self) -> Session | None:
        s = self.settings
        credential: CredentialMaterial | None = None
        token = self._storage.get_item(s.token_key)
        if token:
            credential = OpaqueToken(token)
        else:
            pair = get_json(self._storage, s.credentials_key)
            if isinstance(pair, dict) and pair.get("username") and "password" in pair:
                credential = UsernamePassword(pair["username"], pair["password"])
        if credential is None:
            return None

        raw_expiry = self._storage.get_item(s.expires_key)
        try:
            expires_at = datetime.fromisoformat(raw_expiry) if raw_expiry else None
        except ValueError:
            expires_at = None
        if expires_at is None:
            logger.warning("Persisted session has no readable expiry, discarding")
            return None

        profile = None
        profile_data = get_json(self._storage, s.user_key)
        if isinstance(profile_data, dict):
            try:
                profile = UserProfile.model_validate(profile_data)
            except ValidationError:
                logger.warning("Persisted profile is unreadable, restoring without it")
        return Session(credential=credential, expires_at=expires_at, profile=profile)
