"""Meridian Client - composition root wiring settings, store, gateway and flows.

Invariants:
    - One SessionStore per client; every collaborator receives it by injection
    - open_client() always closes the owned HTTP client and disarms the expiry timer

Design Decisions:
    - Async context manager mirrors an app lifespan: logging configured once on
      entry, resources released on exit
    - Logging setup is opt-in (configure_logging): an embedding host usually
      owns the root logger
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator

import httpx

from meridian.config import Settings, get_settings
from meridian.core.boundary_protocols import Navigator, Notifier
from meridian.infrastructure.observability import setup_logging
from meridian.infrastructure.session_storage import SessionStorage
from meridian.infrastructure.timers import TimerScheduler
from meridian.services.auth_flows import LoginFlow, SignupFlow
from meridian.services.banking_api import BankingApi
from meridian.services.dashboard_loader import DashboardLoader
from meridian.services.request_gateway import RequestGateway
from meridian.services.session_store import SessionStore

logger = logging.getLogger(__name__)


@dataclass
class MeridianClient:
    session_store: SessionStore
    gateway: RequestGateway
    api: BankingApi
    login: LoginFlow
    signup: SignupFlow
    dashboard: DashboardLoader


def build_client(
    settings: Settings | None = None,
    storage: SessionStorage | None = None,
    scheduler: TimerScheduler | None = None,
    navigator: Navigator | None = None,
    notifier: Notifier | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> MeridianClient:
    settings = settings or get_settings()
    store = SessionStore(
        settings, storage=storage, scheduler=scheduler,
        navigator=navigator, notifier=notifier,
    )
    gateway = RequestGateway(store, settings, transport=transport)
    api = BankingApi(gateway)
    return MeridianClient(
        session_store=store,
        gateway=gateway,
        api=api,
        login=LoginFlow(api, store),
        signup=SignupFlow(api, store),
        dashboard=DashboardLoader(api, store),
    )


@asynccontextmanager
async def open_client(
    settings: Settings | None = None,
    configure_logging: bool = False,
    **overrides,
) -> AsyncIterator[MeridianClient]:
    """Build a client, restore any stored session, and clean up on exit.

    Teardown closes the HTTP client and cancels the expiry timer, but leaves
    the session in storage for the next client over the same storage.
    """
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings.log_level, settings.log_format)
    client = build_client(settings, **overrides)
    client.session_store.restore()
    logger.info(f"Meridian client started against {settings.api_base_url}")
    try:
        yield client
    finally:
        client.session_store.suspend()
        await client.gateway.aclose()
        logger.info("Meridian client closed")
