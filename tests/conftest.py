"""Root conftest - shared fakes and fixtures for session and gateway tests.

Invariants:
    - No test touches the network: gateways use httpx.MockTransport or ASGITransport
    - No test waits on wall-clock timers: FakeScheduler fires callbacks on demand
    - Settings built explicitly, never from a developer's .env

Design Decisions:
    - Fakes as small flat classes (no mocking library): explicit, easy to debug
"""

import os

import httpx
import pytest

from meridian.config import Settings
from meridian.infrastructure.session_storage import MemorySessionStorage
from meridian.services.navigation import PageNavigator
from meridian.services.request_gateway import RequestGateway
from meridian.services.session_store import SessionStore

# Ensure tests don't pick up a real backend from the environment
os.environ.setdefault("MERIDIAN_API_BASE_URL", "http://backend.invalid")


class FakeTimer:
    def __init__(self, delay: float, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Collects scheduled callbacks; fire() runs the ones not cancelled."""

    def __init__(self):
        self.timers: list[FakeTimer] = []

    def schedule(self, delay_seconds, callback):
        timer = FakeTimer(delay_seconds, callback)
        self.timers.append(timer)
        return timer

    @property
    def armed(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def fire(self, timer: FakeTimer) -> None:
        timer.fired = True
        timer.callback()

    def fire_all(self) -> None:
        for timer in list(self.armed):
            self.fire(timer)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        api_base_url="https://api.x/",
        session_timeout_seconds=60,
        storage_namespace="meridian",
    )


@pytest.fixture
def storage():
    return MemorySessionStorage()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def navigator():
    return PageNavigator()


@pytest.fixture
def notices():
    return []


@pytest.fixture
def store(settings, storage, scheduler, navigator, notices):
    return SessionStore(
        settings, storage=storage, scheduler=scheduler,
        navigator=navigator, notifier=notices.append,
    )


@pytest.fixture
async def make_gateway(store, settings):
    """Build a gateway whose transport is the given request handler."""
    gateways = []

    def _make(handler) -> RequestGateway:
        gateway = RequestGateway(
            store, settings, transport=httpx.MockTransport(handler),
        )
        gateways.append(gateway)
        return gateway

    yield _make
    for gateway in gateways:
        await gateway.aclose()
