"""Service test fixtures - stub backend + fully wired client.

Invariants:
    - Every test gets a fresh BackendState with one seeded user (alice / Password1!)
    - The client shares the root fixtures' storage, scheduler, navigator and notices
"""

import pytest

from meridian.client import build_client

from tests.services.stub_backend import build_stub_backend, stub_transport

ALICE_PASSWORD = "Password1!"


@pytest.fixture
def backend():
    app, state = build_stub_backend()
    state.add_user("alice", ALICE_PASSWORD, "Alice", "Smith")
    return app, state


@pytest.fixture
def backend_state(backend):
    return backend[1]


@pytest.fixture
async def meridian(backend, settings, storage, scheduler, navigator, notices):
    app, _ = backend
    client = build_client(
        settings, storage=storage, scheduler=scheduler,
        navigator=navigator, notifier=notices.append,
        transport=stub_transport(app),
    )
    yield client
    await client.gateway.aclose()
