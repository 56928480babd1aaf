"""Banking API - endpoint helpers against the stub backend.

Invariants:
    - Each helper hits its documented path and passes payloads through
    - find_by_username normalizes list results to one user or None
"""

from meridian.core.domain_types import OpaqueToken, UsernamePassword
from meridian.core.outcomes import AuthExpired, HttpError, Success
from meridian.schemas.auth import AuthTokenResponse

from tests.services.conftest import ALICE_PASSWORD


async def test_authenticate_returns_token_response(meridian):
    outcome = await meridian.api.authenticate("alice", ALICE_PASSWORD)
    assert isinstance(outcome, Success)
    assert isinstance(outcome.payload, AuthTokenResponse)
    assert outcome.payload.user["username"] == "alice"


async def test_authenticate_with_wrong_password_is_http_401(meridian):
    outcome = await meridian.api.authenticate("alice", "wrong-password")
    assert outcome == HttpError(401, "Invalid credentials")


async def test_get_me_and_get_by_id(meridian):
    meridian.session_store.create(UsernamePassword("alice", ALICE_PASSWORD))
    me = await meridian.api.users.get_me()
    assert me.payload["username"] == "alice"
    by_id = await meridian.api.users.get_by_id(me.payload["id"])
    assert by_id.payload == me.payload


async def test_get_by_id_missing_user_surfaces_message(meridian):
    meridian.session_store.create(UsernamePassword("alice", ALICE_PASSWORD))
    outcome = await meridian.api.users.get_by_id(999)
    assert outcome == HttpError(404, "User not found")


async def test_find_by_username_returns_single_user_or_none(meridian):
    meridian.session_store.create(UsernamePassword("alice", ALICE_PASSWORD))
    found = await meridian.api.users.find_by_username("alice")
    assert found.payload["username"] == "alice"
    missing = await meridian.api.users.find_by_username("nobody")
    assert missing == Success(None)


async def test_find_by_username_encodes_query(meridian, backend_state):
    backend_state.add_user("a&b c", "pw")
    meridian.session_store.create(UsernamePassword("alice", ALICE_PASSWORD))
    found = await meridian.api.users.find_by_username("a&b c")
    assert found.payload["username"] == "a&b c"
    method, path, _ = backend_state.requests[-1]
    assert (method, path) == ("GET", "/users")


async def test_accounts_create_and_list(meridian):
    meridian.session_store.create(UsernamePassword("alice", ALICE_PASSWORD))
    created = await meridian.api.accounts.create(1, {"accountType": "SAVINGS"})
    assert created.payload["accountType"] == "SAVINGS"
    listed = await meridian.api.accounts.get_by_user_id(1)
    assert listed == Success([created.payload])


async def test_get_all_users_passes_payload_through(meridian):
    meridian.session_store.create(UsernamePassword("alice", ALICE_PASSWORD))
    outcome = await meridian.api.users.get_all()
    assert [u["username"] for u in outcome.payload] == ["alice"]
    assert "password" not in outcome.payload[0]


async def test_create_user_duplicate_reports_backend_error(meridian):
    outcome = await meridian.api.users.create(
        {"username": "alice", "password": "x", "firstName": "A", "lastName": "S"},
    )
    assert outcome == HttpError(409, "Username already exists")


async def test_revoked_token_expires_session(meridian, backend_state):
    token = (await meridian.api.authenticate("alice", ALICE_PASSWORD)).payload.token
    meridian.session_store.create(OpaqueToken(token))
    backend_state.revoke_tokens()

    outcome = await meridian.api.users.get_me()

    assert isinstance(outcome, AuthExpired)
    assert not meridian.session_store.is_active()
