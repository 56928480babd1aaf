"""User Schemas - tests for building the cached profile from backend users."""

from meridian.schemas.user import UserProfile


def test_profile_from_full_user_payload():
    profile = UserProfile.from_user_payload(
        {"id": 7, "firstName": "Alice", "lastName": "Smith", "username": "alice"},
    )
    assert profile.id == 7
    assert profile.display_name == "Alice Smith"
    assert profile.username == "alice"


def test_display_name_falls_back_to_username_then_id():
    assert UserProfile.from_user_payload({"id": 3, "username": "bob"}).display_name == "bob"
    assert UserProfile.from_user_payload({"id": 3}).display_name == "3"


def test_payload_without_id_gives_no_profile():
    assert UserProfile.from_user_payload({"username": "bob"}) is None
    assert UserProfile.from_user_payload(None) is None
    assert UserProfile.from_user_payload([{"id": 1}]) is None


def test_profile_round_trips_through_json_dump():
    profile = UserProfile(id=1, display_name="Ann")
    assert UserProfile.model_validate(profile.model_dump(mode="json")) == profile
