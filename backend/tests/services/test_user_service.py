import pytest

from coachbook.core.exceptions import ConflictException, NotFoundException, UnauthorizedException
from coachbook.core.security import decode_access_token
from coachbook.services.user_service import UserService

from ..conftest import TEST_PASSWORD, make_user


def registration(**overrides):
    data = {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "password": "Secret123",
        "userType": "expert",
    }
    data.update(overrides)
    return data


class TestRegister:
    def test_creates_user_and_token(self, db):
        user, token = UserService(db).register(registration())

        assert user.role == "expert"
        assert user.password_hash and user.password_hash != "Secret123"
        assert decode_access_token(token)["sub"] == user.id

    def test_role_is_used_when_user_type_is_absent(self, db):
        data = registration(role="candidate")
        del data["userType"]

        user, _ = UserService(db).register(data)

        assert user.role == "candidate"

    def test_duplicate_email(self, db, test_candidate):
        with pytest.raises(ConflictException) as exc_info:
            UserService(db).register(registration(email="candidate@example.com"))
        assert exc_info.value.code == "EMAIL_EXISTS"


class TestAuthenticate:
    def test_success_stamps_last_login(self, db, test_candidate):
        user, token = UserService(db).authenticate("candidate@example.com", TEST_PASSWORD)

        assert user.id == test_candidate.id
        assert user.last_login is not None
        assert token

    @pytest.mark.parametrize(
        "email,password",
        [("candidate@example.com", "Wrong123"), ("nobody@example.com", TEST_PASSWORD)],
    )
    def test_bad_credentials(self, db, test_candidate, email, password):
        with pytest.raises(UnauthorizedException) as exc_info:
            UserService(db).authenticate(email, password)
        assert exc_info.value.code == "INVALID_CREDENTIALS"

    def test_deactivated_account(self, db, test_candidate):
        service = UserService(db)
        service.deactivate(test_candidate.id)

        with pytest.raises(UnauthorizedException) as exc_info:
            service.authenticate("candidate@example.com", TEST_PASSWORD)
        assert exc_info.value.code == "ACCOUNT_INACTIVE"


def test_update_profile_only_touches_sent_fields(db, test_expert):
    service = UserService(db)

    user = service.update_profile(test_expert.id, {"profile": {"bio": "Staff engineer"}})

    assert user.profile.bio == "Staff engineer"
    assert user.profile.hourly_rate == 90
    assert user.profile.skills == ["python", "system design"]

    user = service.update_profile(
        test_expert.id, {"profile": {"hourlyRate": 120.0, "skills": [" go ", 42]}}
    )
    assert user.profile.hourly_rate == 120
    assert user.profile.skills == ["go", "42"]


@pytest.mark.parametrize("profile", ["biography", ["bio"]])
def test_update_profile_ignores_non_object_profile(db, test_expert, profile):
    user = UserService(db).update_profile(test_expert.id, {"profile": profile})

    assert user.profile.bio == test_expert.bio
    assert user.profile.hourly_rate == 90


def test_update_profile_unknown_user(db):
    with pytest.raises(NotFoundException):
        UserService(db).update_profile("01HZX3J5K8M9N2P4Q6R7S8T9VW", {"profile": {}})


class TestExperts:
    def test_list_active_experts_best_rated_first(self, db, test_expert, test_candidate):
        make_user(db, "top@example.com", "expert", name="Top Expert", rating=4.9)
        make_user(db, "gone@example.com", "expert", name="Gone Expert", is_active=False)

        experts, total = UserService(db).list_experts(page=1, limit=10)

        assert total == 2
        assert [e.email for e in experts] == ["top@example.com", "expert@example.com"]

    def test_pagination(self, db, test_expert):
        make_user(db, "second@example.com", "expert", name="Second Expert", rating=1)

        experts, total = UserService(db).list_experts(page=2, limit=1)

        assert total == 2
        assert [e.email for e in experts] == ["expert@example.com"]

    def test_get_expert_rejects_candidates(self, db, test_expert, test_candidate):
        service = UserService(db)

        assert service.get_expert(test_expert.id).id == test_expert.id
        with pytest.raises(NotFoundException):
            service.get_expert(test_candidate.id)
