from ..conftest import TEST_PASSWORD, auth_headers_for

REGISTER_URL = "/api/v1/auth/register"
LOGIN_URL = "/api/v1/auth/login"
ME_URL = "/api/v1/auth/me"


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


class TestRegister:
    def test_register(self, client):
        response = client.post(
            REGISTER_URL,
            json={
                "name": " Jane Doe ",
                "email": "Jane@Example.com",
                "password": "Secret123",
                "role": "expert",
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        user = body["data"]["user"]
        assert user["name"] == "Jane Doe"
        assert user["email"] == "jane@example.com"
        assert user["role"] == "expert"
        assert "password" not in user and "passwordHash" not in user
        assert body["data"]["token"]

    def test_every_validation_error_in_one_response(self, client):
        response = client.post(REGISTER_URL, json={"email": "nope", "password": "abc"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        assert [e["field"] for e in body["errors"]] == [
            "name",
            "email",
            "password",
            "password",
            "role",
        ]

    def test_conflicting_role(self, client):
        response = client.post(
            REGISTER_URL,
            json={
                "name": "Jane Doe",
                "email": "jane@example.com",
                "password": "Secret123",
                "userType": "candidate",
                "role": "expert",
            },
        )

        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"field": "role", "message": "Role and userType must match when both are provided"}
        ]

    def test_malformed_json_is_an_empty_payload(self, client):
        response = client.post(
            REGISTER_URL, content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert len(response.json()["errors"]) == 5

    def test_duplicate_email(self, client, test_candidate):
        response = client.post(
            REGISTER_URL,
            json={
                "name": "Copy Cat",
                "email": "candidate@example.com",
                "password": "Secret123",
                "userType": "candidate",
            },
        )

        assert response.status_code == 409
        assert response.json() == {
            "success": False,
            "message": "User already exists with this email",
            "code": "EMAIL_EXISTS",
        }


class TestLogin:
    def test_login(self, client, test_candidate):
        response = client.post(
            LOGIN_URL, json={"email": " CANDIDATE@example.com", "password": TEST_PASSWORD}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"]["id"] == test_candidate.id
        assert data["user"]["lastLogin"] is not None

        me = client.get(ME_URL, headers={"Authorization": f"Bearer {data['token']}"})
        assert me.json()["data"]["user"]["email"] == "candidate@example.com"

    def test_wrong_password(self, client, test_candidate):
        response = client.post(
            LOGIN_URL, json={"email": "candidate@example.com", "password": "Wrong123"}
        )

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_CREDENTIALS"

    def test_missing_fields(self, client):
        response = client.post(LOGIN_URL, json={})

        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"field": "email", "message": "Valid email is required"},
            {"field": "password", "message": "Password is required"},
        ]


class TestMe:
    def test_requires_a_token(self, client):
        response = client.get(ME_URL)

        assert response.status_code == 401
        assert response.json()["code"] == "NOT_AUTHENTICATED"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_rejects_a_bad_token(self, client):
        response = client.get(ME_URL, headers={"Authorization": "Bearer not-a-token"})

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_TOKEN"

    def test_deactivated_user(self, client, test_candidate, candidate_headers):
        assert client.delete("/api/v1/users/me", headers=candidate_headers).status_code == 200

        response = client.get(ME_URL, headers=auth_headers_for(test_candidate))

        assert response.status_code == 401
        assert response.json()["code"] == "ACCOUNT_INACTIVE"


def test_unknown_route_uses_the_error_envelope(client):
    response = client.get("/api/v1/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Not Found"}
