from salonbase.models.user_model import User

REGISTER_PAYLOAD = {
    "name": "Test User",
    "email": "test@example.com",
    "phone": "+1234567890",
    "password": "password123",
}


def register(client, **overrides):
    return client.post("/api/auth/register", json={**REGISTER_PAYLOAD, **overrides})


def login(client, email="test@example.com", password="password123"):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def test_register_creates_user_with_tokens(client):
    response = register(client)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    user = body["data"]["user"]
    assert user["id"]
    assert user["name"] == "Test User"
    assert user["email"] == "test@example.com"
    assert user["role"] == "user"
    assert body["data"]["access_token"]
    assert body["data"]["refresh_token"]
    assert body["data"]["token_type"] == "bearer"


def test_register_ignores_requested_role(client, db_session):
    response = register(client, role="admin")

    assert response.status_code == 201
    assert response.json()["data"]["user"]["role"] == "user"


def test_register_rejects_duplicate_email(client):
    register(client)
    response = register(client, email="TEST@example.com")

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert "already exists" in response.json()["message"]


def test_register_validates_required_fields(client):
    response = client.post("/api/auth/register", json={})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation Error"
    assert body["errors"]


def test_login_with_correct_credentials(client):
    register(client)
    response = login(client)

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["data"]["user"]["email"] == "test@example.com"
    assert response.json()["data"]["access_token"]


def test_login_with_wrong_password(client):
    register(client)
    response = login(client, password="wrongpassword")

    assert response.status_code == 401
    assert response.json()["success"] is False
    assert "Invalid email or password" in response.json()["message"]


def test_login_with_unknown_email(client):
    response = login(client, email="nonexistent@example.com")

    assert response.status_code == 401
    assert "Invalid email or password" in response.json()["message"]


def test_login_rejects_deactivated_account(client, make_user):
    make_user("inactive@example.com", is_active=False)
    response = login(client, email="inactive@example.com")

    assert response.status_code == 401
    assert response.json()["message"] == "User account is deactivated"


def test_token_endpoint_accepts_password_form(client):
    register(client)
    response = client.post(
        "/api/auth/token", data={"username": "test@example.com", "password": "password123"}
    )

    assert response.status_code == 200
    assert response.json()["token_type"] == "bearer"


def test_me_requires_token(client):
    response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.json()["success"] is False


def test_me_rejects_garbage_token(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401


def test_me_returns_current_user(client):
    token = register(client).json()["data"]["access_token"]
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["data"]["email"] == "test@example.com"


def test_refresh_token_cannot_be_used_as_access_token(client):
    refresh_token = register(client).json()["data"]["refresh_token"]
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {refresh_token}"})

    assert response.status_code == 401


def test_refresh_rotates_tokens(client):
    refresh_token = register(client).json()["data"]["refresh_token"]

    response = client.post("/api/auth/refresh", json={"refresh_token": refresh_token})
    assert response.status_code == 200
    new_tokens = response.json()["data"]
    assert new_tokens["access_token"]
    assert new_tokens["refresh_token"] != refresh_token

    reused = client.post("/api/auth/refresh", json={"refresh_token": refresh_token})
    assert reused.status_code == 401
    assert reused.json()["message"] == "Token has been revoked"


def test_logout_revokes_tokens(client):
    tokens = register(client).json()["data"]
    headers = {"Authorization": f"Bearer {tokens['access_token']}"}

    response = client.post(
        "/api/auth/logout", json={"refresh_token": tokens["refresh_token"]}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Successfully logged out"

    assert client.get("/api/auth/me", headers=headers).status_code == 401
    refresh = client.post("/api/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert refresh.status_code == 401


def test_logout_with_garbage_refresh_token_keeps_session(client):
    tokens = register(client).json()["data"]
    headers = {"Authorization": f"Bearer {tokens['access_token']}"}

    response = client.post("/api/auth/logout", json={"refresh_token": "not-a-jwt"}, headers=headers)

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid refresh token"
    assert client.get("/api/auth/me", headers=headers).status_code == 200


def test_logout_with_access_token_as_refresh_token_rejected(client):
    tokens = register(client).json()["data"]
    headers = {"Authorization": f"Bearer {tokens['access_token']}"}

    response = client.post(
        "/api/auth/logout", json={"refresh_token": tokens["access_token"]}, headers=headers
    )

    assert response.status_code == 401
    assert client.get("/api/auth/me", headers=headers).status_code == 200


def test_logout_cannot_revoke_another_users_refresh_token(client):
    tokens = register(client).json()["data"]
    other_tokens = register(client, email="other@example.com").json()["data"]
    headers = {"Authorization": f"Bearer {tokens['access_token']}"}

    response = client.post(
        "/api/auth/logout", json={"refresh_token": other_tokens["refresh_token"]}, headers=headers
    )

    assert response.status_code == 401
    assert client.get("/api/auth/me", headers=headers).status_code == 200
    refresh = client.post("/api/auth/refresh", json={"refresh_token": other_tokens["refresh_token"]})
    assert refresh.status_code == 200


def test_update_profile_changes_password_but_not_role(client, db_session):
    token = register(client).json()["data"]["access_token"]
    headers = {"Authorization": f"Bearer {token}"}

    response = client.put(
        "/api/auth/me",
        json={"name": "Renamed User", "password": "newpassword1", "role": "admin"},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Renamed User"
    assert response.json()["data"]["role"] == "user"
    assert login(client, password="newpassword1").status_code == 200
    assert login(client).status_code == 401
    assert db_session.query(User).filter(User.email == "test@example.com").one().role == "user"
