"""
Tests for authentication and profile endpoints.
"""
from app.core.config import settings
from conftest import login, signup_and_login


def test_signup(client):
    """Test profile signup."""
    response = client.post(
        "/api/auth/signup",
        json={
            "email": "Test@Example.com",
            "password": "testpassword123",
            "first_name": "Test",
            "last_name": "User"
        }
    )
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "test@example.com"
    assert data["full_name"] == "Test User"
    assert "hashed_password" not in data


def test_signup_duplicate_email(client):
    signup_and_login(client, "dup@example.com")
    response = client.post(
        "/api/auth/signup",
        json={"email": "dup@example.com", "password": "another123"}
    )
    assert response.status_code == 400


def test_signup_short_password(client):
    response = client.post(
        "/api/auth/signup",
        json={"email": "short@example.com", "password": "abc"}
    )
    assert response.status_code == 400


def test_login(client):
    """Test profile login."""
    client.post(
        "/api/auth/signup",
        json={"email": "test2@example.com", "password": "testpassword123"}
    )
    response = client.post(
        "/api/auth/login",
        json={"email": "test2@example.com", "password": "testpassword123"}
    )
    assert response.status_code == 200
    data = response.json()
    assert "access_token" in data
    assert data["is_admin"] is False


def test_login_invalid_credentials(client):
    """Test login with invalid credentials."""
    response = client.post(
        "/api/auth/login",
        json={"email": "nonexistent@example.com", "password": "wrongpassword"}
    )
    assert response.status_code == 401


def test_demo_and_admin_logins(client):
    demo = client.post(
        "/api/auth/login",
        json={"email": settings.DEMO_EMAIL, "password": settings.DEMO_PASSWORD}
    ).json()
    admin = client.post(
        "/api/auth/login",
        json={"email": settings.ADMIN_EMAIL, "password": settings.ADMIN_PASSWORD}
    ).json()
    assert demo["user_id"] == settings.DEMO_USER_ID
    assert demo["is_admin"] is False
    assert admin["user_id"] == settings.ADMIN_USER_ID
    assert admin["is_admin"] is True


def test_me_requires_sign_in(client):
    assert client.get("/api/users/me").status_code == 401


def test_invalid_token_rejected(client):
    response = client.get("/api/trips", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_me_and_update(client, user_headers):
    me = client.get("/api/users/me", headers=user_headers).json()
    assert me["email"] == "alice@example.com"
    assert me["full_name"] == "Alice Walker"

    response = client.patch("/api/users/me", json={"full_name": "Alice W.", "language": "fr"}, headers=user_headers)
    assert response.status_code == 200
    assert response.json()["full_name"] == "Alice W."
    assert response.json()["language"] == "fr"


def test_demo_profile_is_read_only(client, demo_headers):
    me = client.get("/api/users/me", headers=demo_headers).json()
    assert me["id"] == settings.DEMO_USER_ID
    response = client.patch("/api/users/me", json={"full_name": "Someone"}, headers=demo_headers)
    assert response.status_code == 409


def test_logout(client):
    headers = login(client, settings.DEMO_EMAIL, settings.DEMO_PASSWORD)
    response = client.post("/api/auth/logout", headers=headers)
    assert response.status_code == 200
    assert client.post("/api/auth/logout").status_code == 401
