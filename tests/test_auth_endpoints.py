"""
Endpoint tests for login, the OAuth2 token form and token refresh
"""

import pytest
from fastapi import status
from jose import jwt

from conftest import TEST_SECRET, make_auth_header


class TestLogin:
    """POST /api/auth/login"""

    @pytest.mark.parametrize("field", ["user_name", "password"])
    def test_missing_field(self, client, seeded_users, field):
        body = {"user_name": "test-user-1", "password": "password"}
        body.pop(field)

        response = client.post("/api/auth/login", json=body)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": f"Missing '{field}' in request body"}

    def test_unknown_user(self, client, seeded_users):
        response = client.post("/api/auth/login", json={"user_name": "user-not", "password": "password"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Incorrect user_name or password"}

    def test_wrong_password(self, client, seeded_users):
        response = client.post("/api/auth/login", json={"user_name": "test-user-1", "password": "incorrect"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Incorrect user_name or password"}

    def test_valid_credentials(self, client, seeded_users):
        user = seeded_users[0]
        response = client.post("/api/auth/login", json={"user_name": user.user_name, "password": user.password})

        assert response.status_code == status.HTTP_200_OK
        claims = jwt.decode(response.json()["authToken"], TEST_SECRET, algorithms=["HS256"])
        assert claims["user_id"] == user.id
        assert claims["sub"] == user.user_name
        assert "exp" in claims

    def test_issued_token_is_accepted(self, client, seeded_users):
        user = seeded_users[0]
        token = client.post(
            "/api/auth/login", json={"user_name": user.user_name, "password": user.password}
        ).json()["authToken"]

        response = client.get("/api/users", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == user.id


class TestTokenForm:
    """POST /api/auth/token"""

    def test_valid_credentials(self, client, seeded_users):
        response = client.post("/api/auth/token", data={"username": "test-user-2", "password": "password"})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["token_type"] == "bearer"
        assert jwt.decode(data["access_token"], TEST_SECRET, algorithms=["HS256"])["sub"] == "test-user-2"

    def test_wrong_password(self, client, seeded_users):
        response = client.post("/api/auth/token", data={"username": "test-user-2", "password": "nope"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Incorrect user_name or password"}


class TestRefresh:
    """POST /api/auth/refresh"""

    def test_requires_token(self, client, seeded_users):
        response = client.post("/api/auth/refresh")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"error": "Missing bearer token"}

    def test_issues_new_token(self, client, seeded_users):
        user = seeded_users[2]
        response = client.post("/api/auth/refresh", headers=make_auth_header(user))

        assert response.status_code == status.HTTP_200_OK
        claims = jwt.decode(response.json()["authToken"], TEST_SECRET, algorithms=["HS256"])
        assert claims["user_id"] == user.id
        assert claims["sub"] == user.user_name
