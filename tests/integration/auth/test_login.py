"""
Integration tests for login.

Tests:
- POST /api/auth/login
- POST /api/auth/token
- GET /api/auth/me
"""

import pytest
from httpx import AsyncClient

from app.core.config import settings
from tests.factories.user import PASSWORD


@pytest.mark.asyncio
class TestLogin:
    """Test POST /api/auth/login."""

    async def test_login_success(self, client: AsyncClient, user):
        response = await client.post("/api/auth/login", json={"email": user.email, "password": PASSWORD})

        assert response.status_code == 200
        assert response.json()["token_type"] == "bearer"

    async def test_login_email_case_insensitive(self, client: AsyncClient, user):
        response = await client.post("/api/auth/login", json={"email": user.email.upper(), "password": PASSWORD})

        assert response.status_code == 200

    async def test_login_wrong_password(self, client: AsyncClient, user):
        response = await client.post("/api/auth/login", json={"email": user.email, "password": "WrongPassword"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    async def test_login_unknown_email_same_error(self, client: AsyncClient):
        """Unknown emails get the same answer as wrong passwords."""
        response = await client.post("/api/auth/login", json={"email": "nobody@test.com", "password": PASSWORD})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    async def test_login_rate_limited(self, client: AsyncClient, user):
        for _ in range(settings.LOGIN_RATE_LIMIT):
            await client.post("/api/auth/login", json={"email": user.email, "password": "WrongPassword"})

        response = await client.post("/api/auth/login", json={"email": user.email, "password": PASSWORD})

        assert response.status_code == 429


@pytest.mark.asyncio
class TestOAuth2Token:
    """Test POST /api/auth/token (form data, used by Swagger)."""

    async def test_token_form(self, client: AsyncClient, user):
        response = await client.post("/api/auth/token", data={"username": user.email, "password": PASSWORD})

        assert response.status_code == 200
        assert response.json()["access_token"]


@pytest.mark.asyncio
class TestMe:
    """Test GET /api/auth/me."""

    async def test_me(self, client: AsyncClient, user, auth_headers):
        response = await client.get("/api/auth/me", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["id"] == user.id
        assert data["user"]["user_type"] == "freelancer"
        assert data["access_token"]

    async def test_me_without_token(self, client: AsyncClient):
        response = await client.get("/api/auth/me")

        assert response.status_code == 401

    async def test_me_with_garbage_token(self, client: AsyncClient):
        response = await client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"
