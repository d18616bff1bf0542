"""Integration tests for the login, logout and session endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from medihub.config import settings
from medihub.core.auth.backend import verify_password
from medihub.core.permissions.catalog import PERMISSION_IDS
from medihub.core.permissions.models import Role
from medihub.modules.users.models import User
from medihub.modules.users.repos import UserRepository
from tests.factories.user import TEST_PASSWORD, session_cookie_for


pytestmark = pytest.mark.integration


class TestLogin:
    """Tests for POST /api/v1/auth/login."""

    @pytest.mark.asyncio
    async def test_login_sets_session_cookie(self, client: AsyncClient, doctor: User):
        response = await client.post(
            "/api/v1/auth/login",
            json={"username": doctor.username, "password": TEST_PASSWORD},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["is_logged_in"] is True
        assert body["username"] == "carolina.guerrero"
        assert body["role_id"] == "doctor"
        assert body["role_name"] == "Doctor"
        assert body["permissions"] == ["consultation.perform", "hce.view"]

        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith(f"{settings.session_cookie_name}=")
        assert "HttpOnly" in set_cookie
        assert "samesite=lax" in set_cookie.lower()

    @pytest.mark.asyncio
    async def test_wrong_password(self, client: AsyncClient, doctor: User):
        response = await client.post(
            "/api/v1/auth/login",
            json={"username": doctor.username, "password": "incorrecta"},
        )

        assert response.status_code == 401
        assert response.headers["content-type"] == "application/problem+json"
        assert response.json()["detail"] == "Invalid username or password"
        assert "set-cookie" not in response.headers

    @pytest.mark.asyncio
    async def test_unknown_user_gets_same_error(self, client: AsyncClient, doctor: User):
        unknown = await client.post(
            "/api/v1/auth/login",
            json={"username": "nadie", "password": TEST_PASSWORD},
        )
        wrong = await client.post(
            "/api/v1/auth/login",
            json={"username": doctor.username, "password": "incorrecta"},
        )

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json()["detail"] == wrong.json()["detail"]

    @pytest.mark.asyncio
    async def test_missing_fields(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/login", json={"username": "x"})

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "password"


class TestMe:
    """Tests for GET /api/v1/auth/me."""

    @pytest.mark.asyncio
    async def test_anonymous(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/me")

        assert response.status_code == 200
        assert response.json()["is_logged_in"] is False
        assert response.json()["permissions"] == []

    @pytest.mark.asyncio
    async def test_after_login(self, client: AsyncClient, doctor: User):
        await client.post(
            "/api/v1/auth/login",
            json={"username": doctor.username, "password": TEST_PASSWORD},
        )

        response = await client.get("/api/v1/auth/me")

        assert response.json()["user_id"] == doctor.id
        assert response.json()["permissions"] == ["consultation.perform", "hce.view"]

    @pytest.mark.asyncio
    async def test_superuser_gets_whole_catalog(self, login_as, superuser: User):
        client = login_as(superuser)

        response = await client.get("/api/v1/auth/me")

        assert set(response.json()["permissions"]) == PERMISSION_IDS

    @pytest.mark.asyncio
    async def test_invalid_cookie_is_anonymous(self, client: AsyncClient):
        client.cookies.set(settings.session_cookie_name, "tampered.token.value")

        response = await client.get("/api/v1/auth/me")

        assert response.status_code == 200
        assert response.json()["is_logged_in"] is False

    @pytest.mark.asyncio
    async def test_deleted_user_becomes_anonymous(
        self, db: AsyncSession, login_as, guest: User
    ):
        client = login_as(guest)
        await UserRepository(db).delete(guest)

        response = await client.get("/api/v1/auth/me")

        assert response.json()["is_logged_in"] is False


class TestLogout:
    """Tests for POST /api/v1/auth/logout."""

    @pytest.mark.asyncio
    async def test_logout_clears_cookie(self, client: AsyncClient, doctor: User):
        await client.post(
            "/api/v1/auth/login",
            json={"username": doctor.username, "password": TEST_PASSWORD},
        )

        response = await client.post("/api/v1/auth/logout")

        assert response.status_code == 204
        me = await client.get("/api/v1/auth/me")
        assert me.json()["is_logged_in"] is False


class TestChangePassword:
    """Tests for POST /api/v1/auth/change-password."""

    @pytest.mark.asyncio
    async def test_change_password(self, db: AsyncSession, login_as, guest: User):
        client = login_as(guest)

        response = await client.post(
            "/api/v1/auth/change-password",
            json={"current_password": TEST_PASSWORD, "new_password": "nuevaclave123"},
        )

        assert response.status_code == 204
        user = await UserRepository(db).get_by_id(guest.id)
        assert user is not None
        assert verify_password("nuevaclave123", user.password_hash)

    @pytest.mark.asyncio
    async def test_wrong_current_password(self, login_as, guest: User):
        client = login_as(guest)

        response = await client.post(
            "/api/v1/auth/change-password",
            json={"current_password": "incorrecta", "new_password": "nuevaclave123"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_requires_session(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/change-password",
            json={"current_password": TEST_PASSWORD, "new_password": "nuevaclave123"},
        )

        assert response.status_code == 401
        assert response.json()["type"].endswith("/errors/unauthenticated")


class TestCurrentSessionDependency:
    """Tests for get_current_session refreshing identity from the store."""

    @pytest.mark.asyncio
    async def test_role_change_applies_on_next_request(
        self, client: AsyncClient, db: AsyncSession, guest: User, doctor_role: Role
    ):
        client.cookies.set(settings.session_cookie_name, session_cookie_for(guest))
        guest.role_id = doctor_role.id
        await UserRepository(db).update(guest)

        response = await client.get("/api/v1/auth/me")

        assert response.json()["role_id"] == "doctor"
        assert response.json()["permissions"] == ["consultation.perform", "hce.view"]
