"""Integration tests for the role management API."""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient

from medihub.core.cache import RoleListingCache
from medihub.core.permissions.catalog import ALL_PERMISSIONS, PERMISSION_MODULES
from medihub.core.permissions.models import Role
from medihub.modules.users.models import User


pytestmark = pytest.mark.integration


class TestGuard:
    """Every role endpoint requires roles.manage."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("GET", "/api/v1/roles"),
            ("GET", "/api/v1/roles/permissions"),
            ("GET", "/api/v1/roles/doctor"),
            ("DELETE", "/api/v1/roles/doctor"),
        ],
    )
    async def test_anonymous_gets_401(self, client: AsyncClient, method: str, path: str):
        response = await client.request(method, path)

        assert response.status_code == 401
        assert response.headers["content-type"] == "application/problem+json"

    @pytest.mark.asyncio
    async def test_missing_permission_gets_403(self, login_as, doctor: User):
        client = login_as(doctor)

        response = await client.get("/api/v1/roles")

        assert response.status_code == 403
        body = response.json()
        assert body["type"].endswith("/errors/permission_denied")
        assert body["required_permission"] == "roles.manage"

    @pytest.mark.asyncio
    async def test_forbidden_create_changes_nothing(
        self, login_as, doctor: User, security_officer: User
    ):
        client = login_as(doctor)

        response = await client.post("/api/v1/roles", json={"name": "Intruso"})

        assert response.status_code == 403
        listing = await login_as(security_officer).get("/api/v1/roles")
        assert "Intruso" not in [role["name"] for role in listing.json()]

    @pytest.mark.asyncio
    async def test_superuser_allowed_without_stored_permissions(
        self, login_as, superuser: User
    ):
        client = login_as(superuser)

        response = await client.get("/api/v1/roles")

        assert response.status_code == 200
        assert [role["id"] for role in response.json()] == ["superuser"]
        assert response.json()[0]["permissions"] == []


class TestPermissionCatalog:
    """Tests for GET /api/v1/roles/permissions."""

    @pytest.mark.asyncio
    async def test_grouped_by_module(self, login_as, security_officer: User):
        client = login_as(security_officer)

        response = await client.get("/api/v1/roles/permissions")

        assert response.status_code == 200
        groups = response.json()
        assert [group["module"] for group in groups] == list(PERMISSION_MODULES)
        assert sum(len(group["permissions"]) for group in groups) == len(ALL_PERMISSIONS)
        assert {"id", "name", "description", "module"} <= set(groups[0]["permissions"][0])


class TestRoleCrud:
    """Tests for creating, reading, updating and deleting roles."""

    @pytest.mark.asyncio
    async def test_create_and_get(self, login_as, security_officer: User):
        client = login_as(security_officer)

        created = await client.post(
            "/api/v1/roles",
            json={
                "name": "Auditor",
                "description": "Consulta reportes",
                "permissions": ["reports.view"],
            },
        )

        assert created.status_code == 201
        role_id = created.json()["id"]
        fetched = await client.get(f"/api/v1/roles/{role_id}")
        assert fetched.json()["name"] == "Auditor"
        assert fetched.json()["permissions"] == ["reports.view"]

    @pytest.mark.asyncio
    async def test_create_duplicate_name(
        self, login_as, security_officer: User, doctor_role: Role
    ):
        client = login_as(security_officer)

        response = await client.post(
            "/api/v1/roles", json={"name": "Doctor", "permissions": []}
        )

        assert response.status_code == 409
        assert response.json()["type"].endswith("/errors/duplicate_name")

    @pytest.mark.asyncio
    async def test_create_unknown_permission(self, login_as, security_officer: User):
        client = login_as(security_officer)

        response = await client.post(
            "/api/v1/roles", json={"name": "Raro", "permissions": ["billing.manage"]}
        )

        assert response.status_code == 422
        assert response.json()["unknown_permissions"] == ["billing.manage"]

    @pytest.mark.asyncio
    async def test_create_blank_name(self, login_as, security_officer: User):
        client = login_as(security_officer)

        response = await client.post("/api/v1/roles", json={"name": ""})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_update_replaces_permissions(
        self, login_as, security_officer: User, doctor_role: Role
    ):
        client = login_as(security_officer)

        response = await client.put(
            f"/api/v1/roles/{doctor_role.id}",
            json={
                "name": "Doctor",
                "description": "Atiende consultas",
                "has_specialty": True,
                "permissions": ["consultation.perform", "agenda.manage"],
            },
        )

        assert response.status_code == 200
        assert response.json()["permissions"] == ["agenda.manage", "consultation.perform"]

    @pytest.mark.asyncio
    async def test_update_missing(self, login_as, security_officer: User):
        client = login_as(security_officer)

        response = await client.put("/api/v1/roles/role-missing", json={"name": "X"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_unused_role(self, login_as, security_officer: User):
        client = login_as(security_officer)
        created = await client.post("/api/v1/roles", json={"name": "Temporal"})

        response = await client.delete(f"/api/v1/roles/{created.json()['id']}")

        assert response.status_code == 204
        missing = await client.get(f"/api/v1/roles/{created.json()['id']}")
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_superuser_role(
        self, login_as, security_officer: User, superuser_role: Role
    ):
        client = login_as(security_officer)

        response = await client.delete("/api/v1/roles/superuser")

        assert response.status_code == 409
        assert response.json()["type"].endswith("/errors/protected_role")

    @pytest.mark.asyncio
    async def test_delete_role_in_use(
        self, login_as, security_officer: User, doctor: User
    ):
        client = login_as(security_officer)

        response = await client.delete(f"/api/v1/roles/{doctor.role_id}")

        assert response.status_code == 409
        assert response.json()["type"].endswith("/errors/role_in_use")

    @pytest.mark.asyncio
    async def test_cache_invalidated_once_per_committed_mutation(
        self, login_as, security_officer: User
    ):
        client = login_as(security_officer)

        with patch.object(RoleListingCache, "invalidate", AsyncMock()) as invalidate:
            created = await client.post("/api/v1/roles", json={"name": "Auditor"})
            assert invalidate.await_count == 1

            rejected = await client.post("/api/v1/roles", json={"name": "Auditor"})
            assert rejected.status_code == 409
            assert invalidate.await_count == 1

            await client.delete(f"/api/v1/roles/{created.json()['id']}")
            assert invalidate.await_count == 2


class TestPermissionChangesApplyImmediately:
    """A role change is seen by the next request of its users."""

    @pytest.mark.asyncio
    async def test_auditor_scenario(self, client: AsyncClient, login_as, superuser: User):
        auditor_login = {"username": "auditor", "password": "auditor123"}

        login_as(superuser)
        created = await client.post(
            "/api/v1/roles", json={"name": "Auditor", "permissions": ["reports.view"]}
        )
        role_id = created.json()["id"]
        await client.post("/api/v1/users", json={**auditor_login, "role_id": role_id})
        await client.put(
            f"/api/v1/roles/{role_id}",
            json={"name": "Auditor", "permissions": ["reports.view", "hce.view"]},
        )

        client.cookies.clear()
        login = await client.post("/api/v1/auth/login", json=auditor_login)
        assert login.json()["permissions"] == ["hce.view", "reports.view"]

        client.cookies.clear()
        login_as(superuser)
        await client.put(
            f"/api/v1/roles/{role_id}",
            json={"name": "Auditor", "permissions": ["hce.view"]},
        )

        client.cookies.clear()
        await client.post("/api/v1/auth/login", json=auditor_login)
        me = await client.get("/api/v1/auth/me")
        assert me.json()["permissions"] == ["hce.view"]

        reports = await client.get("/dashboard/reportes", follow_redirects=False)
        assert reports.status_code == 307
        assert reports.headers["location"] == "/dashboard?denied=reports.view"
