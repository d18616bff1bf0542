"""Integration tests for seeding the standard roles and demo users."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from medihub.core.permissions.catalog import PERMISSION_IDS
from medihub.modules.roles.repos import RoleRepository
from medihub.modules.users.repos import UserRepository
from medihub.seeding import DEMO_USERS, ROLE_DEFINITIONS, seed_roles, seed_users


pytestmark = pytest.mark.integration


class TestSeedRoles:
    """Tests for seed_roles."""

    @pytest.mark.asyncio
    async def test_creates_every_role(self, db: AsyncSession):
        created = await seed_roles(db)

        assert created == list(ROLE_DEFINITIONS)
        repo = RoleRepository(db)
        assert await repo.get_permission_ids("enfermera") == [
            "treatmentlog.manage",
            "waitlist.manage",
        ]
        assert set(await repo.get_permission_ids("superuser")) == PERMISSION_IDS

    @pytest.mark.asyncio
    async def test_is_idempotent(self, db: AsyncSession):
        await seed_roles(db)

        assert await seed_roles(db) == []
        assert len(await RoleRepository(db).list_all()) == len(ROLE_DEFINITIONS)


class TestSeedUsers:
    """Tests for seed_users."""

    @pytest.mark.asyncio
    async def test_creates_demo_users(self, db: AsyncSession):
        await seed_roles(db)

        created = await seed_users(db)

        assert created == [user["username"] for user in DEMO_USERS]
        doctor = await UserRepository(db).get_by_username("angela.dicenso")
        assert doctor is not None
        assert doctor.role_id == "doctor"
        assert doctor.specialty == "medico pediatra"

    @pytest.mark.asyncio
    async def test_is_idempotent(self, db: AsyncSession):
        await seed_roles(db)
        await seed_users(db)

        assert await seed_users(db) == []
