"""Role repository for database operations."""

from collections.abc import Iterable
from typing import Annotated

from fastapi import Depends
from sqlalchemy import delete, func, insert, select

from medihub.api.dependencies import DBSession
from medihub.core.permissions.models import Role, RolePermission
from medihub.modules.users.models import User


class RoleRepository:
    """Repository for Role and RolePermission database operations.

    Permission rows are written and read with plain statements so that
    no association objects linger in the identity map between a
    delete-all and the following insert.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def list_all(self) -> list[Role]:
        """List every role ordered by display name."""
        stmt = select(Role).order_by(Role.name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, role_id: str) -> Role | None:
        stmt = select(Role).where(Role.id == role_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Role | None:
        """Get a role by exact, case-sensitive display name."""
        stmt = select(Role).where(Role.name == name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_permission_ids(self, role_id: str) -> list[str]:
        """Get the permission identifiers granted by one role.

        Args:
            role_id: The role's identifier

        Returns:
            Permission identifiers in alphabetical order
        """
        stmt = (
            select(RolePermission.permission_id)
            .where(RolePermission.role_id == role_id)
            .order_by(RolePermission.permission_id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_permission_map(self) -> dict[str, list[str]]:
        """Get the permission identifiers of every role in one query.

        Returns:
            Mapping of role identifier to sorted permission identifiers
        """
        stmt = select(RolePermission.role_id, RolePermission.permission_id).order_by(
            RolePermission.role_id, RolePermission.permission_id
        )
        result = await self.session.execute(stmt)
        permission_map: dict[str, list[str]] = {}
        for role_id, permission_id in result.all():
            permission_map.setdefault(role_id, []).append(permission_id)
        return permission_map

    async def create(self, role: Role) -> Role:
        """Insert a role row.

        Args:
            role: Role instance to create

        Returns:
            The created role with server defaults loaded
        """
        self.session.add(role)
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def update(self, role: Role) -> Role:
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def delete(self, role: Role) -> None:
        await self.session.delete(role)
        await self.session.flush()

    async def clear_permissions(self, role_id: str) -> None:
        """Remove every permission row of a role."""
        stmt = delete(RolePermission).where(RolePermission.role_id == role_id)
        await self.session.execute(stmt, execution_options={"synchronize_session": False})

    async def add_permissions(self, role_id: str, permission_ids: Iterable[str]) -> None:
        """Insert one permission row per identifier."""
        rows = [
            {"role_id": role_id, "permission_id": permission_id}
            for permission_id in permission_ids
        ]
        if rows:
            await self.session.execute(insert(RolePermission), rows)

    async def count_users(self, role_id: str) -> int:
        """Count users currently assigned to a role."""
        stmt = select(func.count()).select_from(User).where(User.role_id == role_id)
        result = await self.session.execute(stmt)
        return result.scalar_one()


# Type alias for dependency injection
RoleRepo = Annotated[RoleRepository, Depends(RoleRepository)]
