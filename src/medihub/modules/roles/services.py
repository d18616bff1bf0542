"""Role service for business logic."""

from typing import Annotated

import structlog
from fastapi import Depends
from sqlalchemy.exc import IntegrityError

from medihub.core.cache import RoleCache
from medihub.core.constants import SUPERUSER_ROLE_ID
from medihub.core.database import atomic, on_commit
from medihub.core.errors import (
    DuplicateNameError,
    NotFoundError,
    ProtectedRoleError,
    RoleInUseError,
)
from medihub.core.permissions.catalog import validate_permission_ids
from medihub.core.permissions.models import Role
from medihub.modules.roles.repos import RoleRepo
from medihub.modules.roles.schemas import RoleCreate, RoleResponse, RoleUpdate


logger = structlog.get_logger()


class RoleService:
    """Service for role management operations.

    Creating and updating a role writes the role row and all of its
    permission rows inside one SAVEPOINT: either every row lands or the
    store is left exactly as it was. Each successful mutation emits the
    role-listing invalidation signal once the surrounding transaction
    commits.
    """

    def __init__(self, repo: RoleRepo, cache: RoleCache) -> None:
        self.repo = repo
        self.cache = cache

    async def list_roles(self) -> list[RoleResponse]:
        """List all roles ordered by display name.

        Returns:
            Roles with their permission identifiers
        """
        cached = await self.cache.get()
        if cached is not None:
            return [RoleResponse.model_validate(item) for item in cached]

        roles = await self.repo.list_all()
        permission_map = await self.repo.get_permission_map()
        listing = [
            self._to_response(role, permission_map.get(role.id, [])) for role in roles
        ]

        await self.cache.set([item.model_dump(mode="json") for item in listing])
        return listing

    async def get_role(self, role_id: str) -> RoleResponse:
        """Get a role with its permission set.

        Raises:
            NotFoundError: If the role does not exist
        """
        role = await self._get_or_404(role_id)
        permission_ids = await self.repo.get_permission_ids(role_id)
        return self._to_response(role, permission_ids)

    async def create_role(
        self,
        data: RoleCreate,
        role_id: str | None = None,
    ) -> RoleResponse:
        """Create a role and its permission rows atomically.

        Args:
            data: Role creation data
            role_id: Fixed identifier; generated when omitted

        Returns:
            The created role

        Raises:
            UnknownPermissionError: If a permission is not in the catalog
            DuplicateNameError: If the display name is already taken
        """
        permission_ids = validate_permission_ids(data.permissions)
        await self._ensure_name_available(data.name)

        role = Role(
            name=data.name,
            description=data.description,
            has_specialty=data.has_specialty,
        )
        if role_id:
            role.id = role_id

        try:
            async with atomic(self.repo.session):
                role = await self.repo.create(role)
                await self.repo.add_permissions(role.id, permission_ids)
        except IntegrityError as e:
            raise self._duplicate_name(data.name) from e

        on_commit(self.repo.session, self.cache.invalidate)
        logger.info(
            "role_created",
            role_id=role.id,
            name=role.name,
            permissions=permission_ids,
        )
        return self._to_response(role, sorted(permission_ids))

    async def update_role(self, role_id: str, data: RoleUpdate) -> RoleResponse:
        """Replace a role's fields and its entire permission set.

        The permission rows are deleted and re-inserted, not diffed.

        Raises:
            NotFoundError: If the role does not exist
            UnknownPermissionError: If a permission is not in the catalog
            DuplicateNameError: If another role already uses the name
        """
        role = await self._get_or_404(role_id)
        permission_ids = validate_permission_ids(data.permissions)
        if data.name != role.name:
            await self._ensure_name_available(data.name)

        try:
            async with atomic(self.repo.session):
                role.name = data.name
                role.description = data.description
                role.has_specialty = data.has_specialty
                role = await self.repo.update(role)
                await self.repo.clear_permissions(role_id)
                await self.repo.add_permissions(role_id, permission_ids)
        except IntegrityError as e:
            raise self._duplicate_name(data.name) from e

        on_commit(self.repo.session, self.cache.invalidate)
        logger.info(
            "role_updated",
            role_id=role_id,
            name=role.name,
            permissions=permission_ids,
        )
        return self._to_response(role, sorted(permission_ids))

    async def delete_role(self, role_id: str) -> None:
        """Delete a role and its permission rows.

        The in-use check runs before the delete; the ``RESTRICT`` foreign
        key on ``users.role_id`` rejects a user assigned in between.

        Raises:
            ProtectedRoleError: If the role is the reserved superuser role
            NotFoundError: If the role does not exist
            RoleInUseError: If any user is assigned to the role
        """
        if role_id == SUPERUSER_ROLE_ID:
            raise ProtectedRoleError(
                "The superuser role cannot be deleted",
                details={"role_id": role_id},
            )

        role = await self._get_or_404(role_id)

        user_count = await self.repo.count_users(role_id)
        if user_count > 0:
            raise RoleInUseError(
                "The role is assigned to one or more users and cannot be deleted",
                details={"role_id": role_id, "user_count": user_count},
            )

        try:
            async with atomic(self.repo.session):
                await self.repo.clear_permissions(role_id)
                await self.repo.delete(role)
        except IntegrityError as e:
            raise RoleInUseError(
                "The role is assigned to one or more users and cannot be deleted",
                details={"role_id": role_id},
            ) from e

        on_commit(self.repo.session, self.cache.invalidate)
        logger.info("role_deleted", role_id=role_id)

    async def _get_or_404(self, role_id: str) -> Role:
        role = await self.repo.get_by_id(role_id)
        if not role:
            raise NotFoundError(
                "Role not found",
                resource="role",
                resource_id=role_id,
            )
        return role

    async def _ensure_name_available(self, name: str) -> None:
        if await self.repo.get_by_name(name):
            raise self._duplicate_name(name)

    @staticmethod
    def _duplicate_name(name: str) -> DuplicateNameError:
        return DuplicateNameError(
            "A role with this name already exists",
            details={"name": name},
        )

    @staticmethod
    def _to_response(role: Role, permission_ids: list[str]) -> RoleResponse:
        return RoleResponse(
            id=role.id,
            name=role.name,
            description=role.description,
            has_specialty=role.has_specialty,
            permissions=permission_ids,
            created_at=role.created_at,
            updated_at=role.updated_at,
        )


# Type alias for dependency injection
RoleSvc = Annotated[RoleService, Depends(RoleService)]
