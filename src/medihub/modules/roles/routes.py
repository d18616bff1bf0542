"""Role management API routes.

Every route requires the ``roles.manage`` permission.
"""

from fastapi import status

from medihub.api.dependencies import DBSession
from medihub.core.auth.dependencies import CurrentSession
from medihub.core.permissions import permissions_by_module, require_permission
from medihub.modules.roles import router
from medihub.modules.roles.schemas import (
    PermissionGroup,
    PermissionResponse,
    RoleCreate,
    RoleResponse,
    RoleUpdate,
)
from medihub.modules.roles.services import RoleSvc


ROLES_MANAGE = "roles.manage"


@router.get(
    "",
    response_model=list[RoleResponse],
    summary="List roles",
    description="Returns every role ordered by name, with its permissions.",
)
@require_permission(ROLES_MANAGE)
async def list_roles(
    service: RoleSvc,
    session: CurrentSession,  # noqa: ARG001
    db: DBSession,  # noqa: ARG001
) -> list[RoleResponse]:
    """List all roles."""
    return await service.list_roles()


@router.get(
    "/permissions",
    response_model=list[PermissionGroup],
    summary="Permission catalog",
    description="Returns every permission a role can grant, grouped by module.",
)
@require_permission(ROLES_MANAGE)
async def list_permissions(
    session: CurrentSession,  # noqa: ARG001
    db: DBSession,  # noqa: ARG001
) -> list[PermissionGroup]:
    """List the permission catalog."""
    return [
        PermissionGroup(
            module=module,
            permissions=[PermissionResponse.model_validate(p) for p in permissions],
        )
        for module, permissions in permissions_by_module().items()
    ]


@router.get(
    "/{role_id}",
    response_model=RoleResponse,
    summary="Get role",
    description="Returns a role and its permission set.",
)
@require_permission(ROLES_MANAGE)
async def get_role(
    role_id: str,
    service: RoleSvc,
    session: CurrentSession,  # noqa: ARG001
    db: DBSession,  # noqa: ARG001
) -> RoleResponse:
    """Get a role by ID."""
    return await service.get_role(role_id)


@router.post(
    "",
    response_model=RoleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create role",
    description="Creates a role with its permissions. Role names must be unique.",
)
@require_permission(ROLES_MANAGE)
async def create_role(
    data: RoleCreate,
    service: RoleSvc,
    session: CurrentSession,  # noqa: ARG001
    db: DBSession,  # noqa: ARG001
) -> RoleResponse:
    """Create a role."""
    return await service.create_role(data)


@router.put(
    "/{role_id}",
    response_model=RoleResponse,
    summary="Update role",
    description="Replaces a role's name, description and entire permission set.",
)
@require_permission(ROLES_MANAGE)
async def update_role(
    role_id: str,
    data: RoleUpdate,
    service: RoleSvc,
    session: CurrentSession,  # noqa: ARG001
    db: DBSession,  # noqa: ARG001
) -> RoleResponse:
    """Update a role."""
    return await service.update_role(role_id, data)


@router.delete(
    "/{role_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete role",
    description="Deletes a role. The superuser role and roles still assigned to users cannot be deleted.",
)
@require_permission(ROLES_MANAGE)
async def delete_role(
    role_id: str,
    service: RoleSvc,
    session: CurrentSession,  # noqa: ARG001
    db: DBSession,  # noqa: ARG001
) -> None:
    """Delete a role."""
    await service.delete_role(role_id)
