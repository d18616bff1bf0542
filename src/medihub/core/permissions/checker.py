"""Permission checking logic.

``authorize`` is the single enforcement point: every protected operation
asks it whether a session holds a permission. It raises on denial and
never redirects; turning a failure into a redirect or an error page is
left to the calling boundary.
"""

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medihub.core.auth.schemas import SessionData
from medihub.core.constants import SUPERUSER_ROLE_ID
from medihub.core.errors import ForbiddenError, UnauthenticatedError
from medihub.core.permissions.catalog import PERMISSION_IDS
from medihub.core.permissions.models import RolePermission


logger = structlog.get_logger()


class PermissionChecker:
    """Service for checking role permissions.

    Permission sets are read from the store on every call, so a change
    to a role applies from the next request on.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_role_permissions(self, role_id: str) -> set[str]:
        """Get the stored permission identifiers of a role.

        Args:
            role_id: The role's identifier

        Returns:
            Set of permission identifiers
        """
        stmt = select(RolePermission.permission_id).where(
            RolePermission.role_id == role_id
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def has_permission(self, role_id: str, permission: str) -> bool:
        """Check if a role grants a permission.

        The reserved superuser role grants everything without consulting
        its stored rows.
        """
        if role_id == SUPERUSER_ROLE_ID:
            return True
        return permission in await self.get_role_permissions(role_id)

    async def has_any_permission(self, role_id: str, permissions: list[str]) -> bool:
        if role_id == SUPERUSER_ROLE_ID:
            return True
        granted = await self.get_role_permissions(role_id)
        return any(permission in granted for permission in permissions)

    async def get_effective_permissions(self, role_id: str) -> list[str]:
        """Get what a role can actually do.

        Returns:
            The whole catalog for the superuser role, otherwise the stored
            permissions that still exist in the catalog, sorted
        """
        if role_id == SUPERUSER_ROLE_ID:
            return sorted(PERMISSION_IDS)
        return sorted(await self.get_role_permissions(role_id) & PERMISSION_IDS)


async def authorize(
    session: SessionData,
    permission: str,
    db: AsyncSession,
) -> None:
    """Require that a session holds a permission.

    Args:
        session: The resolved session of the current request
        permission: Catalog identifier of the required permission
        db: Database session

    Raises:
        UnauthenticatedError: If the session is not logged in
        ForbiddenError: If the session's role does not grant the permission
    """
    if not session.is_logged_in or not session.role_id:
        raise UnauthenticatedError(
            "You must log in to perform this action",
            error_code="unauthenticated",
        )

    if session.role_id == SUPERUSER_ROLE_ID:
        logger.info(
            "superuser_bypass",
            user_id=session.user_id,
            permission=permission,
        )
        return

    checker = PermissionChecker(db)
    if await checker.has_permission(session.role_id, permission):
        return

    logger.warning(
        "authorization_denied",
        user_id=session.user_id,
        username=session.username,
        role_id=session.role_id,
        permission=permission,
    )
    raise ForbiddenError(
        "You do not have permission to perform this action",
        error_code="permission_denied",
        details={"required_permission": permission},
    )


async def effective_permissions(session: SessionData, db: AsyncSession) -> list[str]:
    """List what the session may do; empty when not logged in."""
    if not session.is_logged_in or not session.role_id:
        return []
    return await PermissionChecker(db).get_effective_permissions(session.role_id)
