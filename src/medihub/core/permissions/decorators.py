"""Permission decorators for route protection.

The decorated route must accept ``session`` (the current SessionData)
and ``db`` (the database session) as keyword parameters.
"""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import TYPE_CHECKING, Any, ParamSpec, TypeVar, cast

import structlog

from medihub.core.constants import SUPERUSER_ROLE_ID
from medihub.core.errors import ForbiddenError, UnauthenticatedError
from medihub.core.permissions.catalog import is_known_permission
from medihub.core.permissions.checker import PermissionChecker, authorize


if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from medihub.core.auth.schemas import SessionData


logger = structlog.get_logger()

P = ParamSpec("P")
R = TypeVar("R")


def _ensure_known(permissions: list[str]) -> None:
    unknown = [p for p in permissions if not is_known_permission(p)]
    if unknown:
        raise ValueError(f"Unknown permission(s): {', '.join(unknown)}")


def _get_session_and_db(
    kwargs: dict[str, Any],
) -> tuple["SessionData | None", "AsyncSession | None"]:
    session = cast("SessionData | None", kwargs.get("session"))
    db = cast("AsyncSession | None", kwargs.get("db"))
    return session, db


def require_permission(
    permission: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Decorator that requires a specific permission to access a route.

    Usage:
        @router.delete("/roles/{role_id}")
        @require_permission("roles.manage")
        async def delete_role(role_id: str, session: CurrentSession, db: DBSession):
            ...

    Args:
        permission: Catalog identifier of the required permission

    Returns:
        Decorator function

    Raises:
        ValueError: At decoration time, if the permission is not in the catalog
    """
    _ensure_known([permission])

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            session, db = _get_session_and_db(kwargs)

            if session is None:
                raise UnauthenticatedError(
                    "You must log in to perform this action",
                    error_code="unauthenticated",
                )

            if db is None:
                raise ForbiddenError(
                    "Permission check failed",
                    error_code="permission_check_failed",
                )

            await authorize(session, permission, db)
            return await func(*args, **kwargs)

        return wrapper

    return decorator


def require_any_permission(
    permissions: list[str],
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Decorator that requires any one of the specified permissions.

    Usage:
        @router.get("/users/doctors")
        @require_any_permission(["agenda.manage", "consultation.perform"])
        async def list_doctors(session: CurrentSession, db: DBSession):
            ...
    """
    _ensure_known(permissions)

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            session, db = _get_session_and_db(kwargs)

            if session is None or not session.is_logged_in or not session.role_id:
                raise UnauthenticatedError(
                    "You must log in to perform this action",
                    error_code="unauthenticated",
                )

            if db is None:
                raise ForbiddenError(
                    "Permission check failed",
                    error_code="permission_check_failed",
                )

            if session.role_id == SUPERUSER_ROLE_ID:
                logger.info(
                    "superuser_bypass",
                    user_id=session.user_id,
                    permissions=permissions,
                )
            elif not await PermissionChecker(db).has_any_permission(
                session.role_id, permissions
            ):
                logger.warning(
                    "authorization_denied",
                    user_id=session.user_id,
                    role_id=session.role_id,
                    permissions=permissions,
                )
                raise ForbiddenError(
                    f"Missing required permission. Need one of: {', '.join(permissions)}",
                    error_code="permission_denied",
                    details={"required_permissions": permissions},
                )

            return await func(*args, **kwargs)

        return wrapper

    return decorator
