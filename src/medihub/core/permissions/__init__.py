"""Role-based access control: catalog, checker, and route decorators."""

from medihub.core.permissions.catalog import (
    ALL_PERMISSIONS,
    PERMISSION_IDS,
    PERMISSION_MODULES,
    Permission,
    get_permission,
    permissions_by_module,
    validate_permission_ids,
)
from medihub.core.permissions.checker import (
    PermissionChecker,
    authorize,
    effective_permissions,
)
from medihub.core.permissions.decorators import (
    require_any_permission,
    require_permission,
)


__all__ = [
    "ALL_PERMISSIONS",
    "PERMISSION_IDS",
    "PERMISSION_MODULES",
    "Permission",
    "PermissionChecker",
    "authorize",
    "effective_permissions",
    "get_permission",
    "permissions_by_module",
    "require_any_permission",
    "require_permission",
    "validate_permission_ids",
]
