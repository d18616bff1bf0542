"""Error handling module with RFC 7807 Problem Details."""

from medihub.core.errors.exceptions import (
    AppException,
    ConflictError,
    DuplicateNameError,
    ForbiddenError,
    NotFoundError,
    ProtectedRoleError,
    RoleInUseError,
    UnauthenticatedError,
    UnknownPermissionError,
    ValidationError,
)
from medihub.core.errors.handlers import (
    FieldError,
    ProblemDetail,
    register_exception_handlers,
)


__all__ = [
    # Exceptions
    "AppException",
    "ConflictError",
    "DuplicateNameError",
    # Handlers
    "FieldError",
    "ForbiddenError",
    "NotFoundError",
    "ProblemDetail",
    "ProtectedRoleError",
    "RoleInUseError",
    "UnauthenticatedError",
    "UnknownPermissionError",
    "ValidationError",
    "register_exception_handlers",
]
