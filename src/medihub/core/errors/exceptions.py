"""Domain exceptions for the application.

These exceptions represent business-logic errors and are automatically
converted to RFC 7807 Problem Details responses by the exception handlers.
Every one of them is an expected, recoverable outcome for the caller.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    All domain exceptions should inherit from this class.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for clients
        status_code: HTTP status code for the response
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Raised when a referenced role or user does not exist.

    Example:
        raise NotFoundError("Role not found", resource="role", resource_id=role_id)
    """

    message = "Resource not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)


class ConflictError(AppException):
    """Raised when a change conflicts with existing data."""

    message = "Resource conflict"
    error_code = "conflict"
    status_code = 409


class DuplicateNameError(ConflictError):
    """Raised when a role name or username is already taken.

    Example:
        raise DuplicateNameError(
            "A role with this name already exists", details={"name": name}
        )
    """

    message = "Name already in use"
    error_code = "duplicate_name"


class RoleInUseError(ConflictError):
    """Raised when deleting a role that users are still assigned to."""

    message = "Role is assigned to one or more users"
    error_code = "role_in_use"


class ProtectedRoleError(ConflictError):
    """Raised when deleting the reserved superuser role."""

    message = "This role is protected and cannot be deleted"
    error_code = "protected_role"


class ValidationError(AppException):
    """Raised when request data fails validation.

    Example:
        raise ValidationError(
            "Invalid input data",
            errors=[{"field": "permissions", "message": "Unknown permission"}]
        )
    """

    message = "Validation error"
    error_code = "validation_error"
    status_code = 422

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if errors:
            details["errors"] = errors
        super().__init__(message=message, details=details, **kwargs)


class UnknownPermissionError(ValidationError):
    """Raised when a role references permissions missing from the catalog."""

    message = "Unknown permission identifier"
    error_code = "unknown_permission"

    def __init__(self, permission_ids: list[str], **kwargs: Any) -> None:
        self.permission_ids = permission_ids
        errors = [
            {"field": "permissions", "message": f"Unknown permission: {pid}"}
            for pid in permission_ids
        ]
        details = kwargs.pop("details", {})
        details["unknown_permissions"] = permission_ids
        super().__init__(errors=errors, details=details, **kwargs)


class UnauthenticatedError(AppException):
    """Raised when no valid session exists.

    Example:
        raise UnauthenticatedError("Invalid username or password")
    """

    message = "Authentication required"
    error_code = "unauthenticated"
    status_code = 401


class ForbiddenError(AppException):
    """Raised when a valid session lacks the required permission.

    Example:
        raise ForbiddenError(
            "Insufficient permissions",
            details={"required_permission": "users.manage"}
        )
    """

    message = "Access forbidden"
    error_code = "forbidden"
    status_code = 403
