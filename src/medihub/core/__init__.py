"""Core services and cross-cutting concerns.

This module intentionally does not re-export symbols from submodules
to avoid circular imports. Import directly from submodules when needed:

- medihub.core.database: Base, get_db, atomic, etc.
- medihub.core.errors: AppException, ForbiddenError, etc.
- medihub.core.auth: session tokens and session resolution
- medihub.core.permissions: permission catalog and authorization guard
- medihub.core.cache: Redis-backed role listing cache
"""
