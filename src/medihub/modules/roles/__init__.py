"""Roles module for role and permission management."""

from fastapi import APIRouter


router = APIRouter(prefix="/roles", tags=["roles"])


# Module metadata
__module_info__ = {
    "name": "roles",
    "version": "1.0.0",
    "description": "Roles, their permission sets, and the permission catalog",
    "dependencies": [],
}


def register_routes() -> None:
    """Register routes - called after all imports are complete."""
    from medihub.modules.roles import routes  # noqa: F401
