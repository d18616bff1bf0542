"""Users module for user management."""

from fastapi import APIRouter


router = APIRouter(prefix="/users", tags=["users"])


# Module metadata
__module_info__ = {
    "name": "users",
    "version": "1.0.0",
    "description": "User management",
    "dependencies": ["roles"],
}


def register_routes() -> None:
    """Register routes - called after all imports are complete."""
    from medihub.modules.users import routes  # noqa: F401
