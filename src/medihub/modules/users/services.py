"""User service for business logic."""

from typing import Annotated

import structlog
from fastapi import Depends

from medihub.core.auth.backend import hash_password
from medihub.core.constants import DOCTOR_ROLE_IDS, MIN_USER_QUERY_LENGTH
from medihub.core.errors import DuplicateNameError, ForbiddenError, NotFoundError
from medihub.core.permissions.models import Role
from medihub.modules.roles.repos import RoleRepo
from medihub.modules.users.models import User
from medihub.modules.users.repos import UserRepo
from medihub.modules.users.schemas import UserCreate, UserUpdate


logger = structlog.get_logger()


class UserService:
    """Service for user management operations.

    Contains business logic for user CRUD operations and user queries.
    Passwords are only ever stored as bcrypt hashes.
    """

    def __init__(self, repo: UserRepo, role_repo: RoleRepo) -> None:
        self.repo = repo
        self.role_repo = role_repo

    async def list_users(self, query: str | None = None) -> list[User]:
        """List users, optionally filtered by username.

        Queries shorter than two characters are ignored.
        """
        if query is not None:
            query = query.strip()
            if len(query) < MIN_USER_QUERY_LENGTH:
                query = None
        return await self.repo.list_all(query)

    async def list_doctors(self) -> list[User]:
        """List users who can attend consultations."""
        return await self.repo.list_by_roles(DOCTOR_ROLE_IDS)

    async def get_user(self, user_id: str) -> User:
        """Get a user by ID.

        Raises:
            NotFoundError: If user not found
        """
        user = await self.repo.get_by_id(user_id)
        if not user:
            raise NotFoundError(
                "User not found",
                resource="user",
                resource_id=user_id,
            )
        return user

    async def create_user(self, data: UserCreate) -> User:
        """Create a new user.

        Args:
            data: User creation data

        Returns:
            The created user

        Raises:
            DuplicateNameError: If the username is taken
            NotFoundError: If the role does not exist
        """
        if await self.repo.get_by_username(data.username):
            raise DuplicateNameError(
                "Username already in use",
                details={"username": data.username},
            )

        role = await self._get_role(data.role_id)

        user = User(
            username=data.username,
            password_hash=hash_password(data.password),
            role_id=role.id,
            specialty=data.specialty if role.has_specialty else None,
        )
        user = await self.repo.create(user)

        logger.info("user_created", user_id=user.id, role_id=user.role_id)
        return user

    async def update_user(self, user_id: str, data: UserUpdate) -> User:
        """Update a user.

        Raises:
            NotFoundError: If the user or the role does not exist
            DuplicateNameError: If the new username is taken
        """
        user = await self.get_user(user_id)

        if data.username != user.username:
            existing = await self.repo.get_by_username(data.username)
            if existing:
                raise DuplicateNameError(
                    "Username already in use",
                    details={"username": data.username},
                )
            user.username = data.username

        role = await self._get_role(data.role_id)
        user.role_id = role.id
        user.specialty = data.specialty if role.has_specialty else None

        if data.password:
            user.password_hash = hash_password(data.password)

        user = await self.repo.update(user)
        logger.info("user_updated", user_id=user.id, role_id=user.role_id)
        return user

    async def delete_user(self, user_id: str, acting_user_id: str | None) -> None:
        """Delete a user.

        Raises:
            ForbiddenError: If users try to delete themselves
            NotFoundError: If user not found
        """
        if user_id == acting_user_id:
            raise ForbiddenError(
                "You cannot delete your own user",
                error_code="self_delete",
            )

        user = await self.get_user(user_id)
        await self.repo.delete(user)
        logger.info("user_deleted", user_id=user_id)

    async def _get_role(self, role_id: str) -> Role:
        role = await self.role_repo.get_by_id(role_id)
        if not role:
            raise NotFoundError(
                "Role not found",
                resource="role",
                resource_id=role_id,
            )
        return role


# Type alias for dependency injection
UserSvc = Annotated[UserService, Depends(UserService)]
