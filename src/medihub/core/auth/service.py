"""Authentication service for login and password changes."""

from typing import Annotated

import structlog
from fastapi import Depends

from medihub.api.dependencies import DBSession
from medihub.core.auth.backend import (
    create_session_token,
    hash_password,
    verify_password,
)
from medihub.core.errors import UnauthenticatedError
from medihub.modules.users.models import User
from medihub.modules.users.repos import UserRepository


logger = structlog.get_logger()


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: DBSession) -> None:
        self.db = db
        self.user_repo = UserRepository(db)

    async def login(self, username: str, password: str) -> tuple[User, str]:
        """Authenticate a user with username and password.

        Unknown usernames and wrong passwords fail with the same message.

        Args:
            username: Login name
            password: Plain text password

        Returns:
            Tuple of (user, session_token)

        Raises:
            UnauthenticatedError: If credentials are invalid
        """
        user = await self.user_repo.get_by_username(username)
        if not user or not verify_password(password, user.password_hash):
            logger.warning("login_failed", username=username)
            raise UnauthenticatedError(
                "Invalid username or password",
                error_code="invalid_credentials",
            )

        token = create_session_token(
            user_id=user.id,
            username=user.username,
            role_id=user.role_id,
            role_name=user.role_name,
        )

        logger.info("login_succeeded", user_id=user.id, role_id=user.role_id)
        return user, token

    async def change_password(
        self,
        user_id: str,
        current_password: str,
        new_password: str,
    ) -> None:
        """Change a user's password after checking the current one.

        Raises:
            UnauthenticatedError: If the user is gone or the current
                password is wrong
        """
        user = await self.user_repo.get_by_id(user_id)
        if not user or not verify_password(current_password, user.password_hash):
            raise UnauthenticatedError(
                "Current password is incorrect",
                error_code="invalid_credentials",
            )

        user.password_hash = hash_password(new_password)
        await self.user_repo.update(user)
        logger.info("password_changed", user_id=user_id)


# Type alias for dependency injection
AuthSvc = Annotated[AuthService, Depends(AuthService)]
