"""User repository for database operations."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy import func, select

from medihub.api.dependencies import DBSession
from medihub.modules.users.models import User


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, user: User) -> User:
        """Create a new user.

        Args:
            user: User instance to create

        Returns:
            The created user with ID and role loaded
        """
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: str) -> User | None:
        stmt = select(User).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self, query: str | None = None) -> list[User]:
        """List users ordered by username.

        Args:
            query: Optional case-insensitive username substring

        Returns:
            Matching users
        """
        stmt = select(User).order_by(User.username)
        if query:
            stmt = stmt.where(func.lower(User.username).contains(query.lower()))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_by_roles(self, role_ids: tuple[str, ...]) -> list[User]:
        stmt = select(User).where(User.role_id.in_(role_ids)).order_by(User.username)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, user: User) -> User:
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def delete(self, user: User) -> None:
        await self.session.delete(user)
        await self.session.flush()


# Type alias for dependency injection
UserRepo = Annotated[UserRepository, Depends(UserRepository)]
