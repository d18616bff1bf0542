"""User database models."""

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from medihub.core.constants import (
    MAX_ID_LENGTH,
    MAX_SPECIALTY_LENGTH,
    MAX_USERNAME_LENGTH,
    USER_ID_PREFIX,
)
from medihub.core.database.base import Base, TimestampMixin, generate_id
from medihub.core.permissions.models import Role


class User(Base, TimestampMixin):
    """User model representing someone who can log in.

    Every user holds exactly one role. The role foreign key is
    ``ON DELETE RESTRICT``, so the store itself refuses to drop a role
    that is still assigned.

    Attributes:
        username: Unique login name
        password_hash: Bcrypt-hashed password, never the plaintext
        role_id: The assigned role
        specialty: Medical specialty, only for roles that carry one
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(MAX_ID_LENGTH),
        primary_key=True,
        default=lambda: generate_id(USER_ID_PREFIX),
    )
    username: Mapped[str] = mapped_column(
        String(MAX_USERNAME_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    role_id: Mapped[str] = mapped_column(
        ForeignKey("roles.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    specialty: Mapped[str | None] = mapped_column(
        String(MAX_SPECIALTY_LENGTH),
        nullable=True,
    )

    # Relationships
    role: Mapped[Role] = relationship(
        Role,
        lazy="selectin",
    )

    @property
    def role_name(self) -> str | None:
        return self.role.name if self.role else None

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username}, role_id={self.role_id})>"
