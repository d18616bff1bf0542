"""Role and role-permission database models.

- Role: A named set of permissions assignable to users
- RolePermission: One permission identifier granted by a role

Permission identifiers are not stored in their own table; they come from
the static catalog in ``medihub.core.permissions.catalog``.
"""

from sqlalchemy import Boolean, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from medihub.core.constants import (
    MAX_DESCRIPTION_LENGTH,
    MAX_ID_LENGTH,
    MAX_PERMISSION_ID_LENGTH,
    MAX_ROLE_NAME_LENGTH,
    ROLE_ID_PREFIX,
)
from medihub.core.database.base import Base, TimestampMixin, generate_id


class Role(Base, TimestampMixin):
    """Role model representing a named set of permissions.

    Attributes:
        id: Stable identifier (``superuser`` is reserved)
        name: Display name, unique across all roles
        description: Human-readable description of the role
        has_specialty: Whether users with this role carry a medical specialty
    """

    __tablename__ = "roles"
    __table_args__ = (UniqueConstraint("name", name="uq_role_name"),)

    id: Mapped[str] = mapped_column(
        String(MAX_ID_LENGTH),
        primary_key=True,
        default=lambda: generate_id(ROLE_ID_PREFIX),
    )
    name: Mapped[str] = mapped_column(
        String(MAX_ROLE_NAME_LENGTH),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(
        String(MAX_DESCRIPTION_LENGTH),
        nullable=False,
        default="",
    )
    has_specialty: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name})>"


class RolePermission(Base):
    """Association row granting one catalog permission to a role.

    Rows go away with their role (``ON DELETE CASCADE``).
    """

    __tablename__ = "role_permissions"

    role_id: Mapped[str] = mapped_column(
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    permission_id: Mapped[str] = mapped_column(
        String(MAX_PERMISSION_ID_LENGTH),
        primary_key=True,
    )

    def __repr__(self) -> str:
        return f"<RolePermission(role_id={self.role_id}, permission_id={self.permission_id})>"
