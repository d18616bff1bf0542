"""Pydantic schemas for role operations."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from medihub.core.constants import MAX_DESCRIPTION_LENGTH, MAX_ROLE_NAME_LENGTH


# ============================================================
# Role Schemas
# ============================================================


class RoleBase(BaseModel):
    """Base schema for role data."""

    name: str = Field(..., min_length=1, max_length=MAX_ROLE_NAME_LENGTH)
    description: str = Field("", max_length=MAX_DESCRIPTION_LENGTH)
    has_specialty: bool = False


class RoleCreate(RoleBase):
    """Schema for creating a role with its permission set."""

    permissions: list[str] = Field(default_factory=list)


class RoleUpdate(RoleCreate):
    """Schema for updating a role.

    Every field is replaced, including the whole permission set.
    """


class RoleResponse(RoleBase):
    """Schema for role response data."""

    id: str
    permissions: list[str]
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


# ============================================================
# Permission Catalog Schemas
# ============================================================


class PermissionResponse(BaseModel):
    """A single catalog entry."""

    id: str
    name: str
    description: str
    module: str

    model_config = ConfigDict(from_attributes=True)


class PermissionGroup(BaseModel):
    """Catalog entries sharing a module label."""

    module: str
    permissions: list[PermissionResponse]
