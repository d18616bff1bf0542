"""User management API routes."""

from fastapi import Query, status

from medihub.api.dependencies import DBSession
from medihub.core.auth.dependencies import CurrentSession
from medihub.core.permissions import require_any_permission, require_permission
from medihub.modules.users import router
from medihub.modules.users.schemas import UserCreate, UserResponse, UserUpdate
from medihub.modules.users.services import UserSvc


USERS_MANAGE = "users.manage"


@router.get(
    "",
    response_model=list[UserResponse],
    summary="List users",
    description="Returns users ordered by username. A query of two or more characters filters by username.",
)
@require_permission(USERS_MANAGE)
async def list_users(
    service: UserSvc,
    session: CurrentSession,  # noqa: ARG001
    db: DBSession,  # noqa: ARG001
    q: str | None = Query(None, description="Username search"),
) -> list[UserResponse]:
    """List users."""
    users = await service.list_users(q)
    return [UserResponse.model_validate(user) for user in users]


@router.get(
    "/doctors",
    response_model=list[UserResponse],
    summary="List doctors",
    description="Returns users who can attend consultations, for scheduling and the waiting room.",
)
@require_any_permission(["agenda.manage", "waitlist.manage", "consultation.perform"])
async def list_doctors(
    service: UserSvc,
    session: CurrentSession,  # noqa: ARG001
    db: DBSession,  # noqa: ARG001
) -> list[UserResponse]:
    """List doctors."""
    users = await service.list_doctors()
    return [UserResponse.model_validate(user) for user in users]


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get user",
)
@require_permission(USERS_MANAGE)
async def get_user(
    user_id: str,
    service: UserSvc,
    session: CurrentSession,  # noqa: ARG001
    db: DBSession,  # noqa: ARG001
) -> UserResponse:
    """Get a user by ID."""
    return UserResponse.model_validate(await service.get_user(user_id))


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    description="Creates a user assigned to an existing role.",
)
@require_permission(USERS_MANAGE)
async def create_user(
    data: UserCreate,
    service: UserSvc,
    session: CurrentSession,  # noqa: ARG001
    db: DBSession,  # noqa: ARG001
) -> UserResponse:
    """Create a user."""
    return UserResponse.model_validate(await service.create_user(data))


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update user",
    description="Updates a user. The password only changes when one is provided.",
)
@require_permission(USERS_MANAGE)
async def update_user(
    user_id: str,
    data: UserUpdate,
    service: UserSvc,
    session: CurrentSession,  # noqa: ARG001
    db: DBSession,  # noqa: ARG001
) -> UserResponse:
    """Update a user."""
    return UserResponse.model_validate(await service.update_user(user_id, data))


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete user",
    description="Deletes a user. Users cannot delete themselves.",
)
@require_permission(USERS_MANAGE)
async def delete_user(
    user_id: str,
    service: UserSvc,
    session: CurrentSession,
    db: DBSession,  # noqa: ARG001
) -> None:
    """Delete a user."""
    await service.delete_user(user_id, acting_user_id=session.user_id)
