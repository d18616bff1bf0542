"""Authentication API routes.

Provides endpoints for:
- Login/logout with the session cookie
- The current session and its effective permissions
- Changing the current user's password
"""

from fastapi import APIRouter, Response, status

from medihub.api.dependencies import DBSession
from medihub.core.auth.dependencies import AuthenticatedSession, CurrentSession
from medihub.core.auth.schemas import (
    ChangePasswordRequest,
    LoginRequest,
    SessionData,
    SessionResponse,
)
from medihub.core.auth.service import AuthSvc
from medihub.core.auth.session import clear_session_cookie, set_session_cookie
from medihub.core.permissions import effective_permissions


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=SessionResponse,
    summary="Login with username and password",
    description="Authenticates the user and stores the signed session token in an HTTP-only cookie.",
)
async def login(
    data: LoginRequest,
    service: AuthSvc,
    response: Response,
    db: DBSession,
) -> SessionResponse:
    """Login with username and password."""
    user, token = await service.login(data.username, data.password)
    set_session_cookie(response, token)

    session = SessionData(
        is_logged_in=True,
        user_id=user.id,
        username=user.username,
        role_id=user.role_id,
        role_name=user.role_name,
    )
    return SessionResponse(
        **session.model_dump(),
        permissions=await effective_permissions(session, db),
    )


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Logout",
    description="Clears the session cookie.",
)
async def logout(response: Response) -> None:
    """Logout by clearing the session cookie."""
    clear_session_cookie(response)


@router.get(
    "/me",
    response_model=SessionResponse,
    summary="Get current session",
    description="Returns the current session and its effective permissions. Anonymous requests get is_logged_in=false.",
)
async def get_me(session: CurrentSession, db: DBSession) -> SessionResponse:
    """Get the current session."""
    return SessionResponse(
        **session.model_dump(),
        permissions=await effective_permissions(session, db),
    )


@router.post(
    "/change-password",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Change password",
    description="Changes the current user's password after verifying the current one.",
)
async def change_password(
    data: ChangePasswordRequest,
    session: AuthenticatedSession,
    service: AuthSvc,
) -> None:
    """Change the current user's password."""
    await service.change_password(
        user_id=session.user_id or "",
        current_password=data.current_password,
        new_password=data.new_password,
    )
