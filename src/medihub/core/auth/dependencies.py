"""FastAPI dependencies for the current session.

This module provides FastAPI dependency injection functions for:
- Resolving the session from the session cookie
- Refreshing it against the user directory on every request
- Requiring a logged-in session
"""

from typing import Annotated

from fastapi import Depends, Request

from medihub.api.dependencies import DBSession
from medihub.core.auth.schemas import ANONYMOUS_SESSION, SessionData
from medihub.core.auth.session import resolve_request_session
from medihub.core.errors import UnauthenticatedError


async def get_current_session(request: Request, db: DBSession) -> SessionData:
    """Resolve the session and re-read its user.

    A user deleted since login becomes anonymous, and a role reassigned
    since login takes effect here on the next request.

    Args:
        request: The incoming request
        db: Database session

    Returns:
        The refreshed session, or ``ANONYMOUS_SESSION``
    """
    session = resolve_request_session(request)
    if not session.is_logged_in or session.user_id is None:
        return ANONYMOUS_SESSION

    from medihub.modules.users.repos import UserRepository  # noqa: PLC0415

    user = await UserRepository(db).get_by_id(session.user_id)
    if user is None:
        return ANONYMOUS_SESSION

    return SessionData(
        is_logged_in=True,
        user_id=user.id,
        username=user.username,
        role_id=user.role_id,
        role_name=user.role.name if user.role else None,
    )


async def get_authenticated_session(
    session: Annotated[SessionData, Depends(get_current_session)],
) -> SessionData:
    """Get the current session, requiring a logged-in user.

    Raises:
        UnauthenticatedError: If there is no valid session
    """
    if not session.is_logged_in:
        raise UnauthenticatedError(
            "You must log in to continue",
            error_code="unauthenticated",
        )
    return session


# Type aliases for cleaner dependency injection
CurrentSession = Annotated[SessionData, Depends(get_current_session)]
AuthenticatedSession = Annotated[SessionData, Depends(get_authenticated_session)]
