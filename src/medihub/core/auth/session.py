"""Session resolution from the session cookie.

Resolving a session never raises: a missing or unusable token is a
normal anonymous request. Resolution has no side effects and never
renews the token.
"""

from fastapi import Request, Response

from medihub.config import settings
from medihub.core.auth.backend import decode_session_token
from medihub.core.auth.schemas import ANONYMOUS_SESSION, SessionData


def resolve_session(token: str | None) -> SessionData:
    """Turn a raw cookie value into a session.

    Args:
        token: The session cookie value, if any

    Returns:
        The logged-in session, or ``ANONYMOUS_SESSION``
    """
    if not token:
        return ANONYMOUS_SESSION

    token_data = decode_session_token(token)
    if token_data is None:
        return ANONYMOUS_SESSION

    return SessionData(
        is_logged_in=True,
        user_id=token_data.user_id,
        username=token_data.username,
        role_id=token_data.role_id,
        role_name=token_data.role_name,
    )


def get_session_token(request: Request) -> str | None:
    return request.cookies.get(settings.session_cookie_name)


def resolve_request_session(request: Request) -> SessionData:
    """Resolve the session carried by a request's cookie."""
    return resolve_session(get_session_token(request))


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_expire_minutes * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    """Tell the browser to drop the session cookie."""
    response.delete_cookie(settings.session_cookie_name, path="/")
