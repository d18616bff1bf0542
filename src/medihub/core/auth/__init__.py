"""Authentication: passwords, session tokens, and session resolution.

Dependencies, routes, and middleware import the user directory and are
imported directly from their submodules.
"""

from medihub.core.auth.backend import (
    create_session_token,
    decode_session_token,
    hash_password,
    verify_password,
)
from medihub.core.auth.schemas import ANONYMOUS_SESSION, SessionData, TokenData
from medihub.core.auth.session import resolve_request_session, resolve_session


__all__ = [
    "ANONYMOUS_SESSION",
    "SessionData",
    "TokenData",
    "create_session_token",
    "decode_session_token",
    "hash_password",
    "resolve_request_session",
    "resolve_session",
    "verify_password",
]
