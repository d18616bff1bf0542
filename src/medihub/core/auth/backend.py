"""Authentication backend for password and session token handling.

This module provides core authentication utilities including:
- Password hashing with bcrypt
- Signed session token creation and verification
"""

import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from medihub.config import settings
from medihub.core.auth.schemas import TokenData
from medihub.core.constants import (
    BCRYPT_ROUNDS,
    SESSION_TOKEN_JTI_LENGTH,
    SESSION_TOKEN_TYPE,
)


# Password hashing context using bcrypt
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=BCRYPT_ROUNDS,
)


# ============================================================
# Password Utilities
# ============================================================


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Bcrypt hash of the password
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Args:
        plain_password: Plain text password to verify
        hashed_password: Bcrypt hash to verify against

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


# ============================================================
# Session Token Utilities
# ============================================================


def create_session_token(
    user_id: str,
    username: str,
    role_id: str,
    role_name: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create the signed token stored in the session cookie.

    Args:
        user_id: The user's identifier
        username: The user's login name
        role_id: The user's role identifier
        role_name: The role's display name
        expires_delta: Optional custom lifetime

    Returns:
        Encoded JWT
    """
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(minutes=settings.session_expire_minutes))

    to_encode: dict[str, Any] = {
        "sub": user_id,
        "username": username,
        "role_id": role_id,
        "role_name": role_name,
        "exp": expire,
        "iat": now,
        "type": SESSION_TOKEN_TYPE,
        "jti": secrets.token_urlsafe(SESSION_TOKEN_JTI_LENGTH),
    }

    return jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_session_token(token: str) -> TokenData | None:
    """Decode and validate a session token.

    Args:
        token: The JWT to decode

    Returns:
        TokenData if valid, None if malformed, tampered, expired or of
        the wrong type
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )

        user_id = payload.get("sub")
        username = payload.get("username")
        role_id = payload.get("role_id")
        exp = payload.get("exp")

        if not user_id or not username or not role_id or exp is None:
            return None
        if payload.get("type") != SESSION_TOKEN_TYPE:
            return None

        return TokenData(
            user_id=user_id,
            username=username,
            role_id=role_id,
            role_name=payload.get("role_name"),
            exp=datetime.fromtimestamp(exp, tz=UTC),
            type=SESSION_TOKEN_TYPE,
            jti=payload.get("jti"),
        )

    except (JWTError, ValueError, TypeError):
        return None
