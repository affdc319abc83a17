"""
Password hashing and access-token helpers.

Passwords are hashed with bcrypt through passlib's ``CryptContext``; access
tokens are HS256 JWTs issued and verified with PyJWT.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from coworkspace.server.core.config import settings

from .errors import BadRequestError, UnauthorizedError
from .logging_config import get_logger

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 8

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.auth.password_hash_rounds,
)


def hash_password(password: str) -> str:
    """Hash a plain-text password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain-text password against a stored bcrypt hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError as e:
        logger.warning(f"Password verification failed on malformed hash: {e}")
        return False


def check_password_strength(password: str) -> None:
    """Raise :class:`BadRequestError` unless the password has 8+ characters with a letter and a digit."""
    if len(password) < MIN_PASSWORD_LENGTH:
        raise BadRequestError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    if not re.search(r"[A-Za-z]", password) or not re.search(r"\d", password):
        raise BadRequestError("Password must contain at least one letter and one digit")


def create_access_token(
    user_id: int,
    role: str,
    email: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Issue a signed access token for a user.

    Args:
        user_id: Primary key of the user (stored as the ``sub`` claim)
        role: The user's role, copied into the token for quick checks
        email: The user's e-mail address
        expires_delta: Token lifetime; defaults to ``JWT_EXPIRES_MINUTES``

    Returns:
        The encoded JWT
    """
    auth = settings.auth
    now = datetime.now(timezone.utc)
    lifetime = expires_delta if expires_delta is not None else timedelta(minutes=auth.jwt_expires_minutes)
    payload = {
        "sub": str(user_id),
        "role": role,
        "email": email,
        "iat": now,
        "exp": now + lifetime,
        "iss": auth.jwt_issuer,
        "aud": auth.jwt_audience,
    }
    return jwt.encode(payload, auth.jwt_secret, algorithm=auth.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify an access token and return its claims.

    Raises:
        UnauthorizedError: if the token is expired, tampered with or malformed.
    """
    auth = settings.auth
    try:
        return jwt.decode(
            token,
            auth.jwt_secret,
            algorithms=[auth.jwt_algorithm],
            audience=auth.jwt_audience,
            issuer=auth.jwt_issuer,
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise UnauthorizedError("Access token has expired") from e
    except jwt.InvalidTokenError as e:
        raise UnauthorizedError("Invalid access token") from e
