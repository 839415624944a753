"""
JWT session tokens, password hashing (bcrypt) and admin-secret checks.
"""

from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from fixora.core.config import settings
from fixora.schemas.token import TokenIdentity

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

_TOKEN_TYPE = "access"


# ── Passwords ───────────────────────────────────────────────────────
def verify_password(plain: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        # passlib refuses oversize secrets (PasswordSizeError) and malformed hashes
        return False


def get_password_hash(plain: str) -> str:
    return pwd_context.hash(plain)


def is_admin_secret(candidate: str | None) -> bool:
    """True when *candidate* matches the configured admin registration secret."""
    expected = settings.ADMIN_SECRET_KEY
    if not expected or not candidate:
        return False
    return secrets.compare_digest(candidate.encode(), expected.encode())


# ── JWT tokens ──────────────────────────────────────────────────────
def create_access_token(
    user_id: int,
    email: str,
    role: str,
    expires_delta: timedelta | None = None,
) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS))
    return jwt.encode(
        {
            "sub": str(user_id),
            "email": email,
            "role": role,
            "type": _TOKEN_TYPE,
            "iat": now,
            "exp": expire,
        },
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def decode_access_token(token: str) -> TokenIdentity | None:
    """Return the identity carried by a valid session token, else ``None``.

    Bad signatures, malformed tokens, expired tokens and tokens whose
    claims do not describe a user all map to ``None``.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        if payload.get("type") != _TOKEN_TYPE:
            return None
        return TokenIdentity(
            user_id=int(payload["sub"]),
            email=payload["email"],
            role=payload["role"],
        )
    except (JWTError, KeyError, TypeError, ValueError):
        return None
