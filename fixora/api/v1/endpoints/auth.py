"""
Auth endpoints — register, login, logout and current profile.

Login and registration set the session token as an HttpOnly cookie and
also return it in the body for Bearer-header clients.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fixora.api.v1.deps import get_current_identity, get_db
from fixora.core.config import settings
from fixora.core.exceptions import (AuthenticationError, ConflictError,
                                    NotFoundError)
from fixora.core.rate_limit import limiter
from fixora.core.security import (create_access_token, get_password_hash,
                                  is_admin_secret, verify_password)
from fixora.models.user import User
from fixora.repositories.users import UserRepository
from fixora.schemas.common import MessageResponse
from fixora.schemas.token import TokenIdentity
from fixora.schemas.user import (AuthResponse, LoginRequest, MeResponse,
                                 RegisterRequest, UserRead)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
        max_age=settings.session_max_age,
    )


def _issue_token(user: User) -> str:
    return create_access_token(user.id, user.email, user.role)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def register(
    request: Request,
    response: Response,
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    """Create an account. A matching admin secret is the only way to get the admin role."""
    users = UserRepository(db)
    if await users.get_by_email(body.email) is not None:
        raise ConflictError("Email already exists")

    role = "admin" if is_admin_secret(body.admin_secret) else "user"
    try:
        user = await users.add(
            User(
                name=body.name,
                email=body.email,
                phone=body.phone,
                hashed_password=get_password_hash(body.password),
                role=role,
            )
        )
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        await db.rollback()
        raise ConflictError("Email already exists")
    logger.info("Registered user %d (%s) with role %s", user.id, user.email, user.role)

    token = _issue_token(user)
    _set_session_cookie(response, token)
    return AuthResponse(
        message="Admin registered successfully!" if role == "admin" else "User registered successfully!",
        user=UserRead.model_validate(user),
        token=token,
    )


@router.post("/login", response_model=AuthResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    """Authenticate with email/password. Returns 200 OK with an HttpOnly cookie."""
    user = await UserRepository(db).get_by_email(body.email)

    # Same answer for unknown email and wrong password
    if user is None or not verify_password(body.password, user.hashed_password):
        raise AuthenticationError("Invalid email or password")

    token = _issue_token(user)
    _set_session_cookie(response, token)
    logger.info("User %d logged in", user.id)
    return AuthResponse(
        message="Login successful!",
        user=UserRead.model_validate(user),
        token=token,
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response) -> MessageResponse:
    """Clear the session cookie. Tokens are stateless, so nothing is revoked server-side."""
    response.delete_cookie(
        settings.SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )
    return MessageResponse(message="Logout successful!")


@router.get("/me", response_model=MeResponse)
async def read_current_user(
    identity: TokenIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> MeResponse:
    """Return profile of the currently authenticated user."""
    user = await UserRepository(db).get_by_id(identity.user_id)
    if user is None:
        raise NotFoundError("User not found")
    return MeResponse(user=UserRead.model_validate(user))
