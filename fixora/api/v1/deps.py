"""
FastAPI dependencies — database session, auth guards and booking services.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Optional

from fastapi import BackgroundTasks, Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from fixora.core.config import settings
from fixora.core.exceptions import AuthenticationError, PermissionDeniedError
from fixora.core.security import decode_access_token
from fixora.db.session import Database
from fixora.schemas.token import TokenIdentity
from fixora.services.bookings import BookingService
from fixora.services.mailer import EmailSender
from fixora.services.notifications import EmailNotifier, Notifier

# auto_error=False so a missing header falls through to our own 401
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_PREFIX}/auth/login", auto_error=False
)


# ── Database session ────────────────────────────────────────────────
async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    database: Database = request.app.state.db
    async with database.session() as session:
        yield session


# ── Auth dependencies ───────────────────────────────────────────────
async def get_current_identity(
    request: Request,
    bearer_token: Optional[str] = Depends(oauth2_scheme),
) -> TokenIdentity:
    """Identity from the session cookie, falling back to the Bearer header.

    Stateless: the token alone decides, the database is not consulted.
    """
    raw = request.cookies.get(settings.SESSION_COOKIE_NAME) or bearer_token
    if not raw:
        raise AuthenticationError("Please login first")

    identity = decode_access_token(raw)
    if identity is None:
        raise AuthenticationError("Invalid or expired session")
    return identity


async def require_admin(
    identity: TokenIdentity = Depends(get_current_identity),
) -> TokenIdentity:
    """Only allow admin role to proceed."""
    if not identity.is_admin:
        raise PermissionDeniedError("Admin access required")
    return identity


# ── Services ────────────────────────────────────────────────────────
def get_notifier(background_tasks: BackgroundTasks) -> Notifier:
    return EmailNotifier(
        background_tasks,
        EmailSender.from_settings(settings),
        app_url=settings.APP_URL,
        admin_email=settings.ADMIN_EMAIL,
    )


def get_booking_service(
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
) -> BookingService:
    return BookingService(db, notifier)
