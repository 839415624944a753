"""
Admin dashboard endpoints — users, all bookings and analytics.

Every route requires the admin role.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fixora.api.v1.deps import get_db, require_admin
from fixora.repositories.bookings import BookingRepository
from fixora.repositories.services import ServiceRepository
from fixora.repositories.users import UserRepository
from fixora.schemas.admin import (AdminBookingListResponse, AdminBookingRead,
                                  AdminUserListResponse, AdminUserRead,
                                  AnalyticsResponse)
from fixora.schemas.booking import BookingStatus
from fixora.schemas.token import Role
from fixora.schemas.user import UserRead
from fixora.services.analytics import build_analytics
from fixora.services.bookings import to_booking_read

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("/users", response_model=AdminUserListResponse)
async def list_users(
    role: Role | None = Query(default=None),
    db: AsyncSession = Depends(get_db),
) -> AdminUserListResponse:
    """All users, newest first, each with their booking count."""
    rows = await UserRepository(db).list_with_booking_counts(role)
    users = [
        AdminUserRead(**UserRead.model_validate(user).model_dump(), bookings=count)
        for user, count in rows
    ]
    return AdminUserListResponse(users=users, total=len(users))


@router.get("/bookings", response_model=AdminBookingListResponse)
async def list_all_bookings(
    status: BookingStatus | None = Query(default=None),
    db: AsyncSession = Depends(get_db),
) -> AdminBookingListResponse:
    """Every booking with its owner's contact details."""
    rows = await BookingRepository(db).list_with_owners(status=status)
    services = await ServiceRepository(db).get_many(b.service_id for b, _ in rows)
    bookings = [
        AdminBookingRead(
            **to_booking_read(booking, services.get(booking.service_id)).model_dump(),
            user_name=user.name,
            user_email=user.email,
            user_phone=user.phone,
        )
        for booking, user in rows
    ]
    return AdminBookingListResponse(bookings=bookings, total=len(bookings))


@router.get("/analytics", response_model=AnalyticsResponse)
async def analytics(db: AsyncSession = Depends(get_db)) -> AnalyticsResponse:
    return AnalyticsResponse(analytics=await build_analytics(db))
