"""
Admin dashboard analytics.

Counts come from grouped SQL queries; revenue is aggregated in Python
from one query over completed bookings joined to their service price.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fixora.models.booking import Booking
from fixora.models.service import Service
from fixora.repositories.bookings import BookingRepository
from fixora.repositories.services import ServiceRepository
from fixora.repositories.users import UserRepository
from fixora.schemas.admin import (Analytics, BookingsByStatus, MonthlyRevenue,
                                  RecentBooking, ServicePopularity)

REVENUE_MONTHS = 12
TOP_SERVICES = 10
RECENT_BOOKINGS = 10


def _last_months(today: date, count: int) -> list[tuple[int, int]]:
    """``(year, zero-based month)`` pairs for the *count* months ending at *today*, oldest first."""
    current = today.year * 12 + today.month - 1
    return [divmod(current - i, 12) for i in range(count - 1, -1, -1)]


async def build_analytics(db: AsyncSession, now: datetime | None = None) -> Analytics:
    now = now or datetime.now(timezone.utc)
    bookings = BookingRepository(db)
    services = ServiceRepository(db)
    users = UserRepository(db)

    by_status = await bookings.count_by_status()

    # Revenue counts completed bookings at the service's current price.
    result = await db.execute(
        select(Booking.created_at, Service.price)
        .join(Service, Service.id == Booking.service_id)
        .where(Booking.status == "completed")
    )
    total_revenue = 0.0
    revenue_by_month: dict[tuple[int, int], float] = defaultdict(float)
    for created_at, price in result.all():
        total_revenue += price
        if created_at is not None:
            revenue_by_month[(created_at.year, created_at.month - 1)] += price

    monthly_revenue = [
        MonthlyRevenue(
            month=date(year, month0 + 1, 1).strftime("%b %Y"),
            revenue=round(revenue_by_month.get((year, month0), 0.0), 2),
        )
        for year, month0 in _last_months(now.date(), REVENUE_MONTHS)
    ]

    popular = await bookings.popularity(TOP_SERVICES)
    titles = await services.get_many(service_id for service_id, _ in popular)
    service_popularity = [
        ServicePopularity(service_id=service_id, service=titles[service_id].title, bookings=n)
        for service_id, n in popular
        if service_id in titles
    ]

    recent_bookings = [
        RecentBooking(
            id=booking.id,
            service_name=booking.service_name,
            user_name=user.name,
            user_email=user.email,
            status=booking.status,
            date=booking.date,
            time=booking.time,
            created_at=booking.created_at,
        )
        for booking, user in await bookings.list_with_owners(limit=RECENT_BOOKINGS)
    ]

    return Analytics(
        total_bookings=await bookings.count(),
        total_users=await users.count(role="user"),
        total_services=await services.count(),
        total_revenue=round(total_revenue, 2),
        bookings_by_status=BookingsByStatus(**by_status),
        monthly_revenue=monthly_revenue,
        service_popularity=service_popularity,
        recent_bookings=recent_bookings,
    )
