"""Booking repository: single-row reads and writes on the ``bookings`` table."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fixora.models.booking import Booking
from fixora.models.user import User


class BookingRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get(self, booking_id: int) -> Booking | None:
        return await self.db.get(Booking, booking_id)

    async def list(
        self,
        user_id: int | None = None,
        status: str | None = None,
        limit: int | None = None,
    ) -> list[Booking]:
        """Bookings newest-created first, optionally scoped to one owner and/or status."""
        query = select(Booking).order_by(Booking.created_at.desc(), Booking.id.desc())
        if user_id is not None:
            query = query.where(Booking.user_id == user_id)
        if status is not None:
            query = query.where(Booking.status == status)
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_with_owners(
        self, status: str | None = None, limit: int | None = None
    ) -> list[tuple[Booking, User]]:
        query = (
            select(Booking, User)
            .join(User, User.id == Booking.user_id)
            .order_by(Booking.created_at.desc(), Booking.id.desc())
        )
        if status is not None:
            query = query.where(Booking.status == status)
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return [(booking, user) for booking, user in result.all()]

    async def add(self, booking: Booking) -> Booking:
        self.db.add(booking)
        await self.db.commit()
        await self.db.refresh(booking)
        return booking

    async def update(self, booking: Booking, changes: dict[str, Any]) -> Booking:
        for field, value in changes.items():
            setattr(booking, field, value)
        await self.db.commit()
        await self.db.refresh(booking)
        return booking

    async def delete(self, booking: Booking) -> None:
        await self.db.delete(booking)
        await self.db.commit()

    async def count(self) -> int:
        return (await self.db.execute(select(func.count(Booking.id)))).scalar_one()

    async def count_by_status(self) -> dict[str, int]:
        result = await self.db.execute(
            select(Booking.status, func.count(Booking.id)).group_by(Booking.status)
        )
        return {status: int(n) for status, n in result.all()}

    async def popularity(self, limit: int = 10) -> list[tuple[int, int]]:
        """``(service_id, booking_count)`` pairs, most booked first."""
        n = func.count(Booking.id)
        result = await self.db.execute(
            select(Booking.service_id, n)
            .group_by(Booking.service_id)
            .order_by(n.desc(), Booking.service_id)
            .limit(limit)
        )
        return [(service_id, int(count)) for service_id, count in result.all()]
