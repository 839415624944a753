"""User repository: credential store backed by the ``users`` table."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fixora.models.booking import Booking
from fixora.models.user import User


class UserRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_by_id(self, user_id: int) -> User | None:
        return await self.db.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def add(self, user: User) -> User:
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def list_with_booking_counts(self, role: str | None = None) -> list[tuple[User, int]]:
        """All users (newest first) paired with how many bookings each has made."""
        counts = (
            select(Booking.user_id, func.count(Booking.id).label("n"))
            .group_by(Booking.user_id)
            .subquery()
        )
        query = (
            select(User, func.coalesce(counts.c.n, 0))
            .outerjoin(counts, counts.c.user_id == User.id)
            .order_by(User.created_at.desc(), User.id.desc())
        )
        if role is not None:
            query = query.where(User.role == role)
        result = await self.db.execute(query)
        return [(user, int(n)) for user, n in result.all()]

    async def count(self, role: str | None = None) -> int:
        query = select(func.count(User.id))
        if role is not None:
            query = query.where(User.role == role)
        return (await self.db.execute(query)).scalar_one()
