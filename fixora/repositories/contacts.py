"""Contact message repository."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from fixora.models.contact import ContactMessage


class ContactRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def add(self, message: ContactMessage) -> ContactMessage:
        self.db.add(message)
        await self.db.commit()
        await self.db.refresh(message)
        return message
