"""Service repository for the bookable catalog."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fixora.models.service import Service


class ServiceRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get(self, service_id: int) -> Service | None:
        return await self.db.get(Service, service_id)

    async def get_many(self, service_ids: Iterable[int]) -> dict[int, Service]:
        ids = set(service_ids)
        if not ids:
            return {}
        result = await self.db.execute(select(Service).where(Service.id.in_(ids)))
        return {s.id: s for s in result.scalars().all()}

    async def list(self, category: str | None = None) -> list[Service]:
        query = select(Service).order_by(Service.created_at.desc(), Service.id.desc())
        if category is not None:
            query = query.where(Service.category == category)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def add(self, service: Service) -> Service:
        self.db.add(service)
        await self.db.commit()
        await self.db.refresh(service)
        return service

    async def update(self, service: Service, changes: dict[str, Any]) -> Service:
        for field, value in changes.items():
            setattr(service, field, value)
        await self.db.commit()
        await self.db.refresh(service)
        return service

    async def delete(self, service: Service) -> None:
        await self.db.delete(service)
        await self.db.commit()

    async def count(self) -> int:
        return (await self.db.execute(select(func.count(Service.id)))).scalar_one()
