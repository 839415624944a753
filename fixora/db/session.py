"""
Async SQLAlchemy database handle: engine & session factory.

The process bootstrap (the FastAPI lifespan) owns the handle: it builds it,
connects it and disposes it on shutdown. Request handlers reach it through
``request.app.state.db``.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (AsyncEngine, AsyncSession,
                                    async_sessionmaker, create_async_engine)

from fixora.db.base import Base

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, url: str, **engine_kwargs: Any) -> None:
        self.url = url
        self._engine_kwargs = engine_kwargs
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected")
        return self._engine

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    def connect(self) -> None:
        if self._engine is not None:
            return

        engine_args: dict[str, Any] = {
            "echo": False,
            "pool_pre_ping": True,
        }
        if "postgresql" in self.url:
            engine_args.update(
                {
                    "pool_size": 20,
                    "max_overflow": 10,
                    "pool_recycle": 300,
                }
            )
        engine_args.update(self._engine_kwargs)

        self._engine = create_async_engine(self.url, **engine_args)
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Database engine created (%s)", self._engine.url.render_as_string(hide_password=True))

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables initialised")

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def ping(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", e)
            return False

    async def dispose(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database engine disposed")

    def session(self) -> AsyncSession:
        """Open a new AsyncSession; use it as an async context manager."""
        if self._session_factory is None:
            raise RuntimeError("Database is not connected")
        return self._session_factory()
